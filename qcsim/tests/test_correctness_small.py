# qcsim/tests/test_correctness_small.py
import numpy as np
import pytest
from qcsim.circuit import Circuit
from qcsim.state import State, initialize_state
from qcsim.apply_serial import apply_single_qubit, apply_CNOT
from qcsim.report import probabilities
from qcsim import gates as G

def almost(p, q, tol=1e-9):
    return np.allclose(p, q, atol=tol, rtol=0)

def probs(psi):
    return np.abs(psi)**2

def test_zero_state():
    st = initialize_state(3)
    expect = np.zeros(8); expect[0] = 1.0
    assert st.n == 3 and st.dim == 8
    assert np.array_equal(st.as_numpy(), expect.astype(complex))

def test_h_on_zero():
    st = apply_single_qubit(initialize_state(1), G.H(), 0)
    assert almost(probabilities(st), [0.5, 0.5])

def test_x_flips():
    # |0> -> X -> |1>
    st = Circuit.empty(1).x(0).run().state
    assert almost(probs(st.as_numpy()), [0.0, 1.0])

def test_x_on_qubit0_sets_msb():
    # qubit 0 is the leftmost ket digit: X on q0 of 3 qubits gives |100> = index 4
    st = Circuit.empty(3).x(0).run().state
    expect = np.zeros(8); expect[4] = 1.0
    assert almost(probs(st.as_numpy()), expect)

def test_y_and_z_phases():
    st = apply_single_qubit(initialize_state(1), "Y", 0)
    assert almost(st.as_numpy(), [0, 1j])
    st = apply_single_qubit(State.basis("1"), "Z", 0)
    assert almost(st.as_numpy(), [0, -1])

def test_input_not_mutated():
    st = State.basis("01")
    before = st.as_numpy().copy()
    apply_single_qubit(st, "H", 1)
    apply_CNOT(st, 1, 0)
    assert np.array_equal(st.as_numpy(), before)

def test_cnot_control_off_noop():
    # |00> --(CNOT c=1,t=0)--> stays |00>
    st = Circuit.empty(2).cnot(1,0).run().state
    expect = np.zeros(4); expect[0] = 1.0
    assert almost(probs(st.as_numpy()), expect)

def test_cnot_control_on_flips_and_reverts_exactly():
    # |10> (q0=1) --CNOT(0->1)--> |11> --CNOT(0->1)--> |10>
    st = State.basis("10")
    once = apply_CNOT(st, 0, 1)
    expect = np.zeros(4); expect[3] = 1.0
    assert np.array_equal(probs(once.as_numpy()), expect)
    twice = apply_CNOT(once, 0, 1)
    assert np.array_equal(twice.as_numpy(), st.as_numpy())

def test_cnot_twice_is_identity_on_superposition():
    rng = np.random.default_rng(5)
    amps = rng.normal(size=8) + 1j*rng.normal(size=8)
    st = State.from_amplitudes(amps / np.linalg.norm(amps))
    for c, t in [(0, 1), (1, 0), (0, 2), (2, 0), (1, 2)]:
        back = apply_CNOT(apply_CNOT(st, c, t), c, t)
        assert np.array_equal(back.as_numpy(), st.as_numpy())

def test_bell_state():
    st = Circuit.empty(2).h(0).cnot(0, 1).run().state
    assert almost(probabilities(st), [0.5, 0, 0, 0.5])

def test_identity_leaves_state_unchanged():
    st = Circuit.empty(3).h(0).rx(1, 0.3).cnot(0, 2).run().state
    for k in range(3):
        assert np.array_equal(apply_single_qubit(st, "I", k).as_numpy(), st.as_numpy())

@pytest.mark.parametrize("name", ["X", "Y", "Z", "H"])
def test_self_inverse(name):
    st = Circuit.empty(3).h(0).rz(1, 0.7).h(1).cnot(1, 2).run().state
    for k in range(3):
        back = apply_single_qubit(apply_single_qubit(st, name, k), name, k)
        assert almost(back.as_numpy(), st.as_numpy(), tol=1e-12)

def test_builtin_gates_are_unitary():
    for name in G.names():
        assert G.is_unitary(G.get_gate(name))
    assert G.is_unitary(G.RX(0.4)) and G.is_unitary(G.RZ(1.1))

def test_normalization_random_sequences():
    rng = np.random.default_rng(7)
    n = 4
    for _ in range(20):
        c = Circuit.empty(n)
        for _ in range(30):
            g = int(rng.integers(0, 4))
            if g < 3:
                c.gate(("H", "Y", "X")[g], int(rng.integers(0, n)))
            else:
                a, b = rng.choice(n, size=2, replace=False)
                c.cnot(int(a), int(b))
        st = c.run().state
        assert abs(1.0 - probabilities(st).sum()) < 1e-9
