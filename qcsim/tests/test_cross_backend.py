# qcsim/tests/test_cross_backend.py
import numpy as np
import pytest
from qcsim.circuit import Circuit
from qcsim.errors import InvalidArgumentError

def max_abs_diff(a, b):
    return float(np.max(np.abs(a - b)))

def test_serial_vs_numba_small():
    # 3-qubit mixed circuit
    c = Circuit.empty(3).h(0).x(1).cnot(1,2).h(2).cnot(0,1).y(2).z(0).rx(1, 0.25)
    st_s = c.run(backend="serial").state
    st_n = c.run(backend="numba", num_threads=None).state
    d = max_abs_diff(st_s.as_numpy(), st_n.as_numpy())
    assert d < 1e-12

def test_random_circuits_match():
    rng = np.random.default_rng(123)
    n = 4
    for depth in (5, 10, 20):
        c = Circuit.empty(n)
        for _ in range(depth):
            g = rng.integers(0, 4)  # 0:H,1:X,2:Y,3:CNOT
            if g < 3:
                c.gate("HXY"[int(g)], int(rng.integers(0, n)))
            else:
                c1 = int(rng.integers(0, n))
                c2 = c1
                while c2 == c1:
                    c2 = int(rng.integers(0, n))
                c.cnot(c1, c2)
        s = c.run(backend="serial").state
        t = c.run(backend="numba").state
        assert np.allclose(s.as_numpy(), t.as_numpy(), atol=1e-12, rtol=0)

def test_measurements_match_with_same_seed():
    c = Circuit.empty(3).h(0).h(1).cnot(0, 2).measure(0).measure(1).measure(2)
    s = c.run(backend="serial", rng=99)
    t = c.run(backend="numba", rng=99)
    assert s.measurements == t.measurements
    assert np.allclose(s.state.as_numpy(), t.state.as_numpy(), atol=1e-12, rtol=0)

def test_thread_count_capped_at_pool():
    from numba import config as nb_config, get_num_threads
    from qcsim.apply_numba import set_threads
    pool = nb_config.NUMBA_NUM_THREADS
    assert set_threads(pool + 63) == pool
    assert get_num_threads() == pool
    c = Circuit.empty(2).h(0).cnot(0, 1)
    st = c.run(backend="numba", num_threads=pool + 63).state
    assert np.allclose(np.abs(st.as_numpy())**2, [0.5, 0, 0, 0.5], atol=1e-12, rtol=0)

def test_thread_count_below_one_rejected():
    c = Circuit.empty(1).h(0)
    with pytest.raises(InvalidArgumentError):
        c.run(backend="numba", num_threads=0)
