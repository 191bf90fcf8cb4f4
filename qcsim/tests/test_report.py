# qcsim/tests/test_report.py
import numpy as np
from qcsim.circuit import Circuit
from qcsim.report import format_amplitude, format_state, probabilities, sample_counts
from qcsim.state import State, initialize_state

def test_zero_state_formats_as_zero_ket():
    for n in range(1, 9):
        assert format_state(initialize_state(n)) == "|" + "0"*n + "⟩"

def test_bell_format():
    st = Circuit.empty(2).h(0).cnot(0, 1).run().state
    assert format_state(st) == "0.707|00⟩ + 0.707|11⟩"

def test_negligible_amplitudes_dropped():
    st = State.from_amplitudes([1.0, 1e-12, 0.0, 5e-11j])
    assert format_state(st) == "|00⟩"

def test_all_negligible_falls_back_to_zero_ket():
    st = State.from_amplitudes([1e-11, 0, 0, 0, 0, 0, 0, 2e-11])
    assert format_state(st) == "|000⟩"

def test_complex_and_imaginary_coefficients():
    assert format_amplitude(0.5 - 0.5j) == "(0.500-0.500i)"
    assert format_amplitude(0.5 + 0.5j) == "(0.500+0.500i)"
    assert format_amplitude(-0.707 + 0j) == "-0.707"
    assert format_amplitude(1j) == "1.000i"
    st = Circuit.empty(1).y(0).run().state
    assert format_state(st) == "1.000i|1⟩"

def test_probabilities_sum_to_one():
    st = Circuit.empty(3).h(0).rx(1, 1.2).cnot(0, 2).run().state
    p = probabilities(st)
    assert p.shape == (8,)
    assert abs(p.sum() - 1.0) < 1e-12

def test_sample_counts_bell():
    st = Circuit.empty(2).h(0).cnot(0, 1).run().state
    counts = sample_counts(st, shots=1000, rng=11)
    assert set(counts) <= {"00", "11"}
    assert sum(counts.values()) == 1000
    assert 400 < counts["00"] < 600
    # sampling leaves the state alone
    assert np.allclose(probabilities(st), [0.5, 0, 0, 0.5])

def test_term_with_only_subthreshold_parts_has_no_zero_coefficient():
    # |z| = 1.13e-10 clears the threshold but neither component does
    st = State.from_amplitudes([1, 0, 0, 8e-11 + 8e-11j])
    assert format_state(st) == "|00⟩ + |11⟩"
    assert "0.000" not in format_state(st)
