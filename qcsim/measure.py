# qcsim/measure.py
import logging
from dataclasses import dataclass

import numpy as np

from .errors import ZeroProbabilityMeasurementError
from .state import State, bit_mask, check_qubit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementResult:
    outcome: int          # 0 or 1
    state: State          # collapsed, renormalized
    probability: float    # Born probability of the sampled outcome


def make_rng(rng=None):
    """Accept a Generator (or anything with .random()), an int seed, or None."""
    if rng is None or isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)
    return rng

def branch_probabilities(state: State, k: int):
    """(p0, p1) for qubit k."""
    check_qubit(k, state.n)
    idx = np.arange(state.dim)
    ones = (idx & bit_mask(k, state.n)) != 0
    p = np.abs(state.psi)**2
    return float(p[~ones].sum()), float(p[ones].sum())

def measure_qubit(state: State, k: int, rng=None) -> MeasurementResult:
    """Sample qubit k by the Born rule and collapse onto the outcome."""
    p0, p1 = branch_probabilities(state, k)
    r = make_rng(rng).random()
    outcome = 0 if r < p0 else 1
    p = p0 if outcome == 0 else p1
    if p <= 0.0:
        raise ZeroProbabilityMeasurementError(k, outcome)

    ones = (np.arange(state.dim) & bit_mask(k, state.n)) != 0
    keep = ones if outcome else ~ones
    out = np.zeros_like(state.psi)
    out[keep] = state.psi[keep] / np.sqrt(p)
    logger.debug("measure q%d: p0=%.6f p1=%.6f r=%.6f -> %d", k, p0, p1, r, outcome)
    return MeasurementResult(outcome, State(state.n, out), p)
