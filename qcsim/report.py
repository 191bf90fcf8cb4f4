# qcsim/report.py
from typing import Dict

import numpy as np

from .config import SIGNIFICANCE
from .measure import make_rng
from .state import State


def probabilities(state: State) -> np.ndarray:
    return np.abs(state.psi)**2

def ket(i: int, n: int) -> str:
    return f"|{i:0{n}b}⟩"

def format_amplitude(z, threshold: float = SIGNIFICANCE) -> str:
    re, im = float(z.real), float(z.imag)
    if abs(re - 1.0) <= threshold and abs(im) <= threshold:
        return ""  # unit coefficient is implied: 1|00⟩ prints as |00⟩
    if abs(re) > threshold and abs(im) > threshold:
        sign = "+" if im >= 0 else ""
        return f"({re:.3f}{sign}{im:.3f}i)"
    if abs(re) > threshold:
        return f"{re:.3f}"
    if abs(im) > threshold:
        return f"{im:.3f}i"
    return ""

def format_state(state: State, threshold: float = SIGNIFICANCE) -> str:
    """Superposition as text, e.g. '0.707|00⟩ + 0.707|11⟩'.

    Terms with |amplitude| <= threshold are dropped; if none survive the
    all-zero ket is returned.
    """
    terms = []
    for i, z in enumerate(state.psi):
        if abs(z) > threshold:
            terms.append(format_amplitude(z, threshold) + ket(i, state.n))
    if not terms:
        return ket(0, state.n)
    return " + ".join(terms)

def sample_counts(state: State, shots: int = 1024, rng=None) -> Dict[str, int]:
    """Bitstring histogram of `shots` full-register samples; the state is not collapsed."""
    p = probabilities(state)
    p = p / p.sum()
    idx = make_rng(rng).choice(state.dim, size=shots, p=p)
    counts: Dict[str, int] = {}
    for i in idx:
        bits = f"{int(i):0{state.n}b}"
        counts[bits] = counts.get(bits, 0) + 1
    return dict(sorted(counts.items()))
