# qcsim/apply_serial.py
"""Reference per-index kernels. Qubit 0 is the most-significant bit of a basis index.

Every function reads the input state and returns a new State; the input is never written.
"""
import numpy as np

from .errors import InvalidArgumentError
from .gates import as_gate
from .state import State, bit_mask, check_qubit


def apply_single_qubit(state: State, gate, k: int) -> State:
    """Apply a 2x2 gate (matrix or name) to qubit k."""
    n = state.n
    check_qubit(k, n, "target")
    U2 = as_gate(gate, dtype=state.dtype)
    psi = state.psi
    out = np.empty_like(psi)
    mask = bit_mask(k, n)
    for i in range(psi.shape[0]):
        bit = 1 if i & mask else 0
        j = i ^ mask
        # the two pre-images of i, ordered by the value of bit k
        a0 = psi[j] if bit else psi[i]
        a1 = psi[i] if bit else psi[j]
        out[i] = U2[bit, 0]*a0 + U2[bit, 1]*a1
    return State(n, out)

def apply_CNOT(state: State, control: int, target: int) -> State:
    n = state.n
    check_qubit(control, n, "control")
    check_qubit(target, n, "target")
    if control == target:
        raise InvalidArgumentError("control and target must differ")
    psi = state.psi
    out = psi.copy()
    mc = bit_mask(control, n)
    mt = bit_mask(target, n)
    for i in range(psi.shape[0]):
        # visit each (i, i|mt) pair once, from the side with the target bit clear
        if (i & mc) and not (i & mt):
            j = i | mt
            out[i] = psi[j]
            out[j] = psi[i]
    return State(n, out)
