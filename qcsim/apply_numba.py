# qcsim/apply_numba.py
import logging

import numpy as np
from numba import config as nb_config
from numba import njit, prange, set_num_threads

from .errors import InvalidArgumentError
from .gates import as_gate
from .state import State, bit_mask, check_qubit

logger = logging.getLogger(__name__)

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _single_qubit_kernel(psi, out, U2, mask):
    N = psi.shape[0]
    for i in prange(N):
        j = i ^ mask
        if i & mask:
            out[i] = U2[1,0]*psi[j] + U2[1,1]*psi[i]
        else:
            out[i] = U2[0,0]*psi[i] + U2[0,1]*psi[j]

@njit(parallel=True, fastmath=True)
def _cnot_kernel(psi, out, mc, mt):
    N = psi.shape[0]
    # pairs (i, i|mt) with control set are disjoint → safe to write in parallel
    for i in prange(N):
        if (i & mc) != 0 and (i & mt) == 0:
            j = i | mt
            out[i] = psi[j]
            out[j] = psi[i]

# ---------- user-facing apply helpers ----------

def set_threads(n: int) -> int:
    """Use n worker threads, capped at the numba pool size; returns the count in effect."""
    n = int(n)
    if n < 1:
        raise InvalidArgumentError(f"thread count must be >= 1, got {n}")
    pool = nb_config.NUMBA_NUM_THREADS
    if n > pool:
        logger.info("requested %d threads > pool=%d; using %d", n, pool, pool)
        n = pool
    set_num_threads(n)
    return n

def apply_single_qubit(state: State, gate, k: int) -> State:
    check_qubit(k, state.n, "target")
    U2 = as_gate(gate, dtype=state.dtype)
    out = np.empty_like(state.psi)
    _single_qubit_kernel(state.psi, out, U2, bit_mask(k, state.n))
    return State(state.n, out)

def apply_CNOT(state: State, control: int, target: int) -> State:
    n = state.n
    check_qubit(control, n, "control")
    check_qubit(target, n, "target")
    if control == target:
        raise InvalidArgumentError("control and target must differ")
    out = state.psi.copy()
    _cnot_kernel(state.psi, out, bit_mask(control, n), bit_mask(target, n))
    return State(n, out)
