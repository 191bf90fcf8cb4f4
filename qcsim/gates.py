# qcsim/gates.py
import numpy as np

from .errors import InvalidArgumentError


def I(dtype=np.complex128) -> np.ndarray:
    return np.eye(2, dtype=dtype)

def X(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, 1],
                     [1, 0]], dtype=dtype)

def Y(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, -1j],
                     [1j, 0]], dtype=dtype)

def Z(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, -1]], dtype=dtype)

def H(dtype=np.complex128) -> np.ndarray:
    s = np.sqrt(0.5)
    return np.array([[s, s],
                     [s, -s]], dtype=dtype)

def RZ(theta: float, dtype=np.complex128) -> np.ndarray:
    return np.array([[np.exp(-0.5j*theta), 0],
                     [0, np.exp(+0.5j*theta)]], dtype=dtype)

def RX(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return np.array([[c, s],
                     [s, c]], dtype=dtype)


# built-in fixed gates, looked up by name
GATES = {"X": X, "Y": Y, "Z": Z, "H": H, "I": I}
# gates that take a rotation angle
PARAMETRIC = {"RX": RX, "RZ": RZ}


def names():
    return sorted(GATES)

def get_gate(name: str, dtype=np.complex128) -> np.ndarray:
    try:
        return GATES[name.upper()](dtype=dtype)
    except KeyError:
        raise InvalidArgumentError(f"unknown gate {name!r}; known: {', '.join(names())}") from None

def as_gate(gate, dtype=np.complex128) -> np.ndarray:
    """Resolve a gate name or a 2x2 matrix into a 2x2 array of the given dtype."""
    if isinstance(gate, str):
        return get_gate(gate, dtype=dtype)
    U2 = np.asarray(gate, dtype=dtype)
    if U2.shape != (2, 2):
        raise InvalidArgumentError(f"single-qubit gate must be 2x2, got shape {U2.shape}")
    return U2

def is_unitary(U: np.ndarray, tol: float = 1e-9) -> bool:
    U = np.asarray(U)
    return bool(np.allclose(U.conj().T @ U, np.eye(U.shape[0]), atol=tol, rtol=0))
