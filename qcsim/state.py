# qcsim/state.py
import json
import logging
import operator
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .complex_ops import Complex
from .config import DEFAULT_CONFIG, SimConfig
from .errors import InvalidArgumentError, NormalizationDriftError

logger = logging.getLogger(__name__)


def check_num_qubits(n: int, config: Optional[SimConfig] = None):
    cfg = config or DEFAULT_CONFIG
    if n < 1:
        raise InvalidArgumentError(f"num_qubits must be >= 1, got {n}")
    if n > cfg.max_qubits:
        raise InvalidArgumentError(f"num_qubits={n} exceeds max_qubits={cfg.max_qubits}")


def check_qubit(k: int, n: int, what: str = "qubit"):
    try:
        k = operator.index(k)
    except TypeError:
        raise InvalidArgumentError(f"{what} index must be an integer, got {k!r}") from None
    if not 0 <= k < n:
        raise InvalidArgumentError(f"{what} index {k} out of range [0, {n})")


def bit_mask(k: int, n: int) -> int:
    """Mask of qubit k inside a basis index (qubit 0 is the MSB)."""
    return 1 << (n - 1 - k)


@dataclass
class State:
    n: int
    psi: np.ndarray  # shape (2**n,), complex; treated as read-only by the kernels

    @staticmethod
    def zero(n: int, config: Optional[SimConfig] = None) -> "State":
        cfg = config or DEFAULT_CONFIG
        check_num_qubits(n, cfg)
        N = 1 << n
        psi = np.zeros(N, dtype=cfg.dtype)
        psi[0] = 1.0 + 0.0j
        return State(n=n, psi=psi)

    @staticmethod
    def from_amplitudes(amps, n: Optional[int] = None, config: Optional[SimConfig] = None) -> "State":
        cfg = config or DEFAULT_CONFIG
        psi = np.array(amps, dtype=cfg.dtype).reshape(-1)
        N = psi.shape[0]
        if n is None:
            n = N.bit_length() - 1
        check_num_qubits(n, cfg)
        if N != 1 << n:
            raise InvalidArgumentError(f"expected {1 << n} amplitudes for {n} qubits, got {N}")
        return State(n=n, psi=psi)

    @staticmethod
    def basis(bits: str, config: Optional[SimConfig] = None) -> "State":
        """Computational basis state from a ket label such as '10'."""
        if not bits or set(bits) - {"0", "1"}:
            raise InvalidArgumentError(f"bad basis label {bits!r}")
        st = State.zero(len(bits), config)
        st.psi[0] = 0.0
        st.psi[int(bits, 2)] = 1.0
        return st

    @property
    def dtype(self):
        return self.psi.dtype

    @property
    def dim(self) -> int:
        return self.psi.shape[0]

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=None):
        tol = DEFAULT_CONFIG.norm_tol if tol is None else tol
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise NormalizationDriftError(n2, tol)

    def renormalize(self) -> "State":
        n2 = self.norm2()
        if n2 == 0.0:
            raise InvalidArgumentError("cannot renormalize the zero vector")
        return State(self.n, self.psi / np.sqrt(n2))

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi

    def amplitude(self, i: int) -> Complex:
        return Complex.from_builtin(self.psi[i])

    # ------------------------- JSON -------------------------

    def to_dict(self) -> dict:
        return {
            "num_qubits": self.n,
            "amplitudes": [{"real": float(z.real), "imag": float(z.imag)} for z in self.psi],
        }

    def to_json(self, **kw) -> str:
        return json.dumps(self.to_dict(), **kw)

    @staticmethod
    def from_dict(d, config: Optional[SimConfig] = None) -> "State":
        try:
            n = int(d["num_qubits"])
            amps = [Complex.from_dict(a).to_builtin() for a in d["amplitudes"]]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidArgumentError(f"malformed state record: {e}") from e
        return State.from_amplitudes(amps, n=n, config=config)

    @staticmethod
    def from_json(s: str, config: Optional[SimConfig] = None) -> "State":
        try:
            d = json.loads(s)
        except ValueError as e:
            raise InvalidArgumentError(f"malformed state JSON: {e}") from e
        return State.from_dict(d, config)


def initialize_state(num_qubits: int, config: Optional[SimConfig] = None) -> State:
    """|00...0> on num_qubits qubits."""
    st = State.zero(num_qubits, config)
    logger.debug("initialized %d-qubit state", num_qubits)
    return st
