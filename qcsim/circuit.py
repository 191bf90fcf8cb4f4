# qcsim/circuit.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from . import gates as G
from .config import DEFAULT_CONFIG, SimConfig
from .errors import InvalidArgumentError, NormalizationDriftError
from .measure import make_rng, measure_qubit
from .state import State, check_qubit

logger = logging.getLogger(__name__)

Op = Tuple[str, Tuple]  # e.g., ("H",(k,)) or ("CNOT",(c,t)) or ("RZ",(k,theta)) or ("MEASURE",(k,))

BACKENDS = ("serial", "numba")


@dataclass
class RunResult:
    state: State
    measurements: List[Tuple[int, int]] = field(default_factory=list)  # (qubit, outcome) in circuit order

    def outcomes(self) -> dict:
        """Last outcome per measured qubit."""
        return dict(self.measurements)


@dataclass
class Circuit:
    n: int
    ops: List[Op]

    @staticmethod
    def empty(n:int) -> "Circuit":
        if n < 1:
            raise InvalidArgumentError(f"num_qubits must be >= 1, got {n}")
        return Circuit(n, [])

    def _one(self, name:str, k:int, *extra):
        check_qubit(k, self.n, "target")
        self.ops.append((name, (k,) + extra))
        return self

    def gate(self, name:str, k:int):
        G.get_gate(name)
        return self._one(name.upper(), k)

    def h(self, k:int): return self._one("H", k)
    def x(self, k:int): return self._one("X", k)
    def y(self, k:int): return self._one("Y", k)
    def z(self, k:int): return self._one("Z", k)
    def i(self, k:int): return self._one("I", k)
    def rz(self, k:int, theta:float): return self._one("RZ", k, float(theta))
    def rx(self, k:int, theta:float): return self._one("RX", k, float(theta))
    def measure(self, k:int): return self._one("MEASURE", k)

    def cnot(self, c:int, t:int):
        check_qubit(c, self.n, "control")
        check_qubit(t, self.n, "target")
        if c == t:
            raise InvalidArgumentError("control and target must differ")
        self.ops.append(("CNOT", (c, t)))
        return self

    def __len__(self):
        return len(self.ops)

    def describe(self) -> List[str]:
        """Numbered operation history, e.g. '1. H q0'."""
        lines = []
        for idx, (name, args) in enumerate(self.ops, 1):
            if name == "CNOT":
                lines.append(f"{idx}. CNOT q{args[0]}→q{args[1]}")
            elif name == "MEASURE":
                lines.append(f"{idx}. Measure q{args[0]}")
            elif name in G.PARAMETRIC:
                lines.append(f"{idx}. {name}({args[1]:g}) q{args[0]}")
            else:
                lines.append(f"{idx}. {name} q{args[0]}")
        return lines

    @staticmethod
    def parse(n:int, text:str) -> "Circuit":
        """Build from 'h 0; cnot 0 1; rx 2 1.57; measure 0' (';' or newline separated)."""
        c = Circuit.empty(n)
        for raw in text.replace("\n", ";").split(";"):
            tok = raw.split()
            if not tok:
                continue
            name, args = tok[0].upper(), tok[1:]
            try:
                if name in ("CNOT", "CX"):
                    c.cnot(int(args[0]), int(args[1]))
                elif name in ("MEASURE", "M"):
                    c.measure(int(args[0]))
                elif name in G.PARAMETRIC:
                    getattr(c, name.lower())(int(args[0]), float(args[1]))
                elif len(args) == 1:
                    c.gate(name, int(args[0]))
                else:
                    raise InvalidArgumentError(f"bad operation {raw.strip()!r}")
            except InvalidArgumentError:
                raise
            except (IndexError, ValueError) as e:
                raise InvalidArgumentError(f"bad operation {raw.strip()!r}: {e}") from e
        return c

    def run(self, backend:str="serial", config:Optional[SimConfig]=None, rng=None,
            check_norm=True, strict=True, num_threads=None, check_norm_tol=None,
            initial:Optional[State]=None) -> RunResult:
        cfg = config or DEFAULT_CONFIG
        if initial is not None:
            if initial.n != self.n:
                raise InvalidArgumentError(f"initial state has {initial.n} qubits, circuit has {self.n}")
            st = initial
        else:
            st = State.zero(self.n, config=cfg)

        if backend == "serial":
            from .apply_serial import apply_CNOT, apply_single_qubit
        elif backend == "numba":
            try:
                from .apply_numba import apply_CNOT, apply_single_qubit, set_threads
            except ImportError as e:
                raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
            if num_threads is not None:
                set_threads(num_threads)
        else:
            raise InvalidArgumentError(f"Unknown backend: {backend}")

        gen = make_rng(rng)
        measurements = []
        for name, args in self.ops:
            if name in G.GATES:
                (k,) = args
                st = apply_single_qubit(st, G.get_gate(name, dtype=st.dtype), k)
            elif name in G.PARAMETRIC:
                k, theta = args
                st = apply_single_qubit(st, G.PARAMETRIC[name](theta, dtype=st.dtype), k)
            elif name == "CNOT":
                c, t = args
                st = apply_CNOT(st, c, t)
            elif name == "MEASURE":
                (k,) = args
                res = measure_qubit(st, k, rng=gen)
                st = res.state
                measurements.append((k, res.outcome))
            else:
                raise InvalidArgumentError(f"Unknown gate {name}")
            logger.debug("%s%s on %s backend", name, args, backend)

        if check_norm:
            tol = cfg.norm_tol if check_norm_tol is None else check_norm_tol
            try:
                st.check_normalized(tol=tol)
            except NormalizationDriftError as e:
                if strict:
                    raise
                logger.warning("%s", e)
        return RunResult(st, measurements)
