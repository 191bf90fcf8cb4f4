# qcsim/errors.py


class QSimError(Exception):
    """Base class for simulator errors."""


class InvalidArgumentError(QSimError, ValueError):
    """Bad qubit index, qubit count, gate, or circuit operation."""


class ZeroProbabilityMeasurementError(QSimError, ArithmeticError):
    """Measurement sampled a branch with zero probability."""

    def __init__(self, qubit: int, outcome: int):
        super().__init__(f"measurement of a zero-probability branch: qubit {qubit} -> {outcome}")
        self.qubit = qubit
        self.outcome = outcome


class NormalizationDriftError(QSimError, AssertionError):
    """Total probability deviates from 1 beyond the tolerance."""

    def __init__(self, norm2: float, tol: float):
        super().__init__(f"Normalization failed: ||psi||^2={norm2} (tol={tol})")
        self.norm2 = norm2
        self.tol = tol
