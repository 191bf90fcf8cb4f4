# qcsim/__init__.py
"""Dense state-vector simulator for small qubit registers."""
from . import complex_ops, gates
from .apply_serial import apply_CNOT as apply_cnot
from .apply_serial import apply_single_qubit as apply_single_qubit_gate
from .circuit import Circuit, RunResult
from .complex_ops import Complex
from .config import SimConfig
from .errors import (InvalidArgumentError, NormalizationDriftError, QSimError,
                     ZeroProbabilityMeasurementError)
from .measure import MeasurementResult, measure_qubit
from .report import format_state, probabilities, sample_counts
from .state import State, initialize_state

__version__ = "0.1.0"
