# qcsim/config.py
import logging
import os
from dataclasses import dataclass, replace

import numpy as np

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUBITS = 8
# amplitudes at or below this magnitude are treated as absent when formatting
SIGNIFICANCE = 1e-10


@dataclass(frozen=True)
class SimConfig:
    max_qubits: int = DEFAULT_MAX_QUBITS
    dtype: type = np.complex128
    norm_tol: float = 1e-9
    significance: float = SIGNIFICANCE

    def __post_init__(self):
        if self.max_qubits < 1:
            raise InvalidArgumentError(f"max_qubits must be >= 1, got {self.max_qubits}")

    @staticmethod
    def from_env(**overrides) -> "SimConfig":
        """Defaults, then QCSIM_MAX_QUBITS / QCSIM_NORM_TOL, then keyword overrides."""
        cfg = SimConfig()
        v = os.environ.get("QCSIM_MAX_QUBITS")
        if v:
            cfg = replace(cfg, max_qubits=int(v))
        v = os.environ.get("QCSIM_NORM_TOL")
        if v:
            cfg = replace(cfg, norm_tol=float(v))
        if overrides:
            cfg = replace(cfg, **overrides)
        logger.debug("config: %s", cfg)
        return cfg


DEFAULT_CONFIG = SimConfig()
