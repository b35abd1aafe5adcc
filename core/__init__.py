"""
Core modules for the tick-driven scheduler simulator
"""

from .errors import SimulationError, ProcessValidationError
from .process import Process, ProcessSpec, ProcessState
from .snapshot import Snapshot, RoundRobinState
from .metrics import SimulationMetrics, compute_metrics

__all__ = [
    'SimulationError',
    'ProcessValidationError',
    'Process',
    'ProcessSpec',
    'ProcessState',
    'Snapshot',
    'RoundRobinState',
    'SimulationMetrics',
    'compute_metrics'
]
