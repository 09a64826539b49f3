"""
Utilities package - Helper functions and classes.

Contains implementations for:
- Trace metrics (transmissions, recovery activity, efficiency)
- Console and CSV trace reporting
- Logging utilities
"""

from .logger import SimulationLogger
from .metrics import MetricsCollector
from .reporter import TraceReporter

__all__ = [
    'MetricsCollector',
    'TraceReporter',
    'SimulationLogger'
]
