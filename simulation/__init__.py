"""
Simulation package - Run orchestration and algorithm comparison.

Contains:
- Single-run simulator orchestrator
- Comparison runner for Go-Back-N vs Selective-Repeat
"""

from .simulator import Algorithm, Simulator, SimulatorConfig
from .runner import ComparisonRunner

__all__ = [
    'Algorithm',
    'Simulator',
    'SimulatorConfig',
    'ComparisonRunner'
]
