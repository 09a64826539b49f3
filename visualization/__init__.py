"""
Visualization package - Plotting tools.

Contains:
- Event trace timeline
- Algorithm comparison charts
"""

from .trace_plot import TracePlot, ComparisonPlot

__all__ = [
    'TracePlot',
    'ComparisonPlot'
]
