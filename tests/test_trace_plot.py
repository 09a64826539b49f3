"""
Tests for trace and comparison plots.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

pytest.importorskip("matplotlib")

from simulation.runner import ComparisonRunner
from src.arq.go_back_n import GBNSimulator
from src.utils.logger import SimulationLogger, LogLevel
from visualization.trace_plot import TracePlot, ComparisonPlot


class TestTracePlot:
    """Tests for TracePlot."""

    def test_plot_written(self, tmp_path):
        events = GBNSimulator(logger=SimulationLogger(level=LogLevel.CRITICAL)).run(
            40, frozenset({4, 20})
        )
        output = TracePlot(events, protocol="Go-Back-N").plot(str(tmp_path / "trace.png"))

        assert os.path.getsize(output) > 0

    def test_empty_trace_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            TracePlot([]).plot(str(tmp_path / "empty.png"))


class TestComparisonPlot:
    """Tests for ComparisonPlot."""

    def test_plot_written(self, tmp_path):
        runner = ComparisonRunner(file_sizes=[12_000, 36_000], runs_per_config=1,
                                  output_file=str(tmp_path / "c.csv"))
        results = runner.run_sequential()

        output = ComparisonPlot(results).plot(str(tmp_path / "cmp.png"))

        assert os.path.getsize(output) > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
