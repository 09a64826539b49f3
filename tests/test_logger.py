"""
Unit tests for the simulation logger.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.utils.logger import SimulationLogger, LogLevel, get_logger


class TestSimulationLogger:
    """Tests for SimulationLogger."""

    def test_level_filters_messages(self, capsys):
        logger = SimulationLogger(level=LogLevel.INFO, use_colors=False)
        logger.debug("hidden")
        logger.info("shown")

        output = capsys.readouterr().out
        assert "hidden" not in output
        assert "INFO     [Simulator] shown" in output

    def test_frame_cursor_prefix(self, capsys):
        logger = SimulationLogger(level=LogLevel.DEBUG, use_colors=False)
        logger.set_frame(12)
        logger.frame_lost(12, 12)

        assert capsys.readouterr().out.startswith("[frame     12] DEBUG")

    def test_summary_counts_emitted_messages(self, capsys):
        logger = SimulationLogger(level=LogLevel.INFO)
        logger.debug("hidden")
        logger.info("one")
        logger.simulation_start({'frames': 3})

        summary = logger.get_summary()
        assert summary['message_counts'][LogLevel.INFO] == 2
        assert summary['message_counts'][LogLevel.DEBUG] == 0
        assert summary['total_messages'] == 2

    def test_log_file_without_colors(self, tmp_path, capsys):
        path = tmp_path / "logs" / "sim.log"
        logger = SimulationLogger(level=LogLevel.DEBUG, log_file=str(path))
        logger.nack(5, 4)
        logger.close()

        content = path.read_text()
        assert "NACK 4" in content
        assert "\033[" not in content

    def test_global_logger_is_shared(self):
        assert get_logger() is get_logger()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
