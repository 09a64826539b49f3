"""
Unit tests for trace reporting and CSV export.
"""

import csv
import io

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.arq.frame import FrameEvent
from src.arq.go_back_n import GBNSimulator
from src.utils.logger import SimulationLogger, LogLevel
from src.utils.metrics import MetricsCollector
from src.utils.reporter import (
    TraceReporter, format_event, format_lost_frames,
    render_lines, save_trace_csv
)


class TestFormatEvent:
    """Tests for single-line rendering."""

    def test_ack(self):
        assert format_event(FrameEvent.transmit(3)) == "Frame 3: Seq No. 3   ACK 4"

    def test_duplicate_ack_renders_as_ack(self):
        assert format_event(FrameEvent.duplicate_ack(4, 3)) == "Frame 4: Seq No. 4   ACK 3"

    def test_loss(self):
        assert format_event(FrameEvent.loss(2)) == "Frame 2: Seq No. 2 (Loss)  -"

    def test_nack(self):
        assert format_event(FrameEvent.nack(3, 2)) == "Frame 3: Seq No. 3   NACK 2"

    def test_retransmit(self):
        assert format_event(FrameEvent.retransmit(65)) == "Frame 65: Seq No. 1 (Retransmit) ACK 2"

    def test_lost_frames_sorted(self):
        assert format_lost_frames({7, 2}) == "Frame 2, Frame 7"
        assert format_lost_frames(set()) == ""


class TestTraceReporter:
    """Tests for the console report."""

    def test_full_report(self):
        stream = io.StringIO()
        reporter = TraceReporter(stream)
        simulator = GBNSimulator(logger=SimulationLogger(level=LogLevel.CRITICAL))
        events = simulator.run(4, frozenset({1}))

        reporter.report("Go-Back-N", 63, 4, [1], events)
        lines = stream.getvalue().splitlines()

        assert lines == [
            "",
            "The total number of frames to be transmitted is 4.",
            "The loss frames are Frame 1.",
            "",
            "Go-Back-N ARQ (Window Size = 63; Sequence Number 0 to 63)",
            "Frame 0: Seq No. 0   ACK 1",
            "Frame 1: Seq No. 1 (Loss)  -",
            "Frame 2: Seq No. 2   ACK 2",
            "Frame 3: Seq No. 3   ACK 2",
        ]
        assert reporter.lines_written == len(lines)

    def test_metrics_summary(self):
        stream = io.StringIO()
        events = [FrameEvent.transmit(0), FrameEvent.loss(1)]
        metrics = MetricsCollector.from_events(2, events).get_metrics([1])

        TraceReporter(stream).report_metrics(metrics)
        output = stream.getvalue()

        assert "Transmissions: 2" in output
        assert "Efficiency: 100.00%" in output
        assert "Unrecovered: Frame 1" in output

    def test_render_lines(self):
        lines = render_lines([FrameEvent.loss(0), FrameEvent.retransmit(0)])

        assert lines == [
            "Frame 0: Seq No. 0 (Loss)  -",
            "Frame 0: Seq No. 0 (Retransmit) ACK 1",
        ]


class TestTraceCsv:
    """Tests for CSV export."""

    def test_save_trace_csv(self, tmp_path):
        events = [FrameEvent.transmit(0), FrameEvent.loss(1), FrameEvent.nack(2, 1)]
        path = save_trace_csv(events, str(tmp_path / "out" / "trace.csv"))

        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 3
        assert rows[0]['step'] == '0'
        assert rows[1]['event_type'] == 'loss'
        assert rows[1]['reply_type'] == ''
        assert rows[2]['reply_type'] == 'NACK'
        assert rows[2]['reply_num'] == '1'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
