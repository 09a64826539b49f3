"""
Unit tests for the Go-Back-N trace simulator.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.arq.frame import FrameEvent, EventType, ReplyType
from src.arq.go_back_n import GBNSimulator, GBNState
from src.utils.logger import SimulationLogger, LogLevel


@pytest.fixture
def simulator():
    return GBNSimulator(logger=SimulationLogger(level=LogLevel.CRITICAL))


class TestGBNNormalTransmission:
    """Tests without losses."""

    def test_no_losses(self, simulator):
        events = simulator.run(5, frozenset())

        assert events == [FrameEvent.transmit(i) for i in range(5)]
        assert [e.ack_num for e in events] == [1, 2, 3, 4, 5]
        assert all(e.reply_type == ReplyType.ACK for e in events)

    def test_empty_transfer(self, simulator):
        assert simulator.run(0, frozenset()) == []
        assert simulator.state == GBNState.NORMAL

    def test_ack_wraps_at_sequence_limit(self, simulator):
        events = simulator.run(70, frozenset())

        assert events[63].seq_num == 63
        assert events[63].ack_num == 0
        assert events[64].seq_num == 0
        assert events[64].ack_num == 1

    def test_negative_total_rejected(self, simulator):
        with pytest.raises(ValueError):
            simulator.run(-1, frozenset())


class TestGBNFastRetransmit:
    """Tests for duplicate ACK counting and fast retransmit."""

    def test_single_loss(self, simulator):
        events = simulator.run(10, frozenset({2}))

        expected = [
            FrameEvent.transmit(0),
            FrameEvent.transmit(1),
            FrameEvent.loss(2),
            FrameEvent.duplicate_ack(3, 3),
            FrameEvent.duplicate_ack(4, 3),
            FrameEvent.duplicate_ack(5, 3),
            FrameEvent.retransmit(2),
            FrameEvent.retransmit(3),
            FrameEvent.retransmit(4),
            FrameEvent.retransmit(5),
        ] + [FrameEvent.transmit(i) for i in range(6, 10)]

        assert events == expected
        assert [e.ack_num for e in events[6:10]] == [3, 4, 5, 6]
        assert simulator.state == GBNState.NORMAL

    def test_single_loss_statistics(self, simulator):
        simulator.run(10, frozenset({2}))
        stats = simulator.get_statistics()

        assert stats['frames_lost'] == 1
        assert stats['duplicate_acks'] == 3
        assert stats['retransmissions'] == 4
        assert stats['fast_retransmits'] == 1
        assert stats['unrecovered_frame'] is None
        assert stats['window_size'] == 63

    def test_reentrant_loss_restarts_recovery(self, simulator):
        """A second loss discards recovery of the first."""
        events = simulator.run(10, frozenset({1, 2}))

        retransmitted = [e.frame_index for e in events if e.is_retransmission]
        assert retransmitted == [2, 3, 4, 5]
        assert 1 not in retransmitted

        dup_acks = [e for e in events if e.reply_type == ReplyType.DUPLICATE_ACK]
        assert [e.frame_index for e in dup_acks] == [3, 4, 5]
        assert all(e.ack_num == 3 for e in dup_acks)

    def test_loss_during_duplicate_acks_resets_count(self, simulator):
        events = simulator.run(12, frozenset({2, 4}))

        dup_acks = [e for e in events if e.reply_type == ReplyType.DUPLICATE_ACK]
        assert [(e.frame_index, e.ack_num) for e in dup_acks] == [
            (3, 3), (5, 5), (6, 5), (7, 5)
        ]
        retransmitted = [e.frame_index for e in events if e.is_retransmission]
        assert retransmitted == [4, 5, 6, 7]

    def test_loss_near_end_left_unrecovered(self, simulator):
        """No flush: fewer than three duplicate ACKs before the range ends."""
        events = simulator.run(5, frozenset({3}))

        assert events == [
            FrameEvent.transmit(0),
            FrameEvent.transmit(1),
            FrameEvent.transmit(2),
            FrameEvent.loss(3),
            FrameEvent.duplicate_ack(4, 4),
        ]
        assert simulator.state == GBNState.RECOVERING
        assert simulator.get_statistics()['unrecovered_frame'] == 3

    def test_default_logger_stays_quiet(self, capsys):
        """Unrecovered loss at the end of the range is logged at DEBUG only."""
        events = GBNSimulator().run(5, frozenset({3}))

        assert events[-1] == FrameEvent.duplicate_ack(4, 4)
        assert capsys.readouterr().out == ''

    def test_all_frames_lost(self, simulator):
        events = simulator.run(6, frozenset(range(6)))

        assert [e.event_type for e in events] == [EventType.LOSS] * 6
        assert simulator.state == GBNState.RECOVERING

    def test_burst_ack_wraps(self, simulator):
        events = simulator.run(70, frozenset({62}))

        burst = [e for e in events if e.is_retransmission]
        assert [e.frame_index for e in burst] == [62, 63, 64, 65]
        assert [e.ack_num for e in burst] == [63, 0, 1, 2]

    def test_custom_threshold(self):
        simulator = GBNSimulator(threshold=1, logger=SimulationLogger(level=LogLevel.CRITICAL))
        events = simulator.run(4, frozenset({1}))

        assert [e.frame_index for e in events if e.is_retransmission] == [1, 2]

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            GBNSimulator(threshold=0)


class TestGBNDeterminism:
    """Tests for repeatable runs."""

    def test_idempotent(self, simulator):
        lost = frozenset({3, 17, 18, 40})

        assert simulator.run(60, lost) == simulator.run(60, lost)

    def test_loss_set_not_mutated(self, simulator):
        lost = {1, 5}
        simulator.run(10, lost)

        assert lost == {1, 5}

    def test_on_event_callback(self):
        seen = []
        simulator = GBNSimulator(
            logger=SimulationLogger(level=LogLevel.CRITICAL),
            on_event=seen.append
        )

        events = simulator.run(10, frozenset({2}))

        assert seen == events


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
