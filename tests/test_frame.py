"""
Unit tests for frame enumeration and trace events.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import FRAME_SIZE, SEQ_MODULUS
from src.arq.frame import (
    FrameEvent, EventType, ReplyType,
    count_frames, sequence_number, next_ack
)


class TestFrameEnumeration:
    """Tests for frame counting and sequence numbers."""

    def test_empty_input_has_no_frames(self):
        assert count_frames(0) == 0

    def test_partial_frame_rounds_up(self):
        assert count_frames(1) == 1
        assert count_frames(FRAME_SIZE) == 1
        assert count_frames(FRAME_SIZE + 1) == 2
        assert count_frames(12_000) == 10

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            count_frames(-1)

    def test_sequence_numbers_wrap(self):
        """Sequence number is the index modulo 64."""
        for i in range(300):
            seq = sequence_number(i)
            assert seq == i % 64
            assert 0 <= seq <= 63

        assert sequence_number(63) == 63
        assert sequence_number(64) == 0

    def test_next_ack_wraps(self):
        assert next_ack(0) == 1
        assert next_ack(63) == 0

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            sequence_number(-1)


class TestFrameEvent:
    """Tests for FrameEvent factories."""

    def test_transmit(self):
        event = FrameEvent.transmit(5)

        assert event.event_type == EventType.TRANSMIT
        assert event.seq_num == 5
        assert event.reply_type == ReplyType.ACK
        assert event.ack_num == 6
        assert event.nack_num is None

    def test_transmit_wraps_ack(self):
        event = FrameEvent.transmit(127)

        assert event.seq_num == 63
        assert event.ack_num == 0

    def test_loss(self):
        event = FrameEvent.loss(66)

        assert event.is_loss
        assert event.seq_num == 2
        assert event.reply_type is None
        assert event.ack_num is None

    def test_nack(self):
        event = FrameEvent.nack(3, 2)

        assert event.reply_type == ReplyType.NACK
        assert event.nack_num == 2
        assert event.ack_num is None

    def test_duplicate_ack(self):
        event = FrameEvent.duplicate_ack(4, 3)

        assert event.reply_type == ReplyType.DUPLICATE_ACK
        assert event.ack_num == 3

    def test_retransmit(self):
        event = FrameEvent.retransmit(2)

        assert event.is_retransmission
        assert event.ack_num == 3

    def test_events_are_comparable(self):
        assert FrameEvent.transmit(1) == FrameEvent.transmit(1)
        assert FrameEvent.transmit(1) != FrameEvent.retransmit(1)

    def test_invalid_sequence_number(self):
        with pytest.raises(ValueError):
            FrameEvent(EventType.LOSS, 0, SEQ_MODULUS)

    def test_reply_fields_set_together(self):
        with pytest.raises(ValueError):
            FrameEvent(EventType.TRANSMIT, 0, 0, ReplyType.ACK)

    def test_to_dict(self):
        row = FrameEvent.nack(3, 2).to_dict()

        assert row == {
            'event_type': 'transmit',
            'frame_index': 3,
            'seq_num': 3,
            'reply_type': 'NACK',
            'reply_num': 2,
        }
        assert FrameEvent.loss(1).to_dict()['reply_num'] == ''


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
