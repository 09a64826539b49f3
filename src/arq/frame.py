"""
Frame Enumeration and Trace Events for the ARQ Simulator

This module maps file sizes to frame counts and frame indices to
6-bit sequence numbers, and defines the structured events that the
Go-Back-N and Selective-Repeat simulators emit.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass

from config import FRAME_SIZE, SEQ_MODULUS, calculate_total_frames


def count_frames(size_bytes: int, frame_size: int = FRAME_SIZE) -> int:
    """
    Number of frames needed to transmit size_bytes.

    Args:
        size_bytes: Input size in bytes
        frame_size: Bytes per frame

    Returns:
        ceil(size_bytes / frame_size), 0 for empty input
    """
    return calculate_total_frames(size_bytes, frame_size)


def sequence_number(frame_index: int) -> int:
    """Sequence number carried in the header of frame_index."""
    if frame_index < 0:
        raise ValueError("Frame index must be non-negative")
    return frame_index % SEQ_MODULUS


def next_ack(seq_num: int) -> int:
    """ACK number that acknowledges seq_num."""
    return (seq_num + 1) % SEQ_MODULUS


class EventType(Enum):
    """Trace event enumeration."""
    TRANSMIT = "transmit"
    LOSS = "loss"
    RETRANSMIT = "retransmit"


class ReplyType(Enum):
    """Receiver feedback carried with a transmission."""
    ACK = "ACK"
    DUPLICATE_ACK = "DUP_ACK"
    NACK = "NACK"


@dataclass(frozen=True)
class FrameEvent:
    """
    One step of a simulated transfer.

    Attributes:
        event_type: TRANSMIT, LOSS or RETRANSMIT
        frame_index: Index of the frame in transmission order
        seq_num: Sequence number of the frame
        reply_type: Feedback returned by the receiver (None for losses)
        reply_num: Sequence number referenced by the feedback
    """

    event_type: EventType
    frame_index: int
    seq_num: int
    reply_type: Optional[ReplyType] = None
    reply_num: Optional[int] = None

    def __post_init__(self):
        """Validate event after initialization."""
        if self.frame_index < 0:
            raise ValueError("Frame index must be non-negative")
        if not 0 <= self.seq_num < SEQ_MODULUS:
            raise ValueError(f"Sequence number out of range: {self.seq_num}")
        if (self.reply_type is None) != (self.reply_num is None):
            raise ValueError("reply_type and reply_num must be set together")

    @classmethod
    def transmit(cls, frame_index: int, ack_num: Optional[int] = None) -> 'FrameEvent':
        """Create a normal transmission acknowledged with ack_num."""
        seq = sequence_number(frame_index)
        if ack_num is None:
            ack_num = next_ack(seq)
        return cls(EventType.TRANSMIT, frame_index, seq, ReplyType.ACK, ack_num)

    @classmethod
    def duplicate_ack(cls, frame_index: int, ack_num: int) -> 'FrameEvent':
        """Create a transmission answered by a duplicate ACK."""
        return cls(
            EventType.TRANSMIT, frame_index, sequence_number(frame_index),
            ReplyType.DUPLICATE_ACK, ack_num
        )

    @classmethod
    def nack(cls, frame_index: int, nack_num: int) -> 'FrameEvent':
        """Create a transmission answered by a NACK for nack_num."""
        return cls(
            EventType.TRANSMIT, frame_index, sequence_number(frame_index),
            ReplyType.NACK, nack_num
        )

    @classmethod
    def loss(cls, frame_index: int) -> 'FrameEvent':
        """Create a lost transmission."""
        return cls(EventType.LOSS, frame_index, sequence_number(frame_index))

    @classmethod
    def retransmit(cls, frame_index: int) -> 'FrameEvent':
        """Create a retransmission and its resulting ACK."""
        seq = sequence_number(frame_index)
        return cls(EventType.RETRANSMIT, frame_index, seq, ReplyType.ACK, next_ack(seq))

    @property
    def is_loss(self) -> bool:
        return self.event_type == EventType.LOSS

    @property
    def is_retransmission(self) -> bool:
        return self.event_type == EventType.RETRANSMIT

    @property
    def ack_num(self) -> Optional[int]:
        """ACK number, if the receiver acknowledged (normally or as duplicate)."""
        if self.reply_type in (ReplyType.ACK, ReplyType.DUPLICATE_ACK):
            return self.reply_num
        return None

    @property
    def nack_num(self) -> Optional[int]:
        """Sequence number negatively acknowledged, if any."""
        if self.reply_type == ReplyType.NACK:
            return self.reply_num
        return None

    def to_dict(self) -> dict:
        """Flat representation used for CSV export."""
        return {
            'event_type': self.event_type.value,
            'frame_index': self.frame_index,
            'seq_num': self.seq_num,
            'reply_type': self.reply_type.value if self.reply_type else '',
            'reply_num': '' if self.reply_num is None else self.reply_num,
        }
