"""
Selective-Repeat ARQ Trace Simulator

This module replays the Selective-Repeat exchange frame by frame. The
first frame received after a loss carries a NACK for the missing
sequence number and only that frame is retransmitted.
"""

from enum import Enum
from typing import Iterator, Optional, AbstractSet

from config import SR_WINDOW_SIZE
from .base import ARQSimulator
from .frame import FrameEvent, sequence_number


class SRState(Enum):
    """Sender state."""
    NORMAL = 0
    AWAITING_RETRANSMIT = 1


class SRSimulator(ARQSimulator):
    """
    Selective-Repeat ARQ trace simulator.

    Only one loss is tracked at a time: a second loss before the first is
    NACKed replaces it. If the last frame of the range is lost there is no
    later frame to carry the NACK, so it is retransmitted after the loop.

    Attributes:
        pending_loss: Index of the lost frame awaiting retransmission
        flushed: Whether the last run ended with a trailing retransmission
    """

    name = "Selective-Repeat"
    window_size = SR_WINDOW_SIZE

    def __init__(self, **kwargs):
        self.pending_loss: Optional[int] = None
        super().__init__(**kwargs)

    def _reset_statistics(self):
        super()._reset_statistics()
        self.flushed = False

    @property
    def state(self) -> SRState:
        if self.pending_loss is None:
            return SRState.NORMAL
        return SRState.AWAITING_RETRANSMIT

    def _generate(
        self,
        total_frames: int,
        lost_frames: AbstractSet[int]
    ) -> Iterator[FrameEvent]:
        self.pending_loss = None

        for i in range(total_frames):
            if i in lost_frames:
                yield FrameEvent.loss(i)
                self.pending_loss = i

            elif self.pending_loss is not None:
                lost = self.pending_loss
                self.pending_loss = None
                yield FrameEvent.nack(i, sequence_number(lost))
                yield FrameEvent.retransmit(lost)

            else:
                yield FrameEvent.transmit(i)

        # Lost final frame: no successor to carry the NACK
        if self.pending_loss is not None:
            lost = self.pending_loss
            self.pending_loss = None
            self.flushed = True
            self.logger.debug(f"Flushing lost final frame {lost}", "SR")
            yield FrameEvent.retransmit(lost)

    def get_statistics(self) -> dict:
        stats = super().get_statistics()
        stats['flushed'] = self.flushed
        return stats
