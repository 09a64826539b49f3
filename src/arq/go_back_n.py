"""
Go-Back-N ARQ Trace Simulator

This module replays the Go-Back-N sender/receiver exchange frame by
frame. A lost frame makes the receiver keep acknowledging the last
in-order sequence number; after FAST_RETRANSMIT_THRESHOLD duplicate
ACKs the sender retransmits the lost frame and every frame sent after it.
"""

from enum import Enum
from typing import Iterator, Optional, AbstractSet
from dataclasses import dataclass

from config import FAST_RETRANSMIT_THRESHOLD, GBN_WINDOW_SIZE
from .base import ARQSimulator
from .frame import FrameEvent, next_ack, sequence_number


class GBNState(Enum):
    """Sender state."""
    NORMAL = 0
    RECOVERING = 1


@dataclass
class RecoveryWindow:
    """
    Outstanding loss being recovered.

    Attributes:
        start: Index of the lost frame (first frame of the resend burst)
        expected_ack: ACK the receiver repeats until the loss is repaired
        duplicate_acks: Duplicate ACKs observed so far
    """
    start: int
    expected_ack: int
    duplicate_acks: int = 0


class GBNSimulator(ARQSimulator):
    """
    Go-Back-N ARQ trace simulator.

    A loss while already recovering restarts recovery at the new frame
    and the earlier window is dropped. Recovery still open when the frame
    range ends is left unresolved.

    Attributes:
        threshold: Duplicate ACKs needed to trigger a fast retransmit
        recovery: Current recovery window, None in NORMAL state
        fast_retransmits: Resend bursts performed in the last run
    """

    name = "Go-Back-N"
    window_size = GBN_WINDOW_SIZE

    def __init__(self, threshold: int = FAST_RETRANSMIT_THRESHOLD, **kwargs):
        if threshold < 1:
            raise ValueError("Fast retransmit threshold must be positive")
        self.threshold = threshold
        self.recovery: Optional[RecoveryWindow] = None
        super().__init__(**kwargs)

    def _reset_statistics(self):
        super()._reset_statistics()
        self.fast_retransmits = 0

    @property
    def state(self) -> GBNState:
        return GBNState.NORMAL if self.recovery is None else GBNState.RECOVERING

    def _generate(
        self,
        total_frames: int,
        lost_frames: AbstractSet[int]
    ) -> Iterator[FrameEvent]:
        self.recovery = None

        for i in range(total_frames):
            if i in lost_frames:
                yield FrameEvent.loss(i)
                self.recovery = RecoveryWindow(
                    start=i,
                    expected_ack=next_ack(sequence_number(i))
                )

            elif self.recovery is not None:
                # Receiver keeps acknowledging the last in-order frame
                yield FrameEvent.duplicate_ack(i, self.recovery.expected_ack)
                self.recovery.duplicate_acks += 1

                if self.recovery.duplicate_acks == self.threshold:
                    start = self.recovery.start
                    self.recovery = None
                    self.fast_retransmits += 1
                    self.logger.fast_retransmit(start, i)
                    for j in range(start, i + 1):
                        yield FrameEvent.retransmit(j)

            else:
                yield FrameEvent.transmit(i)

        if self.recovery is not None:
            self.logger.debug(
                f"Transfer ended with frame {self.recovery.start} unrecovered "
                f"({self.recovery.duplicate_acks} duplicate ACKs)", "GBN"
            )

    def get_statistics(self) -> dict:
        stats = super().get_statistics()
        stats['fast_retransmits'] = self.fast_retransmits
        stats['unrecovered_frame'] = self.recovery.start if self.recovery else None
        return stats
