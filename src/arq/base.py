"""
Common Trace Simulator Behaviour

Shared plumbing for the Go-Back-N and Selective-Repeat simulators:
input validation, event recording, per-run counters and logging.
Protocol logic lives in the subclasses.
"""

from typing import Callable, Iterator, List, Optional, AbstractSet

from .frame import EventType, FrameEvent, ReplyType
from src.utils.logger import SimulationLogger, get_logger


class ARQSimulator:
    """
    Base class for per-frame ARQ trace simulators.

    Subclasses implement _generate(), a generator yielding FrameEvents in
    the order the protocol produces them. run() drives it to completion.

    Attributes:
        name: Protocol name used in reports
        window_size: Reported window size (not enforced)
        logger: Logger for per-frame events
        on_event: Optional callback invoked for every emitted event
    """

    name = "ARQ"
    window_size = 0

    def __init__(
        self,
        logger: Optional[SimulationLogger] = None,
        on_event: Optional[Callable[[FrameEvent], None]] = None
    ):
        """
        Initialize simulator.

        Args:
            logger: Logger instance (module default if None)
            on_event: Callback invoked for each event as it is emitted
        """
        self.logger = logger if logger is not None else get_logger()
        self.on_event = on_event
        self._reset_statistics()

    def _reset_statistics(self):
        self.frames_transmitted = 0
        self.frames_lost = 0
        self.duplicate_acks = 0
        self.nacks_sent = 0
        self.retransmissions = 0

    def run(self, total_frames: int, lost_frames: AbstractSet[int]) -> List[FrameEvent]:
        """
        Simulate a complete transfer.

        Args:
            total_frames: Number of frames to send
            lost_frames: Indices lost on first transmission (read only)

        Returns:
            Ordered list of trace events
        """
        return list(self.iter_events(total_frames, lost_frames))

    def iter_events(
        self,
        total_frames: int,
        lost_frames: AbstractSet[int]
    ) -> Iterator[FrameEvent]:
        """Lazily simulate a transfer, yielding events as they occur."""
        if total_frames < 0:
            raise ValueError("Frame count must be non-negative")

        self._reset_statistics()
        self.logger.debug(
            f"{self.name}: {total_frames} frames, {len(lost_frames)} lost", "SIM"
        )

        for event in self._generate(total_frames, lost_frames):
            self._record(event)
            yield event

    def _generate(
        self,
        total_frames: int,
        lost_frames: AbstractSet[int]
    ) -> Iterator[FrameEvent]:
        raise NotImplementedError

    def _record(self, event: FrameEvent):
        """Update counters, log and notify for one event."""
        self.logger.set_frame(event.frame_index)

        if event.event_type == EventType.LOSS:
            self.frames_lost += 1
            self.logger.frame_lost(event.frame_index, event.seq_num)
        elif event.event_type == EventType.RETRANSMIT:
            self.retransmissions += 1
            self.logger.retransmit(event.frame_index, event.seq_num)
        else:
            self.frames_transmitted += 1
            if event.reply_type == ReplyType.DUPLICATE_ACK:
                self.duplicate_acks += 1
                self.logger.duplicate_ack(event.frame_index, event.reply_num)
            elif event.reply_type == ReplyType.NACK:
                self.nacks_sent += 1
                self.logger.nack(event.frame_index, event.reply_num)
            else:
                self.logger.frame_transmitted(event.frame_index, event.seq_num, event.reply_num)

        if self.on_event:
            self.on_event(event)

    def get_statistics(self) -> dict:
        """Counters for the most recent run."""
        return {
            'protocol': self.name,
            'window_size': self.window_size,
            'frames_transmitted': self.frames_transmitted,
            'frames_lost': self.frames_lost,
            'duplicate_acks': self.duplicate_acks,
            'nacks_sent': self.nacks_sent,
            'retransmissions': self.retransmissions,
        }
