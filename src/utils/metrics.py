"""
Metrics Collection and Calculation

This module derives summary figures from an ARQ event trace:
transmission counts, recovery activity and transmission efficiency.
"""

from typing import Iterable, List, Optional, Dict

from src.arq.frame import EventType, FrameEvent, ReplyType


class MetricsCollector:
    """
    Collects performance metrics for one simulated transfer.

    Primary metric: Efficiency = Frames To Deliver / Total Transmissions

    Attributes:
        total_frames: Frames in the transfer
    """

    def __init__(self, total_frames: int = 0):
        """
        Initialize metrics collector.

        Args:
            total_frames: Number of distinct frames in the transfer
        """
        self.total_frames = total_frames

        # Transmission counters
        self.transmissions = 0
        self.losses = 0
        self.retransmissions = 0

        # Feedback counters
        self.acks = 0
        self.duplicate_acks = 0
        self.nacks = 0

        # GBN resend bursts (consecutive retransmissions)
        self.retransmit_bursts = 0
        self.longest_burst = 0
        self._current_burst = 0

        # Frames retransmitted at least once
        self.retransmitted_frames = set()

    def record(self, event: FrameEvent):
        """
        Record one trace event.

        Args:
            event: Event in trace order
        """
        if event.event_type == EventType.RETRANSMIT:
            self.retransmissions += 1
            self.acks += 1
            self.retransmitted_frames.add(event.frame_index)
            if self._current_burst == 0:
                self.retransmit_bursts += 1
            self._current_burst += 1
            self.longest_burst = max(self.longest_burst, self._current_burst)
            return

        self._current_burst = 0

        if event.event_type == EventType.LOSS:
            self.losses += 1
            return

        self.transmissions += 1
        if event.reply_type == ReplyType.DUPLICATE_ACK:
            self.duplicate_acks += 1
        elif event.reply_type == ReplyType.NACK:
            self.nacks += 1
        else:
            self.acks += 1

    def record_all(self, events: Iterable[FrameEvent]):
        """Record a whole trace."""
        for event in events:
            self.record(event)

    @property
    def total_transmissions(self) -> int:
        """Every frame put on the wire, including lost and resent copies."""
        return self.transmissions + self.losses + self.retransmissions

    def calculate_efficiency(self) -> float:
        """
        Fraction of transmissions that were strictly necessary.

        Returns:
            total_frames / total_transmissions (1.0 for an empty transfer)
        """
        if self.total_transmissions == 0:
            return 1.0
        return self.total_frames / self.total_transmissions

    def calculate_overhead(self) -> float:
        """Extra transmissions per frame of payload."""
        if self.total_frames == 0:
            return 0.0
        return (self.total_transmissions - self.total_frames) / self.total_frames

    def unrecovered_frames(self, lost_frames: Iterable[int]) -> List[int]:
        """Lost frames that were never retransmitted."""
        return sorted(set(lost_frames) - self.retransmitted_frames)

    def get_metrics(self, lost_frames: Optional[Iterable[int]] = None) -> Dict:
        """
        Get all metrics as a dictionary.

        Args:
            lost_frames: Loss set, used to report frames left unrecovered

        Returns:
            Dictionary of metrics
        """
        metrics = {
            'total_frames': self.total_frames,
            'total_transmissions': self.total_transmissions,
            'transmissions': self.transmissions,
            'losses': self.losses,
            'retransmissions': self.retransmissions,
            'acks': self.acks,
            'duplicate_acks': self.duplicate_acks,
            'nacks': self.nacks,
            'retransmit_bursts': self.retransmit_bursts,
            'longest_burst': self.longest_burst,
            'efficiency': self.calculate_efficiency(),
            'overhead': self.calculate_overhead(),
        }
        if lost_frames is not None:
            metrics['unrecovered_frames'] = self.unrecovered_frames(lost_frames)
        return metrics

    @classmethod
    def from_events(cls, total_frames: int, events: Iterable[FrameEvent]) -> 'MetricsCollector':
        """Build a collector from a complete trace."""
        collector = cls(total_frames)
        collector.record_all(events)
        return collector
