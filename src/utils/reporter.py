"""
Trace Reporter

Renders simulator event traces as console lines and exports them
as CSV. The simulators themselves never print.
"""

import csv
import os
import sys
from typing import Iterable, List, Optional, TextIO

from config import MAX_SEQ
from src.arq.frame import EventType, FrameEvent, ReplyType


def format_event(event: FrameEvent) -> str:
    """
    Render one event as a report line.

    Examples:
        Frame 3: Seq No. 3   ACK 4
        Frame 2: Seq No. 2 (Loss)  -
        Frame 3: Seq No. 3   NACK 2
        Frame 2: Seq No. 2 (Retransmit) ACK 3
    """
    prefix = f"Frame {event.frame_index}: Seq No. {event.seq_num}"

    if event.event_type == EventType.LOSS:
        return f"{prefix} (Loss)  -"
    if event.event_type == EventType.RETRANSMIT:
        return f"{prefix} (Retransmit) ACK {event.reply_num}"
    if event.reply_type == ReplyType.NACK:
        return f"{prefix}   NACK {event.reply_num}"
    return f"{prefix}   ACK {event.reply_num}"


def format_lost_frames(lost_frames: Iterable[int]) -> str:
    """Sorted, comma-separated list of lost frames."""
    return ", ".join(f"Frame {i}" for i in sorted(lost_frames))


class TraceReporter:
    """
    Line-oriented reporter for a simulated transfer.

    Attributes:
        stream: Output stream (stdout if None)
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.lines_written = 0

    def _write(self, line: str = ""):
        self.stream.write(line + "\n")
        self.lines_written += 1

    def report_header(self, total_frames: int, lost_frames: Iterable[int]):
        """Frame count and loss pattern."""
        self._write()
        self._write(f"The total number of frames to be transmitted is {total_frames}.")
        self._write(f"The loss frames are {format_lost_frames(lost_frames)}.")
        self._write()

    def report_protocol(self, name: str, window_size: int):
        """Protocol banner."""
        self._write(
            f"{name} ARQ (Window Size = {window_size}; Sequence Number 0 to {MAX_SEQ})"
        )

    def report_events(self, events: Iterable[FrameEvent]):
        """One line per event, in trace order."""
        for event in events:
            self._write(format_event(event))

    def report(
        self,
        name: str,
        window_size: int,
        total_frames: int,
        lost_frames: Iterable[int],
        events: Iterable[FrameEvent]
    ):
        """Complete console report of one run."""
        self.report_header(total_frames, lost_frames)
        self.report_protocol(name, window_size)
        self.report_events(events)

    def report_metrics(self, metrics: dict):
        """Summary block after the trace."""
        self._write()
        self._write("Summary:")
        self._write(f"  Frames: {metrics['total_frames']}")
        self._write(f"  Transmissions: {metrics['total_transmissions']}")
        self._write(f"  Losses: {metrics['losses']}")
        self._write(f"  Retransmissions: {metrics['retransmissions']}")
        self._write(f"  Duplicate ACKs: {metrics['duplicate_acks']}")
        self._write(f"  NACKs: {metrics['nacks']}")
        self._write(f"  Efficiency: {metrics['efficiency'] * 100:.2f}%")
        unrecovered = metrics.get('unrecovered_frames')
        if unrecovered:
            self._write(f"  Unrecovered: {format_lost_frames(unrecovered)}")


def render_lines(events: Iterable[FrameEvent]) -> List[str]:
    """Report lines for a trace, without header."""
    return [format_event(event) for event in events]


def save_trace_csv(events: Iterable[FrameEvent], output_file: str) -> str:
    """
    Write a trace to CSV.

    Args:
        events: Events in trace order
        output_file: Destination path (parent directories are created)

    Returns:
        Path to the written file
    """
    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    fieldnames = ['step', 'event_type', 'frame_index', 'seq_num', 'reply_type', 'reply_num']
    with open(output_file, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for step, event in enumerate(events):
            row = event.to_dict()
            row['step'] = step
            writer.writerow(row)

    return output_file
