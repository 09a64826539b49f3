"""
Simulation Logger

This module provides logging utilities for the trace simulator,
with configurable verbosity levels and structured output.
"""

from typing import Optional, TextIO
from datetime import datetime
from enum import IntEnum
import os

from config import DEFAULT_LOG_LEVEL


class LogLevel(IntEnum):
    """Log level enumeration."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


class SimulationLogger:
    """
    Logger for simulation events.

    Messages are prefixed with the frame currently being processed when a
    frame cursor is set, otherwise with the wall-clock time.

    Attributes:
        name: Logger name
        level: Minimum log level
        file: Optional file for logging
    """

    # Color codes for terminal output
    COLORS = {
        LogLevel.DEBUG: '\033[36m',     # Cyan
        LogLevel.INFO: '\033[32m',      # Green
        LogLevel.WARNING: '\033[33m',   # Yellow
        LogLevel.ERROR: '\033[31m',     # Red
        LogLevel.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(
        self,
        name: str = "Simulator",
        level: int = DEFAULT_LOG_LEVEL,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        include_timestamp: bool = True
    ):
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Minimum log level
            log_file: Optional file path for logging
            use_colors: Use ANSI colors in output
            include_timestamp: Include frame cursor / timestamp prefix
        """
        self.name = name
        self.level = level
        self.use_colors = use_colors
        self.include_timestamp = include_timestamp

        self.file: Optional[TextIO] = None
        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            self.file = open(log_file, 'w')

        # Frame cursor
        self.frame_index: Optional[int] = None

        # Message counts
        self.message_counts = {level: 0 for level in LogLevel}

    def set_frame(self, frame_index: Optional[int]):
        """Set the frame shown in subsequent log messages."""
        self.frame_index = frame_index

    def _format_message(
        self,
        level: LogLevel,
        message: str,
        category: Optional[str] = None
    ) -> str:
        """Format a log message."""
        parts = []

        if self.include_timestamp:
            if self.frame_index is not None:
                parts.append(f"[frame {self.frame_index:6d}]")
            else:
                parts.append(f"[{datetime.now().strftime('%H:%M:%S.%f')[:-3]}]")

        level_str = level.name.ljust(8)
        if self.use_colors:
            level_str = f"{self.COLORS[level]}{level_str}{self.RESET}"
        parts.append(level_str)

        parts.append(f"[{self.name}]")

        if category:
            parts.append(f"[{category}]")

        parts.append(message)

        return " ".join(parts)

    def _log(
        self,
        level: LogLevel,
        message: str,
        category: Optional[str] = None
    ):
        """Log a message."""
        if level < self.level:
            return

        self.message_counts[level] += 1
        formatted = self._format_message(level, message, category)

        print(formatted)

        if self.file:
            # Strip color codes for file
            clean = formatted
            for color in self.COLORS.values():
                clean = clean.replace(color, '')
            clean = clean.replace(self.RESET, '')
            self.file.write(clean + '\n')
            self.file.flush()

    def debug(self, message: str, category: Optional[str] = None):
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, category)

    def info(self, message: str, category: Optional[str] = None):
        """Log info message."""
        self._log(LogLevel.INFO, message, category)

    # Convenience methods for trace events
    def frame_transmitted(self, frame_index: int, seq_num: int, ack_num: int):
        """Log successful transmission."""
        self.debug(f"Frame {frame_index} (seq {seq_num}) delivered, ACK {ack_num}", "TX")

    def frame_lost(self, frame_index: int, seq_num: int):
        """Log lost frame."""
        self.debug(f"Frame {frame_index} (seq {seq_num}) lost", "LOSS")

    def duplicate_ack(self, frame_index: int, ack_num: int):
        """Log duplicate ACK."""
        self.debug(f"Frame {frame_index} answered by duplicate ACK {ack_num}", "ACK")

    def nack(self, frame_index: int, nack_num: int):
        """Log NACK."""
        self.debug(f"Frame {frame_index} answered by NACK {nack_num}", "NACK")

    def retransmit(self, frame_index: int, seq_num: int):
        """Log retransmission event."""
        self.debug(f"Retransmitting frame {frame_index} (seq {seq_num})", "RETX")

    def fast_retransmit(self, start: int, end: int):
        """Log fast retransmit burst."""
        self.debug(f"Fast retransmit of frames {start}..{end}", "RETX")

    def simulation_start(self, params: dict):
        """Log simulation start."""
        param_str = ", ".join(f"{k}={v}" for k, v in params.items())
        self.info(f"Simulation started: {param_str}", "SIM")

    def simulation_end(self, metrics: dict):
        """Log simulation end."""
        self.info(
            f"Simulation ended: {metrics.get('total_transmissions', 0)} transmissions, "
            f"efficiency={metrics.get('efficiency', 0) * 100:.1f}%", "SIM"
        )

    def get_summary(self) -> dict:
        """Get logging summary."""
        return {
            'message_counts': dict(self.message_counts),
            'total_messages': sum(self.message_counts.values())
        }

    def close(self):
        """Close log file if open."""
        if self.file:
            self.file.close()
            self.file = None

    def __del__(self):
        """Cleanup on deletion."""
        self.close()


# Global logger instance
_global_logger: Optional[SimulationLogger] = None


def get_logger() -> SimulationLogger:
    """Get global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SimulationLogger()
    return _global_logger

