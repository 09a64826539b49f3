"""
Main Simulator - Trace Simulation Orchestrator

This module ties the pieces together for one run: the input is split
into frames, a loss pattern is drawn once, and the selected ARQ
simulator replays the transfer against it.
"""

from typing import Dict, FrozenSet, Optional
from dataclasses import dataclass, replace
from enum import IntEnum

import numpy as np

from config import FRAME_SIZE, GBN_WINDOW_SIZE, LOSS_FRACTION, RNG_SEED, SR_WINDOW_SIZE
from src.arq.base import ARQSimulator
from src.arq.go_back_n import GBNSimulator
from src.arq.loss import select_lost_frames
from src.arq.selective_repeat import SRSimulator
from src.layers.application_layer import ApplicationLayer, TransferInfo
from src.utils.metrics import MetricsCollector
from src.utils.logger import SimulationLogger, LogLevel


class Algorithm(IntEnum):
    """Flow control algorithm, numbered as offered to the user."""
    GO_BACK_N = 1
    SELECTIVE_REPEAT = 2

    @classmethod
    def from_choice(cls, choice) -> 'Algorithm':
        """
        Parse a user choice.

        Raises:
            ValueError: If choice is not 1 or 2
        """
        if isinstance(choice, bool) or (isinstance(choice, float) and not choice.is_integer()):
            raise ValueError("please enter 1 or 2 only")
        try:
            return cls(int(choice))
        except (TypeError, ValueError):
            raise ValueError("please enter 1 or 2 only") from None

    @property
    def label(self) -> str:
        return "Go-Back-N" if self == Algorithm.GO_BACK_N else "Selective-Repeat"

    @property
    def window_size(self) -> int:
        return GBN_WINDOW_SIZE if self == Algorithm.GO_BACK_N else SR_WINDOW_SIZE


def create_simulator(algorithm: Algorithm, logger: Optional[SimulationLogger] = None) -> ARQSimulator:
    """Instantiate the simulator for an algorithm."""
    if algorithm == Algorithm.GO_BACK_N:
        return GBNSimulator(logger=logger)
    return SRSimulator(logger=logger)


@dataclass
class SimulatorConfig:
    """Configuration for the simulator."""
    algorithm: Algorithm = Algorithm.GO_BACK_N

    # Loss pattern
    seed: Optional[int] = RNG_SEED
    loss_fraction: float = LOSS_FRACTION

    frame_size: int = FRAME_SIZE
    log_level: int = LogLevel.WARNING
    log_file: Optional[str] = None


class Simulator:
    """
    Runs one simulated transfer end to end.

    The loss set is drawn once per run from a generator seeded with
    config.seed and shared read-only with the ARQ simulator.
    """

    def __init__(self, config: SimulatorConfig):
        """Initialize simulator."""
        self.config = replace(config, algorithm=Algorithm.from_choice(config.algorithm))

        self.logger = SimulationLogger(
            name="Sim",
            level=self.config.log_level,
            log_file=self.config.log_file
        )
        self.application = ApplicationLayer(frame_size=self.config.frame_size)
        self.arq = create_simulator(self.config.algorithm, self.logger)

        self.transfer: Optional[TransferInfo] = None
        self.lost_frames: FrozenSet[int] = frozenset()

    def select_losses(self, total_frames: int) -> FrozenSet[int]:
        """Draw the loss set for a transfer of total_frames frames."""
        rng = np.random.default_rng(self.config.seed)
        return select_lost_frames(total_frames, rng, self.config.loss_fraction)

    def run_file(self, filepath: str) -> Dict:
        """
        Simulate transferring a file.

        Raises:
            FileNotFoundError, OSError: If the file cannot be read
        """
        self.transfer = self.application.load_file(filepath)
        self.logger.info(
            f"Loaded {self.transfer.filename}: {self.transfer.size} bytes, "
            f"md5={self.transfer.checksum}", "SETUP"
        )
        return self.run_frames(self.transfer.total_frames)

    def run_bytes(self, data: bytes) -> Dict:
        """Simulate transferring an in-memory payload."""
        self.transfer = self.application.describe(data)
        return self.run_frames(self.transfer.total_frames)

    def run_frames(
        self,
        total_frames: int,
        lost_frames: Optional[FrozenSet[int]] = None
    ) -> Dict:
        """
        Simulate a transfer of total_frames frames.

        Args:
            total_frames: Number of frames
            lost_frames: Explicit loss set (drawn from the seed if None)

        Returns:
            Dictionary with trace and results
        """
        if lost_frames is None:
            lost_frames = self.select_losses(total_frames)
        self.lost_frames = frozenset(lost_frames)

        self.logger.simulation_start({
            'algorithm': self.config.algorithm.label,
            'frames': total_frames,
            'lost': len(self.lost_frames),
            'seed': self.config.seed
        })

        events = self.arq.run(total_frames, self.lost_frames)
        self.logger.set_frame(None)

        metrics = MetricsCollector.from_events(total_frames, events)
        results = metrics.get_metrics(self.lost_frames)
        self.logger.simulation_end(results)

        return {
            'algorithm': self.config.algorithm,
            'protocol': self.arq.name,
            'window_size': self.arq.window_size,
            'total_frames': total_frames,
            'lost_frames': sorted(self.lost_frames),
            'events': events,
            'metrics': results,
            'statistics': self.arq.get_statistics(),
            'transfer': self.transfer,
            'seed': self.config.seed
        }

    def close(self):
        self.logger.close()

