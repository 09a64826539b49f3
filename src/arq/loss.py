"""
Deterministic Frame Loss Selection

This module chooses which frames of a transfer are lost. A fixed
fraction of the frame range is drawn without replacement from an
explicitly seeded random generator, so the same seed always yields
the same loss pattern.
"""

import numpy as np
from typing import FrozenSet, Optional

from config import LOSS_FRACTION, calculate_loss_count


def select_lost_frames(
    total_frames: int,
    rng: np.random.Generator,
    loss_fraction: float = LOSS_FRACTION
) -> FrozenSet[int]:
    """
    Draw the set of lost frame indices.

    Args:
        total_frames: Number of frames in the transfer
        rng: Seeded random generator (consumed)
        loss_fraction: Fraction of frames to lose

    Returns:
        ceil(total_frames * loss_fraction) distinct indices in [0, total_frames)
    """
    count = calculate_loss_count(total_frames, loss_fraction)
    if count == 0:
        return frozenset()

    picks = rng.choice(total_frames, size=count, replace=False)
    return frozenset(int(index) for index in picks)


class LossSelector:
    """
    Loss pattern generator bound to one seeded generator.

    Successive calls to select() keep consuming the same generator, so
    a selector reproduces a whole sequence of loss patterns from its seed.

    Attributes:
        loss_fraction: Fraction of frames to lose
        seed: Seed the generator was created from
        rng: Random number generator
    """

    def __init__(
        self,
        loss_fraction: float = LOSS_FRACTION,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the selector.

        Args:
            loss_fraction: Fraction of frames to lose
            seed: Random seed for reproducibility (ignored if rng is given)
            rng: Pre-built generator to draw from
        """
        if not 0.0 <= loss_fraction <= 1.0:
            raise ValueError("Loss fraction must be within [0, 1]")

        self.loss_fraction = loss_fraction
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.selections = 0

    def select(self, total_frames: int) -> FrozenSet[int]:
        """Select the lost frames for a transfer of total_frames frames."""
        lost = select_lost_frames(total_frames, self.rng, self.loss_fraction)
        self.selections += 1
        return lost

    def expected_count(self, total_frames: int) -> int:
        """Number of frames select() will return for total_frames."""
        return calculate_loss_count(total_frames, self.loss_fraction)
