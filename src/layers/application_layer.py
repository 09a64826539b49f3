"""
Application Layer Implementation

This module implements the application layer for file I/O:
reading the input file that the simulator splits into frames,
and generating reproducible test files.
"""

import os
import hashlib
from typing import Optional
from dataclasses import dataclass

import numpy as np

from config import FRAME_SIZE, INPUT_DIR, RNG_SEED, calculate_total_frames


@dataclass
class TransferInfo:
    """Information about a file transfer."""
    filename: str
    size: int
    checksum: str
    frame_size: int
    total_frames: int


class ApplicationLayer:
    """
    Application Layer for file handling.

    The whole file is read once and the handle released before any
    simulation starts.

    Attributes:
        frame_size: Bytes carried per frame
    """

    def __init__(self, frame_size: int = FRAME_SIZE):
        """
        Initialize application layer.

        Args:
            frame_size: Bytes carried per frame
        """
        if frame_size <= 0:
            raise ValueError("Frame size must be positive")
        self.frame_size = frame_size

        # File state
        self.current_file: Optional[str] = None
        self.data: bytes = b''

    def load_file(self, filepath: str) -> TransferInfo:
        """
        Load a file for transfer.

        Args:
            filepath: Path to the file

        Returns:
            TransferInfo with file details

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        if not os.path.isfile(filepath):
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, 'rb') as f:
            data = f.read()

        self.current_file = filepath
        self.data = data
        return self.describe(data, os.path.basename(filepath))

    def describe(self, data: bytes, filename: str = "<memory>") -> TransferInfo:
        """Transfer details for an in-memory payload."""
        return TransferInfo(
            filename=filename,
            size=len(data),
            checksum=hashlib.md5(data).hexdigest(),
            frame_size=self.frame_size,
            total_frames=calculate_total_frames(len(data), self.frame_size)
        )

    def get_frame(self, frame_index: int) -> bytes:
        """Payload of one frame of the loaded file (last frame may be short)."""
        total = calculate_total_frames(len(self.data), self.frame_size)
        if not 0 <= frame_index < total:
            raise IndexError(f"Frame {frame_index} out of range (0..{total - 1})")
        start = frame_index * self.frame_size
        return self.data[start:start + self.frame_size]


class TestDataGenerator:
    """Generates reproducible test files."""

    # Not a pytest test class
    __test__ = False

    @staticmethod
    def generate_bytes(size: int, seed: Optional[int] = RNG_SEED) -> bytes:
        """Random payload of the given size."""
        if size < 0:
            raise ValueError("Size must be non-negative")
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()

    @staticmethod
    def create_test_file(
        filepath: Optional[str] = None,
        size: int = 100 * FRAME_SIZE,
        seed: Optional[int] = RNG_SEED
    ) -> str:
        """
        Write a random test file.

        Args:
            filepath: Destination (defaults to INPUT_DIR/test_<size>.bin)
            size: File size in bytes
            seed: Random seed

        Returns:
            Path to the created file
        """
        if filepath is None:
            filepath = os.path.join(INPUT_DIR, f"test_{size}.bin")

        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(filepath, 'wb') as f:
            f.write(TestDataGenerator.generate_bytes(size, seed))

        return filepath
