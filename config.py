"""
Configuration file for the Go-Back-N / Selective-Repeat ARQ Trace Simulator.
Contains all fixed protocol parameters used by the simulator.
"""

import math
import os

# =============================================================================
# FRAMING PARAMETERS
# =============================================================================

# Bytes per frame
FRAME_SIZE = 1200

# Sequence number header field
SEQ_NUM_BITS = 6
SEQ_MODULUS = 2 ** SEQ_NUM_BITS  # 64
MAX_SEQ = SEQ_MODULUS - 1        # sequence numbers 0-63

# =============================================================================
# LOSS MODEL PARAMETERS
# =============================================================================

# Fraction of frames selected as lost
LOSS_FRACTION = 0.05

# =============================================================================
# PROTOCOL PARAMETERS
# =============================================================================

# Duplicate ACKs that trigger a Go-Back-N fast retransmit
FAST_RETRANSMIT_THRESHOLD = 3

# Reported window sizes (informational, never enforced)
GBN_WINDOW_SIZE = 2 ** SEQ_NUM_BITS - 1        # 63
SR_WINDOW_SIZE = 2 ** (SEQ_NUM_BITS - 1)       # 32

# =============================================================================
# COMPARISON CONFIGURATION
# =============================================================================

# Input sizes (bytes) evaluated by the comparison runner
COMPARISON_FILE_SIZES = [12_000, 60_000, 120_000, 600_000, 1_200_000]

# Number of loss patterns per file size
RUNS_PER_CONFIGURATION = 10

# =============================================================================
# SIMULATION SETTINGS
# =============================================================================

# Default RNG seed (comparison runs use seed = base + run_id)
RNG_SEED = 42

# Logging verbosity levels
LOG_LEVEL_DEBUG = 0
LOG_LEVEL_INFO = 1
LOG_LEVEL_WARNING = 2
LOG_LEVEL_ERROR = 3

DEFAULT_LOG_LEVEL = LOG_LEVEL_INFO

# =============================================================================
# OUTPUT PATHS
# =============================================================================

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")
INPUT_DIR = os.path.join(DATA_DIR, "input")
OUTPUT_DIR = os.path.join(DATA_DIR, "output")
PLOTS_DIR = os.path.join(OUTPUT_DIR, "plots")

TRACE_CSV = os.path.join(OUTPUT_DIR, "trace.csv")
COMPARISON_CSV = os.path.join(OUTPUT_DIR, "comparison.csv")

# =============================================================================
# DERIVED PARAMETERS
# =============================================================================

def calculate_total_frames(size_bytes, frame_size=FRAME_SIZE):
    """Number of frames needed to carry size_bytes (ceil division)."""
    if size_bytes < 0:
        raise ValueError("Input size must be non-negative")
    return (size_bytes + frame_size - 1) // frame_size

def calculate_loss_count(total_frames, loss_fraction=LOSS_FRACTION):
    """
    Number of frames to mark as lost.
    count = ceil(total_frames * loss_fraction), capped at total_frames
    """
    if total_frames < 0:
        raise ValueError("Frame count must be non-negative")
    return min(total_frames, math.ceil(total_frames * loss_fraction))


# Print configuration summary
if __name__ == "__main__":
    print("=" * 60)
    print("ARQ TRACE SIMULATOR - CONFIGURATION")
    print("=" * 60)
    print(f"\nFraming:")
    print(f"  Frame Size: {FRAME_SIZE} bytes")
    print(f"  Sequence Numbers: 0 to {MAX_SEQ} ({SEQ_NUM_BITS}-bit field)")

    print(f"\nLoss Model:")
    print(f"  Loss Fraction: {LOSS_FRACTION * 100:.0f}%")
    print(f"  Seed: {RNG_SEED}")

    print(f"\nProtocols:")
    print(f"  Go-Back-N Window: {GBN_WINDOW_SIZE}")
    print(f"  Selective-Repeat Window: {SR_WINDOW_SIZE}")
    print(f"  Fast Retransmit Threshold: {FAST_RETRANSMIT_THRESHOLD} duplicate ACKs")

    print(f"\nComparison:")
    print(f"  File Sizes: {COMPARISON_FILE_SIZES}")
    print(f"  Runs per size: {RUNS_PER_CONFIGURATION}")

    print(f"\nFrames and losses per file size:")
    for size in COMPARISON_FILE_SIZES:
        frames = calculate_total_frames(size)
        print(f"  {size:9d} bytes: {frames:5d} frames, {calculate_loss_count(frames):4d} lost")
