"""
Trace and Comparison Plots

This module draws an ARQ event trace as a timeline (trace step vs
frame index) and compares Go-Back-N with Selective-Repeat across
file sizes.
"""

import os
from typing import Dict, List, Optional, Tuple

import numpy as np

from config import PLOTS_DIR
from src.arq.frame import EventType, FrameEvent, ReplyType

try:
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False


# Marker style per outcome
EVENT_STYLES = {
    'ACK': dict(color='tab:green', marker='.', label='ACK'),
    'DUP_ACK': dict(color='tab:orange', marker='.', label='Duplicate ACK'),
    'NACK': dict(color='tab:purple', marker='v', label='NACK'),
    'LOSS': dict(color='tab:red', marker='x', label='Loss'),
    'RETRANSMIT': dict(color='tab:blue', marker='^', label='Retransmit'),
}


def _outcome(event: FrameEvent) -> str:
    if event.event_type == EventType.LOSS:
        return 'LOSS'
    if event.event_type == EventType.RETRANSMIT:
        return 'RETRANSMIT'
    if event.reply_type == ReplyType.DUPLICATE_ACK:
        return 'DUP_ACK'
    if event.reply_type == ReplyType.NACK:
        return 'NACK'
    return 'ACK'


class TracePlot:
    """
    Timeline of one simulated transfer.

    Each event is a point at (trace step, frame index); retransmission
    bursts show up as runs jumping back below the main diagonal.
    """

    def __init__(self, events: List[FrameEvent], protocol: str = "ARQ"):
        """
        Initialize trace plot.

        Args:
            events: Trace in emission order
            protocol: Protocol name for the title
        """
        if not HAS_MATPLOTLIB:
            raise ImportError("matplotlib is required for visualization")

        self.events = list(events)
        self.protocol = protocol

    def _series(self) -> Dict[str, Tuple[np.ndarray, np.ndarray]]:
        """Step and frame arrays per outcome."""
        outcomes = np.array([_outcome(e) for e in self.events])
        frames = np.array([e.frame_index for e in self.events])
        steps = np.arange(len(self.events))

        return {
            key: (steps[outcomes == key], frames[outcomes == key])
            for key in EVENT_STYLES
            if np.any(outcomes == key)
        }

    def plot(
        self,
        output_file: Optional[str] = None,
        title: Optional[str] = None,
        figsize: Tuple[int, int] = (12, 6)
    ) -> str:
        """
        Generate and save the timeline.

        Args:
            output_file: Output file path (auto-generated if None)
            title: Plot title
            figsize: Figure size (width, height)

        Returns:
            Path to saved figure
        """
        if not self.events:
            raise ValueError("No events to plot")

        if output_file is None:
            slug = self.protocol.lower().replace(' ', '_').replace('-', '_')
            output_file = os.path.join(PLOTS_DIR, f"trace_{slug}.png")

        fig, ax = plt.subplots(figsize=figsize)

        for key, (steps, frames) in self._series().items():
            style = EVENT_STYLES[key]
            ax.scatter(steps, frames, s=14, color=style['color'],
                       marker=style['marker'], label=style['label'])

        ax.set_xlabel('Trace step', fontsize=12)
        ax.set_ylabel('Frame index', fontsize=12)
        ax.set_title(title or f"{self.protocol} ARQ event trace",
                     fontsize=14, fontweight='bold')
        ax.legend(loc='upper left')
        ax.grid(True, alpha=0.3)

        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        plt.tight_layout()
        plt.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return output_file


class ComparisonPlot:
    """
    Bar chart of mean efficiency per algorithm and file size.

    Consumes the rows produced by the comparison runner.
    """

    def __init__(self, results: List[Dict]):
        if not HAS_MATPLOTLIB:
            raise ImportError("matplotlib is required for visualization")
        self.results = results

    def _efficiency_matrix(self) -> Tuple[List[str], List[int], np.ndarray]:
        algorithms = sorted(set(r['algorithm'] for r in self.results))
        sizes = sorted(set(int(r['file_size']) for r in self.results))
        matrix = np.zeros((len(algorithms), len(sizes)))

        for i, algorithm in enumerate(algorithms):
            for j, size in enumerate(sizes):
                values = [float(r['efficiency']) for r in self.results
                          if r['algorithm'] == algorithm and int(r['file_size']) == size]
                if values:
                    matrix[i, j] = np.mean(values)

        return algorithms, sizes, matrix

    def plot(
        self,
        output_file: Optional[str] = None,
        title: str = "Transmission efficiency by file size",
        figsize: Tuple[int, int] = (10, 6)
    ) -> str:
        """
        Generate and save the comparison chart.

        Returns:
            Path to saved figure
        """
        if not self.results:
            raise ValueError("No results to plot")

        if output_file is None:
            output_file = os.path.join(PLOTS_DIR, 'efficiency_comparison.png')

        algorithms, sizes, matrix = self._efficiency_matrix()
        x = np.arange(len(sizes))
        width = 0.8 / len(algorithms)

        fig, ax = plt.subplots(figsize=figsize)
        for i, algorithm in enumerate(algorithms):
            ax.bar(x + i * width, matrix[i] * 100, width, label=algorithm)

        ax.set_xticks(x + width * (len(algorithms) - 1) / 2)
        ax.set_xticklabels([f"{s // 1000} KB" for s in sizes])
        ax.set_xlabel('File size', fontsize=12)
        ax.set_ylabel('Efficiency (%)', fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.legend()
        ax.grid(True, axis='y', alpha=0.3)

        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        plt.tight_layout()
        plt.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return output_file
