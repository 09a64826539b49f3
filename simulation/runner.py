"""
Comparison Runner for Go-Back-N vs Selective-Repeat

This module replays both algorithms against identical loss patterns
over a range of file sizes and seeds, and aggregates the results.
"""

import os
import csv
import time
import statistics
from typing import Optional, Callable, List, Dict
from dataclasses import dataclass
from concurrent.futures import ProcessPoolExecutor, as_completed
import multiprocessing

from config import (
    COMPARISON_FILE_SIZES, RUNS_PER_CONFIGURATION,
    RNG_SEED, COMPARISON_CSV, calculate_total_frames
)
from simulation.simulator import Algorithm, Simulator, SimulatorConfig
from src.utils.logger import LogLevel


@dataclass
class RunConfig:
    """Configuration for a single comparison run."""
    file_size: int
    run_id: int
    seed: int


def run_single_comparison(run_config: RunConfig) -> List[Dict]:
    """
    Run both algorithms for one (file size, seed) pair.

    This function is designed to be called in a separate process.

    Args:
        run_config: Configuration for this run

    Returns:
        One result row per algorithm
    """
    rows = []
    lost_frames = None

    for algorithm in Algorithm:
        sim = Simulator(SimulatorConfig(
            algorithm=algorithm,
            seed=run_config.seed,
            log_level=LogLevel.ERROR  # Minimal logging for batch runs
        ))
        try:
            total_frames = calculate_total_frames(run_config.file_size, sim.config.frame_size)
            if lost_frames is None:
                lost_frames = sim.select_losses(total_frames)
            results = sim.run_frames(total_frames, lost_frames)
        finally:
            sim.close()

        metrics = results['metrics']
        rows.append({
            'algorithm': algorithm.label,
            'file_size': run_config.file_size,
            'run_id': run_config.run_id,
            'seed': run_config.seed,
            'total_frames': metrics['total_frames'],
            'lost_frames': len(results['lost_frames']),
            'total_transmissions': metrics['total_transmissions'],
            'retransmissions': metrics['retransmissions'],
            'duplicate_acks': metrics['duplicate_acks'],
            'nacks': metrics['nacks'],
            'unrecovered': len(metrics['unrecovered_frames']),
            'efficiency': metrics['efficiency'],
            'overhead': metrics['overhead'],
        })

    return rows


class ComparisonRunner:
    """
    Batch runner comparing both algorithms.

    Every (file size, run) pair is simulated once per algorithm with the
    same loss set, so differences come from the protocols alone.

    Attributes:
        file_sizes: Input sizes in bytes
        runs_per_config: Loss patterns per file size
        output_file: Path of the CSV written by save_results()
    """

    def __init__(
        self,
        file_sizes: List[int] = None,
        runs_per_config: int = RUNS_PER_CONFIGURATION,
        seed_base: int = RNG_SEED,
        output_file: str = COMPARISON_CSV,
        on_progress: Optional[Callable[[int, int, List[Dict]], None]] = None
    ):
        """
        Initialize comparison runner.

        Args:
            file_sizes: Input sizes (default from config)
            runs_per_config: Number of loss patterns per size
            seed_base: Seed of run 0; run k uses seed_base + k
            output_file: Path to output CSV file
            on_progress: Callback for progress updates
        """
        self.file_sizes = file_sizes or COMPARISON_FILE_SIZES
        self.runs_per_config = runs_per_config
        self.seed_base = seed_base
        self.output_file = output_file
        self.on_progress = on_progress

        self.results: List[Dict] = []

        self.total_runs = len(self.file_sizes) * self.runs_per_config
        self.completed_runs = 0
        self.start_time = 0.0

    def _generate_run_configs(self) -> List[RunConfig]:
        """Generate all run configurations."""
        return [
            RunConfig(file_size=size, run_id=run_id, seed=self.seed_base + run_id)
            for size in self.file_sizes
            for run_id in range(self.runs_per_config)
        ]

    def _collect(self, rows: List[Dict]):
        self.results.extend(rows)
        self.completed_runs += 1
        if self.on_progress:
            self.on_progress(self.completed_runs, self.total_runs, rows)

    def run_sequential(self) -> List[Dict]:
        """
        Run all comparisons sequentially.

        Returns:
            List of result rows
        """
        self.results = []
        self.completed_runs = 0
        self.start_time = time.time()

        for config in self._generate_run_configs():
            self._collect(run_single_comparison(config))

        return self.results

    def run_parallel(self, max_workers: Optional[int] = None) -> List[Dict]:
        """
        Run comparisons in parallel using multiprocessing.

        Args:
            max_workers: Number of parallel workers (default: CPU count)

        Returns:
            List of result rows, ordered by file size then run
        """
        if max_workers is None:
            max_workers = multiprocessing.cpu_count()

        self.results = []
        self.completed_runs = 0
        self.start_time = time.time()

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(run_single_comparison, config)
                for config in self._generate_run_configs()
            ]
            for future in as_completed(futures):
                self._collect(future.result())

        self.results.sort(key=lambda r: (r['file_size'], r['run_id'], r['algorithm']))
        return self.results

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time if self.start_time else 0.0

    def save_results(self, filepath: Optional[str] = None) -> str:
        """
        Save results to CSV file.

        Args:
            filepath: Output file path (default: self.output_file)

        Returns:
            Path to the written file
        """
        filepath = filepath or self.output_file
        if not self.results:
            raise ValueError("No results to save")

        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        fieldnames = list(self.results[0].keys())
        with open(filepath, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(self.results)

        return filepath

    def get_aggregated_results(self) -> Dict:
        """
        Mean figures per (algorithm, file size).

        Returns:
            Dictionary keyed by (algorithm, file_size)
        """
        grouped = {}
        for row in self.results:
            key = (row['algorithm'], row['file_size'])
            grouped.setdefault(key, []).append(row)

        aggregated = {}
        for key, rows in grouped.items():
            aggregated[key] = {
                'algorithm': key[0],
                'file_size': key[1],
                'runs': len(rows),
                'total_frames': rows[0]['total_frames'],
                'transmissions_mean': statistics.mean(r['total_transmissions'] for r in rows),
                'retransmissions_mean': statistics.mean(r['retransmissions'] for r in rows),
                'efficiency_mean': statistics.mean(r['efficiency'] for r in rows),
                'overhead_mean': statistics.mean(r['overhead'] for r in rows),
                'unrecovered_total': sum(r['unrecovered'] for r in rows),
            }
        return aggregated

    def get_summary(self) -> Dict:
        """Mean efficiency and overhead per algorithm over all runs."""
        summary = {}
        for algorithm in Algorithm:
            rows = [r for r in self.results if r['algorithm'] == algorithm.label]
            if not rows:
                continue
            summary[algorithm.label] = {
                'runs': len(rows),
                'efficiency_mean': statistics.mean(r['efficiency'] for r in rows),
                'overhead_mean': statistics.mean(r['overhead'] for r in rows),
                'retransmissions_mean': statistics.mean(r['retransmissions'] for r in rows),
                'unrecovered_total': sum(r['unrecovered'] for r in rows),
            }
        return summary
