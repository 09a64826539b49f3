#!/usr/bin/env python3
"""
Go-Back-N / Selective-Repeat ARQ Trace Simulator - Main Entry Point

This is the main CLI interface for the ARQ trace simulator.
It provides options for:
- Single simulation runs over an input file
- Go-Back-N vs Selective-Repeat comparison
- Trace visualization
- Test file generation

Usage:
    python main.py --single --algorithm 1 --file data.bin
    python main.py --single            (prompts for algorithm and file)
    python main.py --compare --runs 10
    python main.py --visualize --algorithm 2 --file data.bin
"""

import argparse
import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import RNG_SEED, RUNS_PER_CONFIGURATION, TRACE_CSV, COMPARISON_CSV, PLOTS_DIR


def prompt_algorithm() -> str:
    return input("Which flow control algorithm? (1: Go-Back-N ARQ or 2: Selective-Repeat ARQ): ")


def prompt_file_name() -> str:
    return input("What is the input file name? ").strip()


def build_simulator(args):
    """Resolve algorithm and configuration, prompting where options are missing."""
    from simulation.simulator import Algorithm, Simulator, SimulatorConfig
    from src.utils.logger import LogLevel

    choice = args.algorithm if args.algorithm is not None else prompt_algorithm()
    algorithm = Algorithm.from_choice(choice)

    config = SimulatorConfig(
        algorithm=algorithm,
        seed=args.seed,
        log_level=LogLevel.DEBUG if args.verbose else LogLevel.WARNING
    )
    return Simulator(config)


def run_single_simulation(args):
    """Run and report a single simulation."""
    from src.utils.reporter import TraceReporter, save_trace_csv

    sim = build_simulator(args)
    filename = args.file or prompt_file_name()

    try:
        results = sim.run_file(filename)
    finally:
        sim.close()

    reporter = TraceReporter()
    reporter.report(
        results['protocol'],
        results['window_size'],
        results['total_frames'],
        results['lost_frames'],
        results['events']
    )
    if args.verbose:
        reporter.report_metrics(results['metrics'])
        log_summary = sim.logger.get_summary()
        print(f"  Log messages: {log_summary['total_messages']}")

    if args.csv:
        path = save_trace_csv(results['events'], args.csv)
        print(f"\nTrace saved to: {path}")

    return results


def run_comparison(args):
    """Compare both algorithms over identical loss patterns."""
    from simulation.runner import ComparisonRunner

    print("=" * 60)
    print("GO-BACK-N vs SELECTIVE-REPEAT")
    print("=" * 60)

    runner = ComparisonRunner(
        runs_per_config=args.runs,
        seed_base=args.seed,
        output_file=args.output or COMPARISON_CSV
    )

    print(f"\nConfiguration:")
    print(f"  File sizes: {runner.file_sizes}")
    print(f"  Runs per size: {runner.runs_per_config}")
    print(f"  Total comparisons: {runner.total_runs}")

    if args.parallel:
        results = runner.run_parallel(max_workers=args.workers)
    else:
        results = runner.run_sequential()

    path = runner.save_results()
    print(f"Completed {runner.total_runs} comparisons in {runner.elapsed:.1f}s")
    print(f"Results saved to: {path}")

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, data in runner.get_summary().items():
        print(f"  {name}:")
        print(f"    Mean efficiency: {data['efficiency_mean'] * 100:.2f}%")
        print(f"    Mean overhead: {data['overhead_mean'] * 100:.2f}%")
        print(f"    Mean retransmissions: {data['retransmissions_mean']:.1f}")
        print(f"    Unrecovered frames: {data['unrecovered_total']}")

    if args.plot:
        from visualization.trace_plot import ComparisonPlot
        plot_file = ComparisonPlot(results).plot(
            output_file=os.path.join(PLOTS_DIR, 'efficiency_comparison.png')
        )
        print(f"  Chart: {plot_file}")

    return results


def generate_visualization(args):
    """Plot the event trace of a single run."""
    from visualization.trace_plot import TracePlot

    sim = build_simulator(args)
    filename = args.file or prompt_file_name()

    try:
        results = sim.run_file(filename)
    finally:
        sim.close()

    plot = TracePlot(results['events'], protocol=results['protocol'])
    plot_file = plot.plot(output_file=args.output)
    print(f"Trace plot: {plot_file}")


def show_config(args):
    """Display current configuration."""
    import config as cfg

    print("=" * 60)
    print("SIMULATOR CONFIGURATION")
    print("=" * 60)

    print(f"\nFraming:")
    print(f"  Frame Size: {cfg.FRAME_SIZE} bytes")
    print(f"  Sequence Numbers: 0 to {cfg.MAX_SEQ}")

    print(f"\nLoss Model:")
    print(f"  Loss Fraction: {cfg.LOSS_FRACTION * 100:.0f}%")
    print(f"  Default Seed: {cfg.RNG_SEED}")

    print(f"\nProtocols:")
    print(f"  Go-Back-N Window: {cfg.GBN_WINDOW_SIZE}")
    print(f"  Selective-Repeat Window: {cfg.SR_WINDOW_SIZE}")
    print(f"  Fast Retransmit Threshold: {cfg.FAST_RETRANSMIT_THRESHOLD}")


def generate_test_file(args):
    """Generate test data file."""
    from src.layers.application_layer import TestDataGenerator

    filepath = TestDataGenerator.create_test_file(
        filepath=args.output, size=args.size, seed=args.seed
    )
    print(f"Test file created: {filepath}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Go-Back-N / Selective-Repeat ARQ Trace Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Interactive run:
    python main.py --single

  Single run:
    python main.py --single --algorithm 1 --file data.bin

  Save the trace as CSV:
    python main.py --single -a 2 -f data.bin --csv trace.csv

  Compare algorithms:
    python main.py --compare --runs 10 --plot

  Plot a trace:
    python main.py --visualize -a 1 -f data.bin

  Create a 120 KB test file:
    python main.py --generate-test-file --size 120000
        """
    )

    # Mode selection
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--single', action='store_true',
                     help='Run single simulation')
    mode.add_argument('--compare', action='store_true',
                     help='Compare Go-Back-N and Selective-Repeat')
    mode.add_argument('--visualize', action='store_true',
                     help='Plot the trace of a single run')
    mode.add_argument('--config', action='store_true',
                     help='Show configuration')
    mode.add_argument('--generate-test-file', action='store_true',
                     help='Generate a random test file')

    # Single simulation options
    parser.add_argument('--algorithm', '-a', type=str, default=None,
                       help='1: Go-Back-N, 2: Selective-Repeat (prompted if omitted)')
    parser.add_argument('--file', '-f', type=str, default=None,
                       help='Input file (prompted if omitted)')
    parser.add_argument('--seed', '-s', type=int, default=RNG_SEED,
                       help=f'Random seed (default: {RNG_SEED})')

    # Comparison options
    parser.add_argument('--runs', '-r', type=int,
                       default=RUNS_PER_CONFIGURATION,
                       help=f'Loss patterns per file size (default: {RUNS_PER_CONFIGURATION})')
    parser.add_argument('--parallel', action='store_true',
                       help='Run comparisons in parallel')
    parser.add_argument('--workers', type=int, default=None,
                       help='Number of parallel workers')
    parser.add_argument('--plot', action='store_true',
                       help='Chart comparison results')

    # Test file options
    parser.add_argument('--size', type=int, default=120_000,
                       help='Test file size in bytes (default: 120000)')

    # Output options
    parser.add_argument('--output', '-o', type=str,
                       help='Output file path')
    parser.add_argument('--csv', type=str, nargs='?', const=TRACE_CSV,
                       help=f'Save the trace as CSV (default path: {TRACE_CSV})')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Verbose output')

    args = parser.parse_args(argv)

    try:
        if args.single:
            run_single_simulation(args)
        elif args.compare:
            run_comparison(args)
        elif args.visualize:
            generate_visualization(args)
        elif args.config:
            show_config(args)
        elif args.generate_test_file:
            generate_test_file(args)
    except ValueError as e:
        print(f"Error: {e}.")
        return 1
    except EOFError:
        print("Error: please enter 1 or 2 only.")
        return 1
    except OSError:
        print("Error: cannot open file.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
