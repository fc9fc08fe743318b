#!/usr/bin/env python3
"""
Main script to compute graceful colorings.

Usage:
    # Run on a single edge-list file (15 minute limit, SCIP backend)
    uv run python run_experiments.py input/petersen.txt
    uv run python run_experiments.py --graph input/petersen.txt

    # Run on every .txt file of a directory
    uv run python run_experiments.py --directory input

    # Run with custom time limit in seconds
    uv run python run_experiments.py --graph input/petersen.txt --time-limit 60

    # Print heuristic rounds and model sizes
    uv run python run_experiments.py --graph input/petersen.txt --verbose

    # The MIP uses SCIP by default, other backends can be selected with --backend.
"""

import argparse
import logging
import sys
from pathlib import Path

from graceful import ExperimentRunner, GracefulColoringError, ILPSolver


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compute the graceful chromatic number of graphs")

    # Input selection
    parser.add_argument("graph_path", type=Path, nargs="?", metavar="GRAPH", help="Edge-list file, same as --graph")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--graph", type=Path, help="Path to a single edge-list file")
    group.add_argument("--directory", type=Path, help="Directory of edge-list files to run")
    parser.add_argument("--pattern", type=str, default="*.txt", help="Glob pattern in --directory (default: *.txt)")

    # MIP parameters
    parser.add_argument(
        "--backend",
        type=str,
        default="SCIP",
        choices=["SCIP", "CBC"],
        help="MIP solver backend (default: SCIP)",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=900.0,
        help="Time limit per graph in seconds (default: 900)",
    )

    # Output
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory for output files (default: output)",
    )
    parser.add_argument("--summary-file", type=str, help="Also write all results of a --directory run to this CSV")
    parser.add_argument("--verbose", action="store_true", help="Print detailed solver output")

    args = parser.parse_args(argv)
    if args.graph_path is not None:
        if args.graph or args.directory:
            parser.error("GRAPH cannot be combined with --graph or --directory")
        args.graph = args.graph_path
    elif not (args.graph or args.directory):
        parser.error("an edge-list file (GRAPH or --graph) or --directory is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    solver = ILPSolver(time_limit_seconds=args.time_limit, solver_name=args.backend)
    runner = ExperimentRunner(solver, output_dir=args.output_dir)

    if args.graph:
        if not args.graph.is_file():
            print(f"Error: file not found -> {args.graph}", file=sys.stderr)
            return 1

        try:
            report, csv_path = runner.run_file(args.graph)
        except GracefulColoringError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if args.verbose:
            print(f"greedy coloring: {report.greedy_coloring}")
            print(f"span = {report.span} ({report.status.value})")
            for v, color in sorted(report.vertex_colors.items()):
                print(f"label({v}) = {color}")

        print(f"Results saved in: {csv_path}")
        return 0

    if not args.directory.is_dir():
        print(f"Error: directory not found -> {args.directory}", file=sys.stderr)
        return 1

    runner.run_directory(args.directory, pattern=args.pattern)
    runner.print_table()
    runner.print_summary()

    if args.summary_file:
        print(f"\nResults saved to: {runner.save_results_csv(args.summary_file)}")

    for filepath, message in runner.failures:
        print(f"Error: {filepath}: {message}", file=sys.stderr)
    return 1 if runner.failures else 0


if __name__ == "__main__":
    sys.exit(main())
