"""Command-line interface for the propagation solver."""

import argparse
import logging
import sys

from .benchmark import Benchmark
from .core.board import SudokuBoard
from .puzzles import EASY_PUZZLE
from .render import render_board
from .solvers import PropagationSolver, DEFAULT_MAX_PASSES


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku solver by constraint propagation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve the built-in easy puzzle
  python -m sudoku_collapse.cli solve

  # Solve a puzzle of your own, logging every pass
  python -m sudoku_collapse.cli solve --puzzle "0406020310..." --verbose

  # Run the solvers over the built-in puzzle set
  python -m sudoku_collapse.cli benchmark
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log every pass and commit"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, default=EASY_PUZZLE,
        help="Puzzle string (81 chars, 0 or . for empty cells; default: built-in easy puzzle)"
    )
    solve_parser.add_argument(
        "--max-passes", "-m", type=int, default=DEFAULT_MAX_PASSES,
        help=f"Maximum number of elimination passes (default: {DEFAULT_MAX_PASSES})"
    )
    solve_parser.add_argument(
        "--no-early-exit", action="store_true",
        help="Keep running passes after one that changes nothing"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solvers over the built-in puzzles")
    bench_parser.add_argument(
        "--max-passes", "-m", type=int, default=DEFAULT_MAX_PASSES,
        help=f"Maximum number of elimination passes (default: {DEFAULT_MAX_PASSES})"
    )
    bench_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def cmd_solve(args):
    """Handle the solve command."""
    try:
        board = SudokuBoard.from_string(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Starting:")
    print(render_board(board))
    print()

    solver = PropagationSolver(max_passes=args.max_passes, stop_on_stall=not args.no_early_exit)
    solution, stats = solver.solve(board)

    if solution is None:
        print(f"✗ Contradiction: {stats.extra['error']}")
        sys.exit(2)

    if stats.solved:
        print(f"✓ Solved in {stats.iterations} passes ({stats.time_seconds:.4f}s)")
    else:
        print(f"✗ Stalled after {stats.iterations} passes with {stats.unsolved} cells unsolved")
    print(render_board(solution))


def cmd_benchmark(args):
    """Handle the benchmark command."""
    solvers = {
        "Propagation": PropagationSolver(max_passes=args.max_passes),
        "Propagation (full passes)": PropagationSolver(max_passes=args.max_passes, stop_on_stall=False),
    }
    benchmark = Benchmark(solvers=solvers)

    print("=" * 60)
    print("PROPAGATION SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {', '.join(benchmark.puzzles.keys())}")
    print(f"Algorithms: {', '.join(benchmark.solvers.keys())}")
    print("=" * 60)

    results = benchmark.run(show_progress=not args.no_progress)

    print("\nBy Puzzle:")
    print("-" * 50)
    for r in results:
        status = "solved" if r.solved else ("contradiction" if "error" in r.extra else "stalled")
        print(f"  {r.puzzle_name:<10} {r.algorithm:<28} {status:<14} passes={r.iterations}")

    summary = benchmark.get_summary()
    print("\nBy Algorithm:")
    print("-" * 50)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Passes: {stats['avg_passes']:.1f}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")


if __name__ == "__main__":
    main()
