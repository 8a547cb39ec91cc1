"""Benchmarking framework for propagation solvers."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..puzzles import PUZZLES
from ..solvers import BaseSolver, PropagationSolver


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_name: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    commits: int
    unsolved: int
    stalled: bool
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_name": self.puzzle_name,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "commits": self.commits,
            "unsolved": self.unsolved,
            "stalled": self.stalled,
            **self.extra
        }


class Benchmark:
    """
    Runs each solver over a set of named puzzles and collects their stats.

    Puzzles are run one after another on the calling thread.
    """

    def __init__(
        self,
        puzzles: Optional[Dict[str, str]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Dict of puzzle_name -> 81 character puzzle string
                (default: the built-in puzzle set).
            solvers: Dict of solver_name -> solver_instance (default: a
                propagation solver with and without the early stall exit).
        """
        self.puzzles = dict(PUZZLES if puzzles is None else puzzles)
        if solvers is None:
            self.solvers = {
                "Propagation": PropagationSolver(),
                "Propagation (full passes)": PropagationSolver(stop_on_stall=False),
            }
        else:
            self.solvers = solvers
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run every solver on every puzzle.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total_tests = len(self.puzzles) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for puzzle_name, puzzle in self.puzzles.items():
            board = SudokuBoard.from_string(puzzle)
            for solver_name, solver in self.solvers.items():
                self.results.append(self._run_single(board, puzzle_name, solver_name, solver))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        board: SudokuBoard,
        puzzle_name: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        _, stats = solver.solve(board)
        return BenchmarkResult(
            puzzle_name=puzzle_name,
            algorithm=solver_name,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            commits=stats.commits,
            unsolved=stats.unsolved,
            stalled=stats.stalled,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.puzzles),
            "solvers_tested": list(self.solvers.keys()),
            "results_by_algorithm": {},
        }

        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if not solver_results:
                continue
            solved = [r for r in solver_results if r.solved]
            stalled = [r for r in solver_results if r.stalled]
            failed = [r for r in solver_results if "error" in r.extra]
            times = [r.time_seconds for r in solver_results]
            passes = [r.iterations for r in solver_results]

            summary["results_by_algorithm"][solver_name] = {
                "accuracy": len(solved) / len(solver_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "avg_passes": sum(passes) / len(passes),
                "total_solved": len(solved),
                "total_stalled": len(stalled),
                "total_contradictions": len(failed),
                "total_tested": len(solver_results)
            }

        return summary
