"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..core.exceptions import EliminationContradiction

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    nodes_explored: int = 0
    commits: int = 0
    unsolved: int = 0
    stalled: bool = False

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "nodes_explored": self.nodes_explored,
            "commits": self.commits,
            "unsolved": self.unsolved,
            "stalled": self.stalled,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a Sudoku puzzle with timing and memory tracking.

        The input board is left untouched; the solver works on a copy.

        Args:
            board: The puzzle to solve.

        Returns:
            Tuple of (final board or None on contradiction, stats). A board
            that stalled before being solved is still returned.
        """
        self.stats = SolverStats(algorithm=self.name)

        # Start memory tracking
        tracemalloc.start()

        # Start timing
        start_time = time.perf_counter()

        try:
            result = self._solve(board.copy())
            self.stats.solved = result.is_solved()
            self.stats.unsolved = result.count_unsolved()
        except EliminationContradiction as e:
            logger.warning("%s aborted: %s", self.name, e)
            self.stats.extra["error"] = str(e)
            self.stats.extra["contradiction"] = {
                "position": e.position.index,
                "candidates": sorted(e.candidates),
                "committed": sorted(e.committed),
            }
            result = None
        finally:
            # End timing
            self.stats.time_seconds = time.perf_counter() - start_time

            # Get memory usage
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        return result, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> SudokuBoard:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).

        Returns:
            The board in its final state, solved or not.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
