"""Pure forward-propagation solver (naked singles, no search)."""

from __future__ import annotations
import logging

from .base_solver import BaseSolver
from ..core.board import SudokuBoard

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10


class PropagationSolver(BaseSolver):
    """
    Solves by repeated candidate elimination.

    Each pass visits every unsolved position in ascending order and collapses
    it against the values already committed around it. Commits are
    propagated to entangled cells straight away, so later positions in the
    same pass already see them.

    There is no guessing: a puzzle that needs search stalls with some cells
    unsolved. That is a normal outcome, reported through ``stats.stalled``.
    """

    name = "Propagation"

    def __init__(self, max_passes: int = DEFAULT_MAX_PASSES, stop_on_stall: bool = True):
        """
        Initialize the propagation solver.

        Args:
            max_passes: Upper bound on the number of passes over the board.
            stop_on_stall: If True, stop as soon as a full pass changes
                nothing instead of running out the remaining passes.
        """
        super().__init__()
        if max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {max_passes}")
        self.max_passes = max_passes
        self.stop_on_stall = stop_on_stall

    def _solve(self, board: SudokuBoard) -> SudokuBoard:
        self.propagate(board)
        return board

    def propagate(self, board: SudokuBoard) -> int:
        """
        Run elimination passes on ``board`` in place.

        Returns:
            The number of passes run.

        Raises:
            EliminationContradiction: if the clues clash or a cell runs out
                of candidates.
        """
        board.check_givens()

        passes = 0
        while passes < self.max_passes:
            unsolved = board.unsolved_positions()
            if not unsolved:
                break

            passes += 1
            changed = 0
            for position in unsolved:
                self.stats.nodes_explored += 1
                step = board.collapse(position)
                if step is None:
                    continue
                changed += 1
                if step.committed is not None:
                    self.stats.commits += 1

            logger.debug("Pass %d: %d of %d unsolved cells changed, %d left",
                         passes, changed, len(unsolved), board.count_unsolved())
            if changed == 0 and self.stop_on_stall:
                break

        self.stats.iterations = passes
        self.stats.unsolved = board.count_unsolved()
        self.stats.stalled = self.stats.unsolved > 0
        if self.stats.stalled:
            logger.debug("Stalled after %d passes with %d cells unsolved",
                         passes, self.stats.unsolved)
        return passes
