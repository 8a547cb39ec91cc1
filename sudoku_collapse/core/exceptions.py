"""Exceptions raised by the board topology and elimination code."""

from __future__ import annotations
from typing import TYPE_CHECKING, FrozenSet, Iterable

if TYPE_CHECKING:
    from .position import Position


class SudokuError(Exception):
    """Base class for all errors raised by sudoku_collapse."""


class InvalidPosition(SudokuError, ValueError):
    """Raised when a board index falls outside 0..80."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"Position index must be an int in 0-80, got {index!r}")


class EliminationContradiction(SudokuError):
    """
    Raised when elimination leaves a cell with no possible value.

    Attributes:
        position: The cell that ran out of options.
        candidates: The cell's options before elimination.
        committed: The values already committed among its entangled cells.
    """

    def __init__(self, position: Position, candidates: Iterable[int], committed: Iterable[int]):
        self.position = position
        self.candidates: FrozenSet[int] = frozenset(candidates)
        self.committed: FrozenSet[int] = frozenset(committed)
        super().__init__(
            f"No options left at index {position.index} "
            f"(row {position.row}, col {position.col}): "
            f"candidates {sorted(self.candidates)} vs committed {sorted(self.committed)}"
        )
