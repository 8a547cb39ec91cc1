"""Validation utilities for 9x9 grids."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING, Iterator, Union

from .position import BOX_SIZE, SIZE

if TYPE_CHECKING:
    from .board import SudokuBoard

GridLike = Union[np.ndarray, "SudokuBoard"]


def _as_grid(grid: GridLike) -> np.ndarray:
    if hasattr(grid, "to_array"):
        grid = grid.to_array()
    arr = np.asarray(grid)
    if arr.shape != (SIZE, SIZE):
        raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {arr.shape}")
    return arr


def iter_units(grid: np.ndarray) -> Iterator[np.ndarray]:
    """Yield every row, column and box of the grid as a flat array."""
    for i in range(SIZE):
        yield grid[i, :]
        yield grid[:, i]
    for box_row in range(0, SIZE, BOX_SIZE):
        for box_col in range(0, SIZE, BOX_SIZE):
            yield grid[box_row:box_row + BOX_SIZE, box_col:box_col + BOX_SIZE].flatten()


def is_valid_grid(grid: GridLike) -> bool:
    """
    Check that no row, column or box repeats a non-zero digit.

    Blank cells (0) are ignored, so a partially filled grid can be valid.
    """
    arr = _as_grid(grid)
    if np.any((arr < 0) | (arr > SIZE)):
        return False
    for unit in iter_units(arr):
        non_zero = unit[unit != 0]
        if len(non_zero) != len(np.unique(non_zero)):
            return False
    return True


def is_complete_solution(grid: GridLike) -> bool:
    """Check that every row, column and box holds each of 1-9 exactly once."""
    arr = _as_grid(grid)
    expected = np.arange(1, SIZE + 1)
    return all(np.array_equal(np.sort(unit), expected) for unit in iter_units(arr))


def validate_solution(puzzle: GridLike, solution: GridLike) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle (0 for blanks).
        solution: The proposed solution.

    Returns:
        True if the solution is complete, valid and keeps every clue.
    """
    clues = _as_grid(puzzle)
    answer = _as_grid(solution)
    mask = clues != 0
    if not np.array_equal(clues[mask], answer[mask]):
        return False
    return is_complete_solution(answer)
