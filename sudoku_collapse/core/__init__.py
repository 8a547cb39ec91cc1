"""Core module: board topology, cells and elimination."""

from .board import SudokuBoard, Step
from .cell import Cell, DIGITS
from .exceptions import SudokuError, InvalidPosition, EliminationContradiction
from .position import Position
from .validator import is_valid_grid, is_complete_solution, validate_solution

__all__ = [
    "SudokuBoard",
    "Step",
    "Cell",
    "DIGITS",
    "Position",
    "SudokuError",
    "InvalidPosition",
    "EliminationContradiction",
    "is_valid_grid",
    "is_complete_solution",
    "validate_solution",
]
