"""Sudoku solving by constraint propagation over an entangled board."""

from .core import SudokuBoard, Position, Cell, InvalidPosition, EliminationContradiction
from .solvers import PropagationSolver

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "Position",
    "Cell",
    "InvalidPosition",
    "EliminationContradiction",
    "PropagationSolver",
]
