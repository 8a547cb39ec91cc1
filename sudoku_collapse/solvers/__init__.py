"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .propagation_solver import PropagationSolver, DEFAULT_MAX_PASSES

__all__ = [
    "BaseSolver",
    "SolverStats",
    "PropagationSolver",
    "DEFAULT_MAX_PASSES",
]
