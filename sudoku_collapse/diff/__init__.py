"""Diff/patch module: recorded mutations that can be replayed or reverted."""

from .diff import (
    CellDiffFragment,
    Diff,
    DiffBuilder,
    FragmentBuilder,
    Patchable,
    Scalar,
    ScalarDiffFragment,
)

__all__ = [
    "CellDiffFragment",
    "Diff",
    "DiffBuilder",
    "FragmentBuilder",
    "Patchable",
    "Scalar",
    "ScalarDiffFragment",
]
