"""9x9 board of cells with candidate elimination and commit propagation."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..diff import CellDiffFragment, Diff, FragmentBuilder
from .cell import Cell
from .exceptions import EliminationContradiction
from .position import CELL_COUNT, SIZE, Position
from .validator import is_complete_solution

logger = logging.getLogger(__name__)

PositionLike = Union[Position, int]
Change = Tuple[Position, Diff[CellDiffFragment]]


@dataclass(frozen=True)
class Step:
    """All cell diffs produced by a single collapse, in the order applied."""

    position: Position
    changes: Tuple[Change, ...]

    @property
    def committed(self) -> Optional[int]:
        """The value committed at ``position`` by this step, if any."""
        for position, diff in self.changes:
            if position != self.position:
                continue
            for fragment in diff:
                if fragment.value is not None:
                    return fragment.value[1]
        return None


class SudokuBoard:
    """
    Owns the 81 cells of a puzzle and every change made to them.

    Cells are only mutated through ``collapse``, ``undo`` and ``redo``. Each
    state-changing collapse is recorded as a Step of cell diffs, so any
    number of steps can be unwound exactly.
    """

    __hash__ = None

    def __init__(self, cells: Sequence[Cell]):
        """
        Args:
            cells: 81 cells, the i-th one at position i.
        """
        if len(cells) != CELL_COUNT:
            raise ValueError(f"Board needs {CELL_COUNT} cells, got {len(cells)}")
        for i, cell in enumerate(cells):
            if cell.position.index != i:
                raise ValueError(f"Cell at slot {i} has position {cell.position.index}")
        self._cells: List[Cell] = list(cells)
        self._history: List[Step] = []
        self._undone: List[Step] = []

    @classmethod
    def from_digits(cls, digits: Sequence[int], givens: Optional[Sequence[bool]] = None) -> SudokuBoard:
        """
        Create a board from 81 digits in row-major order.

        Args:
            digits: 1-9 for a filled cell, 0 for a blank one.
            givens: Optional per-position flag marking puzzle clues. Defaults
                to every non-zero digit.
        """
        if len(digits) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} digits, got {len(digits)}")
        if givens is not None and len(givens) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} given flags, got {len(givens)}")
        cells = []
        for i, digit in enumerate(digits):
            is_given = None if givens is None else givens[i]
            cells.append(Cell(Position(i), int(digit), is_given))
        return cls(cells)

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81 character string.

        '0' or '.' marks a blank cell, '1'-'9' a given.
        """
        if len(s) != CELL_COUNT:
            raise ValueError(f"String length must be {CELL_COUNT}, got {len(s)}")
        digits = []
        for c in s:
            if c == '.':
                digits.append(0)
            elif c in "0123456789":
                digits.append(int(c))
            else:
                raise ValueError(f"Invalid character in puzzle string: {c!r}")
        return cls.from_digits(digits)

    def copy(self) -> SudokuBoard:
        """Copy of the current cell states, without undo history."""
        return SudokuBoard([cell.copy() for cell in self._cells])

    # Queries

    def cell(self, position: PositionLike) -> Cell:
        return self._cells[_as_position(position).index]

    def __getitem__(self, position: PositionLike) -> Cell:
        return self.cell(position)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def neighbors(self, position: PositionLike) -> List[Cell]:
        """Cells entangled with ``position``, in ascending index order."""
        return [self._cells[p.index] for p in _as_position(position).entangled()]

    def committed_values(self, position: PositionLike) -> FrozenSet[int]:
        """Values already fixed in the row, column and box of ``position``."""
        return frozenset(c.value for c in self.neighbors(position) if c.value is not None)

    def unsolved_positions(self) -> List[Position]:
        return [c.position for c in self._cells if c.value is None]

    def count_unsolved(self) -> int:
        return sum(1 for c in self._cells if c.value is None)

    def is_complete(self) -> bool:
        return self.count_unsolved() == 0

    def is_solved(self) -> bool:
        """Check that every cell has a value and every unit holds 1-9 once."""
        return self.is_complete() and is_complete_solution(self.to_array())

    def to_array(self) -> np.ndarray:
        """Committed values as a 9x9 array, 0 where unsolved."""
        values = [c.value or 0 for c in self._cells]
        return np.array(values, dtype=np.int32).reshape(SIZE, SIZE)

    def to_string(self) -> str:
        return ''.join(str(c.value or 0) for c in self._cells)

    # Elimination

    def check_givens(self) -> None:
        """
        Raise EliminationContradiction if two entangled cells hold the same value.

        Elimination only ever looks at unsolved cells, so a clash between
        clues has to be caught up front.
        """
        for cell in self._cells:
            if cell.value is None:
                continue
            for other in self.neighbors(cell.position):
                if other.position > cell.position and other.value == cell.value:
                    logger.warning(
                        "Value %d appears at both %d and %d",
                        cell.value, cell.position.index, other.position.index,
                    )
                    raise EliminationContradiction(
                        cell.position, {cell.value}, self.committed_values(cell.position)
                    )

    def collapse(self, position: PositionLike) -> Optional[Step]:
        """
        Narrow the candidates at ``position`` against its committed neighbours.

        A single remaining candidate is committed and removed from every
        entangled cell's candidates. Cells that already have a value are left
        alone.

        Returns:
            The recorded Step, or None if nothing changed.

        Raises:
            EliminationContradiction: if no candidate remains, or if the
                commit would leave an entangled cell with none.
        """
        position = _as_position(position)
        cell = self._cells[position.index]
        if cell.value is not None:
            return None

        candidates = cell.candidates
        committed = self.committed_values(position)
        remaining = candidates - committed

        if not remaining:
            logger.warning("Contradiction at %d: %s all taken by %s",
                           position.index, sorted(candidates), sorted(committed))
            raise EliminationContradiction(position, candidates, committed)

        if len(remaining) == 1:
            value = next(iter(remaining))
            for neighbor in self.neighbors(position):
                if neighbor.value is None and neighbor.candidates == {value}:
                    conflict = self.committed_values(neighbor.position) | {value}
                    logger.warning("Committing %d at %d leaves %d with no options",
                                   value, position.index, neighbor.position.index)
                    raise EliminationContradiction(neighbor.position, neighbor.candidates, conflict)
            changes = [self._change(
                cell, FragmentBuilder().value(None, value).options(removed=candidates).finalize()
            )]
            for neighbor in self.neighbors(position):
                if value in neighbor.candidates:
                    changes.append(self._change(
                        neighbor, FragmentBuilder().options(removed={value}).finalize()
                    ))
            logger.debug("Committed %d at %d, propagated to %d cells",
                         value, position.index, len(changes) - 1)
        elif remaining != candidates:
            changes = [self._change(
                cell, FragmentBuilder().options(removed=candidates - remaining).finalize()
            )]
        else:
            return None

        step = Step(position, tuple(changes))
        self._history.append(step)
        self._undone.clear()
        return step

    def _change(self, cell: Cell, fragment: CellDiffFragment) -> Change:
        diff = Diff.builder().add_fragment(lambda: fragment).finalize()
        cell.apply_diff(diff)
        return cell.position, diff

    # History

    @property
    def history(self) -> Tuple[Step, ...]:
        return tuple(self._history)

    def undo(self) -> Optional[Step]:
        """Revert the most recent step. Returns it, or None if there is none."""
        if not self._history:
            return None
        step = self._history.pop()
        for position, diff in reversed(step.changes):
            self._cells[position.index].revert_diff(diff)
        self._undone.append(step)
        return step

    def redo(self) -> Optional[Step]:
        """Re-apply the most recently undone step."""
        if not self._undone:
            return None
        step = self._undone.pop()
        for position, diff in step.changes:
            self._cells[position.index].apply_diff(diff)
        self._history.append(step)
        return step

    def __repr__(self) -> str:
        return f"SudokuBoard(unsolved={self.count_unsolved()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return self._cells == other._cells


def _as_position(position: PositionLike) -> Position:
    if isinstance(position, Position):
        return position
    return Position(position)
