"""A single grid cell: either a committed value or a set of candidates."""

from __future__ import annotations
from typing import FrozenSet, Optional, Tuple

from ..diff import CellDiffFragment, Patchable
from .position import Position, SIZE

DIGITS: FrozenSet[int] = frozenset(range(1, SIZE + 1))


class Cell(Patchable[CellDiffFragment]):
    """
    State of one position on the board.

    A cell holds either a committed ``value`` with no candidates, or no value
    and the set of digits still possible there. Cells are owned by a Board;
    their state only changes through diffs applied by the board.
    """

    __hash__ = None

    def __init__(self, position: Position, digit: int = 0, is_given: Optional[bool] = None):
        """
        Args:
            position: Where the cell sits on the grid.
            digit: 1-9 for a filled cell, 0 for a blank one.
            is_given: Whether the digit was part of the puzzle. Defaults to
                ``digit != 0``. Only used for display.
        """
        if digit < 0 or digit > SIZE:
            raise ValueError(f"Digit must be 0-{SIZE}, got {digit}")
        self._position = position
        self._is_given = bool(digit != 0 if is_given is None else is_given)
        self._value: Optional[int] = digit or None
        self._candidates = set() if digit else set(DIGITS)

    @property
    def position(self) -> Position:
        return self._position

    @property
    def is_given(self) -> bool:
        return self._is_given

    @property
    def value(self) -> Optional[int]:
        return self._value

    @property
    def candidates(self) -> FrozenSet[int]:
        return frozenset(self._candidates)

    @property
    def is_solved(self) -> bool:
        return self._value is not None

    def state(self) -> Tuple[Optional[int], FrozenSet[int]]:
        """The mutable part of the cell, for comparisons and snapshots."""
        return self._value, frozenset(self._candidates)

    def apply_fragment(self, fragment: CellDiffFragment) -> None:
        if fragment.value is not None:
            self._value = fragment.value[1]
        self._candidates -= fragment.removed
        self._candidates |= fragment.added

    def revert_fragment(self, fragment: CellDiffFragment) -> None:
        if fragment.value is not None:
            self._value = fragment.value[0]
        self._candidates |= fragment.removed
        self._candidates -= fragment.added

    def copy(self) -> Cell:
        clone = Cell(self._position, self._value or 0, self._is_given)
        clone._candidates = set(self._candidates)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self._position == other._position
            and self._is_given == other._is_given
            and self.state() == other.state()
        )

    def __repr__(self) -> str:
        if self._value is not None:
            return f"Cell({self._position.index}, value={self._value}, given={self._is_given})"
        return f"Cell({self._position.index}, candidates={sorted(self._candidates)})"
