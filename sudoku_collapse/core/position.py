"""Board topology: validated positions and their constraint neighbours."""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from .exceptions import InvalidPosition

SIZE = 9
BOX_SIZE = 3
CELL_COUNT = SIZE * SIZE


@dataclass(frozen=True, order=True)
class Position:
    """
    One of the 81 cells of a 9x9 grid, numbered row-major from 0 to 80.

    Positions compare, sort and hash by index, so they can be used as
    dictionary keys and deduplicated in sets.
    """

    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise InvalidPosition(self.index)
        if self.index < 0 or self.index >= CELL_COUNT:
            raise InvalidPosition(self.index)

    @classmethod
    def from_row_col(cls, row: int, col: int) -> Position:
        """Build a position from 0-based row and column numbers."""
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise InvalidPosition(row * SIZE + col)
        return cls(row * SIZE + col)

    @classmethod
    def all(cls) -> List[Position]:
        """All 81 positions in ascending index order."""
        return [cls(i) for i in range(CELL_COUNT)]

    def __int__(self) -> int:
        return self.index

    def __index__(self) -> int:
        return self.index

    def __repr__(self) -> str:
        return f"Position({self.index})"

    @property
    def row(self) -> int:
        return self.index // SIZE

    @property
    def col(self) -> int:
        return self.index % SIZE

    @property
    def box_id(self) -> int:
        """Box number 0-8, left to right then top to bottom."""
        return (self.row // BOX_SIZE) * BOX_SIZE + self.col // BOX_SIZE

    # Adjacent cells; None at the grid edge (no wraparound)

    def above(self) -> Optional[Position]:
        if self.row == 0:
            return None
        return Position(self.index - SIZE)

    def below(self) -> Optional[Position]:
        if self.row == SIZE - 1:
            return None
        return Position(self.index + SIZE)

    def left(self) -> Optional[Position]:
        if self.col == 0:
            return None
        return Position(self.index - 1)

    def right(self) -> Optional[Position]:
        if self.col == SIZE - 1:
            return None
        return Position(self.index + 1)

    # Constraint neighbours, each sorted by index and excluding self

    def row_mates(self) -> List[Position]:
        return [Position(i) for i in _row_mates(self.index)]

    def col_mates(self) -> List[Position]:
        return [Position(i) for i in _col_mates(self.index)]

    def box_mates(self) -> List[Position]:
        return [Position(i) for i in _box_mates(self.index)]

    def entangled(self) -> List[Position]:
        """
        Every position sharing a row, column or box with this one.

        Always 20 positions: 8 row-mates, 8 column-mates and the 4 box-mates
        that are in neither.
        """
        return [Position(i) for i in _entangled(self.index)]


@lru_cache(maxsize=None)
def _row_mates(index: int) -> Tuple[int, ...]:
    start = (index // SIZE) * SIZE
    return tuple(i for i in range(start, start + SIZE) if i != index)


@lru_cache(maxsize=None)
def _col_mates(index: int) -> Tuple[int, ...]:
    return tuple(i for i in range(index % SIZE, CELL_COUNT, SIZE) if i != index)


@lru_cache(maxsize=None)
def _box_mates(index: int) -> Tuple[int, ...]:
    row, col = divmod(index, SIZE)
    box_id = (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE
    row_start = box_id // BOX_SIZE * BOX_SIZE
    col_start = box_id % BOX_SIZE * BOX_SIZE
    indexes = []
    for r in range(row_start, row_start + BOX_SIZE):
        run_start = r * SIZE + col_start
        indexes.extend(range(run_start, run_start + BOX_SIZE))
    return tuple(i for i in indexes if i != index)


@lru_cache(maxsize=None)
def _entangled(index: int) -> Tuple[int, ...]:
    return tuple(sorted(set(_row_mates(index)) | set(_col_mates(index)) | set(_box_mates(index))))
