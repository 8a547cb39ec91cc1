"""Plain-text rendering of a board for the console."""

from __future__ import annotations
from typing import List

from .core.board import SudokuBoard
from .core.cell import Cell
from .core.position import BOX_SIZE, SIZE

SUPERSCRIPTS = {
    1: "¹",
    2: "²",
    3: "³",
    4: "⁴",
    5: "⁵",
    6: "⁶",
    7: "⁷",
    8: "⁸",
    9: "⁹",
}

TOP = "┏━━━━━━━┳━━━━━━━┳━━━━━━━┓"
MIDDLE = "┣━━━━━━━╋━━━━━━━╋━━━━━━━┫"
BOTTOM = "┗━━━━━━━┻━━━━━━━┻━━━━━━━┛"


def render_cell(cell: Cell) -> str:
    """A committed digit, or a superscript count of the remaining candidates."""
    if cell.value is not None:
        return str(cell.value)
    return SUPERSCRIPTS.get(len(cell.candidates), " ")


def render_row(board: SudokuBoard, row: int) -> str:
    parts = []
    for box in range(0, SIZE, BOX_SIZE):
        cells = [render_cell(board[row * SIZE + col]) for col in range(box, box + BOX_SIZE)]
        parts.append(" ".join(cells))
    return "┃ " + " ┃ ".join(parts) + " ┃"


def render_board(board: SudokuBoard) -> str:
    lines: List[str] = [TOP]
    for row in range(SIZE):
        if row and row % BOX_SIZE == 0:
            lines.append(MIDDLE)
        lines.append(render_row(board, row))
    lines.append(BOTTOM)
    return "\n".join(lines)
