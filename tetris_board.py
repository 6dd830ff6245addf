"""Board helpers: collide, merge, sweep, ghost"""
from dataclasses import dataclass
from typing import Optional, Tuple

from tetris_config import COLS, ROWS
from tetris_piece import Piece, cells


@dataclass(frozen=True)
class Cell:
    color: str
    filled: bool = True


Row = Tuple[Optional[Cell], ...]
Board = Tuple[Row, ...]

EMPTY_ROW: Row = (None,) * COLS


def empty_board() -> Board:
    return (EMPTY_ROW,) * ROWS


def collide(board: Board, piece: Piece, x: Optional[int] = None, y: Optional[int] = None) -> bool:
    """Return True if piece at (x, y) hits a wall, the floor, or a settled cell.

    Cells above the top (by < 0) only collide with the side walls.
    """
    px = piece.x if x is None else x
    py = piece.y if y is None else y
    for c, r in cells(piece.shape):
        bx, by = px + c, py + r
        if bx < 0 or bx >= COLS or by >= ROWS:
            return True
        if by >= 0 and board[by][bx]:
            return True
    return False


def merge(board: Board, piece: Piece) -> Tuple[Board, bool]:
    """Stamp the piece into a copy of the board.

    Returns (new_board, overflow). On overflow (some cell above the top) the
    original board is returned untouched.
    """
    rows = [list(row) for row in board]
    for c, r in cells(piece.shape):
        by = piece.y + r
        if by < 0:
            return board, True
        rows[by][piece.x + c] = Cell(piece.color)
    return tuple(tuple(row) for row in rows), False


def is_full(row: Row) -> bool:
    return all(cell for cell in row)


def sweep(board: Board) -> Tuple[Board, int]:
    """Clear full lines bottom-up and return (new_board, cleared)."""
    rows = list(board)
    cleared = 0
    y = ROWS - 1
    while y >= 0:
        if is_full(rows[y]):
            del rows[y]
            rows.insert(0, EMPTY_ROW)
            cleared += 1
        else:
            y -= 1
    return tuple(rows), cleared


def drop_y(board: Board, piece: Piece) -> int:
    """Lowest y the piece can reach by falling straight down."""
    y = piece.y
    while not collide(board, piece, y=y + 1):
        y += 1
    return y


def ghost_y(board: Board, piece: Piece) -> int:
    """Return the y position where the piece would land if hard-dropped."""
    return drop_y(board, piece)
