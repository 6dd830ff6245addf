"""Piece catalog, piece model, rotation"""
import re
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from tetris_config import COLS

Shape = Tuple[Tuple[int, ...], ...]

TYPES = ("I", "J", "L", "O", "S", "T", "Z")

SHAPES: Dict[str, Shape] = {
    "I": ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    "J": ((1,0,0),(1,1,1),(0,0,0)),
    "L": ((0,0,1),(1,1,1),(0,0,0)),
    "O": ((1,1),(1,1)),
    "S": ((0,1,1),(1,1,0),(0,0,0)),
    "T": ((0,1,0),(1,1,1),(0,0,0)),
    "Z": ((1,1,0),(0,1,1),(0,0,0)),
}

COLORS: Dict[str, str] = {
    "I": "#06b6d4",
    "J": "#3b82f6",
    "L": "#f97316",
    "O": "#eab308",
    "S": "#22c55e",
    "T": "#a855f7",
    "Z": "#ef4444",
}

SPAWN_X = COLS // 2 - 1
SPAWN_Y = 0

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def validate_catalog(shapes: Dict[str, Shape], colors: Dict[str, str]) -> None:
    """Raise ValueError if any catalog entry is malformed."""
    if set(shapes) != set(colors):
        raise ValueError(f"shape and color tables disagree: {sorted(shapes)} vs {sorted(colors)}")
    for t, shape in shapes.items():
        if not shape or not shape[0]:
            raise ValueError(f"{t}: empty shape")
        w = len(shape[0])
        if any(len(row) != w for row in shape):
            raise ValueError(f"{t}: shape rows must all have width {w}")
        if any(v not in (0, 1) for row in shape for v in row):
            raise ValueError(f"{t}: shape cells must be 0 or 1")
        if sum(v for row in shape for v in row) != 4:
            raise ValueError(f"{t}: a tetromino has exactly 4 cells")
        if not _HEX_COLOR.match(colors[t]):
            raise ValueError(f"{t}: color {colors[t]!r} is not #rrggbb")


validate_catalog(SHAPES, COLORS)


def rotate_cw(m: Shape) -> Shape:
    """Transpose, then reverse each row."""
    return tuple(tuple(reversed(col)) for col in zip(*m))


def cells(shape: Shape):
    """Yield (col, row) offsets of occupied cells."""
    for r, row in enumerate(shape):
        for c, v in enumerate(row):
            if v:
                yield c, r


@dataclass(frozen=True)
class Piece:
    t: str
    shape: Shape
    color: str
    x: int
    y: int

    @staticmethod
    def spawn(t: str) -> "Piece":
        if t not in SHAPES:
            raise ValueError(f"unknown piece type {t!r}")
        return Piece(t, SHAPES[t], COLORS[t], SPAWN_X, SPAWN_Y)

    def moved(self, dx: int = 0, dy: int = 0) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def at(self, y: int) -> "Piece":
        return replace(self, y=y)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))


def random_piece(randomizer) -> Piece:
    return Piece.spawn(randomizer.next_type())

# rotation

def try_rotate(board, piece: Piece) -> Optional[Piece]:
    """Return the piece rotated clockwise, or None when blocked; no kicks."""
    from tetris_board import collide
    test = piece.rotated()
    if collide(board, test): return None
    return test
