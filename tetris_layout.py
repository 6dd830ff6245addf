# tetris_layout.py
from dataclasses import dataclass
from typing import Optional, Tuple

from tetris_config import CONFIG, COLS, ROWS

MARGIN = 16
PANEL_W = 220
PREVIEW_CELLS = 4
TOAST_H = 44

@dataclass(frozen=True)
class Dims:
    cell: int
    board_x: int
    board_y: int
    board_w: int
    board_h: int
    panel_x: int
    panel_y: int
    panel_w: int
    preview_x: int
    preview_y: int
    preview_cell: int
    toast_x: int
    toast_y: int
    toast_w: int
    total_w: int
    total_h: int

    def cell_origin(self, bx: int, by: int) -> Tuple[int, int]:
        """Top-left pixel of board cell (bx, by)."""
        return self.board_x + bx * self.cell, self.board_y + by * self.cell

def compute_dims(cell_size: Optional[int] = None) -> Dims:
    cell = int(CONFIG["CELL_SIZE"] if cell_size is None else cell_size)

    board_w, board_h = COLS * cell, ROWS * cell
    panel_x = MARGIN + board_w + MARGIN
    preview_cell = max(14, int(cell * 0.75))

    return Dims(
        cell=cell,
        board_x=MARGIN, board_y=MARGIN,
        board_w=board_w, board_h=board_h,
        panel_x=panel_x, panel_y=MARGIN, panel_w=PANEL_W,
        preview_x=panel_x + 12, preview_y=MARGIN + 150,
        preview_cell=preview_cell,
        # toasts stack upward from the bottom of the board
        toast_x=MARGIN + 8, toast_y=MARGIN + board_h - TOAST_H - 8,
        toast_w=board_w - 16,
        total_w=panel_x + PANEL_W + MARGIN,
        total_h=MARGIN + board_h + MARGIN,
    )
