"""
Rendering helpers for the game window.

Everything here consumes a GameSnapshot and never touches engine state.

Optimizations:
- Pre-render block cell Surfaces per color (solid + ghost outline) and blit them.
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all settled blocks; boards are immutable, so it is
  rebuilt only when the snapshot carries a different board object.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional

from tetris_config import COLS, ROWS
from tetris_game import GameSnapshot, Phase
from tetris_input import CONTROLS
from tetris_layout import Dims, TOAST_H
from tetris_piece import COLORS, Piece, cells
from tetris_toast import Toast

BG = (10,13,34)
GRID = (40,50,90)
PANEL = (21,25,53)
PANEL_EDGE = (50,60,100)
TEXT = (200,210,240)
TEXT_DIM = (165,175,215)

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_type: str = ""
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_ref = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, PANEL, panel_rect)
        pygame.draw.rect(self.bg, PANEL_EDGE, panel_rect, 1)
        pc = d.preview_cell
        frame = pygame.Rect(d.preview_x-6, d.preview_y-6, pc*4+12, pc*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        for col in COLORS.values():
            self._sprites_for(col)

    def _sprites_for(self, color: str) -> pygame.Surface:
        # board cells carry their own color, so sprites are keyed by color string
        if color not in self.cell_surf:
            c = self.dims.cell
            rgb = pygame.Color(color)
            s = pygame.Surface((c-2, c-2))
            s.fill(rgb)
            self.cell_surf[color] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, rgb, (0,0,c-8,c-8), 2)
            self.ghost_surf[color] = g
        return self.cell_surf[color]

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board):
        """Rebuilds the settled-blocks surface from board contents."""
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y in range(ROWS):
            for x in range(COLS):
                cell = board[y][x]
                if cell:
                    self.board_surface.blit(self._sprites_for(cell.color), (x*c + 1, y*c + 1))
        self._board_ref = board

    # ---------- Moving piece + ghost ----------
    def draw_piece(self, screen: pygame.Surface, piece: Piece, y: int, ghost: bool = False):
        self._sprites_for(piece.color)
        surf = self.ghost_surf[piece.color] if ghost else self.cell_surf[piece.color]
        inset = 4 if ghost else 1
        for c, r in cells(piece.shape):
            by = y + r
            if by < 0:
                continue
            rx, ry = self.dims.cell_origin(piece.x + c, by)
            screen.blit(surf, (rx + inset, ry + inset))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, snap: GameSnapshot):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
        if snap.score != self.hud.score:
            self.hud.score = snap.score
            self.hud.score_s = f.render(f"Score: {snap.score}", True, TEXT)
        if snap.level != self.hud.level:
            self.hud.level = snap.level
            self.hud.level_s = f.render(f"Level: {snap.level}", True, TEXT)
        if snap.lines != self.hud.lines:
            self.hud.lines = snap.lines
            self.hud.lines_s = f.render(f"Lines: {snap.lines}", True, TEXT)
        if snap.next.t != self.hud.next_type:
            self.hud.next_type = snap.next.t
            self.hud.next_s = self._render_preview(snap.next)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, d.panel_y + 126))
        screen.blit(self.hud.next_s, (d.preview_x, d.preview_y))
        if not self.hud.controls:
            self.hud.controls = [f.render("Controls:", True, TEXT)]
            self.hud.controls += [f.render(f"{key} {label}", True, TEXT_DIM) for key, label in CONTROLS]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    def _render_preview(self, piece: Piece) -> pygame.Surface:
        pc = self.dims.preview_cell
        s = pygame.Surface((pc*4, pc*4), pygame.SRCALPHA)
        shape = piece.shape
        offx = (4 - len(shape[0])) // 2
        offy = max(0, (4 - len(shape)) // 2)
        block = pygame.Surface((pc-2, pc-2))
        block.fill(pygame.Color(piece.color))
        for c, r in cells(shape):
            s.blit(block, ((c + offx) * pc + 1, (r + offy) * pc + 1))
        return s

    # ---------- Banners & toasts ----------
    def draw_banner(self, screen: pygame.Surface, text: str, sub: str = ""):
        d = self.dims
        shade = pygame.Surface((d.board_w, d.board_h), pygame.SRCALPHA)
        shade.fill((0,0,0,190))
        screen.blit(shade, (d.board_x, d.board_y))
        cx, cy = d.board_x + d.board_w // 2, d.board_y + d.board_h // 2
        msg = self.big_font.render(text, True, (255,220,220))
        screen.blit(msg, msg.get_rect(center=(cx, cy - 16)))
        if sub:
            s = self.font.render(sub, True, TEXT)
            screen.blit(s, s.get_rect(center=(cx, cy + 20)))

    def draw_toasts(self, screen: pygame.Surface, toasts: List[Toast]):
        d = self.dims
        y = d.toast_y
        for toast in reversed(toasts):
            box = pygame.Surface((d.toast_w, TOAST_H), pygame.SRCALPHA)
            box.fill((20,25,40,230))
            pygame.draw.rect(box, PANEL_EDGE, box.get_rect(), 1)
            box.blit(self.font.render(toast.title, True, (230,240,255)), (8, 4))
            if toast.message:
                box.blit(self.font.render(toast.message, True, TEXT_DIM), (8, 24))
            screen.blit(box, (d.toast_x, y))
            y -= TOAST_H + 4

    # ---------- Full frame ----------
    def draw(self, screen: pygame.Surface, snap: GameSnapshot, toasts: List[Toast]):
        screen.blit(self.bg, (0,0))
        if snap.board is not self._board_ref:
            self.rebuild_board_surface(snap.board)
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))
        if snap.phase is not Phase.NOT_STARTED:
            self.draw_piece(screen, snap.current, snap.ghost_y, ghost=True)
            self.draw_piece(screen, snap.current, snap.current.y)
        self.draw_panel_hud(screen, snap)
        if snap.phase is Phase.NOT_STARTED:
            self.draw_banner(screen, "TETRIS", "Press Enter to start")
        elif snap.phase is Phase.PAUSED:
            self.draw_banner(screen, "PAUSED", "P to resume")
        elif snap.phase is Phase.GAME_OVER:
            self.draw_banner(screen, "You Lose!", f"Score: {snap.score}  (R to restart)")
        self.draw_toasts(screen, toasts)
