"""Keyboard to game action mapping"""
from typing import Optional

import pygame

from tetris_game import Action

KEYMAP = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
    pygame.K_RETURN: Action.START,
    pygame.K_KP_ENTER: Action.START,
    pygame.K_r: Action.START,
}

CONTROLS = [
    ("←/→", "Move"),
    ("↓", "Soft drop"),
    ("↑", "Rotate"),
    ("Space", "Hard drop"),
    ("P", "Pause"),
    ("Enter/R", "Start"),
]


def action_for_event(e) -> Optional[Action]:
    if e.type != pygame.KEYDOWN:
        return None
    return KEYMAP.get(e.key)
