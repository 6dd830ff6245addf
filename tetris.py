"""
Tetris: pygame front end
========================

Entry point. Wires the pure game engine (tetris_game) to a pygame window:

  • DROP_EVENT from the drop timer  -> Game.tick()
  • KEYDOWN via tetris_input         -> Game.dispatch(action)
  • Game notifications               -> ToastQueue, drawn by tetris_render

Everything runs on the pygame event loop, so one event is fully applied before
the next one is read.

-------------------------------------------------------------
CONTROLS
-------------------------------------------------------------

  • Left/Right   : Move
  • Down         : Soft drop (locks when blocked)
  • Up           : Rotate clockwise (no wall kicks)
  • Space        : Hard drop (locks on the next tick)
  • P            : Pause / resume
  • Enter / R    : Start / restart
"""
import argparse
import sys

import pygame

from tetris_config import CONFIG
from tetris_game import Game
from tetris_input import action_for_event
from tetris_layout import compute_dims
from tetris_logging import setup_logger
from tetris_render import RenderAssets
from tetris_rng import UniformRandom
from tetris_timer import DROP_EVENT, PygameDropTimer
from tetris_toast import ToastQueue


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="tetris", description="Falling-block puzzle game (pygame)")
    p.add_argument("--seed", type=int, default=CONFIG["SEED"], help="seed for the piece randomizer")
    p.add_argument("--cell-size", type=int, default=CONFIG["CELL_SIZE"], help="board cell size in pixels")
    p.add_argument("--log-level", default=CONFIG["LOG_LEVEL"], help="debug, info, warning, ...")
    p.add_argument("--no-rich", action="store_true", help="plain log output instead of rich")
    return p.parse_args(argv)


def apply_args(args):
    CONFIG["SEED"] = args.seed
    CONFIG["CELL_SIZE"] = args.cell_size
    CONFIG["LOG_LEVEL"] = args.log_level
    CONFIG["USE_RICH"] = not args.no_rich


def handle_event(game, e) -> bool:
    """Route one pygame event into the game. Returns False on quit."""
    if e.type == pygame.QUIT:
        return False
    if e.type == DROP_EVENT:
        game.tick()
        return True
    action = action_for_event(e)
    if action is not None:
        game.dispatch(action)
    return True


def main(argv=None):
    apply_args(parse_args(argv))
    log = setup_logger(name="tetris", use_rich=CONFIG["USE_RICH"], level=CONFIG["LOG_LEVEL"])

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, DROP_EVENT])

    dims = compute_dims()
    screen = pygame.display.set_mode((dims.total_w, dims.total_h))
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()
    toasts = ToastQueue()

    game = Game(
        randomizer=UniformRandom(CONFIG["SEED"]),
        timer=PygameDropTimer(DROP_EVENT),
        sink=lambda note: toasts.push(note, pygame.time.get_ticks()),
    )
    log.info("window %dx%d, cell %dpx", dims.total_w, dims.total_h, dims.cell)

    try:
        running = True
        while running:
            clock.tick(CONFIG["FPS"])
            for e in pygame.event.get():
                if not handle_event(game, e):
                    running = False

            render.draw(screen, game.snapshot(), toasts.visible(pygame.time.get_ticks()))
            pygame.display.flip()
    finally:
        game.close()
        pygame.quit()
    log.info("bye")
    return 0


if __name__ == '__main__':
    sys.exit(main())
