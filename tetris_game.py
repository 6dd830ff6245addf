"""
Game loop controller.

Owns the single mutable GameState and funnels the drop timer and every player
action through one path: read the committed state, compute a new one, commit
it, then tell the timer and the notification sink. GameState itself is frozen;
each transition replaces it wholesale so no observer sees half an update.

Phases (derived from the flags on GameState):

  NOT_STARTED --start--> RUNNING <--pause/resume--> PAUSED
  RUNNING --placement overflow / spawn blocked--> GAME_OVER
  any phase --start--> RUNNING (full reset)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from tetris_board import Board, collide, drop_y, empty_board, ghost_y, merge, sweep
from tetris_config import CONFIG
from tetris_piece import Piece, random_piece, try_rotate
from tetris_rng import UniformRandom
from tetris_scoring import CLEAR_NAMES, drop_interval_ms, level_for_lines, line_clear_points

LOG = logging.getLogger("tetris.game")


class Phase(Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game-over"


class Action(Enum):
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    SOFT_DROP = "soft-drop"
    ROTATE = "rotate"
    HARD_DROP = "hard-drop"
    PAUSE = "pause"
    START = "start"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    duration_ms: int


@dataclass(frozen=True)
class GameState:
    board: Board
    current: Piece
    next: Piece
    score: int = 0
    level: int = 1
    lines: int = 0
    drop_ms: int = 1000
    paused: bool = False
    game_over: bool = False
    started: bool = False

    @property
    def phase(self) -> Phase:
        if not self.started:
            return Phase.NOT_STARTED
        if self.game_over:
            return Phase.GAME_OVER
        if self.paused:
            return Phase.PAUSED
        return Phase.RUNNING

    @staticmethod
    def fresh(randomizer, started: bool = False) -> "GameState":
        return GameState(
            board=empty_board(),
            current=random_piece(randomizer),
            next=random_piece(randomizer),
            drop_ms=drop_interval_ms(1),
            started=started,
        )


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the renderer."""
    board: Board
    current: Piece
    next: Piece
    ghost_y: int
    score: int
    level: int
    lines: int
    phase: Phase

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED


Sink = Callable[[Notification], None]


class Game:
    def __init__(self, randomizer=None, timer=None, sink: Optional[Sink] = None):
        if randomizer is None:
            randomizer = UniformRandom(CONFIG["SEED"])
        if timer is None:
            from tetris_timer import PygameDropTimer
            timer = PygameDropTimer()
        self.randomizer = randomizer
        self.timer = timer
        self.sink = sink
        self.state = GameState.fresh(randomizer)
        self._handlers = {
            Action.MOVE_LEFT: self.move_left,
            Action.MOVE_RIGHT: self.move_right,
            Action.SOFT_DROP: self.soft_drop,
            Action.ROTATE: self.rotate,
            Action.HARD_DROP: self.hard_drop,
            Action.PAUSE: self.toggle_pause,
            Action.START: self.start,
        }

    # ---------- state plumbing ----------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    def _playing(self) -> bool:
        return self.state.phase is Phase.RUNNING

    def _commit(self, state: GameState, *notes: Notification):
        self.state = state
        if self.sink is not None:
            for note in notes:
                self.sink(note)

    def snapshot(self) -> GameSnapshot:
        s = self.state
        return GameSnapshot(
            board=s.board,
            current=s.current,
            next=s.next,
            ghost_y=ghost_y(s.board, s.current),
            score=s.score,
            level=s.level,
            lines=s.lines,
            phase=s.phase,
        )

    # ---------- lifecycle ----------
    def start(self) -> bool:
        """Start, or restart from any phase, with a completely fresh state.

        The first start keeps the two pieces drawn at construction, so a seeded
        randomizer yields the same sequence as drawing from it directly.
        """
        s = self.state
        if s.phase is Phase.NOT_STARTED:
            state = GameState(board=empty_board(), current=s.current, next=s.next,
                              drop_ms=drop_interval_ms(1), started=True)
        else:
            state = GameState.fresh(self.randomizer, started=True)
        self.timer.start(state.drop_ms)
        LOG.info("game started (first piece %s, next %s)", state.current.t, state.next.t)
        self._commit(state, Notification("Game Started", "Good luck!", 1500))
        return True

    def toggle_pause(self) -> bool:
        s = self.state
        if not s.started or s.game_over:
            return False
        paused = not s.paused
        if paused:
            self.timer.stop()
            note = Notification("Paused", "Press P to resume", 1000)
        else:
            self.timer.start(s.drop_ms)
            note = Notification("Resumed", "Back to the stack", 1000)
        LOG.info("game %s", "paused" if paused else "resumed")
        self._commit(replace(s, paused=paused), note)
        return True

    def close(self):
        self.timer.stop()

    def dispatch(self, action: Action) -> bool:
        try:
            handler = self._handlers[action]
        except KeyError:
            raise ValueError(f"unknown action {action!r}") from None
        return handler()

    def tick(self) -> bool:
        """Gravity step fired by the drop timer."""
        return self.soft_drop()

    # ---------- piece transforms ----------
    def move(self, direction: int) -> bool:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")
        if not self._playing():
            return False
        s = self.state
        if collide(s.board, s.current, x=s.current.x + direction):
            return False
        self._commit(replace(s, current=s.current.moved(dx=direction)))
        return True

    def move_left(self) -> bool:
        return self.move(-1)

    def move_right(self) -> bool:
        return self.move(1)

    def rotate(self) -> bool:
        if not self._playing():
            return False
        s = self.state
        test = try_rotate(s.board, s.current)
        if test is None:
            return False
        self._commit(replace(s, current=test))
        return True

    def soft_drop(self) -> bool:
        """Move down one row, or lock the piece when the row below is blocked."""
        if not self._playing():
            return False
        s = self.state
        if not collide(s.board, s.current, y=s.current.y + 1):
            self._commit(replace(s, current=s.current.moved(dy=1)))
        else:
            self._place()
        return True

    def hard_drop(self) -> bool:
        # Relocates only. The lock happens on the next soft drop or timer tick.
        if not self._playing():
            return False
        s = self.state
        y = drop_y(s.board, s.current)
        if y == s.current.y:
            return False
        self._commit(replace(s, current=s.current.at(y)))
        return True

    # ---------- placement ----------
    def _place(self):
        s = self.state
        board, overflow = merge(s.board, s.current)
        if overflow:
            self._end(replace(s, game_over=True))
            return

        board, cleared = sweep(board)
        notes = []
        score, lines, level, drop_ms = s.score, s.lines, s.level, s.drop_ms
        if cleared:
            points = line_clear_points(cleared, level)
            score += points
            lines += cleared
            new_level = level_for_lines(lines)
            if new_level > level:
                level = new_level
                drop_ms = drop_interval_ms(level)
                LOG.info("level up: %d (drop every %dms)", level, drop_ms)
                notes.append(Notification("Level Up!", f"You've reached level {level}!", 2000))
            LOG.info("%s cleared %d line(s) for %d points", CLEAR_NAMES[cleared], cleared, points)
            notes.append(Notification(CLEAR_NAMES[cleared], f"+{points} points", 1500))

        state = replace(
            s,
            board=board,
            current=Piece.spawn(s.next.t),
            next=random_piece(self.randomizer),
            score=score,
            lines=lines,
            level=level,
            drop_ms=drop_ms,
        )
        if collide(state.board, state.current):
            self._end(replace(state, game_over=True), *notes)
            return
        if drop_ms != s.drop_ms:
            self.timer.start(drop_ms)
        self._commit(state, *notes)

    def _end(self, state: GameState, *notes: Notification):
        self.timer.stop()
        LOG.info("game over: score %d, lines %d, level %d", state.score, state.lines, state.level)
        self._commit(state, *notes, Notification("You Lose!", f"Your score: {state.score}", 5000))
