# tests/conftest.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List

import pytest

from tetris_board import Board, Cell, empty_board
from tetris_game import Game, Notification
from tetris_rng import SequenceRandom

GREY = "#888888"


class FakeTimer:
    def __init__(self) -> None:
        self.calls: List[tuple] = []
        self.interval_ms = None

    def start(self, interval_ms: int) -> None:
        self.calls.append(("start", interval_ms))
        self.interval_ms = interval_ms

    def stop(self) -> None:
        self.calls.append(("stop",))
        self.interval_ms = None


def build_board(filled: Dict[int, Iterable[int]], color: str = GREY) -> Board:
    rows = [list(row) for row in empty_board()]
    for y, xs in filled.items():
        for x in xs:
            rows[y][x] = Cell(color)
    return tuple(tuple(row) for row in rows)


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def notes() -> List[Notification]:
    return []


@pytest.fixture
def make_game(timer: FakeTimer, notes: List[Notification]) -> Callable[..., Game]:
    def _make(types: Iterable[str] = ("O",), start: bool = True) -> Game:
        game = Game(randomizer=SequenceRandom(types), timer=timer, sink=notes.append)
        if start:
            game.start()
            timer.calls.clear()
            notes.clear()
        return game

    return _make


@pytest.fixture
def board_with() -> Callable[..., Board]:
    return build_board
