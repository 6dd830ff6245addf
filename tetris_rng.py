"""Piece randomizers. Anything with ``next_type() -> str`` can feed the game."""
import random
from typing import Iterable, Optional

from tetris_piece import TYPES


class UniformRandom:
    PIECES = list(TYPES)

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def next_type(self) -> str:
        return self.rng.choice(self.PIECES)


class SequenceRandom:
    """Replays a fixed list of types, cycling when it runs out."""
    def __init__(self, types: Iterable[str]):
        self.types = list(types)
        if not self.types:
            raise ValueError("SequenceRandom needs at least one piece type")
        for t in self.types:
            if t not in TYPES:
                raise ValueError(f"unknown piece type {t!r}")
        self.index = 0

    def next_type(self) -> str:
        t = self.types[self.index % len(self.types)]
        self.index += 1
        return t
