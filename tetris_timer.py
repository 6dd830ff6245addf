"""Recurring gravity timer backed by pygame's event timer."""
import logging
from typing import Optional

import pygame

DROP_EVENT = pygame.USEREVENT + 1

LOG = logging.getLogger("tetris.timer")


class PygameDropTimer:
    """Posts DROP_EVENT every ``interval_ms`` until stopped.

    ``start`` always tears down the running timer before creating the new one,
    so a level change never leaves the old period running.
    """
    def __init__(self, event_type: int = DROP_EVENT):
        self.event_type = event_type
        self.interval_ms: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.interval_ms is not None

    def start(self, interval_ms: int):
        if interval_ms <= 0:
            raise ValueError(f"drop interval must be positive, got {interval_ms}")
        self.stop()
        pygame.time.set_timer(self.event_type, int(interval_ms))
        self.interval_ms = int(interval_ms)
        LOG.debug("drop timer scheduled every %dms", self.interval_ms)

    def stop(self):
        if self.interval_ms is None:
            return
        pygame.time.set_timer(self.event_type, 0)
        LOG.debug("drop timer cancelled (was %dms)", self.interval_ms)
        self.interval_ms = None
