"""Bounded FIFO of on-screen notifications with per-entry expiry."""
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from tetris_config import CONFIG


@dataclass(frozen=True)
class Toast:
    title: str
    message: str
    expires_at: int


class ToastQueue:
    def __init__(self, limit: Optional[int] = None):
        limit = CONFIG["TOAST_LIMIT"] if limit is None else limit
        if limit < 1:
            raise ValueError(f"toast limit must be at least 1, got {limit}")
        self.limit = limit
        self._items: Deque[Toast] = deque(maxlen=limit)

    def __len__(self):
        return len(self._items)

    def push(self, note, now_ms: int) -> Toast:
        """Queue a notification; the oldest toast drops off when full."""
        toast = Toast(note.title, note.message, now_ms + note.duration_ms)
        self._items.append(toast)
        return toast

    def expire(self, now_ms: int):
        self._items = deque((t for t in self._items if t.expires_at > now_ms), maxlen=self.limit)

    def visible(self, now_ms: int) -> List[Toast]:
        self.expire(now_ms)
        return list(self._items)

    def clear(self):
        self._items.clear()
