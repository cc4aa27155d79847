# rate_limit.py

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

DEFAULT_LIMIT = 30
DEFAULT_WINDOW = 60.0
CLEANUP_INTERVAL = 60.0


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """In-process fixed-window counter keyed by caller (e.g. ``"card:<ip>"``).

    Each serverless instance has its own limiter, so this only bounds
    traffic per warm instance.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT, window: float = DEFAULT_WINDOW,
                 clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window
        self.clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._last_cleanup = clock()

    def _cleanup(self, now: float) -> None:
        if now - self._last_cleanup < CLEANUP_INTERVAL:
            return
        self._last_cleanup = now
        for key in [k for k, w in self._windows.items() if now > w.reset_at]:
            del self._windows[key]

    def check(self, key: str) -> Optional[int]:
        """Count one request; ``None`` if allowed, else seconds until the window resets."""
        with self._lock:
            now = self.clock()
            self._cleanup(now)
            entry = self._windows.get(key)
            if entry is None or now > entry.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + self.window)
                return None
            entry.count += 1
            if entry.count > self.limit:
                return max(1, math.ceil(entry.reset_at - now))
            return None

    def __len__(self) -> int:
        return len(self._windows)


limiter = RateLimiter()
