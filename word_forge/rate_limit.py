"""Per-client sliding-window rate limiting for the HTTP API."""
from __future__ import annotations

import threading
import time
from collections import deque


class RateLimiter:
    """Allow at most ``limit`` requests per ``window`` seconds per key.

    Keys with no hit inside the window are dropped, so one-off clients do
    not accumulate.
    """

    def __init__(self, limit: int = 60, window: float = 60.0, clock=time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)
            hits = self._hits.get(key)
            if hits is not None:
                while hits and now - hits[0] >= self.window:
                    hits.popleft()
                if not hits:
                    del self._hits[key]
                    hits = None
            if len(hits or ()) >= self.limit:
                return False
            if hits is None:
                hits = self._hits[key] = deque()
            hits.append(now)
            return True

    def _sweep(self, now: float) -> None:
        stale = [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]
        for k in stale:
            del self._hits[k]
        self._last_sweep = now

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
