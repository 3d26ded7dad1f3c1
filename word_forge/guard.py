from __future__ import annotations

import threading
from contextlib import asynccontextmanager

from word_forge.errors import PipelineBusy


class SingleFlightGuard:
    """Process-wide binary flag: at most one guarded run at a time.

    Callers that find it held are rejected, never queued.
    """

    def __init__(self):
        self._held = False
        self._lock = threading.Lock()

    @property
    def held(self) -> bool:
        return self._held

    def try_acquire(self) -> bool:
        with self._lock:
            if self._held:
                return False
            self._held = True
            return True

    def release(self) -> None:
        with self._lock:
            if not self._held:
                raise RuntimeError("release() called on a guard that is not held")
            self._held = False

    @asynccontextmanager
    async def hold(self):
        if not self.try_acquire():
            raise PipelineBusy()
        try:
            yield self
        finally:
            self.release()
