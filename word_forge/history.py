"""Process-lifetime record of generated words, used for uniqueness checks."""
from __future__ import annotations

import logging
import threading

from word_forge.models import normalize_word

DEFAULT_CAPACITY = 50

_log = logging.getLogger("word_forge.history")


class HistoryStore:
    """Ordered set of normalized words with clear-on-overflow.

    Once an insert pushes the size past ``capacity`` the whole store is
    emptied rather than evicting the oldest entry.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._words: dict[str, None] = {}
        self._lock = threading.Lock()

    def contains(self, item: str) -> bool:
        word = normalize_word(item)
        with self._lock:
            return word in self._words

    def record(self, item: str) -> bool:
        """Insert *item*; return False if it was already present."""
        word = normalize_word(item)
        with self._lock:
            if word in self._words:
                return False
            self._words[word] = None
            if len(self._words) > self.capacity:
                _log.info("History over capacity (%d), clearing", self.capacity)
                self._words.clear()
            return True

    def items(self) -> list[str]:
        with self._lock:
            return list(self._words)

    def __contains__(self, item: str) -> bool:
        return self.contains(item)

    def __len__(self) -> int:
        with self._lock:
            return len(self._words)
