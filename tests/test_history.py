"""Tests for the history store."""
from __future__ import annotations

import threading

import pytest

from word_forge.history import HistoryStore


class TestRecordContains:
    def test_recorded_word_is_contained(self):
        h = HistoryStore()
        assert h.record("banana") is True
        assert h.contains("banana")
        assert "banana" in h

    def test_unknown_word_not_contained(self):
        assert not HistoryStore().contains("banana")

    def test_duplicate_record_returns_false(self):
        h = HistoryStore()
        h.record("banana")
        assert h.record("banana") is False
        assert len(h) == 1

    def test_normalizes_case_and_punctuation(self):
        h = HistoryStore()
        h.record('"Banana!"')
        assert h.contains("banana")
        assert h.record("BANANA") is False

    def test_insertion_order_preserved(self):
        h = HistoryStore()
        for w in ("cherry", "apple", "banana"):
            h.record(w)
        assert h.items() == ["cherry", "apple", "banana"]

    def test_items_is_a_snapshot(self):
        h = HistoryStore()
        h.record("apple")
        snapshot = h.items()
        h.record("banana")
        assert snapshot == ["apple"]


class TestOverflow:
    def test_fills_to_capacity(self):
        h = HistoryStore(capacity=3)
        for w in ("aa", "bb", "cc"):
            h.record(w)
        assert len(h) == 3
        assert h.contains("aa")

    def test_clears_when_capacity_exceeded(self):
        h = HistoryStore(capacity=3)
        for w in ("aa", "bb", "cc", "dd"):
            h.record(w)
        assert len(h) == 0
        assert not h.contains("aa")
        assert not h.contains("dd")

    def test_default_capacity_is_fifty(self):
        h = HistoryStore()
        words = ["w" + "a" * i for i in range(1, 51)]
        for w in words:
            h.record(w)
        assert len(h) == 50
        h.record("overflow")
        assert len(h) == 0

    def test_size_never_exceeds_capacity(self):
        h = HistoryStore(capacity=5)
        for i in range(1, 40):
            h.record("x" * i)
            assert len(h) <= 5

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            HistoryStore(capacity=0)


class TestConcurrentRecord:
    def test_only_one_thread_records_same_word(self):
        h = HistoryStore(capacity=1000)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(h.record("banana"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert len(h) == 1
