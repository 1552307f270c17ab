from __future__ import annotations

import time
from unittest.mock import patch

import pytest

from services.history import HistoryLog
from services.store import InMemoryStore


def test_record_trims_to_max_entries() -> None:
    log = HistoryLog(InMemoryStore(), max_entries=2)
    for idx in range(3):
        log.record("user-1", "slang", f"query-{idx}", [f"result-{idx}"])

    history = log.get("user-1")
    assert len(history) == 2
    assert history[0].query == "query-1"
    assert history[-1].query == "query-2"


def test_trim_is_per_user() -> None:
    log = HistoryLog(InMemoryStore(), max_entries=2)
    log.record("user-a", "food", "chaat", [])
    for idx in range(3):
        log.record("user-b", "food", f"q{idx}", [])

    assert [h.query for h in log.get("user-a")] == ["chaat"]
    assert [h.query for h in log.get("user-b")] == ["q1", "q2"]


def test_limit_keeps_most_recent() -> None:
    log = HistoryLog(InMemoryStore(), max_entries=10)
    for idx in range(4):
        log.record("user-2", "food", f"q{idx}", [])

    assert [h.query for h in log.get("user-2", limit=2)] == ["q2", "q3"]


def test_reset_clears_state() -> None:
    log = HistoryLog(InMemoryStore(), max_entries=2)
    log.record("user-3", "cultural", "holi", [])
    assert log.get("user-3")

    log.reset("user-3")
    assert log.get("user-3") == []


def test_history_does_not_expire() -> None:
    log = HistoryLog(InMemoryStore(), max_entries=2)
    log.record("user-old", "food", "chaat", [])

    later = time.time() + 31 * 24 * 3600
    with patch("time.time", return_value=later):
        assert [h.query for h in log.get("user-old")] == ["chaat"]


def test_entries_roll_back_with_the_store() -> None:
    store = InMemoryStore()
    log = HistoryLog(store, max_entries=2)

    with pytest.raises(RuntimeError):
        with store.transaction():
            log.record("user-4", "slang", "acha", [])
            raise RuntimeError("boom")

    assert log.get("user-4") == []
