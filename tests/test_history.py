# tests/test_history.py

from __future__ import annotations

import pytest

from tasktrack.tasks.history import HistoryManager
from tasktrack.tasks.task_models import Epic, Task


def _task(task_id: int) -> Task:
    return Task(title=f"t{task_id}", id=task_id)


def test_history_keeps_access_order_oldest_first() -> None:
    history = HistoryManager()
    for i in range(3):
        history.add(_task(i))

    assert [e.id for e in history.get_history()] == [0, 1, 2]


def test_history_readd_moves_to_most_recent_without_growing() -> None:
    history = HistoryManager()
    for i in range(3):
        history.add(_task(i))

    history.add(_task(0))

    assert [e.id for e in history.get_history()] == [1, 2, 0]
    assert len(history) == 3


def test_history_evicts_least_recent_past_ten() -> None:
    history = HistoryManager()
    for i in range(10):
        history.add(_task(i))
    # Touch 0 so that 1 becomes the least recently accessed entry.
    history.add(_task(0))

    history.add(_task(10))

    ids = [e.id for e in history.get_history()]
    assert len(ids) == 10
    assert 1 not in ids
    assert ids[0] == 2
    assert ids[-2:] == [0, 10]


def test_history_never_exceeds_limit() -> None:
    history = HistoryManager(limit=3)
    for i in range(50):
        history.add(_task(i % 7))
        assert len(history) <= 3


def test_history_remove_and_absent_remove_are_noops() -> None:
    history = HistoryManager()
    history.add(_task(1))
    history.add(Epic(title="e", id=2))

    history.remove(1)
    history.remove(99)

    assert [e.id for e in history.get_history()] == [2]


def test_history_ignores_entities_without_id() -> None:
    history = HistoryManager()
    history.add(Task(title="unsaved"))
    assert history.get_history() == []


def test_history_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        HistoryManager(limit=0)
