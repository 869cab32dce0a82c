# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktrack.core.state import AppState
from tasktrack.tasks.file_backed import FileBackedTaskManager
from tasktrack.tasks.task_manager import InMemoryTaskManager


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap helpers.

    A SimpleNamespace keeps tests independent of the process environment.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="tasktrack-test",
        log_level="DEBUG",
        console_enabled=True,
        persist=True,
        data_dir=data_dir,
        save_path=data_dir / "tasks.csv",
        history_limit=10,
    )


@pytest.fixture()
def manager() -> InMemoryTaskManager:
    return InMemoryTaskManager()


@pytest.fixture()
def save_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.csv"


@pytest.fixture()
def file_manager(save_path: Path) -> FileBackedTaskManager:
    return FileBackedTaskManager(save_path)


@pytest.fixture()
def state(settings: SimpleNamespace, manager: InMemoryTaskManager) -> AppState:
    return AppState(settings=settings, manager=manager)
