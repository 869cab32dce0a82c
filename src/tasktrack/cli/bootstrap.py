# src/tasktrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- builds the task manager (in-memory or file-backed) and wires it into AppState.

There is no global default manager; callers own the instance they get here.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskManager
from ..core.state import AppState
from ..tasks.file_backed import FileBackedTaskManager
from ..tasks.task_manager import InMemoryTaskManager

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.save_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_manager(settings) -> TaskManager:
    """
    In-memory manager when persistence is off; otherwise a file-backed one,
    loaded from settings.save_path if that file already exists.

    TaskPersistenceError from a broken save file is not caught here.
    """
    if not settings.persist:
        logger.info("Persistence disabled; using in-memory task manager.")
        return InMemoryTaskManager(history_limit=settings.history_limit)

    path = settings.save_path
    if path.exists():
        return FileBackedTaskManager.load_from_file(path, history_limit=settings.history_limit)

    logger.info("No task file at %s yet; starting empty.", path)
    return FileBackedTaskManager(path, history_limit=settings.history_limit)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(settings=settings, manager=create_task_manager(settings))
