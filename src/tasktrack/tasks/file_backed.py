# src/tasktrack/tasks/file_backed.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import task_codec
from .errors import TaskPersistenceError
from .history import DEFAULT_HISTORY_LIMIT
from .task_manager import InMemoryTaskManager
from .task_models import Entity, Epic, Subtask, Task

logger = logging.getLogger(__name__)


class FileBackedTaskManager:
    """
    Task store persisted to a flat text file.

    Wraps an InMemoryTaskManager: every mutating call runs against it first,
    then the full state is written back (see task_codec for the line format).

    Writes go to "<name>.tmp" and are moved over the target with os.replace,
    so an interrupted save leaves the previous file in place.

    Any I/O or parse failure raises TaskPersistenceError; nothing is retried.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self._path = Path(path)
        self._manager = InMemoryTaskManager(history_limit=history_limit)

    @classmethod
    def load_from_file(
        cls,
        path: str | Path,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> FileBackedTaskManager:
        manager = cls(path, history_limit=history_limit)
        manager._load()
        logger.info(
            "FileBackedTaskManager ready path=%s total=%s next_id=%s",
            manager.path,
            manager.count(),
            manager.task_counter,
        )
        return manager

    @property
    def path(self) -> Path:
        return self._path

    @property
    def task_counter(self) -> int:
        return self._manager.task_counter

    def count(self) -> int:
        return self._manager.count()

    # ---- file I/O ----

    def _load(self) -> None:
        try:
            with self._path.open("r", encoding="utf-8", newline="") as fh:
                entities = task_codec.read_entities(fh, self._path)
        except OSError as exc:
            raise TaskPersistenceError("Failed to read task file", self._path) from exc
        except UnicodeDecodeError as exc:
            raise TaskPersistenceError("Task file is not valid UTF-8", self._path) from exc

        self._manager.restore(entities)

    def save(self) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="") as fh:
                n = task_codec.write_entities(fh, self._manager.dump())
            os.replace(tmp, self._path)
        except OSError as exc:
            raise TaskPersistenceError("Failed to save task file", self._path) from exc
        logger.debug("Saved %d entities to %s", n, self._path)

    # ---- queries (no save) ----

    def get_all_tasks(self) -> list[Task]:
        return self._manager.get_all_tasks()

    def get_all_epics(self) -> list[Epic]:
        return self._manager.get_all_epics()

    def get_all_subtasks(self) -> list[Subtask]:
        return self._manager.get_all_subtasks()

    def get_all(self) -> list[Entity]:
        return self._manager.get_all()

    def get_all_subtasks_of_epic(self, epic_id: int) -> list[Subtask]:
        return self._manager.get_all_subtasks_of_epic(epic_id)

    def get_task_by_id(self, task_id: int) -> Task | None:
        return self._manager.get_task_by_id(task_id)

    def get_epic_by_id(self, epic_id: int) -> Epic | None:
        return self._manager.get_epic_by_id(epic_id)

    def get_subtask_by_id(self, subtask_id: int) -> Subtask | None:
        return self._manager.get_subtask_by_id(subtask_id)

    def get_history(self) -> list[Entity]:
        return self._manager.get_history()

    # ---- mutations (save after each) ----

    def create_task(self, task: Task) -> int | None:
        task_id = self._manager.create_task(task)
        self.save()
        return task_id

    def create_epic(self, epic: Epic) -> int | None:
        epic_id = self._manager.create_epic(epic)
        self.save()
        return epic_id

    def create_subtask(self, subtask: Subtask) -> int | None:
        subtask_id = self._manager.create_subtask(subtask)
        self.save()
        return subtask_id

    def update_task(self, task: Task) -> None:
        self._manager.update_task(task)
        self.save()

    def update_epic(self, epic: Epic) -> None:
        self._manager.update_epic(epic)
        self.save()

    def update_subtask(self, subtask: Subtask) -> None:
        self._manager.update_subtask(subtask)
        self.save()

    def delete_all_tasks(self) -> None:
        self._manager.delete_all_tasks()
        self.save()

    def delete_all_epics(self) -> None:
        self._manager.delete_all_epics()
        self.save()

    def delete_all_subtasks(self) -> None:
        self._manager.delete_all_subtasks()
        self.save()

    def delete_task_by_id(self, task_id: int) -> None:
        self._manager.delete_task_by_id(task_id)
        self.save()

    def delete_epic_by_id(self, epic_id: int) -> None:
        self._manager.delete_epic_by_id(epic_id)
        self.save()

    def delete_subtask_by_id(self, subtask_id: int) -> None:
        self._manager.delete_subtask_by_id(subtask_id)
        self.save()
