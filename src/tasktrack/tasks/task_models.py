# src/tasktrack/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values double as the tokens written to the save file.
    """

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Accept the file token or a lower-case alias (new, in_progress, done)."""
        return cls(raw.strip().upper())


class TaskType(StrEnum):
    TASK = "TASK"
    EPIC = "EPIC"
    SUBTASK = "SUBTASK"


@dataclass(slots=True)
class Task:
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.NEW
    id: int | None = None

    @property
    def type(self) -> TaskType:
        return TaskType.TASK


@dataclass(slots=True)
class Epic:
    """
    Container task. `status` is derived by the manager from the subtasks
    listed in `subtask_ids`; whatever the caller puts there is overwritten.
    """

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.NEW
    id: int | None = None
    subtask_ids: list[int] = field(default_factory=list)

    @property
    def type(self) -> TaskType:
        return TaskType.EPIC


@dataclass(slots=True)
class Subtask:
    title: str
    epic_id: int
    description: str = ""
    status: TaskStatus = TaskStatus.NEW
    id: int | None = None

    @property
    def type(self) -> TaskType:
        return TaskType.SUBTASK


Entity = Task | Epic | Subtask
