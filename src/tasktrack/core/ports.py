# src/tasktrack/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the front end.

Front ends depend on the TaskManager Protocol instead of a concrete store, so
the in-memory and file-backed managers are interchangeable.
"""

from typing import Protocol

from ..tasks.task_models import Entity, Epic, Subtask, Task


class TaskManager(Protocol):
    @property
    def task_counter(self) -> int: ...
    def count(self) -> int: ...

    # Queries
    def get_all_tasks(self) -> list[Task]: ...
    def get_all_epics(self) -> list[Epic]: ...
    def get_all_subtasks(self) -> list[Subtask]: ...
    def get_all(self) -> list[Entity]: ...
    def get_all_subtasks_of_epic(self, epic_id: int) -> list[Subtask]: ...
    def get_history(self) -> list[Entity]: ...

    # Lookups (record a history visit on hit)
    def get_task_by_id(self, task_id: int) -> Task | None: ...
    def get_epic_by_id(self, epic_id: int) -> Epic | None: ...
    def get_subtask_by_id(self, subtask_id: int) -> Subtask | None: ...

    # Mutations
    def create_task(self, task: Task) -> int | None: ...
    def create_epic(self, epic: Epic) -> int | None: ...
    def create_subtask(self, subtask: Subtask) -> int | None: ...
    def update_task(self, task: Task) -> None: ...
    def update_epic(self, epic: Epic) -> None: ...
    def update_subtask(self, subtask: Subtask) -> None: ...
    def delete_all_tasks(self) -> None: ...
    def delete_all_epics(self) -> None: ...
    def delete_all_subtasks(self) -> None: ...
    def delete_task_by_id(self, task_id: int) -> None: ...
    def delete_epic_by_id(self, epic_id: int) -> None: ...
    def delete_subtask_by_id(self, subtask_id: int) -> None: ...
