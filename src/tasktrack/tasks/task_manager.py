# src/tasktrack/tasks/task_manager.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .history import DEFAULT_HISTORY_LIMIT, HistoryManager
from .task_models import Entity, Epic, Subtask, Task, TaskStatus

logger = logging.getLogger(__name__)


class InMemoryTaskManager:
    """
    In-memory task store.

    Owns three id-keyed collections (tasks, epics, subtasks) that share one id
    counter, plus the view history.

    Rules:
    - ids are assigned here, never by the caller
    - epic status is derived from its subtasks after every relevant change
    - deleting an epic deletes its subtasks; every delete prunes history
    - lookups and mutations on unknown ids are silent no-ops (logged at DEBUG)
    """

    def __init__(self, *, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._task_counter = 0
        self._tasks: dict[int, Task] = {}
        self._epics: dict[int, Epic] = {}
        self._subtasks: dict[int, Subtask] = {}
        self._history = HistoryManager(history_limit)

    # ---- low-level helpers ----

    @property
    def task_counter(self) -> int:
        """Id the next created entity will receive."""
        return self._task_counter

    def count(self) -> int:
        return len(self._tasks) + len(self._epics) + len(self._subtasks)

    def _next_id(self) -> int:
        new_id = self._task_counter
        self._task_counter += 1
        return new_id

    def _is_live(self, entity: Entity) -> bool:
        """True if `entity` already carries an id the store is using."""
        return entity.id is not None and (
            entity.id in self._tasks or entity.id in self._epics or entity.id in self._subtasks
        )

    def _owner_of(self, subtask_id: int) -> Epic | None:
        for epic in self._epics.values():
            if subtask_id in epic.subtask_ids:
                return epic
        return None

    def _check_epic_status(self, epic_id: int) -> None:
        epic = self._epics.get(epic_id)
        if epic is None:
            return

        statuses = [
            self._subtasks[sid].status for sid in epic.subtask_ids if sid in self._subtasks
        ]
        if not statuses or all(s is TaskStatus.NEW for s in statuses):
            epic.status = TaskStatus.NEW
        elif all(s is TaskStatus.DONE for s in statuses):
            epic.status = TaskStatus.DONE
        else:
            epic.status = TaskStatus.IN_PROGRESS

    # ---- queries ----

    def get_all_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_all_epics(self) -> list[Epic]:
        return list(self._epics.values())

    def get_all_subtasks(self) -> list[Subtask]:
        return list(self._subtasks.values())

    def get_all(self) -> list[Entity]:
        """Every entity: tasks, then epics, then subtasks."""
        return [*self._tasks.values(), *self._epics.values(), *self._subtasks.values()]

    def get_all_subtasks_of_epic(self, epic_id: int) -> list[Subtask]:
        epic = self._epics.get(epic_id)
        if epic is None:
            return []
        return [self._subtasks[sid] for sid in epic.subtask_ids if sid in self._subtasks]

    def get_task_by_id(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        if task is not None:
            self._history.add(task)
        return task

    def get_epic_by_id(self, epic_id: int) -> Epic | None:
        epic = self._epics.get(epic_id)
        if epic is not None:
            self._history.add(epic)
        return epic

    def get_subtask_by_id(self, subtask_id: int) -> Subtask | None:
        subtask = self._subtasks.get(subtask_id)
        if subtask is not None:
            self._history.add(subtask)
        return subtask

    def get_history(self) -> list[Entity]:
        return self._history.get_history()

    # ---- create ----

    def create_task(self, task: Task) -> int | None:
        if self._is_live(task):
            logger.debug("Task rejected: id=%s is already stored", task.id)
            return None
        task.id = self._next_id()
        self._tasks[task.id] = task
        logger.debug("Task created id=%s status=%s", task.id, task.status)
        return task.id

    def create_epic(self, epic: Epic) -> int | None:
        if self._is_live(epic):
            logger.debug("Epic rejected: id=%s is already stored", epic.id)
            return None
        # Self-containment guard. The candidate id is always fresh, so this
        # only fires if a caller pre-fills subtask_ids with the next counter value.
        if self._task_counter in epic.subtask_ids:
            logger.debug("Epic rejected: subtask_ids contains its own id=%s", self._task_counter)
            return None

        epic.id = self._next_id()
        epic.subtask_ids = [
            sid
            for sid in dict.fromkeys(epic.subtask_ids)
            if sid in self._subtasks and self._subtasks[sid].epic_id == epic.id
        ]
        self._epics[epic.id] = epic
        self._check_epic_status(epic.id)
        logger.debug("Epic created id=%s", epic.id)
        return epic.id

    def create_subtask(self, subtask: Subtask) -> int | None:
        if self._is_live(subtask):
            logger.debug("Subtask rejected: id=%s is already stored", subtask.id)
            return None
        epic = self._epics.get(subtask.epic_id)
        if epic is None:
            logger.debug("Subtask rejected: unknown epic_id=%s", subtask.epic_id)
            return None
        if self._task_counter == subtask.epic_id:
            logger.debug("Subtask rejected: own id equals epic_id=%s", subtask.epic_id)
            return None

        subtask.id = self._next_id()
        self._subtasks[subtask.id] = subtask
        epic.subtask_ids.append(subtask.id)
        self._check_epic_status(epic.id)
        logger.debug(
            "Subtask created id=%s epic_id=%s status=%s", subtask.id, epic.id, subtask.status
        )
        return subtask.id

    # ---- update ----

    def update_task(self, task: Task) -> None:
        if task.id is None or task.id not in self._tasks:
            logger.debug("update_task ignored: unknown id=%s", task.id)
            return
        self._tasks[task.id] = task

    def update_epic(self, epic: Epic) -> None:
        stored = self._epics.get(epic.id) if epic.id is not None else None
        if stored is None:
            logger.debug("update_epic ignored: unknown id=%s", epic.id)
            return
        if epic.id in epic.subtask_ids:
            logger.debug("update_epic ignored: epic id=%s lists itself as a subtask", epic.id)
            return

        # Linkage belongs to the store; only title/description come from the caller.
        epic.subtask_ids = stored.subtask_ids
        self._epics[epic.id] = epic
        self._check_epic_status(epic.id)

    def update_subtask(self, subtask: Subtask) -> None:
        stored = self._subtasks.get(subtask.id) if subtask.id is not None else None
        if stored is None:
            logger.debug("update_subtask ignored: unknown id=%s", subtask.id)
            return
        if subtask.id == subtask.epic_id:
            logger.debug("update_subtask ignored: id=%s equals its epic_id", subtask.id)
            return
        target = self._epics.get(subtask.epic_id)
        if target is None:
            logger.debug("update_subtask ignored: unknown epic_id=%s", subtask.epic_id)
            return

        # Look the owner up by linkage: the caller may have edited the stored object in place.
        previous = self._owner_of(subtask.id)
        if previous is not target:
            if previous is not None:
                previous.subtask_ids.remove(subtask.id)
                self._check_epic_status(previous.id)
            target.subtask_ids.append(subtask.id)
            logger.debug(
                "Subtask id=%s moved epic %s -> %s",
                subtask.id,
                previous.id if previous is not None else None,
                target.id,
            )

        self._subtasks[subtask.id] = subtask
        self._check_epic_status(target.id)

    # ---- delete ----

    def delete_all_tasks(self) -> None:
        for task_id in self._tasks:
            self._history.remove(task_id)
        self._tasks.clear()

    def delete_all_epics(self) -> None:
        # Subtasks cannot outlive their epic.
        for epic_id in self._epics:
            self._history.remove(epic_id)
        for subtask_id in self._subtasks:
            self._history.remove(subtask_id)
        self._epics.clear()
        self._subtasks.clear()

    def delete_all_subtasks(self) -> None:
        for subtask_id in self._subtasks:
            self._history.remove(subtask_id)
        self._subtasks.clear()
        for epic in self._epics.values():
            epic.subtask_ids.clear()
            self._check_epic_status(epic.id)

    def delete_task_by_id(self, task_id: int) -> None:
        if self._tasks.pop(task_id, None) is None:
            logger.debug("delete_task_by_id ignored: unknown id=%s", task_id)
            return
        self._history.remove(task_id)

    def delete_epic_by_id(self, epic_id: int) -> None:
        epic = self._epics.pop(epic_id, None)
        if epic is None:
            logger.debug("delete_epic_by_id ignored: unknown id=%s", epic_id)
            return
        for subtask_id in epic.subtask_ids:
            self._subtasks.pop(subtask_id, None)
            self._history.remove(subtask_id)
        self._history.remove(epic_id)

    def delete_subtask_by_id(self, subtask_id: int) -> None:
        subtask = self._subtasks.pop(subtask_id, None)
        if subtask is None:
            logger.debug("delete_subtask_by_id ignored: unknown id=%s", subtask_id)
            return
        epic = self._epics.get(subtask.epic_id)
        if epic is not None and subtask_id in epic.subtask_ids:
            epic.subtask_ids.remove(subtask_id)
            self._check_epic_status(epic.id)
        self._history.remove(subtask_id)

    # ---- dump / restore (used by persistence) ----

    def dump(self) -> list[Entity]:
        """Every entity in save order: tasks, epics, subtasks."""
        return self.get_all()

    def restore(self, entities: Iterable[Entity]) -> None:
        """
        Replace the whole state with `entities`.

        Epic subtask lists are rebuilt from the subtasks' epic_id, epic statuses
        are re-derived and the id counter becomes max(id) + 1. History is reset.
        Raises ValueError (state untouched) on missing/duplicate ids or a subtask
        whose epic is absent.
        """
        tasks: dict[int, Task] = {}
        epics: dict[int, Epic] = {}
        subtasks: dict[int, Subtask] = {}
        seen: set[int] = set()

        for entity in entities:
            if entity.id is None:
                raise ValueError(f"cannot restore entity without id: {entity!r}")
            if entity.id in seen:
                raise ValueError(f"duplicate id {entity.id}")
            seen.add(entity.id)

            if isinstance(entity, Epic):
                entity.subtask_ids = []
                epics[entity.id] = entity
            elif isinstance(entity, Subtask):
                subtasks[entity.id] = entity
            else:
                tasks[entity.id] = entity

        for subtask in subtasks.values():
            epic = epics.get(subtask.epic_id)
            if epic is None:
                raise ValueError(
                    f"subtask {subtask.id} references unknown epic {subtask.epic_id}"
                )
            epic.subtask_ids.append(subtask.id)

        self._tasks = tasks
        self._epics = epics
        self._subtasks = subtasks
        self._history.clear()
        for epic_id in self._epics:
            self._check_epic_status(epic_id)
        self._task_counter = max(seen) + 1 if seen else 0
        logger.debug("Restored %d entities, next id=%s", len(seen), self._task_counter)
