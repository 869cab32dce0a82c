# src/tasktrack/tasks/history.py

from __future__ import annotations

import logging
from collections import OrderedDict

from .task_models import Entity

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


class HistoryManager:
    """
    Bounded list of recently viewed entities.

    - keyed by entity id, so an entity appears at most once
    - re-viewing moves the entry to the most-recent end
    - the least recently viewed entry is evicted past `limit`
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be >= 1")
        self._limit = limit
        self._entries: OrderedDict[int, Entity] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entity: Entity) -> None:
        if entity.id is None:
            return
        self._entries.pop(entity.id, None)
        self._entries[entity.id] = entity
        while len(self._entries) > self._limit:
            evicted_id, _ = self._entries.popitem(last=False)
            logger.debug("History evicted id=%s", evicted_id)

    def remove(self, entity_id: int) -> None:
        self._entries.pop(entity_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def get_history(self) -> list[Entity]:
        """Oldest first, most recent last."""
        return list(self._entries.values())
