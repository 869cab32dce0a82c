"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Epic, Subtask, TaskStatus, TaskType)
- history.py: bounded view history
- task_manager.py: in-memory store (ids, epic status derivation, cascades)
- task_codec.py: one-line-per-entity text format
- file_backed.py: store wrapper that rewrites the save file after every mutation
"""

from .errors import MalformedLineError, TaskPersistenceError
from .file_backed import FileBackedTaskManager
from .history import HistoryManager
from .task_manager import InMemoryTaskManager
from .task_models import Entity, Epic, Subtask, Task, TaskStatus, TaskType

__all__ = [
    "Entity",
    "Epic",
    "FileBackedTaskManager",
    "HistoryManager",
    "InMemoryTaskManager",
    "MalformedLineError",
    "Subtask",
    "Task",
    "TaskPersistenceError",
    "TaskStatus",
    "TaskType",
]
