# src/tasktrack/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from ..core.ports import TaskManager
from ..core.state import AppState
from ..tasks.task_models import Entity, Epic, Subtask, Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def format_entity(entity: Entity) -> str:
    line = f"#{entity.id} [{entity.type}] {entity.title} ({entity.status})"
    if isinstance(entity, Epic):
        line += f" subtasks={entity.subtask_ids}"
    elif isinstance(entity, Subtask):
        line += f" epic=#{entity.epic_id}"
    if entity.description:
        line += f" - {entity.description}"
    return line


def _split_title(words: list[str]) -> tuple[str, str]:
    """"Buy milk | 2 litres" -> ("Buy milk", "2 litres")."""
    title, _, description = " ".join(words).partition("|")
    return title.strip(), description.strip()


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _find(manager: TaskManager, entity_id: int) -> Entity | None:
    """Lookup without touching history."""
    for entity in manager.get_all():
        if entity.id == entity_id:
            return entity
    return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add task <title> [| description]
    /add epic <title> [| description]
    /add sub <epic_id> <title> [| description]
    """
    usage = "Usage: /add task|epic <title> [| description] or /add sub <epic_id> <title> [| description]"
    if len(args) < 2:
        return usage

    kind = args[0].lower()
    manager = state.manager

    if kind == "task":
        title, description = _split_title(args[1:])
        new_id = manager.create_task(Task(title=title, description=description))
        return f"Task #{new_id} created."

    if kind == "epic":
        title, description = _split_title(args[1:])
        new_id = manager.create_epic(Epic(title=title, description=description))
        return f"Epic #{new_id} created." if new_id is not None else "Epic was not created."

    if kind in ("sub", "subtask"):
        epic_id = _parse_int(args[1])
        if epic_id is None or len(args) < 3:
            return usage
        title, description = _split_title(args[2:])
        new_id = manager.create_subtask(Subtask(title=title, description=description, epic_id=epic_id))
        if new_id is None:
            return f"No epic #{epic_id}; subtask was not created."
        return f"Subtask #{new_id} created in epic #{epic_id}."

    return usage


def cmd_show(state: AppState, args: list[str]) -> str:
    entity_id = _parse_int(args[0]) if args else None
    if entity_id is None:
        return "Usage: /show <id>"

    manager = state.manager
    entity: Entity | None = (
        manager.get_task_by_id(entity_id)
        or manager.get_epic_by_id(entity_id)
        or manager.get_subtask_by_id(entity_id)
    )
    if entity is None:
        return f"Nothing with id #{entity_id}."
    return format_entity(entity)


def cmd_status(state: AppState, args: list[str]) -> str:
    """/status <id> new|in_progress|done (tasks and subtasks only)."""
    usage = "Usage: /status <id> new|in_progress|done"
    if len(args) != 2:
        return usage
    entity_id = _parse_int(args[0])
    if entity_id is None:
        return usage
    try:
        status = TaskStatus.parse(args[1])
    except ValueError:
        return usage

    manager = state.manager
    entity = _find(manager, entity_id)
    if entity is None:
        return f"Nothing with id #{entity_id}."
    if isinstance(entity, Epic):
        return "Epic status is derived from its subtasks."
    if isinstance(entity, Subtask):
        manager.update_subtask(replace(entity, status=status))
    else:
        manager.update_task(replace(entity, status=status))
    return f"#{entity_id} is now {status}."


def cmd_del(state: AppState, args: list[str]) -> str:
    entity_id = _parse_int(args[0]) if args else None
    if entity_id is None:
        return "Usage: /del <id>"

    manager = state.manager
    entity = _find(manager, entity_id)
    if entity is None:
        return f"Nothing with id #{entity_id}."
    if isinstance(entity, Epic):
        manager.delete_epic_by_id(entity_id)
        return f"Epic #{entity_id} and its subtasks removed."
    if isinstance(entity, Subtask):
        manager.delete_subtask_by_id(entity_id)
    else:
        manager.delete_task_by_id(entity_id)
    return f"#{entity_id} removed."


def cmd_clear(state: AppState, args: list[str]) -> str:
    """/clear tasks|epics|subtasks"""
    what = args[0].lower() if args else ""
    manager = state.manager
    if what == "tasks":
        manager.delete_all_tasks()
    elif what == "epics":
        manager.delete_all_epics()
    elif what == "subtasks":
        manager.delete_all_subtasks()
    else:
        return "Usage: /clear tasks|epics|subtasks"
    logger.info("Cleared all %s.", what)
    return f"All {what} removed."


def cmd_list(state: AppState, args: list[str]) -> str:
    entities = state.manager.get_all()
    if not entities:
        return "No tasks yet."
    return "\n".join(format_entity(e) for e in entities)


def cmd_subs(state: AppState, args: list[str]) -> str:
    epic_id = _parse_int(args[0]) if args else None
    if epic_id is None:
        return "Usage: /subs <epic_id>"
    subtasks = state.manager.get_all_subtasks_of_epic(epic_id)
    if not subtasks:
        return f"No subtasks for epic #{epic_id}."
    return "\n".join(format_entity(s) for s in subtasks)


def cmd_history(state: AppState, args: list[str]) -> str:
    history = state.manager.get_history()
    if not history:
        return "History is empty."
    lines = ["Recently viewed (oldest first):"]
    for i, entity in enumerate(history, start=1):
        lines.append(f"{i}. {format_entity(entity)}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add",
    cmd_add,
    help_text="Create: /add task|epic <title> [| desc] | /add sub <epic_id> <title> [| desc].",
)
registry.register("show", cmd_show, help_text="Show one entity (recorded in history): /show <id>.")
registry.register("status", cmd_status, help_text="Set status: /status <id> new|in_progress|done.")
registry.register("del", cmd_del, help_text="Delete by id (epics take their subtasks).", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete everything of a kind: /clear tasks|epics|subtasks.")
registry.register("list", cmd_list, help_text="List tasks, epics and subtasks.", aliases=["ls"])
registry.register("subs", cmd_subs, help_text="List subtasks of an epic: /subs <epic_id>.")
registry.register("history", cmd_history, help_text="Show recently viewed entities.")
