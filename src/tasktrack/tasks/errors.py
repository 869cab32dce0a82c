# src/tasktrack/tasks/errors.py

from __future__ import annotations

from pathlib import Path


class TaskPersistenceError(RuntimeError):
    """Reading or writing the save file failed. Never retried."""

    def __init__(self, message: str, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class MalformedLineError(TaskPersistenceError):
    """A line of the save file could not be parsed; the whole load is aborted."""

    def __init__(self, reason: str, path: str | Path, *, line_no: int, line: str) -> None:
        self.reason = reason
        self.line_no = line_no
        self.line = line
        detail = f" {line!r}" if line else ""
        super().__init__(f"Malformed line {line_no} ({reason}){detail}", path)
