# src/tasktrack/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskManager


@dataclass
class AppState:
    # Settings are kept on the state so commands can read them later.
    settings: object
    manager: TaskManager
