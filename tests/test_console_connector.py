# tests/test_console_connector.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktrack.connectors.console_connector import run_console_loop
from tasktrack.core.state import AppState
from tasktrack.tasks.file_backed import FileBackedTaskManager


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_console_runs_commands_until_exit(monkeypatch, capsys, state) -> None:
    _feed(monkeypatch, ["/add task Write report", "hello", "/list", "/exit", "/add task never"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Task #0 created." in out
    assert "Commands start with '/'" in out
    assert "#0 [TASK] Write report (NEW)" in out
    assert len(state.manager.get_all()) == 1


def test_console_reports_save_failures(monkeypatch, capsys, settings, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", "utf-8")
    state = AppState(settings=settings, manager=FileBackedTaskManager(blocker / "tasks.csv"))
    _feed(monkeypatch, ["/add task a"])

    run_console_loop(state)

    assert "Could not save/load tasks" in capsys.readouterr().out
