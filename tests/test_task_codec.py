# tests/test_task_codec.py

from __future__ import annotations

import csv
import io

import pytest

from tasktrack.tasks import task_codec
from tasktrack.tasks.errors import MalformedLineError
from tasktrack.tasks.task_models import Epic, Subtask, Task, TaskStatus


def test_format_line_matches_legacy_layout() -> None:
    assert task_codec.format_line(Task(title="a", description="b", id=3)) == "3,TASK,a,NEW,b\n"
    assert (
        task_codec.format_line(Epic(title="e", description="", id=4, subtask_ids=[5]))
        == "4,EPIC,e,NEW,\n"
    )
    assert (
        task_codec.format_line(
            Subtask(title="s", description="d", epic_id=4, status=TaskStatus.DONE, id=5)
        )
        == "5,SUBTASK,s,DONE,d,4\n"
    )


def test_format_line_quotes_only_when_needed() -> None:
    line = task_codec.format_line(Task(title="a,b", description='q"x', id=1))
    assert line == '1,TASK,"a,b",NEW,"q""x"\n'


def test_format_line_requires_id() -> None:
    with pytest.raises(ValueError):
        task_codec.format_line(Task(title="unsaved"))


def test_parse_fields_builds_matching_variant() -> None:
    sub = task_codec.parse_fields(["5", "SUBTASK", "s", "IN_PROGRESS", "d", "4"])
    assert sub == Subtask(title="s", description="d", epic_id=4, status=TaskStatus.IN_PROGRESS, id=5)

    epic = task_codec.parse_fields(["4", "EPIC", "e", "DONE", ""])
    assert isinstance(epic, Epic)
    assert epic.subtask_ids == []


def test_read_entities_skips_blank_lines() -> None:
    stream = io.StringIO("0,TASK,a,NEW,d\n\n1,EPIC,e,NEW,d\n\n")
    entities = task_codec.read_entities(stream, "mem.csv")
    assert [e.id for e in entities] == [0, 1]


def test_format_line_quotes_carriage_returns() -> None:
    assert task_codec.format_line(Task(title="a\rb", description="x", id=0)) == '0,TASK,"a\rb",NEW,x\n'


def test_read_entities_leaves_csv_field_limit_untouched() -> None:
    before = csv.field_size_limit()
    task_codec.read_entities(io.StringIO("0,TASK,a,NEW,d\n"), "mem.csv")
    assert csv.field_size_limit() == before


def test_csv_syntax_error_message_has_no_empty_line_detail() -> None:
    with pytest.raises(MalformedLineError) as excinfo:
        task_codec.read_entities(io.StringIO('0,TASK,"a"b,NEW,d\n'), "mem.csv")

    assert excinfo.value.line_no == 1
    assert "''" not in str(excinfo.value)
