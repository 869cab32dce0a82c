# src/tasktrack/tasks/task_codec.py

"""
Line format of the save file.

One entity per line, no header:

    id,type,title,status,description[,epic_id]

`epic_id` is present only on SUBTASK lines. Fields go through the csv module
with minimal quoting: plain text is written as-is (identical to the legacy
unescaped layout), and only fields containing a comma, a double quote or a
line break are wrapped in double quotes with inner quotes doubled.
"""

from __future__ import annotations

import csv
import io
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from .errors import MalformedLineError
from .task_models import Entity, Epic, Subtask, Task, TaskStatus, TaskType

_BASE_FIELDS = 5
_SUBTASK_FIELDS = 6

# Titles and descriptions have no length cap; lift csv's 128 KiB default while reading.
_FIELD_SIZE_LIMIT = min(sys.maxsize, 2**31 - 1)


def entity_to_fields(entity: Entity) -> list[str]:
    if entity.id is None:
        raise ValueError(f"cannot serialize entity without id: {entity!r}")
    fields = [
        str(entity.id),
        entity.type.value,
        entity.title,
        entity.status.value,
        entity.description,
    ]
    if isinstance(entity, Subtask):
        fields.append(str(entity.epic_id))
    return fields


def format_line(entity: Entity) -> str:
    r"""
    Single line for `entity`, including the trailing "\n".

    The writer runs with a "\r\n" terminator because QUOTE_MINIMAL only quotes
    characters found in the terminator; that way both "\r" and "\n" inside a
    field get quoted. The record itself still ends with a bare "\n".
    """
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n").writerow(
        entity_to_fields(entity)
    )
    return buf.getvalue().removesuffix("\r\n") + "\n"


def write_entities(stream: TextIO, entities: Iterable[Entity]) -> int:
    n = 0
    for entity in entities:
        stream.write(format_line(entity))
        n += 1
    return n


def _parse_id(raw: str, what: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"non-numeric {what} {raw!r}") from None
    if value < 0:
        raise ValueError(f"negative {what} {value}")
    return value


def parse_fields(fields: Sequence[str]) -> Entity:
    """Build an entity from one parsed record. Raises ValueError with the reason."""
    if len(fields) < _BASE_FIELDS:
        raise ValueError(f"expected at least {_BASE_FIELDS} fields, got {len(fields)}")

    raw_id, raw_type, title, raw_status, description = fields[:_BASE_FIELDS]
    entity_id = _parse_id(raw_id, "id")

    try:
        task_type = TaskType(raw_type)
    except ValueError:
        raise ValueError(f"unknown type {raw_type!r}") from None
    try:
        status = TaskStatus(raw_status)
    except ValueError:
        raise ValueError(f"unknown status {raw_status!r}") from None

    expected = _SUBTASK_FIELDS if task_type is TaskType.SUBTASK else _BASE_FIELDS
    if len(fields) != expected:
        raise ValueError(f"{task_type} line needs {expected} fields, got {len(fields)}")

    if task_type is TaskType.TASK:
        return Task(title=title, description=description, status=status, id=entity_id)
    if task_type is TaskType.EPIC:
        return Epic(title=title, description=description, status=status, id=entity_id)
    return Subtask(
        title=title,
        description=description,
        status=status,
        id=entity_id,
        epic_id=_parse_id(fields[5], "epic_id"),
    )


def read_entities(stream: TextIO, path: str | Path) -> list[Entity]:
    """
    Parse every non-blank record of `stream`.

    Raises MalformedLineError on the first bad record, including duplicate ids
    and subtasks whose epic never appears in the file.
    """
    previous_limit = csv.field_size_limit(_FIELD_SIZE_LIMIT)
    try:
        return _read_records(stream, path)
    finally:
        csv.field_size_limit(previous_limit)


def _read_records(stream: TextIO, path: str | Path) -> list[Entity]:
    reader = csv.reader(stream, strict=True)
    seen: set[int] = set()
    epic_ids: set[int] = set()
    subtask_lines: list[tuple[int, list[str], Subtask]] = []
    entities: list[Entity] = []

    while True:
        try:
            fields = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            raise MalformedLineError(str(exc), path, line_no=reader.line_num, line="") from exc

        if not fields:
            continue
        line_no = reader.line_num
        try:
            entity = parse_fields(fields)
        except ValueError as exc:
            raise MalformedLineError(
                str(exc), path, line_no=line_no, line=",".join(fields)
            ) from exc

        if entity.id in seen:
            raise MalformedLineError(
                f"duplicate id {entity.id}", path, line_no=line_no, line=",".join(fields)
            )
        seen.add(entity.id)

        if isinstance(entity, Epic):
            epic_ids.add(entity.id)
        elif isinstance(entity, Subtask):
            subtask_lines.append((line_no, fields, entity))
        entities.append(entity)

    for line_no, fields, subtask in subtask_lines:
        if subtask.epic_id not in epic_ids:
            raise MalformedLineError(
                f"unknown epic_id {subtask.epic_id}", path, line_no=line_no, line=",".join(fields)
            )

    return entities
