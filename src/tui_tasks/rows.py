"""Flatten filtered tasks into display rows (header + optional detail lines)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from tui_tasks.filters import TaskFilter
from tui_tasks.models import DEFAULT_DATE_FORMAT, Task, format_date


class RowKind(Enum):
    HEADER = "header"
    DETAIL = "detail"


@dataclass(frozen=True)
class DisplayRow:
    """One line of a flattened task list."""

    task_id: str
    kind: RowKind
    text: str

    @property
    def is_header(self) -> bool:
        return self.kind is RowKind.HEADER


def header_text(task: Task) -> str:
    """``[x] 09:00–10:00 Title``; the time prefix only when a time is set."""
    when = task.time_range
    prefix = f"{when} " if when else ""
    return f"{task.checkbox} {prefix}{task.title}"


def detail_lines(task: Task, date_format: str = DEFAULT_DATE_FORMAT) -> list[str]:
    """Detail lines in fixed order; blank values are skipped."""
    fields = [
        ("Tags", ", ".join(task.tags)),
        ("Priority", task.priority.value),
        ("Notes", task.notes),
        ("Date", format_date(task.due, date_format)),
        ("Time", task.time_range),
    ]
    return [f"  - {label}: {value}" for label, value in fields if value.strip()]


def flatten_rows(
    tasks: Iterable[Task],
    task_filter: TaskFilter,
    expanded: set[str] | frozenset[str],
    date_format: str = DEFAULT_DATE_FORMAT,
) -> list[DisplayRow]:
    """Build the row sequence for *tasks* that pass *task_filter*.

    Store order is preserved. Each passing task yields one header, followed
    by its detail rows only when its id is in *expanded*.
    """
    rows: list[DisplayRow] = []
    for task in tasks:
        if not task_filter(task):
            continue
        rows.append(DisplayRow(task.id, RowKind.HEADER, header_text(task)))
        if task.id in expanded:
            rows.extend(
                DisplayRow(task.id, RowKind.DETAIL, line) for line in detail_lines(task, date_format)
            )
    return rows
