"""Data models for TUI Tasks."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum


class Priority(Enum):
    """Task priority."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


DATE_FORMAT_PRESETS: dict[str, str] = {
    "YYYY-MM-DD": "%Y-%m-%d",
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "DD.MM.YYYY": "%d.%m.%Y",
    "YYYY/MM/DD": "%Y/%m/%d",
    "MMM DD, YYYY": "%b %d, %Y",
}
DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

TIME_FORMAT = "%H:%M"
TIME_RANGE_SEP = "–"


class TaskValidationError(ValueError):
    """Raised when edit-form input cannot be committed to a task."""


@dataclass
class Task:
    """A single task. Mutable: the edit flow changes fields in place."""

    title: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    done: bool = False
    due: date | None = None
    created_at: date = field(default_factory=date.today)
    priority: Priority = Priority.MEDIUM
    notes: str = ""
    tags: list[str] = field(default_factory=list)
    start_time: time | None = None
    end_time: time | None = None

    @property
    def checkbox(self) -> str:
        return "[x]" if self.done else "[ ]"

    @property
    def time_range(self) -> str:
        """Start–end, whichever one is set, or empty string."""
        return format_time_range(self.start_time, self.end_time)

    def is_overdue(self, today: date) -> bool:
        return self.due is not None and self.due < today and not self.done


def format_date(d: date | None, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a date for display. Returns empty string for None."""
    if d is None:
        return ""
    fmt = DATE_FORMAT_PRESETS.get(date_format)
    if fmt is None:
        return d.isoformat()
    return d.strftime(fmt)


def format_time(t: time | None) -> str:
    if t is None:
        return ""
    return t.strftime(TIME_FORMAT)


def format_time_range(start: time | None, end: time | None) -> str:
    if start is not None and end is not None:
        return f"{format_time(start)}{TIME_RANGE_SEP}{format_time(end)}"
    if start is not None:
        return format_time(start)
    if end is not None:
        return format_time(end)
    return ""


def parse_time(text: str) -> time | None:
    """Parse a strict 24-hour ``HH:MM`` string. Blank → None.

    Raises ValueError on anything else (``9:5``, ``24:00``, ``noon``).
    """
    s = text.strip()
    if not s:
        return None
    if len(s) != 5 or s[2] != ":":
        raise ValueError(f"Invalid time: {text!r} (use HH:MM)")
    return datetime.strptime(s, TIME_FORMAT).time()


def parse_due(text: str) -> date | None:
    """Leniently parse a due date. Unparseable input → None (no due date)."""
    s = text.strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    for fmt in DATE_FORMAT_PRESETS.values():
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def parse_tags(text: str) -> list[str]:
    """Split a comma-separated tag string, dropping blanks and duplicates."""
    tags: list[str] = []
    for raw in text.split(","):
        tag = raw.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_priority(text: str, default: Priority = Priority.MEDIUM) -> Priority:
    value = text.strip().lower()
    for p in Priority:
        if p.value.lower() == value or p.name.lower() == value:
            return p
    return default


def collect_task_changes(
    *,
    title: str,
    due: str = "",
    start: str = "",
    end: str = "",
    priority: str = "",
    tags: str = "",
    notes: str = "",
    done: bool = False,
) -> dict:
    """Validate raw edit-form values and return the field values to commit.

    Raises TaskValidationError for an empty title, a malformed time, or an
    end time before the start time. The due date never fails validation.
    """
    clean_title = title.strip()
    if not clean_title:
        raise TaskValidationError("Title is required.")

    try:
        start_time = parse_time(start)
    except ValueError:
        raise TaskValidationError("Invalid start time (HH:MM).") from None
    try:
        end_time = parse_time(end)
    except ValueError:
        raise TaskValidationError("Invalid end time (HH:MM).") from None
    if start_time is not None and end_time is not None and end_time < start_time:
        raise TaskValidationError("End time must be after start time.")

    return {
        "title": clean_title,
        "due": parse_due(due),
        "start_time": start_time,
        "end_time": end_time,
        "priority": parse_priority(priority),
        "tags": parse_tags(tags),
        "notes": notes.strip(),
        "done": done,
    }


def apply_changes(task: Task, changes: dict) -> Task:
    """Write collected changes onto *task* in place."""
    for key, value in changes.items():
        setattr(task, key, value)
    return task
