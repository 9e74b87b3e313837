"""Task filter catalog.

Every constructor returns a ``TaskFilter``: a pure predicate over a task plus
a human-readable label. Date-relative filters take an optional ``today``; when
omitted, the current date is read each time the predicate runs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

from tui_tasks.models import Task


@dataclass(frozen=True)
class TaskFilter:
    """A predicate with a display label."""

    predicate: Callable[[Task], bool]
    label: str

    def __call__(self, task: Task) -> bool:
        return self.predicate(task)

    def apply(self, tasks: list[Task]) -> list[Task]:
        return [t for t in tasks if self.predicate(t)]


def _today(today: date | None) -> date:
    return today if today is not None else date.today()


def all_tasks() -> TaskFilter:
    return TaskFilter(lambda t: True, "All")


def nothing(label: str = "No day") -> TaskFilter:
    return TaskFilter(lambda t: False, label)


def open_tasks() -> TaskFilter:
    return TaskFilter(lambda t: not t.done, "Open")


def done_tasks() -> TaskFilter:
    return TaskFilter(lambda t: t.done, "Done")


def created_today(today: date | None = None) -> TaskFilter:
    return TaskFilter(lambda t: t.created_at == _today(today), "Today")


def due_today(today: date | None = None) -> TaskFilter:
    return TaskFilter(
        lambda t: t.due is not None and t.due == _today(today), "Due Today"
    )


def overdue(today: date | None = None) -> TaskFilter:
    return TaskFilter(lambda t: t.is_overdue(_today(today)), "Overdue")


def due_within_days(n: int, today: date | None = None) -> TaskFilter:
    """Due on or before today + n days. Past-due and done tasks still match."""
    return TaskFilter(
        lambda t: t.due is not None and t.due <= _today(today) + timedelta(days=n),
        f"Due ≤ {n} days",
    )


def title_contains(query: str) -> TaskFilter:
    q = query.lower()
    return TaskFilter(
        lambda t: bool(q.strip()) and q in t.title.lower(),
        f'Title contains "{query}"',
    )


def tag_contains(query: str) -> TaskFilter:
    q = query.lower()
    return TaskFilter(
        lambda t: bool(q.strip()) and any(q in tag.lower() for tag in t.tags),
        f'Tag contains "{query}"',
    )


def due_on(day: date) -> TaskFilter:
    """Date equality used by the calendar, week and day views."""
    return TaskFilter(lambda t: t.due is not None and t.due == day, day.isoformat())


# Named presets, used by config (default_filter) and the command palette.
FILTER_PRESETS: dict[str, Callable[[], TaskFilter]] = {
    "all": all_tasks,
    "open": open_tasks,
    "done": done_tasks,
    "today": created_today,
    "due-today": due_today,
    "overdue": overdue,
}
DEFAULT_FILTER = "all"


def filter_by_name(name: str) -> TaskFilter:
    """Return the preset filter for *name*, falling back to All."""
    factory = FILTER_PRESETS.get(name, FILTER_PRESETS[DEFAULT_FILTER])
    return factory()
