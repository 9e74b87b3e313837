"""Task list view-model shared by every view surface.

Combines the store, the active filter, the filter-scoped expanded set, the
flattened rows and the selection cursor.
"""

from __future__ import annotations

from enum import Enum

from tui_tasks.cursor import SelectionCursor
from tui_tasks.filters import TaskFilter, all_tasks
from tui_tasks.models import DEFAULT_DATE_FORMAT, Task
from tui_tasks.rows import DisplayRow, flatten_rows
from tui_tasks.store import TaskStore


class ListCommand(Enum):
    """Abstract commands a task list understands, independent of key codes."""

    MOVE_NEXT = "move_next"
    MOVE_PREV = "move_prev"
    MOVE_FIRST = "move_first"
    MOVE_LAST = "move_last"
    TOGGLE_EXPAND = "toggle_expand"
    EXPAND = "expand"
    COLLAPSE = "collapse"
    ADD = "add"
    EDIT = "edit"
    TOGGLE_DONE = "toggle_done"
    DELETE = "delete"


class TaskListModel:
    """Filtered, flattened, cursor-addressable view of a task store."""

    def __init__(
        self,
        store: TaskStore,
        task_filter: TaskFilter | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        self._store = store
        self.date_format = date_format
        self._filter = task_filter or all_tasks()
        self._expanded: set[str] = set()
        self._rows: list[DisplayRow] = []
        self._tasks_by_id: dict[str, Task] = {}
        self.cursor = SelectionCursor()
        self.refresh()

    @property
    def filter(self) -> TaskFilter:
        return self._filter

    @property
    def filter_label(self) -> str:
        return self._filter.label.strip() or "Custom"

    @property
    def rows(self) -> list[DisplayRow]:
        return self._rows

    @property
    def expanded(self) -> frozenset[str]:
        return frozenset(self._expanded)

    def set_filter(self, task_filter: TaskFilter | None) -> None:
        """Replace the active filter: clears expansion and resets the cursor."""
        self._filter = task_filter or all_tasks()
        self._expanded.clear()
        self._rebuild()
        self.cursor.reanchor(self._rows, None)
        self.cursor.move_to_first_header()

    def refresh(self) -> None:
        """Recompute rows from the store and re-anchor on the selected task."""
        previous = self.cursor.task_id
        self._rebuild()
        self.cursor.reanchor(self._rows, previous)

    def _rebuild(self) -> None:
        tasks = self._store.list_tasks()
        self._rows = flatten_rows(tasks, self._filter, self._expanded, self.date_format)
        self._tasks_by_id = {t.id: t for t in tasks}
        # Drop ids that no longer exist so a recreated id starts collapsed.
        self._expanded.intersection_update(self._tasks_by_id)

    def selected_task(self) -> Task | None:
        task_id = self.cursor.task_id
        if task_id is None:
            return None
        return self._tasks_by_id.get(task_id)

    def get_task(self, task_id: str) -> Task | None:
        return self._tasks_by_id.get(task_id)

    def headers(self) -> list[DisplayRow]:
        return [r for r in self._rows if r.is_header]

    # Navigation
    def move_next(self) -> None:
        self.cursor.move_to_adjacent_header(1)

    def move_prev(self) -> None:
        self.cursor.move_to_adjacent_header(-1)

    def move_first(self) -> None:
        self.cursor.move_to_first_header()

    def move_last(self) -> None:
        self.cursor.move_to_last_header()

    def select_row(self, index: int) -> None:
        self.cursor.select_row(index)

    def select_task(self, task_id: str) -> bool:
        return self.cursor.select_task(task_id)

    # Expansion
    def toggle_expand(self) -> None:
        task_id = self.cursor.task_id
        if task_id is None:
            return
        if task_id in self._expanded:
            self._expanded.discard(task_id)
        else:
            self._expanded.add(task_id)
        self.refresh()

    def expand(self) -> None:
        task_id = self.cursor.task_id
        if task_id is None or task_id in self._expanded:
            return
        self._expanded.add(task_id)
        self.refresh()

    def collapse(self) -> None:
        task_id = self.cursor.task_id
        if task_id is None or task_id not in self._expanded:
            return
        self._expanded.discard(task_id)
        self.refresh()
