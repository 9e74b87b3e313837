"""Selection cursor over a flattened row sequence."""

from __future__ import annotations

from collections.abc import Sequence

from tui_tasks.rows import DisplayRow


class SelectionCursor:
    """Row index that always rests on a header row, or None when empty."""

    def __init__(self, rows: Sequence[DisplayRow] = ()) -> None:
        self._rows: Sequence[DisplayRow] = rows
        self._index: int | None = None
        self.move_to_first_header()

    @property
    def index(self) -> int | None:
        return self._index

    @property
    def rows(self) -> Sequence[DisplayRow]:
        return self._rows

    @property
    def current(self) -> DisplayRow | None:
        if self._index is None:
            return None
        return self._rows[self._index]

    @property
    def task_id(self) -> str | None:
        row = self.current
        return row.task_id if row else None

    def move_to_adjacent_header(self, direction: int) -> None:
        """Step toward the next (+1) or previous (-1) header; no wrap."""
        if self._index is None or not self._rows:
            return
        step = 1 if direction > 0 else -1
        i = self._index + step
        while 0 <= i < len(self._rows):
            if self._rows[i].is_header:
                self._index = i
                return
            i += step

    def move_to_first_header(self) -> None:
        for i, row in enumerate(self._rows):
            if row.is_header:
                self._index = i
                return
        self._index = None

    def move_to_last_header(self) -> None:
        for i in range(len(self._rows) - 1, -1, -1):
            if self._rows[i].is_header:
                self._index = i
                return
        self._index = None

    def select_row(self, index: int) -> None:
        """Point at *index*, snapping back to the header that owns it."""
        if not self._rows:
            self._index = None
            return
        self._index = self._snap(max(0, min(index, len(self._rows) - 1)))

    def select_task(self, task_id: str) -> bool:
        for i, row in enumerate(self._rows):
            if row.is_header and row.task_id == task_id:
                self._index = i
                return True
        return False

    def reanchor(self, rows: Sequence[DisplayRow], previous_task_id: str | None) -> None:
        """Adopt a freshly built row sequence.

        Prefer the header of *previous_task_id*; otherwise keep the old
        numeric position clamped into range and snapped to a header.
        """
        old_index = self._index
        self._rows = rows
        if not rows:
            self._index = None
            return
        if previous_task_id is not None and self.select_task(previous_task_id):
            return
        if old_index is None:
            self.move_to_first_header()
            return
        self._index = self._snap(min(old_index, len(rows) - 1))

    def _snap(self, i: int) -> int | None:
        while i >= 0 and not self._rows[i].is_header:
            i -= 1
        if i >= 0:
            return i
        # No header at or before i: take the first one after it.
        for j, row in enumerate(self._rows):
            if row.is_header:
                return j
        return None
