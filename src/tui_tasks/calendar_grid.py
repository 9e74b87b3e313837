"""Calendar geometry: Monday-first month grid, week strip and day-hour gutter.

Month and week models keep a selected date and push a ``due == date`` filter
into the day task list that sits beside them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, time, timedelta

from tui_tasks.filters import TaskFilter, due_on, nothing
from tui_tasks.models import Task
from tui_tasks.store import TaskStore
from tui_tasks.task_list import TaskListModel

ROWS = 6
COLS = 7
HOURS = 24
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

Today = Callable[[], date]


def monday_of(d: date) -> date:
    """Monday of the week containing *d*."""
    return d - timedelta(days=d.weekday())


def first_of_month(d: date) -> date:
    return d.replace(day=1)


def add_months(month: date, delta: int) -> date:
    """First day of the month *delta* months from *month*."""
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def task_counts(store: TaskStore) -> dict[date, int]:
    """Number of tasks due per date."""
    counts: dict[date, int] = {}
    for task in store.list_tasks():
        if task.due is not None:
            counts[task.due] = counts.get(task.due, 0) + 1
    return counts


def day_title(d: date | None) -> str:
    """Day panel title: ``Friday, 15 Mar 2024`` or ``Day``."""
    if d is None:
        return "Day"
    return d.strftime("%A, %d %b %Y")


@dataclass(frozen=True)
class CalendarCell:
    """Ephemeral projection of one calendar date."""

    date: date
    task_count: int
    is_today: bool
    is_selected: bool
    in_month: bool = True


class _DaySelection:
    """Shared plumbing: selected date → day list filter and panel title."""

    def __init__(self, store: TaskStore, day_list: TaskListModel | None, today: Today) -> None:
        self._store = store
        self._today = today
        self.day_list = day_list if day_list is not None else TaskListModel(store, nothing())
        self.selected: date | None = None

    @property
    def day_title(self) -> str:
        return day_title(self.selected)

    def day_filter(self) -> TaskFilter:
        if self.selected is None:
            return nothing("No day")
        return due_on(self.selected)

    def _sync_day_list(self) -> None:
        self.day_list.set_filter(self.day_filter())

    def _cell(self, d: date, counts: dict[date, int], in_month: bool = True) -> CalendarCell:
        return CalendarCell(
            date=d,
            task_count=counts.get(d, 0),
            is_today=d == self._today(),
            is_selected=d == self.selected,
            in_month=in_month,
        )

    def new_task(self) -> Task:
        """Skeleton for a quick add on the selected date."""
        return Task(due=self.selected or self._today())


class MonthCalendar(_DaySelection):
    """Fixed 6x7 month grid anchored on the first day of a month."""

    def __init__(
        self,
        store: TaskStore,
        month: date | None = None,
        selected: date | None = None,
        day_list: TaskListModel | None = None,
        today: Today = date.today,
    ) -> None:
        super().__init__(store, day_list, today)
        target = selected or month or today()
        self.month = first_of_month(month or target)
        self._select_in_month(selected)

    @property
    def title(self) -> str:
        return self.month.strftime("%B %Y")

    def grid_start(self) -> date:
        delta = self.month.weekday()  # Monday=0..Sunday=6
        return self.month - timedelta(days=delta)

    def cell_date(self, row: int, col: int) -> date:
        return self.grid_start() + timedelta(days=row * COLS + col)

    def dates(self) -> list[list[date]]:
        return [[self.cell_date(r, c) for c in range(COLS)] for r in range(ROWS)]

    def position_of(self, d: date) -> tuple[int, int] | None:
        offset = (d - self.grid_start()).days
        if 0 <= offset < ROWS * COLS:
            return divmod(offset, COLS)
        return None

    @property
    def selected_position(self) -> tuple[int, int] | None:
        if self.selected is None:
            return None
        return self.position_of(self.selected)

    def build(self) -> list[list[CalendarCell]]:
        """Recompute all 42 cells, counts included."""
        counts = task_counts(self._store)
        return [
            [
                self._cell(d, counts, in_month=(d.year, d.month) == (self.month.year, self.month.month))
                for d in row
            ]
            for row in self.dates()
        ]

    def set_month(self, year: int, month: int, select: date | None = None) -> None:
        self.month = date(year, month, 1)
        self._select_in_month(select)

    def _select_in_month(self, target: date | None) -> None:
        """Select *target*, or today, or the 1st, whichever lies in the month."""
        today = self._today()
        candidates = [target, today, self.month]
        for d in candidates:
            if d is not None and (d.year, d.month) == (self.month.year, self.month.month):
                self.selected = d
                break
        self._sync_day_list()

    def select_date(self, target: date) -> None:
        """Select *target*; dates outside the month rebuild on its month."""
        if (target.year, target.month) != (self.month.year, self.month.month):
            self.set_month(target.year, target.month, select=target)
            return
        self.selected = target
        self._sync_day_list()

    def select_cell(self, row: int, col: int) -> None:
        if 0 <= row < ROWS and 0 <= col < COLS:
            self.select_date(self.cell_date(row, col))

    def move_days(self, delta: int) -> None:
        base = self.selected or self.month
        self.select_date(base + timedelta(days=delta))

    def shift_month(self, delta: int) -> None:
        """Previous/next month, keeping the day of month when it exists."""
        new_month = add_months(self.month, delta)
        keep: date | None = None
        if self.selected is not None:
            try:
                keep = new_month.replace(day=self.selected.day)
            except ValueError:
                keep = None
        self.set_month(new_month.year, new_month.month, select=keep)

    def prev_month(self) -> None:
        self.shift_month(-1)

    def next_month(self) -> None:
        self.shift_month(1)

    def go_today(self) -> None:
        today = self._today()
        self.set_month(today.year, today.month, select=today)

    def refresh(self) -> None:
        """Re-derive the day list after an external mutation."""
        self.day_list.refresh()


class WeekStrip(_DaySelection):
    """Seven Monday-first columns that slide with the selected date."""

    def __init__(
        self,
        store: TaskStore,
        seed: date | None = None,
        day_list: TaskListModel | None = None,
        today: Today = date.today,
    ) -> None:
        super().__init__(store, day_list, today)
        self.seed = seed or today()
        self.monday = monday_of(self.seed)
        self.column = 0
        self._paint(self.seed)

    @property
    def title(self) -> str:
        return f"Week of {self.monday.strftime('%d %b %Y')}"

    def dates(self) -> list[date]:
        return [self.monday + timedelta(days=c) for c in range(COLS)]

    def build(self) -> list[CalendarCell]:
        counts = task_counts(self._store)
        return [self._cell(d, counts) for d in self.dates()]

    def _paint(self, target: date) -> None:
        self.monday = monday_of(target)
        self.column = max(0, min((target - self.monday).days, COLS - 1))
        self.selected = self.monday + timedelta(days=self.column)
        self._sync_day_list()

    def select_column(self, col: int) -> None:
        col = max(0, min(col, COLS - 1))
        self._paint(self.monday + timedelta(days=col))

    def select_date(self, target: date) -> None:
        self._paint(target)

    def move_days(self, delta: int) -> None:
        base = self.selected or self.monday
        self._paint(base + timedelta(days=delta))

    def go_today(self) -> None:
        self.seed = self._today()
        self._paint(self.seed)

    def refresh(self) -> None:
        self.day_list.refresh()


class DayHourGutter:
    """24 hour slots for one day. The caller owns the selected hour."""

    def __init__(self, day: date) -> None:
        self.day = day

    @staticmethod
    def labels() -> list[str]:
        return [f"{h:02d}:00" for h in range(HOURS)]

    @staticmethod
    def clamp(hour: int) -> int:
        return max(0, min(hour, HOURS - 1))

    def new_task(self, hour: int) -> Task:
        """Skeleton due on this day, starting at *hour*:00."""
        return Task(due=self.day, start_time=time(self.clamp(hour), 0))


CELL_WIDTH = 8


def cell_label(cell: CalendarCell, brackets: bool = True) -> str:
    """``*[15]  •``: today mark, day number, task badge.

    Brackets mark the selected cell in the month grid; the week strip
    relies on its table cursor instead.
    """
    mark = "*" if cell.is_today else " "
    day = f"{cell.date.day:>2}"
    if brackets and cell.is_selected:
        day = f"[{day}]"
    else:
        day = f" {day}"
    badge = "  •" if cell.task_count else ""
    return f"{mark}{day}{badge}".ljust(CELL_WIDTH)
