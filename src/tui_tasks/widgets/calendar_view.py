"""Month calendar widget: 6x7 grid beside the selected day's task list."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.coordinate import Coordinate
from textual.message import Message
from textual.widgets import DataTable, Static

from tui_tasks.calendar_grid import (
    CELL_WIDTH,
    COLS,
    ROWS,
    WEEKDAY_NAMES,
    CalendarCell,
    MonthCalendar,
    cell_label,
)
from tui_tasks.filters import nothing
from tui_tasks.models import DEFAULT_DATE_FORMAT
from tui_tasks.store import TaskStore
from tui_tasks.task_list import TaskListModel
from tui_tasks.theme import Theme
from tui_tasks.widgets.task_list_view import TaskListView

LEGEND = "←/→/↑/↓ or h/j/k/l move  •  </> month (PgUp/PgDn)  •  t today  •  a add  •  w week  •  d day  •  Enter list"


def styled_cell(cell: CalendarCell, theme: Theme, brackets: bool = True) -> Text:
    text = Text(cell_label(cell, brackets))
    if not cell.in_month:
        text.stylize(theme.outside_month)
    if cell.is_today:
        text.stylize(theme.today)
    if brackets and cell.is_selected:
        text.stylize(theme.selected, 1, 5)
    if cell.task_count:
        dot = text.plain.rfind("•")
        text.stylize(theme.badge, dot, dot + 1)
    return text


class MonthGrid(DataTable):
    """Fixed 6x7 cell table. Cursor keys become date steps, not cell moves."""

    BINDINGS = [
        Binding("h", "cursor_left", "Prev day", show=False),
        Binding("l", "cursor_right", "Next day", show=False),
        Binding("k", "cursor_up", "Prev week", show=False),
        Binding("j", "cursor_down", "Next week", show=False),
        Binding("less_than_sign", "page_up", "Prev month", show=False),
        Binding("greater_than_sign", "page_down", "Next month", show=False),
    ]

    class DayStep(Message):
        def __init__(self, delta: int) -> None:
            super().__init__()
            self.delta = delta

    class MonthStep(Message):
        def __init__(self, delta: int) -> None:
            super().__init__()
            self.delta = delta

    class Activated(Message):
        """Enter pressed on the grid."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id, cursor_type="cell", zebra_stripes=False)

    def on_mount(self) -> None:
        for col, name in enumerate(WEEKDAY_NAMES):
            self.add_column(name, key=str(col), width=CELL_WIDTH)
        for row in range(ROWS):
            self.add_row(*([""] * COLS), key=str(row))

    def action_cursor_left(self) -> None:
        self.post_message(self.DayStep(-1))

    def action_cursor_right(self) -> None:
        self.post_message(self.DayStep(1))

    def action_cursor_up(self) -> None:
        self.post_message(self.DayStep(-COLS))

    def action_cursor_down(self) -> None:
        self.post_message(self.DayStep(COLS))

    def action_page_up(self) -> None:
        self.post_message(self.MonthStep(-1))

    def action_page_down(self) -> None:
        self.post_message(self.MonthStep(1))

    def action_select_cursor(self) -> None:
        self.post_message(self.Activated())


class CalendarView(Horizontal):
    """Month grid on the left, the selected day's tasks on the right."""

    DEFAULT_CSS = """
    CalendarView {
        height: 1fr;
    }
    CalendarView #calendar-left {
        width: auto;
        padding: 0 1;
    }
    CalendarView #calendar-title {
        text-style: bold;
        height: 1;
    }
    CalendarView MonthGrid {
        width: auto;
        height: auto;
    }
    CalendarView #calendar-legend {
        color: $text-muted;
        width: 60;
        margin-top: 1;
    }
    CalendarView #day-list {
        border: round $surface-lighten-2;
        border-title-align: left;
    }
    CalendarView #day-list:focus-within {
        border: round $accent;
    }
    """

    BINDINGS = [
        Binding("t", "today", "Today"),
        Binding("a", "add", "Add"),
        Binding("w", "week", "Week"),
        Binding("d", "day", "Day"),
    ]

    class OpenWeek(Message):
        def __init__(self, day: date) -> None:
            super().__init__()
            self.day = day

    class OpenDay(Message):
        def __init__(self, day: date) -> None:
            super().__init__()
            self.day = day

    def __init__(
        self,
        store: TaskStore,
        *,
        theme: Theme | None = None,
        today: Callable[[], date] = date.today,
        date_format: str = DEFAULT_DATE_FORMAT,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self.store = store
        self._theme = theme or Theme()
        self._painted = False
        self._today = today
        day_list = TaskListModel(store, nothing(), date_format)
        self.calendar = MonthCalendar(store, day_list=day_list, today=today)

    def compose(self) -> ComposeResult:
        with Vertical(id="calendar-left"):
            yield Static("", id="calendar-title")
            yield MonthGrid(id="month-grid")
            yield Static(LEGEND, id="calendar-legend")
        yield TaskListView(
            self.store,
            self.calendar.day_list,
            theme=self._theme,
            show_filter_bar=False,
            new_task=self.calendar.new_task,
            today=self._today,
            id="day-list",
        )

    def on_mount(self) -> None:
        self.call_after_refresh(self.repaint)

    def repaint(self) -> None:
        """Redraw title, 42 cells and the day panel from the model."""
        self.query_one("#calendar-title", Static).update(self.calendar.title)
        grid = self.query_one(MonthGrid)
        if grid.row_count < ROWS:
            return
        for r, row in enumerate(self.calendar.build()):
            for c, cell in enumerate(row):
                grid.update_cell_at(Coordinate(r, c), styled_cell(cell, self._theme))
        position = self.calendar.selected_position
        if position is not None:
            grid.move_cursor(row=position[0], column=position[1], animate=False)
        self._painted = True
        day_list = self.query_one("#day-list", TaskListView)
        day_list.border_title = self.calendar.day_title
        day_list.repaint()

    def refresh_calendar(self) -> None:
        """Re-derive counts and the day panel after an external change."""
        self.calendar.refresh()
        self.repaint()

    def select_date(self, target: date) -> None:
        self.calendar.select_date(target)
        self.repaint()

    def focus_grid(self) -> None:
        self.query_one(MonthGrid).focus()

    # ── Grid events ──

    def on_month_grid_day_step(self, event: MonthGrid.DayStep) -> None:
        event.stop()
        self.calendar.move_days(event.delta)
        self.repaint()

    def on_month_grid_month_step(self, event: MonthGrid.MonthStep) -> None:
        event.stop()
        self.calendar.shift_month(event.delta)
        self.repaint()

    def on_month_grid_activated(self, event: MonthGrid.Activated) -> None:
        event.stop()
        self.query_one("#day-list", TaskListView).focus_table()

    def _follow_grid(self, event: DataTable.CellHighlighted | DataTable.CellSelected) -> None:
        row, col = event.coordinate
        if self.calendar.cell_date(row, col) == self.calendar.selected:
            return
        self.calendar.select_cell(row, col)
        self.repaint()

    def on_data_table_cell_highlighted(self, event: DataTable.CellHighlighted) -> None:
        if not isinstance(event.data_table, MonthGrid):
            return
        event.stop()
        if not self._painted or event.coordinate != event.data_table.cursor_coordinate:
            return  # stale, a repaint has moved the cursor since
        self._follow_grid(event)

    def on_data_table_cell_selected(self, event: DataTable.CellSelected) -> None:
        if not isinstance(event.data_table, MonthGrid):
            return
        event.stop()
        self._follow_grid(event)

    def on_task_list_view_changed(self, event: TaskListView.Changed) -> None:
        # Counts changed; the event keeps bubbling to the app.
        self.repaint()

    # ── Actions ──

    def action_today(self) -> None:
        self.calendar.go_today()
        self.repaint()

    def action_add(self) -> None:
        self.query_one("#day-list", TaskListView).binder.add()

    def action_week(self) -> None:
        if self.calendar.selected is not None:
            self.post_message(self.OpenWeek(self.calendar.selected))

    def action_day(self) -> None:
        if self.calendar.selected is not None:
            self.post_message(self.OpenDay(self.calendar.selected))
