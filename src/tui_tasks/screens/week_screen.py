"""Week screen: a Monday-first strip of seven days above the day's tasks."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from textual.app import ComposeResult
from textual.binding import Binding
from textual.coordinate import Coordinate
from textual.message import Message
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Static

from tui_tasks.calendar_grid import CELL_WIDTH, COLS, WEEKDAY_NAMES, WeekStrip
from tui_tasks.filters import nothing
from tui_tasks.models import DEFAULT_DATE_FORMAT
from tui_tasks.screens.day_screen import DayScreen
from tui_tasks.store import TaskStore
from tui_tasks.task_list import TaskListModel
from tui_tasks.theme import Theme
from tui_tasks.widgets.calendar_view import styled_cell
from tui_tasks.widgets.task_list_view import TaskListView

LEGEND = "←/→ or h/l day  •  t today  •  a add  •  Enter focus list  •  d day  •  Esc close"


class WeekStripTable(DataTable):
    """One row, seven columns. Left/right step days and may slide the week."""

    BINDINGS = [
        Binding("h", "cursor_left", "Prev day", show=False),
        Binding("l", "cursor_right", "Next day", show=False),
    ]

    class DayStep(Message):
        def __init__(self, delta: int) -> None:
            super().__init__()
            self.delta = delta

    class Activated(Message):
        """Enter pressed on the strip."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id, cursor_type="cell", zebra_stripes=False)

    def on_mount(self) -> None:
        for col, name in enumerate(WEEKDAY_NAMES):
            self.add_column(name, key=str(col), width=CELL_WIDTH)
        self.add_row(*([""] * COLS), key="week")

    def action_cursor_left(self) -> None:
        self.post_message(self.DayStep(-1))

    def action_cursor_right(self) -> None:
        self.post_message(self.DayStep(1))

    def action_cursor_up(self) -> None:
        pass

    def action_cursor_down(self) -> None:
        pass

    def action_select_cursor(self) -> None:
        self.post_message(self.Activated())


class WeekScreen(Screen[None]):
    """Seven days starting Monday; the selected day's tasks sit below."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("t", "today", "Today"),
        Binding("a", "add", "Add"),
        Binding("d", "day", "Day"),
    ]

    DEFAULT_CSS = """
    WeekScreen #week-title {
        height: 1;
        padding: 0 1;
        text-style: bold;
    }
    WeekScreen WeekStripTable {
        height: auto;
        margin: 0 1;
    }
    WeekScreen #week-legend {
        color: $text-muted;
        padding: 0 1;
    }
    WeekScreen #week-tasks {
        border: round $surface-lighten-2;
        border-title-align: left;
    }
    WeekScreen #week-tasks:focus-within {
        border: round $accent;
    }
    """

    def __init__(
        self,
        store: TaskStore,
        seed: date | None = None,
        *,
        theme: Theme | None = None,
        today: Callable[[], date] = date.today,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        super().__init__()
        self.store = store
        self._theme = theme or Theme()
        self._today = today
        self._date_format = date_format
        self._painted = False
        day_list = TaskListModel(store, nothing(), date_format)
        self.week = WeekStrip(store, seed=seed, day_list=day_list, today=today)

    def compose(self) -> ComposeResult:
        yield Static("", id="week-title")
        yield WeekStripTable(id="week-strip")
        yield Static(LEGEND, id="week-legend")
        yield TaskListView(
            self.store,
            self.week.day_list,
            theme=self._theme,
            show_filter_bar=False,
            new_task=self.week.new_task,
            today=self._today,
            id="week-tasks",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(WeekStripTable).focus()
        self.call_after_refresh(self.repaint)

    def repaint(self) -> None:
        self.query_one("#week-title", Static).update(self.week.title)
        strip = self.query_one(WeekStripTable)
        if strip.row_count < 1:
            return
        for col, cell in enumerate(self.week.build()):
            strip.update_cell_at(Coordinate(0, col), styled_cell(cell, self._theme, brackets=False))
        strip.move_cursor(row=0, column=self.week.column, animate=False)
        self._painted = True
        tasks = self.query_one("#week-tasks", TaskListView)
        tasks.border_title = self.week.day_title
        tasks.repaint()

    def refresh_week(self) -> None:
        self.week.refresh()
        self.repaint()

    # ── Events ──

    def on_week_strip_table_day_step(self, event: WeekStripTable.DayStep) -> None:
        event.stop()
        self.week.move_days(event.delta)
        self.repaint()

    def on_week_strip_table_activated(self, event: WeekStripTable.Activated) -> None:
        event.stop()
        self.query_one("#week-tasks", TaskListView).focus_table()

    def on_data_table_cell_highlighted(self, event: DataTable.CellHighlighted) -> None:
        if not isinstance(event.data_table, WeekStripTable):
            return
        event.stop()
        if not self._painted or event.coordinate != event.data_table.cursor_coordinate:
            return
        if event.coordinate.column != self.week.column:
            self.week.select_column(event.coordinate.column)
            self.repaint()

    def on_data_table_cell_selected(self, event: DataTable.CellSelected) -> None:
        if not isinstance(event.data_table, WeekStripTable):
            return
        event.stop()
        self.week.select_column(event.coordinate.column)
        self.repaint()

    def on_task_list_view_changed(self, event: TaskListView.Changed) -> None:
        self.repaint()

    # ── Actions ──

    def action_today(self) -> None:
        self.week.go_today()
        self.repaint()

    def action_add(self) -> None:
        self.query_one("#week-tasks", TaskListView).binder.add()

    def action_day(self) -> None:
        if self.week.selected is None:
            return
        screen = DayScreen(
            self.store,
            self.week.selected,
            theme=self._theme,
            today=self._today,
            date_format=self._date_format,
        )
        self.app.push_screen(screen, callback=lambda _: self.refresh_week())

    def action_close(self) -> None:
        self.dismiss(None)
