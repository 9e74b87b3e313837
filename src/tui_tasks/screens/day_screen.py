"""Day screen: 24-hour gutter beside the tasks due on one date."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, OptionList, Static

from tui_tasks.calendar_grid import DayHourGutter, day_title
from tui_tasks.filters import due_on
from tui_tasks.models import DEFAULT_DATE_FORMAT, Task
from tui_tasks.store import TaskStore
from tui_tasks.task_list import TaskListModel
from tui_tasks.theme import Theme
from tui_tasks.widgets.task_list_view import TaskListView


class HourList(OptionList):
    """Hour slots 00:00..23:00 with vim-style movement."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]


class DayScreen(Screen[None]):
    """One date: pick an hour on the left, manage that day's tasks on the right."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("a", "add_at_hour", "Add at hour"),
        Binding("tab", "focus_list", "List", show=False),
        Binding("l", "focus_list", "List", show=False),
    ]

    DEFAULT_CSS = """
    DayScreen #day-title {
        height: 1;
        padding: 0 1;
        text-style: bold;
    }
    DayScreen HourList {
        width: 10;
        height: 1fr;
    }
    DayScreen #day-body {
        height: 1fr;
    }
    """

    def __init__(
        self,
        store: TaskStore,
        day: date,
        *,
        theme: Theme | None = None,
        today: Callable[[], date] = date.today,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        super().__init__()
        self.store = store
        self.day = day
        self.hour_gutter = DayHourGutter(day)
        self.model = TaskListModel(store, due_on(day), date_format)
        self._theme = theme
        self._today = today

    @property
    def hour(self) -> int:
        highlighted = self.query_one(HourList).highlighted
        return self.hour_gutter.clamp(highlighted or 0)

    def _new_task(self) -> Task:
        return self.hour_gutter.new_task(self.hour)

    def compose(self) -> ComposeResult:
        yield Static(f"Day: {day_title(self.day)}", id="day-title")
        with Horizontal(id="day-body"):
            yield HourList(*self.hour_gutter.labels(), id="hour-list")
            yield TaskListView(
                self.store,
                self.model,
                theme=self._theme,
                show_filter_bar=False,
                new_task=self._new_task,
                today=self._today,
                id="day-tasks",
            )
        yield Footer()

    def on_mount(self) -> None:
        hours = self.query_one(HourList)
        hours.highlighted = 0
        hours.focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.action_focus_list()

    def action_focus_list(self) -> None:
        self.query_one("#day-tasks", TaskListView).focus_table()

    def action_add_at_hour(self) -> None:
        self.query_one("#day-tasks", TaskListView).binder.add()

    def action_close(self) -> None:
        self.dismiss(None)
