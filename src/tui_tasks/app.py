"""Main Textual App for TUI Tasks."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import date

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import ContentSwitcher, Footer, Header

from tui_tasks.commands import TaskCommandProvider
from tui_tasks.config import AppConfig
from tui_tasks.filters import (
    TaskFilter,
    due_within_days,
    filter_by_name,
    tag_contains,
    title_contains,
)
from tui_tasks.screens.day_screen import DayScreen
from tui_tasks.screens.prompt_screen import PromptScreen
from tui_tasks.screens.week_screen import WeekScreen
from tui_tasks.store import JsonTaskStore, TaskStore
from tui_tasks.task_list import ListCommand, TaskListModel
from tui_tasks.theme import Theme, init_theme, load_theme
from tui_tasks.widgets.calendar_view import CalendarView
from tui_tasks.widgets.task_list_view import TaskListView

logger = logging.getLogger(__name__)

LIST_VIEW = "list"
CALENDAR_VIEW = "calendar"


class TaskApp(App):
    """TUI Tasks Application."""

    TITLE = "TUI Tasks"
    CSS = """
    #views {
        height: 1fr;
    }
    """

    COMMANDS = App.COMMANDS | {TaskCommandProvider}

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("question_mark", "toggle_footer", "Keys"),
        # Views
        Binding("v", "toggle_view", "List/Calendar"),
        Binding("c", "show_calendar", "Calendar", show=False),
        Binding("l", "show_list", "Task List", show=False),
        # Filters
        Binding("A", "filter('all')", "All", show=False),
        Binding("o", "filter('open')", "Open", show=False),
        Binding("D", "filter('done')", "Done", show=False),
        Binding("t", "filter('today')", "Today", show=False),
        Binding("T", "filter('due-today')", "Due Today", show=False),
        Binding("O", "filter('overdue')", "Overdue", show=False),
        Binding("n", "filter_due_within", "Due ≤ N", show=False),
        Binding("slash", "filter_title", "Title Search", show=False),
        Binding("number_sign", "filter_tag", "Tag Search", show=False),
    ]

    def __init__(
        self,
        config: AppConfig | None = None,
        store: TaskStore | None = None,
        task_theme: Theme | None = None,
        no_color: bool = False,
        today: Callable[[], date] = date.today,
    ) -> None:
        if no_color:
            os.environ["NO_COLOR"] = "1"
        super().__init__()
        self.config = config or AppConfig()
        self.store = store if store is not None else JsonTaskStore(self.config.data_path)
        self.task_theme = task_theme or load_theme(self.config.config_dir)
        self.no_color = no_color
        self._today = today
        self.active_view = LIST_VIEW

    def compose(self) -> ComposeResult:
        model = TaskListModel(
            self.store,
            filter_by_name(self.config.default_filter),
            self.config.date_format,
        )
        self.list_view = TaskListView(
            self.store,
            model,
            theme=self.task_theme,
            today=self._today,
            id="list-view",
        )
        self.calendar_view = CalendarView(
            self.store,
            theme=self.task_theme,
            today=self._today,
            date_format=self.config.date_format,
            id="calendar-view",
        )
        self.switcher = ContentSwitcher(initial="list-view", id="views")
        yield Header()
        with self.switcher:
            yield self.list_view
            yield self.calendar_view
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(Footer).display = self.config.show_footer
        self.list_view.focus_table()

    # ── Views ──

    def _show(self, view: str) -> None:
        self.switcher.current = f"{view}-view"
        self.active_view = view
        if view == CALENDAR_VIEW:
            self.calendar_view.refresh_calendar()
            self.calendar_view.focus_grid()
        else:
            self.list_view.refresh_rows()
            self.list_view.focus_table()

    def action_toggle_view(self) -> None:
        self._show(CALENDAR_VIEW if self.active_view == LIST_VIEW else LIST_VIEW)

    def action_show_calendar(self) -> None:
        self._show(CALENDAR_VIEW)

    def action_show_list(self) -> None:
        self._show(LIST_VIEW)

    def action_toggle_footer(self) -> None:
        footer = self.query_one(Footer)
        footer.display = not footer.display

    # ── Filters ──

    def apply_filter(self, task_filter: TaskFilter) -> None:
        """Apply *task_filter* to the main list and bring the list to front."""
        logger.debug("filter: %s", task_filter.label)
        self.list_view.set_filter(task_filter)
        if self.active_view != LIST_VIEW:
            self._show(LIST_VIEW)

    def action_filter(self, name: str) -> None:
        self.apply_filter(filter_by_name(name))

    def action_filter_due_within(self) -> None:
        def on_result(value: str | None) -> None:
            if value is None:
                return
            try:
                days = int(value.strip())
            except ValueError:
                return
            self.apply_filter(due_within_days(days))

        self.push_screen(
            PromptScreen("Due in N days", "Number of days:", placeholder="7"),
            callback=on_result,
        )

    def action_filter_title(self) -> None:
        def on_result(value: str | None) -> None:
            if value is None or not value.strip():
                return
            self.apply_filter(title_contains(value))

        self.push_screen(PromptScreen("Title Search", "Title contains:"), callback=on_result)

    def action_filter_tag(self) -> None:
        def on_result(value: str | None) -> None:
            if value is None or not value.strip():
                return
            self.apply_filter(tag_contains(value))

        self.push_screen(PromptScreen("Tag Search", "Tag contains:"), callback=on_result)

    # ── Commands ──

    def action_list_command(self, name: str) -> None:
        target = self.list_view
        if self.active_view == CALENDAR_VIEW:
            target = self.calendar_view.query_one("#day-list", TaskListView)
        target.run_command(ListCommand(name))

    def action_calendar(self, name: str) -> None:
        view = self.calendar_view
        if name == "today":
            view.action_today()
        elif name == "prev_month":
            view.calendar.prev_month()
            view.repaint()
        elif name == "next_month":
            view.calendar.next_month()
            view.repaint()
        elif name == "week":
            view.action_week()
        elif name == "day":
            view.action_day()

    def action_init_theme(self) -> None:
        try:
            dest = init_theme(self.config.config_dir)
        except FileExistsError as e:
            self.notify(f"Already exists: {e}", severity="warning")
            return
        self.notify(f"Created {dest}")

    # ── Store changes ──

    def _refresh_views(self) -> None:
        self.list_view.refresh_rows()
        self.calendar_view.refresh_calendar()

    def on_task_list_view_changed(self, event: TaskListView.Changed) -> None:
        self._refresh_views()
        self.notify(f"{event.kind.value}: {event.task.title}")

    # ── Week / Day ──

    def on_calendar_view_open_week(self, event: CalendarView.OpenWeek) -> None:
        screen = WeekScreen(
            self.store,
            event.day,
            theme=self.task_theme,
            today=self._today,
            date_format=self.config.date_format,
        )
        self.push_screen(screen, callback=lambda _: self._refresh_views())

    def on_calendar_view_open_day(self, event: CalendarView.OpenDay) -> None:
        screen = DayScreen(
            self.store,
            event.day,
            theme=self.task_theme,
            today=self._today,
            date_format=self.config.date_format,
        )
        self.push_screen(screen, callback=lambda _: self._refresh_views())
