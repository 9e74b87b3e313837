"""Task list widget: a header/detail DataTable driven by TaskListModel."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import DataTable, Static

from tui_tasks.actions import ActionBinder, ChangeKind, dispatch
from tui_tasks.filters import TaskFilter
from tui_tasks.models import Task
from tui_tasks.rows import DisplayRow
from tui_tasks.screens.confirm_screen import ConfirmScreen
from tui_tasks.screens.task_edit_screen import TaskEditScreen
from tui_tasks.store import TaskStore
from tui_tasks.task_list import ListCommand, TaskListModel
from tui_tasks.theme import Theme

_NAVIGATION = {
    ListCommand.MOVE_NEXT,
    ListCommand.MOVE_PREV,
    ListCommand.MOVE_FIRST,
    ListCommand.MOVE_LAST,
}


class TaskTable(DataTable):
    """Single-column row table that turns keys into ListCommand messages.

    Keys never move the cursor directly. The owning TaskListView repaints
    it from the model, and adopts mouse highlights back into the model, so
    the cursor only ever rests on header rows.
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("g", "scroll_top", "First", show=False),
        Binding("G", "scroll_bottom", "Last", show=False),
        Binding("a", "command('add')", "Add"),
        Binding("e", "command('edit')", "Edit"),
        Binding("space", "command('toggle_done')", "Done"),
        Binding("x", "command('toggle_done')", "Done", show=False),
        Binding("d", "command('delete')", "Delete"),
    ]

    class CommandIssued(Message):
        """Emitted for every list command produced by a key."""

        def __init__(self, command: ListCommand) -> None:
            super().__init__()
            self.command = command

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id, cursor_type="row", show_header=False, zebra_stripes=False)

    def on_mount(self) -> None:
        self.add_column("Task", key="task")

    def _issue(self, command: ListCommand) -> None:
        self.post_message(self.CommandIssued(command))

    def action_command(self, name: str) -> None:
        self._issue(ListCommand(name))

    def action_cursor_down(self) -> None:
        self._issue(ListCommand.MOVE_NEXT)

    def action_cursor_up(self) -> None:
        self._issue(ListCommand.MOVE_PREV)

    def action_cursor_right(self) -> None:
        self._issue(ListCommand.EXPAND)

    def action_cursor_left(self) -> None:
        self._issue(ListCommand.COLLAPSE)

    def action_select_cursor(self) -> None:
        self._issue(ListCommand.TOGGLE_EXPAND)

    def action_page_up(self) -> None:
        self._issue(ListCommand.MOVE_FIRST)

    def action_page_down(self) -> None:
        self._issue(ListCommand.MOVE_LAST)

    def action_scroll_top(self) -> None:
        self._issue(ListCommand.MOVE_FIRST)

    def action_scroll_home(self) -> None:
        self._issue(ListCommand.MOVE_FIRST)

    def action_scroll_bottom(self) -> None:
        self._issue(ListCommand.MOVE_LAST)

    def action_scroll_end(self) -> None:
        self._issue(ListCommand.MOVE_LAST)


class TaskListView(Container):
    """Filtered task list with add/edit/toggle/delete wired to modal screens."""

    DEFAULT_CSS = """
    TaskListView {
        width: 1fr;
        height: 1fr;
    }
    TaskListView #filter-bar {
        height: 1;
        padding: 0 1;
        background: $primary-background;
    }
    TaskListView TaskTable {
        height: 1fr;
    }
    """

    class Changed(Message):
        """Emitted after the store was mutated through this list."""

        def __init__(self, kind: ChangeKind, task: Task) -> None:
            super().__init__()
            self.kind = kind
            self.task = task

    def __init__(
        self,
        store: TaskStore,
        model: TaskListModel | None = None,
        *,
        theme: Theme | None = None,
        show_filter_bar: bool = True,
        new_task: Callable[[], Task] | None = None,
        today: Callable[[], date] = date.today,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.store = store
        self.model = model if model is not None else TaskListModel(store)
        self.new_task = new_task or Task
        self._theme = theme or Theme()
        self._show_filter_bar = show_filter_bar
        self._painted = False
        self._today = today
        self.binder = ActionBinder(
            store,
            refresh=self.refresh_rows,
            edit_flow=self._edit_flow,
            confirm_flow=self._confirm_flow,
            create_flow=self._create_flow,
            after_change=self._after_change,
        )

    def compose(self) -> ComposeResult:
        if self._show_filter_bar:
            yield Static("", id="filter-bar")
        yield TaskTable(id="task-table")

    def on_mount(self) -> None:
        self.repaint()

    # ── Flows ──

    def _create_flow(self, done: Callable[[Task | None], None]) -> None:
        task = self.new_task()
        screen = TaskEditScreen(task, title="New Task", default_due=self._today())
        self.app.push_screen(screen, callback=lambda ok: done(task if ok else None))

    def _edit_flow(self, task: Task, done: Callable[[bool], None]) -> None:
        self.app.push_screen(TaskEditScreen(task), callback=done)

    def _confirm_flow(self, prompt: str, done: Callable[[bool], None]) -> None:
        self.app.push_screen(ConfirmScreen(prompt), callback=done)

    def _after_change(self, kind: ChangeKind, task: Task) -> None:
        self.post_message(self.Changed(kind, task))

    # ── Rendering ──

    def _render_row(self, row: DisplayRow, today: date) -> Text:
        if not row.is_header:
            return Text(row.text, style="dim")
        task = self.model.get_task(row.task_id)
        style = self._theme.header
        if task is not None:
            if task.done:
                style = self._theme.done
            elif task.is_overdue(today):
                style = self._theme.overdue
        return Text(row.text, style=style)

    def repaint(self) -> None:
        """Redraw the filter bar and every row from the model."""
        try:
            table = self.query_one(TaskTable)
        except NoMatches:
            return
        if not table.columns:
            return
        if self._show_filter_bar:
            self.query_one("#filter-bar", Static).update(f"Filter: {self.model.filter_label}")
        table.clear()
        today = self._today()
        for i, row in enumerate(self.model.rows):
            table.add_row(self._render_row(row, today), key=str(i))
        self._sync_cursor()
        self._painted = True

    def _sync_cursor(self) -> None:
        index = self.model.cursor.index
        if index is not None:
            self.query_one(TaskTable).move_cursor(row=index, animate=False)

    def refresh_rows(self) -> None:
        """Re-read the store, keep the selection, and redraw."""
        self.model.refresh()
        self.repaint()

    def set_filter(self, task_filter: TaskFilter) -> None:
        self.model.set_filter(task_filter)
        self.repaint()

    def run_command(self, command: ListCommand) -> None:
        dispatch(command, self.model, self.binder)
        if command in _NAVIGATION:
            self._sync_cursor()
        else:
            self.repaint()

    def focus_table(self) -> None:
        self.query_one(TaskTable).focus()

    @property
    def selected_task(self) -> Task | None:
        return self.model.selected_task()

    # ── Events ──

    def on_task_table_command_issued(self, event: TaskTable.CommandIssued) -> None:
        event.stop()
        self.run_command(event.command)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        # A click moves the table cursor directly; adopt it into the model.
        event.stop()
        if not self._painted or event.cursor_row != event.data_table.cursor_row:
            return  # stale, a repaint has moved the cursor since
        if event.cursor_row == self.model.cursor.index:
            return
        self.model.select_row(event.cursor_row)
        self._sync_cursor()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.model.select_row(event.cursor_row)
        self._sync_cursor()
