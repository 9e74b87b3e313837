"""Command Palette provider for TUI Tasks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from textual.command import Hit, Hits, Provider


@dataclass(frozen=True)
class CommandDef:
    """A single command entry for the palette."""

    display: str
    action: str
    help: str = ""
    category: str = ""
    context: str = ""  # "" = always, "list", "calendar"


COMMANDS: list[CommandDef] = [
    # -- File --
    CommandDef("Init Theme", "init_theme", "Copy default theme to the config dir (theme.yaml)", "File"),
    CommandDef("Quit", "quit", "Quit application (q)", "File"),
    # -- Edit --
    CommandDef("Add Task", "list_command('add')", "Add a task (a)", "Edit", "list"),
    CommandDef("Edit Task", "list_command('edit')", "Edit selected task (e)", "Edit", "list"),
    CommandDef("Toggle Done", "list_command('toggle_done')", "Mark selected task done/open (Space)", "Edit", "list"),
    CommandDef("Delete Task", "list_command('delete')", "Delete selected task (d)", "Edit", "list"),
    CommandDef("Expand/Collapse", "list_command('toggle_expand')", "Show or hide task details (Enter)", "Edit", "list"),
    # -- Filter --
    CommandDef("Filter: All", "filter('all')", "Show every task (A)", "Filter"),
    CommandDef("Filter: Open", "filter('open')", "Tasks not done (o)", "Filter"),
    CommandDef("Filter: Done", "filter('done')", "Completed tasks (D)", "Filter"),
    CommandDef("Filter: Created Today", "filter('today')", "Tasks created today (t)", "Filter"),
    CommandDef("Filter: Due Today", "filter('due-today')", "Tasks due today (T)", "Filter"),
    CommandDef("Filter: Overdue", "filter('overdue')", "Open tasks past their due date (O)", "Filter"),
    CommandDef("Filter: Due in N Days", "filter_due_within", "Tasks due within N days (n)", "Filter"),
    CommandDef("Filter: Title Contains", "filter_title", "Search task titles (/)", "Filter"),
    CommandDef("Filter: Tag Contains", "filter_tag", "Search task tags (#)", "Filter"),
    # -- View --
    CommandDef("Toggle View", "toggle_view", "Switch list ⇄ calendar (v)", "View"),
    CommandDef("Task List", "show_list", "Show the task list (l)", "View"),
    CommandDef("Calendar", "show_calendar", "Show the month calendar (c)", "View"),
    CommandDef("Toggle Footer", "toggle_footer", "Show or hide the key footer (?)", "View"),
    # -- Calendar (context-dependent) --
    CommandDef("Calendar: Today", "calendar('today')", "Jump to today (t)", "Calendar", "calendar"),
    CommandDef("Calendar: Previous Month", "calendar('prev_month')", "Previous month (<)", "Calendar", "calendar"),
    CommandDef("Calendar: Next Month", "calendar('next_month')", "Next month (>)", "Calendar", "calendar"),
    CommandDef("Calendar: Week", "calendar('week')", "Open the week of the selected date (w)", "Calendar", "calendar"),
    CommandDef("Calendar: Day", "calendar('day')", "Open the selected date (d)", "Calendar", "calendar"),
]


def commands_for(view: str) -> list[CommandDef]:
    """Commands available while *view* is active."""
    return [cmd for cmd in COMMANDS if not cmd.context or cmd.context == view]


def match_score(query: str, text: str) -> float | None:
    """Rank *text* for *query*, or None when its characters don't appear in order."""
    if not query:
        return 0.5
    if text == query:
        return 1.0
    if text.startswith(query):
        return 0.9
    if query in text:
        return 0.8
    it = iter(text)
    if all(ch in it for ch in query):
        return 0.7
    return None


class TaskCommandProvider(Provider):
    """Textual Command Palette provider for TUI Tasks actions."""

    def _available(self) -> list[CommandDef]:
        return commands_for(getattr(self.app, "active_view", "list"))

    def _hit(self, cmd: CommandDef, score: float) -> Hit:
        return Hit(score, cmd.display, partial(self.app.run_action, cmd.action), help=cmd.help)

    async def discover(self) -> Hits:
        for cmd in self._available():
            yield self._hit(cmd, 1.0)

    async def search(self, query: str) -> Hits:
        """Fuzzy search over display name, help text and category."""
        query = query.lower()
        for cmd in self._available():
            if match_score(query, f"{cmd.display} {cmd.help} {cmd.category}".lower()) is None:
                continue
            # 0.6 when only the help text or category matched
            yield self._hit(cmd, match_score(query, cmd.display.lower()) or 0.6)
