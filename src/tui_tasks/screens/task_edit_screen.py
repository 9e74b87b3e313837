"""Full-field task edit form screen."""

from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Select, Static, TextArea

from tui_tasks.models import (
    Priority,
    Task,
    TaskValidationError,
    apply_changes,
    collect_task_changes,
    format_time,
)


class TaskEditScreen(ModalScreen[bool]):
    """Modal form that edits a task in place.

    Dismisses with True after writing the validated values onto the task,
    or False on cancel. Validation errors keep the form open.
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+s", "save", "Save"),
    ]

    DEFAULT_CSS = """
    TaskEditScreen {
        align: center middle;
    }
    #task-edit-container {
        width: 70;
        max-height: 90%;
        background: $surface;
        border: thick $primary;
        border-title-align: left;
        padding: 1 2;
    }
    .field-label {
        margin-top: 1;
        color: $text-muted;
    }
    .field-row {
        height: auto;
    }
    .field-row Input {
        width: 1fr;
    }
    #field-done {
        margin-left: 2;
    }
    #field-notes {
        height: 6;
    }
    #task-edit-buttons {
        align: center middle;
        height: 3;
        margin-top: 1;
    }
    #task-edit-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, task: Task, title: str = "Edit Task", default_due: date | None = None) -> None:
        super().__init__()
        self._edit_task = task
        self._form_title = title
        self._default_due = default_due

    def compose(self) -> ComposeResult:
        task = self._edit_task
        # Only new tasks get a default due; editing an undated task keeps it undated.
        due = task.due or self._default_due
        with VerticalScroll(id="task-edit-container") as container:
            container.border_title = self._form_title

            yield Static("Title", classes="field-label")
            yield Input(value=task.title, id="field-title")

            yield Static("Due (YYYY-MM-DD)", classes="field-label")
            with Horizontal(classes="field-row"):
                yield Input(
                    value=due.isoformat() if due else "",
                    placeholder="empty = no due date",
                    id="field-due",
                )
                yield Checkbox("Done", value=task.done, id="field-done")

            yield Static("Start / End (HH:MM)", classes="field-label")
            with Horizontal(classes="field-row"):
                yield Input(value=format_time(task.start_time), placeholder="09:00", id="field-start")
                yield Input(value=format_time(task.end_time), placeholder="10:30", id="field-end")

            yield Static("Priority", classes="field-label")
            yield Select(
                [(p.value, p.value) for p in Priority],
                value=task.priority.value,
                allow_blank=False,
                id="field-priority",
            )

            yield Static("Tags (comma separated)", classes="field-label")
            yield Input(value=", ".join(task.tags), id="field-tags")

            yield Static("Notes", classes="field-label")
            yield TextArea(task.notes, id="field-notes")

            with Horizontal(id="task-edit-buttons"):
                yield Button("Save", variant="primary", id="save-btn")
                yield Button("Cancel", variant="default", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#field-title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save()
        else:
            self.dismiss(False)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_save()

    def _collect(self) -> dict:
        priority = self.query_one("#field-priority", Select).value
        return collect_task_changes(
            title=self.query_one("#field-title", Input).value,
            due=self.query_one("#field-due", Input).value,
            start=self.query_one("#field-start", Input).value,
            end=self.query_one("#field-end", Input).value,
            priority=priority if isinstance(priority, str) else "",
            tags=self.query_one("#field-tags", Input).value,
            notes=self.query_one("#field-notes", TextArea).text,
            done=self.query_one("#field-done", Checkbox).value,
        )

    def action_save(self) -> None:
        try:
            changes = self._collect()
        except TaskValidationError as e:
            self.notify(str(e), title="Validation", severity="error")
            return
        apply_changes(self._edit_task, changes)
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
