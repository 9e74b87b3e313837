"""Single-line prompt screen used by the filter commands."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class PromptScreen(ModalScreen[str | None]):
    """Ask for one text value. Dismisses with the text, or None on cancel."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    DEFAULT_CSS = """
    PromptScreen {
        align: center middle;
    }
    #prompt-container {
        width: 60;
        height: auto;
        background: $surface;
        border: thick $primary;
        border-title-align: left;
        padding: 1 2;
    }
    #prompt-label {
        margin-bottom: 1;
        text-style: bold;
    }
    #prompt-input {
        margin-bottom: 1;
    }
    #prompt-buttons {
        align: center middle;
        height: 3;
    }
    #prompt-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(
        self,
        title: str,
        label: str,
        initial_value: str = "",
        placeholder: str = "",
    ) -> None:
        super().__init__()
        self._dialog_title = title
        self._label = label
        self._initial_value = initial_value
        self._placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Static(id="prompt-container") as container:
            container.border_title = self._dialog_title
            yield Static(self._label, id="prompt-label")
            yield Input(
                value=self._initial_value,
                placeholder=self._placeholder,
                id="prompt-input",
            )
            with Horizontal(id="prompt-buttons"):
                yield Button("OK", variant="primary", id="ok-btn")
                yield Button("Cancel", variant="default", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok-btn":
            self.dismiss(self.query_one("#prompt-input", Input).value)
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
