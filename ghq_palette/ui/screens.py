"""Modal screens for ghq-palette TUI."""

from typing import Optional, TypeVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from ghq_palette.services.validation_service import ValidationService

ResultT = TypeVar("ResultT")


class DialogScreen(ModalScreen[ResultT]):
    """Centered dialog box; escape dismisses with ``cancel_result``."""

    DEFAULT_CSS = """
    DialogScreen {
        align: center middle;
    }

    DialogScreen .dialog {
        width: 80%;
        height: auto;
        max-height: 90%;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    DialogScreen .dialog-title {
        text-style: bold;
    }

    DialogScreen .dialog-body {
        height: auto;
        padding: 1 0;
    }

    DialogScreen .dialog-buttons {
        height: auto;
        align: center middle;
    }

    DialogScreen Button {
        margin: 0 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    cancel_result: Optional[ResultT] = None

    def action_cancel(self) -> None:
        self.dismiss(self.cancel_result)


class ConfirmScreen(DialogScreen[bool]):
    """Yes/cancel question; destructive actions get a red confirm button."""

    cancel_result = False

    def __init__(self, title: str, message: str, confirm_label: str = "Yes", destructive: bool = False):
        super().__init__()
        self.title_text = title
        self.message = message
        self.confirm_label = confirm_label
        self.destructive = destructive

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(self.title_text, classes="dialog-title", markup=False)
            yield Static(self.message, classes="dialog-body", markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button(
                    self.confirm_label,
                    variant="error" if self.destructive else "success",
                    id="confirm",
                )
                yield Button("Cancel", variant="primary", id="cancel")

    def on_mount(self) -> None:
        # Cancel has focus so Enter alone never confirms
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")


class InfoScreen(DialogScreen[None]):
    """Read-only text, used for the legend and error details."""

    BINDINGS = [Binding("escape", "cancel", "Close"), Binding("l", "cancel", "Close", show=False)]

    def __init__(self, info: str):
        super().__init__()
        self.info = info

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(self.info, classes="dialog-body", markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button("Close", variant="primary", id="close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)


class BranchNameScreen(DialogScreen[Optional[str]]):
    """Asks for the name of a new branch or worktree.

    Dismisses with the stripped name, or None when cancelled.
    """

    DEFAULT_CSS = """
    BranchNameScreen .dialog {
        width: 70%;
    }

    #branch-from {
        color: $text-muted;
    }
    """

    def __init__(self, title: str, from_branch: str, submit_label: str):
        super().__init__()
        self.title_text = title
        self.from_branch = from_branch
        self.submit_label = submit_label

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(self.title_text, classes="dialog-title", markup=False)
            with Vertical(classes="dialog-body"):
                yield Label("Branch Name")
                yield Input(placeholder="feature/my-new-branch", id="branch-name")
                yield Static(f"From: {self.from_branch}", id="branch-from", markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button(self.submit_label, variant="success", id="submit")
                yield Button("Cancel", variant="primary", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#branch-name", Input).focus()

    def _submit(self) -> None:
        value = self.query_one("#branch-name", Input).value
        error = ValidationService.validate_branch_name(value)
        if error:
            self.notify(error, severity="error")
            return
        self.dismiss(value.strip())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self._submit()
        else:
            self.dismiss(None)
