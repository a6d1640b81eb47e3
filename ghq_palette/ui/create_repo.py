"""Form for scaffolding a new repository under the ghq root."""

import asyncio
from typing import List, Optional

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Checkbox, Footer, Input, Label, Select, Static

from ghq_palette.constants import OPEN_AFTER_CHOICES
from ghq_palette.core import GhqPalette
from ghq_palette.exceptions import ValidationError
from ghq_palette.services.validation_service import ValidationService
from ghq_palette.ui.widgets import PaletteHeader
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


def _selected(select: Select) -> Optional[str]:
    """Value of a Select, or None while nothing is selected."""
    value = select.value
    return value if isinstance(value, str) else None


class CreateRepoScreen(Screen[Optional[str]]):
    """Create ``<root>/<hostname>/<org>/<name>`` and optionally open it.

    Dismisses with the new repository path, or None when cancelled.
    """

    DEFAULT_CSS = """
    CreateRepoScreen VerticalScroll {
        padding: 1 2;
    }

    CreateRepoScreen Label {
        padding-top: 1;
    }

    #repo-name-error {
        color: $error;
        height: auto;
    }

    #form-buttons {
        height: auto;
        padding-top: 1;
    }

    #form-buttons Button {
        margin-right: 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "submit", "Create Repository"),
    ]

    def __init__(self, palette: GhqPalette):
        super().__init__()
        self.palette = palette
        self.root: Optional[str] = None
        self._name_error_shown = False

    def compose(self) -> ComposeResult:
        open_after = [(label, value) for value, (label, _) in OPEN_AFTER_CHOICES.items()]

        yield PaletteHeader()
        with VerticalScroll():
            yield Label("Hostname")
            yield Select([], id="hostname", prompt="Select hostname")
            yield Label("Org / Owner")
            yield Select([], id="org", prompt="Select org")
            yield Label("Repository Name")
            yield Input(placeholder="sample-repo", id="repo-name")
            yield Static("", id="repo-name-error")
            yield Checkbox("Create initial commit", value=True, id="initial-commit")
            yield Label("Open After Create")
            yield Select(
                open_after,
                id="open-after",
                value=self.palette.config.open_after_default,
                allow_blank=False,
            )
            with Horizontal(id="form-buttons"):
                yield Button("Create Repository", variant="success", id="create")
                yield Button("Cancel", id="cancel")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "Create Local Git Repository"
        self.load_hostnames()

    @work(exclusive=True, group="form", thread=False)
    async def load_hostnames(self) -> None:
        try:
            self.root = await asyncio.to_thread(self.palette.get_root)
            hostnames = await asyncio.to_thread(self.palette.list_hostnames, self.root)
        except Exception as e:
            logger.error(f"Failed to initialize: {e}", exc_info=True)
            self.notify(str(e), title="Failed to initialize", severity="error", timeout=8)
            return

        self.sub_title = self.root
        if not hostnames:
            self.notify("No hostname directories found under ghq root", severity="error")
            return

        hostname_select = self.query_one("#hostname", Select)
        hostname_select.set_options([(h, h) for h in hostnames])
        hostname_select.value = hostnames[0]
        self._load_orgs(hostnames[0])

    def _load_orgs(self, hostname: Optional[str]) -> None:
        org_select = self.query_one("#org", Select)
        orgs: List[str] = []
        if self.root and hostname:
            try:
                orgs = self.palette.list_orgs(self.root, hostname)
            except OSError as e:
                logger.warning(f"Could not list orgs for {hostname}: {e}")
        org_select.set_options([(o, o) for o in orgs])
        if orgs:
            org_select.value = orgs[0]

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "hostname":
            self._load_orgs(_selected(event.select))

    def _show_name_error(self, error: Optional[str]) -> None:
        self._name_error_shown = error is not None
        self.query_one("#repo-name-error", Static).update(error or "")

    def on_input_changed(self, event: Input.Changed) -> None:
        # Live validation only once an error has been shown
        if event.input.id == "repo-name" and self._name_error_shown:
            self._show_name_error(ValidationService.validate_repo_name(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create":
            self.action_submit()
        else:
            self.action_cancel()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_submit(self) -> None:
        hostname = _selected(self.query_one("#hostname", Select))
        org = _selected(self.query_one("#org", Select))
        repo_name = self.query_one("#repo-name", Input).value
        initial_commit = self.query_one("#initial-commit", Checkbox).value
        open_after = _selected(self.query_one("#open-after", Select)) or "none"

        if not self.root or not hostname or not org or not repo_name:
            self.notify("All fields are required", severity="error")
            return

        name_error = ValidationService.validate_repo_name(repo_name)
        if name_error:
            self._show_name_error(name_error)
            return

        self.create_repository(hostname, org, repo_name, initial_commit, open_after)

    @work(exclusive=True, group="form", thread=False)
    async def create_repository(
        self, hostname: str, org: str, repo_name: str, initial_commit: bool, open_after: str
    ) -> None:
        self.notify("Creating repository…")
        try:
            result = await asyncio.to_thread(
                self.palette.create_repository, self.root, hostname, org, repo_name, initial_commit
            )
        except ValidationError as e:
            self._show_name_error(e.message)
            return
        except Exception as e:
            logger.error(f"Failed to create repository: {e}", exc_info=True)
            self.notify(str(e), title="Failed to create repository", severity="error", timeout=8)
            return

        if result.commit_failed:
            self.notify(
                result.commit_error or "",
                title="Repository created (commit failed)",
                severity="warning",
                timeout=8,
            )
        else:
            self.notify(result.repo_dir, title="Repository created", severity="information")

        try:
            warning = await asyncio.to_thread(self.palette.open_after_create, result.repo_dir, open_after)
            if warning:
                self.notify(warning, severity="warning")
        except Exception as e:
            self.notify(str(e), title="Failed to open repository", severity="error")

        self.dismiss(result.repo_dir)
