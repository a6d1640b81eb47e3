"""Interactive TUI for ghq-palette using Textual."""

from typing import Optional

from textual.app import App

from .__version__ import __version__
from .core import GhqPalette
from .models.repository import GitRepo
from .ui.branch_list import BranchListScreen
from .ui.create_repo import CreateRepoScreen
from .ui.repo_list import RepoListScreen
from .logging_config import get_logger

logger = get_logger(__name__)


class GhqPaletteApp(App):
    """Launcher palette for ghq repositories.

    Starts on the repository browser, or directly on one repository's branch
    list, or on the create-repository form.
    """

    ENABLE_COMMAND_PALETTE = True
    TITLE = "ghq palette"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    ToastRack {
        offset: 0 -3;
    }
    """

    MODES_AVAILABLE = ("repos", "branches", "create")

    def __init__(self, palette: GhqPalette, mode: str = "repos", repo: Optional[GitRepo] = None):
        super().__init__()
        if mode not in self.MODES_AVAILABLE:
            raise ValueError(f"mode must be one of {self.MODES_AVAILABLE}, got '{mode}'")
        if mode == "branches" and repo is None:
            raise ValueError("branches mode needs a repository")
        self.palette = palette
        self.start_mode = mode
        self.repo = repo
        self.created_repo: Optional[str] = None

    def on_mount(self) -> None:
        logger.debug(f"Starting TUI in {self.start_mode} mode")
        if self.start_mode == "branches":
            self.push_screen(BranchListScreen(self.palette, self.repo))
        elif self.start_mode == "create":
            self.push_screen(CreateRepoScreen(self.palette), self._on_created)
        else:
            self.push_screen(RepoListScreen(self.palette))

    def _on_created(self, repo_dir: Optional[str]) -> None:
        self.created_repo = repo_dir
        self.exit(repo_dir)
