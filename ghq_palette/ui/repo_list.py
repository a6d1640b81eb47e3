"""Repository browser screen."""

import asyncio
from typing import Dict, List, Optional

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Input

from ghq_palette.constants import REPO_COLUMNS
from ghq_palette.core import GhqPalette
from ghq_palette.models.repository import GitRepo
from ghq_palette.ui.branch_list import BranchListScreen
from ghq_palette.ui.create_repo import CreateRepoScreen
from ghq_palette.ui.screens import InfoScreen
from ghq_palette.ui.widgets import PaletteHeader, StatusBar
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


class RepoListScreen(Screen):
    """Every repository under the ghq root; Enter opens its branches."""

    DEFAULT_CSS = """
    RepoListScreen DataTable {
        height: 1fr;
    }

    #repo-filter {
        dock: top;
        display: none;
    }

    #repo-filter.visible {
        display: block;
    }
    """

    BINDINGS = [
        Binding("slash", "filter", "Filter"),
        Binding("escape", "clear_filter", "Clear Filter", show=False),
        Binding("n", "create_repo", "New Repository"),
        Binding("r", "refresh", "Refresh"),
        Binding("q", "app.quit", "Quit"),
    ]

    def __init__(self, palette: GhqPalette):
        super().__init__()
        self.palette = palette
        self.root: Optional[str] = None
        self.repos: List[GitRepo] = []
        self._by_path: Dict[str, GitRepo] = {}

    def compose(self) -> ComposeResult:
        yield PaletteHeader()
        yield Input(placeholder="Filter repositories…", id="repo-filter")
        yield DataTable(id="repo-table", cursor_type="row", zebra_stripes=True)
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.title = "Repositories"
        table = self.query_one(DataTable)
        for col in REPO_COLUMNS:
            table.add_column(col.label, width=col.width or None, key=col.key)
        table.loading = True
        self.load_repositories()

    @work(exclusive=True, group="repos", thread=False)
    async def load_repositories(self) -> None:
        table = self.query_one(DataTable)
        try:
            self.root = await asyncio.to_thread(self.palette.get_root)
            self.repos = await asyncio.to_thread(self.palette.list_repositories, self.root)
            self._by_path = {r.full_path: r for r in self.repos}
            self.sub_title = self.root
            self._populate_table(self.query_one("#repo-filter", Input).value)
            if not self.repos:
                self.notify("No repositories found under the ghq root", severity="warning")
        except Exception as e:
            logger.error(f"Error loading repositories: {e}", exc_info=True)
            self.app.push_screen(InfoScreen(f"Error loading repositories:\n\n{e}"))
        finally:
            table.loading = False

    def _populate_table(self, query: str = "") -> None:
        table = self.query_one(DataTable)
        table.clear()
        shown = 0
        needle = query.strip().lower()
        for repo in self.repos:
            if needle and needle not in repo.display_name.lower():
                continue
            table.add_row(repo.hostname or "", repo.org or "", repo.name, key=repo.full_path)
            shown += 1
        self.query_one(StatusBar).show_repositories(shown, len(self.repos))

    def on_input_changed(self, event: Input.Changed) -> None:
        self._populate_table(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.query_one(DataTable).focus()

    def action_filter(self) -> None:
        filter_input = self.query_one("#repo-filter", Input)
        filter_input.add_class("visible")
        filter_input.focus()

    def action_clear_filter(self) -> None:
        filter_input = self.query_one("#repo-filter", Input)
        filter_input.value = ""
        filter_input.remove_class("visible")
        self.query_one(DataTable).focus()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        repo = self._by_path.get(event.row_key.value)
        if repo is not None:
            self.app.push_screen(BranchListScreen(self.palette, repo))

    def action_create_repo(self) -> None:
        def handle(created: Optional[str]) -> None:
            if created:
                self.load_repositories()

        self.app.push_screen(CreateRepoScreen(self.palette), handle)

    def action_refresh(self) -> None:
        self.load_repositories()
