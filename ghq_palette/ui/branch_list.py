"""Branch and worktree list screen."""

import asyncio
from typing import Dict, List, Optional

from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.coordinate import Coordinate
from textual.screen import Screen
from textual.widgets import DataTable, Footer

from ghq_palette.config import OpenWith
from ghq_palette.constants import BRANCH_COLUMNS, LEGEND_TEXT
from ghq_palette.core import GhqPalette
from ghq_palette.formatters import format_branch_name, format_branch_state, format_worktree_path
from ghq_palette.models.branch import BranchItem
from ghq_palette.models.repository import GitRepo
from ghq_palette.ui.screens import BranchNameScreen, ConfirmScreen, InfoScreen
from ghq_palette.ui.widgets import PaletteHeader, StatusBar
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


class BranchListScreen(Screen):
    """Branches and worktrees of one repository, with lifecycle actions."""

    DEFAULT_CSS = """
    BranchListScreen DataTable {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("o", "open_with(1)", "Open (2nd)"),
        Binding("3", "open_with(2)", "Open (3rd)", show=False),
        Binding("4", "open_with(3)", "Open (4th)", show=False),
        Binding("5", "open_with(4)", "Open (5th)", show=False),
        Binding("n", "create_branch", "Create Branch"),
        Binding("w", "create_worktree", "Create Worktree"),
        Binding("t", "convert_to_worktree", "To Worktree"),
        Binding("x", "delete_branch", "Delete"),
        Binding("l", "show_legend", "Legend"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(self, palette: GhqPalette, repo: GitRepo):
        super().__init__()
        self.palette = palette
        self.repo = repo
        self.branches: List[BranchItem] = []
        self._by_name: Dict[str, BranchItem] = {}

    def compose(self) -> ComposeResult:
        yield PaletteHeader()
        yield DataTable(id="branch-table", cursor_type="row", zebra_stripes=True)
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"Branches: {self.repo.name}"
        self.sub_title = self.repo.display_name

        table = self.query_one(DataTable)
        for col in BRANCH_COLUMNS:
            table.add_column(col.label, width=col.width or None, key=col.key)

        # Paint the last known listing while revalidating
        cached = self.palette.cached_branches(self.repo)
        if cached is not None:
            self._set_branches(cached)
        else:
            table.loading = True
        self.load_branches()

    # Table

    def _set_branches(self, branches: List[BranchItem]) -> None:
        self.branches = branches
        self._by_name = {b.name: b for b in branches}
        self._populate_table()

    def _populate_table(self) -> None:
        table = self.query_one(DataTable)
        saved_row = table.cursor_row

        table.clear()
        for branch in self.branches:
            table.add_row(
                Text(format_branch_name(branch.name, branch.is_current),
                     style="bold" if branch.is_current else ""),
                Text.from_markup(format_branch_state(branch)),
                format_worktree_path(branch, self.repo.full_path),
                key=branch.name,
            )

        if self.branches and saved_row is not None:
            table.cursor_coordinate = Coordinate(min(saved_row, len(self.branches) - 1), 0)
        self._update_status()

    def _update_status(self) -> None:
        self.query_one(StatusBar).show_branches(self.branches, self.palette.config.open_with)

    def _selected_branch(self) -> Optional[BranchItem]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self._by_name.get(row_key.value)

    def _show_error(self, title: str, error: Exception) -> None:
        logger.error(f"{title}: {error}")
        self.notify(str(error), title=title, severity="error", timeout=8)

    # Loading

    @work(exclusive=True, group="branches", thread=False)
    async def load_branches(self) -> None:
        """Fetch the branch listing in the background."""
        table = self.query_one(DataTable)
        try:
            branches = await asyncio.to_thread(self.palette.get_branches, self.repo)
            self._set_branches(branches)
            if not branches:
                self.notify("No branches found", severity="warning")
        except Exception as e:
            logger.error(f"Error loading branches: {e}", exc_info=True)
            self.app.push_screen(
                InfoScreen(f"Error loading branches:\n\n{e}\n\nCheck the logs for more details.")
            )
        finally:
            table.loading = False

    def action_refresh(self) -> None:
        self.load_branches()

    # Opening

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter opens the selected branch with the first target."""
        self.action_open_with(0)

    def action_open_with(self, index: int) -> None:
        targets = self.palette.config.open_with
        branch = self._selected_branch()
        if branch is None or index >= len(targets):
            return
        self.open_branch(branch, targets[index])

    @work(group="actions", thread=False)
    async def open_branch(self, branch: BranchItem, target: OpenWith) -> None:
        try:
            switched = await asyncio.to_thread(self.palette.open_branch, self.repo, branch, target)
        except Exception as e:
            self._show_error("Checkout Failed" if not branch.is_worktree else "Open Failed", e)
            return
        if switched:
            self.notify(f"Switched to {branch.name}", severity="information")
            self.load_branches()

    # Creating

    def action_create_branch(self) -> None:
        branch = self._selected_branch()
        if branch is None:
            return

        def handle(name: Optional[str]) -> None:
            if name:
                self.create_branch(name, branch.name)

        self.app.push_screen(
            BranchNameScreen(f"Create Branch from {branch.name}", branch.name, "Create Branch"), handle
        )

    @work(group="actions", thread=False)
    async def create_branch(self, name: str, from_branch: str) -> None:
        self.notify("Creating branch…")
        try:
            await asyncio.to_thread(self.palette.create_branch, self.repo, name, from_branch)
        except Exception as e:
            self._show_error("Failed to create branch", e)
            return
        self.notify(f"Created & switched to {name}", severity="information")
        self.load_branches()

    def action_create_worktree(self) -> None:
        branch = self._selected_branch()
        if branch is None:
            return

        def handle(name: Optional[str]) -> None:
            if name:
                self.create_worktree(name, branch.name)

        self.app.push_screen(
            BranchNameScreen(f"Create Worktree from {branch.name}", branch.name, "Create Worktree"), handle
        )

    @work(group="actions", thread=False)
    async def create_worktree(self, name: str, from_branch: str) -> None:
        self.notify("Creating worktree…")
        try:
            path = await asyncio.to_thread(self.palette.create_worktree, self.repo, name, from_branch)
        except Exception as e:
            self._show_error("Failed to create worktree", e)
            return
        self.notify(f"Created worktree for {name}" + (f"\n{path}" if path else ""), severity="information")
        self.load_branches()

    # Converting

    def action_convert_to_worktree(self) -> None:
        branch = self._selected_branch()
        if branch is None:
            return
        if branch.is_worktree or branch.is_current:
            self.notify(f"{branch.name} is already checked out in a worktree", severity="warning")
            return
        self.prepare_conversion(branch)

    @work(group="actions", thread=False)
    async def prepare_conversion(self, branch: BranchItem) -> None:
        """Resolve the worktree path, then ask before converting."""
        try:
            path = await asyncio.to_thread(self.palette.worktree_path_for, self.repo, branch)
        except Exception as e:
            self._show_error("Failed to convert to worktree", e)
            return

        def handle(confirmed: Optional[bool]) -> None:
            if confirmed:
                self.convert_branch(branch, path)

        self.app.push_screen(
            ConfirmScreen(
                "Convert to Worktree",
                f'"{branch.name}" will be added as a worktree at:\n{path}',
                confirm_label="Convert",
            ),
            handle,
        )

    @work(group="actions", thread=False)
    async def convert_branch(self, branch: BranchItem, path: str) -> None:
        self.notify("Converting to worktree…")
        try:
            await asyncio.to_thread(self.palette.convert_to_worktree, self.repo, branch, path)
        except Exception as e:
            self._show_error("Failed to convert to worktree", e)
            return
        self.notify(f"Converted {branch.name} to worktree", severity="information")
        self.load_branches()

    # Deleting

    def action_delete_branch(self) -> None:
        branch = self._selected_branch()
        if branch is None:
            return
        if branch.is_current:
            self.notify("Cannot delete the current branch", severity="warning")
            return

        message = f'Are you sure you want to delete "{branch.name}"?'
        if branch.is_worktree:
            message += f"\n\nIts worktree will be removed first:\n{branch.worktree_path}"

        def handle(confirmed: Optional[bool]) -> None:
            if confirmed:
                self.delete_branch(branch)

        self.app.push_screen(
            ConfirmScreen("Delete Branch", message, confirm_label="Delete", destructive=True), handle
        )

    @work(group="actions", thread=False)
    async def delete_branch(self, branch: BranchItem) -> None:
        self.notify("Deleting branch…")
        try:
            await asyncio.to_thread(self.palette.delete_branch, self.repo, branch)
        except Exception as e:
            self._show_error("Failed to delete branch", e)
            return
        self.notify(f"Deleted {branch.name}", severity="information")
        self.load_branches()

    # Misc

    def action_show_legend(self) -> None:
        self.app.push_screen(InfoScreen(LEGEND_TEXT))

    def action_back(self) -> None:
        if len(self.app.screen_stack) > 2:
            self.app.pop_screen()
        else:
            self.app.exit()
