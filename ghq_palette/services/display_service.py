"""Rich table output for the non-interactive CLI"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ghq_palette.constants import BRANCH_COLUMNS, LEGEND_TEXT, REPO_COLUMNS
from ghq_palette.formatters import (
    format_branch_name,
    format_branch_state,
    format_worktree_path,
    get_branch_style,
)
from ghq_palette.models.branch import BranchItem
from ghq_palette.models.repository import GitRepo, InitRepoResult


class DisplayService:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_branch_table(
            self,
            branches: List[BranchItem],
            repo: GitRepo,
            show_legend: bool = False
        ) -> None:
        """Display a table of branches and worktrees."""
        table = Table(title=f"Branches: {repo.name}")
        for col in BRANCH_COLUMNS:
            table.add_column(col.label)

        for branch in branches:
            table.add_row(
                escape(format_branch_name(branch.name, branch.is_current)),
                format_branch_state(branch),
                escape(format_worktree_path(branch, repo.full_path)),
                style=get_branch_style(branch),
            )

        self.console.print(table)

        if show_legend:
            self.console.print(LEGEND_TEXT)

        worktrees = sum(1 for b in branches if b.is_worktree)
        self.console.print(f"\nTotal branches: {len(branches)} ({worktrees} in worktrees)")

    def display_repo_table(self, repos: List[GitRepo], root: str) -> None:
        """Display the repositories found under the ghq root."""
        table = Table(title=root)
        for col in REPO_COLUMNS:
            table.add_column(col.label)

        for repo in repos:
            table.add_row(escape(repo.hostname or ""), escape(repo.org or ""), escape(repo.name))

        self.console.print(table)
        self.console.print(f"\nTotal repositories: {len(repos)}")

    def display_init_result(self, result: InitRepoResult) -> None:
        if result.commit_failed:
            self.console.print("[yellow]Repository created (commit failed)[/yellow]")
            self.console.print(f"[dim]{escape(result.commit_error or '')}[/dim]")
        else:
            self.console.print("[green]Repository created[/green]")
        self.console.print(escape(result.repo_dir))
