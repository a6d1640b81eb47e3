"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorktreeRecord:
    """One record of `git worktree list --porcelain`."""

    path: str
    branch_name: Optional[str] = None  # None when detached or bare
    head: Optional[str] = None
    is_main: bool = False  # First record is always the main working tree
    is_bare: bool = False
    is_detached: bool = False
    is_locked: bool = False
    is_prunable: bool = False

    def __str__(self) -> str:
        """String representation of worktree."""
        label = self.branch_name or ("(bare)" if self.is_bare else "(detached)")
        main_marker = " (main)" if self.is_main else ""
        return f"{label} @ {self.path}{main_marker}"
