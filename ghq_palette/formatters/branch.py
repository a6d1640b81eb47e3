"""Branch row formatting utilities."""

import os
from typing import List, Optional

from ghq_palette.models.branch import BranchItem
from ghq_palette.constants import (
    SYMBOL_CURRENT_BRANCH,
    SYMBOL_WORKTREE,
    TAG_COLORS,
    TAG_CURRENT,
    TAG_WORKTREE,
)


def format_branch_name(name: str, is_current: bool = False) -> str:
    """
    Format branch name with optional current branch indicator.

    Args:
        name: Branch name
        is_current: Whether this is the current branch

    Returns:
        Formatted branch name
    """
    return name + (SYMBOL_CURRENT_BRANCH if is_current else "")


def get_branch_tags(branch: BranchItem) -> List[str]:
    """Tags shown next to a branch: ``current`` and/or ``worktree``."""
    tags = []
    if branch.is_current:
        tags.append(TAG_CURRENT)
    if branch.is_worktree:
        tags.append(TAG_WORKTREE)
    return tags


def format_branch_state(branch: BranchItem) -> str:
    """
    Format the tags of a branch as Rich markup.

    Example:
        "[green]current[/green]" for the checked-out branch
        "[blue]⊢ worktree[/blue]" for a branch living in a worktree
        "" for a plain branch
    """
    parts = []
    for tag in get_branch_tags(branch):
        label = f"{SYMBOL_WORKTREE} {tag}" if tag == TAG_WORKTREE else tag
        parts.append(f"[{TAG_COLORS[tag]}]{label}[/{TAG_COLORS[tag]}]")
    return " ".join(parts)


def format_worktree_path(branch: BranchItem, repo_path: Optional[str] = None) -> str:
    """
    Format the worktree path, relative to the repository's parent when possible.

    Args:
        branch: Branch item
        repo_path: Repository path used to shorten sibling worktree paths

    Returns:
        Display path, or "" for branches without a worktree
    """
    if not branch.worktree_path:
        return ""
    if repo_path:
        parent = os.path.dirname(os.path.abspath(repo_path))
        path = os.path.abspath(branch.worktree_path)
        if os.path.commonpath([parent, path]) == parent:
            return os.path.relpath(path, parent)
    return branch.worktree_path


def get_branch_style(branch: BranchItem) -> Optional[str]:
    """Row style: bold for the current branch, default otherwise."""
    return "bold" if branch.is_current else None
