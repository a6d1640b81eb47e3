"""Formatting utilities for ghq-palette.

Shared by the rich CLI tables and the Textual screens so both render branch
rows the same way.
"""

from .branch import (
    format_branch_name,
    format_branch_state,
    format_worktree_path,
    get_branch_style,
    get_branch_tags,
)

__all__ = [
    "format_branch_name",
    "format_branch_state",
    "format_worktree_path",
    "get_branch_style",
    "get_branch_tags",
]
