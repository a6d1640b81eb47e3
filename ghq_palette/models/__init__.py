"""Data models for ghq-palette."""

from .branch import BranchItem, BranchType
from .repository import GitRepo, InitRepoResult
from .worktree import WorktreeRecord

__all__ = ["BranchItem", "BranchType", "GitRepo", "InitRepoResult", "WorktreeRecord"]
