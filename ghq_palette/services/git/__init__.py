"""Git-related services for ghq-palette."""

from .branches import BranchService, merge_branches_and_worktrees
from .operations import GitOperations
from .parsers import BranchListParser, ListedBranch, WorktreeListParser
from .repository import find_repository
from .worktrees import WorktreeService

__all__ = [
    "BranchService",
    "merge_branches_and_worktrees",
    "GitOperations",
    "BranchListParser",
    "ListedBranch",
    "WorktreeListParser",
    "find_repository",
    "WorktreeService",
]
