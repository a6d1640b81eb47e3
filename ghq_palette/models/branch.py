"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional

class BranchType(Enum):
    """Whether a branch has its own worktree checkout."""
    BRANCH = "branch"
    WORKTREE = "worktree"

@dataclass
class BranchItem:
    """A local branch, or the worktree a branch is checked out in."""
    name: str
    type: BranchType = BranchType.BRANCH
    is_current: bool = False  # Checked out in the primary working directory
    worktree_path: Optional[str] = None  # Only set for BranchType.WORKTREE

    @property
    def is_worktree(self) -> bool:
        return self.type is BranchType.WORKTREE

    def attach_worktree(self, path: str) -> None:
        """Reclassify this branch as living in the worktree at ``path``."""
        self.type = BranchType.WORKTREE
        self.worktree_path = path
