"""Branch and worktree aggregation."""

from typing import Dict, List, Optional, Sequence

from ghq_palette.models.branch import BranchItem, BranchType
from ghq_palette.models.worktree import WorktreeRecord
from ghq_palette.services.command_runner import CommandRunner
from ghq_palette.services.git.parsers import BranchListParser, ListedBranch, WorktreeListParser
from ghq_palette.logging_config import get_logger
from ghq_palette.utils.sorting import sort_with_preferred

logger = get_logger(__name__)

BRANCH_LIST_COMMAND = ["git", "branch", "--no-color"]
WORKTREE_LIST_COMMAND = ["git", "worktree", "list", "--porcelain"]


def merge_branches_and_worktrees(
    branches: Sequence[ListedBranch], worktrees: Sequence[WorktreeRecord]
) -> List[BranchItem]:
    """Combine `git branch` entries with worktree records.

    Branches keep the order they were listed in. Every branch that also
    appears in the worktree list, the main working tree included, becomes a
    single WORKTREE item carrying that worktree's path; the current branch
    therefore points at the repository itself. A worktree referencing a
    branch that was not listed gets a synthetic item appended after the
    listed branches. Detached and bare records have no branch to attach to
    and are skipped.
    """
    items: Dict[str, BranchItem] = {}
    for branch in branches:
        if branch.name in items:
            continue
        items[branch.name] = BranchItem(name=branch.name, is_current=branch.is_current)

    for worktree in worktrees:
        if not worktree.branch_name:
            continue

        item = items.get(worktree.branch_name)
        if item is None:
            logger.debug(f"Worktree {worktree.path} references unlisted branch {worktree.branch_name}")
            items[worktree.branch_name] = BranchItem(
                name=worktree.branch_name,
                type=BranchType.WORKTREE,
                is_current=False,
                worktree_path=worktree.path,
            )
        elif not item.is_worktree:
            item.attach_worktree(worktree.path)

    return list(items.values())


class BranchService:
    """Lists the branches and worktrees of a repository."""

    def __init__(
        self,
        runner: CommandRunner,
        branch_parser: Optional[BranchListParser] = None,
        worktree_parser: Optional[WorktreeListParser] = None,
    ):
        self.runner = runner
        self.branch_parser = branch_parser or BranchListParser()
        self.worktree_parser = worktree_parser or WorktreeListParser()

    def list_branches(self, repo_path: str) -> List[ListedBranch]:
        """Local branches as reported by `git branch`."""
        output = self.runner.run(BRANCH_LIST_COMMAND, cwd=repo_path)
        return self.branch_parser.parse(output)

    def list_worktrees(self, repo_path: str) -> List[WorktreeRecord]:
        """Every worktree record, the main working tree first."""
        output = self.runner.run(WORKTREE_LIST_COMMAND, cwd=repo_path)
        return self.worktree_parser.parse(output)

    def get_branches_and_worktrees(
        self, repo_path: str, preferred: Optional[Sequence[str]] = None
    ) -> List[BranchItem]:
        """Get every local branch and worktree as one de-duplicated list.

        Args:
            repo_path: Path to the repository
            preferred: Optional branch names to pin to the top; the remaining
                branches are then ordered alphabetically. Without it the order
                of `git branch` is kept.

        Returns:
            One BranchItem per branch name

        Raises:
            CommandError: If either git command fails (e.g. not a repository)
        """
        branches = self.list_branches(repo_path)
        worktrees = self.list_worktrees(repo_path)
        items = merge_branches_and_worktrees(branches, worktrees)

        if preferred:
            by_name = {item.name: item for item in items}
            items = [by_name[name] for name in sort_with_preferred(by_name, preferred)]

        logger.debug(
            f"Found {len(items)} branches in {repo_path} "
            f"({sum(1 for i in items if i.is_worktree)} in worktrees)"
        )
        return items
