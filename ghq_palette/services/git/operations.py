"""Branch operations: checkout, create and delete."""

from ghq_palette.exceptions import BranchProtectedError, CommandError, GitOperationError
from ghq_palette.models.branch import BranchItem
from ghq_palette.services.command_runner import CommandRunner
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


def _failure_detail(error: CommandError) -> str:
    return error.stderr or error.stdout or str(error)


class GitOperations:
    """Service for mutating the branches of one repository."""

    def __init__(self, repo_path: str, runner: CommandRunner):
        """Initialize the service.

        Args:
            repo_path: Path to the git repository
            runner: Command runner used for every git invocation
        """
        self.repo_path = repo_path
        self.runner = runner

    def _git(self, *args: str) -> str:
        return self.runner.run(["git", "-C", self.repo_path, *args])

    def checkout(self, branch_name: str) -> None:
        """Switch the primary working directory to ``branch_name``."""
        try:
            self._git("checkout", branch_name)
        except CommandError as e:
            raise GitOperationError("checkout", branch_name, _failure_detail(e)) from e
        logger.info(f"Checked out {branch_name} in {self.repo_path}")

    def create_branch(self, branch_name: str, from_branch: str) -> None:
        """Create ``branch_name`` from ``from_branch`` and switch to it."""
        try:
            self._git("checkout", "-b", branch_name, from_branch)
        except CommandError as e:
            raise GitOperationError("create_branch", branch_name, _failure_detail(e)) from e
        logger.info(f"Created branch {branch_name} from {from_branch}")

    def delete_branch(self, branch: BranchItem) -> None:
        """Delete a branch, removing its worktree first if it has one.

        Uses `git branch -d`, so unmerged branches are refused by git.

        Raises:
            BranchProtectedError: If the branch is checked out in the primary
                working directory
            GitOperationError: If removing the worktree or the branch fails
        """
        if branch.is_current:
            raise BranchProtectedError(branch.name)

        if branch.is_worktree and branch.worktree_path:
            try:
                self._git("worktree", "remove", branch.worktree_path)
            except CommandError as e:
                raise GitOperationError("remove_worktree", branch.name, _failure_detail(e)) from e
            logger.info(f"Removed worktree at {branch.worktree_path}")

        try:
            self._git("branch", "-d", branch.name)
        except CommandError as e:
            raise GitOperationError("delete_branch", branch.name, _failure_detail(e)) from e
        logger.info(f"Deleted branch {branch.name}")
