"""Worktree operations service for ghq-palette."""

from typing import Optional

from ghq_palette.exceptions import CommandError, GitOperationError
from ghq_palette.models.branch import BranchItem
from ghq_palette.services.command_runner import CommandRunner
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


class WorktreeService:
    """Service for managing the worktrees of one repository.

    Where a worktree should live is decided by an external helper
    (``gwt`` by default) that knows the user's path convention:

    - ``<tool> path <branch>`` prints the worktree path for a branch
    - ``<tool> create <branch> --from <base>`` creates a branch and its
      worktree, printing the new path on the last line
    """

    def __init__(self, repo_path: str, runner: CommandRunner, tool: str = "gwt"):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
            runner: Command runner used for every invocation
            tool: Name of the worktree helper executable
        """
        self.repo_path = repo_path
        self.runner = runner
        self.tool = tool

    def worktree_path_for(self, branch_name: str) -> str:
        """Ask the worktree helper where ``branch_name`` should be checked out."""
        path = self.runner.run([self.tool, "path", branch_name], cwd=self.repo_path)
        if not path:
            raise GitOperationError("worktree_path", branch_name, f"{self.tool} returned no path")
        return path.splitlines()[-1].strip()

    def add_worktree(self, path: str, branch_name: str) -> None:
        """Check out an existing branch in a new worktree at ``path``."""
        try:
            self.runner.run(["git", "worktree", "add", path, branch_name], cwd=self.repo_path)
        except CommandError as e:
            raise GitOperationError("add_worktree", branch_name, e.stderr or str(e)) from e
        logger.info(f"Added worktree for {branch_name} at {path}")

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove the worktree at ``path``."""
        args = ["git", "-C", self.repo_path, "worktree", "remove", path]
        if force:
            args.append("--force")
        try:
            self.runner.run(args)
        except CommandError as e:
            raise GitOperationError("remove_worktree", message=e.stderr or str(e)) from e
        logger.info(f"Removed worktree at {path}")

    def convert_to_worktree(self, branch: BranchItem, path: Optional[str] = None) -> str:
        """Move a plain branch into its own worktree.

        Args:
            branch: Branch without a worktree, not checked out anywhere
            path: Target path; asked from the worktree helper when omitted

        Returns:
            Path of the new worktree
        """
        if branch.is_worktree:
            raise GitOperationError(
                "convert_to_worktree", branch.name, f"already checked out at {branch.worktree_path}"
            )
        if branch.is_current:
            raise GitOperationError(
                "convert_to_worktree", branch.name, "checked out in the repository itself"
            )
        path = path or self.worktree_path_for(branch.name)
        self.add_worktree(path, branch.name)
        return path

    def create_worktree(self, branch_name: str, from_branch: str) -> str:
        """Create ``branch_name`` from ``from_branch`` in a new worktree.

        Returns:
            Path of the new worktree (last line of the helper's output)
        """
        try:
            output = self.runner.run(
                [self.tool, "create", branch_name, "--from", from_branch], cwd=self.repo_path
            )
        except CommandError as e:
            raise GitOperationError("create_worktree", branch_name, e.stderr or str(e)) from e

        lines = output.splitlines()
        path = lines[-1].strip() if lines else ""
        logger.info(f"Created worktree for {branch_name} from {from_branch} at {path or '?'}")
        return path
