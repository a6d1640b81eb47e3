"""Scaffolding of new local repositories."""

import os

from ghq_palette.constants import (
    DEFAULT_BRANCH,
    GITIGNORE_CONTENT,
    INITIAL_COMMIT_MESSAGE,
    README_TEMPLATE,
)
from ghq_palette.exceptions import CommandError, DirectoryExistsError
from ghq_palette.models.repository import InitRepoResult
from ghq_palette.services.command_runner import CommandRunner
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


class RepoInitializer:
    """Creates a git repository with a README and a .gitignore."""

    def __init__(self, runner: CommandRunner, default_branch: str = DEFAULT_BRANCH):
        self.runner = runner
        self.default_branch = default_branch

    def init_repo(self, repo_dir: str, repo_name: str, initial_commit: bool = True) -> InitRepoResult:
        """Create a new Git repository with README.md and .gitignore.

        A failing initial commit (e.g. no user.name/user.email configured)
        leaves the repository in place and is reported through the result.

        Args:
            repo_dir: Directory to create; must not exist yet
            repo_name: Name written into the README heading
            initial_commit: Stage everything and commit when True

        Returns:
            InitRepoResult describing whether the commit succeeded

        Raises:
            DirectoryExistsError: If ``repo_dir`` already exists
            OSError: If the directory or files cannot be written
            CommandError: If `git init` or the branch rename fails
        """
        if os.path.exists(repo_dir):
            raise DirectoryExistsError(repo_dir)

        os.makedirs(repo_dir)
        logger.info(f"Created directory {repo_dir}")

        self.runner.run(["git", "init"], cwd=repo_dir)
        self.runner.run(["git", "branch", "-M", self.default_branch], cwd=repo_dir)

        with open(os.path.join(repo_dir, "README.md"), "w", encoding="utf-8") as f:
            f.write(README_TEMPLATE.format(name=repo_name))
        with open(os.path.join(repo_dir, ".gitignore"), "w", encoding="utf-8") as f:
            f.write(GITIGNORE_CONTENT)

        if initial_commit:
            try:
                self.runner.run(["git", "add", "-A"], cwd=repo_dir)
                self.runner.run(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], cwd=repo_dir)
            except CommandError as e:
                logger.warning(f"Initial commit failed in {repo_dir}: {e}")
                return InitRepoResult(repo_dir=repo_dir, commit_failed=True, commit_error=str(e))
            logger.info(f"Created initial commit in {repo_dir}")

        return InitRepoResult(repo_dir=repo_dir, commit_failed=False)
