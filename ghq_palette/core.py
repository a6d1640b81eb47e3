"""Core functionality for ghq-palette"""

import os
from typing import List, Optional, Union

from ghq_palette.config import Config, OpenWith
from ghq_palette.constants import OPEN_AFTER_CHOICES
from ghq_palette.exceptions import CommandError, ValidationError
from ghq_palette.models.branch import BranchItem
from ghq_palette.models.repository import GitRepo, InitRepoResult
from ghq_palette.services.cache_service import BranchCache
from ghq_palette.services.command_runner import CommandRunner
from ghq_palette.services.ghq import GhqService
from ghq_palette.services.git import BranchService, GitOperations, WorktreeService
from ghq_palette.services.repo_initializer import RepoInitializer
from ghq_palette.services.validation_service import ValidationService
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


class GhqPalette:
    """Entry point tying configuration to the git, ghq and scaffolding services.

    Every method runs its commands synchronously; the TUI calls them from
    worker threads.
    """

    def __init__(self, config: Union[Config, dict, None] = None, runner: Optional[CommandRunner] = None):
        """Initialize GhqPalette.

        Args:
            config: Configuration dict or Config object (defaults when omitted)
            runner: Command runner shared by all services
        """
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.runner = runner or CommandRunner(timeout=self.config.command_timeout)
        self.ghq_service = GhqService(self.runner)
        self.branch_service = BranchService(self.runner)
        self.initializer = RepoInitializer(self.runner, self.config.default_branch)
        self.cache = BranchCache()

    # Repositories

    def get_root(self) -> str:
        return self.ghq_service.get_root()

    def list_hostnames(self, root: str) -> List[str]:
        return self.ghq_service.list_hostnames(root, self.config.preferred_hostnames)

    def list_orgs(self, root: str, hostname: str) -> List[str]:
        return self.ghq_service.list_orgs(root, hostname, self.config.preferred_orgs_for(hostname))

    def list_repositories(self, root: Optional[str] = None) -> List[GitRepo]:
        return self.ghq_service.list_repositories(
            root or self.get_root(),
            self.config.preferred_hostnames,
            self.config.preferred_orgs,
        )

    # Branches

    def get_branches(self, repo: GitRepo) -> List[BranchItem]:
        """Fresh branch listing for ``repo``; also refreshes the cache."""
        branches = self.branch_service.get_branches_and_worktrees(repo.full_path)
        self.cache.put(repo.full_path, branches)
        return branches

    def cached_branches(self, repo: GitRepo) -> Optional[List[BranchItem]]:
        return self.cache.get(repo.full_path)

    def git_operations(self, repo: GitRepo) -> GitOperations:
        return GitOperations(repo.full_path, self.runner)

    def worktree_service(self, repo: GitRepo) -> WorktreeService:
        return WorktreeService(repo.full_path, self.runner, self.config.worktree_tool)

    def open_path(self, path: str, open_with: OpenWith) -> None:
        self.runner.run(open_with.argv(path))
        logger.info(f"Opened {path} with {open_with.name}")

    def open_branch(self, repo: GitRepo, branch: BranchItem, open_with: OpenWith) -> bool:
        """Open a branch with an application.

        Worktrees open at their own path. Plain branches are checked out in
        the repository first unless already current.

        Returns:
            True if a checkout happened
        """
        if branch.is_worktree:
            self.open_path(branch.worktree_path or repo.full_path, open_with)
            return False

        switched = False
        if not branch.is_current:
            self.git_operations(repo).checkout(branch.name)
            self.cache.invalidate(repo.full_path)
            switched = True
        self.open_path(repo.full_path, open_with)
        return switched

    def create_branch(self, repo: GitRepo, branch_name: str, from_branch: str) -> str:
        name = ValidationService.ensure_branch_name(branch_name)
        self.git_operations(repo).create_branch(name, from_branch)
        self.cache.invalidate(repo.full_path)
        return name

    def create_worktree(self, repo: GitRepo, branch_name: str, from_branch: str) -> str:
        name = ValidationService.ensure_branch_name(branch_name)
        path = self.worktree_service(repo).create_worktree(name, from_branch)
        self.cache.invalidate(repo.full_path)
        return path

    def worktree_path_for(self, repo: GitRepo, branch: BranchItem) -> str:
        return self.worktree_service(repo).worktree_path_for(branch.name)

    def convert_to_worktree(self, repo: GitRepo, branch: BranchItem, path: Optional[str] = None) -> str:
        path = self.worktree_service(repo).convert_to_worktree(branch, path)
        self.cache.invalidate(repo.full_path)
        return path

    def delete_branch(self, repo: GitRepo, branch: BranchItem) -> None:
        self.git_operations(repo).delete_branch(branch)
        self.cache.invalidate(repo.full_path)

    # New repositories

    def repo_dir_for(self, root: str, hostname: str, org: str, repo_name: str) -> str:
        return os.path.join(root, hostname, org, repo_name)

    def create_repository(
        self,
        root: str,
        hostname: str,
        org: str,
        repo_name: str,
        initial_commit: bool = True,
    ) -> InitRepoResult:
        """Validate the form values and create ``<root>/<hostname>/<org>/<repo_name>``.

        Raises:
            ValidationError: If a field is empty or the name is invalid
            DirectoryExistsError: If the target directory exists
        """
        ValidationService.require_fields(hostname=hostname, org=org, repo_name=repo_name)
        ValidationService.ensure_repo_name(repo_name)
        repo_dir = self.repo_dir_for(root, hostname, org, repo_name)
        return self.initializer.init_repo(repo_dir, repo_name, initial_commit)

    def open_after_create(self, repo_dir: str, action: str) -> Optional[str]:
        """Open a freshly created repository.

        Editors that cannot be launched fall back to the file manager.

        Returns:
            A warning message when the fallback was used, else None
        """
        if action not in OPEN_AFTER_CHOICES:
            raise ValidationError("open_after", f"Unknown open-after choice: {action}")
        if action == "none":
            return None

        file_manager = OpenWith("File Manager", self.config.file_manager)
        _, editor = OPEN_AFTER_CHOICES[action]
        if editor is None:
            self.open_path(repo_dir, file_manager)
            return None

        try:
            self.open_path(repo_dir, OpenWith(editor, editor))
        except CommandError as e:
            logger.warning(f"Could not open {repo_dir} with {editor}: {e}")
            self.open_path(repo_dir, file_manager)
            return f'"{editor}" command not found. Opening in file manager instead'
        return None
