"""Locating repositories on disk."""

import os
from typing import Optional

import git

from ghq_palette.exceptions import GitOperationError
from ghq_palette.models.repository import GitRepo
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


def find_repository(path: Optional[str] = None) -> GitRepo:
    """Find the repository containing ``path`` (defaults to the cwd).

    Parent directories are searched, so any directory inside a working tree
    resolves to that working tree's root.

    Raises:
        GitOperationError: If ``path`` is not inside a non-bare repository
    """
    start = os.path.abspath(path or os.getcwd())
    try:
        repo = git.Repo(start, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise GitOperationError("find_repository", message=f"Not a git repository: {start}") from e

    try:
        working_dir = repo.working_tree_dir
    finally:
        repo.close()

    if working_dir is None:
        raise GitOperationError("find_repository", message=f"Bare repositories have no branches to open: {start}")

    logger.debug(f"Resolved {start} to repository {working_dir}")
    return GitRepo(name=os.path.basename(working_dir), full_path=str(working_dir))
