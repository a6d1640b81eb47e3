"""ghq root resolution and repository discovery."""

import os
from pathlib import Path
from typing import List, Optional, Sequence

from ghq_palette.constants import FALLBACK_GHQ_ROOT
from ghq_palette.exceptions import CommandError, RepoRootNotFoundError
from ghq_palette.models.repository import GitRepo
from ghq_palette.services.command_runner import CommandRunner
from ghq_palette.logging_config import get_logger
from ghq_palette.utils.filesystem import list_directories
from ghq_palette.utils.sorting import sort_with_preferred

logger = get_logger(__name__)


class GhqService:
    """Finds the ghq root and lists the ``hostname/org/repo`` tree below it."""

    def __init__(self, runner: CommandRunner, fallback_root: Optional[os.PathLike] = None):
        """Initialize the service.

        Args:
            runner: Command runner used for `ghq root`
            fallback_root: Root used when ghq is unavailable (defaults to ~/ghq)
        """
        self.runner = runner
        self.fallback_root = Path(fallback_root or FALLBACK_GHQ_ROOT).expanduser()

    def get_root(self) -> str:
        """Get the ghq root directory.

        Tries `ghq root` first and falls back to ~/ghq.

        Raises:
            RepoRootNotFoundError: If neither location exists
        """
        try:
            root = self.runner.run(["ghq", "root"])
            if root and os.path.isdir(root):
                return root
            logger.debug(f"ghq root returned unusable path {root!r}")
        except CommandError as e:
            logger.debug(f"ghq root failed, trying fallback: {e}")

        if self.fallback_root.is_dir():
            return str(self.fallback_root)

        raise RepoRootNotFoundError()

    def list_hostnames(self, root: str, preferred: Sequence[str] = ()) -> List[str]:
        """List hostname directories under the root, preferred ones first."""
        return sort_with_preferred(list_directories(root), preferred)

    def list_orgs(self, root: str, hostname: str, preferred: Sequence[str] = ()) -> List[str]:
        """List org/owner directories under a hostname, preferred ones first."""
        return sort_with_preferred(list_directories(os.path.join(root, hostname)), preferred)

    def list_repositories(
        self,
        root: str,
        preferred_hostnames: Sequence[str] = (),
        preferred_orgs: Optional[dict] = None,
    ) -> List[GitRepo]:
        """List every ``<root>/<hostname>/<org>/<repo>`` directory.

        Hostnames and orgs follow their preferred order; repositories within an
        org are alphabetical.
        """
        preferred_orgs = preferred_orgs or {}
        repos = []
        for hostname in self.list_hostnames(root, preferred_hostnames):
            for org in self.list_orgs(root, hostname, preferred_orgs.get(hostname, [])):
                org_dir = os.path.join(root, hostname, org)
                for name in sort_with_preferred(list_directories(org_dir)):
                    repos.append(
                        GitRepo(
                            name=name,
                            full_path=os.path.join(org_dir, name),
                            hostname=hostname,
                            org=org,
                        )
                    )
        logger.debug(f"Found {len(repos)} repositories under {root}")
        return repos
