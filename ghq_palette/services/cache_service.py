"""In-memory cache of the last branch listing per repository."""

from threading import Lock
from typing import Dict, List, Optional

from ghq_palette.models.branch import BranchItem
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)


class BranchCache:
    """Keeps the last result per repository so a view can paint it while revalidating.

    Nothing is written to disk; entries live as long as the process.
    """

    def __init__(self):
        self._entries: Dict[str, List[BranchItem]] = {}
        self._lock = Lock()  # Workers run listings in threads

    def get(self, repo_path: str) -> Optional[List[BranchItem]]:
        """Cached branches for ``repo_path``, or None if never fetched."""
        with self._lock:
            entry = self._entries.get(repo_path)
        if entry is None:
            return None
        return list(entry)

    def put(self, repo_path: str, branches: List[BranchItem]) -> None:
        with self._lock:
            self._entries[repo_path] = list(branches)
        logger.debug(f"Cached {len(branches)} branches for {repo_path}")

    def invalidate(self, repo_path: Optional[str] = None) -> None:
        """Drop one repository's entry, or everything when no path is given."""
        with self._lock:
            if repo_path is None:
                self._entries.clear()
            else:
                self._entries.pop(repo_path, None)
