"""Repository models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GitRepo:
    """A repository checked out under the ghq root."""

    name: str
    full_path: str
    hostname: Optional[str] = None
    org: Optional[str] = None

    @property
    def display_name(self) -> str:
        """``hostname/org/name`` when the repo came from a root listing."""
        if self.hostname and self.org:
            return f"{self.hostname}/{self.org}/{self.name}"
        return self.name


@dataclass
class InitRepoResult:
    """Outcome of creating a repository.

    The repository exists on disk in both cases; ``commit_failed`` only reports
    that the optional initial commit could not be made.
    """

    repo_dir: str
    commit_failed: bool = False
    commit_error: Optional[str] = None
