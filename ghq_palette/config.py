"""Configuration handling for ghq-palette"""

import shlex
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ghq_palette.constants import (
    COMMAND_TIMEOUT,
    DEFAULT_BRANCH,
    DEFAULT_FILE_MANAGER,
    MAX_OPEN_WITH,
    OPEN_AFTER_CHOICES,
)
from ghq_palette.exceptions import ConfigError
from ghq_palette.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/ghq-palette/config.toml")


@dataclass(frozen=True)
class OpenWith:
    """An application a branch or worktree can be opened with."""

    name: str
    command: str

    def argv(self, target: str) -> List[str]:
        """Command line that opens ``target`` with this application."""
        return shlex.split(self.command) + [target]

    @classmethod
    def from_value(cls, value: Union["OpenWith", dict]) -> "OpenWith":
        if isinstance(value, OpenWith):
            return value
        if not isinstance(value, dict) or "command" not in value:
            raise ValueError(f"open_with entries need a 'command', got {value!r}")
        command = str(value["command"])
        return cls(name=str(value.get("name", command)), command=command)


def _default_open_with() -> List[OpenWith]:
    return [OpenWith("VS Code", "code"), OpenWith("Cursor", "cursor")]


@dataclass
class Config:
    """Configuration for ghq-palette with validation."""

    # Dropdown ordering: listed items first (in order), the rest alphabetically
    preferred_hostnames: List[str] = field(default_factory=list)
    preferred_orgs: Dict[str, List[str]] = field(default_factory=dict)

    # Applications offered by the branch list, in action order
    open_with: List[OpenWith] = field(default_factory=_default_open_with)

    # External tools
    worktree_tool: str = "gwt"
    file_manager: str = DEFAULT_FILE_MANAGER
    command_timeout: float = COMMAND_TIMEOUT

    # Repository creation
    default_branch: str = DEFAULT_BRANCH
    open_after_default: str = "vscode"

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_preferred_hostnames()
        self._validate_preferred_orgs()
        self._validate_open_with()
        self._validate_worktree_tool()
        self._validate_command_timeout()
        self._validate_default_branch()
        self._validate_open_after_default()

    def _validate_preferred_hostnames(self):
        if not isinstance(self.preferred_hostnames, list):
            raise ValueError("preferred_hostnames must be a list")
        self.preferred_hostnames = [str(h) for h in self.preferred_hostnames]

    def _validate_preferred_orgs(self):
        if not isinstance(self.preferred_orgs, dict):
            raise ValueError("preferred_orgs must be a mapping of hostname to list")
        for hostname, orgs in self.preferred_orgs.items():
            if not isinstance(orgs, list):
                raise ValueError(f"preferred_orgs[{hostname!r}] must be a list")

    def _validate_open_with(self):
        """Validate open_with has between one and MAX_OPEN_WITH targets."""
        self.open_with = [OpenWith.from_value(v) for v in self.open_with]
        if not 1 <= len(self.open_with) <= MAX_OPEN_WITH:
            raise ValueError(
                f"open_with must have between 1 and {MAX_OPEN_WITH} entries, got {len(self.open_with)}"
            )

    def _validate_worktree_tool(self):
        if not self.worktree_tool or not self.worktree_tool.strip():
            raise ValueError("worktree_tool cannot be empty")
        self.worktree_tool = self.worktree_tool.strip()

    def _validate_command_timeout(self):
        if self.command_timeout <= 0:
            raise ValueError(f"command_timeout must be positive, got {self.command_timeout}")

    def _validate_default_branch(self):
        if not self.default_branch or not self.default_branch.strip():
            raise ValueError("default_branch cannot be empty")
        self.default_branch = self.default_branch.strip()

    def _validate_open_after_default(self):
        allowed = list(OPEN_AFTER_CHOICES)
        if self.open_after_default not in allowed:
            raise ValueError(
                f"open_after_default must be one of {allowed}, got '{self.open_after_default}'"
            )

    def preferred_orgs_for(self, hostname: str) -> List[str]:
        """Preferred org order for a hostname (empty when none configured)."""
        return list(self.preferred_orgs.get(hostname, []))

    def to_dict(self) -> dict:
        return {
            "preferred_hostnames": self.preferred_hostnames,
            "preferred_orgs": self.preferred_orgs,
            "open_with": [{"name": o.name, "command": o.command} for o in self.open_with],
            "worktree_tool": self.worktree_tool,
            "file_manager": self.file_manager,
            "command_timeout": self.command_timeout,
            "default_branch": self.default_branch,
            "open_after_default": self.open_after_default,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "preferred_hostnames",
            "preferred_orgs",
            "open_with",
            "worktree_tool",
            "file_manager",
            "command_timeout",
            "default_branch",
            "open_after_default",
            "verbose",
            "debug",
        }

        unknown = set(config_dict) - known_fields
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def load_config(path: Optional[Union[str, Path]] = None, **overrides) -> Config:
    """Load configuration from a TOML file.

    Args:
        path: Explicit config file. When omitted the default location is used
            and a missing file simply yields the defaults.
        **overrides: Values that take precedence over the file (e.g. CLI flags)

    Returns:
        Validated Config

    Raises:
        ConfigError: If an explicit file is missing, the TOML is malformed or
            a value fails validation
    """
    explicit = path is not None
    config_path = Path(path if explicit else DEFAULT_CONFIG_PATH).expanduser()

    data: dict = {}
    if config_path.is_file():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        logger.debug(f"Loaded config from {config_path}")
    elif explicit:
        raise ConfigError(f"Config file not found: {config_path}")

    data.update(overrides)
    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
