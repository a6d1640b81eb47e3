"""Shared constants for ghq-palette."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List


# Directories prepended to PATH so user-installed tools (git, ghq, gwt, editors)
# resolve even when launched from an environment with a minimal PATH.
# "~" entries are expanded when the command environment is built.
PATH_ADDITIONS: List[str] = [
    "~/.local/bin",
    "/opt/homebrew/bin",
    "/opt/homebrew/sbin",
    "/usr/local/bin",
    "/usr/bin",
    "/bin",
]

COMMAND_TIMEOUT = 15.0  # seconds

FALLBACK_GHQ_ROOT = Path("~/ghq")

# Repository scaffolding
DEFAULT_BRANCH = "main"
INITIAL_COMMIT_MESSAGE = "Initial commit"
README_TEMPLATE = "# {name}\n"
GITIGNORE_CONTENT = """.DS_Store
.idea/
.vscode/
"""
REPO_NAME_PATTERN = r"^[a-zA-Z0-9._-]+$"

# Open-after-create choices, value -> (label, editor command or None)
OPEN_AFTER_CHOICES = {
    "vscode": ("VS Code", "code"),
    "cursor": ("Cursor", "cursor"),
    "finder": ("Finder", None),
    "none": ("None", None),
}

MAX_OPEN_WITH = 5

DEFAULT_FILE_MANAGER = "open" if sys.platform == "darwin" else "xdg-open"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Column definitions shared by the CLI table and the TUI
BRANCH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 40),
    ColumnDefinition("state", "State", 12),
    ColumnDefinition("path", "Worktree Path", 0),
]

REPO_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("hostname", "Hostname", 24),
    ColumnDefinition("org", "Org / Owner", 24),
    ColumnDefinition("name", "Repository", 0),
]


# Symbol constants
SYMBOL_CURRENT_BRANCH = " *"
SYMBOL_WORKTREE = "⊢"


# Tag labels and colours (Rich / Textual colour names)
TAG_CURRENT = "current"
TAG_WORKTREE = "worktree"

TAG_COLORS = {
    TAG_CURRENT: "green",
    TAG_WORKTREE: "blue",
}


LEGEND_TEXT = """
Legend:
* = Current branch        ⊢ = Checked out in a worktree

Keys (branch list):
enter = Open with target 1      o = Open with target 2
3/4/5 = Open with target 3-5    n = Create branch
w = Create worktree             t = Convert to worktree
x = Delete branch               r = Refresh
"""
