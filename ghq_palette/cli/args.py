"""Command-line argument parsing for ghq-palette."""

import argparse

from ghq_palette.__version__ import __version__
from ghq_palette.constants import OPEN_AFTER_CHOICES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghq-palette",
        description="Browse ghq repositories and manage their branches and worktrees",
        epilog="Configuration is read from ~/.config/ghq-palette/config.toml unless --config is given.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"ghq-palette {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--config", metavar="PATH", help="Path to a TOML config file")
    parser.add_argument(
        "--interactive", action="store_true", help="Launch interactive TUI mode (default for TTY)"
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Force non-interactive CLI mode (for scripts/automation)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser("repos", help="Browse repositories under the ghq root (default)")

    branches = subparsers.add_parser("branches", help="List branches and worktrees of a repository")
    branches.add_argument(
        "path", nargs="?", help="Repository path (default: the repository containing the cwd)"
    )

    create = subparsers.add_parser("create", help="Create a new local repository")
    create.add_argument("--hostname", help="Hostname directory (default: first preferred/alphabetical)")
    create.add_argument("--org", help="Org / owner directory (default: first preferred/alphabetical)")
    create.add_argument("--name", help="Repository name; runs without the form when given")
    create.add_argument(
        "--no-commit", action="store_true", help="Skip the initial commit"
    )
    create.add_argument(
        "--open-after",
        choices=list(OPEN_AFTER_CHOICES),
        default="none",
        help="Open the repository after creating it (default: none)",
    )

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
