"""Command-line entry point for ghq-palette"""

import locale
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ghq_palette.cli.args import parse_args
from ghq_palette.config import load_config
from ghq_palette.core import GhqPalette
from ghq_palette.exceptions import ValidationError
from ghq_palette.logging_config import get_logger, setup_logging
from ghq_palette.models.repository import GitRepo
from ghq_palette.services.display_service import DisplayService
from ghq_palette.services.git import find_repository

console = Console()
logger = get_logger(__name__)


def _use_system_collation() -> None:
    """Sort names with the user's locale rather than the C default."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not apply the system collation locale: {e}")


def _run_tui(palette: GhqPalette, mode: str, repo: Optional[GitRepo] = None) -> int:
    # Imported lazily so the plain CLI does not pay for Textual
    from ghq_palette.tui import GhqPaletteApp

    app = GhqPaletteApp(palette, mode=mode, repo=repo)
    app.run()
    if app.created_repo:
        console.print(app.created_repo)
    return 0


def _create_non_interactive(palette: GhqPalette, display: DisplayService, args) -> int:
    """Create a repository from command-line flags."""
    root = palette.get_root()

    hostname = args.hostname
    if not hostname:
        hostnames = palette.list_hostnames(root)
        if not hostnames:
            raise ValidationError("hostname", "No hostname directories found under ghq root")
        hostname = hostnames[0]

    org = args.org
    if not org:
        orgs = palette.list_orgs(root, hostname)
        if not orgs:
            raise ValidationError("org", f"No org directories found under {hostname}")
        org = orgs[0]

    result = palette.create_repository(root, hostname, org, args.name, not args.no_commit)
    display.display_init_result(result)

    warning = palette.open_after_create(result.repo_dir, args.open_after)
    if warning:
        console.print(f"[yellow]{warning}[/yellow]")
    return 0


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        # Interactive by default when attached to a terminal
        use_interactive = parsed_args.interactive or (
            sys.stdin.isatty() and sys.stdout.isatty() and not parsed_args.no_interactive
        )
        command = parsed_args.command or "repos"
        if command == "create" and parsed_args.name:
            use_interactive = False

        log_file = setup_logging(
            verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_interactive
        )
        _use_system_collation()

        overrides = {}
        if parsed_args.verbose:
            overrides["verbose"] = True
        if parsed_args.debug:
            overrides["debug"] = True
        config = load_config(parsed_args.config, **overrides)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"[yellow]Log file:[/yellow] {escape(str(log_file))}")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        palette = GhqPalette(config)
        display = DisplayService(console)

        if command == "branches":
            repo = find_repository(parsed_args.path)
            if use_interactive:
                return _run_tui(palette, "branches", repo)
            display.display_branch_table(palette.get_branches(repo), repo, show_legend=parsed_args.verbose)
            return 0

        if command == "create":
            if use_interactive:
                return _run_tui(palette, "create")
            if not parsed_args.name:
                raise ValidationError("repo_name", "--name is required without the interactive form")
            return _create_non_interactive(palette, display, parsed_args)

        if use_interactive:
            return _run_tui(palette, "repos")
        root = palette.get_root()
        display.display_repo_table(palette.list_repositories(root), root)
        return 0

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
