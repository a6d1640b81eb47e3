"""Logging configuration for ghq-palette"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_DIR = Path("~/.ghq-palette")
LOG_FILE_NAME = "ghq-palette.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Stripped from logger names, in order
_NAME_PREFIXES = ("ghq_palette.", "services.")


def get_log_file() -> Path:
    """Location of the log file written in TUI and debug mode."""
    return (LOG_DIR / LOG_FILE_NAME).expanduser()


def _console_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> Optional[Path]:
    """
    Configure the root logger.

    The CLI logs to stderr through Rich. The TUI owns the terminal, so it
    logs everything to a file instead; debug mode writes the file as well.

    Args:
        verbose: Show INFO messages on stderr
        debug: Show DEBUG messages with timestamps and source locations
        tui_mode: Log to the file only

    Returns:
        Path of the log file when one is written, else None
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = _console_level(verbose, debug)
    root_logger.setLevel(logging.DEBUG if tui_mode else level)

    log_file = None
    if tui_mode or debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # One run per file
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if not tui_mode:
        console_handler = RichHandler(
            console=Console(stderr=True),
            level=level,
            show_time=debug,
            show_path=debug,
            markup=False,
            rich_tracebacks=debug,
        )
        console_handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
        root_logger.addHandler(console_handler)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger named without the package prefix, e.g. ``git.branches``
    """
    for prefix in _NAME_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
