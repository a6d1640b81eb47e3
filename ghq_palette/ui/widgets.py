"""Custom widgets for ghq-palette TUI."""

from typing import Sequence

from rich.text import Text
from textual.app import ComposeResult, RenderResult
from textual.events import Click
from textual.widgets import Header, Static
from textual.widgets._header import HeaderClockSpace, HeaderIcon, HeaderTitle

from ghq_palette.__version__ import __version__
from ghq_palette.config import OpenWith
from ghq_palette.models.branch import BranchItem

# Keys bound to the open-with targets, in target order
OPEN_WITH_KEYS = ("enter", "o", "3", "4", "5")


class VersionLabel(HeaderClockSpace):
    """Version shown in the header's clock slot."""

    DEFAULT_CSS = """
    VersionLabel {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
        text-opacity: 85%;
    }
    """

    def render(self) -> RenderResult:
        return Text(f"v{__version__}")


class PaletteHeader(Header):
    """Fixed-height header: icon, title/subtitle and the version."""

    def __init__(self, **kwargs):
        kwargs.setdefault("icon", "")
        super().__init__(show_clock=False, **kwargs)

    def compose(self) -> ComposeResult:
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield VersionLabel()

    def on_click(self, event: Click) -> None:
        # Header grows to two lines on click by default
        event.stop()


class StatusBar(Static):
    """One-line summary docked above the footer."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 0 1;
    }
    """

    def show_branches(self, branches: Sequence[BranchItem], targets: Sequence[OpenWith]) -> None:
        """Branch and worktree counts plus which key opens with what."""
        worktrees = sum(1 for b in branches if b.is_worktree)
        keys = " | ".join(f"{key}: {target.name}" for key, target in zip(OPEN_WITH_KEYS, targets))
        self.update(f"{len(branches)} branches, {worktrees} in worktrees    {keys}")

    def show_repositories(self, shown: int, total: int) -> None:
        if shown == total:
            self.update(f"{total} repositories")
        else:
            self.update(f"{shown} of {total} repositories")
