"""
ghq-palette - browse ghq-managed repositories and drive their branches and worktrees
"""

from .__version__ import __version__
from .core import GhqPalette
from .cli.main import main

__all__ = ["GhqPalette", "main", "__version__"]
