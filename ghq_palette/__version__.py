"""Version information for ghq-palette."""

__version__ = "0.3.0"
