"""Utility functions for ghq-palette.

This package provides utility modules:
- filesystem: Directory scanning for the ghq root layout
- sorting: Preferred-first ordering used by hostname and org listings
"""

from .filesystem import list_directories
from .sorting import sort_with_preferred, locale_sort_key

__all__ = [
    "list_directories",
    "sort_with_preferred",
    "locale_sort_key",
]
