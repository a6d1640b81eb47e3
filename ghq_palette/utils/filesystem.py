"""Filesystem helpers."""

import os
from typing import List, Union


def list_directories(path: Union[str, os.PathLike]) -> List[str]:
    """List visible subdirectories of ``path``.

    Hidden entries (names starting with ``.``, such as ``.git``) and plain
    files are skipped. A missing path yields an empty list.

    Returns:
        Directory names sorted by name
    """
    if not os.path.isdir(path):
        return []

    with os.scandir(path) as entries:
        names = [
            entry.name
            for entry in entries
            if not entry.name.startswith(".") and entry.is_dir()
        ]
    return sorted(names)
