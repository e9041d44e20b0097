"""Workspace layout: SRC/<VERSION>/<repo> directory discovery."""

from __future__ import annotations

import os
from typing import Callable

SRC_DIR = "SRC"


def is_version_name(name: str) -> bool:
    """Version directories are named entirely in upper case (``V12``, ``TRUNK``)."""
    return name.upper() == name


def list_subdirs(directory: str) -> list[str]:
    """Sorted names of the direct child directories of directory.

    Symlinks are not followed. Raises OSError if directory can't be listed.
    """
    names: list[str] = []
    with os.scandir(directory) as it:
        for entry in it:
            try:
                if entry.is_dir(follow_symlinks=False):
                    names.append(entry.name)
            except (PermissionError, OSError):
                continue
    names.sort()
    return names


def find_version_dirs(
    workspace: str,
    src_dir: str = SRC_DIR,
    is_version_dir: Callable[[str], bool] = is_version_name,
) -> list[str]:
    """Absolute paths of the version directories under workspace/src_dir.

    Raises OSError if the src directory is missing or unreadable.
    """
    root = os.path.join(os.path.abspath(os.path.expanduser(workspace)), src_dir)
    return [
        os.path.join(root, name)
        for name in list_subdirs(root)
        if is_version_dir(name)
    ]
