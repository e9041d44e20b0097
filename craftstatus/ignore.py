"""Read and append the per-version .craftignore file."""

from __future__ import annotations

import logging
import os
from typing import Container, Iterable

from craftstatus.layout import list_subdirs

logger = logging.getLogger("craftstatus.ignore")

IGNORE_FILE = ".craftignore"


def parse_ignore_text(text: str) -> set[str]:
    names = set()
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.add(line)
    return names


def load_ignore_list(version_dir: str, filename: str = IGNORE_FILE) -> set[str]:
    """Names of ignored repositories in version_dir.

    A missing or unreadable file simply means nothing is ignored.
    """
    path = os.path.join(version_dir, filename)
    try:
        with open(path, encoding="utf-8") as f:
            return parse_ignore_text(f.read())
    except FileNotFoundError:
        return set()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return set()


def all_ignored(names: Iterable[str], ignored: Container[str]) -> bool:
    """True when there is at least one name and every one is ignored.

    An empty version directory counts as active.
    """
    names = list(names)
    return bool(names) and all(name in ignored for name in names)


def is_fully_ignored(version_dir: str, filename: str = IGNORE_FILE) -> bool:
    """True when every repository directory in version_dir is ignored."""
    try:
        repos = list_subdirs(version_dir)
    except OSError as e:
        logger.warning("Could not list %s: %s", version_dir, e)
        return False
    return all_ignored(repos, load_ignore_list(version_dir, filename))


def add_to_ignore(repo_path: str, filename: str = IGNORE_FILE) -> bool:
    """Append repo_path's name to the .craftignore beside it.

    Returns False, leaving the file untouched, when the name is already
    listed. Read and write failures, including a file that is not
    valid UTF-8, propagate.
    """
    repo_path = os.path.abspath(repo_path.rstrip(os.sep))
    version_dir = os.path.dirname(repo_path)
    name = os.path.basename(repo_path)
    path = os.path.join(version_dir, filename)

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        content = None

    if content is None:
        updated = f"{name}\n"
    else:
        if any(line.strip() == name for line in content.splitlines()):
            logger.info("%s is already in %s", name, path)
            return False
        if content and not content.endswith("\n"):
            content += "\n"
        updated = f"{content}{name}\n"

    with open(path, "w", encoding="utf-8") as f:
        f.write(updated)
    logger.info("Added %s to %s", name, path)
    return True
