"""Bring a single repository up to date with its remote."""

from __future__ import annotations

import enum
import logging
from typing import Awaitable, Callable, Optional

from craftstatus.git import current_branch, is_dirty, run_git

logger = logging.getLogger("craftstatus.updater")


class DirtyAction(enum.Enum):
    STASH = "stash"
    RESET = "reset"
    CANCEL = "cancel"


class UpdateResult(enum.Enum):
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    CANCELLED = "cancelled"


DirtyHandler = Callable[[], Awaitable[DirtyAction]]


async def update_repository(
    repo_path: str,
    on_dirty: Optional[DirtyHandler] = None,
    progress: Optional[Callable[[str], None]] = None,
) -> UpdateResult:
    """Fetch and pull the current branch of repo_path from origin.

    Local changes are handed to ``on_dirty``, which decides whether to
    stash them, discard them, or give up. Without a handler a dirty
    repository is left alone. GitError propagates to the caller.
    """
    def report(message: str) -> None:
        logger.info("%s: %s", repo_path, message)
        if progress is not None:
            progress(message)

    report("Fetching latest changes...")
    await run_git(repo_path, ["fetch"])

    if await is_dirty(repo_path):
        action = await on_dirty() if on_dirty is not None else DirtyAction.CANCEL
        if action is DirtyAction.CANCEL:
            report("Local changes present, update cancelled")
            return UpdateResult.CANCELLED
        if action is DirtyAction.STASH:
            report("Stashing local changes...")
            await run_git(repo_path, ["stash"])
        else:
            report("Resetting local changes...")
            await run_git(repo_path, ["reset", "--hard"])

    branch = await current_branch(repo_path)

    report("Pulling latest changes...")
    output = await run_git(repo_path, ["pull", "origin", branch])
    if "Already up to date" in output or "Already up-to-date" in output:
        report("Repository is already up to date")
        return UpdateResult.UP_TO_DATE
    report("Repository updated successfully")
    return UpdateResult.UPDATED
