"""Git command execution — asyncio subprocesses against the git binary."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from craftstatus.status import CheckError, NoUpstream, NotRepo, RepoStatus, Tracked

logger = logging.getLogger("craftstatus.git")


def git_env() -> dict[str, str]:
    """Current environment, minus credential prompts and translated output."""
    return {**os.environ, "GIT_TERMINAL_PROMPT": "0", "LC_ALL": "C"}


class GitError(Exception):
    """A git command exited non-zero."""

    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")


async def run_git(repo_path: str, args: list[str]) -> str:
    """Run a git command in repo_path and return stdout.

    Raises GitError on a non-zero exit and OSError when git cannot be
    started at all (missing binary, missing directory).
    """
    proc = await asyncio.create_subprocess_exec(
        "git", *args,
        cwd=repo_path,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=git_env(),
    )
    try:
        stdout, stderr = await proc.communicate()
    except asyncio.CancelledError:
        # Don't leave an orphaned git behind a cancelled scan
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise
    if proc.returncode != 0:
        raise GitError(args, proc.returncode, stderr.decode(errors="replace"))
    return stdout.decode(errors="replace")


async def is_git_repo(repo_path: str) -> bool:
    try:
        await run_git(repo_path, ["rev-parse", "--git-dir"])
    except (GitError, OSError):
        return False
    return True


async def fetch(repo_path: str) -> bool:
    """Refresh remote-tracking refs. Returns False if the fetch failed."""
    try:
        await run_git(repo_path, ["fetch"])
    except GitError as e:
        logger.debug("fetch failed in %s: %s", repo_path, e)
        return False
    return True


async def current_branch(repo_path: str) -> str:
    return (await run_git(repo_path, ["rev-parse", "--abbrev-ref", "HEAD"])).strip()


async def get_tracking(repo_path: str) -> tuple[str, Optional[str]]:
    """Return (branch, upstream); upstream is None when nothing is tracked."""
    branch_task = current_branch(repo_path)
    upstream_task = run_git(repo_path, ["rev-parse", "--abbrev-ref", "@{upstream}"])
    branch, upstream = await asyncio.gather(
        branch_task, upstream_task, return_exceptions=True,
    )
    if isinstance(branch, BaseException):
        if isinstance(branch, GitError):
            branch = ""
        else:
            raise branch
    if isinstance(upstream, BaseException):
        if isinstance(upstream, GitError):
            return branch, None
        raise upstream
    return branch, upstream.strip()


async def get_commits_behind(repo_path: str) -> int:
    """Count commits on the upstream that HEAD does not have."""
    output = await run_git(repo_path, ["rev-list", "--count", "HEAD..@{upstream}"])
    return int(output.strip() or "0")


async def is_dirty(repo_path: str) -> bool:
    output = await run_git(repo_path, ["status", "--porcelain"])
    return bool(output.strip())


async def check_repository(repo_path: str) -> RepoStatus:
    """Work out how far repo_path trails its upstream.

    Always returns a status; failures after the repository test are
    reported as CheckError rather than raised.
    """
    if not await is_git_repo(repo_path):
        return NotRepo()

    try:
        await fetch(repo_path)
        tracking, behind = await asyncio.gather(
            get_tracking(repo_path),
            get_commits_behind(repo_path),
            return_exceptions=True,
        )
        if isinstance(tracking, BaseException):
            raise tracking
        branch, upstream = tracking
        if upstream is None:
            return NoUpstream(branch)
        if isinstance(behind, BaseException):
            raise behind
        return Tracked(behind=behind, branch=branch, upstream=upstream)
    except Exception as e:
        logger.debug("check failed for %s", repo_path, exc_info=True)
        return CheckError(str(e))
