"""Repository status variants and scan result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from craftstatus.ignore import all_ignored

NO_TRACKING_MESSAGE = "No tracking branch configured"


@dataclass(frozen=True)
class NotRepo:
    """Directory has no git metadata."""

    is_git_repo = False
    commits_behind = 0
    tracking_info = None
    error = None


@dataclass(frozen=True)
class NoUpstream:
    """Valid repository whose current branch tracks nothing."""

    branch: str = ""

    is_git_repo = True
    commits_behind = 0
    tracking_info = None

    @property
    def error(self) -> str:
        return NO_TRACKING_MESSAGE


@dataclass(frozen=True)
class CheckError:
    """The check failed part-way through; ``message`` is the cause."""

    message: str

    is_git_repo = True
    commits_behind = 0
    tracking_info = None

    @property
    def error(self) -> str:
        return f"Error: {self.message}"


@dataclass(frozen=True)
class Tracked:
    behind: int
    branch: str
    upstream: str

    is_git_repo = True
    error = None

    @property
    def commits_behind(self) -> int:
        return self.behind

    @property
    def tracking_info(self) -> str:
        return f"{self.branch} → {self.upstream}"


RepoStatus = Union[NotRepo, NoUpstream, CheckError, Tracked]


@dataclass
class Repository:
    name: str
    path: str
    status: RepoStatus


@dataclass
class VersionReport:
    """Scan result for one version directory."""

    workspace: str
    name: str
    path: str
    repositories: list[Repository] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)

    @property
    def fully_ignored(self) -> bool:
        names = [repo.name for repo in self.repositories] + self.ignored
        return all_ignored(names, set(self.ignored))


@dataclass
class OverallStats:
    total_repos: int = 0
    repos_behind: int = 0

    def add(self, status: RepoStatus) -> None:
        """Fold one status into the totals.

        Errors and plain directories are left out of ``total_repos``
        entirely; only tracked repositories with commits to pull count
        toward ``repos_behind``.
        """
        if not status.is_git_repo or status.error is not None:
            return
        self.total_repos += 1
        if status.commits_behind > 0:
            self.repos_behind += 1


def status_to_dict(status: RepoStatus) -> dict:
    """Flat view of a status, in the shape the JSON output uses."""
    data: dict[str, Optional[object]] = {
        "is_git_repo": status.is_git_repo,
        "commits_behind": status.commits_behind,
    }
    if status.tracking_info is not None:
        data["tracking_info"] = status.tracking_info
    if status.error is not None:
        data["error"] = status.error
    return data


def describe(status: RepoStatus) -> str:
    """One-line summary of a status for logs and tree labels."""
    if status.error is not None:
        return status.error
    if not status.is_git_repo:
        return "Not a git repository"
    if status.commits_behind == 0:
        if status.tracking_info:
            return f"Up to date with {status.tracking_info}"
        return "Up to date"
    return f"{status.commits_behind} commits behind {status.tracking_info}"
