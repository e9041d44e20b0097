"""Repo scanning — batched git status checks over SRC/<VERSION> directories."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Awaitable, Callable, Optional

from craftstatus.cache import StatusCache
from craftstatus.config import ScanConfig
from craftstatus.git import check_repository
from craftstatus.ignore import load_ignore_list
from craftstatus.layout import find_version_dirs, list_subdirs
from craftstatus.logs import ScanObserver
from craftstatus.status import OverallStats, RepoStatus, Repository, VersionReport, describe

logger = logging.getLogger("craftstatus.scanner")

Checker = Callable[[str], Awaitable[RepoStatus]]


class Scanner:
    """Checks every repository under a version directory, at most
    ``config.batch_size`` at a time, reusing cached results.

    ``observer`` receives one log line per repository per scan.
    ``checker`` performs the actual git work and defaults to
    :func:`craftstatus.git.check_repository`.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        cache: Optional[StatusCache] = None,
        observer: Optional[ScanObserver] = None,
        checker: Checker = check_repository,
    ) -> None:
        self.config = config or ScanConfig()
        self.cache = cache if cache is not None else StatusCache(ttl=self.config.cache_ttl)
        self.observer = observer
        self._check = checker

    def _log(self, directory: str, repo: str, message: str) -> None:
        if self.observer is None:
            return
        version = os.path.basename(directory)
        workspace = os.path.basename(os.path.dirname(os.path.dirname(directory)))
        self.observer.add_log(workspace, version, repo, message)

    async def _list(self, directory: str) -> Optional[list[str]]:
        try:
            return await asyncio.to_thread(list_subdirs, directory)
        except OSError as e:
            logger.error("Error scanning directory %s: %s", directory, e)
            return None

    async def _scan_one(self, directory: str, name: str) -> Repository:
        repo_path = os.path.join(directory, name)

        cached = self.cache.get(repo_path)
        if cached is not None:
            self._log(directory, name, f"Cached: {describe(cached)}")
            return Repository(name=name, path=repo_path, status=cached)

        status = await self._check(repo_path)
        self.cache.set(repo_path, status)
        logger.debug("%s: %s", repo_path, describe(status))
        self._log(directory, name, describe(status))
        return Repository(name=name, path=repo_path, status=status)

    async def scan_directory(
        self, directory: str, names: Optional[list[str]] = None,
    ) -> list[Repository]:
        """Check each subdirectory of directory (or just ``names``).

        Results come back in listing order. A directory that can't be
        listed yields an empty list.
        """
        directory = os.path.abspath(directory)
        if names is None:
            names = await self._list(directory)
            if names is None:
                return []

        size = self.config.batch_size
        repositories: list[Repository] = []
        for i in range(0, len(names), size):
            batch = names[i:i + size]
            results = await asyncio.gather(
                *(self._scan_one(directory, name) for name in batch)
            )
            repositories.extend(results)
        return repositories

    async def partition(self, version_dir: str) -> tuple[list[str], list[str]]:
        """Split version_dir's repositories into (active, ignored) names."""
        version_dir = os.path.abspath(version_dir)
        names = await self._list(version_dir)
        if names is None:
            return [], []
        ignored = await asyncio.to_thread(
            load_ignore_list, version_dir, self.config.ignore_file,
        )
        active = [n for n in names if n not in ignored]
        skipped = [n for n in names if n in ignored]
        return active, skipped

    async def scan_active(self, version_dir: str) -> list[Repository]:
        """Scan only the repositories not listed in version_dir's ignore file."""
        active, ignored = await self.partition(version_dir)
        if ignored:
            logger.debug("Skipping %d ignored repositories in %s", len(ignored), version_dir)
        return await self.scan_directory(version_dir, active)

    async def version_dirs(self, workspace: str) -> list[str]:
        try:
            return await asyncio.to_thread(
                find_version_dirs,
                workspace,
                self.config.src_dir,
                self.config.is_version_dir,
            )
        except OSError as e:
            logger.error("Error scanning %s directory in %s: %s", self.config.src_dir, workspace, e)
            return []

    async def overall_stats(self) -> OverallStats:
        """Totals across every active repository in every workspace."""
        stats = OverallStats()
        for workspace in self.config.workspaces:
            for version_dir in await self.version_dirs(workspace):
                for repo in await self.scan_active(version_dir):
                    stats.add(repo.status)
        return stats

    def clear_cache(self) -> None:
        self.cache.clear()

    async def scan_tree(self) -> list[VersionReport]:
        """Active scan of every version directory, keeping the ignored names."""
        reports: list[VersionReport] = []
        for workspace in self.config.workspaces:
            for version_dir in await self.version_dirs(workspace):
                active, ignored = await self.partition(version_dir)
                reports.append(VersionReport(
                    workspace=os.path.basename(os.path.abspath(workspace)),
                    name=os.path.basename(version_dir),
                    path=version_dir,
                    repositories=await self.scan_directory(version_dir, active),
                    ignored=ignored,
                ))
        return reports
