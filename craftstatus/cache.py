"""In-memory status cache keyed by absolute repository path."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from craftstatus.status import RepoStatus

CACHE_TTL = 5 * 60  # seconds


@dataclass
class CacheEntry:
    status: RepoStatus
    timestamp: float


class StatusCache:
    """Remember check results for ``ttl`` seconds.

    Expired entries are evicted lazily, on the lookup that finds them.
    Nothing is persisted; the cache lives as long as its owner.
    """

    def __init__(self, ttl: float = CACHE_TTL, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def set(self, repo_path: str, status: RepoStatus) -> None:
        self._entries[repo_path] = CacheEntry(status=status, timestamp=self._clock())

    def get(self, repo_path: str) -> Optional[RepoStatus]:
        entry = self._entries.get(repo_path)
        if entry is None:
            return None
        if self._clock() - entry.timestamp > self.ttl:
            del self._entries[repo_path]
            return None
        return entry.status

    def discard(self, repo_path: str) -> None:
        self._entries.pop(repo_path, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, repo_path: str) -> bool:
        return self.get(repo_path) is not None

    def __len__(self) -> int:
        # Expired entries are evicted, not counted
        return sum(1 for path in list(self._entries) if self.get(path) is not None)
