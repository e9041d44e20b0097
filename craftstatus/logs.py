"""Per-repository scan log, grouped workspace → version → repo."""

from __future__ import annotations

from typing import Protocol


class ScanObserver(Protocol):
    def add_log(self, workspace: str, version: str, repo: str, message: str) -> None:
        ...


class ScanLog:
    """Collects the lines a Scanner reports about each repository."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, list[str]]]] = {}

    def add_log(self, workspace: str, version: str, repo: str, message: str) -> None:
        versions = self._data.setdefault(workspace, {})
        repos = versions.setdefault(version, {})
        repos.setdefault(repo, []).append(message)

    def clear(self) -> None:
        self._data = {}

    def lines(self, workspace: str, version: str, repo: str) -> list[str]:
        return list(self._data.get(workspace, {}).get(version, {}).get(repo, []))

    def as_dict(self) -> dict[str, dict[str, dict[str, list[str]]]]:
        return {
            ws: {ver: {repo: list(lines) for repo, lines in repos.items()}
                 for ver, repos in versions.items()}
            for ws, versions in self._data.items()
        }

    def __bool__(self) -> bool:
        return bool(self._data)
