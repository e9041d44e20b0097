"""Scan configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from craftstatus.cache import CACHE_TTL
from craftstatus.ignore import IGNORE_FILE
from craftstatus.layout import SRC_DIR, is_version_name

WORKSPACES_ENV = "CRAFTSTATUS_WORKSPACES"
MAX_CONCURRENT = 10


@dataclass
class ScanConfig:
    workspaces: list[str] = field(default_factory=list)
    src_dir: str = SRC_DIR
    ignore_file: str = IGNORE_FILE
    batch_size: int = MAX_CONCURRENT
    cache_ttl: float = CACHE_TTL
    is_version_dir: Callable[[str], bool] = is_version_name

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.cache_ttl < 0:
            raise ValueError(f"cache_ttl must not be negative, got {self.cache_ttl}")


def load_config(
    workspaces: Optional[Sequence[str]] = None,
    *,
    src_dir: Optional[str] = None,
    batch_size: Optional[int] = None,
    cache_ttl: Optional[float] = None,
) -> ScanConfig:
    """Build a ScanConfig from CLI values, falling back to the environment.

    Workspaces come from the arguments, then CRAFTSTATUS_WORKSPACES
    (os.pathsep-separated), then the current directory.
    """
    roots = list(workspaces or [])
    if not roots:
        env = os.environ.get(WORKSPACES_ENV, "")
        roots = [p for p in env.split(os.pathsep) if p.strip()]
    if not roots:
        roots = ["."]

    overrides = {
        "src_dir": src_dir,
        "batch_size": batch_size,
        "cache_ttl": cache_ttl,
    }
    return ScanConfig(
        workspaces=[os.path.abspath(os.path.expanduser(p)) for p in roots],
        **{k: v for k, v in overrides.items() if v is not None},
    )
