"""CLI entry point for craftstatus."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Optional

from craftstatus import __version__
from craftstatus.config import ScanConfig, load_config
from craftstatus.git import GitError
from craftstatus.ignore import add_to_ignore
from craftstatus.logs import ScanLog
from craftstatus.scanner import Scanner
from craftstatus.status import OverallStats, VersionReport, status_to_dict
from craftstatus.updater import DirtyAction, UpdateResult, update_repository


def _setup_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _stats_from(reports: list[VersionReport]) -> OverallStats:
    stats = OverallStats()
    for report in reports:
        for repo in report.repositories:
            stats.add(repo.status)
    return stats


def print_tree(config: ScanConfig, *, show_logs: bool = False) -> None:
    """Print the Active / Ignored tree and the status line."""
    from rich.console import Console

    from craftstatus.theme import render_banner, render_logs, render_status_line, render_tree

    console = Console()
    console.print(render_banner())

    log = ScanLog()
    scanner = Scanner(config, observer=log)
    with console.status("Checking repository status..."):
        reports = asyncio.run(scanner.scan_tree())

    console.print(render_tree(reports))
    console.print()
    console.print(render_status_line(_stats_from(reports)))

    if show_logs and log:
        console.print()
        console.print(render_logs(log.as_dict()))


def print_stats(config: ScanConfig) -> None:
    """Print only the status line, from the aggregate entry point."""
    from craftstatus.theme import status_line

    stats = asyncio.run(Scanner(config).overall_stats())
    print(status_line(stats))


def print_json(config: ScanConfig, *, show_logs: bool = False) -> None:
    """Dump every scanned version directory and the totals as JSON."""
    log = ScanLog()
    reports = asyncio.run(Scanner(config, observer=log).scan_tree())
    stats = _stats_from(reports)

    data = {
        "workspaces": config.workspaces,
        "stats": {
            "total_repos": stats.total_repos,
            "repos_behind": stats.repos_behind,
        },
        "versions": [
            {
                "workspace": r.workspace,
                "name": r.name,
                "path": r.path,
                "fully_ignored": r.fully_ignored,
                "ignored": r.ignored,
                "repositories": [
                    {"name": repo.name, "path": repo.path, **status_to_dict(repo.status)}
                    for repo in r.repositories
                ],
            }
            for r in reports
        ],
    }
    if show_logs:
        data["logs"] = log.as_dict()
    print(json.dumps(data, indent=2, ensure_ascii=False))


def ignore_repo(repo_path: str) -> int:
    """Add a repository to its version directory's .craftignore."""
    try:
        added = add_to_ignore(repo_path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Failed to update .craftignore: {e}", file=sys.stderr)
        return 1
    name = os.path.basename(os.path.abspath(repo_path.rstrip(os.sep)))
    if added:
        print(f"Added {name} to .craftignore")
    else:
        print(f"{name} is already in .craftignore")
    return 0


async def _ask_dirty() -> DirtyAction:
    from rich.prompt import Prompt

    answer = await asyncio.to_thread(
        Prompt.ask,
        "Repository has local changes. Choose how to proceed",
        choices=[a.value for a in DirtyAction],
        default=DirtyAction.CANCEL.value,
    )
    return DirtyAction(answer)


def update_repo(repo_path: str, on_dirty: Optional[str] = None) -> int:
    """Pull a single repository, asking what to do with local changes."""
    from rich.console import Console

    console = Console()

    if on_dirty is None:
        handler = _ask_dirty
    else:
        action = DirtyAction(on_dirty)

        async def handler() -> DirtyAction:
            return action

    try:
        console.print(f"Updating repository: {repo_path}")
        result = asyncio.run(update_repository(
            repo_path,
            on_dirty=handler,
            progress=lambda msg: console.print(f"  [dim]{msg}[/dim]"),
        ))
    except (GitError, OSError) as e:
        console.print(f"[red]Failed to update repository:[/red] {e}")
        return 1

    messages = {
        UpdateResult.UPDATED: "Repository updated successfully",
        UpdateResult.UP_TO_DATE: "Repository is already up to date",
        UpdateResult.CANCELLED: "Update cancelled",
    }
    console.print(messages[result])
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the craftstatus CLI."""
    parser = argparse.ArgumentParser(
        prog="craftstatus",
        description="Check which git repositories under SRC/<VERSION> are behind upstream.",
    )
    parser.add_argument(
        "workspaces",
        nargs="*",
        metavar="WORKSPACE",
        help="Workspace roots containing a SRC directory "
             "(default: $CRAFTSTATUS_WORKSPACES or the current directory)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output repositories and totals as JSON",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print only the one-line summary",
    )
    parser.add_argument(
        "--logs",
        action="store_true",
        help="Also show the per-repository scan log",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Open the interactive tree view",
    )
    parser.add_argument(
        "--ignore",
        metavar="REPO",
        help="Add a repository to its version directory's .craftignore",
    )
    parser.add_argument(
        "--update",
        metavar="REPO",
        help="Fetch and pull a repository",
    )
    parser.add_argument(
        "--on-dirty",
        choices=[a.value for a in DirtyAction],
        help="What --update does with local changes (default: ask)",
    )
    parser.add_argument(
        "--src-dir",
        metavar="NAME",
        help="Name of the directory holding version directories (default: SRC)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        metavar="N",
        help="Repositories checked concurrently (default: 10)",
    )
    parser.add_argument(
        "--ttl",
        type=float,
        metavar="SECONDS",
        help="How long a repository's status is reused (default: 300)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"craftstatus {__version__}",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.ignore:
        sys.exit(ignore_repo(args.ignore))
    if args.update:
        sys.exit(update_repo(args.update, args.on_dirty))

    try:
        config = load_config(
            args.workspaces,
            src_dir=args.src_dir,
            batch_size=args.batch_size,
            cache_ttl=args.ttl,
        )
    except ValueError as e:
        parser.error(str(e))

    if args.json_output:
        print_json(config, show_logs=args.logs)
    elif args.stats:
        print_stats(config)
    elif args.tui:
        from craftstatus.tui import run_tui
        run_tui(config)
    else:
        print_tree(config, show_logs=args.logs)


if __name__ == "__main__":
    main()
