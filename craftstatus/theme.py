"""Shared visual constants and rich renderers for craftstatus."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text
from rich.tree import Tree

from craftstatus.status import OverallStats, RepoStatus, Repository, VersionReport, describe

# ── Color Palette (GitHub Dark) ─────────────────────────────────────────

SURFACE = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

CYAN = "#58a6ff"
GREEN = "#39d353"
PURPLE = "#bc8cff"
YELLOW = "#e3b341"
RED = "#f85149"

ACCENT_ACTIVE = GREEN
ACCENT_IGNORED = MUTED

# ── Banner ──────────────────────────────────────────────────────────────

BANNER = r"""
                 __ _       _        _
  ___ _ __ __ _ / _| |_ ___| |_ __ _| |_ _   _ ___
 / __| '__/ _` | |_| __/ __| __/ _` | __| | | / __|
| (__| | | (_| |  _| |_\__ \ || (_| | |_| |_| \__ \
 \___|_|  \__,_|_|  \__|___/\__\__,_|\__|\__,_|___/"""

TAGLINE = "who's behind upstream?"

# ── Icons ───────────────────────────────────────────────────────────────

ICON_OK = "✔"
ICON_BEHIND = "⚠"
ICON_ERROR = "✖"
ICON_PLAIN = "·"
ICON_WORKSPACE = "🗂"
ICON_VERSION = "📁"
ICON_IGNORED = "🚫"


def status_icon(status: RepoStatus) -> tuple[str, str]:
    """Return (icon, color) for a repository status."""
    if status.error is not None:
        return ICON_ERROR, RED
    if not status.is_git_repo:
        return ICON_PLAIN, MUTED
    if status.commits_behind > 0:
        return ICON_BEHIND, YELLOW
    return ICON_OK, GREEN


def status_line(stats: OverallStats) -> str:
    """Status-bar text for workspace-wide totals."""
    if stats.total_repos == 0:
        return "No repositories found"
    if stats.repos_behind == 0:
        return f"All {stats.total_repos} repositories up to date"
    return f"{stats.repos_behind}/{stats.total_repos} repositories need updates"


def render_status_line(stats: OverallStats) -> Text:
    if stats.total_repos == 0:
        color = MUTED
    elif stats.repos_behind == 0:
        color = GREEN
    else:
        color = YELLOW
    return Text(status_line(stats), style=Style(color=color, bold=True))


def repo_label(repo: Repository) -> Text:
    icon, color = status_icon(repo.status)
    text = Text()
    text.append(f"{icon} ", style=Style(color=color))
    text.append(repo.name, style=Style(color=CYAN, bold=True))
    text.append(f"  {describe(repo.status)}", style=Style(color=color if color != GREEN else MUTED))
    return text


def _group(reports: list[VersionReport]) -> dict[str, list[VersionReport]]:
    grouped: dict[str, list[VersionReport]] = {}
    for report in reports:
        grouped.setdefault(report.workspace, []).append(report)
    return grouped


def render_tree(reports: list[VersionReport]) -> Tree:
    """Active / Ignored sections, each workspace → version → repository."""
    root = Tree(Text("Git Status", style=Style(bold=True)), guide_style=BORDER)

    active = root.add(Text("Active", style=Style(color=ACCENT_ACTIVE, bold=True)))
    for workspace, versions in _group(reports).items():
        shown = [v for v in versions if not v.fully_ignored]
        if not shown:
            continue
        ws_node = active.add(f"{ICON_WORKSPACE} {workspace}")
        for version in shown:
            ver_node = ws_node.add(Text(f"{ICON_VERSION} {version.name}", style=Style(color=PURPLE)))
            if not version.repositories:
                ver_node.add(Text("no repositories", style=Style(color=MUTED, italic=True)))
            for repo in version.repositories:
                ver_node.add(repo_label(repo))

    ignored = root.add(Text("Ignored", style=Style(color=ACCENT_IGNORED, bold=True)))
    for workspace, versions in _group(reports).items():
        shown = [v for v in versions if v.ignored]
        if not shown:
            continue
        ws_node = ignored.add(f"{ICON_WORKSPACE} {workspace}")
        for version in shown:
            ver_node = ws_node.add(Text(f"{ICON_VERSION} {version.name}", style=Style(color=MUTED)))
            for name in version.ignored:
                ver_node.add(Text(f"{ICON_IGNORED} {name}", style=Style(color=MUTED)))

    return root


def render_logs(logs: dict[str, dict[str, dict[str, list[str]]]]) -> Tree:
    root = Tree(Text("Scan Logs", style=Style(bold=True)), guide_style=BORDER)
    for workspace, versions in logs.items():
        ws_node = root.add(f"{ICON_WORKSPACE} {workspace}")
        for version, repos in versions.items():
            ver_node = ws_node.add(Text(f"{ICON_VERSION} {version}", style=Style(color=PURPLE)))
            for repo, lines in repos.items():
                repo_node = ver_node.add(Text(repo, style=Style(color=CYAN, bold=True)))
                for line in lines:
                    repo_node.add(Text(line, style=Style(color=MUTED)))
    return root


def render_banner() -> Text:
    """Render the craftstatus ASCII banner as styled Rich Text."""
    text = Text(justify="center")
    for line in BANNER.strip("\n").split("\n"):
        text.append(line + "\n", style=Style(color=GREEN, bold=True))
    text.append(f"  {TAGLINE}\n", style=Style(color=MUTED, italic=True))
    return text
