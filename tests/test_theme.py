"""Tests for status-line text and tree rendering."""

from rich.console import Console

from craftstatus.status import CheckError, NotRepo, OverallStats, Repository, Tracked, VersionReport
from craftstatus.theme import render_tree, status_icon, status_line, ICON_BEHIND, ICON_ERROR, ICON_OK


def test_status_line():
    assert status_line(OverallStats(0, 0)) == "No repositories found"
    assert status_line(OverallStats(4, 0)) == "All 4 repositories up to date"
    assert status_line(OverallStats(4, 3)) == "3/4 repositories need updates"


def test_status_icon():
    assert status_icon(Tracked(0, "main", "origin/main"))[0] == ICON_OK
    assert status_icon(Tracked(2, "main", "origin/main"))[0] == ICON_BEHIND
    assert status_icon(CheckError("boom"))[0] == ICON_ERROR


def test_render_tree_sections():
    reports = [
        VersionReport("ws", "V1", "/ws/SRC/V1", [
            Repository("alpha", "/ws/SRC/V1/alpha", Tracked(2, "main", "origin/main")),
            Repository("plain", "/ws/SRC/V1/plain", NotRepo()),
        ], ["beta"]),
        VersionReport("ws", "OLD", "/ws/SRC/OLD", [], ["legacy"]),
    ]
    console = Console(width=120, record=True, color_system=None)
    console.print(render_tree(reports))
    out = console.export_text()

    active, ignored = out.split("Ignored")
    assert "alpha" in active and "2 commits behind main → origin/main" in active
    assert "Not a git repository" in active
    assert "OLD" not in active
    assert "beta" in ignored and "legacy" in ignored and "OLD" in ignored
