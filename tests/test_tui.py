"""Tests for the Textual app, driven headless through run_test."""

import asyncio
import os
import tempfile

from craftstatus.config import ScanConfig
from craftstatus.tui import CraftStatusApp, LogTree


def _labels(node) -> list[str]:
    labels = [str(node.label)]
    for child in node.children:
        labels.extend(_labels(child))
    return labels


def test_log_pane_shows_scan_log():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "ws", "SRC", "V1", "plain"))
        app = CraftStatusApp(ScanConfig(workspaces=[os.path.join(tmp, "ws")]))

        async def scenario():
            async with app.run_test() as pilot:
                await app.workers.wait_for_complete()
                await pilot.pause()
                logs = app.query_one(LogTree)
                assert logs.display is False

                await pilot.press("l")
                await pilot.pause()
                assert logs.display is True
                return _labels(logs.root)

        labels = asyncio.run(scenario())

    assert any(label.endswith("ws") for label in labels)
    assert any(label.endswith("V1") for label in labels)
    assert "plain" in labels
    assert "Not a git repository" in labels
