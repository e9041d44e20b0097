"""Tests for the grouped scan log."""

from craftstatus.logs import ScanLog


def test_add_and_group():
    log = ScanLog()
    assert not log
    log.add_log("ws", "V1", "alpha", "Up to date")
    log.add_log("ws", "V1", "alpha", "Cached: Up to date")
    log.add_log("ws", "V2", "beta", "Not a git repository")
    assert log
    assert log.lines("ws", "V1", "alpha") == ["Up to date", "Cached: Up to date"]
    assert log.as_dict() == {
        "ws": {
            "V1": {"alpha": ["Up to date", "Cached: Up to date"]},
            "V2": {"beta": ["Not a git repository"]},
        }
    }


def test_lines_unknown_repo():
    assert ScanLog().lines("ws", "V1", "nope") == []


def test_clear():
    log = ScanLog()
    log.add_log("ws", "V1", "alpha", "x")
    log.clear()
    assert log.as_dict() == {}
