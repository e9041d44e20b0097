"""Tests for the command-line entry point."""

import json
import os
import subprocess
import tempfile

import pytest

from craftstatus.cli import main


def _workspace(tmp: str) -> str:
    """ws/SRC/V1 with a plain directory, a local-only repo and an ignored one."""
    version = os.path.join(tmp, "ws", "SRC", "V1")
    os.makedirs(os.path.join(version, "plain"))
    os.makedirs(os.path.join(version, "skipped"))
    repo = os.path.join(version, "local")
    subprocess.run(["git", "init", repo], capture_output=True)
    with open(os.path.join(version, ".craftignore"), "w") as f:
        f.write("skipped\n")
    return os.path.join(tmp, "ws")


def test_json_output(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        ws = _workspace(tmp)
        main([ws, "--json", "--logs"])
        data = json.loads(capsys.readouterr().out)

    assert data["stats"] == {"total_repos": 0, "repos_behind": 0}
    [version] = data["versions"]
    assert version["name"] == "V1"
    assert version["ignored"] == ["skipped"]
    assert version["fully_ignored"] is False
    repos = {r["name"]: r for r in version["repositories"]}
    assert set(repos) == {"local", "plain"}
    assert repos["plain"]["is_git_repo"] is False
    assert repos["local"]["error"] == "No tracking branch configured"
    assert "local" in data["logs"]["ws"]["V1"]


def test_stats_output(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        ws = _workspace(tmp)
        main([ws, "--stats"])
        assert capsys.readouterr().out.strip() == "No repositories found"


def test_ignore_command(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        ws = _workspace(tmp)
        target = os.path.join(ws, "SRC", "V1", "plain")

        with pytest.raises(SystemExit) as exc:
            main(["--ignore", target])
        assert exc.value.code == 0
        assert "Added plain to .craftignore" in capsys.readouterr().out

        with pytest.raises(SystemExit):
            main(["--ignore", target])
        assert "already in .craftignore" in capsys.readouterr().out

        with open(os.path.join(ws, "SRC", "V1", ".craftignore")) as f:
            assert f.read() == "skipped\nplain\n"


def test_bad_batch_size():
    with pytest.raises(SystemExit) as exc:
        main([".", "--batch-size", "0"])
    assert exc.value.code == 2


def test_ignore_command_undecodable_file(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        ws = _workspace(tmp)
        with open(os.path.join(ws, "SRC", "V1", ".craftignore"), "wb") as f:
            f.write(b"skipped\n\xff\xfe\n")

        with pytest.raises(SystemExit) as exc:
            main(["--ignore", os.path.join(ws, "SRC", "V1", "plain")])
        assert exc.value.code == 1
        assert "Failed to update .craftignore" in capsys.readouterr().err
