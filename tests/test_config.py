"""Tests for scan configuration loading."""

import os

import pytest

from craftstatus.config import WORKSPACES_ENV, ScanConfig, load_config


def test_defaults():
    config = ScanConfig()
    assert config.src_dir == "SRC"
    assert config.ignore_file == ".craftignore"
    assert config.batch_size == 10
    assert config.cache_ttl == 300
    assert config.is_version_dir("V12") is True
    assert config.is_version_dir("scratch") is False


def test_load_from_arguments(tmp_path):
    config = load_config([str(tmp_path)], batch_size=3, src_dir="src", cache_ttl=5)
    assert config.workspaces == [str(tmp_path)]
    assert config.batch_size == 3
    assert config.src_dir == "src"
    assert config.cache_ttl == 5


def test_load_from_environment(monkeypatch, tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    monkeypatch.setenv(WORKSPACES_ENV, os.pathsep.join([str(a), str(b)]))
    config = load_config()
    assert config.workspaces == [str(a), str(b)]


def test_load_defaults_to_cwd(monkeypatch, tmp_path):
    monkeypatch.delenv(WORKSPACES_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    assert load_config().workspaces == [str(tmp_path)]


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        ScanConfig(batch_size=0)
    with pytest.raises(ValueError):
        load_config(["."], batch_size=-1)
