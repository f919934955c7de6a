"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def isolate_config(tmp_path, monkeypatch):
    """Redirect the config file to a temp directory."""
    config_home = tmp_path / "config_home"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "dev-sweep" / "config.json"


@pytest.fixture
def make_file():
    """Create a file of ``size`` bytes, creating parent directories."""

    def _make(path: Path, size: int = 0) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        return path

    return _make


@pytest.fixture
def two_projects(tmp_path, make_file):
    """A Rust project with 300 artifact bytes and a Node project with 200."""
    root = tmp_path / "workspace"
    make_file(root / "proj-a" / "Cargo.toml", 10)
    for i in range(3):
        make_file(root / "proj-a" / "target" / "debug" / f"out{i}", 100)
    make_file(root / "proj-b" / "package.json", 10)
    for i in range(2):
        make_file(root / "proj-b" / "node_modules" / f"pkg{i}" / "index.js", 100)
    return root.resolve()
