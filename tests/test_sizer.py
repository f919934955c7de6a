"""Tests for directory size accounting."""

from __future__ import annotations

import os

import pytest

import devsweep.core.sizer as sizer
from devsweep.core.sizer import dir_info, size_of


@pytest.fixture
def scandir_only(monkeypatch):
    """Force the pure-Python fallback."""

    def _no_find(path_str):
        raise FileNotFoundError("find")

    monkeypatch.setattr(sizer, "_dir_info_find", _no_find)


@pytest.fixture
def artifact(tmp_path, make_file):
    root = tmp_path / "target"
    make_file(root / "a.o", 100)
    make_file(root / "deep" / "b.o", 250)
    make_file(root / "deep" / "deeper" / "c.o", 50)
    return root


class TestSizer:
    def test_exact_sum(self, artifact):
        assert dir_info(artifact) == (400, 3)

    def test_exact_sum_scandir(self, artifact, scandir_only):
        assert dir_info(artifact) == (400, 3)

    def test_size_of(self, artifact):
        assert size_of(artifact) == 400

    def test_empty_directory(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert dir_info(tmp_path / "empty") == (0, 0)

    def test_missing_path(self, tmp_path, scandir_only):
        assert dir_info(tmp_path / "missing") == (0, 0)

    def test_single_file(self, tmp_path, make_file, scandir_only):
        assert dir_info(make_file(tmp_path / "f", 42)) == (42, 1)

    def test_symlink_counts_own_size_not_target(self, tmp_path, make_file, scandir_only):
        big = make_file(tmp_path / "big.bin", 10_000)
        root = tmp_path / "target"
        make_file(root / "small", 10)
        os.symlink(big, root / "link")
        total, count = dir_info(root)
        assert count == 2
        assert total == 10 + os.lstat(root / "link").st_size
        assert total < 10_000

    def test_symlink_loop_terminates(self, tmp_path, make_file):
        root = tmp_path / "target"
        make_file(root / "sub" / "f", 5)
        os.symlink(root, root / "sub" / "loop")
        total, count = dir_info(root)
        assert count == 2
        assert total >= 5

    def test_unreadable_entry_excluded_not_fatal(self, artifact, scandir_only, monkeypatch):
        real = sizer._entry_size

        def _flaky(entry):
            if entry.name == "b.o":
                raise PermissionError(13, "Permission denied", entry.path)
            return real(entry)

        monkeypatch.setattr(sizer, "_entry_size", _flaky)
        assert dir_info(artifact) == (150, 2)

    def test_find_failure_falls_back_to_scandir(self, artifact, monkeypatch):
        def _failing_run(*args, **kwargs):
            raise OSError("no find here")

        monkeypatch.setattr(sizer.subprocess, "run", _failing_run)
        assert dir_info(artifact) == (400, 3)
