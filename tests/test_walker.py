"""Tests for the pruning directory walker."""

from __future__ import annotations

import os

import pytest

from devsweep.core.walker import is_ignored, walk


def _rel(root, entries):
    return [str(e.path.relative_to(root)) for e in entries]


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "root"
    for d in ("a/b/c", "a/node_modules/pkg", "d", ".hidden/x", ".git/objects"):
        (root / d).mkdir(parents=True)
    return root.resolve()


class TestWalk:
    def test_yields_root_and_children_depth_first(self, tree):
        assert _rel(tree, walk(tree)) == [".", "a", "a/b", "a/b/c", "d"]

    def test_depths(self, tree):
        depths = {str(e.path.relative_to(tree)): e.depth for e in walk(tree)}
        assert depths == {".": 0, "a": 1, "a/b": 2, "a/b/c": 3, "d": 1}

    def test_max_depth(self, tree):
        assert _rel(tree, walk(tree, max_depth=1)) == [".", "a", "d"]

    def test_max_depth_zero_yields_root_only(self, tree):
        entries = list(walk(tree, max_depth=0))
        assert _rel(tree, entries) == ["."]
        assert entries[0].subdirs == []

    def test_hidden_directories_visited_when_allowed(self, tree):
        paths = _rel(tree, walk(tree, skip_hidden=False))
        assert ".hidden/x" in paths
        assert ".git" not in paths

    def test_custom_skip_names(self, tree):
        paths = _rel(tree, walk(tree, skip_names=frozenset({"b"})))
        assert "a/node_modules" in paths
        assert "a/b" not in paths

    def test_ignore_paths_prune_subtree(self, tree):
        assert _rel(tree, walk(tree, ignore_paths=[tree / "a"])) == [".", "d"]

    def test_ignored_root_yields_nothing(self, tree):
        assert list(walk(tree, ignore_paths=[tree])) == []

    def test_stop_names_yielded_but_not_descended(self, tree):
        paths = _rel(tree, walk(tree, stop_names={"b"}))
        assert "a/b" in paths
        assert "a/b/c" not in paths

    def test_consumer_can_prune_subdirs(self, tree):
        seen = []
        for entry in walk(tree):
            seen.append(str(entry.path.relative_to(tree)))
            if entry.path.name == "a":
                entry.subdirs.remove("b")
        assert seen == [".", "a", "d"]

    def test_symlinked_directories_not_followed(self, tree):
        os.symlink(tree, tree / "d" / "loop")
        paths = _rel(tree, walk(tree))
        assert "d/loop" not in paths
        assert paths == [".", "a", "a/b", "a/b/c", "d"]

    def test_missing_root_yields_root_without_children(self, tmp_path):
        entries = list(walk(tmp_path / "missing"))
        assert len(entries) == 1
        assert entries[0].subdirs == []

    def test_is_lazy(self, tree):
        it = walk(tree)
        first = next(it)
        assert first.path == tree
        assert first.subdirs == ["a", "d"]


class TestIsIgnored:
    def test_prefix_match(self, tmp_path):
        assert is_ignored(tmp_path / "x" / "y", [tmp_path / "x"])
        assert is_ignored(tmp_path / "x", [tmp_path / "x"])

    def test_sibling_with_common_prefix_not_ignored(self, tmp_path):
        assert not is_ignored(tmp_path / "xy", [tmp_path / "x"])
