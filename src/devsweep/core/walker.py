"""Pruning directory traversal shared by project discovery and cache search."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Iterable, Iterator

log = logging.getLogger(__name__)

# Build artifacts, dependency caches and VCS metadata. Never worth descending into.
SKIP_DIRS: frozenset[str] = frozenset({
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "target",
    ".venv",
    "venv",
    "__pycache__",
    ".gradle",
    "Library",  # Unity
    ".terraform",
    ".godot",
    ".stack-work",
    ".build",
    "zig-cache",
    "zig-out",
})


@dataclass(slots=True)
class WalkEntry:
    """A visited directory.

    ``subdirs`` holds the child directory names the walker is about to
    descend into. Remove names from it to prune them, as with
    ``os.walk(topdown=True)``.
    """

    path: Path
    depth: int
    subdirs: list[str] = field(default_factory=list)


def resolve_ignore_paths(paths: Iterable[Path | str]) -> tuple[Path, ...]:
    """Normalise ignore paths once so they compare against walked paths."""
    resolved: list[Path] = []
    for p in paths:
        try:
            resolved.append(Path(p).expanduser().resolve())
        except (OSError, RuntimeError):
            log.debug("Cannot resolve ignore path: %s", p)
    return tuple(resolved)


def is_ignored(path: Path, ignore_paths: Collection[Path]) -> bool:
    """True if ``path`` equals or lies beneath any of ``ignore_paths``."""
    return any(path == ig or path.is_relative_to(ig) for ig in ignore_paths)


def _list_subdirs(path: Path) -> list[str]:
    """Names of real (non-symlink) child directories, sorted."""
    names: list[str] = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                if entry.is_dir(follow_symlinks=False):
                    names.append(entry.name)
            except OSError:
                log.debug("Cannot stat: %s", entry.path)
    names.sort()
    return names


def walk(
    root: Path | str,
    *,
    max_depth: int | None = None,
    ignore_paths: Iterable[Path | str] = (),
    skip_names: Collection[str] = SKIP_DIRS,
    skip_hidden: bool = True,
    stop_names: Collection[str] = frozenset(),
) -> Iterator[WalkEntry]:
    """Lazily yield directories under ``root``, depth first, root included.

    Pruned directories are never descended into: symlinked directories,
    names in ``skip_names``, dot-prefixed names (when ``skip_hidden``),
    anything deeper than ``max_depth`` and anything at or beneath one of
    ``ignore_paths``. Directories named in ``stop_names`` are yielded but
    not descended into. An unreadable directory is yielded without
    children and the walk continues.
    """
    root_path = Path(root).expanduser().resolve()
    ignored = resolve_ignore_paths(ignore_paths)
    if is_ignored(root_path, ignored):
        return

    stack: list[tuple[Path, int]] = [(root_path, 0)]
    while stack:
        path, depth = stack.pop()
        entry = WalkEntry(path=path, depth=depth)

        descend = path.name not in stop_names or depth == 0
        if descend and (max_depth is None or depth < max_depth):
            try:
                names = _list_subdirs(path)
            except OSError as e:
                log.debug("Cannot read directory %s: %s", path, e)
                names = []
            entry.subdirs = [
                name
                for name in names
                if name not in skip_names
                and not (skip_hidden and name.startswith("."))
                and not is_ignored(path / name, ignored)
            ]

        yield entry

        # Reversed so children are visited in name order.
        for name in reversed(entry.subdirs):
            stack.append((path / name, depth + 1))
