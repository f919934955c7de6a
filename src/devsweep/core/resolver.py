"""Expansion of clean patterns into concrete target directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from devsweep.core.detector import detect
from devsweep.core.registry import KindRegistry, default_registry
from devsweep.core.walker import SKIP_DIRS, walk
from devsweep.models.kind import CleanPattern, PatternStyle, ProjectKind

log = logging.getLogger(__name__)


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _match_suffix(project_root: Path, suffix: str) -> list[Path]:
    try:
        with os.scandir(project_root) as it:
            names = sorted(
                e.name for e in it if e.name.endswith(suffix) and e.is_dir(follow_symlinks=False)
            )
    except OSError as e:
        log.debug("Cannot list %s: %s", project_root, e)
        return []
    return [project_root / name for name in names]


def find_nested_dirs(
    project_root: Path,
    name: str,
    *,
    ignore_paths: Iterable[Path | str] = (),
    registry: KindRegistry | None = None,
) -> list[Path]:
    """Find every directory called ``name`` below ``project_root``.

    Matches are reported side by side; the search does not look inside a
    match for further matches. A nested project is skipped only when its
    own kind also collects ``name`` recursively, since it reports those
    caches itself.
    """
    if registry is None:
        registry = default_registry()
    found: list[Path] = []
    walker = walk(
        project_root,
        ignore_paths=ignore_paths,
        skip_names=SKIP_DIRS - {name},
        skip_hidden=False,
        stop_names={name},
    )
    for entry in walker:
        if entry.depth == 0:
            continue
        if entry.path.name == name:
            found.append(entry.path)
        else:
            nested = detect(entry.path, registry)
            if nested is not None and _collects_recursively(nested, name, registry):
                log.debug("Not searching nested %s project: %s", nested, entry.path)
                entry.subdirs.clear()
    return found


def _collects_recursively(kind: ProjectKind, name: str, registry: KindRegistry) -> bool:
    spec = registry.get(kind)
    if spec is None:
        return False
    return any(
        p.style is PatternStyle.RECURSIVE and p.value == name for p in spec.clean_patterns
    )


def expand_pattern(
    project_root: Path,
    pattern: CleanPattern,
    *,
    ignore_paths: Iterable[Path | str] = (),
    registry: KindRegistry | None = None,
) -> list[Path]:
    """Resolve a single clean pattern into existing directories."""
    match pattern.style:
        case PatternStyle.SUFFIX:
            return _match_suffix(project_root, pattern.value)
        case PatternStyle.RECURSIVE:
            return find_nested_dirs(
                project_root, pattern.value, ignore_paths=ignore_paths, registry=registry
            )
        case _:
            candidate = project_root / pattern.value
            return [candidate] if _is_real_dir(candidate) else []


def resolve(
    project_root: Path | str,
    kind: ProjectKind,
    registry: KindRegistry | None = None,
    ignore_paths: Iterable[Path | str] = (),
) -> list[Path]:
    """Resolve every clean pattern of ``kind`` under ``project_root``.

    Returns existing directories beneath the root, in pattern order and
    without duplicates. A match lying inside another match is dropped so
    targets never overlap. Patterns that match nothing contribute nothing.
    """
    if registry is None:
        registry = default_registry()
    root = Path(project_root).expanduser().resolve()
    spec = registry.get(kind)
    if spec is None:
        return []

    ignore_paths = tuple(ignore_paths)
    targets: dict[Path, None] = {}
    for pattern in spec.clean_patterns:
        try:
            paths = expand_pattern(root, pattern, ignore_paths=ignore_paths, registry=registry)
        except OSError as e:
            log.debug("Cannot resolve %s in %s: %s", pattern, root, e)
            continue
        for path in paths:
            if path != root and path.is_relative_to(root):
                targets.setdefault(path, None)
    return [p for p in targets if not any(p != o and p.is_relative_to(o) for o in targets)]


def prunable_children(
    kind: ProjectKind,
    names: Iterable[str],
    registry: KindRegistry | None = None,
) -> set[str]:
    """Child names that are clean targets of ``kind`` and need no walking."""
    if registry is None:
        registry = default_registry()
    spec = registry.get(kind)
    if spec is None:
        return set()

    pruned: set[str] = set()
    for name in names:
        for pattern in spec.clean_patterns:
            if (pattern.style is PatternStyle.EXACT and name == pattern.value) or (
                pattern.style is PatternStyle.SUFFIX and name.endswith(pattern.value)
            ):
                pruned.add(name)
                break
    return pruned
