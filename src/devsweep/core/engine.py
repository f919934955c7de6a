"""Scanning and cleaning orchestration engine."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable

from devsweep.config import DevSweepConfig
from devsweep.core.age import filter_older_than, last_touched, parse_age
from devsweep.core.cleaner import CleanResultCallback, clean_projects
from devsweep.core.detector import detect
from devsweep.core.registry import KindRegistry, default_registry
from devsweep.core.resolver import prunable_children, resolve
from devsweep.core.sizer import dir_info
from devsweep.core.walker import walk
from devsweep.errors import ScanRootError
from devsweep.models.clean_result import CleanResult
from devsweep.models.kind import ProjectKind
from devsweep.models.scan_result import CleanTarget, KindSummary, ScannedProject, ScanSummary

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]  # (status_message, count)

Candidate = tuple[Path, ProjectKind]


def sort_by_size(projects: Iterable[ScannedProject]) -> list[ScannedProject]:
    """Largest reclaimable size first; ties broken by path for stable output."""
    return sorted(projects, key=lambda p: (-p.total_cleanable_bytes, str(p.path)))


class DevSweepEngine:
    """Finds projects under a root, sizes their artifacts and cleans them."""

    def __init__(
        self,
        config: DevSweepConfig | None = None,
        registry: KindRegistry | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config or DevSweepConfig()
        self.registry = registry if registry is not None else default_registry()
        self.max_workers = max_workers or os.cpu_count() or 1

    def find_candidates(self, root: Path | str, max_depth: int | None = None) -> list[Candidate]:
        """Walk ``root`` and return every detected project directory.

        Kinds listed in the config's ``exclude_kinds`` are dropped. Once a
        project is detected, its own clean targets are pruned from the walk;
        other subdirectories are still visited so nested projects are found.
        """
        candidates: list[Candidate] = []
        visited = 0
        for entry in walk(root, max_depth=max_depth, ignore_paths=self.config.ignore_paths):
            visited += 1
            kind = detect(entry.path, self.registry)
            if kind is None:
                continue
            pruned = prunable_children(kind, entry.subdirs, self.registry)
            if pruned:
                entry.subdirs[:] = [n for n in entry.subdirs if n not in pruned]
            if kind in self.config.exclude_kinds:
                log.debug("Skipping excluded %s project: %s", kind, entry.path)
                continue
            candidates.append((entry.path, kind))
        log.info("Checked %d directories, found %d projects", visited, len(candidates))
        return candidates

    def analyze(self, path: Path, kind: ProjectKind) -> ScannedProject:
        """Resolve and size the clean targets of a single project.

        Targets holding zero bytes are left out and never deleted.
        """
        targets: list[CleanTarget] = []
        for target_path in resolve(path, kind, self.registry, self.config.ignore_paths):
            size, count = dir_info(target_path)
            if size == 0:
                log.debug("Skipping empty target: %s", target_path)
                continue
            targets.append(
                CleanTarget(
                    path=target_path,
                    name=str(target_path.relative_to(path)),
                    size_bytes=size,
                    file_count=count,
                )
            )
        return ScannedProject.build(
            path=path,
            kind=kind,
            last_modified=last_touched(path, kind, self.registry),
            clean_targets=targets,
        )

    def _analyze_safe(self, candidate: Candidate) -> ScannedProject | None:
        path, kind = candidate
        try:
            return self.analyze(path, kind)
        except OSError:
            log.exception("Failed to analyze %s project at %s", kind, path)
            return None

    def scan(
        self,
        root: Path | str,
        max_depth: int | None = None,
        older_than: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[ScannedProject]:
        """Scan ``root`` for projects with reclaimable space.

        Candidates are analyzed in parallel, one project per task; results
        are merged and then sorted, so completion order does not matter.

        Args:
            root: Directory to scan.
            max_depth: Depth limit; defaults to the config's ``max_depth``.
            older_than: Optional age string ('30d', '3m'); only projects
                untouched for at least this long are returned.
            on_progress: Optional callback for progress updates.

        Returns:
            Projects with a non-zero total, largest first.

        Raises:
            ScanRootError: ``root`` is not an existing directory.
            ConfigParseError: ``older_than`` is malformed.
        """
        age = parse_age(older_than) if older_than is not None else None
        root_path = self._check_root(root)
        if max_depth is None:
            max_depth = self.config.max_depth

        if on_progress:
            on_progress("scanning", 0)
        candidates = self.find_candidates(root_path, max_depth)
        if on_progress:
            on_progress("sizing", len(candidates))

        if self.max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(candidates))) as executor:
                analyzed = list(executor.map(self._analyze_safe, candidates))
        else:
            analyzed = [self._analyze_safe(c) for c in candidates]

        projects = [p for p in analyzed if p is not None and p.total_cleanable_bytes > 0]
        if age is not None:
            projects = filter_older_than(projects, age, datetime.now(timezone.utc))
        if on_progress:
            on_progress("done", len(projects))
        return sort_by_size(projects)

    def summary(
        self,
        root: Path | str,
        max_depth: int | None = None,
        older_than: str | None = None,
    ) -> ScanSummary:
        """Aggregate project counts and reclaimable bytes by kind."""
        projects = self.scan(root, max_depth=max_depth, older_than=older_than)
        by_kind: dict[ProjectKind, KindSummary] = {}
        for project in projects:
            entry = by_kind.setdefault(project.kind, KindSummary(project.kind))
            entry.projects += 1
            entry.reclaimable_bytes += project.total_cleanable_bytes

        return ScanSummary(
            root=Path(root).expanduser().resolve(),
            total_projects=len(projects),
            total_reclaimable_bytes=sum(p.total_cleanable_bytes for p in projects),
            by_kind=sorted(by_kind.values(), key=lambda k: (-k.reclaimable_bytes, k.kind.value)),
        )

    def clean(
        self,
        projects: Iterable[ScannedProject],
        dry_run: bool = False,
        on_result: CleanResultCallback | None = None,
    ) -> list[CleanResult]:
        """Clean the already-resolved targets of ``projects``.

        Targets are never re-resolved, so a dry run previews exactly what
        a real run on the same projects would remove.
        """
        return clean_projects(projects, dry_run=dry_run, on_result=on_result)

    @staticmethod
    def _check_root(root: Path | str) -> Path:
        path = Path(root).expanduser()
        if not path.is_dir():
            raise ScanRootError(f"Path does not exist or is not a directory: {path}")
        return path.resolve()
