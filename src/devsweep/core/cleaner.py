"""Deletion of resolved clean targets, with dry-run support."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable

from devsweep.errors import DeletionError
from devsweep.models.clean_result import CleanResult, TargetOutcome, TargetResult
from devsweep.models.scan_result import CleanTarget, ScannedProject

log = logging.getLogger(__name__)

CleanResultCallback = Callable[[CleanResult], None]


def check_target(project_root: Path, target: CleanTarget) -> None:
    """Re-verify a target right before it is touched.

    Raises:
        DeletionError: the target vanished, became a symlink, or no longer
            lies strictly beneath the project root.
    """
    path = target.path
    if path.is_symlink():
        raise DeletionError("target is a symbolic link")
    if not path.is_dir():
        raise DeletionError("target no longer exists")
    root = project_root.resolve()
    resolved = path.resolve()
    if resolved == root or not resolved.is_relative_to(root):
        raise DeletionError(f"target is not inside project root {root}")


def clean_target(project_root: Path, target: CleanTarget, dry_run: bool = False) -> TargetResult:
    """Delete (or pretend to delete) one target and report the outcome."""
    try:
        check_target(project_root, target)
        if not dry_run:
            shutil.rmtree(target.path)
    except (DeletionError, OSError) as e:
        log.warning("Failed to remove %s: %s", target.path, e)
        return TargetResult(target.path, target.size_bytes, TargetOutcome.FAILED, str(e))

    outcome = TargetOutcome.WOULD_FREE if dry_run else TargetOutcome.FREED
    log.debug("%s %s (%d bytes)", outcome.value, target.path, target.size_bytes)
    return TargetResult(target.path, target.size_bytes, outcome)


def clean_project(project: ScannedProject, dry_run: bool = False) -> CleanResult:
    """Clean every target of a project; one failure never stops the rest."""
    result = CleanResult(project_path=project.path, kind=project.kind, dry_run=dry_run)
    for target in project.clean_targets:
        result.targets.append(clean_target(project.path, target, dry_run))
    return result


def clean_projects(
    projects: Iterable[ScannedProject],
    dry_run: bool = False,
    on_result: CleanResultCallback | None = None,
) -> list[CleanResult]:
    """Clean projects in order and return one result per project."""
    results: list[CleanResult] = []
    for project in projects:
        result = clean_project(project, dry_run)
        results.append(result)
        if on_result:
            on_result(result)
    log.info(
        "%s %d bytes across %d projects",
        "Would free" if dry_run else "Freed",
        sum(r.bytes_freed for r in results),
        len(results),
    )
    return results
