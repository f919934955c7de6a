"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from devsweep.models.kind import ProjectKind


@dataclass(frozen=True, slots=True)
class CleanTarget:
    """Existing directory inside a project that can be deleted."""

    path: Path
    name: str
    size_bytes: int
    file_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "name": self.name,
            "size_bytes": self.size_bytes,
            "file_count": self.file_count,
        }


@dataclass(frozen=True, slots=True)
class ScannedProject:
    """A detected project together with its sized clean targets.

    ``last_modified`` comes from the project's marker files, not from the
    clean targets, which are regenerated on every build.
    """

    path: Path
    kind: ProjectKind
    last_modified: datetime
    clean_targets: tuple[CleanTarget, ...] = ()
    total_cleanable_bytes: int = 0

    @classmethod
    def build(
        cls,
        path: Path,
        kind: ProjectKind,
        last_modified: datetime,
        clean_targets: list[CleanTarget] | tuple[CleanTarget, ...],
    ) -> ScannedProject:
        """Create a project whose total is the sum of its targets."""
        targets = tuple(clean_targets)
        return cls(
            path=path,
            kind=kind,
            last_modified=last_modified,
            clean_targets=targets,
            total_cleanable_bytes=sum(t.size_bytes for t in targets),
        )

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "name": self.name,
            "kind": str(self.kind),
            "total_cleanable_bytes": self.total_cleanable_bytes,
            "last_modified": self.last_modified.isoformat(),
            "clean_targets": [t.to_dict() for t in self.clean_targets],
        }


@dataclass(slots=True)
class KindSummary:
    """Project count and reclaimable bytes for one project kind."""

    kind: ProjectKind
    projects: int = 0
    reclaimable_bytes: int = 0


@dataclass(slots=True)
class ScanSummary:
    """Aggregate totals of a scan, grouped by project kind."""

    root: Path
    total_projects: int = 0
    total_reclaimable_bytes: int = 0
    by_kind: list[KindSummary] = field(default_factory=list)
