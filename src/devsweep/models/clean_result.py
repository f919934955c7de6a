"""Cleaning result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from devsweep.models.kind import ProjectKind


class TargetOutcome(Enum):
    """Terminal state of one clean target within a run."""

    WOULD_FREE = "would_free"
    FREED = "freed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TargetResult:
    """Outcome of cleaning a single target."""

    path: Path
    size_bytes: int
    outcome: TargetOutcome
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is not TargetOutcome.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "size_bytes": self.size_bytes,
            "outcome": self.outcome.value,
            "error": self.error or None,
        }


@dataclass(slots=True)
class CleanResult:
    """Result of cleaning one project."""

    project_path: Path
    kind: ProjectKind
    dry_run: bool = False
    targets: list[TargetResult] = field(default_factory=list)

    @property
    def project_name(self) -> str:
        return self.project_path.name or str(self.project_path)

    @property
    def bytes_freed(self) -> int:
        """Bytes freed, or that would be freed in a dry run."""
        return sum(t.size_bytes for t in self.targets if t.ok)

    @property
    def targets_cleaned(self) -> int:
        return sum(1 for t in self.targets if t.ok)

    @property
    def errors(self) -> list[str]:
        return [f"{t.path}: {t.error}" for t in self.targets if not t.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": str(self.project_path),
            "kind": str(self.kind),
            "dry_run": self.dry_run,
            "bytes_freed": self.bytes_freed,
            "targets": [t.to_dict() for t in self.targets],
        }
