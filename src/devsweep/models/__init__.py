"""devsweep data models."""

from devsweep.models.kind import CleanPattern, KindSpec, MarkerSpec, PatternStyle, ProjectKind
from devsweep.models.scan_result import CleanTarget, KindSummary, ScanSummary, ScannedProject
from devsweep.models.clean_result import CleanResult, TargetOutcome, TargetResult

__all__ = [
    "CleanPattern",
    "CleanResult",
    "CleanTarget",
    "KindSpec",
    "KindSummary",
    "MarkerSpec",
    "PatternStyle",
    "ProjectKind",
    "ScanSummary",
    "ScannedProject",
    "TargetOutcome",
    "TargetResult",
]
