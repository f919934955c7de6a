"""Project staleness: last-touched timestamps and age filtering."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable

from devsweep.core.detector import list_names
from devsweep.core.registry import KindRegistry, default_registry
from devsweep.errors import ConfigParseError
from devsweep.models.kind import PatternStyle, ProjectKind
from devsweep.models.scan_result import ScannedProject

log = logging.getLogger(__name__)

_AGE_RE = re.compile(r"^([+-]?\d+)([dwmy])$")
_UNIT_DAYS = {"d": 1, "w": 7, "m": 30, "y": 365}


def parse_age(text: str) -> timedelta:
    """Parse an age string like '30d', '4w', '3m' or '1y' into a timedelta.

    Months count as 30 days and years as 365 days.

    Raises:
        ConfigParseError: unknown unit, non-integer or non-positive magnitude.
    """
    s = text.strip().lower()
    match = _AGE_RE.match(s)
    if match is None:
        raise ConfigParseError(
            f"Invalid age format '{text}'. Use e.g. '30d' (days), '4w' (weeks), "
            "'3m' (months), '1y' (years)"
        )
    num = int(match.group(1))
    if num <= 0:
        raise ConfigParseError(f"Age must be positive: '{text}'")
    try:
        return timedelta(days=num * _UNIT_DAYS[match.group(2)])
    except OverflowError:
        raise ConfigParseError(f"Age too large: '{text}'") from None


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def last_touched(
    project_root: Path | str,
    kind: ProjectKind,
    registry: KindRegistry | None = None,
) -> datetime:
    """Newest modification time among the project's marker files.

    Clean targets are ignored since builds keep them fresh. Falls back to
    the project directory's own mtime when no marker can be stat'ed.
    """
    if registry is None:
        registry = default_registry()
    root = Path(project_root)
    spec = registry.get(kind)

    candidates: list[Path] = []
    if spec is not None:
        try:
            names = list_names(root)
        except OSError:
            names = []
        for marker in spec.markers:
            if marker.style is PatternStyle.SUFFIX:
                candidates.extend(root / n for n in names if n.endswith(marker.value))
            else:
                candidates.append(root / marker.value)

    times = [t for t in map(_mtime, candidates) if t is not None]
    if not times:
        times = [os.stat(root).st_mtime]
    return datetime.fromtimestamp(max(times), tz=timezone.utc)


def older_than(project: ScannedProject, duration: timedelta, now: datetime | None = None) -> bool:
    """True if the project was last touched at least ``duration`` ago."""
    now = now or datetime.now(timezone.utc)
    return now - project.last_modified >= duration


def filter_older_than(
    projects: Iterable[ScannedProject],
    duration: timedelta,
    now: datetime | None = None,
) -> list[ScannedProject]:
    """Keep only projects older than ``duration``, preserving order."""
    now = now or datetime.now(timezone.utc)
    return [p for p in projects if older_than(p, duration, now)]
