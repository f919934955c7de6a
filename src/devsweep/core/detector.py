"""Marker-based project kind detection."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from devsweep.core.registry import KindRegistry, default_registry
from devsweep.models.kind import MarkerSpec, PatternStyle, ProjectKind

log = logging.getLogger(__name__)


def list_names(directory: Path) -> list[str]:
    """Names of the direct children of ``directory``."""
    with os.scandir(directory) as it:
        return [entry.name for entry in it]


def marker_matches(directory: Path, marker: MarkerSpec, names: list[str]) -> bool:
    """Check whether a single marker is satisfied in ``directory``.

    ``names`` is the pre-read listing of the directory's children.
    """
    match marker.style:
        case PatternStyle.SUFFIX:
            return any(name.endswith(marker.value) for name in names)
        case PatternStyle.NESTED:
            return (directory / marker.value).exists()
        case _:
            return marker.value in names and (directory / marker.value).is_file()


def detect(directory: Path | str, registry: KindRegistry | None = None) -> ProjectKind | None:
    """Return the first kind, in registry order, whose markers match ``directory``."""
    if registry is None:
        registry = default_registry()
    directory = Path(directory)
    try:
        names = list_names(directory)
    except OSError as e:
        log.debug("Cannot list %s: %s", directory, e)
        return None

    for spec in registry:
        if any(marker_matches(directory, m, names) for m in spec.markers):
            return spec.kind
    return None
