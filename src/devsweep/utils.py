"""Shared utility functions."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

from devsweep.errors import SelectionError


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def format_age(age: timedelta) -> str:
    """Format an elapsed duration compactly ('3d ago', '2mo ago')."""
    days = age.days
    if days > 365:
        return f"{days / 365:.1f}y ago"
    if days > 30:
        return f"{days // 30}mo ago"
    if days > 0:
        return f"{days}d ago"
    hours = int(age.total_seconds()) // 3600
    if hours > 0:
        return f"{hours}h ago"
    return "just now"


def shorten_path(path: Path | str) -> str:
    """Replace the home directory prefix with '~'."""
    text = str(path)
    home = str(Path.home())
    if text == home or text.startswith(home + os.sep):
        return "~" + text[len(home):]
    return text


def truncate(text: str, max_width: int) -> str:
    """Cut ``text`` to ``max_width`` characters, ending with an ellipsis."""
    if len(text) <= max_width:
        return text
    if max_width > 1:
        return text[: max_width - 1] + "…"
    return "…"


def _parse_index(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise SelectionError(f"Invalid number: '{text}'") from None


def parse_selection(text: str, count: int) -> list[int]:
    """Parse a selection like '1,3-5 8' into sorted 0-based indices.

    Numbers are 1-based and may be separated by commas or spaces; ``a-b``
    selects an inclusive range and ``all`` selects everything. Empty input
    selects nothing.

    Raises:
        SelectionError: a number is malformed, zero, or beyond ``count``.
    """
    text = text.strip()
    if not text:
        return []
    if text.lower() == "all":
        return list(range(count))

    selected: set[int] = set()
    for part in text.replace(",", " ").split():
        if "-" in part:
            start_s, _, end_s = part.partition("-")
            start, end = _parse_index(start_s), _parse_index(end_s)
            if start < 1 or end > count or start > end:
                raise SelectionError(f"Invalid range: {part}")
            selected.update(range(start - 1, end))
        else:
            num = _parse_index(part)
            if num < 1 or num > count:
                raise SelectionError(f"Number out of range: {num}")
            selected.add(num - 1)
    return sorted(selected)
