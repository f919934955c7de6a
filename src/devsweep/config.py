"""JSON-backed persistent configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from devsweep.errors import ConfigParseError
from devsweep.models.kind import ProjectKind
from devsweep.utils import xdg_config_home

log = logging.getLogger(__name__)

_CONFIG_DIR = "dev-sweep"
_CONFIG_FILE = "config.json"


@dataclass(frozen=True)
class DevSweepConfig:
    """Immutable configuration passed into the scan and clean entry points."""

    ignore_paths: tuple[Path, ...] = ()
    exclude_kinds: frozenset[ProjectKind] = field(default_factory=frozenset)
    default_roots: tuple[Path, ...] = ()
    max_depth: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DevSweepConfig:
        """Build a config from decoded JSON, rejecting malformed values."""
        if not isinstance(data, dict):
            raise ConfigParseError("Config must be a JSON object")

        def _str_list(key: str) -> list[str]:
            value = data.get(key) or []
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigParseError(f"'{key}' must be a list of strings")
            return value

        kinds: set[ProjectKind] = set()
        for name in _str_list("exclude_kinds"):
            try:
                kinds.add(ProjectKind.from_name(name))
            except ValueError as e:
                raise ConfigParseError(str(e)) from None

        max_depth = data.get("max_depth")
        if max_depth is not None and (
            isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0
        ):
            raise ConfigParseError("'max_depth' must be a non-negative integer or null")

        return cls(
            ignore_paths=tuple(Path(p).expanduser() for p in _str_list("ignore_paths")),
            exclude_kinds=frozenset(kinds),
            default_roots=tuple(Path(p).expanduser() for p in _str_list("default_roots")),
            max_depth=max_depth,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ignore_paths": [str(p) for p in self.ignore_paths],
            "exclude_kinds": [str(k) for k in ProjectKind if k in self.exclude_kinds],
            "default_roots": [str(p) for p in self.default_roots],
            "max_depth": self.max_depth,
        }


def config_path() -> Path:
    """Default config file location."""
    return xdg_config_home() / _CONFIG_DIR / _CONFIG_FILE


def load_config(path: Path | None = None) -> DevSweepConfig:
    """Load config from disk; a missing file yields the defaults.

    Raises:
        ConfigParseError: the file exists but cannot be read or parsed.
    """
    path = path or config_path()
    if not path.exists():
        return DevSweepConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Could not load config from {path}: {e}") from e
    config = DevSweepConfig.from_dict(data)
    log.debug("Loaded config from %s", path)
    return config


def save_config(config: DevSweepConfig, path: Path | None = None) -> Path:
    """Persist config to disk and return the path written."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(config.to_dict(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return path
