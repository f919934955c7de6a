"""Project kinds and the patterns that describe them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from devsweep.errors import PatternError

_RECURSIVE_PREFIX = "**/"


class ProjectKind(Enum):
    """Build tooling detected for a project directory.

    Member order is detection precedence: when a directory carries markers
    for several kinds, the first one declared here wins.
    """

    RUST = "Rust"
    NODE = "Node.js"
    PYTHON = "Python"
    JAVA = "Java"
    DOTNET = ".NET"
    GO = "Go"
    ZIG = "Zig"
    CMAKE = "CMake"
    SWIFT = "Swift"
    ELIXIR = "Elixir"
    HASKELL = "Haskell"
    DART = "Dart"
    RUBY = "Ruby"
    SCALA = "Scala"
    UNITY = "Unity"
    GODOT = "Godot"
    TERRAFORM = "Terraform"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> ProjectKind:
        """Look up a kind by display name ('Node.js') or member name ('node')."""
        wanted = name.strip().lower()
        for kind in cls:
            if wanted in (kind.value.lower(), kind.name.lower()):
                return kind
        raise ValueError(f"Unknown project kind: {name!r}")


class PatternStyle(Enum):
    """How a marker or clean pattern is matched against a directory."""

    EXACT = "exact"
    SUFFIX = "suffix"
    NESTED = "nested"
    RECURSIVE = "recursive"


def _parse(text: str, *, allow_recursive: bool) -> tuple[PatternStyle, str]:
    """Split a pattern string into its style and match value.

    Accepted forms are ``name``, ``*suffix``, ``sub/path`` and, for clean
    patterns only, ``**/name``.
    """
    raw = text.strip()
    if not raw:
        raise PatternError("Empty pattern")
    if raw.startswith("/") or "\\" in raw:
        raise PatternError(f"Pattern must be a relative path: {text!r}")

    if raw.startswith(_RECURSIVE_PREFIX):
        if not allow_recursive:
            raise PatternError(f"Recursive patterns are not valid here: {text!r}")
        style, value = PatternStyle.RECURSIVE, raw[len(_RECURSIVE_PREFIX):]
        if "/" in value:
            raise PatternError(f"Recursive pattern must name a single directory: {text!r}")
    elif raw.startswith("*"):
        style, value = PatternStyle.SUFFIX, raw[1:]
        if "/" in value:
            raise PatternError(f"Suffix pattern cannot contain a path: {text!r}")
    elif "/" in raw:
        style, value = PatternStyle.NESTED, raw
    else:
        style, value = PatternStyle.EXACT, raw

    parts = value.split("/")
    if not value or "*" in value or any(p in ("", ".", "..") for p in parts):
        raise PatternError(f"Malformed pattern: {text!r}")
    return style, value


@dataclass(frozen=True, slots=True)
class MarkerSpec:
    """A file whose presence identifies a project kind."""

    style: PatternStyle
    value: str

    @classmethod
    def parse(cls, text: str) -> MarkerSpec:
        style, value = _parse(text, allow_recursive=False)
        return cls(style, value)

    def __str__(self) -> str:
        return f"*{self.value}" if self.style is PatternStyle.SUFFIX else self.value


@dataclass(frozen=True, slots=True)
class CleanPattern:
    """A path, relative to a project root, that holds disposable build output."""

    style: PatternStyle
    value: str

    @classmethod
    def parse(cls, text: str) -> CleanPattern:
        style, value = _parse(text, allow_recursive=True)
        return cls(style, value)

    def __str__(self) -> str:
        match self.style:
            case PatternStyle.SUFFIX:
                return f"*{self.value}"
            case PatternStyle.RECURSIVE:
                return f"{_RECURSIVE_PREFIX}{self.value}"
            case _:
                return self.value


@dataclass(frozen=True, slots=True)
class KindSpec:
    """Detection markers and clean patterns owned by one project kind."""

    kind: ProjectKind
    markers: tuple[MarkerSpec, ...]
    clean_patterns: tuple[CleanPattern, ...] = ()
