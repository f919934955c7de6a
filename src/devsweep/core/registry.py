"""Ordered table of project kinds, their markers and clean patterns."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from devsweep.errors import PatternError
from devsweep.models.kind import CleanPattern, KindSpec, MarkerSpec, ProjectKind

log = logging.getLogger(__name__)

# (kind, markers, clean patterns), in detection precedence order.
_DEFAULT_TABLE: tuple[tuple[ProjectKind, tuple[str, ...], tuple[str, ...]], ...] = (
    (ProjectKind.RUST, ("Cargo.toml",), ("target",)),
    (ProjectKind.NODE, ("package.json",), ("node_modules", ".next", ".nuxt", "dist", ".cache")),
    (
        ProjectKind.PYTHON,
        ("pyproject.toml", "setup.py", "requirements.txt"),
        ("**/__pycache__", ".venv", "venv", ".tox", "*.egg-info", ".mypy_cache", ".pytest_cache"),
    ),
    (ProjectKind.JAVA, ("pom.xml", "build.gradle", "build.gradle.kts"), ("target", "build", ".gradle")),
    (ProjectKind.DOTNET, ("*.csproj", "*.fsproj", "*.sln"), ("bin", "obj")),
    # Go modules live in the shared module cache, not per project.
    (ProjectKind.GO, ("go.mod",), ()),
    (ProjectKind.ZIG, ("build.zig",), ("zig-cache", "zig-out")),
    (ProjectKind.CMAKE, ("CMakeLists.txt",), ("build", "cmake-build-debug", "cmake-build-release")),
    (ProjectKind.SWIFT, ("Package.swift",), (".build",)),
    (ProjectKind.ELIXIR, ("mix.exs",), ("_build", "deps")),
    (ProjectKind.HASKELL, ("stack.yaml", "*.cabal"), (".stack-work",)),
    (ProjectKind.DART, ("pubspec.yaml",), (".dart_tool", "build")),
    (ProjectKind.RUBY, ("Gemfile",), ("vendor/bundle",)),
    (ProjectKind.SCALA, ("build.sbt",), ("target", "project/target")),
    (ProjectKind.UNITY, ("ProjectSettings/ProjectVersion.txt",), ("Library", "Temp", "Obj", "Logs")),
    (ProjectKind.GODOT, ("project.godot",), (".godot",)),
    (ProjectKind.TERRAFORM, ("main.tf", "*.tf"), (".terraform",)),
)


def _parse_all(parser, texts: Iterable[str], kind: ProjectKind) -> tuple:
    parsed = []
    for text in texts:
        try:
            parsed.append(parser(text))
        except PatternError as e:
            log.warning("Ignoring pattern for %s: %s", kind, e)
    return tuple(parsed)


class KindRegistry:
    """Stores kind specs in registration order.

    Iteration order is detection precedence, so the table stays plain
    ordered data rather than a dispatch over classes.
    """

    def __init__(self, specs: Iterable[KindSpec] = ()) -> None:
        self._specs: dict[ProjectKind, KindSpec] = {}
        for spec in specs:
            self.register(spec)

    @staticmethod
    def spec_from_patterns(
        kind: ProjectKind,
        markers: Iterable[str],
        clean_patterns: Iterable[str] = (),
    ) -> KindSpec:
        """Build a spec from pattern strings, dropping malformed ones."""
        return KindSpec(
            kind=kind,
            markers=_parse_all(MarkerSpec.parse, markers, kind),
            clean_patterns=_parse_all(CleanPattern.parse, clean_patterns, kind),
        )

    def register(self, spec: KindSpec) -> None:
        """Append a kind spec; later registrations have lower precedence."""
        if spec.kind in self._specs:
            log.warning("Kind '%s' already registered, skipping duplicate", spec.kind)
            return
        self._specs[spec.kind] = spec
        log.debug("Registered kind: %s (%d markers)", spec.kind, len(spec.markers))

    def get(self, kind: ProjectKind) -> KindSpec | None:
        """Get the spec for a kind."""
        return self._specs.get(kind)

    def kinds(self) -> list[ProjectKind]:
        """All registered kinds, in precedence order."""
        return list(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[KindSpec]:
        return iter(self._specs.values())

    def __contains__(self, kind: ProjectKind) -> bool:
        return kind in self._specs


_default: KindRegistry | None = None


def default_registry() -> KindRegistry:
    """Return the built-in registry covering every ProjectKind."""
    global _default
    if _default is None:
        _default = KindRegistry(
            KindRegistry.spec_from_patterns(kind, markers, cleans)
            for kind, markers, cleans in _DEFAULT_TABLE
        )
    return _default
