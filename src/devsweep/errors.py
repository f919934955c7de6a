"""Exceptions raised by devsweep."""

from __future__ import annotations


class DevSweepError(Exception):
    """Base class for all devsweep errors."""


class ConfigParseError(DevSweepError):
    """Raised when an age string or the persisted config is malformed."""


class ScanRootError(DevSweepError):
    """Raised when the requested scan root does not exist or is not a directory."""


class PatternError(DevSweepError):
    """Raised when a marker or clean pattern string is malformed."""


class DeletionError(DevSweepError):
    """Raised when a clean target fails its pre-deletion checks."""


class SelectionError(DevSweepError):
    """Raised when an interactive selection string cannot be parsed."""
