"""
Exceptions raised by the snapshot engine.

Everything derived from SnapshotError is fatal for the test that triggered it.
"""
from __future__ import annotations

from typing import Optional


class SnapshotError(Exception):
    """Base class for snapshot engine failures."""


class RepoRootNotFoundError(SnapshotError):
    """No directory containing the root marker was found."""

    def __init__(self, start: Optional[str] = None, marker: Optional[str] = None):
        super().__init__("repository root not found")
        self.start = start
        self.marker = marker


class ToolchainQueryError(SnapshotError):
    """The toolchain root query could not run or exited non-zero."""

    def __init__(self, command: list[str], reason: str):
        super().__init__(f"{' '.join(command)}: {reason}")
        self.command = command
        self.reason = reason


class SnapshotStorageError(SnapshotError):
    """A snapshot directory or file could not be created, written or read."""
