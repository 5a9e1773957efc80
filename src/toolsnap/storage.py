"""
Snapshot storage.

Snapshots are plain text files laid out as
``<repo root>/<snapshot subdir>/<language>/<tool>/<test name>.snap``. A failed
comparison leaves a ``.snap.diff`` file next to the snapshot.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import SnapshotStorageError

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".snap"
DIFF_SUFFIX = ".diff"

# Undecodable tool output round-trips through lone surrogates
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def _encode(content: str) -> bytes:
    return content.encode(ENCODING, ENCODING_ERRORS)


def _decode(data: bytes) -> str:
    return data.decode(ENCODING, ENCODING_ERRORS)


@dataclass(frozen=True)
class SnapshotKey:
    """Identifies one snapshot by language, tool and test name."""

    language: str
    tool: str
    test_name: str

    def relative_path(self) -> Path:
        return Path(self.language) / self.tool / f"{self.test_name}{SNAPSHOT_SUFFIX}"

    def __str__(self) -> str:
        return f"{self.language}/{self.tool}/{self.test_name}"


class SnapshotStore:
    """Reads and writes snapshot and diff files under a snapshot root."""

    def __init__(self, snapshot_root: Path):
        self.snapshot_root = Path(snapshot_root)

    def snapshot_dir(self, key: SnapshotKey) -> Path:
        return self.snapshot_root / key.language / key.tool

    def snapshot_path(self, key: SnapshotKey) -> Path:
        return self.snapshot_root / key.relative_path()

    @staticmethod
    def diff_path(snapshot_path: Path) -> Path:
        return snapshot_path.with_name(snapshot_path.name + DIFF_SUFFIX)

    def ensure_dir(self, key: SnapshotKey) -> Path:
        """Create the snapshot directory for ``key`` (and its parents)."""
        directory = self.snapshot_dir(key)
        try:
            directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            raise SnapshotStorageError(f"Failed to create snapshots directory: {e}") from e
        return directory

    def exists(self, key: SnapshotKey) -> bool:
        return self.snapshot_path(key).exists()

    def write(self, key: SnapshotKey, content: str) -> Path:
        """Write (truncate-create) the snapshot for ``key``."""
        path = self.snapshot_path(key)
        try:
            # Encode before opening so a failure never leaves a truncated file
            data = _encode(content)
            with open(path, "wb") as f:
                f.write(data)
        except (OSError, UnicodeError) as e:
            raise SnapshotStorageError(f"Failed to write snapshot: {e}") from e
        return path

    def read(self, key: SnapshotKey) -> str:
        """Read the stored snapshot for ``key``."""
        path = self.snapshot_path(key)
        try:
            with open(path, "rb") as f:
                return _decode(f.read())
        except (OSError, UnicodeError) as e:
            raise SnapshotStorageError(f"Failed to read snapshot: {e}") from e

    def write_diff(self, key: SnapshotKey, content: str) -> Optional[Path]:
        """Write the diff artifact for ``key``.

        Best effort: a failure is logged and None is returned.
        """
        path = self.diff_path(self.snapshot_path(key))
        try:
            data = _encode(content)
            with open(path, "wb") as f:
                f.write(data)
        except (OSError, UnicodeError) as e:
            logger.info(f"Failed to write diff file: {e}")
            return None

        logger.info(f"Wrote diff to: {path}")
        return path

    def list_snapshots(
        self, language: Optional[str] = None, tool: Optional[str] = None
    ) -> list[Path]:
        """List stored snapshot files, optionally filtered by language and tool."""
        search_dir = self.snapshot_root
        if language:
            search_dir = search_dir / language
            if tool:
                search_dir = search_dir / tool

        if not search_dir.exists():
            return []

        snapshots = sorted(search_dir.rglob(f"*{SNAPSHOT_SUFFIX}"))
        if tool and not language:
            snapshots = [p for p in snapshots if p.parent.name == tool]
        return snapshots

    def list_diffs(self) -> list[Path]:
        """List leftover diff artifacts."""
        if not self.snapshot_root.exists():
            return []
        return sorted(self.snapshot_root.rglob(f"*{SNAPSHOT_SUFFIX}{DIFF_SUFFIX}"))
