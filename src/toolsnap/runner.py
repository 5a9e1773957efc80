"""
Snapshot test execution.

``SnapshotRunner.run`` implements compare-or-update for one snapshot:

    absent                 -> write    -> CREATED
    present, update mode   -> overwrite -> UPDATED
    present, compare mode  -> compare  -> PASSED | FAILED (+ .diff file)

Fatal problems (no repository root, unusable snapshot directory, unreadable
snapshot, failed toolchain query) raise SnapshotError subclasses.
``snapshot_test`` wraps the runner for use inside a test and turns every
non-passing outcome into a test failure.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytest

from .comparator import Comparator, render_diff
from .config import SnapshotConfig, update_requested
from .discovery import find_repo_root
from .errors import (
    RepoRootNotFoundError,
    SnapshotError,
    SnapshotStorageError,
    ToolchainQueryError,
)
from .normalizer import PathNormalizer
from .storage import SnapshotKey, SnapshotStore

logger = logging.getLogger(__name__)


class SnapshotOutcome(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class SnapshotResult:
    """Outcome of a single snapshot test."""

    key: SnapshotKey
    outcome: SnapshotOutcome
    snapshot_path: Path
    actual: str
    expected: Optional[str] = None
    diff_path: Optional[Path] = None
    error_message: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.outcome is not SnapshotOutcome.FAILED


class SnapshotRunner:
    """Runs compare-or-update snapshot checks."""

    def __init__(
        self,
        config: Optional[SnapshotConfig] = None,
        normalizer: Optional[PathNormalizer] = None,
        repo_root: Optional[Path] = None,
    ):
        self.config = config or SnapshotConfig()
        self.normalizer = normalizer
        self.repo_root = Path(repo_root) if repo_root is not None else None
        self.comparator = Comparator()

    def _get_normalizer(self) -> PathNormalizer:
        if self.normalizer is not None:
            return self.normalizer
        # A fresh normalizer per run re-queries the toolchain root
        return PathNormalizer.from_config(self.config)

    def _get_store(self) -> SnapshotStore:
        repo_root = self.repo_root
        if repo_root is None:
            repo_root = find_repo_root(marker=self.config.root_marker)
        return SnapshotStore(self.config.get_snapshot_root(repo_root))

    def run(self, language: str, tool: str, test_name: str, actual: str) -> SnapshotResult:
        """Compare ``actual`` with the stored snapshot, or (re)write it."""
        actual = self._get_normalizer().normalize(actual)

        store = self._get_store()
        key = SnapshotKey(language, tool, test_name)
        store.ensure_dir(key)
        snapshot_path = store.snapshot_path(key)

        existed = snapshot_path.exists()
        if not existed or update_requested(self.config):
            store.write(key, actual)
            if existed:
                logger.info(f"Updated snapshot: {snapshot_path}")
                outcome = SnapshotOutcome.UPDATED
            else:
                logger.info(f"Created new snapshot: {snapshot_path}")
                outcome = SnapshotOutcome.CREATED
            return SnapshotResult(key=key, outcome=outcome, snapshot_path=snapshot_path, actual=actual)

        expected = store.read(key)
        comparison = self.comparator.compare(actual, expected)
        if comparison.match:
            return SnapshotResult(
                key=key,
                outcome=SnapshotOutcome.PASSED,
                snapshot_path=snapshot_path,
                actual=actual,
                expected=expected,
            )

        diff_path = store.write_diff(key, render_diff(expected, actual))
        return SnapshotResult(
            key=key,
            outcome=SnapshotOutcome.FAILED,
            snapshot_path=snapshot_path,
            actual=actual,
            expected=expected,
            diff_path=diff_path,
            error_message=comparison.error_message,
        )


def _fatal_message(error: SnapshotError) -> str:
    if isinstance(error, RepoRootNotFoundError):
        return f"Failed to find repo root: {error}"
    if isinstance(error, ToolchainQueryError):
        return f"Failed to query toolchain root: {error}"
    if isinstance(error, SnapshotStorageError):
        return str(error)
    return f"Snapshot error: {error}"


def snapshot_test(
    language: str,
    tool: str,
    test_name: str,
    actual: str,
    config: Optional[SnapshotConfig] = None,
    runner: Optional[SnapshotRunner] = None,
) -> SnapshotResult:
    """Check ``actual`` against the snapshot for (language, tool, test_name).

    Creates the snapshot when it is missing and rewrites it when
    ``UPDATE_SNAPSHOTS=true``. Fails the calling test on a mismatch, after the
    diff file has been written.
    """
    runner = runner or SnapshotRunner(config)

    try:
        result = runner.run(language, tool, test_name, actual)
    except SnapshotError as e:
        pytest.fail(_fatal_message(e))

    if result.outcome is SnapshotOutcome.FAILED:
        pytest.fail(result.error_message)

    return result
