"""
Snapshot testing helpers for tool integration tests.

This package normalizes machine-specific paths out of tool output and checks
the result against golden files stored under the repository root.
"""

import logging
import sys

__version__ = "0.1.0"

# Configure logging for the package
def configure_logging(level=logging.INFO):
    """Configure logging for the toolsnap package."""
    logger = logging.getLogger('toolsnap')

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)

    return logger

# Configure logging by default
configure_logging()

# Import main classes for public API
from .cli import SnapshotCLI, main
from .comparator import Comparator, ComparisonResult, render_diff
from .config import ConfigManager, SnapshotConfig, update_requested
from .discovery import find_repo_root
from .errors import (
    RepoRootNotFoundError,
    SnapshotError,
    SnapshotStorageError,
    ToolchainQueryError,
)
from .fsutils import copy_dir, copy_file
from .normalizer import PathNormalizer, normalize_paths
from .runner import SnapshotOutcome, SnapshotResult, SnapshotRunner, snapshot_test
from .storage import SnapshotKey, SnapshotStore
from .suites import TestSuite, cleanup_test_suites
from .toolchain import get_toolchain_root

__all__ = [
    # Version
    "__version__",
    "configure_logging",
    # Errors
    "SnapshotError",
    "RepoRootNotFoundError",
    "ToolchainQueryError",
    "SnapshotStorageError",
    # Config
    "ConfigManager",
    "SnapshotConfig",
    "update_requested",
    # Filesystem
    "copy_dir",
    "copy_file",
    "find_repo_root",
    # Normalization
    "PathNormalizer",
    "normalize_paths",
    "get_toolchain_root",
    # Storage and comparison
    "SnapshotKey",
    "SnapshotStore",
    "Comparator",
    "ComparisonResult",
    "render_diff",
    # Runner
    "SnapshotOutcome",
    "SnapshotResult",
    "SnapshotRunner",
    "snapshot_test",
    # Suites
    "TestSuite",
    "cleanup_test_suites",
    # CLI
    "SnapshotCLI",
    "main",
]
