"""
pytest plugin exposing the snapshot engine as fixtures.

    def test_hover(snapshot):
        snapshot("go", "hover", run_hover())

``--update-snapshots`` has the same effect as ``UPDATE_SNAPSHOTS=true``.
"""
from __future__ import annotations

import re
from typing import Callable, Optional

import pytest

from .config import SnapshotConfig
from .runner import SnapshotResult, SnapshotRunner, snapshot_test

_UNSAFE_NAME_CHARS = re.compile(r"[^\w.-]+")


def pytest_addoption(parser):
    group = parser.getgroup("toolsnap")
    group.addoption(
        "--update-snapshots",
        action="store_true",
        default=False,
        help="Rewrite snapshot files instead of comparing against them",
    )


def snapshot_name_for(node_name: str) -> str:
    """Turn a pytest node name into a file-name-safe snapshot name."""
    return _UNSAFE_NAME_CHARS.sub("_", node_name).strip("_")


@pytest.fixture
def snapshot_config(request) -> SnapshotConfig:
    """Snapshot configuration for the current test."""
    config = SnapshotConfig.from_env()
    if request.config.getoption("update_snapshots", default=False):
        config.update_snapshots = True
    return config


@pytest.fixture
def snapshot(request, snapshot_config) -> Callable[..., SnapshotResult]:
    """Callable checking output against ``<language>/<tool>/<test name>.snap``."""
    runner = SnapshotRunner(snapshot_config)

    def check(language: str, tool: str, actual: str, test_name: Optional[str] = None) -> SnapshotResult:
        name = test_name or snapshot_name_for(request.node.name)
        return snapshot_test(language, tool, name, actual, runner=runner)

    return check
