"""
Pytest configuration and shared fixtures for toolsnap tests.
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

from toolsnap.config import SnapshotConfig

pytest_plugins = ["toolsnap.plugin"]

FAKE_GOROOT = "/usr/local/go"


@pytest.fixture(autouse=True)
def no_update_env(monkeypatch):
    """Start every test in compare mode."""
    monkeypatch.delenv("UPDATE_SNAPSHOTS", raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp()).resolve()
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def repo_root(temp_dir, monkeypatch):
    """A fake repository (contains go.mod) that is also the working directory."""
    (temp_dir / "go.mod").write_text("module example.com/fake\n")
    monkeypatch.chdir(temp_dir)
    return temp_dir


@pytest.fixture
def fake_toolchain_command():
    """A toolchain query that prints FAKE_GOROOT without needing Go installed."""
    return [sys.executable, "-c", f"print({FAKE_GOROOT!r})"]


@pytest.fixture
def config(fake_toolchain_command):
    """Snapshot configuration using the fake toolchain."""
    return SnapshotConfig(toolchain_command=fake_toolchain_command)


@pytest.fixture
def snapshot_dir(repo_root):
    """Snapshot tree root inside the fake repository."""
    return repo_root / "integrationtests" / "snapshots"
