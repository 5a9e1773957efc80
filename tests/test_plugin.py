"""Tests for the pytest plugin fixtures."""

import pytest

from toolsnap.plugin import snapshot_name_for
from toolsnap.runner import SnapshotOutcome


@pytest.fixture
def snapshot_config(snapshot_config, fake_toolchain_command):
    """Plugin configuration pointed at the fake toolchain."""
    snapshot_config.toolchain_command = fake_toolchain_command
    return snapshot_config


@pytest.mark.parametrize(
    "node_name, expected",
    [
        ("test_hover", "test_hover"),
        ("test_hover[go-1]", "test_hover_go-1"),
        ("test_refs[a/b c]", "test_refs_a_b_c"),
    ],
)
def test_snapshot_name_for(node_name, expected):
    assert snapshot_name_for(node_name) == expected


def test_snapshot_fixture_uses_test_name(repo_root, snapshot_dir, snapshot):
    """Test that the fixture names the snapshot after the test."""
    result = snapshot("go", "hover", "/home/me/workspace/x.go: func X()")

    path = snapshot_dir / "go" / "hover" / "test_snapshot_fixture_uses_test_name.snap"
    assert result.outcome is SnapshotOutcome.CREATED
    assert result.snapshot_path == path
    assert path.read_text() == "/TEST_OUTPUT/workspace/x.go: func X()"


def test_snapshot_fixture_explicit_name(repo_root, snapshot_dir, snapshot):
    snapshot("python", "definition", "first", test_name="custom")
    result = snapshot("python", "definition", "first", test_name="custom")

    assert result.outcome is SnapshotOutcome.PASSED
    assert (snapshot_dir / "python" / "definition" / "custom.snap").exists()


def test_snapshot_fixture_mismatch_fails(repo_root, snapshot):
    snapshot("go", "hover", "A", test_name="mismatch")

    with pytest.raises(pytest.fail.Exception, match="Result doesn't match snapshot"):
        snapshot("go", "hover", "B", test_name="mismatch")


def test_update_option(request, monkeypatch):
    """Test that --update-snapshots turns on update mode."""
    monkeypatch.setattr(request.config.option, "update_snapshots", True)
    config = request.getfixturevalue("snapshot_config")
    assert config.update_snapshots is True


def test_update_env(monkeypatch, request):
    monkeypatch.setenv("UPDATE_SNAPSHOTS", "true")
    config = request.getfixturevalue("snapshot_config")
    assert config.update_snapshots is True
