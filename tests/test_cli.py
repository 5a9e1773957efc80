"""Tests for the toolsnap command line."""

import io
import json
import logging

import pytest

from toolsnap.cli import SnapshotCLI


@pytest.fixture
def cli(temp_dir, fake_toolchain_command):
    """A CLI whose configuration file points at the fake toolchain."""
    config_path = temp_dir / "toolsnap.json"
    config_path.write_text(json.dumps({"toolchain_command": fake_toolchain_command}))
    return SnapshotCLI(config_path=config_path)


@pytest.fixture
def populated(snapshot_dir):
    """A snapshot tree with one leftover diff."""
    for rel in ["go/definition/foo.snap", "go/hover/bar.snap", "python/hover/baz.snap"]:
        path = snapshot_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rel)
    diff = snapshot_dir / "go" / "hover" / "bar.snap.diff"
    diff.write_text("=== Expected ===\n")
    return snapshot_dir


class TestNormalize:
    """Tests for the normalize command."""

    def test_normalize_file(self, cli, temp_dir, capsys):
        source = temp_dir / "out.txt"
        source.write_text("/home/ci/workspace/a.go:1\n/usr/local/go/src/b.go\nok\n")

        assert cli.run(["normalize", str(source)]) == 0

        assert capsys.readouterr().out == "/TEST_OUTPUT/workspace/a.go:1\n/GOROOT/src/b.go\nok\n"

    def test_normalize_stdin_with_root(self, cli, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("/opt/sdk/lib/x\n"))

        assert cli.run(["normalize", "--toolchain-root", "/opt/sdk"]) == 0

        assert capsys.readouterr().out == "/GOROOT/lib/x\n"

    def test_normalize_toolchain_failure(self, temp_dir, capsys):
        config_path = temp_dir / "toolsnap.json"
        config_path.write_text(json.dumps({"toolchain_command": ["toolsnap-no-such-binary"]}))
        source = temp_dir / "out.txt"
        source.write_text("x")

        assert SnapshotCLI(config_path=config_path).run(["normalize", str(source)]) == 1


class TestList:
    """Tests for the list command."""

    def test_list_all(self, cli, populated, caplog):
        caplog.set_level(logging.INFO, logger="toolsnap")

        assert cli.run(["list"]) == 0

        assert "Found 3 snapshots" in caplog.text
        assert "go/definition/foo.snap" in caplog.text
        assert "python/hover/baz.snap" in caplog.text

    def test_list_filtered(self, cli, populated, caplog):
        caplog.set_level(logging.INFO, logger="toolsnap")

        assert cli.run(["list", "--language", "go", "--tool", "hover"]) == 0

        assert "Found 1 snapshots" in caplog.text
        assert "go/hover/bar.snap" in caplog.text

    def test_list_explicit_root(self, cli, populated, repo_root, temp_dir, monkeypatch, caplog):
        caplog.set_level(logging.INFO, logger="toolsnap")
        elsewhere = temp_dir.parent
        monkeypatch.chdir(elsewhere)

        assert cli.run(["list", "--root", str(repo_root)]) == 0
        assert "Found 3 snapshots" in caplog.text

    def test_list_without_repo_root(self, temp_dir, monkeypatch, caplog):
        config_path = temp_dir / "toolsnap.json"
        config_path.write_text(json.dumps({"root_marker": "toolsnap-missing-marker.txt"}))
        monkeypatch.chdir(temp_dir)

        assert SnapshotCLI(config_path=config_path).run(["list"]) == 1
        assert "repository root not found" in caplog.text


class TestClean:
    """Tests for the clean command."""

    def test_clean_removes_diffs(self, cli, populated):
        diff = populated / "go" / "hover" / "bar.snap.diff"

        assert cli.run(["clean"]) == 0

        assert not diff.exists()
        assert (populated / "go" / "hover" / "bar.snap").exists()

    def test_clean_dry_run(self, cli, populated, caplog):
        caplog.set_level(logging.INFO, logger="toolsnap")
        diff = populated / "go" / "hover" / "bar.snap.diff"

        assert cli.run(["clean", "--dry-run"]) == 0

        assert diff.exists()
        assert "Would delete" in caplog.text

    def test_clean_nothing(self, cli, repo_root, caplog):
        caplog.set_level(logging.INFO, logger="toolsnap")
        assert cli.run(["clean"]) == 0
        assert "No diff files" in caplog.text


class TestConfigCommand:
    """Tests for the config command."""

    def test_init(self, temp_dir):
        config_path = temp_dir / "new" / "toolsnap.json"

        assert SnapshotCLI().run(["--config", str(config_path), "config", "--init"]) == 0

        assert json.loads(config_path.read_text())["root_marker"] == "go.mod"

    def test_show(self, cli, caplog):
        caplog.set_level(logging.INFO, logger="toolsnap")
        assert cli.run(["config", "--show"]) == 0
        assert "snapshot_subdir: integrationtests/snapshots" in caplog.text


def test_no_command(cli, capsys):
    assert cli.run([]) == 1
    assert "usage" in capsys.readouterr().out
