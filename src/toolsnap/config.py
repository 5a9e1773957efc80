"""
Configuration management for snapshot testing.

Settings come from an optional JSON file and from the environment. The
environment only ever switches update mode on.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

UPDATE_SNAPSHOTS_ENV = "UPDATE_SNAPSHOTS"
DEFAULT_CONFIG_FILE = "toolsnap.json"


def _default_toolchain_command() -> list[str]:
    return ["go", "env", "GOROOT"]


@dataclass
class SnapshotConfig:
    """Configuration for snapshot testing."""

    # Layout
    snapshot_subdir: str = "integrationtests/snapshots"
    root_marker: str = "go.mod"

    # Normalization
    toolchain_command: list[str] = field(default_factory=_default_toolchain_command)
    toolchain_placeholder: str = "/GOROOT"
    workspace_placeholder: str = "/TEST_OUTPUT/workspace/"

    # Update mode
    update_env_var: str = UPDATE_SNAPSHOTS_ENV
    update_snapshots: bool = False

    # Output settings
    verbose: bool = False
    quiet: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SnapshotConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        unknown = sorted(set(data) - set(known))
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        return cls(**known)

    @classmethod
    def from_file(cls, config_path: Path) -> "SnapshotConfig":
        """Load configuration from JSON file, falling back to defaults."""
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return cls()

    @classmethod
    def from_env(cls, config_path: Optional[Path] = None) -> "SnapshotConfig":
        """Load the file configuration (if any) and apply the environment."""
        config = cls.from_file(config_path) if config_path else cls()
        return config.apply_env()

    def apply_env(self) -> "SnapshotConfig":
        """Turn on update mode when the update variable is exactly "true"."""
        if os.environ.get(self.update_env_var) == "true":
            self.update_snapshots = True
        return self

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def get_snapshot_root(self, repo_root: Path) -> Path:
        """Get the snapshot tree root for a repository."""
        return Path(repo_root).joinpath(*Path(self.snapshot_subdir).parts)


def update_requested(config: Optional[SnapshotConfig] = None) -> bool:
    """Check whether snapshots should be rewritten instead of compared."""
    if config is not None and config.update_snapshots:
        return True
    env_var = config.update_env_var if config is not None else UPDATE_SNAPSHOTS_ENV
    return os.environ.get(env_var) == "true"


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or Path(DEFAULT_CONFIG_FILE)
        self.config = SnapshotConfig.from_file(self.config_path)

    def get_config(self) -> SnapshotConfig:
        """Get the current configuration."""
        return self.config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values."""
        for key, value in kwargs.items():
            if hasattr(self.config, key):
                setattr(self.config, key, value)

    def save_config(self) -> None:
        """Save configuration to file."""
        self.config.save_to_file(self.config_path)

    def reload_config(self) -> None:
        """Reload configuration from file."""
        self.config = SnapshotConfig.from_file(self.config_path)

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        SnapshotConfig().save_to_file(self.config_path)
        logger.info(f"Created default configuration at {self.config_path}")
