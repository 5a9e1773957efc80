"""
Output path normalization.

Tool output embeds absolute paths that differ between machines. Each line is
checked against three rules, always against the original line:

1. ``/workspace/``  -> workspace placeholder + text after it
2. ``/workspaces/`` -> workspace placeholder + text after it
3. toolchain root   -> toolchain placeholder + text after it

When several rules match, the last matching rule decides the line.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .toolchain import get_toolchain_root

logger = logging.getLogger(__name__)

WORKSPACE_MARKER = "/workspace/"
WORKSPACES_MARKER = "/workspaces/"
WORKSPACE_PLACEHOLDER = "/TEST_OUTPUT/workspace/"
TOOLCHAIN_PLACEHOLDER = "/GOROOT"


def _after_first(line: str, separator: str) -> str:
    return line.split(separator, 1)[1]


def normalize_line(
    line: str,
    toolchain_root: str,
    workspace_placeholder: str = WORKSPACE_PLACEHOLDER,
    toolchain_placeholder: str = TOOLCHAIN_PLACEHOLDER,
) -> str:
    """Normalize one line of output."""
    result = line

    if WORKSPACE_MARKER in line:
        result = workspace_placeholder + _after_first(line, WORKSPACE_MARKER)

    # clangd and friends report paths under the /workspaces/ base directory
    if WORKSPACES_MARKER in line:
        result = workspace_placeholder + _after_first(line, WORKSPACES_MARKER)

    if toolchain_root and toolchain_root in line:
        result = toolchain_placeholder + _after_first(line, toolchain_root)

    return result


def normalize_paths(
    text: str,
    toolchain_root: str,
    workspace_placeholder: str = WORKSPACE_PLACEHOLDER,
    toolchain_placeholder: str = TOOLCHAIN_PLACEHOLDER,
) -> str:
    """Normalize every line of ``text``; line count and order are preserved."""
    lines = text.split("\n")
    return "\n".join(
        normalize_line(line, toolchain_root, workspace_placeholder, toolchain_placeholder)
        for line in lines
    )


class PathNormalizer:
    """Normalizes tool output, querying the toolchain root on first use."""

    def __init__(
        self,
        toolchain_root: Optional[str] = None,
        toolchain_command: Optional[Sequence[str]] = None,
        workspace_placeholder: str = WORKSPACE_PLACEHOLDER,
        toolchain_placeholder: str = TOOLCHAIN_PLACEHOLDER,
    ):
        self._toolchain_root = toolchain_root
        self.toolchain_command = toolchain_command
        self.workspace_placeholder = workspace_placeholder
        self.toolchain_placeholder = toolchain_placeholder

    @classmethod
    def from_config(cls, config, toolchain_root: Optional[str] = None) -> "PathNormalizer":
        """Build a normalizer from a SnapshotConfig."""
        return cls(
            toolchain_root=toolchain_root,
            toolchain_command=config.toolchain_command,
            workspace_placeholder=config.workspace_placeholder,
            toolchain_placeholder=config.toolchain_placeholder,
        )

    @property
    def toolchain_root(self) -> str:
        """The toolchain root; raises ToolchainQueryError if the query fails."""
        if self._toolchain_root is None:
            self._toolchain_root = get_toolchain_root(self.toolchain_command)
        return self._toolchain_root

    def normalize(self, text: str) -> str:
        """Normalize ``text``."""
        return normalize_paths(
            text,
            self.toolchain_root,
            workspace_placeholder=self.workspace_placeholder,
            toolchain_placeholder=self.toolchain_placeholder,
        )
