"""
Toolchain root query.

Runs the toolchain's own environment introspection command (``go env GOROOT``
by default) and returns its trimmed standard output.
"""
from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from .errors import ToolchainQueryError

logger = logging.getLogger(__name__)

DEFAULT_TOOLCHAIN_COMMAND = ("go", "env", "GOROOT")


def get_toolchain_root(command: Optional[Sequence[str]] = None) -> str:
    """Query the toolchain installation root.

    Raises:
        ToolchainQueryError: If the command cannot be started or exits non-zero.
    """
    cmd = list(command or DEFAULT_TOOLCHAIN_COMMAND)

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise ToolchainQueryError(cmd, str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.strip()
        reason = f"exit status {result.returncode}"
        if stderr:
            reason = f"{reason}: {stderr}"
        raise ToolchainQueryError(cmd, reason)

    root = result.stdout.strip()
    logger.debug(f"Toolchain root from {' '.join(cmd)}: {root}")
    return root
