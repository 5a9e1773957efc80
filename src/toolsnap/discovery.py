"""
Repository root discovery.

The root is the nearest directory, walking upward from the starting point,
that contains the marker file (``go.mod`` by default).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import RepoRootNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ROOT_MARKER = "go.mod"


def find_repo_root(
    start: Optional[Union[str, Path]] = None, marker: Optional[str] = None
) -> Path:
    """Locate the repository root.

    Args:
        start: Directory to start from. Defaults to the current working directory.
        marker: File whose presence identifies the root.

    Returns:
        Path of the first directory (``start`` included) that contains ``marker``.

    Raises:
        RepoRootNotFoundError: If the filesystem root is reached first.
    """
    marker = marker or DEFAULT_ROOT_MARKER
    directory = Path(start) if start is not None else Path.cwd()
    directory = directory.absolute()

    while True:
        if (directory / marker).is_file():
            return directory

        parent = directory.parent
        if parent == directory:
            logger.debug(f"No {marker} found above {start or Path.cwd()}")
            raise RepoRootNotFoundError(str(start) if start else None, marker)
        directory = parent
