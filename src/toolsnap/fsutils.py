"""
File and directory copy helpers for preparing test workspaces.
"""
from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def copy_file(src: PathLike, dst: PathLike) -> None:
    """Copy a single file and give the copy the source's permission bits."""
    src_path = Path(src)
    dst_path = Path(dst)

    src_mode = stat.S_IMODE(src_path.stat().st_mode)
    with open(src_path, "rb") as src_file, open(dst_path, "wb") as dst_file:
        shutil.copyfileobj(src_file, dst_file)

    os.chmod(dst_path, src_mode)


def copy_dir(src: PathLike, dst: PathLike) -> None:
    """Copy a directory tree recursively.

    The destination is created with the source directory's mode. The first
    error aborts the copy and propagates.
    """
    src_path = Path(src)
    dst_path = Path(dst)

    src_mode = stat.S_IMODE(src_path.stat().st_mode)
    dst_path.mkdir(mode=src_mode, parents=True, exist_ok=True)

    for entry in sorted(src_path.iterdir()):
        target = dst_path / entry.name
        if entry.is_dir():
            copy_dir(entry, target)
        else:
            copy_file(entry, target)

    logger.debug(f"Copied {src_path} -> {dst_path}")
