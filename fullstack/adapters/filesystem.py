"""
Filesystem primitives — recursive copy and delete.

Failures (permissions, disk full) propagate: they must fail the
operation that triggered them.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(source: Path, target: Path) -> int:
    """Copy the contents of ``source`` into ``target``.

    Symlinked files and directories are followed and copied as regular
    content. Existing files with the same relative path are
    overwritten; other files already in ``target`` are left alone.

    Returns:
        Number of files copied.
    """
    copied: list[str] = []

    def _copy(src: str, dst: str) -> str:
        copied.append(dst)
        return shutil.copy2(src, dst)

    shutil.copytree(source, target, copy_function=_copy, dirs_exist_ok=True)
    logger.debug("Copied %d files %s → %s", len(copied), source, target)
    return len(copied)


def delete_path(path: Path) -> bool:
    """Delete a file or directory tree. A missing path is not an error.

    Returns:
        True if something was deleted.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    else:
        return False
    logger.debug("Deleted %s", path)
    return True
