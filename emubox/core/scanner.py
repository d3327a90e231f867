from __future__ import annotations

import logging
import os
from pathlib import Path

from emubox.common.exceptions import DirectoryUnavailable

logger = logging.getLogger(__name__)


def _is_listable(entry: os.DirEntry) -> bool:
    if entry.name.startswith("."):
        return False
    try:
        # Symlinks are not followed: only real regular files count
        return entry.is_file(follow_symlinks=False)
    except OSError:
        logger.debug("Could not stat %s; skipping", entry.path)
        return False


def scan_directory(path: Path | str) -> list[str]:
    """Return the names of the regular files directly inside ``path``.

    Hidden entries and anything that is not a regular file (directories,
    symlinks, devices) are left out. The order is whatever the file system
    returns.

    Raises:
        DirectoryUnavailable: if the directory cannot be opened. ``missing``
            tells a nonexistent path apart from other OS failures.
    """
    path = Path(path)
    try:
        with os.scandir(path) as it:
            names = [entry.name for entry in it if _is_listable(entry)]
    except FileNotFoundError as e:
        raise DirectoryUnavailable(str(path), missing=True) from e
    except OSError as e:
        raise DirectoryUnavailable(str(path), missing=False, reason=e.strerror or str(e)) from e

    logger.debug("Scanned %s: %d entries", path, len(names))
    return names
