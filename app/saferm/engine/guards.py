"""Safety predicates evaluated before an item is moved.

Each guard is independent: the removal engine decides what to do with
the verdicts. None of them attempts the move itself.
"""

import logging
import os
from pathlib import PurePath

logger = logging.getLogger(__name__)

_PROC_STATUS = "/proc/self/status"


def is_root_path(path: str) -> bool:
    """Check whether a path is a filesystem root.

    A root has a root component and no parent (``/``, or ``C:\\`` on
    Windows). Relative paths are never roots.

    Args:
        path: Path to check. Not resolved, so ``/..`` is not a root here;
            callers pass absolute normalized paths.

    Returns:
        True if the path is a filesystem root.
    """
    pure = PurePath(os.path.normpath(path)) if path else PurePath()
    return bool(pure.root) and pure.parent == pure


def device_id(path: str) -> int:
    """Return the storage device id of a path, without following a final symlink."""
    return os.lstat(path).st_dev


def is_cross_device(item: str, trash_dir: str) -> bool:
    """Check whether an item lives on a different device than the trash.

    Compares ``st_dev`` from filesystem metadata. A mismatch means an
    atomic rename into the trash is impossible.

    Args:
        item: Absolute path of the item to remove.
        trash_dir: Absolute path of the (existing) trash directory.

    Returns:
        True if the devices differ.

    Raises:
        OSError: If either path cannot be stat'ed.
    """
    item_dev = device_id(item)
    trash_dev = os.stat(trash_dir).st_dev
    if item_dev != trash_dev:
        logger.debug(
            "Device mismatch: %s (%d) vs trash %s (%d)", item, item_dev, trash_dir, trash_dev
        )
        return True
    return False


def is_privileged() -> bool:
    """Check whether the process runs with superuser privileges.

    Uses the effective uid from the process credentials. On systems
    without ``geteuid`` the ``Uid:`` line of ``/proc/self/status`` is
    consulted; if neither is available the process is assumed
    unprivileged.

    Returns:
        True if the effective uid is 0.
    """
    geteuid = getattr(os, "geteuid", None)
    if geteuid is not None:
        return geteuid() == 0

    try:
        with open(_PROC_STATUS, encoding="utf-8") as f:
            for line in f:
                if line.startswith("Uid:"):
                    fields = line.split()
                    # Uid: real effective saved filesystem
                    return len(fields) > 2 and fields[2] == "0"
    except OSError:
        logger.debug("Cannot read %s, assuming unprivileged", _PROC_STATUS)
    return False
