"""Collision-free naming inside the trash directory.

The first item trashed under a given name keeps that name. Later items
with the same name get the timestamp id spliced in before the
extension: ``report.pdf`` becomes ``report.20261019143005.pdf``.
"""

import logging
import os
from collections.abc import Callable
from datetime import datetime

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class TimestampClock:
    """Produces 14-digit timestamp ids that never go backwards.

    If the wall clock steps back (NTP adjustment, DST on a naive clock),
    the last issued id is repeated instead.

    Args:
        now: Callable returning the current local time. Injected by tests.
    """

    def __init__(self, now: Callable[[], datetime] = datetime.now) -> None:
        self._now = now
        self._last: str | None = None

    def next_id(self) -> str:
        """Return the current timestamp id (``YYYYMMDDHHMMSS``)."""
        candidate = self._now().strftime(TIMESTAMP_FORMAT)
        if self._last is not None and candidate < self._last:
            logger.debug("Clock went backwards (%s < %s), reusing last id", candidate, self._last)
            candidate = self._last
        self._last = candidate
        return candidate


def split_name(name: str) -> tuple[str, str | None]:
    """Split a file name into stem and extension.

    Follows ``pathlib`` suffix rules: only the last dot counts, and a
    leading dot does not start an extension (``.bashrc`` has none).

    Returns:
        Tuple of (stem, extension or None).
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem or not ext:
        return name, None
    return stem, ext


def decorate(name: str, id_: str) -> str:
    """Insert an id before the extension of a file name."""
    stem, ext = split_name(name)
    if ext is None:
        return f"{stem}.{id_}"
    return f"{stem}.{id_}.{ext}"


class TrashNamer:
    """Computes names inside one trash directory.

    Every name handed out is reserved for the lifetime of the namer, so
    items in the same batch never receive the same name even before any
    of them has been moved. If the decorated name is also taken (several
    collisions within one second), a counter is appended to the id.

    Args:
        trash_dir: Absolute path of the trash directory.
    """

    def __init__(self, trash_dir: str) -> None:
        self._trash_dir = trash_dir
        self._reserved: set[str] = set()

    @property
    def trash_dir(self) -> str:
        """Trash directory the names are computed for."""
        return self._trash_dir

    def _taken(self, name: str) -> bool:
        return name in self._reserved or os.path.lexists(os.path.join(self._trash_dir, name))

    def trash_name(self, item: str, id_: str) -> str:
        """Compute and reserve a collision-free name for an item.

        Args:
            item: Path of the item to be trashed.
            id_: Timestamp id of the operation.

        Returns:
            Bare file name to use inside the trash directory.
        """
        name = os.path.basename(item.rstrip(os.sep))
        if not self._taken(name):
            chosen = name
        else:
            chosen = decorate(name, id_)
            counter = 1
            while self._taken(chosen):
                chosen = decorate(name, f"{id_}_{counter}")
                counter += 1

        self._reserved.add(chosen)
        logger.debug("Trash name for %s: %s", item, chosen)
        return chosen

    def trash_path(self, item: str, id_: str) -> str:
        """Compute and reserve the full trash path for an item."""
        return os.path.join(self._trash_dir, self.trash_name(item, id_))

    def release(self, name: str) -> None:
        """Drop a reservation for a name that was never used."""
        self._reserved.discard(os.path.basename(name))
