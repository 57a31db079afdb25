"""Content comparison against an existing trash entry.

Used to avoid keeping a second, identical copy of a file in the trash:
if a same-named entry in the trash has the same SHA-256 digest, the
source may be deleted instead of trashed.
"""

import hashlib
import logging
import os

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def sha256_file(path: str, chunk_size: int = CHUNK_SIZE) -> str:
    """Compute the SHA-256 hex digest of a file by streaming it.

    Raises:
        OSError: If the file cannot be read.
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            h.update(chunk)
    return h.hexdigest()


class ContentDeduplicator:
    """Compares a source file with its same-named counterpart in the trash.

    Args:
        trash_dir: Absolute path of the trash directory.
    """

    def __init__(self, trash_dir: str) -> None:
        self._trash_dir = trash_dir

    def already_trashed_identical(self, item: str) -> bool:
        """Check whether an identical copy of ``item`` is already in the trash.

        Only regular files are compared; directories, symlinks and missing
        paths always return False. An unreadable file also returns False,
        so the caller falls back to a normal trash move.

        Args:
            item: Absolute path of the source file.

        Returns:
            True if the trash holds a same-named regular file with equal digest.
        """
        if os.path.islink(item) or not os.path.isfile(item):
            return False

        counterpart = os.path.join(self._trash_dir, os.path.basename(item))
        if os.path.islink(counterpart) or not os.path.isfile(counterpart):
            return False

        try:
            if os.path.getsize(item) != os.path.getsize(counterpart):
                return False
            source_digest = sha256_file(item)
            trash_digest = sha256_file(counterpart)
        except OSError as e:
            logger.warning("Cannot hash %s for comparison: %s", item, e)
            return False

        logger.debug("sha256 %s = %s", item, source_digest)
        logger.debug("sha256 %s = %s", counterpart, trash_digest)
        return source_digest == trash_digest
