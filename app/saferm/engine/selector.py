"""Path selection for the removal pipeline.

Turns the raw list of requested paths plus selection flags into the
ordered set of entries to act on. Problems with individual paths are
collected and the path is excluded; only an unmatched pattern aborts
the whole selection.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from saferm.engine.errors import (
    IsADirectoryPathError,
    IsRootError,
    NoSuchFileError,
    PatternNoMatchError,
)
from saferm.engine.guards import is_root_path
from saferm.engine.models import Entry, Selection, SelectionCriteria

logger = logging.getLogger(__name__)


def is_hidden(name: str) -> bool:
    """Check if a file or directory name is hidden (dot-prefixed)."""
    return name.startswith(".")


class PathSelector:
    """Resolves requested paths into entries according to SelectionCriteria.

    Dispatch by ``(recursive, pattern given)``:
    - (False, False): files as-is; directories only with
      ``treat_empty_dir_as_removable``, otherwise reported and excluded.
    - (False, True): a file is kept if its name contains the pattern; a
      directory contributes its matching immediate child files.
    - (True, False): the path itself, file or directory.
    - (True, True): every non-hidden file in the subtree whose name
      contains the pattern. Hidden directories are pruned.

    Args:
        criteria: Selection flags for this invocation.
    """

    def __init__(self, criteria: SelectionCriteria) -> None:
        self._criteria = criteria

    @property
    def criteria(self) -> SelectionCriteria:
        """Selection flags in use."""
        return self._criteria

    def select(self, paths: Iterable[str | Path]) -> Selection:
        """Select entries for the given paths.

        Args:
            paths: Requested paths, relative or absolute, in user order.

        Returns:
            Selection with admitted entries and per-path problems.

        Raises:
            PatternNoMatchError: If a pattern was given and nothing matched.
        """
        selection = Selection()
        seen: set[str] = set()

        for raw in paths:
            absolute = os.path.abspath(os.fspath(raw))

            if is_root_path(absolute):
                selection.problems.append(IsRootError(absolute))
                continue

            if not os.path.lexists(absolute):
                selection.problems.append(NoSuchFileError(os.fspath(raw)))
                continue

            for candidate in self._candidates(absolute, os.fspath(raw), selection):
                if candidate in seen:
                    continue
                seen.add(candidate)
                entry = Entry.from_path(candidate)
                # Candidates found by listing can vanish before admission
                if not entry.exists:
                    selection.problems.append(NoSuchFileError(candidate))
                    continue
                selection.entries.append(entry)

        pattern = self._criteria.pattern
        if pattern is not None and not selection.entries:
            raise PatternNoMatchError(pattern)

        logger.debug("Selected %d entries", len(selection.entries))
        return selection

    def _candidates(self, path: str, raw: str, selection: Selection) -> Iterator[str]:
        """Yield candidate paths for a single existing requested path."""
        recursive = self._criteria.recursive
        pattern = self._criteria.pattern
        is_dir = os.path.isdir(path) and not os.path.islink(path)

        if pattern is None:
            if recursive or not is_dir or self._criteria.treat_empty_dir_as_removable:
                yield path
            else:
                selection.problems.append(IsADirectoryPathError(raw))
            return

        if not is_dir:
            if self._matches(os.path.basename(path), pattern):
                yield path
        elif recursive:
            yield from self._walk_matching(path, pattern)
        else:
            yield from self._list_matching(path, pattern)

    def _list_matching(self, directory: str, pattern: str) -> Iterator[str]:
        """Yield matching files among the immediate children of a directory."""
        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e)
            return

        for child in children:
            if child.is_dir(follow_symlinks=False):
                logger.debug("Skipping directory: %s", child.path)
                continue
            if self._matches(child.name, pattern):
                yield child.path

    def _walk_matching(self, root: str, pattern: str) -> Iterator[str]:
        """Yield matching non-hidden files anywhere under root.

        The root itself was named explicitly and is walked even if hidden.
        """
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._log_walk_error):
            # Prune hidden directories in place so os.walk skips their contents
            dirnames[:] = sorted(d for d in dirnames if not is_hidden(d))
            for name in sorted(filenames):
                if is_hidden(name):
                    continue
                if self._matches(name, pattern):
                    yield os.path.join(dirpath, name)

    @staticmethod
    def _matches(name: str, pattern: str) -> bool:
        """Substring match of a file name against the pattern."""
        return pattern in name

    @staticmethod
    def _log_walk_error(error: OSError) -> None:
        logger.warning("Cannot walk %s: %s", error.filename, error)
