"""Error taxonomy for selection, removal and revert.

Every error carries owned data (path strings, patterns, the underlying
OSError) so it can be stored in results and reported after the fact.
``str(error)`` is the one-line diagnostic shown to the user.
"""

import os


class SafermError(Exception):
    """Base exception for saferm errors.

    Attributes:
        path: Path the error refers to, if any.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NoSuchFileError(SafermError):
    """Raised when a requested path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cannot remove '{path}': No such file or directory", path)


class IsADirectoryPathError(SafermError):
    """Raised when a directory is selected without recursive or empty-dir mode."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"cannot remove '{path}': Is a directory (use -r to remove it recursively)",
            path,
        )


class NotADirectoryPathError(SafermError):
    """Raised when empty-directory removal targets a non-directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"failed to remove '{path}': Not a directory", path)


class DirectoryNotEmptyError(SafermError):
    """Raised when empty-directory removal finds contents."""

    def __init__(self, path: str) -> None:
        super().__init__(f"failed to remove '{path}': Directory not empty", path)


class IsRootError(SafermError):
    """Raised for the filesystem root, which is never removable."""

    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}' is the filesystem root; refusing to remove it", path)


class CrossesDevicesError(SafermError):
    """Raised when the item and the trash directory live on different devices."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"'{path}' is located on a different device; can't move it to the trash",
            path,
        )


class PrivilegedUserError(SafermError):
    """Raised when running as superuser, where no trash directory is guaranteed."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"can't move '{path}' to the trash while running as superuser",
            path,
        )


class TrashInsidePathError(SafermError):
    """Raised when an item contains the trash directory itself."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cannot remove '{path}': it contains the trash directory", path)


class LineBreakInPathError(SafermError):
    """Raised when a path cannot be written to the line-oriented history log."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"cannot trash {path!r}: names with line breaks cannot be recorded for revert",
            path,
        )


class PatternNoMatchError(SafermError):
    """Raised when a pattern selects nothing. Aborts the whole batch."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"no files found matching the pattern '{pattern}'")
        self.pattern = pattern


class PermissionDeniedError(SafermError):
    """Raised when the process lacks permission to move an item."""

    def __init__(self, path: str) -> None:
        super().__init__(f"don't have enough permission to remove '{path}'", path)


class TrashIOError(SafermError):
    """Wraps any other OSError raised while removing an item.

    Attributes:
        cause: The original OSError.
    """

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"cannot remove '{path}': {describe_os_error(cause)}", path)
        self.cause = cause

    @property
    def errno(self) -> int | None:
        """errno of the wrapped OSError."""
        return self.cause.errno


class RevertError(SafermError):
    """Base exception for revert failures."""


class HistoryEmptyError(RevertError):
    """Raised when there is nothing to revert."""

    def __init__(self) -> None:
        super().__init__("nothing to revert: history is empty")


class HistoryCorruptError(RevertError):
    """Raised when the last history block cannot be parsed."""


class OriginalPathOccupiedError(RevertError):
    """Raised when the original location already holds something."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cannot revert: '{path}' already exists", path)


class HistoryIOError(RevertError):
    """Raised when the history log cannot be read or written."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"history log '{path}': {describe_os_error(cause)}", path)
        self.cause = cause


def describe_os_error(error: OSError) -> str:
    """Return a short description of an OSError for diagnostics."""
    if error.strerror:
        return error.strerror
    if error.errno is not None:
        return os.strerror(error.errno)
    return str(error)
