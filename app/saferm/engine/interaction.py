"""When to ask the user before removing.

The policy never reads the terminal itself: it is given a confirm
callable (``typer.confirm`` in the CLI, a stub in tests).
"""

from collections.abc import Callable
from enum import Enum

ConfirmFn = Callable[[str], bool]

# Once mode prompts when removing more than this many arguments
ONCE_THRESHOLD = 3


class InteractiveMode(str, Enum):
    """Prompt modes.

    Attributes:
        NEVER: Never prompt before removal.
        ONCE: Prompt once before removing more than three arguments or
            when removing recursively.
        ALWAYS: Prompt before every removal.
    """

    NEVER = "never"
    ONCE = "once"
    ALWAYS = "always"


def never_confirm(prompt: str) -> bool:
    """Confirm function that declines everything (non-interactive use)."""
    return False


class InteractionPolicy:
    """Decides whether confirmation is needed and asks for it.

    Permanent deletion is always confirmed, whatever the mode, because
    it bypasses the trash.

    Args:
        mode: Prompt mode. None behaves like NEVER.
        confirm: Callable asking a yes/no question, True for yes.
    """

    def __init__(self, mode: InteractiveMode | None, confirm: ConfirmFn) -> None:
        self._mode = mode or InteractiveMode.NEVER
        self._confirm = confirm

    @property
    def mode(self) -> InteractiveMode:
        """Effective prompt mode."""
        return self._mode

    def needs_batch_confirmation(self, count: int, recursive: bool) -> bool:
        """Whether ONCE mode should ask before the batch starts."""
        return self._mode == InteractiveMode.ONCE and (count > ONCE_THRESHOLD or recursive)

    def confirm_batch(self, count: int, recursive: bool) -> bool:
        """Ask once for the whole batch when the mode requires it.

        Args:
            count: Number of requested arguments.
            recursive: Whether the removal is recursive.

        Returns:
            True to proceed, False to abort the batch.
        """
        if not self.needs_batch_confirmation(count, recursive):
            return True
        noun = "argument" if count == 1 else "arguments"
        suffix = " recursively?" if recursive else "?"
        return self._confirm(f"remove {count} {noun}{suffix}")

    def confirm_item(self, path: str, empty_dir: bool = False) -> bool:
        """Ask before removing a single item in ALWAYS mode.

        Args:
            path: Path about to be removed.
            empty_dir: True for the empty-directory removal branch.

        Returns:
            True to proceed with this item.
        """
        if self._mode != InteractiveMode.ALWAYS:
            return True
        if empty_dir:
            return self._confirm(f"remove empty directory '{path}'?")
        return self._confirm(f"remove '{path}'?")

    def confirm_permanent_delete(self, path: str, reason: str) -> bool:
        """Ask before deleting an item without a trash copy.

        Args:
            path: Path about to be deleted.
            reason: Why the trash cannot be used, shown to the user.

        Returns:
            True if the user accepted permanent deletion.
        """
        return self._confirm(f"{reason}\nremove '{path}' PERMANENTLY? This cannot be undone.")

    def confirm_dedup_delete(self, path: str) -> bool:
        """Ask before deleting a file whose identical copy is already trashed."""
        return self._confirm(
            f"an identical copy of '{path}' is already in the trash; "
            "delete this one instead of trashing it?"
        )
