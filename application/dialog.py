"""Modal cancel/confirm gate shared by the three delete flows."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, Optional, Tuple

from .signals import Signal


class DialogKind(Enum):
    NONE = "none"
    PROJECT_DELETE = "project_delete"
    TASK_DELETE = "task_delete"
    LOG_DELETE = "log_delete"


class DialogCursor(IntEnum):
    CANCEL = 0
    CONFIRM = 1


FLIP_KEYS: Tuple[str, ...] = ("left", "right", "tab", "s-tab", "h", "l")
CANCEL_KEYS: Tuple[str, ...] = ("escape", "q", "n")
ACCEPT_KEYS: Tuple[str, ...] = ("enter",)
CONFIRM_SHORTCUT_KEYS: Tuple[str, ...] = ("y",)


@dataclass
class ConfirmDialog:
    """Dialog descriptor: kind, binary cursor and the deferred action.

    ``action`` is bound to a specific entity when the dialog opens and runs at
    most once, only when the dialog is accepted on CONFIRM.
    """

    kind: DialogKind = DialogKind.NONE
    action: Optional[Callable[[], Signal]] = None
    subject: str = ""
    cursor: DialogCursor = DialogCursor.CANCEL
    on_close: Optional[Callable[[], None]] = field(default=None, repr=False)

    @property
    def is_open(self) -> bool:
        return self.kind is not DialogKind.NONE

    def open(
        self,
        kind: DialogKind,
        action: Callable[[], Signal],
        subject: str = "",
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        if kind is DialogKind.NONE:
            raise ValueError("cannot open a dialog of kind NONE")
        self.kind = kind
        self.action = action
        self.subject = subject
        self.cursor = DialogCursor.CANCEL
        self.on_close = on_close

    def flip(self) -> None:
        self.cursor = DialogCursor.CONFIRM if self.cursor is DialogCursor.CANCEL else DialogCursor.CANCEL

    def close(self) -> None:
        on_close = self.on_close
        self.kind = DialogKind.NONE
        self.action = None
        self.subject = ""
        self.cursor = DialogCursor.CANCEL
        self.on_close = None
        if on_close is not None:
            on_close()

    def cancel(self) -> Signal:
        self.close()
        return Signal.NONE

    def accept(self) -> Signal:
        """Close the dialog; run the bound action only when CONFIRM is selected."""
        action = self.action
        confirmed = self.cursor is DialogCursor.CONFIRM
        self.close()
        if confirmed and action is not None:
            return action()
        return Signal.NONE

    def handle_key(self, key: str) -> Signal:
        """Consume one key while open. Unknown keys are swallowed."""
        if not self.is_open:
            return Signal.NONE
        if key in FLIP_KEYS:
            self.flip()
            return Signal.NONE
        if key in CANCEL_KEYS:
            return self.cancel()
        if key in CONFIRM_SHORTCUT_KEYS:
            self.cursor = DialogCursor.CONFIRM
            return self.accept()
        if key in ACCEPT_KEYS:
            return self.accept()
        return Signal.NONE


__all__ = ["ConfirmDialog", "DialogCursor", "DialogKind"]
