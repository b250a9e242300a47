"""Undo/redo infrastructure."""

from abc import ABC, abstractmethod
from typing import Callable

from PySide6.QtCore import QObject, Signal


class Command(ABC):
    """An undoable edit of the schematic."""

    @abstractmethod
    def execute(self) -> None:
        """Apply (or re-apply) the edit."""
        pass

    @abstractmethod
    def undo(self) -> None:
        """Revert the edit."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short label shown in the Undo/Redo menu."""
        pass

    def can_merge(self, other: "Command") -> bool:
        """Check if ``other`` can be folded into this command."""
        return False

    def merge(self, other: "Command") -> None:
        """Fold ``other`` into this command."""
        pass


class CommandStack(QObject):
    """
    Bounded history of commands supporting undo/redo.

    Commands are either run through ``execute`` or, when the edit was
    already applied live (a finished drag), recorded with ``push``.

    Signals:
        can_undo_changed: Emitted when undo availability changes
        can_redo_changed: Emitted when redo availability changes
        stack_changed: Emitted after any change to the history
    """

    can_undo_changed = Signal(bool)
    can_redo_changed = Signal(bool)
    stack_changed = Signal()

    def __init__(self, max_size: int = 50, parent: QObject | None = None):
        super().__init__(parent)
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []
        self._max_size = max_size
        self._clean_index: int | None = 0
        self._callbacks: list[Callable[[], None]] = []

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    @property
    def is_clean(self) -> bool:
        """True when the history is back at the last saved point."""
        return self._clean_index == len(self._undo_stack)

    @property
    def undo_text(self) -> str:
        if self._undo_stack:
            return f"Undo {self._undo_stack[-1].description}"
        return "Undo"

    @property
    def redo_text(self) -> str:
        if self._redo_stack:
            return f"Redo {self._redo_stack[-1].description}"
        return "Redo"

    def execute(self, command: Command, merge: bool = True) -> None:
        """
        Run a command and record it.

        Args:
            command: The command to execute
            merge: If True, try to fold it into the previous command
        """
        command.execute()
        self._record(command, merge)

    def push(self, command: Command, merge: bool = False) -> None:
        """Record a command whose effect is already in place."""
        self._record(command, merge)

    def _record(self, command: Command, merge: bool) -> None:
        # A saved point on the discarded redo branch can never be reached again
        if self._redo_stack and self._clean_index is not None and self._clean_index > len(self._undo_stack):
            self._clean_index = None
        self._redo_stack.clear()

        if merge and self._undo_stack and self._undo_stack[-1].can_merge(command):
            self._undo_stack[-1].merge(command)
        else:
            self._undo_stack.append(command)

            if len(self._undo_stack) > self._max_size:
                self._undo_stack.pop(0)
                if self._clean_index is not None:
                    self._clean_index = self._clean_index - 1 if self._clean_index > 0 else None

        self._emit_changes()

    def undo(self) -> Command | None:
        """Undo the last command; returns it, or None if history is empty."""
        if not self.can_undo:
            return None

        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)

        self._emit_changes()
        return command

    def redo(self) -> Command | None:
        """Redo the last undone command; returns it, or None."""
        if not self.can_redo:
            return None

        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)

        self._emit_changes()
        return command

    def clear(self) -> None:
        """Forget all history."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._clean_index = 0
        self._emit_changes()

    def set_clean(self) -> None:
        """Mark the current point as saved."""
        self._clean_index = len(self._undo_stack)

    def _emit_changes(self) -> None:
        self.can_undo_changed.emit(self.can_undo)
        self.can_redo_changed.emit(self.can_redo)
        self.stack_changed.emit()
        for callback in self._callbacks:
            callback()

    def add_change_callback(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` after every history change."""
        self._callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)
