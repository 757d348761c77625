"""
seating/history.py

Undo/redo for roster edits. Every edit is a Command holding the action and
its inverse.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass
class Command:
    label: str
    forward: Callable[[], None]
    inverse: Callable[[], None]


class CommandHistory:
    def __init__(self):
        self._undo: List[Command] = []
        self._redo: List[Command] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def execute(self, command: Command) -> Command:
        """Runs the command and records it. A new edit discards the redo stack."""
        command.forward()
        self._undo.append(command)
        self._redo.clear()
        return command

    def undo(self) -> Optional[Command]:
        if not self._undo:
            return None
        command = self._undo.pop()
        command.inverse()
        self._redo.append(command)
        return command

    def redo(self) -> Optional[Command]:
        if not self._redo:
            return None
        command = self._redo.pop()
        command.forward()
        self._undo.append(command)
        return command

    def clear(self):
        self._undo.clear()
        self._redo.clear()

    def labels(self) -> List[str]:
        """Labels of undoable commands, oldest first."""
        return [c.label for c in self._undo]
