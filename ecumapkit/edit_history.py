"""Undo and redo of single-byte edits."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Edit:
    """A change of one byte at ``offset`` from ``old_value`` to ``new_value``."""

    offset: int
    old_value: int
    new_value: int

    def reversed(self) -> "Edit":
        return Edit(self.offset, self.new_value, self.old_value)


class EditHistory:
    """Undo and redo stacks of byte edits.

    An undone or redone edit is returned so that writing its ``old_value``
    at its ``offset`` applies it.
    """

    def __init__(self) -> None:
        self._undo: list[Edit] = []
        self._redo: list[Edit] = []

    def push_edit(self, offset: int, old_value: int, new_value: int) -> None:
        """Record an edit; edits that change nothing are ignored."""
        if old_value == new_value:
            return
        self._undo.append(Edit(offset, old_value, new_value))
        self.clear_redo()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> Edit:
        if not self._undo:
            raise IndexError("nothing to undo")
        edit = self._undo.pop()
        self._redo.append(edit.reversed())
        return edit

    def redo(self) -> Edit:
        if not self._redo:
            raise IndexError("nothing to redo")
        edit = self._redo.pop()
        self._undo.append(edit.reversed())
        return edit

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def clear_redo(self) -> None:
        self._redo.clear()

    @property
    def undo_count(self) -> int:
        return len(self._undo)

    @property
    def redo_count(self) -> int:
        return len(self._redo)