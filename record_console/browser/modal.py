"""Modal lifecycle for the create/edit/view record form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from record_console.errors import ModalTransitionError
from record_console.schemas.browser import Record


class ModalMode(str, Enum):
    NONE = "none"
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"


@dataclass(slots=True)
class ModalState:
    """Tracks the open form and its draft record.

    Legal transitions are ``none -> create|edit|view`` and back to ``none``.
    The draft is the cached record itself; projections read from it and never
    write to it.
    ``generation`` changes on every open and every close of an open form.
    """

    mode: ModalMode = ModalMode.NONE
    draft: Record | None = None
    generation: int = 0

    @property
    def visible(self) -> bool:
        return self.mode is not ModalMode.NONE

    @property
    def view_mode(self) -> bool:
        return self.mode is ModalMode.VIEW

    @property
    def save_visible(self) -> bool:
        return self.visible and self.mode is not ModalMode.VIEW

    def open_create(self) -> None:
        self._open(ModalMode.CREATE, None)

    def open_edit(self, record: Record) -> None:
        self._open(ModalMode.EDIT, record)

    def open_view(self, record: Record) -> None:
        self._open(ModalMode.VIEW, record)

    def close(self) -> None:
        if self.mode is not ModalMode.NONE:
            self.generation += 1
        self.mode = ModalMode.NONE
        self.draft = None

    def _open(self, mode: ModalMode, record: Record | None) -> None:
        if self.mode is not ModalMode.NONE:
            raise ModalTransitionError(f"Cannot open {mode.value} form while {self.mode.value} form is open.")
        self.generation += 1
        self.mode = mode
        self.draft = record
