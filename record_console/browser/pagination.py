"""Offset/limit pagination and search state."""

from __future__ import annotations

from dataclasses import dataclass

from record_console.errors import PreconditionError


@dataclass(slots=True)
class PageState:
    """Current page window and search string for one entity type."""

    limit: int
    offset: int = 0
    search_string: str = ""
    last_page_size: int = 0

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError("limit must be positive")

    @property
    def disable_previous(self) -> bool:
        return self.offset <= 0

    @property
    def disable_next(self) -> bool:
        return self.last_page_size < self.limit

    def set_search(self, value: str | None) -> None:
        self.search_string = (value or "").strip()

    def reset(self, *, clear_search: bool = False) -> None:
        self.offset = 0
        if clear_search:
            self.search_string = ""

    def advance(self) -> None:
        if self.disable_next:
            raise PreconditionError("Already on the last page.")
        self.offset += self.limit

    def retreat(self) -> None:
        if self.disable_previous:
            raise PreconditionError("Already on the first page.")
        self.offset = max(0, self.offset - self.limit)

    def record_page(self, size: int) -> None:
        self.last_page_size = size
