"""Render-ready projections and the aggregated browser view model."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Record = dict[str, Any]
ColumnType = Literal["text", "button", "action"]
Visibility = Literal["visible", "hidden"]


class RowAction(BaseModel):
    """One per-row action offered by the table."""

    model_config = ConfigDict(frozen=True)

    label: str
    name: Literal["delete", "edit", "view"]


class ColumnDescriptor(BaseModel):
    """One table column, optionally carrying row actions."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    field_name: str | None = None
    type: ColumnType = "text"
    click_action: Literal["edit", "view"] | None = None
    row_actions: tuple[RowAction, ...] = ()


class FieldDescriptor(BaseModel):
    """One projected form field."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    value: Any = None
    visibility: Visibility = "visible"

    @property
    def hidden(self) -> bool:
        return self.visibility == "hidden"


class EntityOption(BaseModel):
    """Entity selector option."""

    label: str
    value: str


class ModalView(BaseModel):
    """Modal form state handed to the form renderer."""

    header: str
    fields: list[FieldDescriptor]
    view_mode: bool
    visible: bool
    save_visible: bool


class BrowserView(BaseModel):
    """Everything the presentation layer needs to draw the browser."""

    header: str
    status: Literal["uninitialized", "ready", "degraded"]
    is_loading: bool
    entity_options: list[EntityOption]
    active_entity: str
    search_string: str
    offset: int
    limit: int
    columns: list[ColumnDescriptor]
    records: list[Record]
    show_table: bool
    disable_previous: bool
    disable_next: bool
    modal: ModalView


class EntitySelectRequest(BaseModel):
    """Entity selector change."""

    name: str = Field(min_length=1)


class SearchRequest(BaseModel):
    """Search box submission."""

    search_string: str = ""


class FormSaveRequest(BaseModel):
    """Form renderer `save` event payload."""

    fields: dict[str, Any]


class NotificationRead(BaseModel):
    """Notification as delivered to the presentation layer."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    variant: Literal["success", "error", "info"]
    message: str
