"""Schema projection from entity metadata to table columns and form fields."""

from __future__ import annotations

from record_console.browser.modal import ModalMode
from record_console.schemas.browser import ColumnDescriptor, FieldDescriptor, Record, RowAction
from record_console.schemas.metadata import EntityType

ID_FIELD = "Id"

ROW_ACTIONS: tuple[RowAction, ...] = (
    RowAction(label="Delete", name="delete"),
    RowAction(label="Edit", name="edit"),
    RowAction(label="View", name="view"),
)


def project_columns(entity_type: EntityType, *, open_record_column: bool = True) -> list[ColumnDescriptor]:
    """One column per list field plus a trailing row-action column.

    With ``open_record_column`` the first column renders as a button that opens
    the row for editing.
    """

    columns = [
        ColumnDescriptor(
            label=name,
            field_name=name,
            type="button" if open_record_column and index == 0 else "text",
            click_action="edit" if open_record_column and index == 0 else None,
        )
        for index, name in enumerate(entity_type.list_fields)
    ]
    columns.append(ColumnDescriptor(type="action", row_actions=ROW_ACTIONS))
    return columns


def project_form_fields(
    entity_type: EntityType,
    draft: Record | None,
    mode: ModalMode,
) -> list[FieldDescriptor]:
    """One descriptor per form field plus a hidden trailing ``Id`` descriptor."""

    populate = draft is not None and mode in (ModalMode.EDIT, ModalMode.VIEW)
    fields = [
        FieldDescriptor(
            name=name,
            label=name,
            value=draft.get(name) if populate else None,
        )
        for name in entity_type.form_fields
        if name != ID_FIELD
    ]
    fields.append(
        FieldDescriptor(
            name=ID_FIELD,
            label=ID_FIELD,
            value=draft.get(ID_FIELD) if draft is not None else None,
            visibility="hidden",
        )
    )
    return fields


def fetch_field_names(entity_type: EntityType) -> list[str]:
    """Deduplicated union of form and list fields, first occurrence wins."""

    return list(dict.fromkeys((*entity_type.form_fields, *entity_type.list_fields)))
