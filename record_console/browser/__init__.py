"""Entity browser core: projection, pagination, modal lifecycle and orchestration."""

from record_console.browser.controller import (
    EntityBrowserController,
    SessionStatus,
    build_submit_payload,
)
from record_console.browser.modal import ModalMode, ModalState
from record_console.browser.pagination import PageState
from record_console.browser.projection import fetch_field_names, project_columns, project_form_fields
from record_console.browser.record_form import RecordForm

__all__ = [
    "EntityBrowserController",
    "ModalMode",
    "ModalState",
    "PageState",
    "RecordForm",
    "SessionStatus",
    "build_submit_payload",
    "fetch_field_names",
    "project_columns",
    "project_form_fields",
]
