"""Record form boundary: takes projected fields, emits save and close."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from record_console.browser.projection import ID_FIELD
from record_console.errors import PreconditionError
from record_console.schemas.browser import FieldDescriptor

logger = logging.getLogger(__name__)

SaveHandler = Callable[[dict[str, Any]], Awaitable[bool]]
CloseHandler = Callable[[], None]


@dataclass(slots=True)
class RecordForm:
    """Read-only or editable form over one set of field descriptors."""

    entity_label: str
    fields: list[FieldDescriptor]
    view_mode: bool
    on_save: SaveHandler
    on_close: CloseHandler

    @property
    def save_button_visible(self) -> bool:
        return not self.view_mode

    def id_value(self) -> Any:
        return next((field.value for field in self.fields if field.name == ID_FIELD), None)

    async def save(self, submitted: Any) -> bool:
        """Emit ``save`` with the submitted values and the record id from the descriptors."""

        if self.view_mode:
            raise PreconditionError("A read-only form cannot be saved.")
        if not isinstance(submitted, Mapping):
            logger.warning("record_form.save_ignored entity=%s reason=non_mapping_fields", self.entity_label)
            return False
        fields = {**submitted, ID_FIELD: self.id_value()}
        return await self.on_save(fields)

    def close(self) -> None:
        self.on_close()
