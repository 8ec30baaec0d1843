"""Entity browser orchestration against the remote record gateway."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from time import perf_counter
from typing import Any

from record_console.browser.modal import ModalMode, ModalState
from record_console.browser.pagination import PageState
from record_console.browser.projection import (
    ID_FIELD,
    fetch_field_names,
    project_columns,
    project_form_fields,
)
from record_console.browser.record_form import RecordForm
from record_console.config import Settings
from record_console.errors import (
    BrowserError,
    BrowserErrorKind,
    GatewayTransportError,
    PreconditionError,
    RecordNotCachedError,
)
from record_console.gateway.base import MetadataProvider, RemoteGateway, read_error, read_records
from record_console.notifications import LoggingNotifier, Notification, Notifier
from record_console.schemas.browser import (
    BrowserView,
    ColumnDescriptor,
    EntityOption,
    FieldDescriptor,
    ModalView,
    Record,
)
from record_console.schemas.gateway import GatewayMethod, GatewayRequest, GatewayResponse
from record_console.schemas.metadata import EntityType

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[Record], Awaitable[bool]]

SUBMIT_VERBS: dict[ModalMode, GatewayMethod] = {
    ModalMode.CREATE: "POST",
    ModalMode.EDIT: "PATCH",
}


class SessionStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DEGRADED = "degraded"


def build_submit_payload(
    descriptors: list[FieldDescriptor],
    submitted: Mapping[str, Any],
    mode: ModalMode,
    draft: Record | None,
) -> Record:
    """Collect submitted values for projected fields and pin the record id.

    Edits always carry the draft's id so a submission cannot retarget another
    record; creates never carry one.
    """

    payload = {field.name: submitted[field.name] for field in descriptors if field.name in submitted}
    if mode is ModalMode.EDIT:
        payload[ID_FIELD] = draft.get(ID_FIELD) if draft is not None else None
    else:
        payload.pop(ID_FIELD, None)
    return payload


class EntityBrowserController:
    """Owns page, search, modal and record cache state for one browser session."""

    def __init__(
        self,
        metadata_provider: MetadataProvider,
        gateway: RemoteGateway,
        *,
        notifier: Notifier | None = None,
        page_limit: int = 5,
        list_group_by: str | None = None,
        open_record_column: bool = True,
        keep_modal_open_on_failure: bool = False,
        confirm_delete: ConfirmDelete | None = None,
    ) -> None:
        self._metadata_provider = metadata_provider
        self._gateway = gateway
        self._notifier = notifier or LoggingNotifier()
        self._list_group_by = list_group_by
        self._open_record_column = open_record_column
        self._keep_modal_open_on_failure = keep_modal_open_on_failure
        self._confirm_delete = confirm_delete

        self.page = PageState(limit=page_limit)
        self.modal = ModalState()
        self._status = SessionStatus.UNINITIALIZED
        self._entity_types: dict[str, EntityType] = {}
        self._active: EntityType | None = None
        self._connection_alias = ""
        self._records: list[Record] = []
        self._in_flight = 0
        self._list_generation = 0

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        metadata_provider: MetadataProvider,
        gateway: RemoteGateway,
        *,
        notifier: Notifier | None = None,
        confirm_delete: ConfirmDelete | None = None,
    ) -> "EntityBrowserController":
        return cls(
            metadata_provider,
            gateway,
            notifier=notifier,
            page_limit=settings.page_limit,
            list_group_by=settings.list_group_by,
            open_record_column=settings.open_record_column,
            keep_modal_open_on_failure=settings.keep_modal_open_on_failure,
            confirm_delete=confirm_delete,
        )

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def entity_types(self) -> list[EntityType]:
        return list(self._entity_types.values())

    @property
    def active_entity(self) -> EntityType | None:
        return self._active

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    @property
    def disable_next(self) -> bool:
        return self.page.disable_next

    @property
    def disable_previous(self) -> bool:
        return self.page.disable_previous

    def columns(self) -> list[ColumnDescriptor]:
        if self._active is None:
            return []
        return project_columns(self._active, open_record_column=self._open_record_column)

    def form_fields(self) -> list[FieldDescriptor]:
        if self._active is None:
            return []
        return project_form_fields(self._active, self.modal.draft, self.modal.mode)

    async def initialize(self) -> None:
        """Load the entity catalog once and list the first entity type."""

        if self._status is not SessionStatus.UNINITIALIZED:
            raise PreconditionError("Browser is already initialized.")

        started = perf_counter()
        with self._loading():
            try:
                bootstrap = await self._metadata_provider.fetch()
                entity_types = bootstrap.entity_types()
            except Exception as exc:
                logger.exception("browser.bootstrap_failed elapsed_ms=%.2f", (perf_counter() - started) * 1000.0)
                message = exc.message if isinstance(exc, BrowserError) else (str(exc) or "Metadata request failed")
                self._status = SessionStatus.DEGRADED
                self._notify_error(BrowserError(BrowserErrorKind.BOOTSTRAP, message))
                return

            self._entity_types = {entity.name: entity for entity in entity_types}
            self._connection_alias = bootstrap.connection_alias
            self._status = SessionStatus.READY
            logger.info(
                "browser.bootstrap_timing entity_types=%d total_ms=%.2f",
                len(self._entity_types),
                (perf_counter() - started) * 1000.0,
            )
            if bootstrap.entity_catalog:
                self._active = self._entity_types[bootstrap.entity_catalog[0]]
                await self.list_records()

    async def list_records(self) -> bool:
        """Fetch the current page; returns whether the response was applied successfully."""

        entity = self._require_active()
        self._list_generation += 1
        generation = self._list_generation
        request = self._request("GET", self._list_params(entity))

        started = perf_counter()
        with self._loading():
            try:
                response = await self._call(request)
                if not response.ok:
                    raise read_error(response)
                records = read_records(response)
            except BrowserError as exc:
                if self._is_stale(generation, request):
                    return False
                self._set_records([])
                self._notify_error(exc)
                return False

        if self._is_stale(generation, request):
            return False
        if len(records) > self.page.limit:
            logger.warning(
                "browser.list_overflow entity=%s rows=%d limit=%d",
                entity.name,
                len(records),
                self.page.limit,
            )
            records = records[: self.page.limit]
        self._set_records(records)
        logger.info(
            "browser.list_timing entity=%s offset=%d rows=%d total_ms=%.2f",
            entity.name,
            request.params["offset"],
            len(records),
            (perf_counter() - started) * 1000.0,
        )
        return True

    def set_search(self, value: str | None) -> None:
        self.page.set_search(value)

    async def reset_and_search(self) -> bool:
        self._require_active()
        self.page.reset()
        return await self.list_records()

    async def next_page(self) -> bool:
        self._require_active()
        self.page.advance()
        return await self.list_records()

    async def previous_page(self) -> bool:
        self._require_active()
        self.page.retreat()
        return await self.list_records()

    async def change_entity_type(self, name: str) -> bool:
        """Switch entity type, reset pagination and search, then list it."""

        self._require_ready()
        entity = self._entity_types.get(name)
        if entity is None:
            raise PreconditionError(f"Unknown entity type: {name}")
        self.modal.close()
        self._active = entity
        self.page.reset(clear_search=True)
        self._set_records([])
        return await self.list_records()

    async def delete_record(self, record_id: str) -> bool:
        """Delete one cached record and splice it out of the page on success."""

        entity = self._require_active()
        record = self._find_cached(record_id)
        if self._confirm_delete is not None and not await self._confirm_delete(record):
            logger.info("browser.delete_declined entity=%s record_id=%s", entity.name, record_id)
            return False

        request = self._request("DELETE", {"entity": entity.name, ID_FIELD: record[ID_FIELD]})
        with self._loading():
            try:
                response = await self._call(request)
                if not response.ok:
                    raise read_error(response)
            except BrowserError as exc:
                self._notify_error(exc)
                return False

        self._set_records([row for row in self._records if row is not record])
        self._notifier.notify(
            Notification(title="Record was deleted", variant="success", message=f"{entity.name} {record_id}")
        )
        return True

    def open_create(self) -> None:
        self._require_active()
        self.modal.open_create()

    def open_edit(self, record_id: str) -> None:
        self._require_active()
        self.modal.open_edit(self._find_cached(record_id))

    def open_view(self, record_id: str) -> None:
        self._require_active()
        self.modal.open_view(self._find_cached(record_id))

    def close_modal(self) -> None:
        self.modal.close()

    async def handle_row_action(self, action: str, record_id: str) -> None:
        """Route a table row action to its operation."""

        if action == "delete":
            await self.delete_record(record_id)
        elif action == "edit":
            self.open_edit(record_id)
        elif action == "view":
            self.open_view(record_id)
        else:
            raise PreconditionError(f"Unhandled row action: {action}")

    async def submit(self, fields: Mapping[str, Any]) -> bool:
        """Send the form as an insert or update, refetch on success, then close the form."""

        entity = self._require_active()
        mode = self.modal.mode
        method = SUBMIT_VERBS.get(mode)
        if method is None:
            raise PreconditionError(f"Cannot submit the form in {mode.value} mode.")

        payload = build_submit_payload(self.form_fields(), fields, mode, self.modal.draft)
        request = self._request(method, {"entity": entity.name}, body=json.dumps([payload], default=str))

        # The form or entity type may change while the request is pending; only
        # the form that was submitted is closed and only its page is refreshed.
        modal_generation = self.modal.generation
        succeeded = False
        try:
            with self._loading():
                try:
                    response = await self._call(request)
                    if not response.ok:
                        raise read_error(response)
                    saved = read_records(response) if mode is ModalMode.CREATE else []
                except BrowserError as exc:
                    self._notify_error(exc)
                    return False

                succeeded = True
                title = "Record was created" if mode is ModalMode.CREATE else "Record was updated"
                self._notifier.notify(Notification(title=title, variant="success", message=entity.name))
                if self._active is not entity:
                    logger.info("browser.submit_refresh_skipped entity=%s active=%s", entity.name, self._active.name)
                    return True
                if saved:
                    self._set_records([*self._records, *saved])
                await self.list_records()
                return True
        finally:
            if self.modal.generation == modal_generation and (succeeded or not self._keep_modal_open_on_failure):
                self.modal.close()

    def form(self) -> RecordForm:
        """Return the form renderer bound to this controller's modal."""

        return RecordForm(
            entity_label=self._active.name if self._active else "",
            fields=self.form_fields(),
            view_mode=self.modal.view_mode,
            on_save=self.submit,
            on_close=self.close_modal,
        )

    def view(self) -> BrowserView:
        header = self._active.name if self._active else ""
        return BrowserView(
            header=header,
            status=self._status.value,
            is_loading=self.is_loading,
            entity_options=[EntityOption(label=name, value=name) for name in self._entity_types],
            active_entity=header,
            search_string=self.page.search_string,
            offset=self.page.offset,
            limit=self.page.limit,
            columns=self.columns(),
            records=self.records,
            show_table=bool(self._records),
            disable_previous=self.disable_previous,
            disable_next=self.disable_next,
            modal=ModalView(
                header=header,
                fields=self.form_fields(),
                view_mode=self.modal.view_mode,
                visible=self.modal.visible,
                save_visible=self.modal.save_visible,
            ),
        )

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    async def _call(self, request: GatewayRequest) -> GatewayResponse:
        try:
            return await self._gateway.call(request)
        except BrowserError:
            raise
        except Exception as exc:
            logger.exception(
                "browser.gateway_call_failed method=%s entity=%s",
                request.method,
                request.params.get("entity"),
            )
            raise GatewayTransportError(str(exc) or exc.__class__.__name__) from exc

    def _request(
        self,
        method: GatewayMethod,
        params: dict[str, Any],
        *,
        body: str | None = None,
    ) -> GatewayRequest:
        return GatewayRequest(method=method, connection_alias=self._connection_alias, params=params, body=body)

    def _list_params(self, entity: EntityType) -> dict[str, Any]:
        params: dict[str, Any] = {
            "entity": entity.name,
            "offset": self.page.offset,
            "limit": self.page.limit,
            "searchString": self.page.search_string,
            "fields": ",".join(fetch_field_names(entity)),
        }
        if self._list_group_by:
            params["groupBy"] = self._list_group_by
        return params

    def _is_stale(self, generation: int, request: GatewayRequest) -> bool:
        if generation == self._list_generation:
            return False
        logger.info(
            "browser.list_stale_discarded entity=%s offset=%s generation=%d latest=%d",
            request.params.get("entity"),
            request.params.get("offset"),
            generation,
            self._list_generation,
        )
        return True

    def _set_records(self, records: list[Record]) -> None:
        self._records = records
        self.page.record_page(len(records))

    def _find_cached(self, record_id: str) -> Record:
        # Route ids arrive as text; gateways may return numeric ids.
        for row in self._records:
            if ID_FIELD in row and str(row[ID_FIELD]) == str(record_id):
                return row
        raise RecordNotCachedError(record_id)

    def _require_ready(self) -> None:
        if self._status is not SessionStatus.READY:
            raise PreconditionError(f"Browser is {self._status.value}; initialize it first.")

    def _require_active(self) -> EntityType:
        self._require_ready()
        if self._active is None:
            raise PreconditionError("No entity type is selected.")
        return self._active

    def _notify_error(self, exc: BrowserError) -> None:
        logger.warning(
            "browser.operation_failed kind=%s status=%s message=%s",
            exc.kind.value,
            exc.status,
            exc.message,
        )
        self._notifier.notify(Notification(title="ERROR", variant="error", message=exc.message))
