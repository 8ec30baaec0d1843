"""Browser action routes: navigation, row actions and form events."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Path

from record_console.browser.controller import EntityBrowserController
from record_console.dependencies import get_controller, get_notification_feed
from record_console.errors import BrowserError, RecordNotCachedError
from record_console.notifications import NotificationFeed
from record_console.schemas.browser import (
    BrowserView,
    EntitySelectRequest,
    FormSaveRequest,
    NotificationRead,
    SearchRequest,
)
from record_console.schemas.common import ApiResponse

RowActionParam = Literal["delete", "edit", "view"]

router = APIRouter(prefix="/browser")


def _http_error(exc: BrowserError) -> HTTPException:
    if isinstance(exc, RecordNotCachedError):
        return HTTPException(status_code=404, detail=exc.message)
    return HTTPException(status_code=409, detail=exc.message)


@router.get("", response_model=ApiResponse[BrowserView])
async def get_browser(
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    """Return the current browser view model."""

    return ApiResponse(data=controller.view())


@router.post("/entity", response_model=ApiResponse[BrowserView])
async def select_entity(
    payload: EntitySelectRequest,
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    """Switch the active entity type and list its first page."""

    try:
        await controller.change_entity_type(payload.name)
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/search", response_model=ApiResponse[BrowserView])
async def search(
    payload: SearchRequest,
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    """Store the search string and list from the first page."""

    try:
        controller.set_search(payload.search_string)
        await controller.reset_and_search()
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/next", response_model=ApiResponse[BrowserView])
async def next_page(
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    try:
        await controller.next_page()
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/previous", response_model=ApiResponse[BrowserView])
async def previous_page(
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    try:
        await controller.previous_page()
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/records/new", response_model=ApiResponse[BrowserView])
async def new_record(
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    """Open an empty create form."""

    try:
        controller.open_create()
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/rows/{record_id}/{action}", response_model=ApiResponse[BrowserView])
async def row_action(
    action: RowActionParam,
    record_id: str = Path(..., min_length=1),
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    """Delete, edit or view one row of the current page."""

    try:
        await controller.handle_row_action(action, record_id)
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/form/save", response_model=ApiResponse[BrowserView])
async def save_form(
    payload: FormSaveRequest,
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    """Submit the open form as an insert or update."""

    try:
        await controller.form().save(payload.fields)
    except BrowserError as exc:
        raise _http_error(exc) from exc
    return ApiResponse(data=controller.view())


@router.post("/form/close", response_model=ApiResponse[BrowserView])
async def close_form(
    controller: EntityBrowserController = Depends(get_controller),
) -> ApiResponse[BrowserView]:
    controller.form().close()
    return ApiResponse(data=controller.view())


@router.get("/notifications", response_model=ApiResponse[list[NotificationRead]])
async def drain_notifications(
    feed: NotificationFeed = Depends(get_notification_feed),
) -> ApiResponse[list[NotificationRead]]:
    """Return and clear notifications raised since the last call."""

    return ApiResponse(data=[NotificationRead.model_validate(item) for item in feed.drain()])
