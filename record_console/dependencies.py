"""FastAPI dependencies."""

from fastapi import HTTPException, Request

from record_console.browser.controller import EntityBrowserController
from record_console.notifications import NotificationFeed


def get_controller(request: Request) -> EntityBrowserController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Browser is not started")
    return controller


def get_notification_feed(request: Request) -> NotificationFeed:
    return request.app.state.notification_feed
