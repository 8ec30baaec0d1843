"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from record_console import __version__
from record_console.browser.controller import EntityBrowserController
from record_console.config import Settings, get_settings
from record_console.gateway.base import MetadataProvider, RemoteGateway
from record_console.gateway.http import HttpMetadataProvider, HttpRemoteGateway
from record_console.gateway.memory import build_demo_session
from record_console.notifications import NotificationFeed
from record_console.routers import browser

logger = logging.getLogger(__name__)


def build_gateways(settings: Settings) -> tuple[MetadataProvider, RemoteGateway]:
    """Return the metadata provider and gateway selected by ``gateway_mode``."""

    if settings.gateway_mode == "memory":
        return build_demo_session()
    return (
        HttpMetadataProvider(url=settings.metadata_url, timeout_seconds=settings.gateway_timeout_seconds),
        HttpRemoteGateway(base_url=settings.gateway_base_url, timeout_seconds=settings.gateway_timeout_seconds),
    )


def create_app(
    settings: Settings | None = None,
    *,
    metadata_provider: MetadataProvider | None = None,
    gateway: RemoteGateway | None = None,
) -> FastAPI:
    """Build the console API; explicit gateways override ``gateway_mode``."""

    active_settings = settings or get_settings()
    level = active_settings.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logging.getLogger().setLevel(level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        provider, record_gateway = metadata_provider, gateway
        if provider is None or record_gateway is None:
            default_provider, default_gateway = build_gateways(active_settings)
            provider = provider or default_provider
            record_gateway = record_gateway or default_gateway

        feed = NotificationFeed(max_items=active_settings.notification_buffer_size)
        controller = EntityBrowserController.from_settings(
            active_settings,
            provider,
            record_gateway,
            notifier=feed,
        )
        app.state.notification_feed = feed
        app.state.controller = controller
        await controller.initialize()
        logger.info("console.started status=%s gateway_mode=%s", controller.status.value, active_settings.gateway_mode)
        yield
        app.state.controller = None

    app = FastAPI(title=active_settings.app_name, version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=active_settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(browser.router, tags=["browser"])

    @app.get("/health")
    def health() -> dict[str, str]:
        """Simple health check endpoint."""

        return {"status": "ok"}

    return app


app = create_app()
