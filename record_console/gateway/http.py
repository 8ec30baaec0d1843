"""HTTP gateway and metadata clients using stdlib HTTP."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from urllib import error as urllib_error
from urllib import parse as urllib_parse
from urllib import request as urllib_request

from pydantic import ValidationError

from record_console.errors import BrowserError, BrowserErrorKind, GatewayTransportError
from record_console.schemas.gateway import GatewayRequest, GatewayResponse
from record_console.schemas.metadata import MetadataBootstrap

CONNECTION_ALIAS_HEADER = "X-Connection-Alias"


@dataclass(slots=True)
class HttpRemoteGateway:
    """Maps gateway verbs onto HTTP requests against one collection endpoint."""

    base_url: str
    timeout_seconds: int = 30

    async def call(self, request: GatewayRequest) -> GatewayResponse:
        return await asyncio.to_thread(self._call_blocking, request)

    def build_url(self, request: GatewayRequest) -> str:
        params = {key: value for key, value in request.params.items() if value is not None}
        query = urllib_parse.urlencode(params)
        base = self.base_url.rstrip("/")
        return f"{base}?{query}" if query else base

    def _call_blocking(self, request: GatewayRequest) -> GatewayResponse:
        headers = {
            "Accept": "application/json",
            CONNECTION_ALIAS_HEADER: request.connection_alias,
        }
        data = None
        if request.body is not None:
            data = request.body.encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = urllib_request.Request(
            url=self.build_url(request),
            data=data,
            method=request.method,
            headers=headers,
        )
        try:
            with urllib_request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
                return GatewayResponse(status=str(resp.status), body=raw)
        except urllib_error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            return GatewayResponse(status=str(exc.code), body=detail)
        except urllib_error.URLError as exc:
            raise GatewayTransportError(f"Gateway request failed: {exc.reason}") from exc
        except OSError as exc:
            raise GatewayTransportError(f"Gateway request failed: {exc}") from exc


@dataclass(slots=True)
class HttpMetadataProvider:
    """Fetches the bootstrap payload from a JSON endpoint."""

    url: str
    timeout_seconds: int = 30

    async def fetch(self) -> MetadataBootstrap:
        return await asyncio.to_thread(self._fetch_blocking)

    def _fetch_blocking(self) -> MetadataBootstrap:
        req = urllib_request.Request(url=self.url, method="GET", headers={"Accept": "application/json"})
        try:
            with urllib_request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
        except urllib_error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise BrowserError(
                BrowserErrorKind.BOOTSTRAP,
                f"Metadata HTTP {exc.code}: {detail}",
                status=str(exc.code),
            ) from exc
        except urllib_error.URLError as exc:
            raise BrowserError(BrowserErrorKind.BOOTSTRAP, f"Metadata request failed: {exc.reason}") from exc

        try:
            return MetadataBootstrap.model_validate(json.loads(raw))
        except (ValidationError, json.JSONDecodeError) as exc:
            raise BrowserError(BrowserErrorKind.BOOTSTRAP, "Metadata response was invalid") from exc
