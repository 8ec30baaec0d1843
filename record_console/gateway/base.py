"""Gateway protocols and response decoding at the gateway boundary."""

from __future__ import annotations

import json
from typing import Any, Protocol

from pydantic import ValidationError

from record_console.errors import BrowserError, BrowserErrorKind, GatewayTransportError
from record_console.schemas.browser import Record
from record_console.schemas.gateway import GatewayErrorItem, GatewayRequest, GatewayResponse
from record_console.schemas.metadata import MetadataBootstrap


class RemoteGateway(Protocol):
    """Protocol for pluggable record gateways."""

    async def call(self, request: GatewayRequest) -> GatewayResponse:
        """Execute one verb and return the raw status/body pair."""


class MetadataProvider(Protocol):
    """Protocol for the one-shot metadata bootstrap call."""

    async def fetch(self) -> MetadataBootstrap:
        """Return the entity catalog, field metadata and connection alias."""


def decode_body(response: GatewayResponse) -> Any:
    """Return the response body decoded from JSON when it arrives as text."""

    body = response.body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        if not body.strip():
            return []
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise GatewayTransportError("Gateway response body is not valid JSON") from exc
    if body is None:
        return []
    return body


def read_records(response: GatewayResponse) -> list[Record]:
    """Decode a success body into a list of records."""

    decoded = decode_body(response)
    if not isinstance(decoded, list) or not all(isinstance(row, dict) for row in decoded):
        raise GatewayTransportError("Gateway response body is not an array of records")
    return [dict(row) for row in decoded]


def read_error(response: GatewayResponse) -> BrowserError:
    """Build the typed error for a non-success response from its first error object."""

    fallback = f"Gateway returned status {response.status}"
    try:
        decoded = decode_body(response)
    except GatewayTransportError:
        return BrowserError(BrowserErrorKind.GATEWAY, fallback, status=response.status)

    first: Any = None
    if isinstance(decoded, list) and decoded:
        first = decoded[0]
    elif isinstance(decoded, dict):
        first = decoded
    if first is None:
        return BrowserError(BrowserErrorKind.GATEWAY, fallback, status=response.status)
    try:
        item = GatewayErrorItem.model_validate(first)
    except ValidationError:
        return BrowserError(BrowserErrorKind.GATEWAY, fallback, status=response.status)
    return BrowserError(BrowserErrorKind.GATEWAY, item.message or fallback, status=response.status)
