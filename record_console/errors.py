"""Typed failures raised and surfaced by the record console."""

from __future__ import annotations

from enum import Enum


class BrowserErrorKind(str, Enum):
    """Where a failure originated."""

    BOOTSTRAP = "bootstrap"
    GATEWAY = "gateway"
    TRANSPORT = "transport"
    PRECONDITION = "precondition"


class BrowserError(RuntimeError):
    """Failure carrying a structured kind and a user-facing message."""

    def __init__(self, kind: BrowserErrorKind, message: str, *, status: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.kind.value} [{self.status}]: {self.message}"
        return f"{self.kind.value}: {self.message}"


class GatewayTransportError(BrowserError):
    """Raised when a gateway call fails before a status code is available."""

    def __init__(self, message: str) -> None:
        super().__init__(BrowserErrorKind.TRANSPORT, message)


class PreconditionError(BrowserError):
    """Raised when an operation is requested from a state that does not allow it."""

    def __init__(self, message: str) -> None:
        super().__init__(BrowserErrorKind.PRECONDITION, message)


class RecordNotCachedError(PreconditionError):
    """Raised when a row action names an id that is not on the current page."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record {record_id} is not loaded in the current page.")
        self.record_id = record_id


class ModalTransitionError(PreconditionError):
    """Raised on an illegal modal state transition."""
