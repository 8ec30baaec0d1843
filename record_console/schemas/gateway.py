"""Wire schemas for the remote record gateway."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

GatewayMethod = Literal["GET", "POST", "PATCH", "DELETE"]
SUCCESS_STATUS = "200"


class GatewayRequest(BaseModel):
    """One verb against a named entity collection."""

    method: GatewayMethod
    connection_alias: str
    params: dict[str, Any] = Field(default_factory=dict)
    body: str | None = None


class GatewayErrorItem(BaseModel):
    """Structured error object returned by the gateway on failure."""

    model_config = ConfigDict(extra="allow")

    message: str
    error_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("errorCode", "error_code"),
    )


class GatewayResponse(BaseModel):
    """Status code plus a JSON-encoded (or already decoded) array body."""

    status: str
    body: Any = None

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS_STATUS
