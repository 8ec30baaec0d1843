"""In-process gateway used for local runs, demos and tests."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any

from record_console.schemas.browser import Record
from record_console.schemas.gateway import GatewayRequest, GatewayResponse
from record_console.schemas.metadata import MetadataBootstrap


def _error(status: str, message: str) -> GatewayResponse:
    return GatewayResponse(status=status, body=json.dumps([{"message": message}]))


def _ok(rows: list[Record]) -> GatewayResponse:
    return GatewayResponse(status="200", body=json.dumps(rows))


@dataclass(slots=True)
class InMemoryGateway:
    """Dictionary-backed record store speaking the gateway protocol."""

    tables: dict[str, list[Record]] = field(default_factory=dict)
    id_prefix: str = "rec"
    requests: list[GatewayRequest] = field(default_factory=list)
    next_id: int = 1

    async def call(self, request: GatewayRequest) -> GatewayResponse:
        self.requests.append(request)
        entity = request.params.get("entity")
        if entity not in self.tables:
            return _error("404", f"Unknown entity: {entity}")
        rows = self.tables[entity]
        if request.method == "GET":
            return self._list(rows, request.params)
        if request.method == "DELETE":
            return self._delete(rows, request.params.get("Id"))
        payload = self._payload(request.body)
        if payload is None:
            return _error("400", "Request body must be an array with one record object")
        if request.method == "POST":
            return self._insert(rows, payload)
        return self._update(rows, payload)

    def _list(self, rows: list[Record], params: dict[str, Any]) -> GatewayResponse:
        try:
            offset = max(0, int(params.get("offset", 0)))
            limit = max(1, int(params.get("limit", 50)))
        except (TypeError, ValueError):
            return _error("400", "offset and limit must be integers")
        fields = [name.strip() for name in str(params.get("fields") or "").split(",") if name.strip()]
        term = str(params.get("searchString") or "").strip().lower()

        matched = [row for row in rows if _matches(row, term, fields)]
        page = matched[offset : offset + limit]
        return _ok([_project(row, fields) for row in page])

    def _delete(self, rows: list[Record], record_id: Any) -> GatewayResponse:
        for index, row in enumerate(rows):
            if row.get("Id") == record_id:
                del rows[index]
                return _ok([{"Id": record_id}])
        return _error("404", f"Record not found: {record_id}")

    def _insert(self, rows: list[Record], payload: Record) -> GatewayResponse:
        record = {key: value for key, value in payload.items() if key != "Id"}
        record["Id"] = f"{self.id_prefix}{self.next_id}"
        self.next_id += 1
        rows.append(record)
        return _ok([copy.deepcopy(record)])

    def _update(self, rows: list[Record], payload: Record) -> GatewayResponse:
        record_id = payload.get("Id")
        for row in rows:
            if row.get("Id") == record_id:
                row.update({key: value for key, value in payload.items() if key != "Id"})
                return _ok([copy.deepcopy(row)])
        return _error("404", f"Record not found: {record_id}")

    @staticmethod
    def _payload(body: str | None) -> Record | None:
        if not body:
            return None
        try:
            decoded = json.loads(body)
        except json.JSONDecodeError:
            return None
        if not isinstance(decoded, list) or len(decoded) != 1 or not isinstance(decoded[0], dict):
            return None
        return decoded[0]


@dataclass(slots=True)
class StaticMetadataProvider:
    """Returns a fixed bootstrap payload."""

    bootstrap: MetadataBootstrap

    async def fetch(self) -> MetadataBootstrap:
        return self.bootstrap


def _matches(row: Record, term: str, fields: list[str]) -> bool:
    if not term:
        return True
    names = fields or list(row)
    return any(term in str(row.get(name) or "").lower() for name in names)


def _project(row: Record, fields: list[str]) -> Record:
    if not fields:
        return copy.deepcopy(row)
    projected = {name: copy.deepcopy(row.get(name)) for name in fields}
    projected["Id"] = row.get("Id")
    return projected


def build_demo_session() -> tuple[StaticMetadataProvider, InMemoryGateway]:
    """Return a metadata provider and gateway seeded with sample CRM records."""

    bootstrap = MetadataBootstrap.model_validate(
        {
            "entityCatalog": ["Account", "Contact"],
            "fieldsInfo": {
                "Account": {"listFields": ["Name", "Industry"], "formFields": ["Name", "Industry", "Rating"]},
                "Contact": {"listFields": ["LastName", "Email"], "formFields": ["FirstName", "LastName", "Email"]},
            },
            "connectionAlias": "demo",
        }
    )
    gateway = InMemoryGateway(
        tables={
            "Account": [
                {"Id": "acc1", "Name": "Acme", "Industry": "Manufacturing", "Rating": "Hot"},
                {"Id": "acc2", "Name": "Globex", "Industry": "Energy", "Rating": "Warm"},
                {"Id": "acc3", "Name": "Initech", "Industry": "Technology", "Rating": "Cold"},
                {"Id": "acc4", "Name": "Umbrella", "Industry": "Biotechnology", "Rating": "Warm"},
                {"Id": "acc5", "Name": "Stark Industries", "Industry": "Technology", "Rating": "Hot"},
                {"Id": "acc6", "Name": "Wayne Enterprises", "Industry": "Finance", "Rating": "Hot"},
                {"Id": "acc7", "Name": "Hooli", "Industry": "Technology", "Rating": None},
            ],
            "Contact": [
                {"Id": "con1", "FirstName": "Ada", "LastName": "Lovelace", "Email": "ada@example.com"},
                {"Id": "con2", "FirstName": "Alan", "LastName": "Turing", "Email": "alan@example.com"},
            ],
        },
        id_prefix="new",
    )
    return StaticMetadataProvider(bootstrap), gateway
