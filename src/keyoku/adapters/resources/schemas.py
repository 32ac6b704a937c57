"""Recurso: schemas de extracción definidos por el usuario."""

from __future__ import annotations

from typing import Any

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.domain.models import Schema


class SchemasResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self) -> list[Schema]:
        data = await self._dispatcher.request("GET", "/v1/schemas")
        items = expect_object(data, "schemas").get("schemas") or []
        return [Schema.from_wire(item) for item in items]

    async def get(self, schema_id: str) -> Schema:
        data = await self._dispatcher.request("GET", f"/v1/schemas/{schema_id}")
        return Schema.from_wire(data)

    async def create(
        self,
        name: str,
        schema: dict[str, Any],
        description: str | None = None,
    ) -> Schema:
        data = await self._dispatcher.request(
            "POST",
            "/v1/schemas",
            json={"name": name, "schema": schema, "description": description},
        )
        return Schema.from_wire(data)

    async def update(
        self,
        schema_id: str,
        *,
        name: str | None = None,
        schema: dict[str, Any] | None = None,
        description: str | None = None,
    ) -> Schema:
        """Actualización parcial: solo se envían los campos informados."""

        data = await self._dispatcher.request(
            "PUT",
            f"/v1/schemas/{schema_id}",
            json={"name": name, "schema": schema, "description": description},
        )
        return Schema.from_wire(data)

    async def delete(self, schema_id: str) -> None:
        await self._dispatcher.request("DELETE", f"/v1/schemas/{schema_id}")
