"""Recurso: relaciones."""

from __future__ import annotations

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.resources.entities import relationships_from
from keyoku.core.domain.models import Relationship


class RelationshipsResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        type: str | None = None,
    ) -> list[Relationship]:
        data = await self._dispatcher.request(
            "GET",
            "/v1/relationships",
            params={"limit": limit, "offset": offset, "type": type},
        )
        return relationships_from(data)

    async def get(self, relationship_id: str) -> Relationship:
        data = await self._dispatcher.request("GET", f"/v1/relationships/{relationship_id}")
        return Relationship.from_wire(data)
