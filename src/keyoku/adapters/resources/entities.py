"""Recurso: entidades del grafo."""

from __future__ import annotations

from typing import Any

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.domain.models import Entity, Relationship, RelationshipDirection


def entities_from(data: Any) -> list[Entity]:
    items = expect_object(data, "entities").get("entities") or []
    return [Entity.from_wire(item) for item in items]


def relationships_from(data: Any) -> list[Relationship]:
    items = expect_object(data, "relationships").get("relationships") or []
    return [Relationship.from_wire(item) for item in items]


class EntitiesResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        type: str | None = None,
    ) -> list[Entity]:
        data = await self._dispatcher.request(
            "GET",
            "/v1/entities",
            params={"limit": limit, "offset": offset, "type": type},
        )
        return entities_from(data)

    async def search(
        self,
        query: str,
        *,
        limit: int = 10,
        type: str | None = None,
    ) -> list[Entity]:
        """Busca entidades por nombre."""

        data = await self._dispatcher.request(
            "GET",
            "/v1/entities/search",
            params={"query": query, "limit": limit, "type": type},
        )
        return entities_from(data)

    async def get(self, entity_id: str) -> Entity:
        data = await self._dispatcher.request("GET", f"/v1/entities/{entity_id}")
        return Entity.from_wire(data)

    async def relationships(
        self,
        entity_id: str,
        *,
        direction: RelationshipDirection | str = RelationshipDirection.BOTH,
        type: str | None = None,
    ) -> list[Relationship]:
        data = await self._dispatcher.request(
            "GET",
            f"/v1/entities/{entity_id}/relationships",
            params={"direction": RelationshipDirection(direction), "type": type},
        )
        return relationships_from(data)
