"""Recurso: recorridos del grafo."""

from __future__ import annotations

from collections.abc import Sequence

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.resources.entities import entities_from, relationships_from
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.domain.models import PathResult


class GraphResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def find_path(
        self,
        from_entity: str,
        to_entity: str,
        *,
        max_depth: int = 5,
        relationship_types: Sequence[str] | None = None,
    ) -> PathResult | None:
        """Camino más corto entre dos entidades, o `None` si no existe."""

        data = await self._dispatcher.request(
            "GET",
            "/v1/graph/path",
            params={
                "from": from_entity,
                "to": to_entity,
                "max_depth": max_depth,
                "relationship_types": ",".join(relationship_types) if relationship_types else None,
            },
        )
        data = expect_object(data, "graph path")
        if not data.get("path"):
            return None

        relationships = relationships_from(data)
        return PathResult(
            entities=entities_from(data),
            relationships=relationships,
            length=len(relationships),
        )
