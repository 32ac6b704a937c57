"""Recurso: limpieza de memorias.

Estrategias: stale, low_importance, oldest, never_accessed.
"""

from __future__ import annotations

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.domain.models import (
    CleanupResponse,
    CleanupStrategy,
    CleanupSuggestionsResponse,
)


class CleanupResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def suggestions(self) -> CleanupSuggestionsResponse:
        data = await self._dispatcher.request("GET", "/v1/memories/cleanup-suggestions")
        return CleanupSuggestionsResponse.from_wire(expect_object(data, "cleanup suggestions"))

    async def execute(
        self,
        strategy: CleanupStrategy | str,
        *,
        limit: int | None = None,
        dry_run: bool | None = None,
    ) -> CleanupResponse:
        """Ejecuta una estrategia. Con `dry_run=True` el servidor solo reporta."""

        data = await self._dispatcher.request(
            "POST",
            "/v1/memories/cleanup",
            json={
                "strategy": CleanupStrategy(strategy),
                "limit": limit,
                "dry_run": dry_run,
            },
        )
        return CleanupResponse.from_wire(expect_object(data, "cleanup result"))
