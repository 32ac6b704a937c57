"""Cliente Keyoku: punto de entrada de la librería.

Por qué un cliente que agrupa recursos:
- Construye una sola vez la configuración inmutable y el transporte.
- Todos los recursos comparten el mismo `Dispatcher` (solo lectura).

Uso:

    async with Keyoku(api_key="...") as keyoku:
        job = await keyoku.remember("User prefers dark mode")
        await job.wait(timeout=30)
        memories = await keyoku.search("preferences")
"""

from __future__ import annotations

from typing import Any

import httpx

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.http_client import HttpxTransport
from keyoku.adapters.resources import (
    AuditResource,
    CleanupResource,
    DataResource,
    EntitiesResource,
    GraphResource,
    JobHandle,
    JobsResource,
    MemoriesResource,
    RelationshipsResource,
    SchemasResource,
)
from keyoku.adapters.resources.memories import job_id_from
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.config import KeyokuSettings
from keyoku.core.domain.models import MemorySearchResult, SearchMode, Stats
from keyoku.core.interfaces.transport import Transport


class Keyoku:
    """Cliente asíncrono del servicio de memoria Keyoku.

    Argumentos explícitos (`api_key`, `base_url`, `timeout`, `entity_id`)
    tienen prioridad sobre `settings` y sobre las variables `KEYOKU_*`.

    `transport` permite inyectar un `Transport` propio (tests, proxies);
    en ese caso el cliente no lo cierra. `http_transport` inyecta un
    transporte httpx (p.ej. `httpx.MockTransport`) bajo el cliente httpx
    que sí crea y cierra este objeto.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        entity_id: str | None = None,
        settings: KeyokuSettings | None = None,
        transport: Transport | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        overrides: dict[str, Any] = {
            "api_key": api_key,
            "base_url": base_url,
            "timeout_seconds": timeout,
            "entity_id": entity_id,
        }
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if settings is None:
            settings = KeyokuSettings(**overrides)
        elif overrides:
            settings = KeyokuSettings(**{**settings.model_dump(), **overrides})

        if not settings.api_key:
            raise ValueError("api_key is required (pass it explicitly or set KEYOKU_API_KEY)")

        self._owns_transport = transport is None
        if transport is None:
            transport = HttpxTransport.from_settings(settings, transport=http_transport)

        self.settings = settings
        self._dispatcher = Dispatcher(settings, transport)

        self.jobs = JobsResource(self._dispatcher)
        self.memories = MemoriesResource(self._dispatcher, self.jobs)
        self.entities = EntitiesResource(self._dispatcher)
        self.relationships = RelationshipsResource(self._dispatcher)
        self.graph = GraphResource(self._dispatcher)
        self.schemas = SchemasResource(self._dispatcher)
        self.cleanup = CleanupResource(self._dispatcher)
        self.data = DataResource(self._dispatcher)
        self.audit = AuditResource(self._dispatcher)

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def __aenter__(self) -> "Keyoku":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._dispatcher.transport.aclose()

    async def remember(
        self,
        content: str,
        *,
        session_id: str | None = None,
        agent_id: str | None = None,
    ) -> JobHandle:
        """Guarda una memoria de forma asíncrona; devuelve el job a esperar."""

        data = await self._dispatcher.request(
            "POST",
            "/v1/memories",
            json={"content": content, "session_id": session_id, "agent_id": agent_id},
        )
        return JobHandle(self.jobs, job_id_from(data))

    async def search(
        self,
        query: str,
        *,
        limit: int = 10,
        mode: SearchMode | str = SearchMode.HYBRID,
        agent_id: str | None = None,
    ) -> list[MemorySearchResult]:
        data = await self._dispatcher.request(
            "POST",
            "/v1/memories/search",
            json={
                "query": query,
                "limit": limit,
                "mode": SearchMode(mode),
                "agent_id": agent_id,
            },
        )
        items = expect_object(data, "search results").get("memories") or []
        return [MemorySearchResult.from_wire(item) for item in items]

    async def stats(self) -> Stats:
        data = await self._dispatcher.request("GET", "/v1/stats")
        return Stats.from_wire(expect_object(data, "stats"))

    def job(self, job_id: str) -> JobHandle:
        """Handle para un job conocido (p.ej. el `job_id` de un export)."""

        return JobHandle(self.jobs, job_id)
