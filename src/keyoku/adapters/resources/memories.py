"""Recurso: memorias."""

from __future__ import annotations

from collections.abc import Sequence

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.resources.jobs import JobHandle, JobsResource
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.domain.models import ListMemoriesResponse, Memory
from keyoku.core.errors import ErrorKind, KeyokuError


def job_id_from(data: object) -> str:
    """Extrae el id de job de una respuesta de envío (`job_id` o `jobId`)."""

    if isinstance(data, dict):
        job_id = data.get("job_id") or data.get("jobId")
        if isinstance(job_id, str) and job_id:
            return job_id
    raise KeyokuError(ErrorKind.MALFORMED_RESPONSE, "Response did not include a job id")


class MemoriesResource:
    def __init__(self, dispatcher: Dispatcher, jobs: JobsResource) -> None:
        self._dispatcher = dispatcher
        self._jobs = jobs

    async def list(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        agent_id: str | None = None,
    ) -> ListMemoriesResponse:
        data = await self._dispatcher.request(
            "GET",
            "/v1/memories",
            params={"limit": limit, "offset": offset, "agent_id": agent_id},
        )
        return ListMemoriesResponse.from_wire(expect_object(data, "memory list"))

    async def get(self, memory_id: str) -> Memory:
        data = await self._dispatcher.request("GET", f"/v1/memories/{memory_id}")
        return Memory.from_wire(data)

    async def delete(self, memory_id: str) -> None:
        await self._dispatcher.request("DELETE", f"/v1/memories/{memory_id}")

    async def delete_all(self) -> None:
        """Borra todas las memorias del tenant. Irreversible."""

        await self._dispatcher.request(
            "DELETE",
            "/v1/memories",
            headers={"X-Confirm-Delete": "true"},
        )

    async def batch_create(
        self,
        contents: Sequence[str],
        *,
        session_id: str | None = None,
        agent_id: str | None = None,
    ) -> JobHandle:
        """Crea varias memorias en un solo round trip; devuelve el job.

        El servidor decide la semántica ante fallas parciales: desde el cliente
        la llamada es atómica (una respuesta o un error para todo el lote).
        """

        data = await self._dispatcher.request(
            "POST",
            "/v1/memories/batch",
            json={
                "memories": [{"content": content} for content in contents],
                "session_id": session_id,
                "agent_id": agent_id,
            },
        )
        return JobHandle(self._jobs, job_id_from(data))

    async def batch_delete(self, memory_ids: Sequence[str]) -> None:
        await self._dispatcher.request(
            "DELETE",
            "/v1/memories/batch",
            json={"ids": list(memory_ids)},
        )
