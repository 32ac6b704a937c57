"""Recurso: jobs asíncronos.

`JobHandle` es la referencia liviana que devuelven las operaciones de envío
(`remember`, `batch_create`): solo guarda el id y el dispatcher compartido.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.core.domain.models import Job
from keyoku.core.services.job_poller import DEFAULT_POLL_INTERVAL, wait_for_job


class JobsResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def get(self, job_id: str) -> Job:
        """Estado actual de un job."""

        data = await self._dispatcher.request("GET", f"/v1/jobs/{job_id}")
        return Job.from_wire(data)

    async def wait(
        self,
        job_id: str,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
        on_update: Callable[[Job], None] | None = None,
    ) -> Job:
        """Espera a que el job termine (ver `wait_for_job`)."""

        return await wait_for_job(
            lambda: self.get(job_id),
            job_id,
            poll_interval=poll_interval,
            timeout=timeout,
            cancel_event=cancel_event,
            on_update=on_update,
        )


class JobHandle:
    """Referencia a un job que se puede consultar o esperar."""

    def __init__(self, jobs: JobsResource, job_id: str) -> None:
        self._jobs = jobs
        self.job_id = job_id

    def __repr__(self) -> str:
        return f"JobHandle(job_id={self.job_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JobHandle):
            return NotImplemented
        return self.job_id == other.job_id

    def __hash__(self) -> int:
        return hash(self.job_id)

    async def get(self) -> Job:
        return await self._jobs.get(self.job_id)

    async def wait(
        self,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
        on_update: Callable[[Job], None] | None = None,
    ) -> Job:
        return await self._jobs.wait(
            self.job_id,
            poll_interval=poll_interval,
            timeout=timeout,
            cancel_event=cancel_event,
            on_update=on_update,
        )
