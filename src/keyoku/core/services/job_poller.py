"""Espera de jobs asíncronos (polling).

Máquina de estados sobre `Job.status`:
- `pending` es el estado inicial; `completed` y `failed` son terminales.
- El camino esperado es pending -> processing -> completed|failed, pero el
  servidor puede saltarse `processing` y los estados no terminales pueden
  alternar entre sí. Solo se asume "una vez terminal, siempre terminal".

Sin `timeout` la espera es indefinida: acotarla es responsabilidad del llamador.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from keyoku.core.domain.models import Job, JobStatus
from keyoku.core.errors import ErrorKind, KeyokuError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POLL_INTERVAL = 0.5
_STOPPED = object()


async def _unless_set(awaitable: Awaitable[T], cancel_event: asyncio.Event | None) -> T | object:
    """Espera `awaitable`; si `cancel_event` se activa antes devuelve `_STOPPED`.

    El trabajo pendiente se cancela y se espera antes de volver, así que un
    fetch interrumpido libera su request.
    """

    if cancel_event is None:
        return await awaitable
    work = asyncio.ensure_future(awaitable)
    stop = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait({work, stop}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        stop.cancel()
        if not work.done():
            work.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await work
    if work in done:
        return work.result()
    return _STOPPED


def _cancelled(job_id: str) -> KeyokuError:
    return KeyokuError(ErrorKind.CANCELLED, f"Waiting for job {job_id} was cancelled", job_id=job_id)


async def wait_for_job(
    fetch: Callable[[], Awaitable[Job]],
    job_id: str,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
    on_update: Callable[[Job], None] | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Job:
    """Hace polling de `fetch` hasta que el job llega a un estado terminal.

    - `completed`: devuelve el `Job`.
    - `failed`: `KeyokuError(JOB_FAILED)` con el error del servidor tal cual.
    - plazo vencido: `KeyokuError(JOB_WAIT_TIMEOUT)`.
    - `cancel_event` activado: `KeyokuError(CANCELLED)`. La cancelación de la
      task (`CancelledError`) también se propaga sin tocar.

    Cada `fetch` pasa por el dispatcher, así que el timeout por request aplica
    de forma independiente del plazo total.
    """

    if poll_interval < 0:
        raise ValueError("poll_interval must be >= 0")
    if timeout is not None and timeout < 0:
        raise ValueError("timeout must be >= 0")

    start = clock()
    attempt = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise _cancelled(job_id)

        job = await _unless_set(fetch(), cancel_event)
        if job is _STOPPED:
            raise _cancelled(job_id)
        attempt += 1
        logger.debug("job %s poll #%d: %s", job_id, attempt, job.status.value)
        if on_update is not None:
            on_update(job)

        if job.status is JobStatus.COMPLETED:
            return job
        if job.status is JobStatus.FAILED:
            raise KeyokuError(
                ErrorKind.JOB_FAILED,
                job.error or "Job failed",
                job_id=job_id,
            )

        elapsed = clock() - start
        if timeout is not None and elapsed > timeout:
            raise KeyokuError(
                ErrorKind.JOB_WAIT_TIMEOUT,
                f"Job {job_id} did not complete in {timeout:g}s (waited {elapsed:.2f}s)",
                job_id=job_id,
            )

        if await _unless_set(sleep(poll_interval), cancel_event) is _STOPPED:
            raise _cancelled(job_id)
