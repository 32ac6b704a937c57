"""Recurso: logs de auditoría."""

from __future__ import annotations

from datetime import datetime

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.adapters.response_classifier import expect_object
from keyoku.core.domain.models import AuditLogsResponse


class AuditResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(
        self,
        *,
        operation: str | None = None,
        resource_type: str | None = None,
        start_date: datetime | str | None = None,
        end_date: datetime | str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> AuditLogsResponse:
        """Lista logs con filtros opcionales.

        - operation: p.ej. "memory.create".
        - resource_type: p.ej. "memory".
        - start_date / end_date: RFC 3339 (un `datetime` se serializa con isoformat).
        - limit: por defecto 50 en el servidor, máximo 100.
        """

        data = await self._dispatcher.request(
            "GET",
            "/v1/audit-logs",
            params={
                "operation": operation,
                "resource_type": resource_type,
                "start_date": start_date,
                "end_date": end_date,
                "limit": limit,
                "offset": offset,
            },
        )
        return AuditLogsResponse.from_wire(expect_object(data, "audit logs"))
