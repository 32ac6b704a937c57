"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y políticas del pool de conexiones.
- Facilita testeo: el dispatcher solo ve el contrato `Transport`, así que se
  puede sustituir por un stub o por `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from keyoku.core.config import KeyokuSettings
from keyoku.core.interfaces.transport import TransportRequest, TransportResponse


def build_async_client(
    settings: KeyokuSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los recursos se comporten igual.
    - `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    settings = settings or KeyokuSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """Implementación de `Transport` sobre `httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: KeyokuSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxTransport":
        return cls(build_async_client(settings, transport=transport))

    async def send(self, request: TransportRequest, *, timeout: float) -> TransportResponse:
        http_request = self._client.build_request(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.content,
            timeout=httpx.Timeout(timeout),
        )
        # stream=False: httpx lee el body completo y cierra la respuesta.
        response = await self._client.send(http_request)
        return TransportResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=dict(response.headers),
            content=response.content,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
