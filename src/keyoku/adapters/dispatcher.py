"""Dispatcher de requests: el único punto por el que pasa cada operación.

Responsabilidad:
- Construir la URL absoluta (base + path + query sin valores `None`).
- Inyectar headers estándar y condicionales (tenant).
- Ser dueño del límite de timeout/cancelación por llamada.
- Traducir fallas de transporte a `KeyokuError` y delegar la interpretación
  de la respuesta al clasificador.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic_core import to_jsonable_python

from keyoku.adapters.response_classifier import classify_error, handle_response
from keyoku.core.config import KeyokuSettings
from keyoku.core.errors import ErrorKind, KeyokuError
from keyoku.core.interfaces.transport import Transport, TransportRequest, TransportResponse

logger = logging.getLogger(__name__)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> str:
    """Codifica `params` descartando `None` (nunca se envían como cadena vacía)."""

    if not params:
        return ""
    pairs = [(key, _query_value(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs)


def encode_body(body: Mapping[str, Any] | None) -> bytes | None:
    """JSON compacto; las claves top-level con `None` se omiten."""

    if body is None:
        return None
    compact = {key: value for key, value in body.items() if value is not None}
    return json.dumps(to_jsonable_python(compact), separators=(",", ":")).encode("utf-8")


class Dispatcher:
    """Emite requests autenticados contra el servicio.

    Es inmutable tras construirse: comparte `settings` (solo lectura) y el
    transporte entre todos los recursos.
    """

    def __init__(self, settings: KeyokuSettings, transport: Transport) -> None:
        if not settings.api_key:
            raise ValueError("api_key is required (pass it explicitly or set KEYOKU_API_KEY)")
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> KeyokuSettings:
        return self._settings

    @property
    def transport(self) -> Transport:
        return self._transport

    def build_url(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self._settings.base_url}{path}"
        query = encode_query(params)
        if query:
            url = f"{url}?{query}"
        return url

    def build_headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "User-Agent": self._settings.user_agent,
        }
        if self._settings.entity_id:
            headers["X-Entity-ID"] = self._settings.entity_id
        if extra:
            headers.update(extra)
        return headers

    async def request_raw(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        """Como `request`, pero devuelve la respuesta 2xx sin decodificar."""

        response = await self._send(method, path, params=params, json=json, headers=headers)
        if not response.is_success:
            raise classify_error(response)
        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        response = await self._send(method, path, params=params, json=json, headers=headers)
        return handle_response(response)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None,
        json: Mapping[str, Any] | None,
        headers: Mapping[str, str] | None,
    ) -> TransportResponse:
        method = method.upper()
        request = TransportRequest(
            method=method,
            url=self.build_url(path, params),
            headers=self.build_headers(headers),
            content=encode_body(json),
        )
        timeout = self._settings.timeout_seconds

        logger.debug("%s %s", method, request.url)
        try:
            # wait_for cancela la corrutina del transporte al vencer el plazo;
            # httpx libera la conexión en su propio finally.
            response = await asyncio.wait_for(
                self._transport.send(request, timeout=timeout),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.debug("%s %s timed out after %.1fs", method, path, timeout)
            raise KeyokuError(
                ErrorKind.CLIENT_TIMEOUT,
                f"{method} {path} timed out after {timeout:g}s",
            ) from exc
        except (httpx.RequestError, OSError) as exc:
            # RequestError cubre también redirects en bucle y bodies mal codificados.
            logger.debug("%s %s transport failure: %s", method, path, exc)
            raise KeyokuError(
                ErrorKind.TRANSPORT_FAILURE,
                f"{method} {path} failed: {exc}",
            ) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response
