"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El dispatcher recibe el transporte inyectado: en tests se sustituye por un
  stub determinista sin estado global (nada de parchear un `fetch` global).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportRequest:
    """Una llamada ya resuelta: URL absoluta, headers finales y body codificado."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes | None = None


@dataclass(frozen=True)
class TransportResponse:
    """Resultado crudo de un intercambio HTTP completado."""

    status_code: int
    reason_phrase: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def header(self, name: str) -> str | None:
        """Lectura case-insensitive (los stubs pueden pasar un dict simple)."""

        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo para emitir un request.

    Reglas de diseño:
    - `send` es asíncrono: es un punto de suspensión cooperativo.
    - No interpreta status ni body; eso es trabajo del clasificador.
    - Las fallas de red se propagan como excepciones (httpx/OSError); el
      dispatcher las traduce a `KeyokuError`.
    """

    async def send(self, request: TransportRequest, *, timeout: float) -> TransportResponse:
        """Emite `request` y devuelve la respuesta completa (body leído)."""

        ...

    async def aclose(self) -> None:
        """Libera conexiones del pool."""

        ...
