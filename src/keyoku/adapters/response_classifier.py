"""Clasificación de respuestas HTTP.

Responsabilidad:
- Camino feliz (2xx): decodificar JSON (o `None` si el body está vacío).
- Camino de error: mapear status + payload `{"error": {"message", "code"}}`
  a un `KeyokuError` con el kind correcto.

Todo aquí es función pura de la respuesta: sin estado, sin reintentos.
"""

from __future__ import annotations

import json
from typing import Any

from keyoku.core.errors import ErrorKind, KeyokuError
from keyoku.core.interfaces.transport import TransportResponse

_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTHENTICATION,
    404: ErrorKind.NOT_FOUND,
    422: ErrorKind.VALIDATION,
    429: ErrorKind.RATE_LIMIT,
}


def kind_for_status(status_code: int) -> ErrorKind:
    kind = _STATUS_KINDS.get(status_code)
    if kind is not None:
        return kind
    if status_code >= 500:
        return ErrorKind.SERVER
    return ErrorKind.GENERIC


def parse_retry_after(value: str | None) -> int | None:
    """`Retry-After` en segundos enteros; fechas HTTP u otros formatos -> None."""

    if value is None:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)


def decode_success(response: TransportResponse) -> Any:
    if not response.content.strip():
        return None
    try:
        return json.loads(response.content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise KeyokuError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Invalid JSON in {response.status_code} response: {exc}",
            status_code=response.status_code,
        ) from exc


def expect_object(data: Any, what: str) -> dict[str, Any]:
    """Payload 2xx como objeto JSON; un body vacío cuenta como `{}`."""

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise KeyokuError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Expected a JSON object for {what}, got {type(data).__name__}",
        )
    return data


def _parse_error_body(response: TransportResponse) -> tuple[bool, str | None, str | None]:
    """Devuelve (parseado, message, code) del payload de error del servidor."""

    try:
        payload = json.loads(response.content)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return False, None, None

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return True, None, None

    message = error.get("message")
    code = error.get("code")
    return (
        True,
        message if isinstance(message, str) and message else None,
        code if isinstance(code, str) and code else None,
    )


def classify_error(response: TransportResponse) -> KeyokuError:
    kind = kind_for_status(response.status_code)
    parsed, message, code = _parse_error_body(response)
    if message is None and not parsed:
        message = response.reason_phrase or None

    retry_after = None
    if kind is ErrorKind.RATE_LIMIT:
        retry_after = parse_retry_after(response.header("Retry-After"))

    return KeyokuError(
        kind,
        message,
        code=code or kind.default_code,
        status_code=response.status_code,
        retry_after=retry_after,
    )


def handle_response(response: TransportResponse) -> Any:
    """Valor decodificado para 2xx; `KeyokuError` en cualquier otro caso."""

    if response.is_success:
        return decode_success(response)
    raise classify_error(response)
