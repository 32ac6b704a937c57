"""Errores del cliente.

Por qué un único tipo de error:
- Todas las fallas llegan al llamador como `KeyokuError` con un discriminante
  `kind`; el llamador hace `match`/`if` sobre el kind, no sobre subclases.
- Los campos específicos (`retry_after`, `job_id`) solo tienen valor para el
  kind que los usa.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Clasificación de fallas que puede ver el llamador."""

    # Clasificadas a partir del status HTTP
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    GENERIC = "generic"

    # Lado cliente
    CLIENT_TIMEOUT = "client_timeout"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"

    # Jobs asíncronos
    JOB_FAILED = "job_failed"
    JOB_WAIT_TIMEOUT = "job_wait_timeout"
    CANCELLED = "cancelled"

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES.get(self, "Unknown error")

    @property
    def default_code(self) -> str | None:
        return _DEFAULT_CODES.get(self)


_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.AUTHENTICATION: "Invalid API key",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.VALIDATION: "Validation failed",
    ErrorKind.RATE_LIMIT: "Rate limit exceeded",
    ErrorKind.SERVER: "Server error",
    ErrorKind.CLIENT_TIMEOUT: "Request timed out",
    ErrorKind.TRANSPORT_FAILURE: "Transport failure",
    ErrorKind.MALFORMED_RESPONSE: "Malformed response",
    ErrorKind.JOB_FAILED: "Job failed",
    ErrorKind.JOB_WAIT_TIMEOUT: "Job did not complete in time",
    ErrorKind.CANCELLED: "Cancelled",
}

_DEFAULT_CODES: dict[ErrorKind, str] = {
    ErrorKind.AUTHENTICATION: "unauthorized",
    ErrorKind.NOT_FOUND: "not_found",
    ErrorKind.VALIDATION: "validation_error",
    ErrorKind.RATE_LIMIT: "rate_limit",
    ErrorKind.SERVER: "server_error",
}

_RETRYABLE = frozenset(
    {
        ErrorKind.RATE_LIMIT,
        ErrorKind.SERVER,
        ErrorKind.CLIENT_TIMEOUT,
        ErrorKind.TRANSPORT_FAILURE,
    }
)


class KeyokuError(Exception):
    """Error tipado que propaga el cliente.

    Atributos:
    - kind: discriminante (`ErrorKind`).
    - message: texto legible (del servidor o por defecto del kind).
    - code: código de máquina (del servidor o por defecto del kind).
    - status_code: status HTTP cuando la falla proviene de una respuesta.
    - retry_after: segundos sugeridos por `Retry-After` (solo RATE_LIMIT).
    - job_id: job afectado (solo JOB_FAILED / JOB_WAIT_TIMEOUT / CANCELLED).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        retry_after: int | None = None,
        job_id: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or kind.default_message
        self.code = code
        self.status_code = status_code
        self.retry_after = retry_after
        self.job_id = job_id
        super().__init__(self.message)

    @property
    def is_retryable(self) -> bool:
        """Pista para el llamador; el cliente nunca reintenta por su cuenta."""

        return self.kind in _RETRYABLE

    def __repr__(self) -> str:
        parts = [f"kind={self.kind.value!r}", f"message={self.message!r}"]
        if self.status_code is not None:
            parts.append(f"status_code={self.status_code}")
        if self.code is not None:
            parts.append(f"code={self.code!r}")
        if self.retry_after is not None:
            parts.append(f"retry_after={self.retry_after}")
        if self.job_id is not None:
            parts.append(f"job_id={self.job_id!r}")
        return f"KeyokuError({', '.join(parts)})"
