"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida en el borde lo que devuelve el servidor y convierte timestamps
  ISO-8601 a `datetime` sin código manual en cada recurso.
- Los modelos son snapshots inmutables (`frozen`): el cliente no mantiene
  identidad, caché ni consistencia entre requests.

Nota:
- El servicio usa camelCase en la mayoría de recursos; aquí se exponen como
  snake_case vía alias. Los campos desconocidos se conservan (`extra="allow"`).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from keyoku.core.errors import ErrorKind, KeyokuError

R = TypeVar("R", bound="Record")


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class SearchMode(str, Enum):
    SEMANTIC = "semantic"
    KEYWORD = "keyword"
    HYBRID = "hybrid"


class RelationshipDirection(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    BOTH = "both"


class CleanupStrategy(str, Enum):
    STALE = "stale"
    LOW_IMPORTANCE = "low_importance"
    OLDEST = "oldest"
    NEVER_ACCESSED = "never_accessed"


class Record(BaseModel):
    """Base común: inmutable, acepta alias y nombres, conserva extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    @classmethod
    def from_wire(cls: type[R], data: Any) -> R:
        """Valida un payload del servidor; un contrato roto es `MALFORMED_RESPONSE`."""

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise KeyokuError(
                ErrorKind.MALFORMED_RESPONSE,
                f"Unexpected {cls.__name__} payload: {exc.error_count()} validation error(s)",
            ) from exc


class Job(Record):
    """Unidad de trabajo asíncrona del servidor.

    El cliente nunca muta el estado: solo lo vuelve a leer.
    """

    id: str = Field(..., min_length=1, description="Identificador opaco del job.")
    status: JobStatus = Field(..., description="Estado actual del ciclo de vida.")
    result: dict[str, Any] | None = Field(
        default=None,
        description="Resultado reportado por el servidor (solo en jobs completados).",
    )
    error: str | None = Field(
        default=None,
        description="Mensaje de error reportado por el servidor (jobs fallidos).",
    )
    created_at: datetime = Field(..., alias="createdAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class Memory(Record):
    id: str
    content: str
    type: str | None = None
    agent_id: str | None = Field(default=None, alias="agentId")
    importance: float | None = None
    created_at: datetime = Field(..., alias="createdAt")


class MemorySearchResult(Memory):
    score: float | None = Field(default=None, description="Relevancia reportada por el servidor.")


class ListMemoriesResponse(Record):
    memories: list[Memory] = Field(default_factory=list)
    total: int = 0
    has_more: bool = Field(default=False, alias="hasMore")


class Stats(Record):
    total_memories: int = Field(default=0, alias="totalMemories")
    by_type: dict[str, int] = Field(default_factory=dict, alias="byType")


class Entity(Record):
    """Nodo del grafo de conocimiento."""

    id: str
    canonical_name: str | None = Field(default=None, alias="canonicalName")
    type: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class Relationship(Record):
    """Arista dirigida entre dos entidades."""

    id: str
    source_entity_id: str | None = Field(default=None, alias="sourceEntityId")
    target_entity_id: str | None = Field(default=None, alias="targetEntityId")
    relationship_type: str | None = Field(default=None, alias="relationshipType")
    properties: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(..., alias="createdAt")


class PathResult(Record):
    entities: list[Entity] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    length: int = Field(default=0, ge=0, description="Número de relaciones recorridas.")


class Schema(Record):
    id: str
    name: str
    description: str | None = None
    # `schema` colisiona con un atributo de BaseModel
    definition: dict[str, Any] = Field(default_factory=dict, alias="schema")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class CleanupSuggestion(Record):
    strategy: CleanupStrategy
    description: str = ""
    count: int = 0


class CleanupUsage(Record):
    memories_stored: int = 0
    memories_limit: int = 0
    percentage: float = 0.0


class CleanupSuggestionsResponse(Record):
    suggestions: list[CleanupSuggestion] = Field(default_factory=list)
    usage: CleanupUsage | None = None


class CleanupResponse(Record):
    deleted_count: int = 0
    deleted_ids: list[str] | None = None


class ExportResponse(Record):
    job_id: str
    status: str


class ExportDownload(Record):
    """Archivo de exportación descargado (bytes crudos)."""

    job_id: str
    content: bytes
    content_type: str | None = None
    filename: str | None = None


class AuditLog(Record):
    id: str
    operation: str
    resource_type: str
    resource_id: str | None = None
    details: dict[str, Any] | None = None
    created_at: datetime


class AuditLogsResponse(Record):
    audit_logs: list[AuditLog] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False
