"""Recursos del servicio (facades tipados).

Por qué un paquete:
- Un módulo por familia de entidades (memorias, entidades, grafo, etc.).
- Cada recurso es un mapeo fino método -> llamada del `Dispatcher`.
"""

from keyoku.adapters.resources.audit import AuditResource
from keyoku.adapters.resources.cleanup import CleanupResource
from keyoku.adapters.resources.data import DataResource
from keyoku.adapters.resources.entities import EntitiesResource
from keyoku.adapters.resources.graph import GraphResource
from keyoku.adapters.resources.jobs import JobHandle, JobsResource
from keyoku.adapters.resources.memories import MemoriesResource
from keyoku.adapters.resources.relationships import RelationshipsResource
from keyoku.adapters.resources.schemas import SchemasResource

__all__ = [
    "AuditResource",
    "CleanupResource",
    "DataResource",
    "EntitiesResource",
    "GraphResource",
    "JobHandle",
    "JobsResource",
    "MemoriesResource",
    "RelationshipsResource",
    "SchemasResource",
]
