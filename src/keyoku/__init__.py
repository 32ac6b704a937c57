"""Keyoku Python SDK.

Ejemplo:

    from keyoku import Keyoku

    async with Keyoku(api_key="your-api-key") as keyoku:
        job = await keyoku.remember("User prefers dark mode")
        await job.wait()
        memories = await keyoku.search("preferences")
"""

from __future__ import annotations

import logging

__version__ = "0.1.0"

from keyoku.adapters.resources.jobs import JobHandle  # noqa: E402
from keyoku.client import Keyoku  # noqa: E402
from keyoku.core.config import KeyokuSettings  # noqa: E402
from keyoku.core.domain.models import (  # noqa: E402
    AuditLog,
    AuditLogsResponse,
    CleanupResponse,
    CleanupStrategy,
    CleanupSuggestion,
    CleanupSuggestionsResponse,
    CleanupUsage,
    Entity,
    ExportDownload,
    ExportResponse,
    Job,
    JobStatus,
    ListMemoriesResponse,
    Memory,
    MemorySearchResult,
    PathResult,
    Relationship,
    RelationshipDirection,
    Schema,
    SearchMode,
    Stats,
)
from keyoku.core.errors import ErrorKind, KeyokuError  # noqa: E402

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AuditLog",
    "AuditLogsResponse",
    "CleanupResponse",
    "CleanupStrategy",
    "CleanupSuggestion",
    "CleanupSuggestionsResponse",
    "CleanupUsage",
    "Entity",
    "ErrorKind",
    "ExportDownload",
    "ExportResponse",
    "Job",
    "JobHandle",
    "JobStatus",
    "Keyoku",
    "KeyokuError",
    "KeyokuSettings",
    "ListMemoriesResponse",
    "Memory",
    "MemorySearchResult",
    "PathResult",
    "Relationship",
    "RelationshipDirection",
    "Schema",
    "SearchMode",
    "Stats",
    "__version__",
]
