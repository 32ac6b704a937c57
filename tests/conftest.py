"""Shared fixtures: a stub server on top of httpx.MockTransport."""

import asyncio
import copy
import json
from typing import Any, Callable, Optional

import httpx
import pytest

from keyoku import Keyoku


SAMPLE_DATA: dict[str, dict[str, Any]] = {
    "memory": {
        "id": "mem_123",
        "content": "User likes pizza",
        "type": "preference",
        "agentId": "default",
        "importance": 0.8,
        "createdAt": "2024-01-01T00:00:00Z",
    },
    "memory_with_score": {
        "id": "mem_123",
        "content": "User likes pizza",
        "type": "preference",
        "agentId": "default",
        "importance": 0.8,
        "score": 0.95,
        "createdAt": "2024-01-01T00:00:00Z",
    },
    "entity": {
        "id": "ent_123",
        "canonicalName": "John Doe",
        "type": "person",
        "properties": {"age": 30},
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-02T00:00:00Z",
    },
    "relationship": {
        "id": "rel_123",
        "sourceEntityId": "ent_1",
        "targetEntityId": "ent_2",
        "relationshipType": "knows",
        "properties": {"since": "2020"},
        "createdAt": "2024-01-01T00:00:00Z",
    },
    "schema": {
        "id": "sch_123",
        "name": "UserPreference",
        "description": "Schema for user preferences",
        "schema": {"type": "object", "properties": {"category": {"type": "string"}}},
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-02T00:00:00Z",
    },
    "job": {
        "id": "job_123",
        "status": "completed",
        "result": {"memoriesCreated": 1},
        "createdAt": "2024-01-01T00:00:00Z",
        "completedAt": "2024-01-01T00:00:01Z",
    },
}


def sample(kind: str, /, **overrides: Any) -> dict[str, Any]:
    data = copy.deepcopy(SAMPLE_DATA[kind])
    data.update(overrides)
    return data


def job_payload(status: str, job_id: str = "job_123", **extra: Any) -> dict[str, Any]:
    payload = {"id": job_id, "status": status, "createdAt": "2024-01-01T00:00:00Z"}
    payload.update(extra)
    return payload


class StubServer:
    """Records every request and answers from a queue (or a default)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queue: list[Any] = []
        self.default: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def queue_json(self, data: Any, status: int = 200, headers: Optional[dict] = None) -> None:
        self._queue.append(httpx.Response(status, json=data, headers=headers))

    def queue_bytes(self, content: bytes, status: int = 200, headers: Optional[dict] = None) -> None:
        self._queue.append(httpx.Response(status, content=content, headers=headers))

    def queue_error(self, status: int, message: Optional[str] = None, code: Optional[str] = None, headers=None) -> None:
        error: dict[str, Any] = {}
        if message is not None:
            error["message"] = message
        if code is not None:
            error["code"] = code
        self.queue_json({"error": error}, status=status, headers=headers)

    def queue_exception(self, exc: Exception) -> None:
        self._queue.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._queue:
            item = self._queue.pop(0)
        elif self.default is not None:
            return self.default(request)
        else:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def server():
    return StubServer()


@pytest.fixture
def make_client(server, monkeypatch):
    # Keep the host environment out of the settings.
    for name in ("KEYOKU_API_KEY", "KEYOKU_BASE_URL", "KEYOKU_ENTITY_ID", "KEYOKU_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    def _make(**kwargs: Any) -> Keyoku:
        kwargs.setdefault("api_key", "test-key")
        return Keyoku(http_transport=httpx.MockTransport(server.handler), **kwargs)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


def run(coro):
    return asyncio.run(coro)
