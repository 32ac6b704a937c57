"""Tests for CleanupResource, AuditResource and DataResource."""

from datetime import datetime, timezone

import pytest

from conftest import run
from keyoku import CleanupStrategy, ErrorKind, KeyokuError


def test_cleanup_suggestions(server, client):
    server.queue_json(
        {
            "suggestions": [{"strategy": "stale", "description": "Not accessed in 90 days", "count": 12}],
            "usage": {"memories_stored": 900, "memories_limit": 1000, "percentage": 90.0},
        }
    )

    response = run(client.cleanup.suggestions())

    assert server.last.url.path == "/v1/memories/cleanup-suggestions"
    assert response.suggestions[0].strategy is CleanupStrategy.STALE
    assert response.usage.percentage == 90.0


def test_cleanup_execute(server, client):
    server.queue_json({"deleted_count": 2, "deleted_ids": ["m1", "m2"]})

    response = run(client.cleanup.execute("oldest", limit=2, dry_run=True))

    assert server.last.method == "POST"
    assert server.last.url.path == "/v1/memories/cleanup"
    assert server.last_json() == {"strategy": "oldest", "limit": 2, "dry_run": True}
    assert response.deleted_count == 2
    assert response.deleted_ids == ["m1", "m2"]


def test_cleanup_execute_minimal_body(server, client):
    server.queue_json({"deleted_count": 0})
    response = run(client.cleanup.execute(CleanupStrategy.NEVER_ACCESSED))
    assert server.last_json() == {"strategy": "never_accessed"}
    assert response.deleted_ids is None


def test_audit_logs_without_filters(server, client):
    server.queue_json({"audit_logs": [], "total": 0, "has_more": False})
    response = run(client.audit.list())
    assert str(server.last.url) == "https://api.keyoku.dev/v1/audit-logs"
    assert response.total == 0


def test_audit_logs_with_filters(server, client):
    server.queue_json(
        {
            "audit_logs": [
                {
                    "id": "log_1",
                    "operation": "memory.create",
                    "resource_type": "memory",
                    "resource_id": "mem_1",
                    "created_at": "2024-01-01T00:00:00Z",
                }
            ],
            "total": 1,
            "has_more": False,
        }
    )

    response = run(
        client.audit.list(
            operation="memory.create",
            start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            end_date="2024-02-01T00:00:00Z",
            limit=10,
        )
    )

    assert dict(server.last.url.params) == {
        "operation": "memory.create",
        "start_date": "2024-01-01T00:00:00+00:00",
        "end_date": "2024-02-01T00:00:00Z",
        "limit": "10",
    }
    assert response.audit_logs[0].resource_id == "mem_1"
    assert response.audit_logs[0].created_at.year == 2024


def test_data_export(server, client):
    server.queue_json({"job_id": "job_export", "status": "pending"})
    response = run(client.data.export())
    assert server.last.url.path == "/v1/data/export"
    assert response.job_id == "job_export"


def test_download_is_an_authenticated_request(server, make_client):
    server.queue_bytes(
        b"PK\x03\x04zip-bytes",
        headers={"Content-Type": "application/zip", "Content-Disposition": 'attachment; filename="export.zip"'},
    )
    client = make_client(entity_id="tenant-1")

    download = run(client.data.download("job_export"))

    request = server.last
    assert request.url.path == "/v1/data/export/job_export/download"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["X-Entity-ID"] == "tenant-1"
    assert download.content == b"PK\x03\x04zip-bytes"
    assert download.content_type == "application/zip"
    assert download.filename == "export.zip"


def test_download_not_found(server, client):
    server.queue_error(404, "Export not found")
    with pytest.raises(KeyokuError) as excinfo:
        run(client.data.download("job_missing"))
    assert excinfo.value.kind is ErrorKind.NOT_FOUND


def test_download_to_directory(server, client, tmp_path):
    server.queue_bytes(b"{}", headers={"Content-Disposition": "attachment; filename=../../evil.json"})

    path = run(client.data.download_to("job_export", tmp_path))

    assert path == tmp_path / "evil.json"
    assert path.read_bytes() == b"{}"


def test_download_to_file_without_filename(server, client, tmp_path):
    server.queue_bytes(b"data")
    target = tmp_path / "nested" / "out.bin"
    path = run(client.data.download_to("job_export", target))
    assert path == target
    assert target.read_bytes() == b"data"
