"""Tests for GraphResource.find_path."""

from conftest import run, sample


def test_find_path_defaults(server, client):
    server.queue_json(
        {
            "path": True,
            "entities": [sample("entity", id="ent_1"), sample("entity", id="ent_2")],
            "relationships": [sample("relationship")],
        }
    )

    result = run(client.graph.find_path("ent_1", "ent_2"))

    assert server.last.url.path == "/v1/graph/path"
    assert dict(server.last.url.params) == {"from": "ent_1", "to": "ent_2", "max_depth": "5"}
    assert result is not None
    assert [e.id for e in result.entities] == ["ent_1", "ent_2"]
    assert result.length == 1


def test_find_path_joins_relationship_types(server, client):
    server.queue_json({"path": True, "entities": [], "relationships": []})

    result = run(client.graph.find_path("a", "b", max_depth=3, relationship_types=["knows", "works_at"]))

    params = dict(server.last.url.params)
    assert params["max_depth"] == "3"
    assert params["relationship_types"] == "knows,works_at"
    assert result.length == 0


def test_find_path_returns_none_when_no_path(server, client):
    server.queue_json({"path": False, "entities": [], "relationships": []})
    assert run(client.graph.find_path("a", "b")) is None


def test_find_path_empty_body_is_none(server, client):
    server.queue_bytes(b"", status=200)
    assert run(client.graph.find_path("a", "b")) is None
