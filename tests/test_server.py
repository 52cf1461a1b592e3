"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from entity_lookup_flow.server import create_app


@pytest.fixture
def client(store):
    with TestClient(create_app(record_store=store)) as client:
        yield client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["entity_types"] == ["node", "media"]


def test_lookup_resolves(client):
    response = client.post("/lookup", json={
        "value": ["A-1", "A-2"],
        "configuration": {"bundle": "article", "lookup_field": "field_old_id", "return_field": "title"},
    })
    assert response.status_code == 200
    assert response.json() == {
        "output": ["One", "Two", "Three"],
        "found": True,
        "status": "resolved",
        "error": None,
    }


def test_lookup_passes_through_engine_error(client):
    response = client.post("/lookup", json={
        "value": "A-1",
        "configuration": {"entity_type": "comment", "bundle": "x", "lookup_field": "y"},
    })
    body = response.json()
    assert response.status_code == 200
    assert body["output"] == "A-1"
    assert body["status"] == "engine_error"
    assert "comment" in body["error"]


def test_options(client):
    response = client.get("/options", params={"entity_type": "node", "bundle": "page"})
    body = response.json()
    assert body["bundle"] == {"article": "Article", "page": "Basic page"}
    assert "field_old_id" in body["lookup_field"]
    assert list(body["return_field"])[0] == "entity_id"


def test_components(client):
    listing = client.get("/components").json()
    assert "transform/lookup_entity" in listing["components"]["transform"]

    manifest = client.get("/components/transform/lookup_entity").json()
    assert manifest["outputs"].keys() == {"value", "found", "status"}
    assert client.get("/components/transform/nope").status_code == 404


def test_records_file_loaded_at_startup(tmp_path):
    path = tmp_path / "records.yaml"
    path.write_text("node:\n  records:\n    - id: 7\n      bundle: article\n      fields:\n        field_old_id: Z\n")
    with TestClient(create_app(records_path=path)) as client:
        body = client.post("/lookup", json={
            "value": "Z",
            "configuration": {"bundle": "article", "lookup_field": "field_old_id"},
        }).json()
    assert body["output"] == [7]


def test_no_store_is_unavailable(tmp_path):
    with TestClient(create_app(records_path=tmp_path / "missing.yaml")) as client:
        assert client.post("/lookup", json={"value": "A"}).status_code == 503
