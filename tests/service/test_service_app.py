"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient

from getdocs.registry import Registry
from getdocs.service import create_app


@pytest.fixture
def client(simple_registry: Registry) -> TestClient:
    return TestClient(create_app(lambda: simple_registry))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_types_endpoint_lists_registry(client: TestClient) -> None:
    response = client.get("/types")
    assert response.status_code == 200
    assert response.json() == {"types": ["Simple", "SimpleMap"]}


def test_docs_endpoint_returns_nested_tree(client: TestClient) -> None:
    response = client.get("/types/SimpleMap/docs")
    assert response.status_code == 200
    data = response.json()
    assert data["type_name"] == "SimpleMap"
    (simple,) = data["fields"]
    assert simple["name"] == "simple"
    assert simple["doc_lines"] == ["Map for simple struct"]
    assert [child["name"] for child in simple["children"]] == ["name", "length"]


def test_docs_endpoint_wraps_root(client: TestClient) -> None:
    response = client.get("/types/Simple/docs", params={"wrap_root": "true"})
    assert response.status_code == 200
    (root,) = response.json()["fields"]
    assert root["name"] == "Simple"
    assert [child["name"] for child in root["children"]] == ["name", "length"]


def test_docs_endpoint_unknown_type_is_404(client: TestClient) -> None:
    response = client.get("/types/DoesNotExist/docs")
    assert response.status_code == 404
    assert "DoesNotExist" in response.json()["detail"]
