from __future__ import annotations

import inspect

import pytest
from fastapi.testclient import TestClient

from catalog_search.core.config import settings
from catalog_search.db.catalog import Catalog, reset_catalog
from catalog_search.main import create_app, get_catalog_dep, get_recent_dep
from catalog_search.services.recent import RecentQueries


@pytest.fixture
def client(records, tmp_path):
    app = create_app()
    catalog = Catalog(records)
    store = RecentQueries(tmp_path / "recent.json")
    app.dependency_overrides[get_catalog_dep] = lambda: catalog
    app.dependency_overrides[get_recent_dep] = lambda: store
    return TestClient(app)


def test_healthz_and_root(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    body = client.get("/").json()
    assert body["service"] == settings.app_name


def test_categories_prepend_sentinel(client):
    r = client.get("/categories")
    assert r.status_code == 200
    assert r.json() == {"categories": ["all", "Закупки", "Кадры", "Финансы"]}


def test_search_ranks_and_highlights(client):
    r = client.post("/search", json={"query": "аудит", "category": "all", "sort": "relevance"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert [i["id"] for i in body["items"]] == [4, 1]
    assert [i["score"] for i in body["items"]] == [3, 3]
    text = body["items"][0]["text"]
    assert "".join(s["text"] for s in text) == "Аудит договоров перед тендером, аудит контрагентов"
    assert [s["text"] for s in text if s["match"]] == ["Аудит", "аудит"]


def test_search_defaults_and_missing_fields(client):
    r = client.post("/search", json={})
    body = r.json()
    assert body["total"] == 5
    last = next(i for i in body["items"] if i["id"] == 5)
    assert last["text"] == [{"text": "", "match": False}]
    assert last["tags"] == []


def test_search_category_filter(client):
    body = client.post("/search", json={"category": "Кадры", "sort": "ascending-alphabetical"}).json()
    assert [i["id"] for i in body["items"]] == [5]
    assert client.post("/search", json={"category": "Нет"}).json() == {"total": 0, "items": []}


def test_search_rejects_unknown_sort(client):
    assert client.post("/search", json={"sort": "newest"}).status_code == 422


def test_highlight_endpoint(client):
    body = client.post("/highlight", json={"query": "a.b+c", "text": "a.b+c is a.bXc"}).json()
    assert body["segments"] == [
        {"text": "", "match": False},
        {"text": "a.b+c", "match": True},
        {"text": " is a.bXc", "match": False},
    ]


def test_recent_roundtrip(client):
    assert client.get("/recent").json() == {"items": []}
    client.post("/recent", json={"query": " аудит "})
    client.post("/recent", json={"query": "тендер"})
    assert client.post("/recent", json={"query": "аудит"}).json() == {"items": ["аудит", "тендер"]}
    assert client.delete("/recent").json() == {"items": []}
    assert client.get("/recent").json() == {"items": []}


def test_metrics_exposed(client):
    client.post("/search", json={"query": "zzz"})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "search_requests_total{outcome=\"empty\"}" in r.text


def test_catalog_unavailable_is_503(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "catalog_path", str(tmp_path / "missing.json"))
    reset_catalog()
    try:
        client = TestClient(create_app())
        r = client.post("/search", json={"query": "x"})
        assert r.status_code == 503
        assert client.get("/categories").status_code == 503
    finally:
        reset_catalog()


def test_recent_handlers_run_in_threadpool():
    app = create_app()
    endpoints = {
        (route.path, method): route.endpoint
        for route in app.routes
        if route.path == "/recent"
        for method in route.methods
    }
    assert endpoints
    assert not any(inspect.iscoroutinefunction(fn) for fn in endpoints.values())
