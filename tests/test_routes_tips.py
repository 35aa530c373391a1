"""Tests for the catalog HTTP API routes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.testclient import TestClient

from gastips.catalog.config import CatalogConfig
from gastips.catalog.index import Catalog
from gastips.catalog.loader import load_catalog
from gastips.server.app import create_app


@pytest.fixture
def app(catalog: Catalog) -> Starlette:
    return create_app(catalog=catalog)


@pytest.fixture
def client(app: Starlette):
    with TestClient(app) as c:
        yield c


@pytest.mark.unit
class TestLifespan:
    def test_catalog_on_state(self, app: Starlette, catalog: Catalog) -> None:
        with TestClient(app):
            assert app.state.catalog is catalog  # type: ignore[attr-defined]

    def test_loads_from_config(self, tmp_path: Path, sample_records) -> None:
        path = tmp_path / "tips.json"
        path.write_text(json.dumps(sample_records))
        app = create_app(config=CatalogConfig(source=str(path)))
        with TestClient(app) as c:
            assert c.get("/health").json()["rules"] == 3

    def test_bundled_by_default(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GASTIPS_CATALOG", raising=False)
        with TestClient(create_app()) as c:
            assert c.get("/health").json()["rules"] == 20


@pytest.mark.unit
class TestSystemRoutes:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "rules": 3}

    def test_version(self, client: TestClient) -> None:
        assert "version" in client.get("/api/version").json()


@pytest.mark.unit
class TestTipsRoutes:
    def test_list_in_order(self, client: TestClient, catalog: Catalog) -> None:
        resp = client.get("/api/tips")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 3
        assert [t["id"] for t in data["tips"]] == catalog.ids()

    def test_list_with_query(self, client: TestClient) -> None:
        data = client.get("/api/tips", params={"q": "slot"}).json()
        assert [t["id"] for t in data["tips"]] == ["pack-storage-variables"]

    def test_get_tip(self, client: TestClient) -> None:
        resp = client.get("/api/tips/pack-storage-variables")
        assert resp.status_code == 200
        body = resp.json()
        assert body["title"] == "Pack storage variables"
        assert body["efficient_example"] == "uint128 a;\nuint128 c;\nuint256 b;"

    def test_get_unknown_tip_404(self, client: TestClient) -> None:
        resp = client.get("/api/tips/nope")
        assert resp.status_code == 404
        assert "not found" in resp.json()["error"]

    def test_snapshot(self, client: TestClient, catalog: Catalog) -> None:
        data = client.get("/api/snapshot").json()
        assert data["count"] == 3
        assert data["snapshot_hash"] == catalog.snapshot().snapshot_hash

    def test_render(self, client: TestClient) -> None:
        resp = client.get("/api/render")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/markdown")
        assert "## 1. Use immutable" in resp.text

    def test_read_only(self, client: TestClient) -> None:
        assert client.post("/api/tips", json={}).status_code == 405


@pytest.mark.unit
class TestTipIdsNamedLikeEndpoints:
    @pytest.fixture
    def client(self):
        catalog = load_catalog(
            [
                {"title": "Snapshot", "rationale": "A tip whose id is 'snapshot'."},
                {"title": "Render", "rationale": "A tip whose id is 'render'."},
            ]
        )
        with TestClient(create_app(catalog=catalog)) as c:
            yield c

    def test_snapshot_tip_fetchable_by_id(self, client: TestClient) -> None:
        resp = client.get("/api/tips/snapshot")
        assert resp.status_code == 200
        assert resp.json()["id"] == "snapshot"
        assert resp.json()["title"] == "Snapshot"

    def test_render_tip_fetchable_by_id(self, client: TestClient) -> None:
        resp = client.get("/api/tips/render")
        assert resp.status_code == 200
        assert resp.json()["id"] == "render"

    def test_catalog_endpoints_still_reachable(self, client: TestClient) -> None:
        assert client.get("/api/snapshot").json()["count"] == 2
        assert client.get("/api/render").text.startswith("# ")
