# =============================================================================
# tests/test_api.py - HTTP Endpoint Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient:
# - /applications CRUD and listing
# - Validation failures reported as 400 envelopes
# - /health-check and /metrics
#
# Each test gets its own app and store (see conftest.py).
# =============================================================================

import inspect
import math
from unittest.mock import MagicMock

import pytest
from fastapi import Request
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_application_service
from app.main import build_store, create_app, route_label
from app.routers import applications
from core.services.application_service import ApplicationService
from lib.application_store import ApplicationStore
from lib.seed import SeedDataError


def assert_invalid_input(response):
    body = response.json()
    assert response.status_code == 400
    assert body["success"] is False
    assert body["message"].startswith("Invalid input")
    assert body["responseObject"] is None
    assert body["statusCode"] == 400


def assert_not_found(response):
    body = response.json()
    assert response.status_code == 404
    assert body["success"] is False
    assert body["message"] == "Application not found"
    assert body["responseObject"] is None


# =============================================================================
# GET /applications
# =============================================================================

class TestListApplications:

    def test_returns_a_page(self, client):
        page, page_size = 1, 2

        response = client.get(f"/applications?page={page}&pageSize={page_size}")
        body = response.json()
        result = body["responseObject"]

        assert response.status_code == 200
        assert body["success"] is True
        assert body["message"] == "Success"
        assert body["statusCode"] == 200
        assert len(result["records"]) <= page_size
        assert result["count"] == 5
        assert result["totalPages"] == math.ceil(5 / page_size)
        assert result["currentPage"] == page
        assert result["nextPage"] == 2
        assert result["prevPage"] is None

    def test_no_duplicate_ids(self, client):
        records = client.get("/applications?pageSize=100").json()["responseObject"]["records"]
        record_ids = [r["id"] for r in records]
        assert len(record_ids) == len(set(record_ids))

    def test_defaults_sort_by_name(self, client):
        result = client.get("/applications").json()["responseObject"]

        assert [r["id"] for r in result["records"]] == ["3", "5", "4", "1", "2"]
        assert result["totalPages"] == 1

    def test_filter_and_sort(self, client):
        response = client.get(
            "/applications",
            params={"filterByName": "SOLAR", "sortBy": "name", "sortOrder": "desc"},
        )
        records = response.json()["responseObject"]["records"]

        assert [r["id"] for r in records] == ["1", "4"]

    def test_filter_by_status(self, client):
        response = client.get("/applications", params={"filterByStatus": "In_Review"})
        records = response.json()["responseObject"]["records"]

        assert {r["id"] for r in records} == {"2", "5"}

    def test_last_page(self, client):
        result = client.get("/applications?page=3&pageSize=2").json()["responseObject"]

        assert [r["id"] for r in result["records"]] == ["2"]
        assert result["nextPage"] is None
        assert result["prevPage"] == 2

    def test_page_past_end_is_empty(self, client):
        response = client.get("/applications?page=50&pageSize=2")

        assert response.status_code == 200
        assert response.json()["responseObject"]["records"] == []

    @pytest.mark.parametrize("query", [
        "page=0",
        "page=abc",
        "pageSize=0",
        "pageSize=-5",
        "sortBy=description",
        "sortOrder=sideways",
    ])
    def test_invalid_query(self, client, query):
        assert_invalid_input(client.get(f"/applications?{query}"))

    def test_page_size_above_limit(self, store):
        app = create_app(store=store, app_settings=Settings(MAX_PAGE_SIZE=3))

        with TestClient(app) as test_client:
            assert_invalid_input(test_client.get("/applications?pageSize=4"))
            assert test_client.get("/applications?pageSize=3").status_code == 200

    def test_default_page_size_from_settings(self, store):
        app = create_app(store=store, app_settings=Settings(DEFAULT_PAGE_SIZE=2))

        with TestClient(app) as test_client:
            result = test_client.get("/applications").json()["responseObject"]

        assert len(result["records"]) == 2
        assert result["totalPages"] == 3


# =============================================================================
# GET /applications/{id}
# =============================================================================

class TestGetApplication:

    def test_found(self, client):
        response = client.get("/applications/1")
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["message"] == "Application found"
        assert body["responseObject"] == {
            "id": "1",
            "name": "Solar Panel Maintenance",
            "description": "Test application",
            "status": "approved",
        }

    def test_id_is_normalized(self, client):
        assert client.get("/applications/001").json()["responseObject"]["id"] == "1"

    def test_not_found(self, client):
        assert_not_found(client.get("/applications/9007199254740991"))

    def test_decimal_id_with_integer_value(self, client):
        assert client.get("/applications/1.0").json()["responseObject"]["id"] == "1"

    def test_fractional_id_is_not_found(self, client):
        assert_not_found(client.get("/applications/1.5"))

    def test_invalid_id(self, client):
        assert_invalid_input(client.get("/applications/abc"))

    @pytest.mark.parametrize("record_id", [
        "1_0",
        "%D9%A1",  # ARABIC-INDIC DIGIT ONE
    ])
    def test_id_must_use_ascii_digits(self, client, record_id):
        response = client.get(f"/applications/{record_id}")

        assert_invalid_input(response)
        assert "numeric" in response.json()["message"]


# =============================================================================
# POST /applications
# =============================================================================

class TestCreateApplication:

    def test_create(self, client):
        payload = {"name": "New Application", "description": "This is a new application"}

        response = client.post("/applications", json=payload)
        body = response.json()

        assert response.status_code == 201
        assert body["success"] is True
        assert body["message"] == "Application created"
        assert body["statusCode"] == 201
        assert body["responseObject"] == {
            "id": "6",
            "name": "New Application",
            "description": "This is a new application",
            "status": "in_review",
        }
        assert client.get("/applications/6").status_code == 200

    def test_status_in_body_is_ignored(self, client):
        payload = {"name": "X", "description": "Y", "status": "approved"}
        body = client.post("/applications", json=payload).json()
        assert body["responseObject"]["status"] == "in_review"

    @pytest.mark.parametrize("payload", [
        {"name": "", "description": "This is a new application"},
        {"name": "X", "description": ""},
        {"name": "X", "description": "x" * 501},
        {"description": "missing name"},
        {},
    ])
    def test_invalid_body(self, client, payload):
        assert_invalid_input(client.post("/applications", json=payload))

    def test_malformed_json(self, client):
        response = client.post(
            "/applications",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert_invalid_input(response)


# =============================================================================
# PATCH /applications/{id}
# =============================================================================

class TestUpdateApplication:

    def test_update_name(self, client):
        response = client.patch("/applications/1", json={"name": "Updated Application"})
        body = response.json()

        assert response.status_code == 200
        assert body["message"] == "Application updated"
        assert body["responseObject"]["name"] == "Updated Application"
        assert body["responseObject"]["status"] == "approved"

    def test_update_status(self, client):
        client.patch("/applications/2", json={"status": "rejected"})
        assert client.get("/applications/2").json()["responseObject"]["status"] == "rejected"

    @pytest.mark.parametrize("payload", [
        {"name": ""},
        {"status": "pending"},
        {"description": "x" * 501},
        {"name": None},
        {"name": None, "status": "approved"},
        {"status": None},
        {},
    ])
    def test_invalid_body(self, client, payload):
        assert_invalid_input(client.patch("/applications/1", json=payload))

    def test_null_field_leaves_record_unchanged(self, client):
        response = client.patch("/applications/2", json={"name": None, "status": "approved"})

        assert "cannot be null" in response.json()["message"]
        assert client.get("/applications/2").json()["responseObject"]["status"] == "in_review"

    def test_empty_body_message(self, client):
        body = client.patch("/applications/1", json={}).json()
        assert "At least one field" in body["message"]

    def test_not_found(self, client):
        assert_not_found(client.patch("/applications/9007199254740991", json={"name": "X"}))

    def test_invalid_id(self, client):
        assert_invalid_input(client.patch("/applications/abc", json={"name": "X"}))

    def test_underscored_id_does_not_address_a_record(self, client):
        assert_invalid_input(client.patch("/applications/1_0", json={"name": "X"}))
        assert client.get("/applications/1").json()["responseObject"]["name"] != "X"


# =============================================================================
# DELETE /applications/{id}
# =============================================================================

class TestDeleteApplication:

    def test_delete(self, client):
        response = client.delete("/applications/3")

        assert response.status_code == 204
        assert response.content == b""
        assert_not_found(client.get("/applications/3"))

    def test_not_found(self, client):
        assert_not_found(client.delete("/applications/9007199254740991"))

    def test_invalid_id(self, client):
        assert_invalid_input(client.delete("/applications/abc"))

    def test_fractional_id_is_not_found(self, client):
        assert_not_found(client.delete("/applications/1.5"))

    def test_ids_not_reused_after_delete(self, client):
        client.delete("/applications/5")
        body = client.post("/applications", json={"name": "X", "description": "Y"}).json()
        assert body["responseObject"]["id"] == "6"


# =============================================================================
# Internal Errors
# =============================================================================

class TestInternalErrors:

    def test_store_failure_returns_generic_500(self, store):
        broken_store = MagicMock(spec=ApplicationStore)
        broken_store.find_all.side_effect = RuntimeError("connection refused")

        app = create_app(store=store)
        app.dependency_overrides[get_application_service] = lambda: ApplicationService(broken_store)

        with TestClient(app) as test_client:
            response = test_client.get("/applications")

        body = response.json()
        assert response.status_code == 500
        assert body["success"] is False
        assert body["message"] == "An error occurred while retrieving applications."
        assert "connection refused" not in response.text


# =============================================================================
# Seed Data
# =============================================================================

class TestSeededApp:
    """App started normally, loading data/seed.json."""

    def test_lists_deduplicated_seed(self, seeded_client):
        result = seeded_client.get("/applications?pageSize=100").json()["responseObject"]
        assert result["count"] == 40

    def test_create_continues_after_max_seed_id(self, seeded_client):
        body = seeded_client.post(
            "/applications",
            json={"name": "New Appplication", "description": "This is a new application"},
        ).json()

        assert body["responseObject"]["id"] == "41"
        assert body["responseObject"]["status"] == "in_review"

    def test_build_store_fails_on_bad_seed(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text("not json")

        with pytest.raises(SeedDataError, match="seed data"):
            build_store(Settings(SEED_DATA_PATH=path))

    def test_build_store_from_settings(self, seed_file):
        store = build_store(Settings(SEED_DATA_PATH=seed_file))

        assert len(store) == 2
        assert store.last_id == 2


# =============================================================================
# Health & Metrics
# =============================================================================

class TestHealthCheck:

    def test_health_check(self, client):
        response = client.get("/health-check")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Service is healthy",
            "responseObject": None,
            "statusCode": 200,
        }

    def test_ready(self, client):
        body = client.get("/health-check/ready").json()

        assert body["status"] == "ready"
        assert body["checks"]["record_count"] == 5

    def test_ready_reports_app_environment(self, store):
        app = create_app(store=store, app_settings=Settings(ENVIRONMENT="staging"))

        with TestClient(app) as test_client:
            body = test_client.get("/health-check/ready").json()

        assert body["environment"] == "staging"

    def test_live(self, client):
        assert client.get("/health-check/live").json()["status"] == "alive"


class TestMetrics:

    def test_exposes_request_histogram(self, client):
        client.get("/applications")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "http_request_duration_seconds" in response.text
        assert 'route="/applications"' in response.text
        assert 'route=""' not in response.text

    def test_route_label_uses_path_template(self, client):
        client.get("/applications/3")
        client.get("/applications/4")

        text = client.get("/metrics").text

        assert 'route="/applications/{id}"' in text
        assert 'route="/applications/3"' not in text

    def test_unmatched_request_is_labelled_with_its_path(self, client):
        client.get("/does-not-exist")

        assert 'route="/does-not-exist"' in client.get("/metrics").text

    @pytest.mark.parametrize("root_path, route_path, expected", [
        ("", "/applications/{id}", "/applications/{id}"),
        ("/applications", "/{id}", "/applications/{id}"),
        ("/applications", "", "/applications"),
    ])
    def test_route_label_joins_router_prefix(self, root_path, route_path, expected):
        request = Request({
            "type": "http",
            "root_path": root_path,
            "route": MagicMock(path=route_path),
        })

        assert route_label(request) == expected

    def test_metrics_can_be_disabled(self, store):
        app = create_app(store=store, app_settings=Settings(METRICS_ENABLED=False))

        with TestClient(app) as test_client:
            assert test_client.get("/metrics").status_code == 404


class TestRouting:

    def test_unknown_route(self, client):
        assert client.get("/does-not-exist").status_code == 404

    def test_openapi_document(self, client):
        paths = client.get("/openapi.json").json()["paths"]

        assert "/applications" in paths
        assert "/applications/{id}" in paths
        assert "/health-check" in paths

    def test_application_handlers_run_in_threadpool(self):
        endpoints = [
            route.endpoint for route in applications.router.routes
            if isinstance(route, APIRoute)
        ]

        assert len(endpoints) == 5
        assert not any(inspect.iscoroutinefunction(endpoint) for endpoint in endpoints)


class TestEntryPoint:

    def test_run_serves_on_configured_host_and_port(self, monkeypatch):
        import app.main as main_module

        served = MagicMock()
        monkeypatch.setattr(main_module.uvicorn, "run", served)
        monkeypatch.setattr(
            main_module,
            "default_settings",
            Settings(API_HOST="127.0.0.1", API_PORT=9000, ENVIRONMENT="production"),
        )

        main_module.run()

        served.assert_called_once_with("app.main:app", host="127.0.0.1", port=9000, reload=False)

    def test_run_reloads_in_development(self, monkeypatch):
        import app.main as main_module

        served = MagicMock()
        monkeypatch.setattr(main_module.uvicorn, "run", served)
        monkeypatch.setattr(main_module, "default_settings", Settings(ENVIRONMENT="development"))

        main_module.run()

        assert served.call_args.kwargs["reload"] is True
        assert served.call_args.kwargs["port"] == 8080
