"""Tests for API middleware."""

import pytest
from fastapi.testclient import TestClient

from catalogue_api.catalogue.service import CatalogueService


class TestRequestContextMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        # UUID format
        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get(
            "/catalogue",
            headers={"X-Request-ID": custom_id},
        )
        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id

    def test_error_body_carries_request_id(self, client: TestClient, make_item) -> None:
        """Error responses should echo the request ID."""
        client.post("/catalogue", json=make_item(1))
        response = client.post(
            "/catalogue",
            json=make_item(1),
            headers={"X-Request-ID": "dup-request"},
        )
        assert response.status_code == 400
        assert response.json()["request_id"] == "dup-request"


class TestCors:
    """Tests for CORS configuration."""

    def test_export_header_is_exposed(self, client: TestClient) -> None:
        """Browsers should be able to read the export filename header."""
        response = client.get(
            "/catalogue",
            headers={"Origin": "http://localhost:3000"},
        )
        assert response.status_code == 200
        assert "Content-Disposition" in response.headers["access-control-expose-headers"]


class TestUnhandledErrors:
    """Tests for the 500 fallback."""

    def test_unhandled_error_returns_standard_body(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should answer 500 with the error body and keep the request ID."""

        async def fail(*args, **kwargs):
            raise RuntimeError("storage unavailable")

        monkeypatch.setattr(CatalogueService, "list_items", fail)

        response = client.get("/catalogue", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "An internal error occurred",
            "error_code": "INTERNAL_ERROR",
            "details": {},
            "request_id": "req-500",
        }
        assert response.headers["X-Request-ID"] == "req-500"
