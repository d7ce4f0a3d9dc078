"""Tests for main application routes and middleware."""
from unittest.mock import patch

from fastapi.testclient import TestClient

from vies_proxy import __version__
from vies_proxy.api.routes.vies import get_lookup_service
from vies_proxy.main import app

client = TestClient(app)


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "version": __version__}


def test_security_headers() -> None:
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_cors_allowed_origin_echoed() -> None:
    response = client.get("/health", headers={"Origin": "https://shop.example.com"})
    assert response.headers["access-control-allow-origin"] == "https://shop.example.com"
    assert "Origin" in response.headers.get("vary", "")


def test_cors_unknown_origin_not_echoed() -> None:
    response = client.get("/health", headers={"Origin": "https://evil.example.net"})
    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


def test_cors_preflight() -> None:
    response = client.options(
        "/api/vies-check",
        headers={
            "Origin": "https://admin.example.com",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://admin.example.com"
    assert "GET" in response.headers["access-control-allow-methods"]


def test_shutdown_closes_vies_session() -> None:
    get_lookup_service.cache_clear()
    with patch("vies_proxy.connectors.vies.client.requests.Session") as MockSession:
        with TestClient(app):
            get_lookup_service()
        MockSession.return_value.close.assert_called_once()
    assert get_lookup_service.cache_info().currsize == 0


def test_shutdown_without_lookups_builds_nothing() -> None:
    get_lookup_service.cache_clear()
    with patch("vies_proxy.connectors.vies.client.requests.Session") as MockSession:
        with TestClient(app):
            pass
        MockSession.assert_not_called()
