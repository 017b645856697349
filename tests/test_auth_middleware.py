"""Tests for HTTP Basic Auth middleware."""

import base64
from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from config.settings import Settings
from wagewise.api.app import BasicAuthMiddleware, create_app

_TEST_USER = b"testuser"
_TEST_PASS = b"testpass123"


def _build_app() -> FastAPI:
    """Build a minimal app with BasicAuthMiddleware for testing."""
    app = FastAPI()
    app.add_middleware(BasicAuthMiddleware)

    @app.get("/test")
    async def test_route() -> dict[str, str]:
        return {"status": "ok"}

    return app


def _auth_header(username: str, password: str) -> dict[str, str]:
    """Build a Basic Auth header."""
    creds = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {creds}"}


@patch("wagewise.api.app.AUTH_USERNAME", _TEST_USER)
@patch("wagewise.api.app.AUTH_PASSWORD", _TEST_PASS)
def test_valid_credentials_pass() -> None:
    """Correct credentials return 200."""
    app = _build_app()
    client = TestClient(app)
    response = client.get("/test", headers=_auth_header("testuser", "testpass123"))
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@patch("wagewise.api.app.AUTH_USERNAME", _TEST_USER)
@patch("wagewise.api.app.AUTH_PASSWORD", _TEST_PASS)
def test_missing_auth_header_returns_401() -> None:
    """No Authorization header returns 401 with WWW-Authenticate."""
    app = _build_app()
    client = TestClient(app)
    response = client.get("/test")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Basic"


@patch("wagewise.api.app.AUTH_USERNAME", _TEST_USER)
@patch("wagewise.api.app.AUTH_PASSWORD", _TEST_PASS)
def test_invalid_credentials_returns_401() -> None:
    """Wrong password returns 401."""
    app = _build_app()
    client = TestClient(app)
    response = client.get("/test", headers=_auth_header("testuser", "wrongpassword"))
    assert response.status_code == 401


@patch("wagewise.api.app.AUTH_USERNAME", _TEST_USER)
@patch("wagewise.api.app.AUTH_PASSWORD", _TEST_PASS)
def test_malformed_base64_returns_401() -> None:
    """Garbage in Authorization header returns 401."""
    app = _build_app()
    client = TestClient(app)
    response = client.get("/test", headers={"Authorization": "Basic !!!not-base64!!!"})
    assert response.status_code == 401


@patch("wagewise.api.app.AUTH_USERNAME", _TEST_USER)
@patch("wagewise.api.app.AUTH_PASSWORD", _TEST_PASS)
def test_password_containing_colon() -> None:
    """Only the first colon separates username from password."""
    app = _build_app()
    client = TestClient(app)
    response = client.get("/test", headers=_auth_header("testuser", "testpass123"))
    assert response.status_code == 200
    response = client.get("/test", headers=_auth_header("testuser:testpass123", ""))
    assert response.status_code == 401


def test_create_app_skips_auth_without_credentials() -> None:
    """With no configured credentials the API is open."""
    with patch("wagewise.api.app.settings", Settings(auth_username="", auth_password="")):
        app = create_app()
    client = TestClient(app)
    assert client.get("/health").status_code == 200


def test_create_app_enforces_auth_with_credentials() -> None:
    configured = Settings(auth_username="testuser", auth_password="testpass123")
    with (
        patch("wagewise.api.app.settings", configured),
        patch("wagewise.api.app.AUTH_USERNAME", _TEST_USER),
        patch("wagewise.api.app.AUTH_PASSWORD", _TEST_PASS),
    ):
        app = create_app()
        client = TestClient(app)
        assert client.get("/health").status_code == 401
        response = client.get("/health", headers=_auth_header("testuser", "testpass123"))
        assert response.status_code == 200
