from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from screenshot_relay import screenshot
from screenshot_relay.config import Settings
from screenshot_relay.errors import RenderFailure
from screenshot_relay.main import create_app
from screenshot_relay.models import ScreenshotResult

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"


def basic_header(user: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(allowed_hosts=frozenset({"localhost", "your-site.example"}))


@pytest.fixture
def auth_settings() -> Settings:
    return Settings(
        allowed_hosts=frozenset({"localhost", "your-site.example"}),
        basic_user="admin",
        basic_pass="s3cret",
    )


@pytest.fixture
def captured(monkeypatch):
    """Replace the browser with a recorder returning a fixed PNG."""
    calls: list[dict] = []

    async def fake_capture(url, *, viewport=None, timeout_ms=15000):
        calls.append({"url": url, "viewport": viewport, "timeout_ms": timeout_ms})
        return ScreenshotResult(mime="image/png", data=PNG_BYTES)

    monkeypatch.setattr(screenshot, "capture_screenshot", fake_capture)
    return calls


@pytest.fixture
def failing_capture(monkeypatch):
    async def fake_capture(url, *, viewport=None, timeout_ms=15000):
        raise RenderFailure()

    monkeypatch.setattr(screenshot, "capture_screenshot", fake_capture)


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def auth_client(auth_settings) -> TestClient:
    return TestClient(create_app(auth_settings))
