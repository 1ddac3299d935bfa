"""Pytest configuration for unified-oauth tests."""

from typing import Any

import httpx
import pytest
import structlog

from unified_oauth import ProviderConfig


@pytest.fixture(autouse=True)
def configure_structlog():
    """Render provider log events to the console, so failures show the adapter's events."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def provider_config():
    """Create a test provider configuration."""
    return ProviderConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://localhost:3000/auth/callback",
        scopes=["openid", "profile", "email"],
    )


@pytest.fixture
def make_response():
    """Factory for httpx responses as returned by the provider endpoints."""

    def _make(json_data: Any = None, status_code: int = 200) -> httpx.Response:
        request = httpx.Request("GET", "https://provider.example.com/endpoint")
        if json_data is None:
            return httpx.Response(status_code, request=request)
        return httpx.Response(status_code, json=json_data, request=request)

    return _make
