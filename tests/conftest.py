"""Shared fixtures for the MyRover carrier test suite.

BigCommerce is faked with an ``httpx.MockTransport`` injected into the app's
AsyncClient, so no test touches the network.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from myrover_carrier.config import Settings
from myrover_carrier.credentials import InMemoryCredentialStore
from myrover_carrier.serve import create_app


class FakeBigCommerce:
    """Records outbound requests and answers token/metadata calls with canned responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.token_json: Any = {
            "access_token": "T",
            "scope": "store_v2_default",
            "context": "stores/abc123",
            "user": {"id": 1, "email": "merchant@example.com"},
        }
        self.metadata_status = 200
        self.metadata_body: bytes = b'{"data": []}'
        self.token_error: Exception | None = None
        self.metadata_error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/oauth2/token":
            if self.token_error is not None:
                raise self.token_error
            return httpx.Response(self.token_status, json=self.token_json)
        if request.url.path.endswith("/v3/app/metadata"):
            if self.metadata_error is not None:
                raise self.metadata_error
            return httpx.Response(
                self.metadata_status,
                content=self.metadata_body,
                headers={"Content-Type": "application/json"},
            )
        return httpx.Response(404, json={"title": "Not Found"})

    def requests_to(self, fragment: str) -> list[httpx.Request]:
        return [r for r in self.requests if fragment in r.url.path]


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        bc_client_id="test-client-id",
        bc_client_secret="test-client-secret",
        app_url="https://carrier.example.com",
    )


@pytest.fixture()
def fake_bc() -> FakeBigCommerce:
    return FakeBigCommerce()


@pytest.fixture()
def mock_http_client(fake_bc: FakeBigCommerce) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_bc))


@pytest.fixture()
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def make_client(store, mock_http_client) -> Callable[..., TestClient]:
    """Factory for a TestClient over an app built with the given settings."""

    def _make(app_settings: Settings) -> TestClient:
        app = create_app(settings=app_settings, store=store, http_client=mock_http_client)
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture()
def client(make_client, settings):
    """TestClient with lifespan running (metadata tasks drained on exit)."""
    with make_client(settings) as c:
        yield c
