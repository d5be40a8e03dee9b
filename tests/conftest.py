"""
Pytest config.

Las llamadas a Google se reemplazan por un `FakeProvider` que hace de fábrica de
sesiones OAuth: el `GoogleOAuthClient` real corre completo, solo cambia el
transporte.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import pytest
import requests
from authlib.integrations.base_client import OAuthError


def _ensure_repo_root_on_syspath() -> None:
    repo_root = str(Path(__file__).resolve().parents[1])
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ensure_repo_root_on_syspath()

from login_backend import create_app  # noqa: E402
from login_backend.auth.infrastructure.oauth import GoogleOAuthClient  # noqa: E402
from login_backend.auth.infrastructure.user import InMemoryUserStore  # noqa: E402
from login_backend.config import Settings  # noqa: E402


class FakeResponse:
    def __init__(self, payload: Any, status: int = 200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeOAuthSession:
    def __init__(self, provider: "FakeProvider", init_kwargs: dict[str, Any]):
        self.provider = provider
        self.init_kwargs = init_kwargs

    def create_authorization_url(self, url: str, **kwargs):  # type: ignore[no-untyped-def]
        params = {
            "response_type": "code",
            "client_id": self.init_kwargs["client_id"],
            "redirect_uri": self.init_kwargs.get("redirect_uri"),
            "scope": self.init_kwargs.get("scope"),
            "state": "fake-state",
            **kwargs,
        }
        return f"{url}?{urlencode(params)}", "fake-state"

    def fetch_token(self, url: str, **kwargs):  # type: ignore[no-untyped-def]
        self.provider.calls.append(("token", url, kwargs, self.init_kwargs))
        resp = self.provider.token_response
        if isinstance(resp, Exception):
            raise resp
        # igual que Authlib: un campo `error` en la respuesta se vuelve OAuthError
        if "error" in resp:
            raise OAuthError(error=resp["error"], description=resp.get("error_description"))
        return resp

    def get(self, url: str, **kwargs):  # type: ignore[no-untyped-def]
        self.provider.calls.append(("userinfo", url, kwargs, self.init_kwargs))
        info = self.provider.userinfo
        if isinstance(info, requests.RequestException):
            raise info
        return FakeResponse(info, self.provider.userinfo_status)

    def close(self) -> None:
        self.provider.closed += 1


class FakeProvider:
    """Estado de Google simulado; se invoca como `session_factory`."""

    def __init__(self) -> None:
        self.token_response: Any = {"access_token": "ya29.token", "token_type": "Bearer"}
        self.userinfo: Any = {
            "sub": "1122334455",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "picture": "https://lh3.example.com/ada.png",
        }
        self.userinfo_status = 200
        self.calls: list[tuple] = []
        self.closed = 0

    def __call__(self, **kwargs: Any) -> FakeOAuthSession:
        return FakeOAuthSession(self, kwargs)

    def called(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_client_id="cid-123.apps.googleusercontent.com",
        google_client_secret="super-secret-value",
        session_secret="test-session-secret",
        site_url="http://localhost",
        frontend_url="http://localhost:3000",
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def app(settings: Settings, provider: FakeProvider, store: InMemoryUserStore):
    app = create_app(
        settings,
        user_store=store,
        oauth_client=GoogleOAuthClient(settings, session_factory=provider),
    )
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
