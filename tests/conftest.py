"""Shared fixtures: an in-process fake of the Universe API."""

import asyncio
import json
import time
from urllib.parse import parse_qs

import httpx
import pytest

from universe.application.services.universe_service import Universe
from universe.config.settings import Settings
from universe.infra.persistence.credential_store_memory import MemoryCredentialStore

HOST = "http://universe.test"
API_ROOT = HOST + "/api/v1"

ACCESS_TOKEN = "universe_access_token"
ACCESS_TOKEN_EXPIRATION = "universe_access_token_expiration"
REFRESH_TOKEN = "universe_refresh_token"
REFRESH_TOKEN_EXPIRATION = "universe_refresh_token_expiration"

VALID_ACCESS_TOKENS = ("valid_access_token", "valid_access_token_2")


class FakeUniverseApi:
    """Answers like the Universe test server.

    - ``valid_refresh_token`` rotates to ``valid_access_token_2`` / ``valid_refresh_token_2``
    - ``invalid_refresh_token`` is rejected with 401
    - any other refresh token fails with 500
    - key ``wrong`` makes the fanclub lookup 404
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    @property
    def refresh_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/oauth/token"]

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # yield so concurrent callers interleave
        await asyncio.sleep(0)

        path = request.url.path

        if path == "/oauth/token":
            return self.token(request)

        if path == "/api/v1/fanclub":
            if request.url.params.get("key") == "wrong":
                return httpx.Response(404, json={"error": "Fanclub not found"})
            return httpx.Response(200, json={"fanclub": "demo!"})

        if path == "/api/v1/account/status":
            return self.jsonp(request, {"status": "ok"})

        if path == "/api/v1/account":
            if "callback" in request.url.params:
                fields = {k: v for k, v in request.url.params.items() if k not in ("callback", "_method")}
                return self.jsonp(request, {"status": "ok", "method": request.url.params.get("_method", "GET"), "customer": fields})

            if request.method == "POST":
                return httpx.Response(200, json={"status": "ok", "customer": json.loads(request.content)})

            if request.headers.get("Authorization") in {f"Bearer {t}" for t in VALID_ACCESS_TOKENS}:
                return httpx.Response(200, json={"customer": "me!"})

            return httpx.Response(200, json={})

        return httpx.Response(404, json={"error": "Not found"})

    def token(self, request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode())
        refresh_token = form.get("refresh_token", [""])[0]

        if refresh_token == "valid_refresh_token":
            return httpx.Response(200, json={
                "access_token": "valid_access_token_2",
                "expires_in": 5,
                "refresh_token": "valid_refresh_token_2",
                "refresh_token_expires_in": 50,
            })

        if refresh_token == "invalid_refresh_token":
            return httpx.Response(401, json={"error": "invalid_grant"})

        return httpx.Response(500, text="Internal Server Error")

    @staticmethod
    def jsonp(request: httpx.Request, payload: dict) -> httpx.Response:
        callback = request.url.params["callback"]
        return httpx.Response(
            200,
            text=f"/**/{callback}({json.dumps(payload)});",
            headers={"Content-Type": "application/javascript"},
        )


def login(store: MemoryCredentialStore) -> None:
    now = time.time()
    store.set(ACCESS_TOKEN, "valid_access_token")
    store.set(ACCESS_TOKEN_EXPIRATION, str(now + 5))
    store.set(REFRESH_TOKEN, "valid_refresh_token")
    store.set(REFRESH_TOKEN_EXPIRATION, str(now + 50))


@pytest.fixture
def api() -> FakeUniverseApi:
    return FakeUniverseApi()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def store() -> MemoryCredentialStore:
    """A logged in credential store."""
    store = MemoryCredentialStore()
    login(store)
    return store


@pytest.fixture
def make_universe(api, settings, store):
    def factory(key: str = "12345", **kwargs) -> Universe:
        kwargs.setdefault("environment", "test")
        kwargs.setdefault("store", store)
        kwargs.setdefault("settings", settings)
        return Universe(key=key, http=httpx.AsyncClient(transport=api.transport), **kwargs)

    return factory
