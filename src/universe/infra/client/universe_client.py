import httpx
import json
import re
import secrets

from loguru import logger
from pydantic import ValidationError
from typing import Any

from universe.config.logging import mask
from universe.config.settings import Settings
from universe.domain.errors import ApiError
from universe.domain.models.resource import (
    HttpResource,
    JsonpResource,
    Resource
)
from universe.domain.models.token import TokenResponse

JSONP_RE = re.compile(r"^\s*(?:/\*\*/)?\s*([\w$.]+)\s*\((.*)\)\s*;?\s*$", re.DOTALL)


class UniverseClient:
    """Executes resource descriptors against the Universe API."""

    def __init__(self, settings: Settings, environment: str, http: httpx.AsyncClient | None = None):
        self.__settings = settings
        self.__token_url = settings.token_url(environment)
        self.__http = http

    def __client(self) -> httpx.AsyncClient:
        if self.__http is None:
            self.__http = httpx.AsyncClient(timeout=self.__settings.UNIVERSE_TIMEOUT)

        return self.__http

    async def aclose(self) -> None:
        if self.__http is not None:
            await self.__http.aclose()
            self.__http = None

    async def request(self, resource: Resource, method: str = "GET", body: dict[str, Any] | None = None) -> Any:
        if isinstance(resource, JsonpResource):
            return await self.__jsonp(resource, method, body)

        return await self.__http_request(resource, method, body)

    async def refresh_tokens(self, refresh_token: str) -> TokenResponse:
        data = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }

        logger.debug("Refreshing access token with refresh token {}", mask(refresh_token))

        r = await self.__send("POST", self.__token_url, data=data, headers={"Accept": "application/json"})

        if r.status_code >= 400:
            raise ApiError(r.status_code, {"status": r.status_code, "error": r.text})

        try:
            payload = r.json()

            # {"token": {...}} envelope
            if isinstance(payload, dict) and isinstance(payload.get("token"), dict):
                payload = payload["token"]

            return TokenResponse.model_validate(payload)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ApiError(502, {"status": 502, "error": f"Malformed token response: {e}"})

    async def __http_request(self, resource: HttpResource, method: str, body: dict[str, Any] | None) -> Any:
        headers = {"Accept": "application/json", **resource.headers}

        r = await self.__send(
            method,
            resource.url,
            params=resource.query,
            headers=headers,
            json=body if method.upper() != "GET" else None,
        )

        if r.status_code >= 400:
            raise ApiError(r.status_code, self.__error_detail(r), headers=dict(r.headers))

        if not r.content:
            return None

        ct = (r.headers.get("content-type") or "").lower()

        if "json" in ct:
            return r.json()

        return r.text

    async def __jsonp(self, resource: JsonpResource, method: str, body: dict[str, Any] | None) -> Any:
        callback = f"universe_jsonp_{secrets.token_hex(8)}"
        params: dict[str, Any] = {"callback": callback}

        if method.upper() != "GET":
            params["_method"] = method.upper()

        if body:
            params.update(body)

        r = await self.__send("GET", resource.url, params=params)

        if r.status_code >= 400:
            raise ApiError(r.status_code, self.__error_detail(r))

        match = JSONP_RE.match(r.text)

        if not match or match.group(1) != callback:
            raise ApiError(502, {"status": 502, "error": "Malformed JSONP response"})

        try:
            return json.loads(match.group(2))
        except json.JSONDecodeError:
            raise ApiError(502, {"status": 502, "error": "Malformed JSONP payload"})

    async def __send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self.__client().request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.warning("{} {} failed: {}", method, url, e)
            raise ApiError(0, {"status": 0, "error": str(e)})

    @staticmethod
    def __error_detail(r: httpx.Response) -> Any:
        try:
            body = r.json()
        except json.JSONDecodeError:
            body = r.text

        return {"status": r.status_code, "body": body}
