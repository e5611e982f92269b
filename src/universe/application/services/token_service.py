"""Token lifecycle for a Universe session.

Every request asks ``ensure_valid_token`` for the token to send. A valid
access token is returned as is. An expired (or previously dropped) one is
refreshed when the refresh token is still alive; otherwise the session
degrades to anonymous:

- refresh token missing, expired or rejected (401/403): all credentials
  are cleared.
- refresh failed for any other reason: only the access token is cleared,
  the refresh token is kept for the next attempt.
"""

import asyncio
import time

from loguru import logger
from typing import (
    Any,
    Callable
)

from universe.config.logging import mask
from universe.domain.errors import ApiError
from universe.domain.models.token import (
    Token,
    TokenResponse,
    TokenState
)
from universe.domain.repository.token_repository import TokenRepository
from universe.infra.client.universe_client import UniverseClient


class TokenService:
    def __init__(
        self,
        client: UniverseClient,
        repository: TokenRepository,
        single_flight: bool = True,
        clock: Callable[[], float] = time.time
    ):
        self.__client = client
        self.repository = repository
        self.__single_flight = single_flight
        self.__clock = clock
        self.__inflight: asyncio.Future | None = None

    def current(self) -> TokenState:
        """Token state as stored, without refreshing."""
        token = self.repository.get()

        if token.access_token_valid(self.__clock()):
            return TokenState.bearer(token.access_token)

        return TokenState.anonymous()

    async def ensure_valid_token(self) -> TokenState:
        token = self.repository.get()
        now = self.__clock()

        if token.access_token_valid(now):
            return TokenState.bearer(token.access_token)

        if not token.has_access and not token.has_refresh:
            return TokenState.anonymous()

        # An access token cleared by a failed refresh leaves the refresh
        # token behind; it is retried below.
        if not token.has_refresh:
            logger.info("Access token expired and no refresh token stored; clearing credentials")
            self.repository.clear()
            return TokenState.anonymous()

        if not token.refresh_token_valid(now):
            logger.info("Access and refresh tokens expired; clearing credentials")
            self.repository.clear()
            return TokenState.anonymous()

        if not self.__single_flight:
            return await self.__refresh(token)

        if self.__inflight is None or self.__inflight.done():
            self.__inflight = asyncio.ensure_future(self.__refresh(token))
        else:
            logger.debug("Joining in-flight token refresh")

        return await asyncio.shield(self.__inflight)

    def login(self, payload: dict[str, Any] | TokenResponse) -> Token:
        """Store the tokens of a successful login response."""
        response = payload if isinstance(payload, TokenResponse) else TokenResponse.model_validate(payload)
        token = response.to_token(now=self.__clock())

        self.repository.set(token)
        logger.info("Stored login tokens for access token {}", mask(token.access_token))

        return token

    def logout(self) -> None:
        self.repository.clear()
        logger.info("Cleared credentials on logout")

    async def __refresh(self, token: Token) -> TokenState:
        try:
            response = await self.__client.refresh_tokens(token.refresh_token)
        except ApiError as e:
            if e.is_auth_rejection:
                logger.warning("Refresh token {} rejected ({}); clearing credentials", mask(token.refresh_token), e.status)
                self.repository.clear()
            else:
                logger.warning("Token refresh failed ({}); keeping refresh token for a later attempt", e.status)
                self.repository.clear_access()

            return TokenState.anonymous()

        rotated = response.to_token(previous=token, now=self.__clock())
        self.repository.set(rotated)

        logger.info("Rotated access token to {}", mask(rotated.access_token))

        return TokenState.bearer(rotated.access_token)
