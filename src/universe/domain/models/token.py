import time

from dataclasses import dataclass
from pydantic import BaseModel


def _is_live(value: str | None, expiration: float | None, now: float | None) -> bool:
    if not value or expiration is None:
        return False

    return expiration > (time.time() if now is None else now)


@dataclass
class Token:
    access_token            : str | None   = None
    access_token_expiration : float | None = None
    refresh_token           : str | None   = None
    refresh_token_expiration: float | None = None

    def access_token_valid(self, now: float | None = None) -> bool:
        return _is_live(self.access_token, self.access_token_expiration, now)

    def refresh_token_valid(self, now: float | None = None) -> bool:
        return _is_live(self.refresh_token, self.refresh_token_expiration, now)

    @property
    def has_access(self) -> bool:
        return bool(self.access_token)

    @property
    def has_refresh(self) -> bool:
        return bool(self.refresh_token)


@dataclass(frozen=True)
class TokenState:
    token        : str | None = None
    authenticated: bool       = False

    @classmethod
    def anonymous(cls) -> "TokenState":
        return cls()

    @classmethod
    def bearer(cls, token: str) -> "TokenState":
        return cls(token=token, authenticated=True)


class TokenResponse(BaseModel):
    """Token payload returned by the login and refresh endpoints."""

    access_token            : str
    expires_in              : float      = 3600
    refresh_token           : str | None = None
    refresh_token_expires_in: float      = 14 * 24 * 3600

    def to_token(self, previous: Token | None = None, now: float | None = None) -> Token:
        now = time.time() if now is None else now

        token = Token(
            access_token=self.access_token,
            access_token_expiration=now + self.expires_in,
        )

        if self.refresh_token:
            token.refresh_token = self.refresh_token
            token.refresh_token_expiration = now + self.refresh_token_expires_in
        elif previous is not None:
            token.refresh_token = previous.refresh_token
            token.refresh_token_expiration = previous.refresh_token_expiration

        return token
