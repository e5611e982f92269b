from universe.domain.models.token import Token
from universe.domain.repository.credential_store import CredentialStore

ACCESS_TOKEN             = "access_token"
ACCESS_TOKEN_EXPIRATION  = "access_token_expiration"
REFRESH_TOKEN            = "refresh_token"
REFRESH_TOKEN_EXPIRATION = "refresh_token_expiration"

SLOTS = (
    ACCESS_TOKEN,
    ACCESS_TOKEN_EXPIRATION,
    REFRESH_TOKEN,
    REFRESH_TOKEN_EXPIRATION,
)


def _as_timestamp(value) -> float | None:
    if value is None or value == "":
        return None

    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class TokenRepository:
    """Reads and writes the credential record as four slots of a store.

    Every transition goes through one method here so the four slots
    change together.
    """

    def __init__(self, store: CredentialStore, prefix: str = "universe"):
        self.store = store
        self.__prefix = prefix

    def key(self, slot: str) -> str:
        return f"{self.__prefix}_{slot}" if self.__prefix else slot

    def get(self) -> Token:
        access_token = self.store.get(self.key(ACCESS_TOKEN)) or None
        refresh_token = self.store.get(self.key(REFRESH_TOKEN)) or None

        return Token(
            access_token=access_token,
            access_token_expiration=_as_timestamp(self.store.get(self.key(ACCESS_TOKEN_EXPIRATION))) if access_token else None,
            refresh_token=refresh_token,
            refresh_token_expiration=_as_timestamp(self.store.get(self.key(REFRESH_TOKEN_EXPIRATION))) if refresh_token else None,
        )

    def set(self, token: Token) -> None:
        self.__write(ACCESS_TOKEN, ACCESS_TOKEN_EXPIRATION, token.access_token, token.access_token_expiration)
        self.__write(REFRESH_TOKEN, REFRESH_TOKEN_EXPIRATION, token.refresh_token, token.refresh_token_expiration)

    def clear(self) -> None:
        for slot in SLOTS:
            self.store.remove(self.key(slot))

    def clear_access(self) -> None:
        self.store.remove(self.key(ACCESS_TOKEN))
        self.store.remove(self.key(ACCESS_TOKEN_EXPIRATION))

    def __write(self, slot: str, expiration_slot: str, value: str | None, expiration: float | None) -> None:
        if value and expiration is not None:
            self.store.set(self.key(slot), value)
            self.store.set(self.key(expiration_slot), expiration)
        else:
            self.store.remove(self.key(slot))
            self.store.remove(self.key(expiration_slot))
