from pathlib import Path
from pydantic import (
    BaseModel,
    StringConstraints
)
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict
)
from typing import (
    Annotated,
    Any
)

ROOT = Path(__file__).resolve().parents[3]
ENV_PATH = ROOT / ".env"
TOKENS_PATH = ROOT / ".tokens.json"


class ConfigurationError(ValueError):
    pass


class Settings(BaseSettings):
    UNIVERSE_HOSTS: dict[str, str] = {
        "production" : "https://www.universe.com",
        "staging"    : "https://staging.universe.com",
        "development": "http://localhost:3000",
        "test"       : "http://universe.test",
    }

    UNIVERSE_API_PATH  : str   = "/api/v1"
    UNIVERSE_TOKEN_PATH: str   = "/oauth/token"
    UNIVERSE_TIMEOUT   : float = 20.0

    UNIVERSE_ENVIRONMENT: str = "production"
    UNIVERSE_KEY        : str = ""

    SERVICE_NAME: str = "universe-client"
    LOG_LEVEL   : str = "INFO"

    STORAGE_PREFIX: str = "universe"
    TOKENS_PATH   : str = str(TOKENS_PATH)

    SINGLE_FLIGHT_REFRESH: bool = True

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
    )

    def host(self, environment: str) -> str:
        try:
            return self.UNIVERSE_HOSTS[environment].rstrip("/")
        except KeyError:
            raise ConfigurationError(f"Unknown Universe environment: {environment!r}")

    def api_root(self, environment: str) -> str:
        return f"{self.host(environment)}{self.UNIVERSE_API_PATH}"

    def token_url(self, environment: str) -> str:
        return f"{self.host(environment)}{self.UNIVERSE_TOKEN_PATH}"


class Context(BaseModel):
    resources: dict[str, Any] = {}


class UniverseOptions(BaseModel):
    environment: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = "production"
    key        : Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    context    : Context | None = None
