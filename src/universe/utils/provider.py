from functools import lru_cache

from universe.application.services.auth_service import AuthService
from universe.application.services.health_service import HealthService
from universe.application.services.universe_service import Universe
from universe.config.settings import Settings
from universe.domain.repository.credential_store import CredentialStore
from universe.infra.persistence.credential_store_file import FileCredentialStore


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


@lru_cache(maxsize=1)
def get_store() -> CredentialStore:
    settings = get_settings()

    return FileCredentialStore(settings.TOKENS_PATH)


@lru_cache(maxsize=1)
def get_universe() -> Universe:
    settings = get_settings()

    return Universe(
        key=settings.UNIVERSE_KEY,
        environment=settings.UNIVERSE_ENVIRONMENT,
        store=get_store(),
        settings=settings
    )


def get_health_service() -> HealthService:
    return HealthService(get_settings())


def get_auth_service() -> AuthService:
    return AuthService(get_universe())
