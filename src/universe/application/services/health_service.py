from datetime import (
    datetime,
    timezone
)

from universe.config.settings import Settings


class HealthService:
    def __init__(self, settings: Settings):
        self.__settings = settings

    def get_health(self) -> dict[str, str]:
        return {
            "status": "ok",
            "service": self.__settings.SERVICE_NAME,
            "environment": self.__settings.UNIVERSE_ENVIRONMENT,
            "ts_utc": datetime\
                        .now(timezone.utc)
                        .isoformat(timespec="seconds")
                        .replace("+00:00","Z")
        }

    def get_env_check(self) -> dict:
        environment = self.__settings.UNIVERSE_ENVIRONMENT
        key_set = bool(self.__settings.UNIVERSE_KEY.strip())
        known = environment in self.__settings.UNIVERSE_HOSTS

        return {
            "configured": key_set and known,
            "key_set": key_set,
            "environment": environment,
            "api_root": self.__settings.api_root(environment) if known else None,
        }

    def get_environments(self) -> list[dict]:
        return [
            {
                "name": name,
                "api_root": self.__settings.api_root(name),
                "selected": name == self.__settings.UNIVERSE_ENVIRONMENT,
            }
            for name in self.__settings.UNIVERSE_HOSTS
        ]
