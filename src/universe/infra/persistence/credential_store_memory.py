from typing import Any

from universe.domain.repository.credential_store import CredentialStore


class MemoryCredentialStore(CredentialStore):
    def __init__(self, initial: dict[str, Any] | None = None):
        self.__values: dict[str, Any] = dict(initial or {})

        super().__init__()

    def get(self, key: str) -> Any | None:
        return self.__values.get(key)

    def set(self, key: str, value: Any) -> None:
        self.__values[key] = value

    def remove(self, key: str) -> None:
        self.__values.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        return dict(self.__values)
