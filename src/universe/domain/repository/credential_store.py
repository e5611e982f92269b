from abc import (
    ABC,
    abstractmethod
)
from typing import Any


class CredentialStore(ABC):
    """Key/value persistence backing a session's credentials."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...
