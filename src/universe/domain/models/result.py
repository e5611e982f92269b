from dataclasses import dataclass
from typing import (
    Any,
    Generic,
    TypeVar
)

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a client operation: data on success, error on failure."""

    data : T | None         = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        if self.error is not None:
            raise self.error

        return self.data

    @classmethod
    def success(cls, data: Any) -> "Result":
        return cls(data=data)

    @classmethod
    def failure(cls, error: Exception) -> "Result":
        return cls(error=error)
