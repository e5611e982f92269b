from fastapi import HTTPException
from typing import Any

AUTH_REJECTION_STATUSES = (401, 403)


class ApiError(HTTPException):
    """Error reported by the Universe API, or by the transport reaching it.

    Network failures carry status 0.
    """

    def __init__(self, status: int, detail: Any = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=status,
            detail=detail if detail is not None else {"status": status},
            headers=headers
        )

    @property
    def status(self) -> int:
        return self.status_code

    @property
    def is_auth_rejection(self) -> bool:
        return self.status_code in AUTH_REJECTION_STATUSES

    def __str__(self) -> str:
        return f"{self.status_code}: {self.detail}"
