from typing import Optional

from fastapi import HTTPException, status


class CsrfError(HTTPException):
    """Rejection of a mutating request that failed the token check."""

    reason: Optional[str] = None

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=reason if reason is not None else self.reason,
        )


class MissingToken(CsrfError):
    reason = "No token"


class TokenMismatch(CsrfError):
    reason = "Bad token"


class SessionStoreFailure(HTTPException):
    """Raised when the session backend cannot be read or written."""

    def __init__(self, detail: str = "Session unavailable") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
