import logging
from typing import Any, MutableMapping, Optional, Protocol

from csrfguard.core.errors import SessionStoreFailure

CSRF_SESSION_KEY = "_csrf_token"

logger = logging.getLogger("csrfguard.session")


class TokenStore(Protocol):
    def get_token(self) -> Optional[str]:
        ...

    def set_token(self, token: str) -> None:
        ...


class SessionTokenStore:
    """Keeps the CSRF token of one session inside its key-value mapping.

    Empty strings and non-string values read back as "no token", so a
    tampered or blanked session entry leads to a fresh token rather than a
    comparison against garbage.
    """

    def __init__(self, session: MutableMapping[str, Any], key: str = CSRF_SESSION_KEY):
        self.session = session
        self.key = key

    def get_token(self) -> Optional[str]:
        try:
            value = self.session.get(self.key)
        except Exception as exc:
            logger.error("csrf_session_store_failed", extra={"operation": "get", "error": str(exc)})
            raise SessionStoreFailure() from exc

        if not isinstance(value, str) or not value:
            return None
        return value

    def set_token(self, token: str) -> None:
        try:
            self.session[self.key] = token
        except Exception as exc:
            logger.error("csrf_session_store_failed", extra={"operation": "set", "error": str(exc)})
            raise SessionStoreFailure() from exc
