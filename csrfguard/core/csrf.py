import logging
import secrets
from typing import Any, Mapping, Optional

from fastapi import Request
from markupsafe import Markup

from csrfguard.core.errors import MissingToken, TokenMismatch
from csrfguard.core.session_store import SessionTokenStore, TokenStore
from csrfguard.core.tokens import TokenIssuer, issue_token

CSRF_FIELD_NAME = "_csrf_token"

logger = logging.getLogger("csrfguard.csrf")


def tokens_match(expected: str, provided: str) -> bool:
    """Exact string equality, evaluated in constant time.

    Lone surrogates from JSON bodies are encoded as-is rather than rejected.
    """
    return secrets.compare_digest(
        expected.encode("utf-8", "surrogatepass"), provided.encode("utf-8", "surrogatepass")
    )


class CsrfGuard:
    """Check-or-issue decision for a single request.

    The secret is fixed at construction and only ever read afterwards.
    Two concurrent first requests of one session can each issue a token;
    whichever write the session backend keeps wins.
    """

    safe_methods = frozenset({"GET"})

    def __init__(self, secret: str, issuer: TokenIssuer = issue_token):
        if not secret:
            raise ValueError("CSRF secret must not be empty.")
        self._secret = secret
        self._issuer = issuer

    def is_safe(self, method: str) -> bool:
        return method.upper() in self.safe_methods

    def session_token(self, store: TokenStore) -> str:
        """Return the session's token, issuing and persisting one if absent."""
        token = store.get_token()
        if token is None:
            token = self._issuer(self._secret)
            store.set_token(token)
            logger.debug("csrf_token_issued")
        return token

    def before(self, method: str, store: TokenStore, params: Mapping[str, Any]) -> str:
        """Validate one request and return the session token.

        Raises ``MissingToken`` or ``TokenMismatch`` for mutating requests
        that do not carry the session token under ``CSRF_FIELD_NAME``.
        """
        token = self.session_token(store)
        if self.is_safe(method):
            return token

        provided = params.get(CSRF_FIELD_NAME)
        if not isinstance(provided, str):
            logger.warning("csrf_token_missing", extra={"method": method})
            raise MissingToken()
        if not tokens_match(token, provided):
            logger.warning("csrf_token_mismatch", extra={"method": method})
            raise TokenMismatch()
        return token


def csrf_token(request: Request) -> str:
    """Return the CSRF token of the request's session for embedding in pages."""
    token: Optional[str] = getattr(request.state, "csrf_token", None)
    if token is None:
        token = SessionTokenStore(request.session).get_token()
    if token is None:
        raise RuntimeError("CsrfMiddleware must be installed to issue CSRF tokens.")
    return token


def csrf_input(request: Request) -> Markup:
    """Render the hidden form field that carries the CSRF token."""
    return Markup('<input type="hidden" name="{}" value="{}">').format(
        CSRF_FIELD_NAME, csrf_token(request)
    )
