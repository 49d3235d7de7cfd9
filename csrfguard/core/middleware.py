import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from csrfguard.core.csrf import CsrfGuard
from csrfguard.core.errors import SessionStoreFailure
from csrfguard.core.params import collect_params
from csrfguard.core.session_store import SessionTokenStore
from csrfguard.core.tokens import TokenIssuer, issue_token

logger = logging.getLogger("csrfguard.middleware")


class CsrfMiddleware(BaseHTTPMiddleware):
    """Reject mutating requests whose ``_csrf_token`` does not match the session.

    Must sit inside Starlette's ``SessionMiddleware`` so ``request.session``
    is populated and token writes are persisted with the response.
    """

    def __init__(self, app: ASGIApp, secret: str, issuer: TokenIssuer = issue_token):
        super().__init__(app)
        self.guard = CsrfGuard(secret, issuer=issuer)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            if "session" not in request.scope:
                logger.error("csrf_session_unavailable", extra={"path": request.url.path})
                raise SessionStoreFailure()

            store = SessionTokenStore(request.session)
            self.guard.session_token(store)

            params: Dict[str, Any] = {}
            if not self.guard.is_safe(request.method):
                params = await collect_params(request)

            request.state.csrf_token = self.guard.before(request.method, store, params)
        except StarletteHTTPException as exc:
            return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

        return await call_next(request)
