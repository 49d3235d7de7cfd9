from typing import Optional

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import PlainTextResponse

from csrfguard.core.config import Settings, get_settings
from csrfguard.core.logging import configure_logging
from csrfguard.core.middleware import CsrfMiddleware
from csrfguard.core.tokens import get_issuer
from csrfguard.routers import site


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.csrf_log_level)

    app = FastAPI(title=settings.project_name)
    # Added first so it runs inside SessionMiddleware.
    app.add_middleware(
        CsrfMiddleware,
        secret=settings.csrf_secret,
        issuer=get_issuer(settings.csrf_token_source),
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie_name,
        same_site=settings.session_cookie_same_site,
        https_only=settings.session_cookie_secure,
        max_age=settings.session_cookie_max_age,
    )

    app.include_router(site.router)

    @app.get("/health", tags=["System"])
    def health_check():
        return {"status": "ok"}

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    return app


app = create_app()
