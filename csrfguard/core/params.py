import json
import logging
from typing import Any, Dict, Iterable, Tuple

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

logger = logging.getLogger("csrfguard.params")

FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}


def _fold(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """Collapse multi-items into a dict; repeated keys become lists."""
    folded: Dict[str, Any] = {}
    for key, value in items:
        if key not in folded:
            folded[key] = value
        elif isinstance(folded[key], list):
            folded[key].append(value)
        else:
            folded[key] = [folded[key], value]
    return folded


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


async def collect_params(request: Request) -> Dict[str, Any]:
    """Merge query, form and JSON-object parameters of a request.

    The body is read through ``request.body()`` first so it stays cached for
    downstream handlers. A body that fails to parse contributes nothing.
    """
    params = _fold(request.query_params.multi_items())
    media_type = _media_type(request)

    if media_type in FORM_CONTENT_TYPES:
        await request.body()
        try:
            async with request.form() as form:
                params.update(_fold(form.multi_items()))
        except (MultiPartException, StarletteHTTPException) as exc:
            logger.info(
                "csrf_params_malformed_form",
                extra={"path": request.url.path, "error": getattr(exc, "detail", str(exc))},
            )
    elif media_type == "application/json" or media_type.endswith("+json"):
        body = await request.body()
        if not body:
            return params
        try:
            payload = json.loads(body)
        except ValueError:
            logger.info("csrf_params_malformed_json", extra={"path": request.url.path})
            return params
        if isinstance(payload, dict):
            params.update(payload)

    return params
