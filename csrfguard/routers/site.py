import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from csrfguard.core.csrf import CSRF_FIELD_NAME, csrf_input, csrf_token

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.globals["csrf_input"] = csrf_input

router = APIRouter(tags=["Site"])
logger = logging.getLogger("csrfguard.site")


@router.get("/", response_class=HTMLResponse)
def form_page(request: Request):
    return templates.TemplateResponse(request, "site/form.html", {"page": "form"})


@router.get("/token")
def read_token(request: Request):
    return {"csrf_token": csrf_token(request)}


@router.post("/submit")
async def submit(request: Request):
    form = await request.form()
    fields = {
        key: value for key, value in form.items() if key != CSRF_FIELD_NAME and isinstance(value, str)
    }
    logger.info("site_form_submitted", extra={"fields": sorted(fields)})
    return {"status": "ok", "fields": fields}
