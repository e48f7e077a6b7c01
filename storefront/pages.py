# storefront/pages.py
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from . import config
from .auth import new_session_token, user_from_request

# ✅ Абсолютный путь к /templates
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def catalog_page(request: Request):
    response = templates.TemplateResponse(request, "index.html", {})
    # у каждого браузера своя корзина
    if user_from_request(request) is None:
        response.set_cookie(
            config.SESSION_COOKIE,
            new_session_token(),
            max_age=config.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
            path="/",
            httponly=True,
            samesite="lax",
        )
    return response
