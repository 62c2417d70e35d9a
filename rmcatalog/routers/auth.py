import logging

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from rmcatalog.config import get_settings
from rmcatalog.core.constants import RAW_MATERIALS_PATH, SIGN_IN_PATH
from rmcatalog.core.dashboard_auth import (
    dashboard_auth_enabled,
    session_token,
    sign_in,
    sign_out,
    verify_dashboard_credentials,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _login_page(request: Request, error=None, auth_enabled=True, status_code=200):
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "title": "Sign in",
            "app_name": get_settings().APP_NAME,
            "error": error,
            "auth_enabled": auth_enabled,
            "signed_in": False,
        },
        status_code=status_code,
    )


@router.get(SIGN_IN_PATH, response_class=HTMLResponse)
def login_page(request: Request):
    if session_token(request):
        return RedirectResponse(url=RAW_MATERIALS_PATH, status_code=303)
    return _login_page(request, auth_enabled=dashboard_auth_enabled())


@router.post(SIGN_IN_PATH, response_class=HTMLResponse)
def login_submit(request: Request, username: str = Form(...), password: str = Form(...)):
    if not dashboard_auth_enabled():
        return _login_page(
            request,
            error="Login is not configured. Set dashboard credentials in the environment.",
            auth_enabled=False,
            status_code=400,
        )

    try:
        if verify_dashboard_credentials(username, password):
            sign_in(request, username)
            logger.info("Dashboard sign-in for %s", username.strip())
            return RedirectResponse(url=RAW_MATERIALS_PATH, status_code=303)
    except ValueError as exc:
        error_message = str(exc)
    else:
        error_message = "Invalid login ID or password."

    logger.warning("Rejected dashboard sign-in for %s", username.strip())
    return _login_page(request, error=error_message, status_code=401)


@router.post("/logout")
def logout(request: Request):
    sign_out(request)
    return RedirectResponse(url=SIGN_IN_PATH, status_code=303)


__all__ = ["router"]
