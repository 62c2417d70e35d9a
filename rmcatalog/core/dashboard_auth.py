from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Optional

from fastapi import HTTPException, Request, status

from rmcatalog.config import get_settings

SESSION_TOKEN_KEY = "auth_token"
SESSION_USER_KEY = "username"


def dashboard_auth_enabled() -> bool:
    settings = get_settings()
    return bool(settings.DASHBOARD_USERNAME and (settings.DASHBOARD_PASSWORD or settings.DASHBOARD_PASSWORD_HASH))


def hash_password(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def verify_dashboard_credentials(username: str, password: str) -> bool:
    settings = get_settings()
    if not dashboard_auth_enabled():
        return False

    expected_username = (settings.DASHBOARD_USERNAME or "").strip()
    if not hmac.compare_digest(username.strip().casefold(), expected_username.casefold()):
        return False

    password = password.strip()
    if settings.DASHBOARD_PASSWORD_HASH:
        if not settings.DASHBOARD_PASSWORD_SALT:
            raise ValueError("Dashboard password salt is not configured.")
        computed = hash_password(
            password,
            settings.DASHBOARD_PASSWORD_SALT,
            settings.DASHBOARD_PBKDF2_ROUNDS,
        )
        return hmac.compare_digest(computed, settings.DASHBOARD_PASSWORD_HASH)

    if settings.DASHBOARD_PASSWORD:
        return hmac.compare_digest(password, settings.DASHBOARD_PASSWORD.strip())

    return False


def sign_in(request: Request, username: str) -> str:
    """Start a dashboard session and return its opaque token."""
    token = secrets.token_urlsafe(32)
    request.session[SESSION_TOKEN_KEY] = token
    request.session[SESSION_USER_KEY] = username.strip()
    return token


def sign_out(request: Request) -> None:
    request.session.pop(SESSION_TOKEN_KEY, None)
    request.session.pop(SESSION_USER_KEY, None)


def session_token(request: Request) -> Optional[str]:
    token = request.session.get(SESSION_TOKEN_KEY)
    return token or None


def require_session_api(request: Request) -> None:
    if session_token(request):
        return
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
