from typing import Optional

from fastapi import Request

from rmcatalog.core.dashboard_auth import SESSION_USER_KEY, session_token
from rmcatalog.services.catalog_client import CatalogSession


def get_catalog_session(request: Request) -> Optional[CatalogSession]:
    token = session_token(request)
    if not token:
        return None
    return CatalogSession.from_settings(token, username=request.session.get(SESSION_USER_KEY))


__all__ = ["get_catalog_session"]
