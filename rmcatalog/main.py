import logging
import secrets

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from rmcatalog.config import Settings, get_settings
from rmcatalog.core.constants import RAW_MATERIALS_PATH, STATIC_DIR, TEMPLATES_DIR
from rmcatalog.core.logging import setup_logging
from rmcatalog.routers import auth_router, health_router, raw_materials_router
from rmcatalog.services.catalog_client import CatalogError, validate_api_url

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    try:
        validate_api_url(settings.CATALOG_API_URL)
    except CatalogError:
        logger.warning("CATALOG_API_URL %r is not an absolute HTTP(S) URL", settings.CATALOG_API_URL)

    application = FastAPI(title=settings.APP_NAME)
    application.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.DASHBOARD_SESSION_SECRET or secrets.token_urlsafe(32),
        session_cookie=settings.DASHBOARD_SESSION_COOKIE,
        same_site="lax",
        https_only=settings.ENVIRONMENT.lower() != "local",
    )
    application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    application.include_router(health_router)
    application.include_router(auth_router)
    application.include_router(raw_materials_router)

    @application.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url=RAW_MATERIALS_PATH, status_code=302)

    return application


setup_logging()
app = create_app()


__all__ = ["app", "create_app"]
