from datetime import datetime, timezone

from fastapi import APIRouter

from rmcatalog.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "catalog_api": settings.CATALOG_API_URL,
        "time": datetime.now(timezone.utc).isoformat(),
    }
