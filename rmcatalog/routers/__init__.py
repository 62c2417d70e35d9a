from rmcatalog.routers.auth import router as auth_router
from rmcatalog.routers.health import router as health_router
from rmcatalog.routers.raw_materials import router as raw_materials_router

__all__ = [
    "auth_router",
    "health_router",
    "raw_materials_router",
]
