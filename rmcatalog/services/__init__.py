from rmcatalog.services.catalog_client import CatalogClient, CatalogError, CatalogSession
from rmcatalog.services.detail_view import detail_context, render_detail
from rmcatalog.services.raw_material_service import DetailState, load_detail, load_raw_materials

__all__ = [
    "CatalogClient",
    "CatalogError",
    "CatalogSession",
    "DetailState",
    "detail_context",
    "load_detail",
    "load_raw_materials",
    "render_detail",
]
