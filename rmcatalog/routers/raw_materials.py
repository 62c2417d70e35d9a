from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from rmcatalog.config import get_settings
from rmcatalog.core.constants import RAW_MATERIALS_PATH
from rmcatalog.core.dashboard_auth import require_session_api
from rmcatalog.core.formatting import format_price, resolve_timezone
from rmcatalog.dependencies import get_catalog_session
from rmcatalog.schemas.raw_material import RawMaterialDetail
from rmcatalog.services.catalog_client import CatalogSession
from rmcatalog.services.detail_view import (
    DETAIL_TEMPLATE,
    detail_context,
    show_price_logs_from_query,
)
from rmcatalog.services.raw_material_service import (
    CATALOG_UNAVAILABLE,
    load_detail,
    load_raw_materials,
)

router = APIRouter(prefix=RAW_MATERIALS_PATH, tags=["Raw Materials"])


def _layout_context(session: Optional[CatalogSession]) -> dict:
    return {
        "app_name": get_settings().APP_NAME,
        "signed_in": bool(session and session.is_signed_in),
        "username": session.username if session else None,
    }


def _list_rows(raw_materials):
    rows = []
    for item in raw_materials:
        rows.append(
            {
                "url": "{}/{}".format(RAW_MATERIALS_PATH, quote(item.id, safe="")),
                "code": item.code,
                "name": item.name,
                "category": item.category_name,
                "sub_category": item.sub_category_name,
                "unit": item.unit_name or "-",
                "last_price": (
                    format_price(item.last_added_price, item.unit_name)
                    if item.last_added_price is not None
                    else "-"
                ),
            }
        )
    return rows


@router.get("", response_class=HTMLResponse)
def raw_materials_page(
    request: Request,
    q: str | None = Query(None, description="Code or name search query"),
    session: Optional[CatalogSession] = Depends(get_catalog_session),
):
    result = load_raw_materials(session, q)
    if result.redirect_to:
        return RedirectResponse(url=result.redirect_to, status_code=303)

    templates = request.app.state.templates
    context = {
        "title": "Raw Materials",
        "query": q,
        "rows": _list_rows(result.raw_materials),
        "unavailable": result.error is not None,
    }
    context.update(_layout_context(session))
    return templates.TemplateResponse(request, "raw_materials.html", context)


@router.get("/{raw_material_id}/summary", response_model=RawMaterialDetail)
def raw_material_summary(
    request: Request,
    raw_material_id: str,
    session: Optional[CatalogSession] = Depends(get_catalog_session),
):
    require_session_api(request)
    state = load_detail(raw_material_id, session, redirect_on_not_found=False)
    if state.reason == CATALOG_UNAVAILABLE:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Catalog API unavailable.")
    if state.raw_material is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Raw material not found.")
    return RawMaterialDetail(
        raw_material=state.raw_material,
        vendor_prices=state.vendor_prices,
        price_logs=state.price_logs,
    )


@router.get("/{raw_material_id}", response_class=HTMLResponse)
def raw_material_detail_page(
    request: Request,
    raw_material_id: str,
    tab: str | None = Query(None, description="'history' opens the price history tab"),
    session: Optional[CatalogSession] = Depends(get_catalog_session),
):
    settings = get_settings()
    state = load_detail(
        raw_material_id,
        session,
        redirect_on_not_found=settings.RAW_MATERIAL_NOT_FOUND_REDIRECT,
    )
    if state.redirect_to:
        return RedirectResponse(url=state.redirect_to, status_code=303)

    templates = request.app.state.templates
    context = detail_context(
        state,
        show_price_logs=show_price_logs_from_query(tab),
        tz=resolve_timezone(settings.DISPLAY_TIMEZONE),
    )
    context.update(_layout_context(session))
    return templates.TemplateResponse(
        request,
        DETAIL_TEMPLATE,
        context,
        status_code=status.HTTP_404_NOT_FOUND if state.not_found else status.HTTP_200_OK,
    )


__all__ = ["router"]
