from datetime import timezone

from rmcatalog.core.constants import PRICE_LOGS_TAB, RAW_MATERIALS_PATH
from rmcatalog.core.formatting import format_date, format_price, format_quantity

DETAIL_TEMPLATE = "raw_material_detail.html"


def show_price_logs_from_query(tab):
    return (tab or "").strip().lower() == PRICE_LOGS_TAB


def page_title(state) -> str:
    if state.loading:
        return "Loading..."
    if state.raw_material is None:
        return "Not Found"
    return "{} - {}".format(state.raw_material.code, state.raw_material.name)


def _info_fields(raw_material, tz):
    fields = [
        {"label": "Category", "value": raw_material.category_name},
        {"label": "Sub Category", "value": raw_material.sub_category_name},
        {"label": "Unit", "value": raw_material.unit_name or "-"},
    ]
    if raw_material.hsn_code:
        fields.append({"label": "HSN Code", "value": raw_material.hsn_code})
    if raw_material.last_added_price is not None:
        fields.append(
            {
                "label": "Last Price",
                "value": format_price(raw_material.last_added_price, raw_material.unit_name),
                "note": "from {}".format(raw_material.last_vendor_name) if raw_material.last_vendor_name else None,
                "highlight": True,
            }
        )
    if raw_material.last_price_date:
        fields.append(
            {"label": "Last Purchase Date", "value": format_date(raw_material.last_price_date, tz)}
        )
    return fields


def _vendor_price_rows(vendor_prices, tz):
    return [
        {
            "id": item.id,
            "vendor": item.vendor_name,
            "price": format_price(item.price, item.unit_name),
            "quantity": format_quantity(item.quantity),
            "date": format_date(item.added_date, tz),
        }
        for item in vendor_prices
    ]


def _price_log_rows(price_logs, tz):
    return [
        {
            "id": log.id,
            "vendor": log.vendor_name,
            "old_price": format_price(log.old_price, log.unit_name),
            "new_price": format_price(log.new_price, log.unit_name),
            "date": format_date(log.change_date, tz),
            "changed_by": log.changed_by,
        }
        for log in price_logs
    ]


def detail_context(state, show_price_logs=False, tz=timezone.utc) -> dict:
    """Build the template context for one detail page.

    Only reads ``state``; nothing here touches the catalog API, so switching
    ``show_price_logs`` renders the same data with the other tab active.
    """
    context = {
        "title": page_title(state),
        "loading": state.loading,
        "not_found": not state.loading and state.raw_material is None,
        "back_url": RAW_MATERIALS_PATH,
        "show_price_logs": bool(show_price_logs),
        "price_logs_tab": PRICE_LOGS_TAB,
    }
    raw_material = state.raw_material
    if state.loading or raw_material is None:
        return context

    context.update(
        {
            "raw_material": raw_material,
            "info_fields": _info_fields(raw_material, tz),
            "vendor_price_rows": _vendor_price_rows(state.vendor_prices, tz),
            "price_log_rows": _price_log_rows(state.price_logs, tz),
        }
    )
    return context


def render_detail(templates, state, show_price_logs=False, tz=timezone.utc) -> str:
    template = templates.get_template(DETAIL_TEMPLATE)
    return template.render(**detail_context(state, show_price_logs, tz))


__all__ = [
    "DETAIL_TEMPLATE",
    "detail_context",
    "page_title",
    "render_detail",
    "show_price_logs_from_query",
]
