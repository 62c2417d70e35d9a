import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from pydantic import ValidationError

from rmcatalog.core.constants import RAW_MATERIALS_PATH, SIGN_IN_PATH
from rmcatalog.schemas.raw_material import PriceLog, RawMaterial, VendorPrice
from rmcatalog.services.catalog_client import CatalogClient, CatalogError, CatalogSession

logger = logging.getLogger(__name__)

SIGNED_OUT = "signed_out"
NOT_FOUND = "not_found"
CATALOG_UNAVAILABLE = "catalog_unavailable"


@dataclass
class DetailState:
    """View state for the raw-material detail page.

    ``loading`` is only true before ``load_detail`` has run. When the page
    should not be shown, ``redirect_to`` names the route to go to and
    ``reason`` says why.
    """

    loading: bool = True
    raw_material: Optional[RawMaterial] = None
    vendor_prices: List[VendorPrice] = field(default_factory=list)
    price_logs: List[PriceLog] = field(default_factory=list)
    redirect_to: Optional[str] = None
    reason: Optional[str] = None

    @property
    def not_found(self) -> bool:
        return self.reason == NOT_FOUND


class FetchResult(NamedTuple):
    items: list
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RawMaterialList:
    raw_materials: List[RawMaterial] = field(default_factory=list)
    redirect_to: Optional[str] = None
    error: Optional[str] = None


def _client_for(session, client_factory):
    factory = client_factory or CatalogClient
    return factory(session)


def _parse_records(model, records):
    return [model.model_validate(record) for record in records]


def _find_record(records, raw_material_id):
    for record in records:
        if not isinstance(record, dict):
            continue
        record_id = record.get("_id", record.get("id"))
        if record_id is not None and str(record_id) == raw_material_id:
            return record
    return None


def _fetch_sub_resource(fetch, model, raw_material_id, label) -> FetchResult:
    try:
        return FetchResult(_parse_records(model, fetch(raw_material_id)))
    except (CatalogError, ValidationError) as exc:
        logger.warning("Error fetching %s for raw material %s: %s", label, raw_material_id, exc)
        return FetchResult([], exc)


def load_detail(
    raw_material_id: str,
    session: Optional[CatalogSession],
    *,
    client_factory=None,
    redirect_on_not_found: bool = True,
) -> DetailState:
    """Gather a raw material with its vendor prices and price history."""
    if session is None or not session.is_signed_in:
        return DetailState(loading=False, redirect_to=SIGN_IN_PATH, reason=SIGNED_OUT)

    raw_material_id = str(raw_material_id)
    try:
        client = _client_for(session, client_factory)
        record = _find_record(client.list_raw_materials(), raw_material_id)
        raw_material = RawMaterial.model_validate(record) if record is not None else None
    except (CatalogError, ValidationError):
        logger.exception("Error fetching raw material %s", raw_material_id)
        return DetailState(loading=False, redirect_to=RAW_MATERIALS_PATH, reason=CATALOG_UNAVAILABLE)

    if raw_material is None:
        logger.info("Raw material %s not found in catalog", raw_material_id)
        return DetailState(
            loading=False,
            redirect_to=RAW_MATERIALS_PATH if redirect_on_not_found else None,
            reason=NOT_FOUND,
        )

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="rm-detail") as pool:
        vendor_future = pool.submit(
            _fetch_sub_resource, client.list_vendor_prices, VendorPrice, raw_material_id, "vendor prices"
        )
        logs_future = pool.submit(
            _fetch_sub_resource, client.list_price_logs, PriceLog, raw_material_id, "price logs"
        )
        vendor_result = vendor_future.result()
        logs_result = logs_future.result()

    logger.debug(
        "Loaded raw material %s (vendor prices ok=%s, price logs ok=%s)",
        raw_material_id,
        vendor_result.ok,
        logs_result.ok,
    )
    return DetailState(
        loading=False,
        raw_material=raw_material,
        vendor_prices=vendor_result.items,
        price_logs=logs_result.items,
    )


def _matches_query(raw_material: RawMaterial, query: str) -> bool:
    needle = query.casefold()
    return needle in raw_material.code.casefold() or needle in raw_material.name.casefold()


def load_raw_materials(
    session: Optional[CatalogSession],
    query: Optional[str] = None,
    *,
    client_factory=None,
) -> RawMaterialList:
    if session is None or not session.is_signed_in:
        return RawMaterialList(redirect_to=SIGN_IN_PATH)

    try:
        client = _client_for(session, client_factory)
        raw_materials = _parse_records(RawMaterial, client.list_raw_materials())
    except (CatalogError, ValidationError) as exc:
        logger.exception("Error fetching raw materials")
        return RawMaterialList(error=str(exc))

    query = (query or "").strip()
    if query:
        raw_materials = [item for item in raw_materials if _matches_query(item, query)]
    return RawMaterialList(raw_materials=raw_materials)


__all__ = [
    "CATALOG_UNAVAILABLE",
    "DetailState",
    "FetchResult",
    "NOT_FOUND",
    "RawMaterialList",
    "SIGNED_OUT",
    "load_detail",
    "load_raw_materials",
]
