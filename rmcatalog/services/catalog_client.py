import http.client
import json
from dataclasses import dataclass
from typing import Optional
from urllib import error, request
from urllib.parse import quote, urlparse

from rmcatalog.config import get_settings
from rmcatalog.core.constants import CATALOG_RAW_MATERIALS_ENDPOINT

_ALLOWED_HTTP_SCHEMES = {"http", "https"}


class CatalogError(RuntimeError):
    """The catalog API could not be reached or sent an unusable reply."""


@dataclass(frozen=True)
class CatalogSession:
    """Signed-in dashboard session plus where to reach the catalog API."""

    token: Optional[str]
    base_url: str
    username: Optional[str] = None
    api_token: Optional[str] = None
    timeout: float = 15.0

    @property
    def is_signed_in(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_settings(cls, token, username=None, settings=None):
        settings = settings or get_settings()
        return cls(
            token=token,
            username=username,
            base_url=settings.CATALOG_API_URL,
            api_token=settings.CATALOG_API_TOKEN,
            timeout=settings.CATALOG_API_TIMEOUT_SECONDS,
        )


def validate_api_url(api_url):
    parsed = urlparse(api_url or "")
    scheme = parsed.scheme.lower()
    if scheme not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise CatalogError("CATALOG_API_URL must be an absolute HTTP(S) URL")
    return api_url.rstrip("/")


def unwrap_envelope(body, path):
    """Return ``data`` from a ``{"success": true, "data": [...]}`` reply."""
    if not isinstance(body, dict):
        raise CatalogError("Catalog API error: {} returned a non-object body".format(path))
    if not body.get("success"):
        message = body.get("message") or body.get("error") or "success flag not set"
        raise CatalogError("Catalog API error: {} {}".format(path, message))
    data = body.get("data")
    if not isinstance(data, list):
        raise CatalogError("Catalog API error: {} data is not a list".format(path))
    return data


def _raise_http_error(exc, path):
    body = ""
    try:
        body_bytes = exc.read()
        if body_bytes:
            body = body_bytes.decode("utf-8", errors="replace").strip()
    except (OSError, ValueError):
        body = ""

    if body:
        raise CatalogError(
            "Catalog API error: {} HTTP {} {}".format(path, exc.code, body)
        ) from exc
    raise CatalogError("Catalog API error: {} HTTP {}".format(path, exc.code)) from exc


class CatalogClient:
    """Read-only client for the raw-materials catalog API."""

    def __init__(self, session: CatalogSession):
        self.session = session
        self.base_url = validate_api_url(session.base_url)

    def _headers(self):
        headers = {"Accept": "application/json"}
        api_token = (self.session.api_token or "").strip()
        if api_token:
            if api_token.lower().startswith("bearer "):
                headers["Authorization"] = api_token
            else:
                headers["Authorization"] = "Bearer {}".format(api_token)
        return headers

    def get_collection(self, path):
        req = request.Request(self.base_url + path, method="GET", headers=self._headers())
        try:
            with request.urlopen(req, timeout=self.session.timeout) as response:  # nosec B310
                status_code = response.getcode()
                if status_code < 200 or status_code >= 300:
                    raise CatalogError("Catalog API error: {} HTTP {}".format(path, status_code))
                raw = response.read()
        except error.HTTPError as exc:
            _raise_http_error(exc, path)
        except error.URLError as exc:
            raise CatalogError("Catalog API error: {} {}".format(path, exc.reason)) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise CatalogError("Catalog API error: {} {}".format(path, exc)) from exc

        try:
            body = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise CatalogError("Catalog API error: {} returned invalid JSON".format(path)) from exc
        return unwrap_envelope(body, path)

    def list_raw_materials(self):
        return self.get_collection(CATALOG_RAW_MATERIALS_ENDPOINT)

    def list_vendor_prices(self, raw_material_id):
        return self.get_collection(_sub_resource_path(raw_material_id, "vendor-prices"))

    def list_price_logs(self, raw_material_id):
        return self.get_collection(_sub_resource_path(raw_material_id, "price-logs"))


def _sub_resource_path(raw_material_id, resource):
    return "{}/{}/{}".format(
        CATALOG_RAW_MATERIALS_ENDPOINT,
        quote(str(raw_material_id), safe=""),
        resource,
    )


__all__ = [
    "CatalogClient",
    "CatalogError",
    "CatalogSession",
    "unwrap_envelope",
    "validate_api_url",
]
