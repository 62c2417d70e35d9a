from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rmcatalog.core.constants import CURRENCY_SYMBOL
from rmcatalog.core.units import normalize_unit

INVALID_DATE = "Invalid Date"


def parse_timestamp(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        if value_text.endswith(("Z", "z")):
            value_text = value_text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(value_text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def resolve_timezone(name: Optional[str]):
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def format_date(value, tz=timezone.utc) -> str:
    """Render a timestamp as ``DD/MM/YYYY, hh:mm am`` in ``tz``."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    local = parsed.astimezone(tz)
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return "{:%d/%m/%Y}, {:02d}:{:02d} {}".format(local, hour, local.minute, meridiem)


def format_currency(amount: float) -> str:
    return "{}{:.2f}".format(CURRENCY_SYMBOL, float(amount))


def format_price(amount: float, unit_name: Optional[str] = None) -> str:
    label = normalize_unit(unit_name)
    if label:
        return "{} / {}".format(format_currency(amount), label)
    return format_currency(amount)


def format_quantity(quantity) -> str:
    if isinstance(quantity, float) and quantity.is_integer():
        return str(int(quantity))
    return str(quantity)


__all__ = [
    "INVALID_DATE",
    "format_currency",
    "format_date",
    "format_price",
    "format_quantity",
    "parse_timestamp",
    "resolve_timezone",
]
