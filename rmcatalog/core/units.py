from typing import Optional


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Map a free-text unit name to its short display label.

    Rules are checked in order and the first match wins, so "millilitre"
    is reported as "L". Anything unrecognised is returned unchanged.
    """
    if not unit:
        return None
    value = unit.lower().strip()
    if "kg" in value or "kilogram" in value:
        return "kg"
    if value == "g" or "gram" in value:
        return "g"
    if "lit" in value or value == "l" or "ltr" in value or "litre" in value:
        return "L"
    if "ml" in value:
        return "ml"
    if "piece" in value or "pc" in value or value == "pcs":
        return "pcs"
    return unit


__all__ = ["normalize_unit"]
