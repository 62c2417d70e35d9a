from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parents[1]

TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

SIGN_IN_PATH = "/login"
RAW_MATERIALS_PATH = "/raw-materials"

CATALOG_RAW_MATERIALS_ENDPOINT = "/api/raw-materials"

CURRENCY_SYMBOL = "₹"
PRICE_LOGS_TAB = "history"
