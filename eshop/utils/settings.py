# eshop/utils/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parents[1]

CATALOG_PATH = os.getenv("CATALOG_PATH", str(PACKAGE_DIR / "data" / "automobile_parts.json"))
CATALOG_URL = os.getenv("CATALOG_URL", "")
CATALOG_TIMEOUT = int(os.getenv("CATALOG_TIMEOUT", 2))
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", 10))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
