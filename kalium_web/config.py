"""Centralized configuration for the Kalium catalog server."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Determine project root (parent of 'kalium_web' directory)
_THIS_DIR = Path(__file__).parent
_PROJECT_ROOT = _THIS_DIR.parent

# Load environment variables from .env file (explicitly specify path)
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

# MongoDB connection. MONGODB_URI wins over the older MONGO_URI name.
MONGODB_URI = os.getenv(
    "MONGODB_URI",
    os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017/kalium_furniture"),
)
# Used only when the URI does not name a database itself
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "kalium_furniture")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

PRODUCTS_COLLECTION = "products"
SUBCATEGORIES_COLLECTION = "subcategories"

# Flask app settings. PORT is what hosting platforms set.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("PORT", os.getenv("FLASK_PORT", "8000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Scraped WordPress mirror
FRONTEND_ROOT = Path(
    os.getenv("FRONTEND_ROOT", str(_PROJECT_ROOT / "kalium_furniture" / "frontend"))
)
ORIGINAL_SITE_URL = os.getenv(
    "ORIGINAL_SITE_URL", "https://sites.kaliumtheme.com/elementor/furniture"
).rstrip("/")

# "routes" = backend server links (/product/<slug>), "static" = index_*.html mirror
REWRITE_PROFILE = os.getenv("REWRITE_PROFILE", "routes")

# Page templates inside FRONTEND_ROOT
PRODUCT_TEMPLATE = "index_tact-mirror.html"
CATEGORY_TEMPLATE = "index_decor.html"
ROOT_TEMPLATE = "index.html"

# index_<slug>.html pages that are categories, not products
NON_PRODUCT_SLUGS = frozenset({"decor", "mirrors", "rugs"})

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs")))
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "True").lower() == "true"
