"""Configuration and constants for the phone catalog scraper."""

import os
from pathlib import Path
from typing import Dict, List

__all__ = [
    "CATALOG_URL",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "IMAGE_TIMEOUT",
    "OUTPUT_PATH",
    "IMAGES_DIR",
    "IMAGE_NAMESPACE",
    "SHEET_NAME",
    "EXCEL_COLUMNS",
    "DEFAULT_BRAND",
    "UNKNOWN_BRAND_ID",
    "KNOWN_BRANDS",
    "PRODUCT_SELECTORS",
    "FIELD_SELECTORS",
    "FEED_EXCEL_PATH",
    "FEED_JSON_PATH",
    "FEED_DOCS_JSON_PATH",
]

# Tienda Movil phone catalog, newest first, every result on one page
CATALOG_URL = os.getenv(
    "PHONE_SCRAPE_CATALOG_URL",
    "https://tiendamovil.com.py/shop/celulares/?order=product.date_add.desc&resultsPerPage=9999999",
)

# The catalog serves a reduced page to non-browser agents
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

# Request timeouts (seconds)
REQUEST_TIMEOUT = float(os.getenv("PHONE_SCRAPE_REQUEST_TIMEOUT", "20"))
IMAGE_TIMEOUT = float(os.getenv("PHONE_SCRAPE_IMAGE_TIMEOUT", "15"))

# Output paths (relative to the storefront project root)
OUTPUT_PATH = os.getenv("PHONE_SCRAPE_OUTPUT_PATH", str(Path("data") / "products-paraguay.xlsx"))
IMAGES_DIR = os.getenv("PHONE_SCRAPE_IMAGES_DIR", str(Path("public") / "images" / "phones-paraguay"))

# Downloaded images are referenced by the frontend as /images/<namespace>/<file>
IMAGE_NAMESPACE = "phones-paraguay"

SHEET_NAME = "Paraguay"

# Column order shared with the feed builder; must not change
EXCEL_COLUMNS: List[str] = [
    "id",
    "brand_id",
    "brand_name",
    "model",
    "price",
    "sale_price",
    "storage_options",
    "display_size",
    "processor",
    "ram",
    "camera",
    "battery",
    "release_year",
    "description",
    "images",
    "is_featured",
    "is_published",
]

DEFAULT_BRAND = "Sin marca"
UNKNOWN_BRAND_ID = "unknown"

# Checked in order against the lowercased title; "iPhone" maps to Apple
KNOWN_BRANDS: List[str] = [
    "Apple",
    "iPhone",
    "Samsung",
    "Xiaomi",
    "Motorola",
    "Oppo",
    "Honor",
    "Tecno",
    "ZTE",
    "Infinix",
]

# =============================================================================
# Selector fallback chains
# =============================================================================
# Markup differs between the PrestaShop and WooCommerce themes the catalog
# has used; each list is tried in order and the first non-empty match wins.

PRODUCT_SELECTORS = "article.product-miniature, li.product"

FIELD_SELECTORS: Dict[str, List[str]] = {
    "title": ["h2.h3 a", "h2.product-title a", "h3 a", "h2 a"],
    "brand": [".product-brand", ".product-cat", ".manufacturer", ".product-manufacturer"],
    "price": [
        ".product-price-and-shipping .price",
        ".price .amount",
        ".woocommerce-Price-amount",
        ".product-price",
    ],
    "url": ["a.product-thumbnail", "a.thumbnail", "a.product-img-link", "h2 a", "h3 a"],
    "description": [
        ".product-description",
        ".product-short-description",
        ".product-desc",
        ".product-description-short",
    ],
}

# =============================================================================
# Product feed (spreadsheet -> storefront JSON)
# =============================================================================

FEED_EXCEL_PATH = str(Path("data") / "products.xlsx")
FEED_JSON_PATH = str(Path("public") / "data" / "products.json")
FEED_DOCS_JSON_PATH = str(Path("docs") / "data" / "products.json")
