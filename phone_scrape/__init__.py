"""Tienda Movil phone catalog scraper and storefront feed builder."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from phone_scrape.config import CATALOG_URL, EXCEL_COLUMNS, IMAGES_DIR, OUTPUT_PATH
from phone_scrape.excel_utils import write_rows_to_excel
from phone_scrape.feed import rename_feed_images, sync_feed_from_excel
from phone_scrape.html_utils import parse_catalog_html
from phone_scrape.models import ProductRow, RawProduct
from phone_scrape.rows import dedupe_products, to_product_rows
from phone_scrape.scraper import FetchError, fetch_html
from phone_scrape.workflows import build_catalog_workflow

__all__ = [
    # Version
    "__version__",
    # Config
    "CATALOG_URL",
    "EXCEL_COLUMNS",
    "IMAGES_DIR",
    "OUTPUT_PATH",
    # Models
    "RawProduct",
    "ProductRow",
    # Core functions
    "fetch_html",
    "FetchError",
    "parse_catalog_html",
    "dedupe_products",
    "to_product_rows",
    "write_rows_to_excel",
    "build_catalog_workflow",
    "sync_feed_from_excel",
    "rename_feed_images",
]
