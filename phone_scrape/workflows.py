"""High-level scraping workflows.

Runs the catalog build end to end: fetch, parse, dedupe, map, download
images, write the workbook. Each step runs once, in order.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests  # type: ignore[import-untyped]

from phone_scrape.config import (
    CATALOG_URL,
    IMAGE_NAMESPACE,
    IMAGE_TIMEOUT,
    IMAGES_DIR,
    OUTPUT_PATH,
    REQUEST_TIMEOUT,
)
from phone_scrape.excel_utils import write_rows_to_excel
from phone_scrape.html_utils import parse_catalog_html
from phone_scrape.images import download_row_images
from phone_scrape.logging_config import get_logger, log_scrape_event
from phone_scrape.rows import dedupe_products, to_product_rows
from phone_scrape.scraper import create_session, fetch_html

__all__ = ["build_catalog_workflow"]

logger = get_logger("workflows")


def build_catalog_workflow(
    url: str = CATALOG_URL,
    output_path: Union[str, Path] = OUTPUT_PATH,
    images_dir: Union[str, Path] = IMAGES_DIR,
    download_images: bool = True,
    timeout: float = REQUEST_TIMEOUT,
    image_timeout: float = IMAGE_TIMEOUT,
    namespace: str = IMAGE_NAMESPACE,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """Scrape the catalog and write the phones workbook.

    Args:
        url: Catalog listing URL
        output_path: Workbook destination (overwritten)
        images_dir: Directory for downloaded images
        download_images: If False, rows keep their remote image URLs
        timeout: Catalog request timeout in seconds
        image_timeout: Per-image request timeout in seconds
        namespace: Folder name used in local image references
        session: Optional requests.Session shared by all requests

    Returns:
        Summary dict with counts and the output path

    Raises:
        FetchError: If the catalog page cannot be fetched
    """
    sess = session or create_session()

    html = fetch_html(url, session=sess, timeout=timeout)

    raw_products = parse_catalog_html(html, base_url=url)
    products = dedupe_products(raw_products)
    logger.info(f"Parsed {len(raw_products)} raw items, {len(products)} unique phones.")
    log_scrape_event("catalog_parsed", {
        "raw_items": len(raw_products),
        "unique_items": len(products),
    })

    rows = to_product_rows(products)

    downloaded = 0
    if download_images:
        downloaded = download_row_images(
            rows,
            images_dir=images_dir,
            session=sess,
            namespace=namespace,
            timeout=image_timeout,
        )
        with_image = sum(1 for row in rows if row.images)
        logger.info(f"Downloaded {downloaded}/{with_image} images into {images_dir}")

    written = write_rows_to_excel(rows, output_path)

    return {
        "raw_items": len(raw_products),
        "rows": written,
        "images_downloaded": downloaded,
        "output_path": str(output_path),
    }
