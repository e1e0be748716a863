"""HTML parsing and extraction for the catalog listing page."""

from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from phone_scrape.config import CATALOG_URL, FIELD_SELECTORS, PRODUCT_SELECTORS
from phone_scrape.logging_config import get_logger
from phone_scrape.models import RawProduct
from phone_scrape.text_utils import (
    clean_text,
    extract_battery,
    extract_camera,
    extract_display_size,
    extract_ram,
    extract_storage_options,
    guess_brand_from_title,
    parse_price,
)
from phone_scrape.url_validation import URLValidationError, resolve_url, validate_image_url

__all__ = [
    "select_first_text",
    "select_first_attr",
    "extract_image_src",
    "parse_product_node",
    "parse_catalog_html",
]

logger = get_logger("html_utils")


def select_first_text(node: Tag, selectors: Sequence[str]) -> str:
    """Return the cleaned text of the first selector that yields non-empty text."""
    for selector in selectors:
        el = node.select_one(selector)
        if el is None:
            continue
        text = clean_text(el.get_text(" "))
        if text:
            return text
    return ""


def select_first_attr(node: Tag, selectors: Sequence[str], attr: str) -> str:
    """Return the first non-empty attribute value across the selector chain."""
    for selector in selectors:
        el = node.select_one(selector)
        if el is None:
            continue
        value = el.get(attr)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def extract_image_src(node: Tag) -> str:
    """Source of the tile's first image; lazy-loaded data-src wins over src."""
    img = node.find("img")
    if img is None:
        return ""
    for attr in ("data-src", "src"):
        value = img.get(attr)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def parse_product_node(node: Tag, base_url: str = CATALOG_URL) -> Optional[RawProduct]:
    """Turn one product tile into a RawProduct, or None when it has no title."""
    title = select_first_text(node, FIELD_SELECTORS["title"])
    if not title:
        return None

    brand = select_first_text(node, FIELD_SELECTORS["brand"]) or guess_brand_from_title(title)
    price = parse_price(select_first_text(node, FIELD_SELECTORS["price"]))
    url = resolve_url(select_first_attr(node, FIELD_SELECTORS["url"], "href"), base_url)

    raw_image = extract_image_src(node)
    try:
        image_url = validate_image_url(raw_image, base_url)
    except URLValidationError as e:
        logger.warning(f"Dropping image for {title!r}: {e}")
        image_url = ""

    description = select_first_text(node, FIELD_SELECTORS["description"])
    combined = f"{title}. {description}"

    return RawProduct(
        title=title,
        brand=brand,
        price=price if price is not None else 0,
        source_url=url,
        image_url=image_url,
        description=description,
        storage_options=extract_storage_options(combined),
        display_size=extract_display_size(combined),
        battery=extract_battery(combined),
        ram=extract_ram(combined),
        camera=extract_camera(combined),
    )


def parse_catalog_html(html: str, base_url: str = CATALOG_URL) -> List[RawProduct]:
    """Extract every product tile from a catalog listing page, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    products: List[RawProduct] = []

    for node in soup.select(PRODUCT_SELECTORS):
        product = parse_product_node(node, base_url)
        if product is not None:
            products.append(product)

    return products
