"""Deduplication and mapping of scraped products to spreadsheet rows."""

import re
from typing import Dict, Iterable, List

from phone_scrape.config import DEFAULT_BRAND
from phone_scrape.models import ProductRow, RawProduct
from phone_scrape.text_utils import slugify_brand

__all__ = ["dedupe_key", "dedupe_products", "clean_model", "to_product_rows"]

# The shop prefixes most titles with the product type
MODEL_PREFIX_RE = re.compile(r"^Celular\s+", re.IGNORECASE)


def dedupe_key(product: RawProduct) -> str:
    return f"{slugify_brand(product.brand)}|{product.title}".lower()


def dedupe_products(products: Iterable[RawProduct]) -> List[RawProduct]:
    """Keep the first listing for each (brand, title); later repeats are dropped."""
    unique: Dict[str, RawProduct] = {}
    for product in products:
        key = dedupe_key(product)
        if key not in unique:
            unique[key] = product
    return list(unique.values())


def clean_model(title: str) -> str:
    return MODEL_PREFIX_RE.sub("", title)


def to_product_rows(products: Iterable[RawProduct]) -> List[ProductRow]:
    """Map products to rows with sequential ids starting at "1"."""
    rows: List[ProductRow] = []
    for index, product in enumerate(products, start=1):
        rows.append(ProductRow(
            id=str(index),
            brand_id=slugify_brand(product.brand),
            brand_name=product.brand or DEFAULT_BRAND,
            model=clean_model(product.title),
            price=product.price or 0,
            storage_options=",".join(product.storage_options),
            display_size=product.display_size,
            ram=product.ram,
            camera=product.camera,
            battery=product.battery,
            description=product.description,
            images=product.image_url or "",
        ))
    return rows
