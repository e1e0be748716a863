"""Storefront product feed: spreadsheet to JSON, and image renaming.

The frontend loads ``public/data/products.json``; the static GitHub Pages
build serves the copy under ``docs/``. Both are always written together.
"""

import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from phone_scrape.config import (
    DEFAULT_BRAND,
    FEED_DOCS_JSON_PATH,
    FEED_EXCEL_PATH,
    FEED_JSON_PATH,
    IMAGE_NAMESPACE,
    IMAGES_DIR,
    UNKNOWN_BRAND_ID,
)
from phone_scrape.excel_utils import load_excel_rows
from phone_scrape.logging_config import get_logger, log_scrape_event
from phone_scrape.text_utils import slugify

__all__ = [
    "parse_bool",
    "parse_number",
    "split_list",
    "row_to_feed_product",
    "build_feed",
    "write_feed",
    "sync_feed_from_excel",
    "build_nice_filename",
    "rename_feed_images",
]

logger = get_logger("feed")

TRUE_STRINGS = {"true", "1", "yes", "y", "si", "sí"}

PathLike = Union[str, Path]


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return False


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """Numbers pass through; strings lose thousands commas.

    Blank, unparseable, NaN and infinite values give None so the feed stays
    valid JSON.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float):
            if not math.isfinite(value):
                return None
            if value.is_integer():
                return int(value)
        return value
    if isinstance(value, str) and value.strip():
        try:
            number = float(value.replace(",", "").strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def split_list(value: Any) -> List[str]:
    return [part.strip() for part in _cell_text(value).split(",") if part.strip()]


def _cell_text(value: Any) -> str:
    """String form of a cell; integral floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    return _cell_text(value) or None


def row_to_feed_product(row: Dict[str, Any], index: int, timestamp: str) -> Dict[str, Any]:
    """Convert one spreadsheet row into the JSON shape the storefront expects."""
    brand_id = _cell_text(row.get("brand_id")).strip() or UNKNOWN_BRAND_ID
    brand_name = _cell_text(row.get("brand_name")).strip() or DEFAULT_BRAND

    price = parse_number(row.get("price"))
    is_published = row.get("is_published", "")

    return {
        "id": _cell_text(row.get("id")) or str(index + 1),
        "brand_id": brand_id,
        "model": _cell_text(row.get("model")).strip(),
        "price": price if price is not None else 0,
        "sale_price": parse_number(row.get("sale_price")),
        "storage_options": split_list(row.get("storage_options")),
        "display_size": _optional_text(row.get("display_size")),
        "processor": _optional_text(row.get("processor")),
        "ram": _optional_text(row.get("ram")),
        "camera": _optional_text(row.get("camera")),
        "battery": _optional_text(row.get("battery")),
        "release_year": parse_number(row.get("release_year")),
        "description": _optional_text(row.get("description")),
        "images": split_list(row.get("images")),
        "is_featured": parse_bool(row.get("is_featured")),
        "is_published": True if "is_published" not in row else parse_bool(is_published),
        "view_count": 0,
        "click_count": 0,
        "created_at": timestamp,
        "updated_at": timestamp,
        "brand": {
            "id": brand_id,
            "name": brand_name,
            "logo_url": None,
            "created_at": timestamp,
        },
    }


def build_feed(rows: List[Dict[str, Any]], timestamp: Optional[str] = None) -> List[Dict[str, Any]]:
    stamp = timestamp or datetime.now(timezone.utc).isoformat()
    return [row_to_feed_product(row, index, stamp) for index, row in enumerate(rows)]


def write_feed(
    products: List[Dict[str, Any]],
    json_path: PathLike = FEED_JSON_PATH,
    docs_json_path: Optional[PathLike] = FEED_DOCS_JSON_PATH,
) -> None:
    """Write the feed JSON. A failed docs mirror is logged, not raised."""
    payload = json.dumps(products, indent=2, ensure_ascii=False, allow_nan=False)

    out_path = Path(json_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(payload, encoding="utf-8")
    logger.info(f"Wrote {len(products)} products to {out_path}")

    if docs_json_path is None:
        return
    docs_path = Path(docs_json_path)
    try:
        docs_path.parent.mkdir(parents=True, exist_ok=True)
        docs_path.write_text(payload, encoding="utf-8")
        logger.info(f"Wrote {len(products)} products to {docs_path}")
    except OSError as e:
        logger.warning(f"Failed to write {docs_path}: {e}")


def sync_feed_from_excel(
    excel_path: PathLike = FEED_EXCEL_PATH,
    json_path: PathLike = FEED_JSON_PATH,
    docs_json_path: Optional[PathLike] = FEED_DOCS_JSON_PATH,
) -> List[Dict[str, Any]]:
    """Regenerate the storefront feed from a product workbook."""
    rows = load_excel_rows(excel_path)
    products = build_feed(rows)
    write_feed(products, json_path, docs_json_path)

    log_scrape_event("feed_written", {
        "message": f"Synced {len(products)} products from {excel_path}",
        "excel_path": str(excel_path),
        "json_path": str(json_path),
        "products": len(products),
    })
    return products


# =============================================================================
# Image renaming
# =============================================================================

def build_nice_filename(product: Dict[str, Any]) -> str:
    """Slug of brand + model without repeating the brand ("Apple Apple iPhone")."""
    brand = product.get("brand") or {}
    brand_name = str(brand.get("name") or product.get("brand_id") or "").strip()
    model = str(product.get("model") or "").strip()

    if brand_name and model.lower().startswith(brand_name.lower()):
        model = model[len(brand_name):].strip()

    base = f"{brand_name} {model}".strip() or str(product.get("id") or "")
    return slugify(base)


def _unique_target(images_dir: Path, base: str, ext: str, old_name: str) -> str:
    """First free name among base, base-1, base-2, ... (the file's own name counts as free)."""
    new_name = f"{base}{ext}"
    counter = 1
    while (
        new_name != old_name
        and (images_dir / new_name).exists()
        and new_name.lower() != old_name.lower()
    ):
        new_name = f"{base}-{counter}{ext}"
        counter += 1
    return new_name


def rename_feed_images(
    json_path: PathLike = FEED_JSON_PATH,
    docs_json_path: Optional[PathLike] = FEED_DOCS_JSON_PATH,
    images_dir: PathLike = IMAGES_DIR,
    namespace: str = IMAGE_NAMESPACE,
) -> List[Tuple[str, str, str]]:
    """Rename downloaded images to brand/model filenames and update the feed.

    Only the first image of each product is considered, and only when it
    lives under /images/<namespace>/.

    Returns:
        List of (product id, old filename, new filename)

    Raises:
        FileNotFoundError: If the feed JSON does not exist
    """
    feed_path = Path(json_path)
    if not feed_path.exists():
        raise FileNotFoundError(f"Product feed not found: {feed_path}")

    logger.info(f"Reading {feed_path}")
    products = json.loads(feed_path.read_text(encoding="utf-8"))

    prefix = f"/images/{namespace}/"
    directory = Path(images_dir)
    renamed: List[Tuple[str, str, str]] = []

    for product in products:
        images = product.get("images") or []
        if not images:
            continue

        old_ref = str(images[0] or "").strip()
        if not old_ref.startswith(prefix):
            continue

        old_name = old_ref[len(prefix):]
        old_path = directory / old_name
        if not old_path.exists():
            logger.warning(f"Image file not found, skipping: {old_path}")
            continue

        ext = Path(old_name).suffix or ".jpg"
        new_name = _unique_target(directory, build_nice_filename(product), ext, old_name)
        if new_name == old_name:
            continue

        logger.info(f"Renaming {old_name} -> {new_name}")
        old_path.rename(directory / new_name)
        images[0] = f"{prefix}{new_name}"
        renamed.append((str(product.get("id", "")), old_name, new_name))

    logger.info(f"Renamed {len(renamed)} images. Writing updated JSON...")
    write_feed(products, feed_path, docs_json_path)

    log_scrape_event("images_renamed", {
        "message": f"Renamed {len(renamed)} images",
        "renamed": len(renamed),
    })
    return renamed
