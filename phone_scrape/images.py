"""Best-effort download of product images to the storefront's public folder."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union
from urllib.parse import urlsplit

import requests  # type: ignore[import-untyped]

from phone_scrape.config import IMAGE_NAMESPACE, IMAGE_TIMEOUT, IMAGES_DIR
from phone_scrape.logging_config import get_logger, log_scrape_event
from phone_scrape.models import ProductRow
from phone_scrape.scraper import create_session
from phone_scrape.text_utils import slugify

__all__ = [
    "image_extension",
    "build_image_filename",
    "local_image_ref",
    "download_image",
    "download_row_images",
]

logger = get_logger("images")

DEFAULT_EXTENSION = ".jpg"


def image_extension(url: str) -> str:
    """File extension of the URL path, ignoring any query string."""
    path = url.split("?", 1)[0]
    path = urlsplit(path).path or path
    suffix = Path(path).suffix
    return suffix or DEFAULT_EXTENSION


def build_image_filename(row: ProductRow, url: str) -> str:
    """Deterministic name from brand + model so reruns overwrite the same file."""
    base = slugify(f"{row.brand_name or ''}-{row.model or row.id or ''}")
    return f"{base}{image_extension(url)}"


def local_image_ref(filename: str, namespace: str = IMAGE_NAMESPACE) -> str:
    return f"/images/{namespace}/{filename}"


def download_image(
    url: str,
    dest_path: Union[str, Path],
    session: Optional[requests.Session] = None,
    timeout: float = IMAGE_TIMEOUT,
) -> None:
    """Fetch one image and write it to dest_path.

    Raises:
        requests.exceptions.RequestException: On network or HTTP errors
    """
    sess = session or create_session()
    resp = sess.get(url, timeout=timeout)
    resp.raise_for_status()
    Path(dest_path).write_bytes(resp.content)


def download_row_images(
    rows: Iterable[ProductRow],
    images_dir: Union[str, Path] = IMAGES_DIR,
    session: Optional[requests.Session] = None,
    namespace: str = IMAGE_NAMESPACE,
    timeout: float = IMAGE_TIMEOUT,
) -> int:
    """Download each row's image and point the row at the local copy.

    Rows whose download fails keep their remote URL. Downloads run one at
    a time in row order.

    Returns:
        Number of images downloaded
    """
    images_path = Path(images_dir)
    images_path.mkdir(parents=True, exist_ok=True)
    sess = session or create_session()

    downloaded = 0
    for row in rows:
        image_url = str(row.images or "").strip()
        if not image_url:
            continue

        filename = build_image_filename(row, image_url)
        local_path = images_path / filename

        try:
            logger.info(f"Downloading image {image_url} -> {local_path}")
            download_image(image_url, local_path, session=sess, timeout=timeout)
        except (requests.exceptions.RequestException, OSError) as e:
            logger.warning(f"Failed to download image {image_url} - {e}")
            log_scrape_event("image_failed", {
                "row_id": row.id,
                "url": image_url,
                "error": str(e),
            }, level=logging.DEBUG)
            continue

        row.images = local_image_ref(filename, namespace)
        downloaded += 1

    return downloaded
