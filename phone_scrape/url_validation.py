"""URL sanitization for links and image sources found in scraped markup."""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

__all__ = [
    "URLValidationError",
    "sanitize_url",
    "resolve_url",
    "validate_image_url",
    "DANGEROUS_SCHEMES",
]


class URLValidationError(Exception):
    """Raised when URL validation fails."""
    pass


# Dangerous URL schemes to reject
DANGEROUS_SCHEMES = {"javascript", "data", "vbscript", "file"}


def sanitize_url(url: Optional[str]) -> str:
    """Strip whitespace, control characters and encoded null bytes."""
    if not url:
        return ""
    url = url.strip()
    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)
    return url.replace("%00", "")


def resolve_url(href: Optional[str], base_url: str) -> str:
    """Resolve a possibly relative href against the page it came from."""
    href = sanitize_url(href)
    if not href:
        return ""
    return urljoin(base_url, href)


def validate_image_url(url: Optional[str], base_url: str = "") -> str:
    """Resolve and check an image URL.

    Args:
        url: Raw src/data-src attribute value
        base_url: Page URL used to resolve relative sources

    Returns:
        Absolute http(s) URL, or "" when there is no image

    Raises:
        URLValidationError: If the URL uses a scheme we will not download
    """
    url = sanitize_url(url)
    if not url:
        return ""

    scheme = urlparse(url).scheme.lower()
    if scheme in DANGEROUS_SCHEMES:
        raise URLValidationError(f"Dangerous URL scheme in image: {scheme}")

    if base_url:
        url = urljoin(base_url, url)

    parsed = urlparse(url)
    if parsed.scheme.lower() not in ("http", "https"):
        raise URLValidationError(f"Invalid image URL scheme: {parsed.scheme or '(none)'}")
    if not parsed.netloc:
        raise URLValidationError("Image URL has no domain")

    return url
