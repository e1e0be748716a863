"""Text normalization and spec extraction helpers.

Every extractor returns an empty value when nothing matches; none of them
raise on odd input.
"""

import re
import unicodedata
from typing import List, Optional

from phone_scrape.config import DEFAULT_BRAND, KNOWN_BRANDS, UNKNOWN_BRAND_ID

__all__ = [
    "clean_text",
    "strip_diacritics",
    "slugify",
    "slugify_brand",
    "parse_price",
    "extract_storage_options",
    "extract_display_size",
    "extract_battery",
    "extract_ram",
    "extract_camera",
    "guess_brand_from_title",
]

STORAGE_RE = re.compile(r"(\d+)\s*GB", re.IGNORECASE)
DISPLAY_RE = re.compile(r"(\d{1,2}(?:\.\d{1,2})?)\s*\"")
BATTERY_RE = re.compile(r"(\d{3,5})\s*mAh", re.IGNORECASE)
RAM_RE = re.compile(r"(\d+)\s*GB\s*(?:RAM)?", re.IGNORECASE)
SENTENCE_END_RE = re.compile(r"[.!\n]")


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace and trim."""
    return re.sub(r"\s+", " ", str(text or "")).strip()


def strip_diacritics(text: str) -> str:
    """Remove combining marks: 'Cámara' -> 'Camara'."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(value: Optional[str], default: str = "item") -> str:
    """Lowercase, strip diacritics and join alphanumeric runs with hyphens."""
    text = strip_diacritics(str(value or "").lower())
    slug = re.sub(r"[^a-z0-9]+", "-", text).strip("-")
    return slug or default


def slugify_brand(brand: Optional[str]) -> str:
    return slugify(brand, default=UNKNOWN_BRAND_ID)


def parse_price(text: Optional[str]) -> Optional[int]:
    """Parse a Guaraní price like 'Gs. 1.234.567' into 1234567.

    Dots are thousands separators; anything after a decimal comma is
    dropped. Returns None when the text holds no digits.
    """
    if not text:
        return None

    tokens = re.sub(r"[^0-9.,]", " ", str(text)).split()
    numeric = [t for t in tokens if any(ch.isdigit() for ch in t)]
    if not numeric:
        return None

    integer_part = numeric[0].split(",")[0].replace(".", "")
    if not integer_part:
        return None
    return int(integer_part)


def extract_storage_options(text: Optional[str]) -> List[str]:
    """All '<n>GB' mentions, deduplicated in order of appearance."""
    if not text:
        return []
    storages: List[str] = []
    for match in STORAGE_RE.finditer(str(text)):
        value = f"{match.group(1)}GB"
        if value not in storages:
            storages.append(value)
    return storages


def extract_display_size(text: Optional[str]) -> str:
    if not text:
        return ""
    match = DISPLAY_RE.search(str(text).replace(",", "."))
    return f'{match.group(1)}"' if match else ""


def extract_battery(text: Optional[str]) -> str:
    if not text:
        return ""
    match = BATTERY_RE.search(str(text))
    return f"{match.group(1)} mAh" if match else ""


def extract_ram(text: Optional[str]) -> str:
    if not text:
        return ""
    match = RAM_RE.search(str(text))
    return f"{match.group(1)}GB" if match else ""


def extract_camera(text: Optional[str]) -> str:
    """Lowercased text from 'camara'/'cámara' through the end of that sentence."""
    if not text:
        return ""
    source = str(text).lower()

    # Fold per character so indexes in `folded` line up with `source`
    folded = "".join(
        base if len(base) == 1 else ch
        for ch, base in ((ch, strip_diacritics(ch)) for ch in source)
    )
    idx = folded.find("camara")
    if idx == -1:
        return ""

    tail = source[idx:]
    end = SENTENCE_END_RE.search(tail)
    if end is None:
        return tail.strip()
    return tail[: end.start() + 1].strip()


def guess_brand_from_title(title: Optional[str]) -> str:
    """Find a known brand name inside the title, or the no-brand sentinel."""
    lowered = str(title or "").lower()
    for brand in KNOWN_BRANDS:
        if brand.lower() in lowered:
            return "Apple" if brand.lower() == "iphone" else brand
    return DEFAULT_BRAND
