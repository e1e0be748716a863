"""Data models for scraped phones and spreadsheet rows."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

from phone_scrape.config import EXCEL_COLUMNS

__all__ = ["RawProduct", "ProductRow"]


@dataclass
class RawProduct:
    """One product tile as extracted from the catalog page.

    Lives only until it is mapped to a ProductRow.
    """

    title: str
    brand: str
    price: Optional[int] = None
    source_url: str = ""
    image_url: str = ""
    description: str = ""

    # Parsed from title + description
    storage_options: List[str] = field(default_factory=list)
    display_size: str = ""
    battery: str = ""
    ram: str = ""
    camera: str = ""

    source: str = "tiendamovil"


@dataclass
class ProductRow:
    """A spreadsheet row. Field order matches EXCEL_COLUMNS."""

    id: str
    brand_id: str
    brand_name: str
    model: str
    price: Union[int, float] = 0
    sale_price: Union[int, float, str] = ""
    storage_options: str = ""
    display_size: str = ""
    processor: str = ""
    ram: str = ""
    camera: str = ""
    battery: str = ""
    release_year: Union[int, str] = ""
    description: str = ""
    images: str = ""
    is_featured: bool = False
    is_published: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Project the row through the fixed column list."""
        data = asdict(self)
        return {col: data.get(col, "") for col in EXCEL_COLUMNS}
