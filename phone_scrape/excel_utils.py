"""Excel export and import utilities."""

import zipfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import InvalidFileException

from phone_scrape.config import EXCEL_COLUMNS, OUTPUT_PATH, SHEET_NAME
from phone_scrape.logging_config import get_logger, log_scrape_event
from phone_scrape.models import ProductRow

__all__ = [
    "rows_to_frame",
    "write_rows_to_excel",
    "load_excel_rows",
]

logger = get_logger("excel_utils")


def _worksheet_safe(value: Any) -> Any:
    """Drop control characters openpyxl refuses to write (e.g. \\x08, \\x1b)."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def rows_to_frame(rows: Iterable[ProductRow]) -> pd.DataFrame:
    """Build a DataFrame with exactly EXCEL_COLUMNS, in order."""
    records = [
        {col: _worksheet_safe(value) for col, value in row.to_dict().items()}
        for row in rows
    ]
    return pd.DataFrame(records, columns=EXCEL_COLUMNS)


def write_rows_to_excel(
    rows: Iterable[ProductRow],
    path: Union[str, Path] = OUTPUT_PATH,
    sheet_name: str = SHEET_NAME,
) -> int:
    """Write rows to a single-sheet workbook, replacing any existing file.

    Returns:
        Number of rows written
    """
    df = rows_to_frame(rows)

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_excel(out_path, sheet_name=sheet_name, index=False, engine="openpyxl")

    log_scrape_event("workbook_written", {
        "message": f"Wrote {len(df)} rows to {out_path}",
        "path": str(out_path),
        "rows": len(df),
    })
    return len(df)


def load_excel_rows(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read the first sheet of a workbook as a list of dicts.

    Empty cells come back as "" rather than NaN.

    Raises:
        FileNotFoundError: If the workbook does not exist
        ValueError: If the file is not a readable .xlsx workbook
    """
    excel_path = Path(path)
    if not excel_path.exists():
        raise FileNotFoundError(f"Excel file not found: {excel_path}")

    logger.info(f"Reading Excel file: {excel_path}")
    try:
        df = pd.read_excel(excel_path, sheet_name=0, dtype=object, engine="openpyxl")
    except (zipfile.BadZipFile, InvalidFileException, KeyError) as e:
        raise ValueError(f"Could not read workbook {excel_path}: {e}") from e
    df = df.astype(object).where(df.notna(), "")
    return df.to_dict(orient="records")
