"""
Spreadsheet parsing into expected booking rows
"""

import io
import math
import zipfile
from typing import Any, Dict, List

import pandas as pd
import structlog

from ..config import config
from ..types import BatchInputError


logger = structlog.get_logger(__name__)


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return int(value)
    if value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def read_expected_rows(content: bytes, sheet_name: str = None, max_rows: int = None) -> List[Dict[str, Any]]:
    """
    Parse an uploaded workbook into row dictionaries keyed by header.

    Args:
        content: Raw .xlsx bytes
        sheet_name: Worksheet to read
        max_rows: Maximum number of data rows

    Returns:
        One dictionary per non-empty row
    """
    if sheet_name is None:
        sheet_name = config.reconciliation.sheet_name
    if max_rows is None:
        max_rows = config.reconciliation.max_rows

    try:
        frame = pd.read_excel(
            io.BytesIO(content),
            sheet_name=sheet_name,
            nrows=max_rows,
            engine="openpyxl",
        )
    except (ValueError, KeyError, OSError, zipfile.BadZipFile) as e:
        raise BatchInputError(f"Unable to read spreadsheet: {e}") from e

    frame = frame.dropna(how="all")
    rows = [
        {str(column).strip(): _clean_cell(value) for column, value in record.items()}
        for record in frame.astype(object).to_dict(orient="records")
    ]

    logger.info("Spreadsheet parsed", sheet=sheet_name, rows=len(rows))
    return rows
