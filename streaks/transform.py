"""
Field helpers and derived columns.

Rows are plain mappings from column name to scalar (string or number), as
produced by the CSV loader. Nothing here mutates its input.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from config.settings_loader import (
    get_close_field,
    get_numeric_detection_config,
    get_open_field,
    get_pct_change_field,
)

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


def to_float(value: Any) -> float:
    """Parse a cell to float; anything unparsable becomes nan."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def is_valid_number(value: Optional[float]) -> bool:
    """True for a finite float (the price/change "valid" predicate)."""
    return value is not None and math.isfinite(value)


def price_change_summary(
    start_price: Optional[float],
    end_price: Optional[float],
) -> Tuple[Optional[float], Optional[float]]:
    """
    (price_change, price_change_percent) between two prices.

    Both are None unless both prices are known; the percent is None when the
    start price is zero.
    """
    if start_price is None or end_price is None:
        return None, None
    change = end_price - start_price
    pct = change / start_price * 100 if start_price != 0 else None
    return change, pct


def is_numeric(value: Any) -> bool:
    """Check whether a cell parses to a finite number."""
    return is_valid_number(to_float(value))


def is_numeric_field(
    rows: Sequence[Row],
    field_name: str,
    sample_size: Optional[int] = None,
    min_ratio: Optional[float] = None,
) -> bool:
    """
    Decide whether a column is numeric by sampling its leading rows.

    Args:
        rows: Data rows
        field_name: Column to check
        sample_size: Rows to sample (default from settings, 10)
        min_ratio: Minimum numeric share of the sample (default from settings, 0.8)
    """
    if not rows:
        return False

    cfg = get_numeric_detection_config()
    sample_size = sample_size if sample_size is not None else cfg["sample_size"]
    min_ratio = min_ratio if min_ratio is not None else cfg["min_ratio"]

    sample = rows[:min(sample_size, len(rows))]
    numeric_count = sum(1 for row in sample if is_numeric(row.get(field_name)))
    return numeric_count / len(sample) >= min_ratio


def get_numeric_fields(rows: Sequence[Row], columns: Sequence[str]) -> List[str]:
    """All numeric columns, in column order."""
    return [col for col in columns if is_numeric_field(rows, col)]


def find_field_ignore_case(columns: Sequence[str], field_name: str) -> Optional[str]:
    """Return the column matching field_name case-insensitively, in its original case."""
    target = field_name.lower()
    for col in columns:
        if col.lower() == target:
            return col
    return None


def add_derived_fields(
    rows: Sequence[Row],
    columns: Sequence[str],
) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Add pct_change = (close - open) / open * 100 when open and close exist.

    pct_change is None when open is zero or either side is non-numeric.
    Without both columns the rows and columns are returned unchanged (as copies).
    """
    pct_field = get_pct_change_field()
    open_field = find_field_ignore_case(columns, get_open_field())
    close_field = find_field_ignore_case(columns, get_close_field())

    if not open_field or not close_field:
        logger.debug("No open/close columns, skipping %s derivation", pct_field)
        return [dict(row) for row in rows], list(columns)

    new_rows: List[Dict[str, Any]] = []
    for row in rows:
        open_price = to_float(row.get(open_field))
        close_price = to_float(row.get(close_field))

        pct_change = None
        if is_valid_number(open_price) and is_valid_number(close_price) and open_price != 0:
            pct_change = (close_price - open_price) / open_price * 100

        new_row = dict(row)
        new_row[pct_field] = pct_change
        new_rows.append(new_row)

    new_columns = list(columns)
    if pct_field not in new_columns:
        new_columns.append(pct_field)

    return new_rows, new_columns
