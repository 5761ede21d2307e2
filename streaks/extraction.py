"""
Series extraction from rows.

Produces the two index spaces the analysis works in:

- compacted: the change series holds only rows with a valid pct_change, and
  index_map[k] is the row that produced changes[k]
- row space: prices and row dates keep one entry per row, with nan / "" for
  unparsable cells
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from config.settings_loader import (
    get_close_field,
    get_date_keywords,
    get_default_close_field,
    get_pct_change_field,
)
from streaks.transform import Row, find_field_ignore_case, is_valid_number, to_float

logger = logging.getLogger(__name__)


def find_date_field(columns: Sequence[str]) -> Optional[str]:
    """First column whose name contains a date keyword, else the first column."""
    keywords = get_date_keywords()
    for col in columns:
        lowered = col.lower()
        if any(k in lowered for k in keywords):
            return col
    return columns[0] if columns else None


def _date_label(row: Row, date_field: str) -> str:
    value = row.get(date_field)
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def extract_streak_data(
    rows: Sequence[Row],
    date_field: Optional[str] = None,
) -> Tuple[List[float], List[str], List[int]]:
    """
    Extract the compacted change series.

    Args:
        rows: Data rows carrying a pct_change column
        date_field: Optional date column; labels stay parallel to the changes

    Returns:
        (changes, dates, index_map). dates is empty when no date_field is given.
    """
    pct_field = get_pct_change_field()
    changes: List[float] = []
    dates: List[str] = []
    index_map: List[int] = []

    for original_index, row in enumerate(rows):
        change = to_float(row.get(pct_field))
        if not is_valid_number(change):
            continue
        changes.append(change)
        index_map.append(original_index)
        if date_field:
            dates.append(_date_label(row, date_field))

    skipped = len(rows) - len(changes)
    if skipped:
        logger.debug("Skipped %d rows without a valid %s", skipped, pct_field)

    return changes, dates, index_map


def find_close_field(rows: Sequence[Row]) -> str:
    """Close column from the first row's keys, else the configured default."""
    if rows:
        match = find_field_ignore_case(list(rows[0].keys()), get_close_field())
        if match:
            return match
    return get_default_close_field()


def extract_close_prices(rows: Sequence[Row]) -> List[float]:
    """
    Row-aligned close prices. Invalid cells become nan so positions match rows.
    """
    close_field = find_close_field(rows)
    prices: List[float] = []
    for row in rows:
        price = to_float(row.get(close_field))
        prices.append(price if is_valid_number(price) else math.nan)

    if rows and not any(is_valid_number(p) for p in prices):
        logger.warning("No valid prices in column %r; recoveries will be empty", close_field)

    return prices


def extract_row_dates(rows: Sequence[Row], date_field: Optional[str]) -> List[str]:
    """Row-aligned date labels ("" when missing)."""
    if not date_field:
        return ["" for _ in rows]
    return [_date_label(row, date_field) for row in rows]
