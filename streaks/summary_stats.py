"""
Descriptive statistics for a numeric column.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Optional, Sequence

import numpy as np

from config.settings_loader import get_stats_decimals
from streaks.models import SummaryStats
from streaks.transform import Row, get_numeric_fields, to_float


def _percentile(sorted_values: np.ndarray, p: float) -> float:
    """Linear interpolation between the two closest ranks."""
    index = (len(sorted_values) - 1) * p
    lower = math.floor(index)
    upper = math.ceil(index)
    weight = index - lower
    return float(sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight)


def calculate_summary_stats(
    values: Iterable[Any],
    decimals: Optional[int] = None,
) -> Optional[SummaryStats]:
    """
    Count, mean, population std, min, quartiles and max.

    Non-finite and unparsable entries are dropped first. mean and std are
    rounded to `decimals` (settings default 4); percentiles are not.

    Returns:
        SummaryStats, or None when no finite values remain

    Example:
        >>> calculate_summary_stats([2, 4, 4, 4, 5, 5, 7, 9]).std
        2.0
    """
    decimals = get_stats_decimals() if decimals is None else decimals

    parsed = np.array([to_float(v) for v in values], dtype=float)
    finite = parsed[np.isfinite(parsed)]
    if finite.size == 0:
        return None

    ordered = np.sort(finite)
    count = int(ordered.size)
    mean = float(ordered.sum() / count)
    std = math.sqrt(float(((ordered - mean) ** 2).sum()) / count)

    return SummaryStats(
        count=count,
        mean=round(mean, decimals),
        std=round(std, decimals),
        min=float(ordered[0]),
        q25=_percentile(ordered, 0.25),
        median=_percentile(ordered, 0.5),
        q75=_percentile(ordered, 0.75),
        max=float(ordered[-1]),
    )


def summarize_field(rows: Sequence[Row], field_name: str) -> Optional[SummaryStats]:
    """Statistics for one column of the rows."""
    if not field_name or not rows:
        return None
    return calculate_summary_stats(row.get(field_name) for row in rows)


def summarize_numeric_fields(
    rows: Sequence[Row],
    columns: Sequence[str],
) -> Dict[str, Optional[SummaryStats]]:
    """Statistics for every numeric column, keyed in column order."""
    return {col: summarize_field(rows, col) for col in get_numeric_fields(rows, columns)}
