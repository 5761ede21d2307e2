"""
Streak Analyzer

Runs the full pipeline:

    changes -> segment_streaks -> translate_segments (once) -> attach_prices
            -> select_extrema -> calculate_recovery_days (longest runs)
            -> calculate_all_first_recoveries -> find_longest_first_recovery

Every call recomputes the result from scratch; nothing is cached or shared.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional, Sequence

from config.settings_loader import get_pct_change_field
from core.exceptions import DataValidationError
from streaks.extraction import (
    extract_close_prices,
    extract_row_dates,
    extract_streak_data,
    find_date_field,
)
from streaks.extrema import select_extrema
from streaks.index_map import attach_prices, translate_segments
from streaks.models import RecoveryAnalysis, RecoveryPair, StreakAnalysisResult
from streaks.recovery import (
    calculate_all_first_recoveries,
    calculate_recovery_days,
    find_longest_first_recovery,
)
from streaks.segmenter import segment_streaks
from streaks.transform import Row

logger = logging.getLogger(__name__)


def analyze_streaks(
    changes: Sequence[float],
    dates: Optional[Sequence[str]] = None,
    prices: Optional[Sequence[float]] = None,
    index_map: Optional[Sequence[int]] = None,
    row_dates: Optional[Sequence[str]] = None,
) -> StreakAnalysisResult:
    """
    Analyze consecutive up/down runs and their recoveries.

    Args:
        changes: Compacted percent-change series
        dates: Date labels parallel to changes (optional)
        prices: Row-aligned close prices, nan for invalid (optional)
        index_map: Row index for each change; identity when omitted
        row_dates: Row-aligned date labels; defaults to dates

    Returns:
        StreakAnalysisResult. Empty changes give empty streaks and None
        extrema; without prices the recoveries stay "not recovered".
    """
    if len(changes) == 0:
        return StreakAnalysisResult()

    if index_map is None:
        index_map = range(len(changes))
    if row_dates is None:
        row_dates = dates

    segments = segment_streaks(changes)
    segments = translate_segments(segments, index_map, dates)
    has_prices = prices is not None and len(prices) > 0
    if has_prices:
        segments = [attach_prices(s, prices) for s in segments]

    max_up, max_down = select_extrema(segments)

    if not has_prices:
        return StreakAnalysisResult(streaks=segments, max_up=max_up, max_down=max_down)

    recovery = RecoveryPair(
        up_recovery=calculate_recovery_days(prices, max_up, row_dates) if max_up else RecoveryAnalysis(),
        down_recovery=calculate_recovery_days(prices, max_down, row_dates) if max_down else RecoveryAnalysis(),
    )

    first_recoveries = calculate_all_first_recoveries(segments, prices, row_dates)

    result = StreakAnalysisResult(
        streaks=segments,
        max_up=max_up,
        max_down=max_down,
        recovery=recovery,
        longest_first_recovery=find_longest_first_recovery(first_recoveries),
        first_recoveries=first_recoveries,
    )

    logger.debug(
        "Analyzed %d changes: %d streaks, max_up=%s, max_down=%s",
        len(changes), len(segments),
        max_up.days if max_up else None,
        max_down.days if max_down else None,
    )
    return result


def analyze_rows(
    rows: Sequence[Row],
    columns: Optional[Sequence[str]] = None,
) -> Optional[StreakAnalysisResult]:
    """
    Run the analysis on rows that already carry a pct_change column.

    Args:
        rows: Data rows (see add_derived_fields)
        columns: Column order; defaults to the first row's keys

    Returns:
        StreakAnalysisResult, or None when there are no rows, no pct_change
        column, or no valid pct_change values.

    Raises:
        DataValidationError: rows is not a sequence of mappings
    """
    if not rows:
        return None
    if not all(isinstance(row, Mapping) for row in rows):
        raise DataValidationError("Rows must be mappings of column name to value")

    columns = list(columns) if columns is not None else list(rows[0].keys())
    pct_field = get_pct_change_field()
    if pct_field not in columns:
        logger.warning("No %s column; streak analysis skipped", pct_field)
        return None

    date_field = find_date_field(columns)
    changes, dates, index_map = extract_streak_data(rows, date_field)
    if not changes:
        logger.warning("No valid %s values; streak analysis skipped", pct_field)
        return None

    prices = extract_close_prices(rows)
    row_dates = extract_row_dates(rows, date_field)

    return analyze_streaks(
        changes,
        dates=dates,
        prices=prices,
        index_map=index_map,
        row_dates=row_dates,
    )
