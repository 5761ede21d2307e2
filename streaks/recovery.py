"""
Recovery Analysis Module

For a run of same-signed days, recovery is the first later day where the close
re-crosses the run's starting price:

- up run:   Close[i] <= Close[start]  (gave back the whole rise)
- down run: Close[i] >= Close[start]  (won back the whole fall)

Two searches share this threshold but differ in their preconditions:

- calculate_recovery_days: used for the longest up/down runs. The recovery
  percent (relative to the run's end price) is optional and is None when the
  end price is unusable.
- calculate_first_recovery: applied to every run. Requires a positive end
  price up front and always reports the percent when recovery is found.

All indices here are row-space indices. Invalid (nan) prices are skipped
during the forward scan. NO LOOKAHEAD: the scan starts at end_index + 1.
"""
from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from streaks.models import FirstRecoveryStats, RecoveryAnalysis, StreakSegment, StreakType
from streaks.transform import is_valid_number, price_change_summary

logger = logging.getLogger(__name__)


class FirstRecovery(NamedTuple):
    days: Optional[int] = None
    percent: Optional[float] = None
    date: Optional[str] = None
    price: Optional[float] = None


def _has_recovered(streak_type: StreakType, price: float, start_price: float) -> bool:
    if streak_type == StreakType.UP:
        return price <= start_price
    return price >= start_price


def _date_at(dates: Optional[Sequence[str]], index: int) -> Optional[str]:
    if dates is not None and 0 <= index < len(dates) and dates[index]:
        return dates[index]
    return None


def _price_at(prices: Sequence[float], index: int) -> Optional[float]:
    if 0 <= index < len(prices) and is_valid_number(prices[index]):
        return prices[index]
    return None


def _scan_for_recovery(
    prices: Sequence[float],
    segment: StreakSegment,
    start_price: float,
) -> Optional[int]:
    """Row index of the first valid price past the run that crosses start_price."""
    for i in range(segment.end_index + 1, len(prices)):
        price = prices[i]
        if not is_valid_number(price):
            continue
        if _has_recovered(segment.type, price, start_price):
            return i
    return None


def calculate_recovery_days(
    prices: Sequence[float],
    segment: Optional[StreakSegment],
    dates: Optional[Sequence[str]] = None,
) -> RecoveryAnalysis:
    """
    Days needed for price to return to the level the run started from.

    Args:
        prices: Row-aligned close prices (nan for invalid)
        segment: Run with row-space indices
        dates: Row-aligned date labels (optional)

    Returns:
        RecoveryAnalysis. A missing segment, out-of-range start or invalid
        start price yields "not recovered" with every price field None. An
        exhausted scan keeps the start/end price summary populated.

    Example:
        >>> seg = StreakSegment(StreakType.UP, 4, 3.0, 0, 3)
        >>> calculate_recovery_days([100, 101, 102, 103, 102, 100.5, 99], seg).recovery_days
        3
    """
    if segment is None or not (0 <= segment.start_index < len(prices)):
        return RecoveryAnalysis()

    start_price = _price_at(prices, segment.start_index)
    if start_price is None:
        return RecoveryAnalysis()

    end_price = _price_at(prices, segment.end_index)
    price_change, price_change_percent = price_change_summary(start_price, end_price)

    hit = _scan_for_recovery(prices, segment, start_price)
    if hit is None:
        return RecoveryAnalysis(
            recovered=False,
            start_price=start_price,
            end_price=end_price,
            price_change=price_change,
            price_change_percent=price_change_percent,
        )

    recovery_price = prices[hit]
    recovery_percent = None
    if end_price is not None and end_price > 0:
        recovery_percent = (recovery_price - end_price) / end_price * 100

    return RecoveryAnalysis(
        recovered=True,
        recovery_days=hit - segment.end_index,
        recovery_date=_date_at(dates, hit),
        recovery_price=recovery_price,
        recovery_percent=recovery_percent,
        start_price=start_price,
        end_price=end_price,
        price_change=price_change,
        price_change_percent=price_change_percent,
    )


def calculate_first_recovery(
    prices: Sequence[float],
    segment: Optional[StreakSegment],
    dates: Optional[Sequence[str]] = None,
) -> FirstRecovery:
    """
    First recovery of a single run.

    Unlike calculate_recovery_days this requires a valid start price and a
    valid, positive end price before scanning; otherwise every field is None.
    The percent is always relative to the end price.
    """
    if segment is None or not (0 <= segment.start_index < len(prices)):
        return FirstRecovery()

    start_price = _price_at(prices, segment.start_index)
    end_price = _price_at(prices, segment.end_index)
    if start_price is None or end_price is None or end_price <= 0:
        return FirstRecovery()

    hit = _scan_for_recovery(prices, segment, start_price)
    if hit is None:
        return FirstRecovery()

    recovery_price = prices[hit]
    return FirstRecovery(
        days=hit - segment.end_index,
        percent=(recovery_price - end_price) / end_price * 100,
        date=_date_at(dates, hit),
        price=recovery_price,
    )


def _segment_dates(segment: StreakSegment, dates: Optional[Sequence[str]]) -> Tuple[str, str]:
    if segment.dates:
        return segment.dates[0], segment.dates[-1]
    return (
        _date_at(dates, segment.start_index) or "",
        _date_at(dates, segment.end_index) or "",
    )


def calculate_all_first_recoveries(
    segments: Sequence[StreakSegment],
    prices: Sequence[float],
    dates: Optional[Sequence[str]] = None,
) -> List[FirstRecoveryStats]:
    """
    First-recovery statistics for every run, in segment order.

    Args:
        segments: Runs with row-space indices
        prices: Row-aligned close prices
        dates: Row-aligned date labels (optional)
    """
    results: List[FirstRecoveryStats] = []

    for segment in segments:
        recovery = calculate_first_recovery(prices, segment, dates)
        start_date, end_date = _segment_dates(segment, dates)

        start_price = _price_at(prices, segment.start_index)
        end_price = _price_at(prices, segment.end_index)
        price_change, price_change_percent = price_change_summary(start_price, end_price)

        results.append(FirstRecoveryStats(
            streak_type=segment.type,
            streak_days=segment.days,
            streak_percent=segment.percent,
            first_recovery_days=recovery.days,
            first_recovery_percent=recovery.percent,
            start_date=start_date,
            end_date=end_date,
            recovery_date=recovery.date,
            start_price=start_price,
            end_price=end_price,
            price_change=price_change,
            price_change_percent=price_change_percent,
            recovery_price=recovery.price,
        ))

    recovered = sum(1 for r in results if r.first_recovery_days is not None)
    logger.debug("First recoveries: %d of %d runs recovered", recovered, len(results))
    return results


def find_longest_first_recovery(
    stats: Sequence[FirstRecoveryStats],
) -> Optional[FirstRecoveryStats]:
    """
    Run with the slowest first recovery, or None if no run recovered.

    Strictly longer replaces the current best, so the earlier run wins ties.
    """
    best: Optional[FirstRecoveryStats] = None
    for candidate in stats:
        if candidate.first_recovery_days is None:
            continue
        if best is None or candidate.first_recovery_days > best.first_recovery_days:
            best = candidate
    return best
