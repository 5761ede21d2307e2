"""
Translation from change-series (compacted) indices to row indices.

Segments come out of the segmenter indexed into the filtered change series,
while prices are indexed by row. translate_segments runs once per analysis,
before any price lookup.
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from streaks.models import StreakSegment
from streaks.transform import is_valid_number, price_change_summary


def _map_index(index: int, index_map: Sequence[int]) -> int:
    if 0 <= index < len(index_map):
        return index_map[index]
    return index


def translate_segment(
    segment: StreakSegment,
    index_map: Sequence[int],
    dates: Optional[Sequence[str]] = None,
) -> StreakSegment:
    """
    Return a copy of segment with row-space indices.

    Args:
        segment: Segment in change-series space
        index_map: index_map[k] = row that produced change k
        dates: Compacted date labels; the run's labels are attached when given
    """
    run_dates = segment.dates
    if dates is not None and len(dates) > 0:
        run_dates = tuple(dates[segment.start_index:segment.end_index + 1])

    return replace(
        segment,
        start_index=_map_index(segment.start_index, index_map),
        end_index=_map_index(segment.end_index, index_map),
        dates=run_dates,
    )


def translate_segments(
    segments: Sequence[StreakSegment],
    index_map: Sequence[int],
    dates: Optional[Sequence[str]] = None,
) -> List[StreakSegment]:
    return [translate_segment(s, index_map, dates) for s in segments]


def attach_prices(segment: StreakSegment, prices: Sequence[float]) -> StreakSegment:
    """
    Copy of segment with start/end price summary. Requires row-space indices.

    Fields stay None unless both endpoint prices are valid numbers.
    """
    n = len(prices)
    if not (0 <= segment.start_index < n and 0 <= segment.end_index < n):
        return segment

    start_price = prices[segment.start_index]
    end_price = prices[segment.end_index]
    if not (is_valid_number(start_price) and is_valid_number(end_price)):
        return segment

    price_change, price_change_percent = price_change_summary(start_price, end_price)
    return replace(
        segment,
        start_price=start_price,
        end_price=end_price,
        price_change=price_change,
        price_change_percent=price_change_percent,
    )
