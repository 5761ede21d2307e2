"""
Streak segmentation.

Scans a percent-change series left to right and emits maximal runs of
same-signed movement with multiplicatively compounded percent change.
Indices on emitted segments are positions in the change series (compacted
space), not row positions.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from streaks.models import StreakSegment, StreakType

logger = logging.getLogger(__name__)


def classify_change(change: float) -> StreakType:
    """A change of exactly zero counts as up."""
    return StreakType.UP if change >= 0 else StreakType.DOWN


def segment_streaks(changes: Sequence[float]) -> List[StreakSegment]:
    """
    Split a change series into maximal same-sign runs.

    A run is closed only when the sign flips; the final open run is closed
    after the loop. Days across all segments sum to len(changes).

    Args:
        changes: Daily percent changes (finite floats)

    Returns:
        Segments in emission order, indices in change-series space

    Example:
        >>> [(s.type.value, s.days) for s in segment_streaks([1, 2, -1, -2, 3])]
        [('up', 2), ('down', 2), ('up', 1)]
    """
    segments: List[StreakSegment] = []

    current_type: Optional[StreakType] = None
    days = 0
    factor = 1.0
    start_index = 0

    for i, change in enumerate(changes):
        sign = classify_change(change)

        if sign == current_type:
            days += 1
            factor *= 1 + change / 100
            continue

        if current_type is not None and days > 0:
            segments.append(StreakSegment(
                type=current_type,
                days=days,
                percent=(factor - 1) * 100,
                start_index=start_index,
                end_index=i - 1,
            ))

        current_type = sign
        days = 1
        factor = 1 + change / 100
        start_index = i

    if current_type is not None and days > 0:
        segments.append(StreakSegment(
            type=current_type,
            days=days,
            percent=(factor - 1) * 100,
            start_index=start_index,
            end_index=len(changes) - 1,
        ))

    logger.debug("Segmented %d changes into %d streaks", len(changes), len(segments))
    return segments
