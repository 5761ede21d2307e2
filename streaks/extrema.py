"""
Longest up/down run selection.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from streaks.models import StreakSegment, StreakType


def longest_streak(
    segments: Iterable[StreakSegment],
    streak_type: StreakType,
) -> Optional[StreakSegment]:
    """
    Longest segment of the given type.

    Only a strictly longer candidate replaces the current best, so the
    earliest run wins ties. Compounded percent is never compared.
    """
    best: Optional[StreakSegment] = None
    for segment in segments:
        if segment.type != streak_type:
            continue
        if best is None or segment.days > best.days:
            best = segment
    return best


def select_extrema(
    segments: Sequence[StreakSegment],
) -> Tuple[Optional[StreakSegment], Optional[StreakSegment]]:
    """Return (max_up, max_down); either slot is None when no such run exists."""
    return (
        longest_streak(segments, StreakType.UP),
        longest_streak(segments, StreakType.DOWN),
    )
