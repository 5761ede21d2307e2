"""
Result types for streak analysis.

Plain data containers with no behavior beyond serialization. Every optional
field uses None for "insufficient data".
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class StreakType(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass
class StreakSegment:
    """A maximal run of same-signed daily changes."""
    type: StreakType
    days: int
    percent: float  # compounded, not additive
    start_index: int
    end_index: int
    dates: Tuple[str, ...] = ()
    start_price: Optional[float] = None
    end_price: Optional[float] = None
    price_change: Optional[float] = None
    price_change_percent: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        d["dates"] = list(self.dates)
        return d


@dataclass
class RecoveryAnalysis:
    """Days until price re-crosses the run's starting level."""
    recovered: bool = False
    recovery_days: Optional[int] = None
    recovery_date: Optional[str] = None
    recovery_price: Optional[float] = None
    recovery_percent: Optional[float] = None
    start_price: Optional[float] = None
    end_price: Optional[float] = None
    price_change: Optional[float] = None
    price_change_percent: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FirstRecoveryStats:
    """First-recovery statistics for one segment."""
    streak_type: StreakType
    streak_days: int
    streak_percent: float
    first_recovery_days: Optional[int]
    first_recovery_percent: Optional[float]
    start_date: str
    end_date: str
    recovery_date: Optional[str]
    start_price: Optional[float] = None
    end_price: Optional[float] = None
    price_change: Optional[float] = None
    price_change_percent: Optional[float] = None
    recovery_price: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["streak_type"] = self.streak_type.value
        return d


@dataclass
class RecoveryPair:
    up_recovery: RecoveryAnalysis = field(default_factory=RecoveryAnalysis)
    down_recovery: RecoveryAnalysis = field(default_factory=RecoveryAnalysis)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "up_recovery": self.up_recovery.to_dict(),
            "down_recovery": self.down_recovery.to_dict(),
        }


@dataclass
class StreakAnalysisResult:
    """Aggregate result of one analysis run. Recomputed wholesale per input."""
    streaks: List[StreakSegment] = field(default_factory=list)
    max_up: Optional[StreakSegment] = None
    max_down: Optional[StreakSegment] = None
    recovery: RecoveryPair = field(default_factory=RecoveryPair)
    longest_first_recovery: Optional[FirstRecoveryStats] = None
    first_recoveries: List[FirstRecoveryStats] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "streaks": [s.to_dict() for s in self.streaks],
            "max_up": self.max_up.to_dict() if self.max_up else None,
            "max_down": self.max_down.to_dict() if self.max_down else None,
            "recovery": self.recovery.to_dict(),
            "longest_first_recovery": (
                self.longest_first_recovery.to_dict() if self.longest_first_recovery else None
            ),
            "first_recoveries": [r.to_dict() for r in self.first_recoveries],
        }


@dataclass
class SummaryStats:
    """Descriptive statistics for one numeric column."""
    count: int
    mean: float
    std: float
    min: float
    q25: float
    median: float
    q75: float
    max: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
