"""
Streak Analysis Module

Consecutive up/down run analysis over a daily percent-change series:

- maximal same-sign runs with compounded percent change
- longest up and down runs
- days until price recovers to each run's starting level
- first recovery of every run, and the slowest one
- descriptive statistics for any numeric column

Recovery thresholds: an up run recovers when Close <= its starting close; a
down run recovers when Close >= its starting close.
"""

from streaks.models import (
    StreakType,
    StreakSegment,
    RecoveryAnalysis,
    RecoveryPair,
    FirstRecoveryStats,
    StreakAnalysisResult,
    SummaryStats,
)
from streaks.segmenter import segment_streaks
from streaks.extrema import select_extrema, longest_streak
from streaks.index_map import translate_segment, translate_segments, attach_prices
from streaks.recovery import (
    calculate_recovery_days,
    calculate_first_recovery,
    calculate_all_first_recoveries,
    find_longest_first_recovery,
)
from streaks.summary_stats import (
    calculate_summary_stats,
    summarize_field,
    summarize_numeric_fields,
)
from streaks.transform import (
    add_derived_fields,
    find_field_ignore_case,
    get_numeric_fields,
    is_numeric,
    is_numeric_field,
)
from streaks.extraction import (
    extract_close_prices,
    extract_row_dates,
    extract_streak_data,
    find_date_field,
)
from streaks.data_loader import load_csv, frame_to_rows
from streaks.analyzer import analyze_streaks, analyze_rows
from streaks.report import format_analysis_report, format_summary_stats, write_report

__version__ = "1.0.0"


__all__ = [
    # Types
    "StreakType",
    "StreakSegment",
    "RecoveryAnalysis",
    "RecoveryPair",
    "FirstRecoveryStats",
    "StreakAnalysisResult",
    "SummaryStats",
    # Segmentation and selection
    "segment_streaks",
    "select_extrema",
    "longest_streak",
    "translate_segment",
    "translate_segments",
    "attach_prices",
    # Recovery
    "calculate_recovery_days",
    "calculate_first_recovery",
    "calculate_all_first_recoveries",
    "find_longest_first_recovery",
    # Statistics
    "calculate_summary_stats",
    "summarize_field",
    "summarize_numeric_fields",
    # Rows and columns
    "add_derived_fields",
    "find_field_ignore_case",
    "get_numeric_fields",
    "is_numeric",
    "is_numeric_field",
    "extract_close_prices",
    "extract_row_dates",
    "extract_streak_data",
    "find_date_field",
    "load_csv",
    "frame_to_rows",
    # Pipeline
    "analyze_streaks",
    "analyze_rows",
    # Reports
    "format_analysis_report",
    "format_summary_stats",
    "write_report",
]
