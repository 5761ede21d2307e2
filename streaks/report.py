"""
Report rendering for streak analysis results.

Produces a markdown report. Every None renders as "-" (insufficient data).
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional

from config.settings_loader import get_report_config
from streaks.models import (
    FirstRecoveryStats,
    RecoveryAnalysis,
    StreakAnalysisResult,
    StreakSegment,
    StreakType,
    SummaryStats,
)


def _num(value: Optional[float], decimals: int) -> str:
    return f"{value:,.{decimals}f}" if value is not None else "-"


def _pct(value: Optional[float], decimals: int) -> str:
    return f"{value:+.{decimals}f}%" if value is not None else "-"


def _label(streak_type: StreakType) -> str:
    return "Up" if streak_type == StreakType.UP else "Down"


def _date_range(segment: StreakSegment) -> str:
    if segment.dates:
        return f"{segment.dates[0]} -> {segment.dates[-1]}"
    return f"rows {segment.start_index} -> {segment.end_index}"


def _longest_section(
    title: str,
    segment: Optional[StreakSegment],
    recovery: RecoveryAnalysis,
    cfg: dict,
) -> List[str]:
    price_dp, pct_dp = cfg["price_decimals"], cfg["percent_decimals"]
    lines = [f"## {title}", ""]
    if segment is None:
        lines.extend(["No run of this type.", ""])
        return lines

    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| Days | {segment.days} |")
    lines.append(f"| Compounded Change | {_pct(segment.percent, pct_dp)} |")
    lines.append(f"| Period | {_date_range(segment)} |")
    lines.append(f"| Start Price | {_num(recovery.start_price, price_dp)} |")
    lines.append(f"| End Price | {_num(recovery.end_price, price_dp)} |")
    lines.append(f"| Price Change | {_num(recovery.price_change, price_dp)} |")
    lines.append(f"| Price Change % | {_pct(recovery.price_change_percent, pct_dp)} |")
    if recovery.recovered:
        lines.append(f"| Recovered | Yes, after {recovery.recovery_days} days |")
        lines.append(f"| Recovery Date | {recovery.recovery_date or '-'} |")
        lines.append(f"| Recovery Price | {_num(recovery.recovery_price, price_dp)} |")
        lines.append(f"| Move From End | {_pct(recovery.recovery_percent, pct_dp)} |")
    else:
        lines.append("| Recovered | No |")
    lines.append("")
    return lines


def _first_recovery_section(stats: Optional[FirstRecoveryStats], cfg: dict) -> List[str]:
    price_dp, pct_dp = cfg["price_decimals"], cfg["percent_decimals"]
    lines = ["## SLOWEST FIRST RECOVERY", ""]
    if stats is None:
        lines.extend(["No run recovered to its starting price.", ""])
        return lines

    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| Run | {_label(stats.streak_type)}, {stats.streak_days} days |")
    lines.append(f"| Compounded Change | {_pct(stats.streak_percent, pct_dp)} |")
    lines.append(f"| Period | {stats.start_date or '-'} -> {stats.end_date or '-'} |")
    lines.append(f"| Recovery Days | {stats.first_recovery_days} |")
    lines.append(f"| Recovery Date | {stats.recovery_date or '-'} |")
    lines.append(f"| Start / End Price | {_num(stats.start_price, price_dp)} / {_num(stats.end_price, price_dp)} |")
    lines.append(f"| Recovery Price | {_num(stats.recovery_price, price_dp)} |")
    lines.append(f"| Move From End | {_pct(stats.first_recovery_percent, pct_dp)} |")
    lines.append("")
    return lines


def format_summary_stats(field_name: str, stats: Optional[SummaryStats]) -> str:
    """One statistics table for a column."""
    lines = [f"### {field_name}", ""]
    if stats is None:
        lines.append("Not enough numeric data.")
        return "\n".join(lines)

    lines.append("| Count | Mean | Std | Min | Q25 | Median | Q75 | Max |")
    lines.append("|-------|------|-----|-----|-----|--------|-----|-----|")
    lines.append(
        f"| {stats.count} | {stats.mean:g} | {stats.std:g} | {stats.min:g} | "
        f"{stats.q25:.4f} | {stats.median:.4f} | {stats.q75:.4f} | {stats.max:g} |"
    )
    return "\n".join(lines)


def format_analysis_report(
    result: Optional[StreakAnalysisResult],
    stats: Optional[Mapping[str, Optional[SummaryStats]]] = None,
    title: Optional[str] = None,
) -> str:
    """
    Render a streak analysis (and optional column statistics) as markdown.

    Args:
        result: Analysis result; None renders a "no analysis" note
        stats: Column name -> SummaryStats
        title: Report heading (default from settings)
    """
    cfg = get_report_config()
    lines: List[str] = []

    lines.append(f"# {title or cfg['title']}")
    lines.append("")
    lines.append(f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("")

    if result is None or not result.streaks:
        lines.append("No percent-change data available for streak analysis.")
        lines.append("")
    else:
        up_runs = sum(1 for s in result.streaks if s.type == StreakType.UP)
        lines.append(
            f"**Runs:** {len(result.streaks)} ({up_runs} up, {len(result.streaks) - up_runs} down)"
        )
        lines.append("")
        lines.extend(_longest_section("LONGEST UP RUN", result.max_up, result.recovery.up_recovery, cfg))
        lines.extend(_longest_section("LONGEST DOWN RUN", result.max_down, result.recovery.down_recovery, cfg))
        lines.extend(_first_recovery_section(result.longest_first_recovery, cfg))

        max_rows = cfg["max_streak_rows"]
        if max_rows > 0:
            lines.append("## ALL RUNS")
            lines.append("")
            lines.append("| # | Type | Days | Change | Period | First Recovery |")
            lines.append("|---|------|------|--------|--------|----------------|")
            recoveries = result.first_recoveries or [None] * len(result.streaks)
            for i, (segment, rec) in enumerate(zip(result.streaks, recoveries), start=1):
                if i > max_rows:
                    lines.append(f"| ... | {len(result.streaks) - max_rows} more | | | | |")
                    break
                rec_days = rec.first_recovery_days if rec and rec.first_recovery_days is not None else "-"
                lines.append(
                    f"| {i} | {_label(segment.type)} | {segment.days} | "
                    f"{_pct(segment.percent, cfg['percent_decimals'])} | {_date_range(segment)} | {rec_days} |"
                )
            lines.append("")

    if stats:
        lines.append("## SUMMARY STATISTICS")
        lines.append("")
        for field_name, field_stats in stats.items():
            lines.append(format_summary_stats(field_name, field_stats))
            lines.append("")

    return "\n".join(lines)


def write_report(text: str, output_path: Path) -> Path:
    """Write report text, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path
