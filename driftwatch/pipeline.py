"""
Pipeline orchestration: load -> window -> score -> detect -> aggregate -> evaluate -> report.

All analytical logic is delegated to windows, scoring, changepoints, weekly
and alerts. This module only wires them together, logs, and formats the
plain-text report.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import pandas as pd

from driftwatch.alerts import evaluate_status
from driftwatch.cache import AnalysisCache
from driftwatch.changepoints import detect_change_points
from driftwatch.config import DriftConfig
from driftwatch.errors import InsufficientDataError
from driftwatch.log import get_logger
from driftwatch.scoring import compute_drift_scores
from driftwatch.series import build_series, load_series
from driftwatch.weekly import compute_weekly_aggregates, summarize_weekly_trends
from driftwatch.windows import compute_window_statistics

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Core analysis (pure, no file I/O)
# ---------------------------------------------------------------------------

def _analyze_df(df: pd.DataFrame, cfg: DriftConfig) -> Dict:
    """
    Core analysis over a built ObservationSeries.

    Returns:
        {
            "window_size":   int,
            "windows":       DataFrame of scored window statistics,
            "change_points": [ChangePointEvent, ...]  (chronological),
            "weekly":        [WeeklyAggregate, ...]   (ascending week),
            "weekly_trends": {metric: {"slope", "direction"}},
            "status":        DriftStatus,
        }
    """
    # Stage 1: Rolling windows
    try:
        stats = compute_window_statistics(df, cfg)
    except InsufficientDataError as e:
        logger.warning(
            "insufficient_data",
            required=e.required,
            available=e.available,
        )
        raise

    # Stage 2: Score
    stats = compute_drift_scores(stats, cfg)

    # Stage 3: Change points
    change_points = detect_change_points(stats, cfg)

    # Stage 4: Weekly aggregation (raw series, independent of window size)
    weekly = compute_weekly_aggregates(df)
    weekly_trends = summarize_weekly_trends(weekly, cfg)

    # Stage 5: Status + alerts
    status = evaluate_status(stats, cfg)

    logger.info(
        "analysis_complete",
        window_size=cfg.window_size,
        windows=len(stats),
        change_points=len(change_points),
        risk_tier=status.latest["risk_tier"],
        drift_score=status.latest["drift_score"],
    )

    return {
        "window_size": cfg.window_size,
        "windows": stats,
        "change_points": change_points,
        "weekly": weekly,
        "weekly_trends": weekly_trends,
        "status": status,
    }


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def analyze_series(
    df: pd.DataFrame,
    cfg: Optional[DriftConfig] = None,
    cache: Optional[AnalysisCache] = None,
) -> Dict:
    """Analyze an already-built series, optionally through a result cache."""
    if cfg is None:
        cfg = DriftConfig()

    if cache is None:
        return _analyze_df(df, cfg)
    return cache.get_or_compute(df, cfg, _analyze_df)


def analyze(
    filepath: Union[str, Path],
    cfg: Optional[DriftConfig] = None,
) -> Dict:
    """File entry point: .json, .jsonl or .csv records."""
    return analyze_series(load_series(filepath), cfg)


def analyze_data(
    data: Iterable,
    cfg: Optional[DriftConfig] = None,
) -> Dict:
    """
    Backend / UI integration entry point.

    Accepts list-of-dict records (or DailyObservation instances) directly.
    """
    return analyze_series(build_series(data), cfg)


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

def _fmt(value: float, pattern: str = ".1f") -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return format(value, pattern)


def generate_report(result: Dict, max_change_points: int = 5) -> str:
    """Format the analysis result as a human-readable text report."""
    status = result["status"]
    cur = status.latest
    w = result["window_size"]

    lines = [
        "DRIFTWATCH STATUS REPORT",
        "=" * 58,
        "",
        f"  As of               : {cur['date']} (day {cur['day']}, week {cur['week']})",
        f"  Risk Level          : {cur['risk_tier']}",
        f"  Drift Score         : {cur['drift_score']}/100",
        f"  Consistency (CV)    : {_fmt(cur['coeff_variation'])}%",
        f"  Avg Start Time      : {_fmt(cur['mean_start'])}h (±{_fmt(cur['std_start'])}h)",
        f"  Focus Level         : {_fmt(cur['mean_focus'])}/5 ({w}-day average)",
        f"  Late-Night Days     : {_fmt(cur['night_ratio'])}%",
        f"  Trend               : {status.trend:+d} points (vs day {status.reference_day})",
    ]

    if status.alerts:
        lines.append("")
        lines.append("  Active Alerts:")
        for alert in status.alerts:
            lines.append(f"    - {alert}")

    if status.acceleration is not None:
        lines.append("")
        lines.append(
            f"  ⚠  ACCELERATING DRIFT: score up {status.acceleration.trend} points "
            f"over the lookback period"
        )

    events = result["change_points"]
    if events:
        lines.append("")
        lines.append("  Recent Change Points:")
        for ev in list(reversed(events))[:max_change_points]:
            lines.append(
                f"    Week {ev.week:2d}, Day {ev.day:3d} ({ev.date.isoformat()}) : "
                f"{ev.direction:8s} {ev.delta:+d}"
            )

    lines.append("")
    lines.append("  Weekly Summary:")
    lines.append("    Week   Hours (±sd)      Focus   Start (±sd)")
    for wk in result["weekly"]:
        lines.append(
            f"    W{wk.week:<4d} {wk.mean_duration:5.1f} (±{wk.std_duration:4.2f})"
            f"   {wk.mean_focus:5.2f}   {wk.mean_start:5.1f} (±{wk.std_start:4.2f})"
        )

    trends = result.get("weekly_trends", {})
    if trends:
        lines.append("")
        lines.append("  Weekly Trends:")
        for metric, t in trends.items():
            label = metric.replace("_", " ").title()
            lines.append(f"    {label:15s} : {t['direction']:18s} (slope: {t['slope']:+.4f})")

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)
