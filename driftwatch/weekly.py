"""
Weekly aggregation over raw daily records.

Independent of the rolling window: records are bucketed by their `week`
number and summarized per bucket. A week with no records simply has no row.
Trend direction across weeks is the least-squares slope of each metric
against the week number (not the row position), in units per week.
"""

from typing import Dict, List

import numpy as np
import pandas as pd

from driftwatch.config import DriftConfig
from driftwatch.models import WeeklyAggregate


WEEKLY_METRICS = (
    "mean_duration",
    "std_duration",
    "mean_focus",
    "mean_start",
    "std_start",
)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def compute_weekly_aggregates(df: pd.DataFrame) -> List[WeeklyAggregate]:
    """One WeeklyAggregate per distinct week, ascending. Population std (ddof=0)."""
    weekly: List[WeeklyAggregate] = []

    for week, group in df.groupby("week", sort=True):
        hours = group["activity_hours"].to_numpy(dtype=np.float64)
        starts = group["start_hour"].to_numpy(dtype=np.float64)
        focus = group["focus_score"].to_numpy(dtype=np.float64)

        weekly.append(WeeklyAggregate(
            week=int(week),
            mean_duration=float(hours.mean()),
            std_duration=float(hours.std()),
            mean_focus=float(focus.mean()),
            mean_start=float(starts.mean()),
            std_start=float(starts.std()),
        ))

    return weekly


# ---------------------------------------------------------------------------
# Trend direction
# ---------------------------------------------------------------------------

def weekly_slope(weeks: np.ndarray, values: np.ndarray) -> float:
    """Least-squares line through (week number, value); returns units per week."""
    if len(values) < 2:
        return 0.0
    slope, _intercept = np.polyfit(weeks, values, deg=1)
    return float(slope)


def classify_direction(slope: float, stable_band: float) -> str:
    if slope > stable_band:
        return "rising"
    if slope < -stable_band:
        return "falling"
    return "stable"


def summarize_weekly_trends(
    weekly: List[WeeklyAggregate],
    cfg: DriftConfig,
) -> Dict[str, Dict[str, object]]:
    """
    Per-metric slope (units per week) and direction label.

    Returns:
        {"mean_focus": {"slope": float, "direction": str}, ...}
    """
    p = cfg.weekly_trend

    if len(weekly) < p.min_weeks:
        return {
            metric: {"slope": 0.0, "direction": "insufficient data"}
            for metric in WEEKLY_METRICS
        }

    weeks = np.array([w.week for w in weekly], dtype=np.float64)
    summary = {}
    for metric in WEEKLY_METRICS:
        values = np.array([getattr(w, metric) for w in weekly], dtype=np.float64)
        slope = weekly_slope(weeks, values)
        summary[metric] = {
            "slope": round(slope, 4),
            "direction": classify_direction(slope, p.stable_band),
        }
    return summary
