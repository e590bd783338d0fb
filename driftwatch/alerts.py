"""
Status evaluation: latest window, week-over-week trend, and alert conditions.

Alerts are declarative (config.alert_rules) and evaluated in rule order, so
the AlertSet order is fixed regardless of which conditions fire. The
accelerating-drift condition is reported separately from the AlertSet.
"""

from typing import Dict, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from driftwatch.config import DriftConfig
from driftwatch.models import AccelerationAlert, DriftStatus


def _native(value):
    """Unbox numpy / pandas scalars so the snapshot is a plain dict."""
    if isinstance(value, (pd.Timestamp, np.datetime64)):
        return pd.Timestamp(value).date().isoformat()
    if isinstance(value, np.generic):
        return value.item()
    return value


def window_snapshot(row: pd.Series) -> Dict:
    return {key: _native(value) for key, value in row.items()}


# ---------------------------------------------------------------------------
# Alert rules
# ---------------------------------------------------------------------------

def evaluate_alerts(latest: Mapping, cfg: DriftConfig) -> Tuple[str, ...]:
    """
    Scan all configured alert rules against one window.

    A rule fires when the window's `column` is strictly greater ("gt") or
    strictly less ("lt") than its threshold. Missing or NaN values never fire.
    """
    fired = []
    for rule in cfg.alert_rules:
        value = latest.get(rule.column)
        if value is None:
            continue
        threshold = getattr(cfg.thresholds, rule.threshold_field)

        if rule.comparison == "gt" and value > threshold:
            fired.append(rule.name)
        elif rule.comparison == "lt" and value < threshold:
            fired.append(rule.name)

    return tuple(fired)


# ---------------------------------------------------------------------------
# Trend against the lookback window
# ---------------------------------------------------------------------------

def reference_position(n_windows: int, cfg: DriftConfig) -> int:
    """Index of the window `lookback_windows` before the last, or the first one."""
    return max(0, n_windows - 1 - cfg.alerts.lookback_windows)


def compute_trend(stats: pd.DataFrame, cfg: DriftConfig) -> Tuple[int, int]:
    """
    Drift-score change from the reference window to the latest one.

    Returns:
        (trend, reference_day)
    """
    ref = stats.iloc[reference_position(len(stats), cfg)]
    latest = stats.iloc[-1]
    trend = int(latest["drift_score"]) - int(ref["drift_score"])
    return trend, int(ref["day"])


def detect_acceleration(trend: int, cfg: DriftConfig) -> Optional[AccelerationAlert]:
    if trend > cfg.alerts.acceleration_trend:
        return AccelerationAlert(trend=trend)
    return None


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

def evaluate_status(stats: pd.DataFrame, cfg: DriftConfig) -> DriftStatus:
    """Build the status snapshot from a scored window sequence."""
    if stats.empty:
        raise ValueError("No window statistics to evaluate")

    latest = window_snapshot(stats.iloc[-1])
    trend, reference_day = compute_trend(stats, cfg)

    return DriftStatus(
        latest=latest,
        reference_day=reference_day,
        trend=trend,
        alerts=evaluate_alerts(latest, cfg),
        acceleration=detect_acceleration(trend, cfg),
    )
