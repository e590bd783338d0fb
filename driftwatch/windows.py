"""
Rolling window statistics over an ObservationSeries.

For each anchor day d >= window_size, the window is the `window_size` days
ending at d (inclusive). Every statistic is a population statistic
(ddof=0) computed directly over the window's values, so each row depends only
on its own slice and recomputation is bit-for-bit reproducible.

Pure transform: no I/O, no side effects.
"""

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from driftwatch.config import DriftConfig
from driftwatch.errors import InsufficientDataError


WINDOW_COLUMNS = (
    "day",
    "week",
    "date",
    "mean_duration",
    "std_duration",
    "coeff_variation",
    "mean_start",
    "std_start",
    "mean_focus",
    "mean_session_length",
    "night_ratio",
)


def _windows(series: pd.Series, size: int) -> np.ndarray:
    """(n - size + 1, size) view of consecutive windows."""
    return sliding_window_view(series.to_numpy(dtype=np.float64), size)


def coefficient_of_variation(std: np.ndarray, mean: np.ndarray) -> np.ndarray:
    """
    std / mean * 100, elementwise.

    Undefined (NaN) where mean == 0: an all-zero window has no meaningful
    relative variability.
    """
    cv = np.full(mean.shape, np.nan, dtype=np.float64)
    np.divide(std, mean, out=cv, where=mean > 0)
    return cv * 100.0


def compute_window_statistics(df: pd.DataFrame, cfg: DriftConfig) -> pd.DataFrame:
    """
    One row of window statistics per anchor day, ordered by day.

    Raises InsufficientDataError if the series is shorter than one window.
    """
    size = cfg.window_size
    n = len(df)
    if n < size:
        raise InsufficientDataError(required=size, available=n)

    hours = _windows(df["activity_hours"], size)
    starts = _windows(df["start_hour"], size)
    focus = _windows(df["focus_score"], size)
    sessions = _windows(df["session_length"], size)

    mean_duration = hours.mean(axis=1)
    std_duration = hours.std(axis=1)

    # Share of days that began at or after the night hour, as a percentage
    night = (starts >= cfg.thresholds.night_start_hour).mean(axis=1) * 100.0

    anchors = df.iloc[size - 1:].reset_index(drop=True)

    stats = pd.DataFrame({
        "day": anchors["day"].to_numpy(),
        "week": anchors["week"].to_numpy(),
        "date": anchors["date"].to_numpy(),
        "mean_duration": mean_duration,
        "std_duration": std_duration,
        "coeff_variation": coefficient_of_variation(std_duration, mean_duration),
        "mean_start": starts.mean(axis=1),
        "std_start": starts.std(axis=1),
        "mean_focus": focus.mean(axis=1),
        "mean_session_length": sessions.mean(axis=1),
        "night_ratio": night,
    })

    return stats[list(WINDOW_COLUMNS)]
