"""
Change-point detection between consecutive scored windows.

Single forward pass: every adjacent pair whose drift-score delta exceeds the
threshold in absolute value produces its own event. No smoothing, merging or
look-ahead, so back-to-back swings each yield an event.
"""

from typing import List

import numpy as np
import pandas as pd

from driftwatch.config import DriftConfig
from driftwatch.models import ChangePointEvent


def detect_change_points(stats: pd.DataFrame, cfg: DriftConfig) -> List[ChangePointEvent]:
    """Chronological list of change points in a scored window sequence."""
    threshold = cfg.change_threshold
    scores = stats["drift_score"].to_numpy(dtype=np.int64)

    events: List[ChangePointEvent] = []
    for i in range(1, len(scores)):
        delta = int(scores[i] - scores[i - 1])
        if abs(delta) <= threshold:
            continue

        row = stats.iloc[i]
        events.append(ChangePointEvent(
            day=int(row["day"]),
            week=int(row["week"]),
            date=pd.Timestamp(row["date"]).date(),
            delta=delta,
            direction="increase" if delta > 0 else "decrease",
        ))

    return events
