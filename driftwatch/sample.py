"""
Synthetic daily records with a gradual drift, for demos.

The output is a plain list of row-format records and goes through the same
build_series() path as ingested data; nothing downstream can tell the two
apart.

Simulation: a stable baseline (4-6h of activity, 2-3 sessions, start 9-11h,
focus 4-5) until `drift_start`, then a linear drift factor f in [0, 1) that
    - shrinks and destabilizes activity hours,
    - pushes start time up to 6h later,
    - lowers focus by up to 40%,
    - fragments activity into more sessions.
Weekends cut hours by 40% and drop one session.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional, Union

import numpy as np
import pandas as pd

from driftwatch.series import build_series


def generate_sample_records(
    days: int = 84,
    start_date: Union[str, date] = "2024-09-01",
    drift_start: int = 42,
    seed: Optional[int] = None,
) -> List[Dict]:
    rng = np.random.default_rng(seed)
    start = date.fromisoformat(start_date) if isinstance(start_date, str) else start_date
    drift_span = max(days - drift_start, 1)

    records = []
    for i in range(days):
        day = start + timedelta(days=i)

        hours = 4 + rng.random() * 2
        sessions = 2 + int(rng.integers(0, 2))
        start_hour = 9 + rng.random() * 2
        focus = 4 + rng.random()

        if i >= drift_start:
            f = (i - drift_start) / drift_span
            hours = hours * (1 - f * 0.3) + (rng.random() - 0.5) * f * 4
            start_hour = start_hour + f * 6
            focus = focus * (1 - f * 0.4)
            sessions = sessions + int(f * 3)

        if day.weekday() >= 5:
            hours *= 0.6
            sessions = max(1, sessions - 1)

        records.append({
            "date": day.isoformat(),
            "activity_hours": round(max(hours, 0.0), 1),
            "session_count": sessions,
            "start_hour": round(min(start_hour, 23.9), 1),
            "focus_score": float(np.clip(round(focus, 1), 1.0, 5.0)),
        })

    return records


def generate_sample_series(
    days: int = 84,
    start_date: Union[str, date] = "2024-09-01",
    drift_start: int = 42,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    return build_series(generate_sample_records(days, start_date, drift_start, seed))
