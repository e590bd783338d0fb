"""Shared fixtures: record builders and hand-made scored window frames."""

import sys
from datetime import date, timedelta
from pathlib import Path

import pandas as pd
import pytest

# Project root on sys.path so `import driftwatch` works without installation
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from driftwatch.config import DriftConfig  # noqa: E402


# 2024-09-02 is a Monday, so week boundaries line up with calendar weeks
START = "2024-09-02"


def _col(value, i):
    return value[i] if isinstance(value, (list, tuple)) else value


def _make_records(
    n,
    start=START,
    activity_hours=5.0,
    session_count=2,
    start_hour=9.0,
    focus_score=4.0,
):
    first = date.fromisoformat(start)
    return [
        {
            "date": (first + timedelta(days=i)).isoformat(),
            "activity_hours": _col(activity_hours, i),
            "session_count": _col(session_count, i),
            "start_hour": _col(start_hour, i),
            "focus_score": _col(focus_score, i),
        }
        for i in range(n)
    ]


def _scored_frame(scores, first_day=7, start=START):
    """Minimal scored window sequence: day/week/date/drift_score plus neutral stats."""
    first = pd.Timestamp(start)
    days = list(range(first_day, first_day + len(scores)))
    return pd.DataFrame({
        "day": days,
        "week": [(d - 1) // 7 + 1 for d in days],
        "date": [first + pd.Timedelta(days=d - 1) for d in days],
        "coeff_variation": [10.0] * len(scores),
        "std_start": [1.0] * len(scores),
        "mean_focus": [4.0] * len(scores),
        "night_ratio": [0.0] * len(scores),
        "drift_score": scores,
        "risk_tier": ["Low"] * len(scores),
    })


@pytest.fixture
def cfg():
    return DriftConfig()


@pytest.fixture
def make_records():
    return _make_records


@pytest.fixture
def scored_frame():
    return _scored_frame
