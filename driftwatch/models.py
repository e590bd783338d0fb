"""
Plain result records produced by the engine.

Window statistics stay in a DataFrame (one row per anchor day); the sparser
outputs (events, weekly rows, the status snapshot) are frozen dataclasses so
they cannot be mutated after creation.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class DailyObservation:
    """One calendar day of behavioral tracking."""

    date: date
    activity_hours: float
    session_count: int
    start_hour: float
    focus_score: float

    @property
    def is_weekend(self) -> bool:
        return self.date.weekday() >= 5

    def to_record(self) -> Dict:
        """Row form used for storage. Derived fields are never stored."""
        return {
            "date": self.date.isoformat(),
            "activity_hours": self.activity_hours,
            "session_count": self.session_count,
            "start_hour": self.start_hour,
            "focus_score": self.focus_score,
        }


@dataclass(frozen=True)
class ChangePointEvent:
    day: int
    week: int
    date: date
    delta: int
    direction: str       # "increase" | "decrease"

    def to_dict(self) -> Dict:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        return d


@dataclass(frozen=True)
class WeeklyAggregate:
    week: int
    mean_duration: float
    std_duration: float
    mean_focus: float
    mean_start: float
    std_start: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class AccelerationAlert:
    """Drift score rose faster than the acceleration threshold over the lookback."""

    trend: int


@dataclass(frozen=True)
class DriftStatus:
    """
    Snapshot of the most recent window.

    latest:         last window-statistics row as a plain dict
    reference_day:  anchor day of the window the trend is measured against
    trend:          latest.drift_score - reference.drift_score
    alerts:         triggered alert names, in fixed rule order
    acceleration:   set only when the trend exceeds the acceleration threshold
    """

    latest: Dict
    reference_day: int
    trend: int
    alerts: Tuple[str, ...]
    acceleration: Optional[AccelerationAlert] = None

    def to_dict(self) -> Dict:
        return {
            "latest": dict(self.latest),
            "reference_day": self.reference_day,
            "trend": self.trend,
            "alerts": list(self.alerts),
            "accelerating_drift": (
                None if self.acceleration is None else self.acceleration.trend
            ),
        }
