"""
Centralized configuration for all thresholds, weights, and window parameters.

Every tunable constant of the drift engine lives here. Window size and the
change-point threshold are ordinary fields, so a host application that lets a
user pick 7/14/21-day windows just passes a different config.
"""

from dataclasses import dataclass, field, replace


# ---------------------------------------------------------------------------
# Rolling window
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WindowParams:
    """Rolling window size, in days."""

    size: int = 7
    choices: tuple = (7, 14, 21)   # customary sizes offered to users

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Window size must be a positive integer, got {self.size}")


# ---------------------------------------------------------------------------
# Drift score terms
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DriftThresholds:
    """Per-term trigger thresholds. A term scores only when its own threshold is exceeded."""

    # coeff_variation > this (percent)
    variability_cv: float = 40.0

    # std_start > this (hours)
    timing_std_hours: float = 3.0

    # mean_focus < this (1-5 scale)
    focus_floor: float = 3.0

    # night_ratio > this (percent of days in the window)
    night_ratio: float = 40.0

    # A day counts as "night" when activity starts at or after this hour
    night_start_hour: float = 18.0


@dataclass(frozen=True)
class DriftWeights:
    """Points contributed by each term. Terms are additive, never normalized."""

    variability: int = 30
    timing: int = 25
    focus: int = 25
    night: int = 20

    def __post_init__(self):
        weights = (self.variability, self.timing, self.focus, self.night)
        if any(w < 0 for w in weights):
            raise ValueError(f"Drift weights must be non-negative, got {weights}")
        total = sum(weights)
        if total > 100:
            raise ValueError(f"Drift weights must sum to at most 100, got {total}")


# ---------------------------------------------------------------------------
# Risk tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RiskThresholds:
    """Lower bounds (inclusive) of the Medium and High tiers."""

    medium: int = 40
    high: int = 60

    def __post_init__(self):
        if not 0 <= self.medium <= self.high <= 100:
            raise ValueError(
                f"Risk thresholds must satisfy 0 <= medium <= high <= 100, "
                f"got medium={self.medium}, high={self.high}"
            )


# ---------------------------------------------------------------------------
# Change points
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChangePointParams:
    """An event fires when |score delta| between adjacent windows exceeds this."""

    threshold: int = 20


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlertParams:
    """
    Lookback and acceleration settings for the status evaluation.

    lookback_windows counts windows, not days. With a 21-day window the
    reference window still sits 7 positions back.
    """

    lookback_windows: int = 7
    acceleration_trend: int = 10


# ---------------------------------------------------------------------------
# Weekly trend direction
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WeeklyTrendParams:
    """Per-week OLS slopes within +/- stable_band are labeled stable."""

    stable_band: float = 0.05
    min_weeks: int = 2


# ---------------------------------------------------------------------------
# Alert rules (declarative)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlertRule:
    """A single alert: fires when `column` compares against `threshold_field`."""

    name: str
    column: str
    comparison: str          # "gt" or "lt"
    threshold_field: str     # attribute of DriftThresholds


DEFAULT_ALERT_RULES: tuple = (
    AlertRule(
        name="high variability",
        column="coeff_variation",
        comparison="gt",
        threshold_field="variability_cv",
    ),
    AlertRule(
        name="inconsistent timing",
        column="std_start",
        comparison="gt",
        threshold_field="timing_std_hours",
    ),
    AlertRule(
        name="declining focus",
        column="mean_focus",
        comparison="lt",
        threshold_field="focus_floor",
    ),
    AlertRule(
        name="late-night activity increase",
        column="night_ratio",
        comparison="gt",
        threshold_field="night_ratio",
    ),
)


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DriftConfig:
    """Complete engine configuration. Pass to pipeline to override defaults."""

    windows: WindowParams = field(default_factory=WindowParams)
    thresholds: DriftThresholds = field(default_factory=DriftThresholds)
    weights: DriftWeights = field(default_factory=DriftWeights)
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    change_points: ChangePointParams = field(default_factory=ChangePointParams)
    alerts: AlertParams = field(default_factory=AlertParams)
    weekly_trend: WeeklyTrendParams = field(default_factory=WeeklyTrendParams)
    alert_rules: tuple = DEFAULT_ALERT_RULES

    @property
    def window_size(self) -> int:
        return self.windows.size

    @property
    def change_threshold(self) -> int:
        return self.change_points.threshold

    def with_window(self, size: int) -> "DriftConfig":
        """Copy of this config with a different rolling window size."""
        return replace(self, windows=replace(self.windows, size=size))

    def with_change_threshold(self, threshold: int) -> "DriftConfig":
        return replace(self, change_points=ChangePointParams(threshold=threshold))
