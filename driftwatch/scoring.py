"""
Drift scoring: window statistics -> composite drift score and risk tier.

The score is a sum of four independent penalty terms. Each term contributes
its full weight when its own threshold is exceeded and nothing otherwise;
there is no normalization and no interaction between terms.

    variability   coeff_variation > 40   +30
    timing        std_start > 3h         +25
    focus         mean_focus < 3         +25
    night         night_ratio > 40%      +20

An undefined coefficient of variation (all-zero window) never exceeds its
threshold: NaN compares False.
"""

from typing import Dict

import numpy as np
import pandas as pd

from driftwatch.config import DriftConfig


TERM_COLUMNS = (
    "variability_points",
    "timing_points",
    "focus_points",
    "night_points",
)


# ---------------------------------------------------------------------------
# Single window
# ---------------------------------------------------------------------------

def score_terms(
    coeff_variation: float,
    std_start: float,
    mean_focus: float,
    night_ratio: float,
    cfg: DriftConfig,
) -> Dict[str, int]:
    """Points earned by each term for one window."""
    t = cfg.thresholds
    w = cfg.weights
    return {
        "variability_points": w.variability if coeff_variation > t.variability_cv else 0,
        "timing_points": w.timing if std_start > t.timing_std_hours else 0,
        "focus_points": w.focus if mean_focus < t.focus_floor else 0,
        "night_points": w.night if night_ratio > t.night_ratio else 0,
    }


def score_window(
    coeff_variation: float,
    std_start: float,
    mean_focus: float,
    night_ratio: float,
    cfg: DriftConfig,
) -> int:
    """Composite drift score in [0, 100] for one window."""
    terms = score_terms(coeff_variation, std_start, mean_focus, night_ratio, cfg)
    return int(sum(terms.values()))


def classify_risk(score: int, cfg: DriftConfig) -> str:
    """Step function from score to tier, evaluated high to low."""
    r = cfg.risk
    if score >= r.high:
        return "High"
    if score >= r.medium:
        return "Medium"
    return "Low"


# ---------------------------------------------------------------------------
# Whole window sequence
# ---------------------------------------------------------------------------

def compute_drift_scores(stats: pd.DataFrame, cfg: DriftConfig) -> pd.DataFrame:
    """
    Append per-term points, drift_score and risk_tier to window statistics.

    Each row goes through score_terms and classify_risk, so the sequence and
    a single window are scored by the same rules.
    """
    stats = stats.copy()

    rows = zip(
        stats["coeff_variation"].to_numpy(dtype=np.float64),
        stats["std_start"].to_numpy(dtype=np.float64),
        stats["mean_focus"].to_numpy(dtype=np.float64),
        stats["night_ratio"].to_numpy(dtype=np.float64),
    )
    terms = pd.DataFrame(
        [score_terms(cv, std, focus, night, cfg) for cv, std, focus, night in rows],
        index=stats.index,
        columns=list(TERM_COLUMNS),
    ).astype(np.int64)

    for col in TERM_COLUMNS:
        stats[col] = terms[col]

    score = terms.sum(axis=1).astype(np.int64)
    stats["drift_score"] = score
    stats["risk_tier"] = score.map(lambda s: classify_risk(int(s), cfg))

    return stats
