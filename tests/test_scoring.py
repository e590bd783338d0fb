import itertools

import numpy as np
import pandas as pd
import pytest

from driftwatch.config import DriftConfig, RiskThresholds
from driftwatch.scoring import (
    TERM_COLUMNS,
    classify_risk,
    compute_drift_scores,
    score_terms,
    score_window,
)


# ═══════════════════════════════════════════════════════════════════════
# SINGLE WINDOW
# ═══════════════════════════════════════════════════════════════════════

def test_calm_window_scores_zero(cfg):
    assert score_window(10.0, 1.0, 4.5, 0.0, cfg) == 0


def test_variability_only(cfg):
    assert score_window(50.0, 1.0, 4.0, 10.0, cfg) == 30


def test_every_term(cfg):
    terms = score_terms(55.0, 4.0, 2.0, 60.0, cfg)
    assert terms == {
        "variability_points": 30,
        "timing_points": 25,
        "focus_points": 25,
        "night_points": 20,
    }
    assert score_window(55.0, 4.0, 2.0, 60.0, cfg) == 100


def test_thresholds_are_strict(cfg):
    # Exactly at each threshold: nothing fires
    assert score_window(40.0, 3.0, 3.0, 40.0, cfg) == 0


def test_undefined_cv_scores_nothing(cfg):
    assert score_window(float("nan"), 1.0, 4.0, 0.0, cfg) == 0


def test_all_term_combinations_are_additive(cfg):
    high = {"cv": 80.0, "std": 5.0, "focus": 1.5, "night": 90.0}
    low = {"cv": 5.0, "std": 0.5, "focus": 4.5, "night": 0.0}
    points = (30, 25, 25, 20)

    for mask in itertools.product([False, True], repeat=4):
        args = [
            (high if on else low)[key]
            for on, key in zip(mask, ("cv", "std", "focus", "night"))
        ]
        score = score_window(*args, cfg)
        assert score == sum(p for p, on in zip(points, mask) if on)
        assert isinstance(score, int)
        assert 0 <= score <= 100


def test_term_order_does_not_matter(cfg):
    terms = score_terms(55.0, 4.0, 2.0, 10.0, cfg)
    for perm in itertools.permutations(terms.values()):
        assert sum(perm) == 80


# ═══════════════════════════════════════════════════════════════════════
# RISK TIERS
# ═══════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize(
    "score, tier",
    [(0, "Low"), (39, "Low"), (40, "Medium"), (59, "Medium"), (60, "High"), (100, "High")],
)
def test_risk_tier_boundaries(cfg, score, tier):
    assert classify_risk(score, cfg) == tier


def test_custom_risk_thresholds():
    cfg = DriftConfig(risk=RiskThresholds(medium=20, high=50))
    assert classify_risk(20, cfg) == "Medium"
    assert classify_risk(50, cfg) == "High"


# ═══════════════════════════════════════════════════════════════════════
# SEQUENCE
# ═══════════════════════════════════════════════════════════════════════

def _stats():
    return pd.DataFrame({
        "coeff_variation": [10.0, 50.0, 50.0, np.nan, 50.0],
        "std_start": [1.0, 1.0, 4.0, 4.0, 4.0],
        "mean_focus": [4.0, 4.0, 4.0, 2.0, 2.0],
        "night_ratio": [0.0, 0.0, 0.0, 0.0, 50.0],
    })


def test_sequence_scores_and_tiers(cfg):
    scored = compute_drift_scores(_stats(), cfg)
    assert list(scored["drift_score"]) == [0, 30, 55, 50, 100]
    assert list(scored["risk_tier"]) == ["Low", "Low", "Medium", "Medium", "High"]
    assert scored["drift_score"].dtype == np.int64


def test_sequence_matches_single_window(cfg):
    stats = _stats()
    scored = compute_drift_scores(stats, cfg)
    for i, row in stats.iterrows():
        expected = score_window(
            row["coeff_variation"], row["std_start"], row["mean_focus"], row["night_ratio"], cfg
        )
        assert scored["drift_score"].iloc[i] == expected
        assert scored["risk_tier"].iloc[i] == classify_risk(expected, cfg)


def test_term_columns_sum_to_score(cfg):
    scored = compute_drift_scores(_stats(), cfg)
    assert (scored[list(TERM_COLUMNS)].sum(axis=1) == scored["drift_score"]).all()


def test_input_not_mutated(cfg):
    stats = _stats()
    compute_drift_scores(stats, cfg)
    assert "drift_score" not in stats.columns


def test_sequence_follows_custom_risk_thresholds():
    cfg = DriftConfig(risk=RiskThresholds(medium=20, high=50))
    scored = compute_drift_scores(_stats(), cfg)
    assert list(scored["risk_tier"]) == ["Low", "Medium", "High", "High", "High"]
    assert list(scored["risk_tier"]) == [classify_risk(s, cfg) for s in scored["drift_score"]]


def test_empty_sequence(cfg):
    scored = compute_drift_scores(_stats().iloc[0:0], cfg)
    assert scored.empty
    assert {"drift_score", "risk_tier", *TERM_COLUMNS} <= set(scored.columns)
