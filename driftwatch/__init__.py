"""
DRIFTWATCH v1.0: Rule-Based Behavioral Drift Engine

A deterministic, interpretable engine that analyzes a daily series of
behavioral observations (activity hours, sessions, start time, focus) and
flags gradual deviation from a person's baseline as an early burnout signal.

Architecture:
    config        All thresholds, weights, and window sizes (single source of truth)
    series        Ingestion and row-format I/O for daily records
    windows       Rolling window statistics
    scoring       Composite drift score and risk tier
    changepoints  Score discontinuities between consecutive windows
    weekly        Per-week aggregates and trend direction
    alerts        Latest-window status, trend, and alert conditions
    cache         Result memoization keyed by series and config
    pipeline      Orchestration: load -> window -> score -> detect -> report

Public API:
    analyze(filepath)        file mode
    analyze_data(records)    UI / backend mode
    analyze_series(df)       already-built series, optional cache
    generate_report(result)  formatted report
"""

from driftwatch.config import DriftConfig
from driftwatch.errors import InsufficientDataError
from driftwatch.pipeline import analyze, analyze_data, analyze_series, generate_report

__version__ = "1.0.0"

__all__ = [
    "analyze",
    "analyze_data",
    "analyze_series",
    "generate_report",
    "DriftConfig",
    "InsufficientDataError",
]
