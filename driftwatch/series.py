"""
ObservationSeries: ingestion and row-format I/O for daily behavioral records.

This is the only module besides the pipeline that touches files. It validates
shape (columns, emptiness, duplicate dates), sorts by date and derives the
positional columns every analytic relies on:

    day             1-based position in the series
    week            ((day - 1) // 7) + 1
    is_weekend      Saturday or Sunday
    session_length  activity_hours / session_count

Downstream modules assume a well-formed series and do not re-validate.
"""

import json
from pathlib import Path
from typing import Iterable, List, Union

import numpy as np
import pandas as pd

from driftwatch.log import get_logger
from driftwatch.models import DailyObservation

logger = get_logger(__name__)


# Stored fields, in row order. Derived columns are never persisted.
STORED_COLUMNS = (
    "date",
    "activity_hours",
    "session_count",
    "start_hour",
    "focus_score",
)

REQUIRED_COLUMNS = set(STORED_COLUMNS)


# ---------------------------------------------------------------------------
# Building a series
# ---------------------------------------------------------------------------

def build_series(data: Union[pd.DataFrame, Iterable]) -> pd.DataFrame:
    """
    Turn raw records into an ObservationSeries DataFrame.

    Accepts a DataFrame, a list of dicts, or a list of DailyObservation.
    Extra columns (for example a precomputed `week`) are dropped and
    recomputed from position.
    """
    if isinstance(data, pd.DataFrame):
        df = data.copy()
    else:
        rows = [
            r.to_record() if isinstance(r, DailyObservation) else dict(r)
            for r in data
        ]
        df = pd.DataFrame(rows)

    if df.empty:
        raise ValueError("Input data cannot be empty")

    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    df = df[list(STORED_COLUMNS)].copy()
    df["date"] = pd.to_datetime(df["date"]).dt.normalize()

    dupes = df["date"][df["date"].duplicated()]
    if not dupes.empty:
        first = dupes.iloc[0].date().isoformat()
        raise ValueError(f"Duplicate dates in series (first: {first})")

    df.sort_values("date", inplace=True)
    df.reset_index(drop=True, inplace=True)

    df["activity_hours"] = df["activity_hours"].astype(np.float64)
    df["session_count"] = df["session_count"].astype(np.int64)
    df["start_hour"] = df["start_hour"].astype(np.float64)
    df["focus_score"] = df["focus_score"].astype(np.float64)

    df["day"] = np.arange(1, len(df) + 1, dtype=np.int64)
    df["week"] = (df["day"] - 1) // 7 + 1
    df["is_weekend"] = df["date"].dt.dayofweek >= 5
    df["session_length"] = df["activity_hours"] / df["session_count"]

    logger.debug(
        "series_built",
        days=len(df),
        first=df["date"].iloc[0].date().isoformat(),
        last=df["date"].iloc[-1].date().isoformat(),
    )
    return df


def to_observations(df: pd.DataFrame) -> List[DailyObservation]:
    """Convert a series DataFrame back into DailyObservation records."""
    return [
        DailyObservation(
            date=row.date.date(),
            activity_hours=float(row.activity_hours),
            session_count=int(row.session_count),
            start_hour=float(row.start_hour),
            focus_score=float(row.focus_score),
        )
        for row in df.itertuples(index=False)
    ]


# ---------------------------------------------------------------------------
# Row-format I/O
# ---------------------------------------------------------------------------

def _stored_frame(df: pd.DataFrame) -> pd.DataFrame:
    out = df[list(STORED_COLUMNS)].copy()
    out["date"] = pd.to_datetime(out["date"]).dt.strftime("%Y-%m-%d")
    return out


def load_series(filepath: Union[str, Path]) -> pd.DataFrame:
    """
    Load daily records from .json (list of records), .jsonl (one record per
    line) or .csv, and build a series from them.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, "r") as f:
            data = json.load(f)
    elif suffix == ".jsonl":
        with open(path, "r") as f:
            data = [json.loads(line) for line in f if line.strip()]
    elif suffix == ".csv":
        data = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported data file type: {path.suffix!r}")

    if len(data) == 0:
        raise ValueError("Data file is empty")

    logger.info("series_loaded", path=str(path), records=len(data))
    return build_series(data)


def save_series(df: pd.DataFrame, filepath: Union[str, Path]) -> Path:
    """Write the stored fields of a series in the format implied by the suffix."""
    path = Path(filepath)
    out = _stored_frame(df)
    suffix = path.suffix.lower()

    if suffix == ".json":
        with open(path, "w") as f:
            json.dump(out.to_dict(orient="records"), f, indent=2)
    elif suffix == ".jsonl":
        with open(path, "w") as f:
            for record in out.to_dict(orient="records"):
                f.write(json.dumps(record) + "\n")
    elif suffix == ".csv":
        out.to_csv(path, index=False)
    else:
        raise ValueError(f"Unsupported data file type: {path.suffix!r}")

    logger.info("series_saved", path=str(path), records=len(out))
    return path
