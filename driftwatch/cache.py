"""
Memoization of analysis results.

Results are keyed by (series fingerprint, config). The config carries the
window size and change threshold, so changing either one is a new key.
Recomputing a key always yields the same result; concurrent writers for the
same key resolve last-write-wins. Every caller receives its own deep copy,
so mutating a returned result never alters later hits.
"""

import copy
import hashlib
from collections import OrderedDict
from threading import RLock
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

import pandas as pd

from driftwatch.config import DriftConfig
from driftwatch.series import STORED_COLUMNS


def series_fingerprint(df: pd.DataFrame) -> str:
    """Content hash of the stored fields; equal series give equal fingerprints."""
    hashed = pd.util.hash_pandas_object(df[list(STORED_COLUMNS)], index=False)
    return hashlib.sha256(hashed.to_numpy().tobytes()).hexdigest()


class AnalysisCache:
    """Thread-safe LRU cache of pipeline results."""

    def __init__(self, max_size: int = 32):
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self._entries: "OrderedDict[Tuple[str, Hashable], Dict]" = OrderedDict()
        self._max_size = max_size
        self._lock = RLock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(df: pd.DataFrame, cfg: DriftConfig) -> Tuple[str, Hashable]:
        return series_fingerprint(df), cfg

    def get(self, key: Tuple[str, Hashable]) -> Optional[Dict]:
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            return self._entries[key]

    def put(self, key: Tuple[str, Hashable], value: Dict) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)

    def get_or_compute(
        self,
        df: pd.DataFrame,
        cfg: DriftConfig,
        compute: Callable[[pd.DataFrame, DriftConfig], Dict],
    ) -> Dict:
        key = self.key_for(df, cfg)
        cached = self.get(key)
        if cached is not None:
            with self._lock:
                self.hits += 1
            return copy.deepcopy(cached)

        # Computed outside the lock; a racing writer for the same key stores an identical result
        result = compute(df, cfg)
        with self._lock:
            self.misses += 1
        self.put(key, result)
        # Callers own what they get back; the stored entry is never handed out
        return copy.deepcopy(result)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return key in self._entries
