"""Per-track progression cache.

The estimator is stateless; callers that look up the same track repeatedly
(a player screen, a background worker) own one of these and invalidate it
explicitly, e.g. when a session ends.

Usage::

    from chordline.cache import ProgressionCache

    cache = ProgressionCache()
    progression = cache.get_or_estimate(track_id, lambda: fetch(track_id))
    ...
    cache.invalidate(track_id)
"""

import logging
import threading
from typing import Callable, Dict, Optional, Tuple

from .core import ChordProgression, TonalContext, TrackAnalysis
from .estimator import ChordEstimator

logger = logging.getLogger(__name__)

AnalysisSource = Callable[[], Tuple[TrackAnalysis, Optional[TonalContext]]]


class ProgressionCache:
    """Thread-safe in-memory cache of progressions keyed by track id."""

    def __init__(self, estimator: Optional[ChordEstimator] = None):
        self.estimator = estimator if estimator is not None else ChordEstimator()
        self._entries: Dict[str, ChordProgression] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, track_id: str) -> bool:
        with self._lock:
            return track_id in self._entries

    def get(self, track_id: str) -> Optional[ChordProgression]:
        with self._lock:
            return self._entries.get(track_id)

    def put(self, track_id: str, progression: ChordProgression) -> None:
        with self._lock:
            self._entries[track_id] = progression

    def invalidate(self, track_id: str) -> bool:
        """Drop one track. Returns True if it was cached."""
        with self._lock:
            removed = self._entries.pop(track_id, None) is not None
        if removed:
            logger.info("Invalidated cached progression for %s", track_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_or_estimate(
        self,
        track_id: str,
        source: AnalysisSource,
        estimator: Optional[ChordEstimator] = None,
    ) -> ChordProgression:
        """
        Return the cached progression or estimate and store it.

        Args:
            track_id: Track identifier
            source: Called on a miss to fetch (analysis, features)
            estimator: Used for this miss instead of the cache's own estimator

        Returns:
            ChordProgression for the track
        """
        cached = self.get(track_id)
        if cached is not None:
            logger.debug("Cache hit for %s", track_id)
            return cached

        logger.info("Cache miss for %s, estimating", track_id)
        analysis, features = source()
        progression = (estimator or self.estimator).estimate(analysis, features)

        with self._lock:
            # Another caller may have stored it while we were estimating
            return self._entries.setdefault(track_id, progression)
