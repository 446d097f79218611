"""Analysis loading - Read segment analysis and tonal features from JSON."""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core import AnalysisSegment, BarWindow, TonalContext, TrackAnalysis

logger = logging.getLogger(__name__)

PITCH_BINS = 12


def _number(data: Dict[str, Any], name: str, default: float) -> float:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _integer(data: Dict[str, Any], name: str, default: int) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return int(value)


def _pitches(raw: Any) -> tuple:
    """Truncate or zero-pad a pitch array to 12 bins."""
    if not isinstance(raw, list):
        raw = []
    values = []
    for value in raw[:PITCH_BINS]:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            values.append(float(value))
        else:
            values.append(0.0)
    values.extend([0.0] * (PITCH_BINS - len(values)))
    return tuple(values)


def _objects(data: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    raw = data.get(name)
    if not isinstance(raw, list):
        return []
    items = [item for item in raw if isinstance(item, dict)]
    if len(items) != len(raw):
        logger.warning("Skipped %d malformed entries in '%s'", len(raw) - len(items), name)
    return items


def parse_analysis(data: Dict[str, Any]) -> TrackAnalysis:
    """
    Build a TrackAnalysis from a decoded audio-analysis document.

    Missing numbers default to 0.0, missing lists to empty.
    """
    bars = [
        BarWindow(
            start=_number(item, "start", 0.0),
            duration=_number(item, "duration", 0.0),
            confidence=_number(item, "confidence", 0.0),
        )
        for item in _objects(data, "bars")
    ]
    segments = [
        AnalysisSegment(
            start=_number(item, "start", 0.0),
            duration=_number(item, "duration", 0.0),
            confidence=_number(item, "confidence", 0.0),
            pitches=_pitches(item.get("pitches")),
        )
        for item in _objects(data, "segments")
    ]
    return TrackAnalysis(segments=segments, bars=bars)


def parse_features(data: Dict[str, Any]) -> TonalContext:
    """Build a TonalContext, using the unknown sentinels for missing fields."""
    return TonalContext(
        key=_integer(data, "key", -1),
        mode=_integer(data, "mode", -1),
        tempo=_number(data, "tempo", math.nan),
        time_signature=_integer(data, "time_signature", -1),
    )


def parse_features_batch(data: Dict[str, Any]) -> Dict[str, TonalContext]:
    """Parse a batch response ({"audio_features": [...]}) keyed by track id."""
    features = {}
    for item in _objects(data, "audio_features"):
        track_id = item.get("id")
        if not isinstance(track_id, str) or not track_id.strip():
            continue
        features[track_id] = parse_features(item)
    return features


class AnalysisLoader:
    """Handles loading analysis and feature documents from disk."""

    SUPPORTED_FORMATS = {".json"}

    def _read(self, path: str) -> Dict[str, Any]:
        """
        Read a JSON object from a file.

        Raises:
            ValueError: If format not supported or content is not a JSON object
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Analysis file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path}")

        return data

    def load_analysis(self, path: str) -> TrackAnalysis:
        """Load segments and bars of a track."""
        analysis = parse_analysis(self._read(path))
        logger.info(
            "Loaded %d segments and %d bars from %s",
            len(analysis.segments), len(analysis.bars), path,
        )
        return analysis

    def load_features(self, path: str) -> TonalContext:
        """Load the tonal features of a track."""
        return parse_features(self._read(path))

    def load(self, analysis_path: str, features_path: Optional[str] = None):
        """
        Load analysis and optional features.

        Returns:
            Tuple of (TrackAnalysis, TonalContext or None)
        """
        analysis = self.load_analysis(analysis_path)
        features = self.load_features(features_path) if features_path else None
        return analysis, features
