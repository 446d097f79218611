"""Core types and constants for chordline."""

from .types import (
    AnalysisSegment,
    BarWindow,
    TrackAnalysis,
    TonalContext,
    TimelineEntry,
    ChordProgression,
)
from .constants import (
    PITCH_NAMES,
    NO_CHORD,
    NO_CHORD_DATA_MESSAGE,
    NO_PROGRESSION_MESSAGE,
)

__all__ = [
    "AnalysisSegment",
    "BarWindow",
    "TrackAnalysis",
    "TonalContext",
    "TimelineEntry",
    "ChordProgression",
    "PITCH_NAMES",
    "NO_CHORD",
    "NO_CHORD_DATA_MESSAGE",
    "NO_PROGRESSION_MESSAGE",
]
