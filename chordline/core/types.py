"""Data classes shared by every stage of the chord estimation pipeline."""

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class AnalysisSegment:
    """A short analysis window with its pitch-class energy vector."""

    start: float  # Start time in seconds
    duration: float  # Duration in seconds
    confidence: float  # Segmentation confidence (0-1)
    pitches: Tuple[float, ...] = field(default_factory=lambda: (0.0,) * 12)  # C..B

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass
class BarWindow:
    """One measure of the beat grid."""

    start: float
    duration: float
    confidence: float = 0.0

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass
class TrackAnalysis:
    """Segment and bar lists of a single track."""

    segments: List[AnalysisSegment] = field(default_factory=list)
    bars: List[BarWindow] = field(default_factory=list)

    @property
    def duration(self) -> float:
        """End of the last segment in seconds (0.0 without segments)."""
        if not self.segments:
            return 0.0
        return max(s.end for s in self.segments)


@dataclass
class TonalContext:
    """Global tonal features of a track.

    Out-of-range values mean "unknown": key outside 0-11, mode other than
    0 (minor) or 1 (major), non-finite tempo, time signature <= 0.
    """

    key: int = -1
    mode: int = -1
    tempo: float = math.nan
    time_signature: int = -1

    @property
    def has_key(self) -> bool:
        return 0 <= self.key <= 11

    @property
    def has_mode(self) -> bool:
        return self.mode in (0, 1)

    @property
    def tempo_bpm(self) -> Optional[float]:
        """Tempo in BPM, or None when unknown."""
        return self.tempo if math.isfinite(self.tempo) else None

    @property
    def beats_per_bar(self) -> Optional[int]:
        return self.time_signature if self.time_signature > 0 else None


@dataclass
class TimelineEntry:
    """A chord label held over a time span."""

    start: float
    end: float
    label: str

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class ChordProgression:
    """Final output: chord timeline plus summary strings and metadata."""

    timeline: List[TimelineEntry]
    compact_progression: str
    key_label: Optional[str] = None
    tempo_bpm: Optional[float] = None
    time_signature: Optional[int] = None

    @property
    def labels(self) -> List[str]:
        """Timeline labels in order."""
        return [entry.label for entry in self.timeline]

    @property
    def key_tempo_label(self) -> Optional[str]:
        """Header line such as 'A minor | 96 bpm'."""
        if self.key_label is None or self.tempo_bpm is None:
            return None
        return f"{self.key_label} | {int(self.tempo_bpm)} bpm"

    def _current_index(self, position: float) -> int:
        starts = [entry.start for entry in self.timeline]
        return max(bisect_right(starts, position) - 1, 0)

    def chord_at(self, position: float) -> Optional[TimelineEntry]:
        """
        Get the entry sounding at a playback position.

        Args:
            position: Playback position in seconds

        Returns:
            Last entry starting at or before the position, the first entry
            when the position precedes it, or None for an empty timeline.
        """
        if not self.timeline:
            return None
        return self.timeline[self._current_index(position)]

    def upcoming(self, position: float, count: int = 2) -> List[str]:
        """Labels of the next `count` entries after the one at `position`."""
        if not self.timeline:
            return []
        index = self._current_index(position)
        return [entry.label for entry in self.timeline[index + 1:index + 1 + count]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "timeline": [
                {"start": entry.start, "end": entry.end, "label": entry.label}
                for entry in self.timeline
            ],
            "compact_progression": self.compact_progression,
            "key_label": self.key_label,
            "tempo_bpm": self.tempo_bpm,
            "time_signature": self.time_signature,
        }
