"""Chord estimation pipeline.

Stages:
    1. Candidate model   - 24 triad templates (built once at import)
    2. Classification    - one provisional label per usable segment
    3. Merging           - chord runs with short no-chord dropouts bridged
    4. Alignment         - bar-level voting, then collapse of repeated labels

Every stage is a pure function of its inputs; an estimator holds only its
configuration and may be shared between threads.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .core import (
    ChordProgression,
    TimelineEntry,
    TonalContext,
    TrackAnalysis,
    NO_CHORD,
    NO_CHORD_DATA_MESSAGE,
    NO_PROGRESSION_MESSAGE,
)
from .core.constants import (
    COMPACT_SEPARATOR,
    MAX_BRIDGE_GAP,
    MERGE_GAP,
    MIN_BARS_FOR_ALIGNMENT,
    MIN_MARGIN,
    MIN_SCORE,
    MIN_SEGMENT_DURATION,
)
from .inference import SegmentClassifier, format_key_label
from .processing import BarAligner, RunMerger

logger = logging.getLogger(__name__)


@dataclass
class EstimatorConfig:
    """Configuration for chord estimation.

    Attributes:
        min_segment_duration: Shortest segment that is classified (default: 0.12)
        min_score: Minimum weighted template score for a label (default: 0.35)
        min_margin: Minimum lead over the runner-up template (default: 0.03)
        merge_gap: Largest gap joined between same-label runs (default: 0.15)
        max_bridge_gap: Longest no-chord dropout that is bridged (default: 0.8)
        min_bars: Bars required before bar alignment runs (default: 4)
        use_bars: Align to bars at all (default: True)
    """

    min_segment_duration: float = MIN_SEGMENT_DURATION
    min_score: float = MIN_SCORE
    min_margin: float = MIN_MARGIN
    merge_gap: float = MERGE_GAP
    max_bridge_gap: float = MAX_BRIDGE_GAP
    min_bars: int = MIN_BARS_FOR_ALIGNMENT
    use_bars: bool = True

    def __post_init__(self) -> None:
        for name in ("min_segment_duration", "min_margin", "merge_gap", "max_bridge_gap"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.min_bars < 1:
            raise ValueError(f"min_bars must be at least 1, got {self.min_bars}")


class ChordEstimator:
    """Estimate a chord progression from segment analysis and tonal features."""

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config if config is not None else EstimatorConfig()
        self.classifier = SegmentClassifier(
            min_segment_duration=self.config.min_segment_duration,
            min_score=self.config.min_score,
            min_margin=self.config.min_margin,
        )
        self.merger = RunMerger(
            merge_gap=self.config.merge_gap,
            max_bridge_gap=self.config.max_bridge_gap,
        )
        self.aligner = BarAligner(min_bars=self.config.min_bars)

    def estimate(
        self,
        analysis: TrackAnalysis,
        features: Optional[TonalContext] = None,
    ) -> ChordProgression:
        """
        Run the full pipeline.

        Args:
            analysis: Segments and bars of the track
            features: Optional key, mode, tempo and time signature

        Returns:
            ChordProgression with collapsed timeline and summary strings
        """
        key_label = format_key_label(features)
        tempo_bpm = features.tempo_bpm if features is not None else None
        time_signature = features.beats_per_bar if features is not None else None

        if not analysis.segments:
            logger.debug("No segments, returning metadata only")
            return ChordProgression(
                timeline=[],
                compact_progression=NO_CHORD_DATA_MESSAGE,
                key_label=key_label,
                tempo_bpm=tempo_bpm,
                time_signature=time_signature,
            )

        key = features.key if features is not None else -1
        mode = features.mode if features is not None else -1

        predicted = self.classifier.classify(analysis.segments, key=key, mode=mode)
        runs = self.merger.merge(predicted)

        bars = analysis.bars if self.config.use_bars else []
        timeline = self.aligner.collapse(self.aligner.align(bars, runs))

        logger.debug(
            "Estimated %d timeline entries from %d segments",
            len(timeline), len(analysis.segments),
        )

        return ChordProgression(
            timeline=timeline,
            compact_progression=compact_progression(timeline),
            key_label=key_label,
            tempo_bpm=tempo_bpm,
            time_signature=time_signature,
        )


def compact_progression(timeline: List[TimelineEntry]) -> str:
    """Join the chord labels of a collapsed timeline, skipping "N"."""
    labels = [entry.label for entry in timeline if entry.label != NO_CHORD]
    if not labels:
        return NO_PROGRESSION_MESSAGE
    return COMPACT_SEPARATOR.join(labels)


def estimate_progression(
    analysis: TrackAnalysis,
    features: Optional[TonalContext] = None,
) -> ChordProgression:
    """Estimate with the default configuration."""
    return ChordEstimator().estimate(analysis, features)
