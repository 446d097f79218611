"""Chord classification - Label analysis segments with triads.

Implements per-segment template matching with:
- Cosine similarity against 24 major/minor triad profiles
- Diatonic bias from the track key (when known)
- Confidence weighting that down-weights but never zeroes a segment
- Absolute score and best-vs-runner-up margin tests before accepting a label
"""

import logging
import numpy as np
from typing import Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..core import AnalysisSegment, NO_CHORD
from ..core.constants import MIN_SEGMENT_DURATION, MIN_SCORE, MIN_MARGIN
from .templates import ChordTemplate, CHORD_TEMPLATES
from .key import diatonic_bias

logger = logging.getLogger(__name__)


@dataclass
class PredictedChord:
    """A provisional chord label over a time span."""

    start: float
    end: float
    label: str  # Chord label or "N"
    score: float = 0.0

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def is_no_chord(self) -> bool:
        return self.label == NO_CHORD


def normalize(values: Sequence[float]) -> Optional[np.ndarray]:
    """Scale a vector to unit L2 norm, None for an all-zero vector."""
    vector = np.asarray(values, dtype=float)
    norm = np.sqrt(np.sum(vector * vector))
    if norm == 0.0:
        return None
    return vector / norm


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity, 0.0 when either vector is all zeros."""
    norm_a = np.sqrt(np.dot(a, a))
    norm_b = np.sqrt(np.dot(b, b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


class SegmentClassifier:
    """Classify analysis segments against the triad templates.

    A segment is labelled with the best-scoring template only when the
    score is high enough in absolute terms and clearly ahead of the
    runner-up; otherwise it becomes "N".
    """

    CONFIDENCE_FLOOR = 0.7
    CONFIDENCE_WEIGHT = 0.3

    def __init__(
        self,
        min_segment_duration: float = MIN_SEGMENT_DURATION,
        min_score: float = MIN_SCORE,
        min_margin: float = MIN_MARGIN,
        templates: Optional[List[ChordTemplate]] = None,
    ):
        """
        Initialize SegmentClassifier.

        Args:
            min_segment_duration: Segments shorter than this are skipped (seconds)
            min_score: Minimum weighted score to accept a chord label
            min_margin: Minimum lead of the best score over the second best
            templates: Candidate templates (defaults to the 24 triads)
        """
        self.min_segment_duration = min_segment_duration
        self.min_score = min_score
        self.min_margin = min_margin
        self.templates = templates if templates is not None else CHORD_TEMPLATES

    def classify(
        self,
        segments: Iterable[AnalysisSegment],
        key: int = -1,
        mode: int = -1,
    ) -> List[PredictedChord]:
        """
        Predict a chord label for each usable segment.

        Args:
            segments: Analysis segments in any order
            key: Tonic pitch class, out of range when unknown
            mode: 1 major, 0 minor, anything else unknown

        Returns:
            One PredictedChord per segment that passes the duration and
            silence filters, in input order
        """
        predictions = []
        skipped = 0

        for segment in segments:
            prediction = self.classify_segment(segment, key, mode)
            if prediction is None:
                skipped += 1
                continue
            predictions.append(prediction)

        logger.debug(
            "Classified %d segments (%d skipped)", len(predictions), skipped
        )
        return predictions

    def classify_segment(
        self,
        segment: AnalysisSegment,
        key: int = -1,
        mode: int = -1,
    ) -> Optional[PredictedChord]:
        """Classify one segment, None when it is too short or silent."""
        if segment.duration < self.min_segment_duration:
            return None

        normalized = normalize(segment.pitches)
        if normalized is None:
            return None

        best, best_score, second_score = self._rank_templates(
            normalized, segment.confidence, key, mode
        )

        if best is not None and self.is_confident(best_score, second_score):
            label = best.label
        else:
            label = NO_CHORD

        return PredictedChord(
            start=segment.start,
            end=segment.start + segment.duration,
            label=label,
            score=max(best_score, 0.0),
        )

    def _rank_templates(
        self,
        normalized: np.ndarray,
        confidence: float,
        key: int,
        mode: int,
    ) -> Tuple[Optional[ChordTemplate], float, float]:
        """
        Score all templates and keep the two best.

        Returns:
            (best template, best score, second best score)
        """
        weight = self.CONFIDENCE_FLOOR + self.CONFIDENCE_WEIGHT * min(max(confidence, 0.0), 1.0)

        best = None
        best_score = float("-inf")
        second_score = float("-inf")

        for template in self.templates:
            score = cosine_similarity(normalized, template.profile)
            score += diatonic_bias(template, key, mode)
            score *= weight

            if score > best_score:
                second_score = best_score
                best_score = score
                best = template
            elif score > second_score:
                second_score = score

        return best, best_score, second_score

    def is_confident(self, best_score: float, second_score: float) -> bool:
        """Accept only a high and clearly separated best score."""
        return (
            best_score >= self.min_score
            and best_score - second_score >= self.min_margin
        )
