"""Inference layer - Harmonic understanding of analysis segments.

This layer turns pitch-class vectors into chord labels:
- Candidate model (24 major/minor triad templates)
- Key context (diatonic bias, key labels)
- Segment classification with score and margin thresholds

Pipeline: Segments → [Templates, Key] → Predicted chords
"""

from .templates import ChordTemplate, CHORD_TEMPLATES, build_templates, template_for
from .key import diatonic_bias, is_diatonic, format_key_label
from .chords import SegmentClassifier, PredictedChord, cosine_similarity, normalize

__all__ = [
    # Candidate model
    "ChordTemplate",
    "CHORD_TEMPLATES",
    "build_templates",
    "template_for",
    # Key context
    "diatonic_bias",
    "is_diatonic",
    "format_key_label",
    # Classification
    "SegmentClassifier",
    "PredictedChord",
    "cosine_similarity",
    "normalize",
]
