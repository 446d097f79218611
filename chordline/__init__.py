"""chordline - Chord progression timelines from segment analysis.

Architecture Layers:
    1. core/        - Data types and constants
    2. input/       - Analysis and feature documents (JSON)
    3. inference/   - Harmonic understanding (templates, key context, classification)
    4. processing/  - Run merging, gap bridging, bar alignment
    5. output/      - Export (JSON report, MIDI)
"""

__version__ = "0.3.0"

# Core types
from .core import (
    AnalysisSegment,
    BarWindow,
    TrackAnalysis,
    TonalContext,
    TimelineEntry,
    ChordProgression,
)

# Input layer
from .input import AnalysisLoader

# Inference layer
from .inference import SegmentClassifier, PredictedChord, CHORD_TEMPLATES

# Processing layer
from .processing import RunMerger, BarAligner

# Pipeline
from .estimator import ChordEstimator, EstimatorConfig, estimate_progression
from .cache import ProgressionCache

# Output layer
from .output import MIDIExporter, JSONExporter

__all__ = [
    # Core
    "AnalysisSegment",
    "BarWindow",
    "TrackAnalysis",
    "TonalContext",
    "TimelineEntry",
    "ChordProgression",
    # Input
    "AnalysisLoader",
    # Inference
    "SegmentClassifier",
    "PredictedChord",
    "CHORD_TEMPLATES",
    # Processing
    "RunMerger",
    "BarAligner",
    # Pipeline
    "ChordEstimator",
    "EstimatorConfig",
    "estimate_progression",
    "ProgressionCache",
    # Output
    "MIDIExporter",
    "JSONExporter",
]
