"""Input layer - Analysis and feature documents."""

from .loader import (
    AnalysisLoader,
    parse_analysis,
    parse_features,
    parse_features_batch,
)

__all__ = [
    "AnalysisLoader",
    "parse_analysis",
    "parse_features",
    "parse_features_batch",
]
