"""Key context - Diatonic scoring and key labels from tonal features."""

from typing import Optional

from ..core import PITCH_NAMES, TonalContext
from .templates import ChordTemplate

# Triad roots (scale degrees) that are diatonic in each mode
MAJOR_KEY_MAJOR_DEGREES = frozenset({0, 5, 7})   # I, IV, V
MAJOR_KEY_MINOR_DEGREES = frozenset({2, 4, 9})   # ii, iii, vi
MINOR_KEY_MINOR_DEGREES = frozenset({0, 5, 7})   # i, iv, v
MINOR_KEY_MAJOR_DEGREES = frozenset({3, 8, 10})  # III, VI, VII

IN_SCALE_BONUS = 0.04
OUT_OF_SCALE_PENALTY = -0.01

MODE_NAMES = {1: "major", 0: "minor"}


def is_diatonic(template: ChordTemplate, key: int, mode: int) -> bool:
    """Check whether a triad is built on a diatonic root of the key."""
    if mode not in MODE_NAMES:
        return False
    degree = (template.root - key + 12) % 12
    if mode == 1:
        degrees = MAJOR_KEY_MINOR_DEGREES if template.is_minor else MAJOR_KEY_MAJOR_DEGREES
    else:
        degrees = MINOR_KEY_MINOR_DEGREES if template.is_minor else MINOR_KEY_MAJOR_DEGREES
    return degree in degrees


def diatonic_bias(template: ChordTemplate, key: int, mode: int) -> float:
    """
    Score adjustment for a template in the context of a key.

    Args:
        template: Candidate chord template
        key: Tonic pitch class (0-11), anything else is unknown
        mode: 1 for major, 0 for minor, anything else is unknown

    Returns:
        0.0 for an unknown key or mode, otherwise a small bonus for
        diatonic triads and a smaller penalty for the rest
    """
    if not 0 <= key <= 11 or mode not in MODE_NAMES:
        return 0.0
    return IN_SCALE_BONUS if is_diatonic(template, key, mode) else OUT_OF_SCALE_PENALTY


def format_key_label(features: Optional[TonalContext], short: bool = False) -> Optional[str]:
    """
    Format the key of a track, e.g. "C# minor".

    Args:
        features: Tonal features, may be None
        short: Use "maj"/"min" abbreviations (search listings)

    Returns:
        Key label, or None when the key is unknown
    """
    if features is None or not features.has_key:
        return None
    note = PITCH_NAMES[features.key]
    if short:
        return f"{note} {'maj' if features.mode == 1 else 'min'}"
    return f"{note} {MODE_NAMES.get(features.mode, 'unknown mode')}"
