"""Chord templates - Reference pitch-class profiles for major and minor triads.

Each profile weights the chord tones by perceptual salience (root, third,
fifth) and adds two weak passing tones so that scale-neighbour energy does
not push a segment towards the wrong triad.
"""

import numpy as np
from typing import Dict, List, Optional
from dataclasses import dataclass

from ..core import PITCH_NAMES


@dataclass(frozen=True, eq=False)
class ChordTemplate:
    """A triad template rooted at a pitch class."""

    label: str  # e.g. "C", "F#m"
    root: int  # Root pitch class (0-11)
    is_minor: bool
    profile: np.ndarray  # 12-element weight vector

    @property
    def quality(self) -> str:
        return "minor" if self.is_minor else "major"


# Weights by interval above the root (semitones)
MAJOR_WEIGHTS = {0: 1.0, 4: 0.85, 7: 0.75, 2: 0.18, 9: 0.16}
MINOR_WEIGHTS = {0: 1.0, 3: 0.85, 7: 0.75, 2: 0.16, 10: 0.18}


def _profile(root: int, weights: Dict[int, float]) -> np.ndarray:
    profile = np.zeros(12)
    for interval, weight in weights.items():
        profile[(root + interval) % 12] = weight
    profile.setflags(write=False)
    return profile


def build_templates() -> List[ChordTemplate]:
    """
    Build the 24 triad templates.

    Returns:
        Major then minor template for each root from C to B
    """
    templates = []
    for root in range(12):
        name = PITCH_NAMES[root]
        templates.append(ChordTemplate(
            label=name,
            root=root,
            is_minor=False,
            profile=_profile(root, MAJOR_WEIGHTS),
        ))
        templates.append(ChordTemplate(
            label=f"{name}m",
            root=root,
            is_minor=True,
            profile=_profile(root, MINOR_WEIGHTS),
        ))
    return templates


CHORD_TEMPLATES = build_templates()

_BY_LABEL = {template.label: template for template in CHORD_TEMPLATES}


def template_for(label: str) -> Optional[ChordTemplate]:
    """Look up a template by chord label ("N" and unknown labels give None)."""
    return _BY_LABEL.get(label)
