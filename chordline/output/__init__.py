"""Output layer - Export estimated progressions.

This layer handles exporting chord progressions to:
- JSON reports (timeline, summary, metadata)
- MIDI files (block triads per timeline entry)
"""

from .midi import MIDIExporter
from .report import JSONExporter

__all__ = [
    "MIDIExporter",
    "JSONExporter",
]
