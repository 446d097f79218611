"""Global constants for chordline."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# No-chord label
NO_CHORD = "N"

# Segment classification
MIN_SEGMENT_DURATION = 0.12  # seconds
MIN_SCORE = 0.35
MIN_MARGIN = 0.03

# Run merging
MERGE_GAP = 0.15  # seconds
MAX_BRIDGE_GAP = 0.8  # seconds

# Bar alignment
MIN_BARS_FOR_ALIGNMENT = 4

# Summary strings
NO_CHORD_DATA_MESSAGE = "No chord data available."
NO_PROGRESSION_MESSAGE = "No stable chord progression detected."
COMPACT_SEPARATOR = " | "
