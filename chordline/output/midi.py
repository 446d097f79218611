"""MIDI export of chord timelines."""

import pretty_midi
from typing import List, Optional
from pathlib import Path

from ..core import ChordProgression
from ..inference import template_for

DEFAULT_TEMPO = 120.0


class MIDIExporter:
    """Render a chord timeline as block triads."""

    def __init__(
        self,
        tempo: Optional[float] = None,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
        base_octave: int = 3,
        velocity: int = 80,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM (default: the progression's tempo, else 120)
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            base_octave: Octave of the chord roots (3 puts C at MIDI 48)
            velocity: MIDI velocity of every chord tone
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.base_octave = base_octave
        self.velocity = velocity

    def chord_pitches(self, label: str) -> List[int]:
        """MIDI pitches of a triad label, empty for "N" or unknown labels."""
        template = template_for(label)
        if template is None:
            return []
        root = (self.base_octave + 1) * 12 + template.root
        third = 3 if template.is_minor else 4
        return [root, root + third, root + 7]

    def progression_to_pretty_midi(self, progression: ChordProgression) -> pretty_midi.PrettyMIDI:
        """Convert a progression to a PrettyMIDI object without saving."""
        tempo = next(
            (t for t in (self.tempo, progression.tempo_bpm) if t is not None and t > 0),
            DEFAULT_TEMPO,
        )
        midi = pretty_midi.PrettyMIDI(initial_tempo=tempo)

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )

        for entry in progression.timeline:
            if entry.end <= entry.start:
                continue
            for pitch in self.chord_pitches(entry.label):
                instrument.notes.append(pretty_midi.Note(
                    velocity=self.velocity,
                    pitch=pitch,
                    start=entry.start,
                    end=entry.end,
                ))

        midi.instruments.append(instrument)
        return midi

    def export(self, progression: ChordProgression, output_path: str) -> None:
        """
        Export a progression to a MIDI file.

        Args:
            progression: Estimated chord progression
            output_path: Path to output MIDI file
        """
        midi = self.progression_to_pretty_midi(progression)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))
