"""JSON report export."""

import json
from pathlib import Path

from ..core import ChordProgression


class JSONExporter:
    """Write a progression as a JSON document."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_json(self, progression: ChordProgression) -> str:
        return json.dumps(progression.to_dict(), indent=self.indent)

    def export(self, progression: ChordProgression, output_path: str) -> None:
        """Write the report, creating parent directories as needed."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(progression) + "\n", encoding="utf-8")
