"""Bar alignment - Snap chord runs to the beat grid."""

import logging
from typing import Dict, List, Sequence

from ..core import BarWindow, TimelineEntry, NO_CHORD
from ..core.constants import MIN_BARS_FOR_ALIGNMENT
from ..inference.chords import PredictedChord

logger = logging.getLogger(__name__)


def overlap_seconds(a_start: float, a_end: float, b_start: float, b_end: float) -> float:
    """Length of the intersection of two time spans (0.0 if disjoint)."""
    return max(0.0, min(a_end, b_end) - max(a_start, b_start))


class BarAligner:
    """Re-bucket chord runs onto bar boundaries and collapse repeats."""

    def __init__(self, min_bars: int = MIN_BARS_FOR_ALIGNMENT):
        """
        Initialize BarAligner.

        Args:
            min_bars: Fewer bars than this leave the runs unaligned
        """
        self.min_bars = min_bars

    def align(
        self,
        bars: Sequence[BarWindow],
        runs: List[PredictedChord],
    ) -> List[TimelineEntry]:
        """
        Build a timeline from chord runs, one entry per bar when possible.

        Each bar takes the label with the largest score-weighted overlap.
        A bar that resolves to "N" keeps the previous bar's chord instead.

        Args:
            bars: Beat-grid bars in any order
            runs: Merged chord runs in time order

        Returns:
            Timeline entries (not yet collapsed)
        """
        if len(bars) < self.min_bars:
            return [TimelineEntry(run.start, run.end, run.label) for run in runs]

        if not runs:
            return []

        aligned = []
        last_label = runs[0].label

        for bar in sorted(bars, key=lambda b: b.start):
            bar_start = bar.start
            bar_end = bar.start + max(bar.duration, 0.0)

            label = self._vote(bar_start, bar_end, runs)
            if label == NO_CHORD and last_label != NO_CHORD:
                label = last_label
            last_label = label

            aligned.append(TimelineEntry(bar_start, bar_end, label))

        logger.debug("Aligned %d runs onto %d bars", len(runs), len(bars))
        return aligned

    def _vote(self, bar_start: float, bar_end: float, runs: List[PredictedChord]) -> str:
        """Label with the highest overlap x score; first seen wins ties."""
        weight_by_label: Dict[str, float] = {}
        for run in runs:
            overlap = overlap_seconds(bar_start, bar_end, run.start, run.end)
            if overlap <= 0.0:
                continue
            weight_by_label[run.label] = weight_by_label.get(run.label, 0.0) + overlap * run.score

        best_label = NO_CHORD
        best_weight = 0.0
        for label, weight in weight_by_label.items():
            if weight > best_weight:
                best_weight = weight
                best_label = label
        return best_label

    def collapse(self, timeline: List[TimelineEntry]) -> List[TimelineEntry]:
        """Merge adjacent entries that carry the same label."""
        collapsed: List[TimelineEntry] = []
        for entry in timeline:
            if collapsed and collapsed[-1].label == entry.label:
                previous = collapsed[-1]
                collapsed[-1] = TimelineEntry(previous.start, entry.end, previous.label)
            else:
                collapsed.append(TimelineEntry(entry.start, entry.end, entry.label))
        return collapsed
