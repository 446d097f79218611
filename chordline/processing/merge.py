"""Run merging - Join segment predictions into chord runs.

Two passes over the time-sorted predictions:
- Merge: adjacent predictions with the same label separated by a small gap
  become one run (absorbs segmentation jitter at chord boundaries)
- Bridge: a short no-chord run between two runs of the same chord is
  treated as a dropout and absorbed into the surrounding chord
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Tuple, Union

from ..core.constants import MERGE_GAP, MAX_BRIDGE_GAP
from ..inference.chords import PredictedChord

logger = logging.getLogger(__name__)


@dataclass
class MergeStats:
    """Statistics from the merge and bridge passes."""

    original_count: int = 0
    merged_count: int = 0
    bridged_gaps: int = 0
    final_count: int = 0

    @property
    def total_removed(self) -> int:
        """Predictions absorbed into other runs."""
        return self.original_count - self.final_count


class RunMerger:
    """Merge predicted chords into clean, ordered runs."""

    def __init__(
        self,
        merge_gap: float = MERGE_GAP,
        max_bridge_gap: float = MAX_BRIDGE_GAP,
    ):
        """
        Initialize RunMerger.

        Args:
            merge_gap: Largest gap between same-label predictions to merge (seconds)
            max_bridge_gap: Longest no-chord run that may be bridged (seconds)
        """
        self.merge_gap = merge_gap
        self.max_bridge_gap = max_bridge_gap

    def merge(
        self,
        predictions: List[PredictedChord],
        return_stats: bool = False,
    ) -> Union[List[PredictedChord], Tuple[List[PredictedChord], MergeStats]]:
        """
        Merge and bridge predictions.

        Args:
            predictions: Predictions in any order
            return_stats: Whether to return merge statistics

        Returns:
            Ordered, non-overlapping runs, optionally with statistics
        """
        stats = MergeStats(original_count=len(predictions))

        runs = self.merge_runs(predictions)
        stats.merged_count = stats.original_count - len(runs)

        bridged = self.bridge_gaps(runs)
        stats.bridged_gaps = (len(runs) - len(bridged)) // 2
        stats.final_count = len(bridged)

        logger.debug(
            "Merged %d predictions into %d runs (%d gaps bridged)",
            stats.original_count, stats.final_count, stats.bridged_gaps,
        )

        if return_stats:
            return bridged, stats
        return bridged

    def merge_runs(self, predictions: List[PredictedChord]) -> List[PredictedChord]:
        """Join same-label predictions separated by at most merge_gap."""
        merged: List[PredictedChord] = []

        for prediction in sorted(predictions, key=lambda p: p.start):
            previous = merged[-1] if merged else None
            if (previous is not None
                    and previous.label == prediction.label
                    and prediction.start - previous.end <= self.merge_gap):
                merged[-1] = replace(
                    previous,
                    end=max(previous.end, prediction.end),
                    score=max(previous.score, prediction.score),
                )
            else:
                merged.append(prediction)

        return merged

    def bridge_gaps(self, runs: List[PredictedChord]) -> List[PredictedChord]:
        """
        Absorb short no-chord runs enclosed by the same chord.

        Single left-to-right scan: after a bridge the scan skips past the
        consumed run and does not revisit the extended one.
        """
        cleaned: List[PredictedChord] = []
        index = 0

        while index < len(runs):
            current = runs[index]
            following = runs[index + 1] if index + 1 < len(runs) else None
            previous = cleaned[-1] if cleaned else None

            if (current.is_no_chord
                    and current.duration <= self.max_bridge_gap
                    and previous is not None
                    and following is not None
                    and previous.label == following.label
                    and not previous.is_no_chord):
                cleaned[-1] = replace(previous, end=following.end)
                index += 2
                continue

            cleaned.append(current)
            index += 1

        return cleaned
