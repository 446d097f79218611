"""Processing layer - Run-level post-processing of chord predictions.

This layer refines classified segments:
- Run merging (join same-label neighbours)
- Gap bridging (absorb short no-chord dropouts)
- Bar alignment (weighted overlap voting per bar)
- Collapsing repeated labels
"""

from .merge import RunMerger, MergeStats
from .align import BarAligner, overlap_seconds

__all__ = [
    "RunMerger",
    "MergeStats",
    "BarAligner",
    "overlap_seconds",
]
