"""Element similarity package.

This package provides pairwise similarity scoring, cross-page
comparison and grouping of recurring elements.
"""

from .clustering import (
    FallbackGrouper,
    GroupingEngine,
    grouping_key,
    merge_group,
    semantic_key,
)
from .engine import TOTAL_CHECKS, CrossPageComparator, SimilarityScorer

__all__ = [
    # Engine
    "TOTAL_CHECKS",
    "SimilarityScorer",
    "CrossPageComparator",
    # Clustering
    "GroupingEngine",
    "FallbackGrouper",
    "grouping_key",
    "merge_group",
    "semantic_key",
]
