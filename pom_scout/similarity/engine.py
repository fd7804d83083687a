"""Similarity engine for cross-page element comparison.

This module provides the weighted-checklist scorer for element pairs and
the comparator that enumerates cross-page pairs above a threshold.
"""

from collections.abc import Sequence

from ..models import ElementCharacteristics, ElementRecord, SimilarityResult
from ..scout_logging import get_logger

logger = get_logger()

# Fixed normalizing denominator: tag(3) + classes(2) + type + role + placeholder + text
TOTAL_CHECKS = 8

TAG_WEIGHT = 3
MAX_CLASS_POINTS = 2
ATTRIBUTE_POINTS = 1
TEXT_POINTS = 0.5

# Optional attributes compared for exact, non-empty equality
COMPARED_ATTRIBUTES = ("type", "role", "placeholder")


class SimilarityScorer:
    """Weighted checklist similarity between two element records.

    Every check contributes to a fixed denominator regardless of which
    attributes the elements carry, so scores stay comparable across
    element types.
    """

    def score(self, left: ElementRecord, right: ElementRecord) -> SimilarityResult:
        """Compute similarity between two records.

        Args:
            left: First record.
            right: Second record.

        Returns:
            SimilarityResult with a 0-100 score and the checks that fired.
        """
        points, matching = self.score_characteristics(
            left.characteristics, right.characteristics
        )
        similarity = min(100.0, points / TOTAL_CHECKS * 100)

        return SimilarityResult(
            left=left,
            right=right,
            score=round(similarity, 2),
            matching_attributes=matching,
        )

    def score_characteristics(
        self,
        char1: ElementCharacteristics,
        char2: ElementCharacteristics,
    ) -> tuple[float, list[str]]:
        """Raw checklist points and matching-attribute tags.

        Args:
            char1: Characteristics of the left element.
            char2: Characteristics of the right element.

        Returns:
            Tuple of (points, matching attribute tags).
        """
        points = 0.0
        matching: list[str] = []

        if char1.tag_name == char2.tag_name:
            points += TAG_WEIGHT
            matching.append("tagName")

        right_classes = set(char2.classes)
        common_classes = [
            cls for cls in dict.fromkeys(char1.classes) if cls in right_classes
        ]
        if common_classes:
            points += min(len(common_classes), MAX_CLASS_POINTS)
            matching.append(f"classes({', '.join(common_classes)})")

        for attr in COMPARED_ATTRIBUTES:
            value = getattr(char1, attr)
            if value and value == getattr(char2, attr):
                points += ATTRIBUTE_POINTS
                matching.append(attr)

        if self._text_matches(char1.text_content, char2.text_content):
            points += TEXT_POINTS
            matching.append("textContent")

        return points, matching

    def _text_matches(self, text1: str, text2: str) -> bool:
        """Case-insensitive equality or containment of non-empty texts."""
        if not text1 or not text2:
            return False
        text1 = text1.lower()
        text2 = text2.lower()
        return text1 == text2 or text1 in text2 or text2 in text1


class CrossPageComparator:
    """Enumerates cross-page element pairs and keeps the similar ones.

    Cost is quadratic in the number of records; callers bound the input
    (see NoiseFilter) for large sites.
    """

    def __init__(self, threshold: float, scorer: SimilarityScorer | None = None):
        """Initialize the comparator.

        Args:
            threshold: Minimum similarity percentage (0-100) to keep a pair.
            scorer: Optional scorer instance.
        """
        self.threshold = threshold
        self.scorer = scorer or SimilarityScorer()

    def compare(self, records: Sequence[ElementRecord]) -> list[SimilarityResult]:
        """Find similar element pairs across different pages.

        Args:
            records: Flat, ordered list of records from all pages.

        Returns:
            Results with score >= threshold, highest score first. Ties keep
            enumeration order.
        """
        logger.debug(f"Analyzing {len(records)} elements for similarities...")
        results: list[SimilarityResult] = []

        for i in range(len(records)):
            for j in range(i + 1, len(records)):
                if records[i].page_id == records[j].page_id:
                    continue

                result = self.scorer.score(records[i], records[j])
                if result.score >= self.threshold:
                    results.append(result)

        # list.sort is stable, so equal scores keep (i, j) order
        results.sort(key=lambda r: r.score, reverse=True)

        logger.info(
            f"Found {len(results)} similar element pairs above "
            f"{self.threshold}% similarity",
            extra={"pair_count": len(results)},
        )
        return results


__all__ = [
    "TOTAL_CHECKS",
    "SimilarityScorer",
    "CrossPageComparator",
]
