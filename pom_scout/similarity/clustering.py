"""Grouping of similar cross-page elements.

This module folds pairwise similarity results into keyed groups of
recurring elements, and provides a coarser multi-page grouping used when
pairwise similarity finds nothing.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from ..locators.classifier import LocatorClassifier
from ..locators.patterns import meaningful_class_family
from ..models import (
    ElementRecord,
    GroupedElement,
    Recommendation,
    SimilarityResult,
)
from ..naming import NameSynthesizer
from ..scout_logging import get_logger

logger = get_logger()

GroupingKey = tuple[str, str, str, str]

# Landmark tags that recur on every page of a typical site
FALLBACK_LANDMARK_TAGS = ("nav", "header", "footer", "main", "aside")

# Class families recognized by fallback grouping
FALLBACK_CLASS_FAMILIES = ("search", "toggle", "theme")


def grouping_key(record: ElementRecord) -> GroupingKey:
    """Coarse structural fingerprint deciding which records group together.

    Args:
        record: Element record.

    Returns:
        Tuple of (tag, type or "none", role or "none", first two classes).
    """
    char = record.characteristics
    return (
        char.tag_name,
        char.type or "none",
        char.role or "none",
        "-".join(char.classes[:2]),
    )


def merge_group(group: GroupedElement, result: SimilarityResult) -> GroupedElement:
    """Fold another similarity result into an existing group.

    The right-hand page and selector are appended only when the page is
    new to the group, and confidence only ever rises. Locator, name and
    recommendation keep their first-seen values.

    Args:
        group: Existing group.
        result: Similarity result sharing the group's key.

    Returns:
        A new GroupedElement; the input group is not modified.
    """
    pages = list(group.pages)
    selectors = list(group.selectors)
    if result.right.page_id not in pages:
        pages.append(result.right.page_id)
        selectors.append(result.right.selector)

    return replace(
        group,
        pages=pages,
        selectors=selectors,
        confidence=max(group.confidence, result.score),
    )


class GroupingEngine:
    """Clusters similarity results into canonical element groups."""

    def __init__(
        self,
        classifier: LocatorClassifier | None = None,
        synthesizer: NameSynthesizer | None = None,
    ):
        """Initialize the grouping engine.

        Args:
            classifier: Locator classifier for new groups.
            synthesizer: Name synthesizer for new groups.
        """
        self.classifier = classifier or LocatorClassifier()
        self.synthesizer = synthesizer or NameSynthesizer()

    def create_group(self, result: SimilarityResult) -> GroupedElement:
        """Start a group from the first result seen for a key."""
        left = result.left
        return GroupedElement(
            locator=self.classifier.best_locator(left),
            name=self.synthesizer.suggest_name(left),
            element_type=left.tag_name,
            recommendation=self.classifier.recommend(left),
            confidence=result.score,
            common_attributes=list(result.matching_attributes),
            pages=[left.page_id, result.right.page_id],
            selectors=[left.selector, result.right.selector],
        )

    def group(self, results: Iterable[SimilarityResult]) -> list[GroupedElement]:
        """Group similarity results by structural key.

        Args:
            results: Similarity results, normally sorted by score.

        Returns:
            Groups sorted by confidence, highest first.
        """
        groups: dict[GroupingKey, GroupedElement] = {}

        for result in results:
            key = grouping_key(result.left)
            existing = groups.get(key)
            if existing is None:
                groups[key] = self.create_group(result)
            else:
                groups[key] = merge_group(existing, result)

        grouped = sorted(groups.values(), key=lambda g: g.confidence, reverse=True)
        logger.debug(f"Grouped similarity results into {len(grouped)} elements")
        return grouped


def semantic_key(record: ElementRecord) -> str | None:
    """Coarse semantic key used by fallback grouping.

    Args:
        record: Element record.

    Returns:
        ``testid:<value>``, ``role:<role>``, ``tag:<landmark>`` or
        ``class:<family>``, or None when the element has no such anchor.
    """
    char = record.characteristics
    test_id = char.test_id
    if test_id:
        return f"testid:{test_id[1]}"
    if char.role:
        return f"role:{char.role}"
    if char.tag_name in FALLBACK_LANDMARK_TAGS:
        return f"tag:{char.tag_name}"
    for token in char.classes:
        family = meaningful_class_family(token)
        if family in FALLBACK_CLASS_FAMILIES:
            return f"class:{family}"
        if "search" in token.lower():
            return "class:search"
    return None


@dataclass
class _Occurrence:
    """First record seen for a semantic key, plus per-page selectors."""

    representative: ElementRecord
    pages: list[str] = field(default_factory=list)
    selectors: list[str] = field(default_factory=list)


class FallbackGrouper:
    """Multi-page recurrence grouping for when similarity finds no pairs.

    Groups elements by a coarse semantic key and keeps keys that appear on
    at least ``min_pages`` distinct pages.
    """

    def __init__(
        self,
        confidence: float,
        min_pages: int = 2,
        classifier: LocatorClassifier | None = None,
        synthesizer: NameSynthesizer | None = None,
    ):
        """Initialize the fallback grouper.

        Args:
            confidence: Fixed confidence assigned to every fallback group.
            min_pages: Minimum number of distinct pages for a group.
            classifier: Locator classifier.
            synthesizer: Name synthesizer.
        """
        self.confidence = confidence
        self.min_pages = min_pages
        self.classifier = classifier or LocatorClassifier()
        self.synthesizer = synthesizer or NameSynthesizer()

    def group(self, records: Sequence[ElementRecord]) -> list[GroupedElement]:
        """Group records recurring across pages.

        Args:
            records: Records from all pages.

        Returns:
            Groups sorted by page count, highest first, ties in order of
            first appearance.
        """
        occurrences: dict[str, _Occurrence] = {}

        for record in records:
            key = semantic_key(record)
            if key is None:
                continue
            occurrence = occurrences.setdefault(key, _Occurrence(representative=record))
            if record.page_id not in occurrence.pages:
                occurrence.pages.append(record.page_id)
                occurrence.selectors.append(record.selector)

        groups = [
            self._build_group(key, occurrence)
            for key, occurrence in occurrences.items()
            if len(occurrence.pages) >= self.min_pages
        ]
        groups.sort(key=lambda g: g.page_count, reverse=True)

        logger.info(f"Fallback grouping found {len(groups)} multi-page elements")
        return groups

    def _build_group(self, key: str, occurrence: _Occurrence) -> GroupedElement:
        representative = occurrence.representative
        return GroupedElement(
            locator=self.classifier.best_locator(representative),
            name=self.synthesizer.suggest_name(representative),
            element_type=representative.tag_name,
            recommendation=Recommendation.MULTI_PAGE,
            confidence=self.confidence,
            common_attributes=[key],
            pages=list(occurrence.pages),
            selectors=list(occurrence.selectors),
        )


__all__ = [
    "FallbackGrouper",
    "GroupingEngine",
    "grouping_key",
    "merge_group",
    "semantic_key",
]
