"""Cross-page element analysis pipeline.

Runs normalized element records through noise filtering, pairwise
comparison and grouping, falling back to multi-page recurrence grouping
when no pair clears the similarity threshold.
"""

import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .locators.classifier import LocatorClassifier
from .models import ElementRecord, GroupedElement, Recommendation, SimilarityResult
from .naming import NameSynthesizer
from .normalizers.descriptor import DEFAULT_TEXT_LIMIT, DescriptorNormalizer
from .normalizers.noise import NoiseFilter
from .scout_logging import LogCategory, get_category_logger
from .similarity.clustering import FallbackGrouper, GroupingEngine
from .similarity.engine import CrossPageComparator, SimilarityScorer

logger = get_category_logger(LogCategory.ANALYZER)

FALLBACK_CONFIDENCE = 80.0


@dataclass
class AnalysisResult:
    """Outcome of analyzing elements from several pages."""

    groups: list[GroupedElement] = field(default_factory=list)
    similarities: list[SimilarityResult] = field(default_factory=list)
    used_fallback: bool = False
    element_count: int = 0  # Records entering comparison
    filtered_count: int = 0  # Records dropped by the noise filter
    page_ids: list[str] = field(default_factory=list)
    analysis_time_ms: float = 0.0

    @property
    def base_page_candidates(self) -> list[GroupedElement]:
        """Groups recommended for a shared BasePage."""
        return [g for g in self.groups if g.recommendation.is_base_page_eligible]

    @property
    def page_specific(self) -> list[GroupedElement]:
        """Groups that should stay in page-specific objects."""
        return [
            g for g in self.groups if g.recommendation is Recommendation.PAGE_SPECIFIC
        ]

    @property
    def is_empty(self) -> bool:
        """True when no recurring element was found."""
        return not self.groups

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "groups": [g.to_dict() for g in self.groups],
            "similarPairs": len(self.similarities),
            "usedFallback": self.used_fallback,
            "elementCount": self.element_count,
            "filteredCount": self.filtered_count,
            "pages": self.page_ids,
            "analysisTimeMs": self.analysis_time_ms,
        }


class ElementSimilarityAnalyzer:
    """Finds elements recurring across pages and proposes locators for them.

    Pure and synchronous: the same input always yields the same groups,
    and no state is kept between calls.
    """

    def __init__(
        self,
        threshold: float,
        fallback_confidence: float = FALLBACK_CONFIDENCE,
        filter_noise: bool = True,
        max_elements_per_page: int | None = None,
        text_limit: int = DEFAULT_TEXT_LIMIT,
    ):
        """Initialize the analyzer.

        Args:
            threshold: Minimum similarity percentage for a pair to count.
            fallback_confidence: Confidence assigned to fallback groups.
            filter_noise: Drop decorative, hidden and ad elements first.
            max_elements_per_page: Optional cap on records per page.
            text_limit: Visible text truncation for raw descriptors.
        """
        self.threshold = threshold
        self.filter_noise = filter_noise

        classifier = LocatorClassifier()
        synthesizer = NameSynthesizer()
        self.normalizer = DescriptorNormalizer(text_limit=text_limit)
        self.noise_filter = NoiseFilter(max_elements_per_page=max_elements_per_page)
        self.comparator = CrossPageComparator(threshold, scorer=SimilarityScorer())
        self.grouping = GroupingEngine(classifier=classifier, synthesizer=synthesizer)
        self.fallback = FallbackGrouper(
            confidence=fallback_confidence,
            classifier=classifier,
            synthesizer=synthesizer,
        )

    def analyze_descriptors(
        self,
        descriptors: Iterable[Mapping[str, Any]],
    ) -> AnalysisResult:
        """Normalize raw descriptors and analyze them.

        Args:
            descriptors: Raw descriptor mappings from all pages.

        Returns:
            AnalysisResult for the normalized records.
        """
        return self.analyze(self.normalizer.normalize_many(descriptors))

    def analyze_pages(
        self,
        pages: Mapping[str, Iterable[Mapping[str, Any]]],
    ) -> AnalysisResult:
        """Analyze raw descriptors keyed by page identifier.

        Args:
            pages: Mapping of page id to that page's descriptors.

        Returns:
            AnalysisResult across all pages, in mapping order.
        """
        records: list[ElementRecord] = []
        for page_id, descriptors in pages.items():
            records.extend(self.normalizer.normalize_many(descriptors, page_id=page_id))
        return self.analyze(records)

    def analyze(self, records: Sequence[ElementRecord]) -> AnalysisResult:
        """Run the full analysis on normalized records.

        Args:
            records: Records from all pages, concatenated in page order.

        Returns:
            AnalysisResult with groups sorted by confidence.
        """
        start = time.time()
        filtered_count = 0

        if self.filter_noise:
            filtered = self.noise_filter.filter(records)
            filtered_count = filtered.dropped_count
            records = filtered.kept

        page_ids: list[str] = []
        for record in records:
            if record.page_id not in page_ids:
                page_ids.append(record.page_id)

        similarities = self.comparator.compare(records)
        groups = self.grouping.group(similarities)

        used_fallback = False
        if not similarities:
            logger.info(
                "No element pairs above threshold; grouping by multi-page recurrence"
            )
            groups = self.fallback.group(records)
            used_fallback = True

        result = AnalysisResult(
            groups=groups,
            similarities=similarities,
            used_fallback=used_fallback,
            element_count=len(records),
            filtered_count=filtered_count,
            page_ids=page_ids,
            analysis_time_ms=(time.time() - start) * 1000,
        )
        logger.info(
            f"Analyzed {len(records)} elements across {len(page_ids)} pages: "
            f"{len(groups)} recurring elements"
        )
        return result


__all__ = [
    "FALLBACK_CONFIDENCE",
    "AnalysisResult",
    "ElementSimilarityAnalyzer",
]
