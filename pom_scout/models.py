"""Data models for cross-page element analysis.

This module defines the data contracts shared by the analysis core and its
collaborators: element characteristics and records, pairwise similarity
results, and the grouped elements proposed for a shared page object.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Attributes that mark an element as deliberately exposed to test automation
TEST_ID_ATTRIBUTES = ("data-testid", "data-cy", "data-test")


class Stability(Enum):
    """Estimated durability of an element's locator."""

    HIGH = "high"  # Test id, static id or ARIA role
    MEDIUM = "medium"  # Structural class names
    LOW = "low"  # Nothing durable to anchor on


class Recommendation(Enum):
    """Page object placement recommendation for a grouped element."""

    BASE_PAGE_CANDIDATE = "base_page_candidate"
    BASE_PAGE_CONDITIONAL = "base_page_conditional"
    PAGE_SPECIFIC = "page_specific"
    MULTI_PAGE = "multi_page"  # Produced by fallback grouping only

    @property
    def reason(self) -> str:
        """Human-readable explanation of the recommendation."""
        return _RECOMMENDATION_REASONS[self]

    @property
    def is_base_page_eligible(self) -> bool:
        """Whether the element belongs in a shared BasePage."""
        return self is not Recommendation.PAGE_SPECIFIC

    @classmethod
    def from_stability(cls, stability: Stability) -> "Recommendation":
        """Map a stability rating to a recommendation."""
        if stability is Stability.HIGH:
            return cls.BASE_PAGE_CANDIDATE
        if stability is Stability.MEDIUM:
            return cls.BASE_PAGE_CONDITIONAL
        return cls.PAGE_SPECIFIC


_RECOMMENDATION_REASONS = {
    Recommendation.BASE_PAGE_CANDIDATE: "Recommended for BasePage - stable across pages",
    Recommendation.BASE_PAGE_CONDITIONAL: (
        "Consider for BasePage - may need page-specific overrides"
    ),
    Recommendation.PAGE_SPECIFIC: "Page-specific locator - avoid BasePage",
    Recommendation.MULTI_PAGE: "Found on multiple pages - good BasePage candidate",
}


class SimilarityClassification(Enum):
    """Classification of similarity between two elements."""

    DUPLICATE = "duplicate"  # >= 95
    NEAR_DUPLICATE = "near_duplicate"  # >= 80
    SIMILAR = "similar"  # >= 60
    DISTINCT = "distinct"  # < 60

    @classmethod
    def from_score(cls, score: float) -> "SimilarityClassification":
        """Classify a 0-100 similarity score."""
        if score >= 95:
            return cls.DUPLICATE
        elif score >= 80:
            return cls.NEAR_DUPLICATE
        elif score >= 60:
            return cls.SIMILAR
        else:
            return cls.DISTINCT


@dataclass(frozen=True)
class ElementCharacteristics:
    """Observable characteristics of a single DOM element.

    Produced once per element by the descriptor normalizer and never
    mutated afterwards.
    """

    tag_name: str
    classes: tuple[str, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict)
    text_content: str = ""
    role: str | None = None
    placeholder: str | None = None
    type: str | None = None
    href: str | None = None
    src: str | None = None

    def attr(self, name: str) -> str | None:
        """Return a stripped attribute value, or None when absent or blank."""
        value = self.attributes.get(name)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def test_id(self) -> tuple[str, str] | None:
        """First test-automation attribute present, as (name, value)."""
        for name in TEST_ID_ATTRIBUTES:
            value = self.attr(name)
            if value:
                return name, value
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tagName": self.tag_name,
            "classes": list(self.classes),
            "attributes": dict(self.attributes),
            "textContent": self.text_content,
            "role": self.role,
            "placeholder": self.placeholder,
            "type": self.type,
            "href": self.href,
            "src": self.src,
        }


@dataclass(frozen=True)
class ElementRecord:
    """An element observed on one page, with its best-effort selectors."""

    selector: str
    characteristics: ElementCharacteristics
    xpath: str = ""
    page_id: str = ""

    @property
    def tag_name(self) -> str:
        """Shortcut to the element's tag name."""
        return self.characteristics.tag_name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "selector": self.selector,
            "characteristics": self.characteristics.to_dict(),
            "xpath": self.xpath,
            "pageUrl": self.page_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ElementRecord":
        """Create from a raw descriptor dictionary."""
        from .normalizers.descriptor import DescriptorNormalizer

        return DescriptorNormalizer().normalize(data)


@dataclass
class SimilarityResult:
    """Result of comparing two elements from different pages."""

    left: ElementRecord
    right: ElementRecord
    score: float = 0.0  # 0-100
    matching_attributes: list[str] = field(default_factory=list)

    @property
    def classification(self) -> SimilarityClassification:
        """Similarity band for reporting."""
        return SimilarityClassification.from_score(self.score)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
            "similarityScore": self.score,
            "matchingAttributes": list(self.matching_attributes),
            "classification": self.classification.value,
        }


@dataclass
class GroupedElement:
    """An element recurring across pages, proposed for a page object.

    Owned and merged by the grouping engine during a single run; treated
    as read-only once emitted.
    """

    locator: str
    name: str
    element_type: str
    recommendation: Recommendation
    confidence: float = 0.0
    common_attributes: list[str] = field(default_factory=list)
    pages: list[str] = field(default_factory=list)
    selectors: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of distinct pages the element was found on."""
        return len(self.pages)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "suggestedName": self.name,
            "locator": self.locator,
            "elementType": self.element_type,
            "confidence": self.confidence,
            "pages": list(self.pages),
            "selectors": list(self.selectors),
            "commonAttributes": list(self.common_attributes),
            "pomRecommendation": self.recommendation.reason,
            "recommendation": self.recommendation.value,
        }


__all__ = [
    "TEST_ID_ATTRIBUTES",
    "Stability",
    "Recommendation",
    "SimilarityClassification",
    "ElementCharacteristics",
    "ElementRecord",
    "SimilarityResult",
    "GroupedElement",
]
