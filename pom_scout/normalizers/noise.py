"""Noise filter for element records.

Drops decorative, hidden, non-interactive and advertising elements before
pairwise comparison, which keeps the quadratic comparison step small.
"""

import re
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from ..models import ElementRecord
from ..scout_logging import get_logger

logger = get_logger()

# Tags that never carry a user-facing locator
NON_VISUAL_TAGS = frozenset(
    [
        "script",
        "style",
        "noscript",
        "template",
        "meta",
        "link",
        "base",
        "br",
        "hr",
        "wbr",
        "path",
        "g",
        "defs",
        "symbol",
        "use",
    ]
)

# Roles that explicitly mark an element as decorative
DECORATIVE_ROLES = frozenset(["presentation", "none"])

# Class or id tokens used by ad slots and sponsored widgets
AD_TOKEN_PATTERN = re.compile(
    r"^(ad|ads|advert[\w-]*|adsbygoogle"
    r"|ad[-_]?(slot|unit|container|banner|wrapper)[\w-]*"
    r"|sponsor[\w-]*|promo[-_]?banner|dfp[-_][\w-]+|taboola[\w-]*|outbrain[\w-]*)$",
    re.IGNORECASE,
)

# Hosts serving advertising iframes, scripts and tracking pixels
AD_HOST_PATTERN = re.compile(
    r"(doubleclick\.net|googlesyndication\.com|googleadservices\.com"
    r"|adservice\.google|amazon-adsystem\.com|taboola\.com|outbrain\.com)",
    re.IGNORECASE,
)


def _is_non_visual(record: ElementRecord) -> bool:
    return record.tag_name in NON_VISUAL_TAGS


def _is_hidden(record: ElementRecord) -> bool:
    chars = record.characteristics
    if "hidden" in chars.attributes:
        return True
    if (chars.attr("aria-hidden") or "").lower() == "true":
        return True
    return chars.tag_name == "input" and (chars.type or "").lower() == "hidden"


def _is_decorative(record: ElementRecord) -> bool:
    return (record.characteristics.role or "").lower() in DECORATIVE_ROLES


def _is_advertising(record: ElementRecord) -> bool:
    chars = record.characteristics
    tokens = list(chars.classes)
    element_id = chars.attr("id")
    if element_id:
        tokens.append(element_id)
    if any(AD_TOKEN_PATTERN.match(token) for token in tokens):
        return True
    return any(
        AD_HOST_PATTERN.search(value) for value in (chars.href, chars.src) if value
    )


# Ordered (reason, predicate) table; first match decides the drop reason
NOISE_RULES: tuple[tuple[str, Callable[[ElementRecord], bool]], ...] = (
    ("non_visual", _is_non_visual),
    ("hidden", _is_hidden),
    ("decorative", _is_decorative),
    ("advertising", _is_advertising),
)


@dataclass
class NoiseFilterResult:
    """Records that survived filtering plus drop statistics."""

    kept: list[ElementRecord] = field(default_factory=list)
    dropped: Counter = field(default_factory=Counter)  # reason -> count
    capped_pages: list[str] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        """Total number of dropped records."""
        return sum(self.dropped.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kept": len(self.kept),
            "dropped": dict(self.dropped),
            "capped_pages": self.capped_pages,
        }


class NoiseFilter:
    """Removes records that should never enter cross-page comparison."""

    def __init__(self, max_elements_per_page: int | None = None):
        """Initialize the noise filter.

        Args:
            max_elements_per_page: Optional cap on surviving records per page.
        """
        self.max_elements_per_page = max_elements_per_page

    def noise_reason(self, record: ElementRecord) -> str | None:
        """Return the name of the first noise rule matching the record."""
        for reason, predicate in NOISE_RULES:
            if predicate(record):
                return reason
        return None

    def filter(self, records: Iterable[ElementRecord]) -> NoiseFilterResult:
        """Filter records, preserving input order.

        Args:
            records: Records from all pages.

        Returns:
            NoiseFilterResult with kept records and drop counts.
        """
        result = NoiseFilterResult()
        per_page: Counter = Counter()

        for record in records:
            reason = self.noise_reason(record)
            if reason:
                result.dropped[reason] += 1
                continue

            if (
                self.max_elements_per_page is not None
                and per_page[record.page_id] >= self.max_elements_per_page
            ):
                result.dropped["page_cap"] += 1
                if record.page_id not in result.capped_pages:
                    result.capped_pages.append(record.page_id)
                continue

            per_page[record.page_id] += 1
            result.kept.append(record)

        if result.dropped_count:
            logger.debug(
                f"Noise filter dropped {result.dropped_count} elements: "
                f"{dict(result.dropped)}"
            )
        return result


__all__ = [
    "NOISE_RULES",
    "NoiseFilter",
    "NoiseFilterResult",
]
