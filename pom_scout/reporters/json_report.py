"""POM locator report in JSON.

The report lists every recurring element and, separately, the ones
recommended for a shared BasePage.
"""

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..models import GroupedElement, Recommendation
from ..scout_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.REPORTER)

DEFAULT_REPORT_FILENAME = "pom-locators-report.json"


def _candidate_entry(group: GroupedElement) -> dict[str, Any]:
    return {
        "suggestedName": group.name,
        "locator": group.locator,
        "elementType": group.element_type,
        "confidence": group.confidence,
        "appearsOnPages": group.page_count,
        "pages": list(group.pages),
        "reason": group.recommendation.reason,
    }


def build_pom_report(
    groups: Sequence[GroupedElement],
    used_fallback: bool = False,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the POM report document.

    Args:
        groups: Grouped elements, in the order to report them.
        used_fallback: Whether the groups came from fallback grouping.
        generated_at: Report timestamp. Defaults to now (UTC).

    Returns:
        Report as a JSON-serializable dictionary.
    """
    timestamp = (generated_at or datetime.now(UTC)).isoformat()
    candidates = [g for g in groups if g.recommendation.is_base_page_eligible]
    page_specific = [
        g for g in groups if g.recommendation is Recommendation.PAGE_SPECIFIC
    ]

    return {
        "timestamp": timestamp,
        "summary": {
            "totalSimilarElements": len(groups),
            "basePageRecommendations": len(candidates),
            "pageSpecificElements": len(page_specific),
            "usedFallback": used_fallback,
        },
        "basePageCandidates": [_candidate_entry(g) for g in candidates],
        "allSimilarElements": [g.to_dict() for g in groups],
    }


def write_pom_report(
    groups: Sequence[GroupedElement],
    output_path: Path | str = DEFAULT_REPORT_FILENAME,
    used_fallback: bool = False,
) -> dict[str, Any]:
    """Build the POM report and write it to disk.

    Args:
        groups: Grouped elements.
        output_path: Destination file; parent directories are created.
        used_fallback: Whether the groups came from fallback grouping.

    Returns:
        The report document that was written.
    """
    report = build_pom_report(groups, used_fallback=used_fallback)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    logger.info(f"POM report saved to: {output_path}")
    return report


__all__ = [
    "DEFAULT_REPORT_FILENAME",
    "build_pom_report",
    "write_pom_report",
]
