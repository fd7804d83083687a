"""TypeScript BasePage suggestion generator.

Emits a Playwright ``BasePage`` class declaring one ``Locator`` member per
high-confidence element shared across pages.
"""

from collections.abc import Sequence
from pathlib import Path
from urllib.parse import urlsplit

from ..models import GroupedElement
from ..scout_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.REPORTER)

DEFAULT_BASEPAGE_FILENAME = "suggested-basepage.ts"
INDENT = "    "


def page_label(page: str) -> str:
    """Short label for a page URL: its last path segment, else its host."""
    parts = urlsplit(page)
    segments = [segment for segment in parts.path.split("/") if segment]
    if segments:
        return segments[-1]
    return parts.netloc or page


def escape_single_quoted(value: str) -> str:
    """Escape a value for a single-quoted TypeScript string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def unique_member_names(groups: Sequence[GroupedElement]) -> list[str]:
    """Member names for groups, numbering repeats (``nav``, ``nav2``)."""
    counts: dict[str, int] = {}
    names = []
    for group in groups:
        counts[group.name] = counts.get(group.name, 0) + 1
        count = counts[group.name]
        names.append(group.name if count == 1 else f"{group.name}{count}")
    return names


def basepage_candidates(
    groups: Sequence[GroupedElement],
    min_confidence: float = 80.0,
) -> list[GroupedElement]:
    """Groups eligible for the generated BasePage."""
    return [
        g
        for g in groups
        if g.recommendation.is_base_page_eligible and g.confidence >= min_confidence
    ]


def generate_basepage_code(
    groups: Sequence[GroupedElement],
    min_confidence: float = 80.0,
) -> str:
    """Generate BasePage TypeScript source.

    Args:
        groups: Grouped elements from analysis.
        min_confidence: Minimum confidence for a group to be included.

    Returns:
        TypeScript source text.
    """
    candidates = basepage_candidates(groups, min_confidence)

    lines = [
        "// Suggested locators for BasePage.ts",
        "// Based on cross-page element analysis",
        "import { Locator, Page } from '@playwright/test';",
        "",
        "export class BasePage {",
        f"{INDENT}protected page: Page;",
        "",
        f"{INDENT}constructor(page: Page) {{",
        f"{INDENT * 2}this.page = page;",
        f"{INDENT}}}",
        "",
        f"{INDENT}// Common elements found across multiple pages",
    ]

    for group, name in zip(candidates, unique_member_names(candidates), strict=True):
        pages = ", ".join(page_label(page) for page in group.pages)
        locator = escape_single_quoted(group.locator)
        lines.append(f"{INDENT}// Found on {group.page_count} pages: {pages}")
        lines.append(
            f"{INDENT}readonly {name}: Locator = this.page.locator('{locator}');"
        )
        lines.append("")

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_basepage_code(
    groups: Sequence[GroupedElement],
    output_path: Path | str = DEFAULT_BASEPAGE_FILENAME,
    min_confidence: float = 80.0,
) -> Path:
    """Generate BasePage source and write it to disk.

    Args:
        groups: Grouped elements from analysis.
        output_path: Destination file; parent directories are created.
        min_confidence: Minimum confidence for a group to be included.

    Returns:
        Path the source was written to.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        generate_basepage_code(groups, min_confidence=min_confidence),
        encoding="utf-8",
    )
    logger.info(f"BasePage code suggestions saved to: {output_path}")
    return output_path


__all__ = [
    "DEFAULT_BASEPAGE_FILENAME",
    "basepage_candidates",
    "escape_single_quoted",
    "generate_basepage_code",
    "page_label",
    "unique_member_names",
    "write_basepage_code",
]
