"""Console reporters for POM analysis results.

This module renders analysis results either as the human-readable POM
summary or as JSON for scripts and CI.
"""

import json
import sys
from typing import Any, TextIO

from ..analyzer import AnalysisResult
from ..models import GroupedElement
from ..reporters.basepage import page_label
from ..reporters.json_report import build_pom_report

MAX_CANDIDATES_SHOWN = 10
MAX_PAGE_SPECIFIC_SHOWN = 5


class POMSummaryReporter:
    """Human-readable POM locator summary.

    Example output:
        ============================================================
        POM LOCATOR ANALYSIS SUMMARY
        ============================================================
        Total similar elements found: 2
        BasePage candidates: 1
        Page-specific elements: 1

        RECOMMENDED FOR BASEPAGE:
        ----------------------------------------
        1. submitButton
           Locator: [data-testid="submit-btn"]
           ...
    """

    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BOLD = "\033[1m"
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, stream: TextIO | None = None, use_color: bool | None = None):
        """Initialize the summary reporter.

        Args:
            stream: Output stream (default: stdout).
            use_color: Whether to use ANSI colors. Auto-detects if None.
        """
        self.stream = stream if stream is not None else sys.stdout
        if use_color is None:
            self.use_color = hasattr(self.stream, "isatty") and self.stream.isatty()
        else:
            self.use_color = use_color

    def _c(self, code: str) -> str:
        return code if self.use_color else ""

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def report(self, result: AnalysisResult) -> None:
        """Print the POM summary for an analysis result.

        Args:
            result: Analysis result to summarize.
        """
        bold, reset, dim = self._c(self.BOLD), self._c(self.RESET), self._c(self.DIM)
        candidates = result.base_page_candidates
        page_specific = result.page_specific

        self._print("\n" + "=" * 60)
        self._print(f"{bold}POM LOCATOR ANALYSIS SUMMARY{reset}")
        self._print("=" * 60)
        self._print(f"Total similar elements found: {len(result.groups)}")
        self._print(f"BasePage candidates: {len(candidates)}")
        self._print(f"Page-specific elements: {len(page_specific)}")
        if result.used_fallback:
            self._print(
                f"{dim}No pairs met the similarity threshold; "
                f"showing elements found on multiple pages{reset}"
            )

        if candidates:
            self._print(f"\n{self._c(self.GREEN)}RECOMMENDED FOR BASEPAGE:{reset}")
            self._print("-" * 40)
            for index, group in enumerate(candidates[:MAX_CANDIDATES_SHOWN], start=1):
                self._report_group(index, group, detailed=True)

        if page_specific:
            self._print(
                f"\n{self._c(self.YELLOW)}PAGE-SPECIFIC ELEMENTS "
                f"(top {MAX_PAGE_SPECIFIC_SHOWN}):{reset}"
            )
            self._print("-" * 40)
            for index, group in enumerate(
                page_specific[:MAX_PAGE_SPECIFIC_SHOWN], start=1
            ):
                self._report_group(index, group, detailed=False)

    def _report_group(self, index: int, group: GroupedElement, detailed: bool) -> None:
        pages = ", ".join(page_label(page) for page in group.pages)
        self._print(f"{index}. {group.name}")
        self._print(f"   Locator: {group.locator}")
        self._print(f"   Type: {group.element_type}")
        if detailed:
            self._print(f"   Confidence: {group.confidence}%")
        self._print(f"   Pages: {pages}")
        if detailed:
            self._print(f"   Reason: {group.recommendation.reason}")
        self._print()

    def report_outputs(self, paths: dict[str, str]) -> None:
        """Print where report files were written.

        Args:
            paths: Mapping of output label to file path.
        """
        dim, reset = self._c(self.DIM), self._c(self.RESET)
        for label, path in paths.items():
            self._print(f"{dim}{label} saved to: {path}{reset}")


class JSONSummaryReporter:
    """JSON reporter for scripts and CI pipelines.

    Output format:
    {
        "report": {...},  # POM report document
        "pages": [...],
        "elementCount": int,
        "filteredCount": int,
        "errors": [...]
    }
    """

    def __init__(self, stream: TextIO | None = None):
        """Initialize the JSON reporter.

        Args:
            stream: Output stream (default: stdout).
        """
        self.stream = stream if stream is not None else sys.stdout

    def report(
        self,
        result: AnalysisResult,
        errors: list[str] | None = None,
    ) -> dict[str, Any]:
        """Output the analysis result as JSON.

        Args:
            result: Analysis result to report.
            errors: Per-page errors collected during the run.

        Returns:
            The output dictionary (also written to stream).
        """
        output = {
            "report": build_pom_report(result.groups, used_fallback=result.used_fallback),
            "pages": result.page_ids,
            "elementCount": result.element_count,
            "filteredCount": result.filtered_count,
            "errors": list(errors or []),
        }

        json.dump(output, self.stream, indent=2)
        self.stream.write("\n")
        return output


__all__ = [
    "JSONSummaryReporter",
    "POMSummaryReporter",
]
