"""End-to-end POM scouting run.

Coordinates the complete flow:
- Element extraction (Playwright)
- Cross-page similarity analysis
- JSON report and BasePage code output
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .analyzer import AnalysisResult, ElementSimilarityAnalyzer
from .cli.errors import NoPagesAnalyzedError, ValidationError
from .collectors.page_extractor import PageElementCollector, PageExtraction
from .config import ScoutConfig
from .reporters.basepage import write_basepage_code
from .reporters.json_report import write_pom_report
from .scout_logging import get_logger

logger = get_logger()


@dataclass
class ScoutRunResult:
    """Complete result of a scouting run."""

    analysis: AnalysisResult
    extractions: list[PageExtraction] = field(default_factory=list)
    report_path: Path | None = None
    basepage_path: Path | None = None
    execution_time_ms: float = 0.0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "analysis": self.analysis.to_dict(),
            "extractions": [
                {
                    "url": e.url,
                    "elementCount": e.element_count,
                    "errors": e.errors,
                    "extractionTimeMs": e.extraction_time_ms,
                }
                for e in self.extractions
            ],
            "reportPath": str(self.report_path) if self.report_path else None,
            "basepagePath": str(self.basepage_path) if self.basepage_path else None,
            "executionTimeMs": self.execution_time_ms,
            "errors": self.errors,
        }

    @property
    def has_errors(self) -> bool:
        """Check if any page failed during the run."""
        return len(self.errors) > 0

    @property
    def summary(self) -> str:
        """Generate brief summary of results."""
        analysis = self.analysis
        return (
            f"Analyzed {analysis.element_count} elements across "
            f"{len(analysis.page_ids)} pages. Found {len(analysis.groups)} "
            f"recurring elements ({len(analysis.base_page_candidates)} BasePage "
            f"candidates)."
        )


class ScoutOrchestrator:
    """Runs extraction, analysis and report output for a set of URLs."""

    def __init__(
        self,
        config: ScoutConfig | None = None,
        collector: PageElementCollector | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Run configuration. Defaults to ScoutConfig().
            collector: Optional pre-built collector, mainly for tests.
        """
        self.config = config or ScoutConfig()
        self._collector = collector
        self._analyzer: ElementSimilarityAnalyzer | None = None

    @property
    def collector(self) -> PageElementCollector:
        """Lazy-initialized page collector."""
        if self._collector is None:
            self._collector = PageElementCollector(
                navigation_timeout_ms=self.config.navigation_timeout_ms,
                headless=self.config.headless,
                max_elements_per_page=self.config.max_elements_per_page,
                text_limit=self.config.text_limit,
            )
        return self._collector

    @property
    def analyzer(self) -> ElementSimilarityAnalyzer:
        """Lazy-initialized similarity analyzer."""
        if self._analyzer is None:
            self._analyzer = ElementSimilarityAnalyzer(
                threshold=self.config.min_similarity,
                fallback_confidence=self.config.fallback_confidence,
                filter_noise=self.config.filter_noise,
                max_elements_per_page=self.config.max_elements_per_page,
                text_limit=self.config.text_limit,
            )
        return self._analyzer

    def _resolve_urls(self, urls: Sequence[str] | None) -> list[str]:
        resolved = list(urls) if urls else list(self.config.urls)
        if not resolved:
            raise ValidationError(
                "No URLs to analyze",
                suggestion="Pass URLs as arguments or set 'urls' in pom-scout.config.json",
            )
        if len(resolved) < 2:
            logger.warning("Only one URL given; cross-page analysis needs at least two")
        return resolved

    async def collect(self, urls: Sequence[str]) -> list[PageExtraction]:
        """Extract descriptors from every URL with one browser session."""
        async with self.collector as collector:
            return await collector.collect(urls)

    def write_reports(
        self,
        analysis: AnalysisResult,
        write_basepage: bool = True,
    ) -> tuple[Path, Path | None]:
        """Write the JSON report and, optionally, the BasePage source.

        Args:
            analysis: Analysis result to report.
            write_basepage: Whether to generate BasePage code.

        Returns:
            Tuple of (report_path, basepage_path or None).
        """
        report_path = self.config.report_path
        write_pom_report(
            analysis.groups, report_path, used_fallback=analysis.used_fallback
        )

        basepage_path = None
        if write_basepage:
            basepage_path = write_basepage_code(
                analysis.groups,
                self.config.basepage_path,
                min_confidence=self.config.basepage_min_confidence,
            )
        return report_path, basepage_path

    async def run(
        self,
        urls: Sequence[str] | None = None,
        write_basepage: bool = True,
    ) -> ScoutRunResult:
        """Execute a complete scouting run.

        Pages that fail to load are recorded as errors and skipped.

        Args:
            urls: URLs to analyze. Defaults to the configured URLs.
            write_basepage: Whether to generate BasePage code.

        Returns:
            ScoutRunResult with analysis and report paths.

        Raises:
            ValidationError: If there are no URLs to analyze.
            NoPagesAnalyzedError: If no page yielded any element.
        """
        start_time = time.time()
        targets = self._resolve_urls(urls)
        logger.info(f"Analyzing {len(targets)} pages for common elements")

        extractions = await self.collect(targets)
        errors = [error for extraction in extractions for error in extraction.errors]

        pages = {e.url: e.descriptors for e in extractions if e.descriptors}
        if not pages:
            raise NoPagesAnalyzedError(attempted=len(targets), failures=errors)

        analysis = self.analyzer.analyze_pages(pages)
        report_path, basepage_path = self.write_reports(
            analysis, write_basepage=write_basepage
        )

        execution_time_ms = (time.time() - start_time) * 1000
        result = ScoutRunResult(
            analysis=analysis,
            extractions=extractions,
            report_path=report_path,
            basepage_path=basepage_path,
            execution_time_ms=execution_time_ms,
            errors=errors,
        )
        logger.info(result.summary, extra={"duration_ms": execution_time_ms})
        return result


__all__ = [
    "ScoutOrchestrator",
    "ScoutRunResult",
]
