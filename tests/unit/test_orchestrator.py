"""Tests for the end-to-end scouting run with a fake collector."""

import json

import pytest

from pom_scout.cli.errors import NoPagesAnalyzedError, ValidationError
from pom_scout.collectors.page_extractor import PageExtraction
from pom_scout.config import ScoutConfig
from pom_scout.orchestrator import ScoutOrchestrator, ScoutRunResult


class FakeCollector:
    """Stands in for PageElementCollector, serving canned extractions."""

    def __init__(self, extractions):
        self.extractions = {e.url: e for e in extractions}
        self.entered = False
        self.exited = False
        self.requested: list[str] = []

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.exited = True

    async def collect(self, urls):
        self.requested = list(urls)
        return [self.extractions[url] for url in urls]


@pytest.fixture
def config(tmp_path):
    """Config writing outputs into a temporary directory."""
    return ScoutConfig(output_dir=tmp_path, basepage_min_confidence=60)


@pytest.fixture
def shared_extractions(shared_header_pages):
    """Successful extractions for the shared header pages."""
    return [
        PageExtraction(url=url, descriptors=descriptors)
        for url, descriptors in shared_header_pages.items()
    ]


class TestScoutOrchestrator:
    """Tests for ScoutOrchestrator.run."""

    @pytest.mark.asyncio
    async def test_run_writes_reports(self, config, shared_extractions, tmp_path):
        collector = FakeCollector(shared_extractions)
        orchestrator = ScoutOrchestrator(config, collector=collector)
        urls = [e.url for e in shared_extractions]

        result = await orchestrator.run(urls)

        assert collector.entered and collector.exited
        assert collector.requested == urls
        assert [g.name for g in result.analysis.groups] == [
            "searchProductsInput",
            "cartLink",
        ]
        assert result.report_path == tmp_path / "pom-locators-report.json"
        assert result.basepage_path == tmp_path / "suggested-basepage.ts"
        assert not result.has_errors

        report = json.loads(result.report_path.read_text())
        assert report["summary"]["totalSimilarElements"] == 2
        basepage = result.basepage_path.read_text()
        assert "readonly searchProductsInput: Locator" in basepage
        assert "readonly cartLink: Locator" in basepage

    @pytest.mark.asyncio
    async def test_basepage_threshold_from_config(self, tmp_path, shared_extractions):
        config = ScoutConfig(output_dir=tmp_path)
        orchestrator = ScoutOrchestrator(
            config, collector=FakeCollector(shared_extractions)
        )

        result = await orchestrator.run([e.url for e in shared_extractions])

        basepage = result.basepage_path.read_text()
        assert "searchProductsInput" in basepage
        assert "cartLink" not in basepage

    @pytest.mark.asyncio
    async def test_no_basepage(self, config, shared_extractions, tmp_path):
        orchestrator = ScoutOrchestrator(
            config, collector=FakeCollector(shared_extractions)
        )

        result = await orchestrator.run(
            [e.url for e in shared_extractions], write_basepage=False
        )

        assert result.basepage_path is None
        assert not (tmp_path / "suggested-basepage.ts").exists()
        assert result.report_path.exists()

    @pytest.mark.asyncio
    async def test_failed_pages_are_skipped(self, config, shared_extractions):
        failed = PageExtraction(
            url="https://shop.test/down",
            errors=["Failed to load https://shop.test/down: net::ERR_CONNECTION_REFUSED"],
        )
        orchestrator = ScoutOrchestrator(
            config, collector=FakeCollector([*shared_extractions, failed])
        )

        result = await orchestrator.run(
            [*(e.url for e in shared_extractions), failed.url]
        )

        assert result.errors == failed.errors
        assert result.has_errors
        assert "https://shop.test/down" not in result.analysis.page_ids
        assert len(result.analysis.groups) == 2

    @pytest.mark.asyncio
    async def test_configured_urls(self, tmp_path, shared_extractions):
        urls = [e.url for e in shared_extractions]
        config = ScoutConfig(output_dir=tmp_path, urls=urls)
        collector = FakeCollector(shared_extractions)

        await ScoutOrchestrator(config, collector=collector).run()

        assert collector.requested == urls

    @pytest.mark.asyncio
    async def test_no_urls(self, config):
        orchestrator = ScoutOrchestrator(config, collector=FakeCollector([]))

        with pytest.raises(ValidationError):
            await orchestrator.run([])

    @pytest.mark.asyncio
    async def test_no_pages_analyzed(self, config):
        failures = [
            PageExtraction(url="https://a.test/", errors=["Failed to load a"]),
            PageExtraction(url="https://b.test/"),
        ]
        orchestrator = ScoutOrchestrator(config, collector=FakeCollector(failures))

        with pytest.raises(NoPagesAnalyzedError) as exc_info:
            await orchestrator.run(["https://a.test/", "https://b.test/"])

        assert exc_info.value.details == {
            "attempted": 2,
            "failures": "Failed to load a",
        }

    def test_lazy_components_follow_config(self, tmp_path):
        config = ScoutConfig(
            output_dir=tmp_path,
            min_similarity=45,
            headless=False,
            navigation_timeout_ms=5000,
        )
        orchestrator = ScoutOrchestrator(config)

        assert orchestrator.analyzer.threshold == 45
        assert orchestrator.analyzer is orchestrator.analyzer
        assert orchestrator.collector.headless is False
        assert orchestrator.collector.navigation_timeout_ms == 5000


class TestScoutRunResult:
    """Tests for ScoutRunResult."""

    @pytest.mark.asyncio
    async def test_summary_and_to_dict(self, config, shared_extractions):
        orchestrator = ScoutOrchestrator(
            config, collector=FakeCollector(shared_extractions)
        )
        result = await orchestrator.run([e.url for e in shared_extractions])

        assert result.summary == (
            "Analyzed 9 elements across 3 pages. "
            "Found 2 recurring elements (2 BasePage candidates)."
        )
        data = result.to_dict()
        assert data["reportPath"] == str(result.report_path)
        assert [e["elementCount"] for e in data["extractions"]] == [3, 3, 3]

    def test_defaults(self):
        from pom_scout.analyzer import AnalysisResult

        result = ScoutRunResult(analysis=AnalysisResult())

        assert not result.has_errors
        assert result.to_dict()["basepagePath"] is None
