"""Tests for the pom-scout command line."""

import json

import pytest
from click.testing import CliRunner

from pom_scout import __version__
from pom_scout.analyzer import ElementSimilarityAnalyzer
from pom_scout.cli import main as cli_main
from pom_scout.cli.errors import DescriptorFileError
from pom_scout.cli.main import cli, load_descriptor_file
from pom_scout.orchestrator import ScoutRunResult


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run commands from an empty directory so no config file is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def pages_file(workdir, shared_header_pages):
    """Descriptors keyed by page URL."""
    path = workdir / "pages.json"
    path.write_text(json.dumps(shared_header_pages))
    return path


@pytest.fixture
def list_file(workdir, make_descriptor):
    """A flat descriptor list with identical test-id buttons on two pages."""
    path = workdir / "descriptors.json"
    path.write_text(
        json.dumps(
            [
                make_descriptor(
                    "button",
                    page,
                    attributes={"data-testid": "submit-btn"},
                    text="Submit",
                )
                for page in ("https://site.test/login", "https://site.test/signup")
            ]
        )
    )
    return path


@pytest.fixture
def fake_orchestrator(monkeypatch, shared_header_pages):
    """Replace ScoutOrchestrator with one that analyzes canned pages."""
    calls = []

    class FakeOrchestrator:
        def __init__(self, config):
            self.config = config

        async def run(self, urls=None, write_basepage=True):
            calls.append(
                {"config": self.config, "urls": urls, "write_basepage": write_basepage}
            )
            analysis = ElementSimilarityAnalyzer(
                threshold=self.config.min_similarity
            ).analyze_pages(shared_header_pages)
            return ScoutRunResult(
                analysis=analysis,
                report_path=self.config.report_path,
                basepage_path=self.config.basepage_path if write_basepage else None,
                errors=["Failed to load https://shop.test/down: timeout"],
            )

    monkeypatch.setattr(cli_main, "ScoutOrchestrator", FakeOrchestrator)
    return calls


class TestCliGroup:
    """Tests for the top-level command group."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "compare" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert f"pom-scout, version {__version__}" in result.output


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_summary_output(self, runner, workdir, fake_orchestrator):
        result = runner.invoke(
            cli, ["analyze", "https://shop.test/", "https://shop.test/cart"]
        )

        assert result.exit_code == 0, result.output
        assert "POM LOCATOR ANALYSIS SUMMARY" in result.output
        assert "1. searchProductsInput" in result.output
        assert "POM report saved to: pom-locators-report.json" in result.output
        assert "BasePage code suggestions saved to: suggested-basepage.ts" in (
            result.output
        )
        assert "Warning: Failed to load https://shop.test/down: timeout" in (
            result.output
        )
        (call,) = fake_orchestrator
        assert call["urls"] == ["https://shop.test/", "https://shop.test/cart"]
        assert call["write_basepage"] is True

    def test_options_reach_config(self, runner, workdir, fake_orchestrator):
        result = runner.invoke(
            cli,
            [
                "analyze",
                "https://shop.test/",
                "--threshold",
                "75",
                "--output-dir",
                "out",
                "--headed",
                "--no-basepage",
            ],
        )

        assert result.exit_code == 0, result.output
        (call,) = fake_orchestrator
        config = call["config"]
        assert config.min_similarity == 75
        assert str(config.output_dir) == "out"
        assert config.headless is False
        assert call["write_basepage"] is False
        assert "BasePage code suggestions" not in result.output

    def test_config_file(self, runner, workdir, fake_orchestrator):
        (workdir / "pom-scout.config.json").write_text(
            json.dumps({"minSimilarity": 40, "headless": False})
        )

        result = runner.invoke(cli, ["analyze", "https://shop.test/"])

        assert result.exit_code == 0, result.output
        config = fake_orchestrator[0]["config"]
        assert config.min_similarity == 40
        assert config.headless is False

    def test_json_output(self, runner, workdir, fake_orchestrator):
        result = runner.invoke(cli, ["analyze", "https://shop.test/", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["report"]["summary"]["basePageRecommendations"] == 2
        assert data["errors"] == ["Failed to load https://shop.test/down: timeout"]

    def test_quiet(self, runner, workdir, fake_orchestrator):
        result = runner.invoke(cli, ["analyze", "https://shop.test/", "--quiet"])

        assert result.exit_code == 0
        assert "POM LOCATOR" not in result.output

    def test_threshold_out_of_range(self, runner, workdir):
        result = runner.invoke(cli, ["analyze", "https://a.test/", "-t", "150"])

        assert result.exit_code == 2

    def test_no_urls(self, runner, workdir):
        result = runner.invoke(cli, ["analyze"])

        assert result.exit_code == 2
        assert "No URLs to analyze" in result.output

    def test_quiet_and_verbose(self, runner, workdir):
        result = runner.invoke(cli, ["analyze", "https://a.test/", "-q", "-v"])

        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_invalid_config(self, runner, workdir):
        (workdir / "pom-scout.config.json").write_text('{"minSimilarity": 500}')

        result = runner.invoke(cli, ["analyze", "https://a.test/"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_log_file(self, runner, workdir, fake_orchestrator):
        log_file = workdir / "logs" / "scout.log"

        result = runner.invoke(
            cli, ["analyze", "https://shop.test/", "--log-file", str(log_file), "-q"]
        )

        assert result.exit_code == 0, result.output
        assert log_file.exists()


class TestCompareCommand:
    """Tests for the compare command."""

    def test_pages_mapping(self, runner, pages_file):
        result = runner.invoke(cli, ["compare", str(pages_file)])

        assert result.exit_code == 0, result.output
        assert "Total similar elements found: 2" in result.output
        assert "1. searchProductsInput" in result.output

    def test_descriptor_list_uses_fallback(self, runner, list_file):
        result = runner.invoke(cli, ["compare", str(list_file)])

        assert result.exit_code == 0, result.output
        assert "1. submitButton" in result.output
        assert "Confidence: 80.0%" in result.output

    def test_threshold(self, runner, list_file):
        result = runner.invoke(cli, ["compare", str(list_file), "-t", "40", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["report"]["summary"]["usedFallback"] is False
        assert data["report"]["basePageCandidates"][0]["confidence"] == 43.75

    def test_invalid_json(self, runner, workdir):
        path = workdir / "broken.json"
        path.write_text("{oops")

        result = runner.invoke(cli, ["compare", str(path)])

        assert result.exit_code == 1
        assert "Cannot read descriptors" in result.output

    def test_missing_file(self, runner, workdir):
        result = runner.invoke(cli, ["compare", str(workdir / "missing.json")])

        assert result.exit_code == 2


class TestLoadDescriptorFile:
    """Tests for load_descriptor_file."""

    def test_list(self, list_file):
        assert len(load_descriptor_file(list_file)) == 2

    def test_mapping(self, pages_file, shared_header_pages):
        assert list(load_descriptor_file(pages_file)) == list(shared_header_pages)

    @pytest.mark.parametrize(
        ("content", "reason"),
        [
            ('"just a string"', "expected a list or an object"),
            ("[1, 2]", "every descriptor must be an object"),
            ('{"https://a.test/": {"tagName": "a"}}', "must map to a list"),
        ],
    )
    def test_malformed(self, workdir, content, reason):
        path = workdir / "bad.json"
        path.write_text(content)

        with pytest.raises(DescriptorFileError) as exc_info:
            load_descriptor_file(path)

        assert reason in exc_info.value.message
