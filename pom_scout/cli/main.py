"""Click-based CLI interface for pom-scout."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..analyzer import ElementSimilarityAnalyzer
from ..config import load_scout_config
from ..orchestrator import ScoutOrchestrator
from ..scout_logging import LogCategory, get_category_logger, setup_logging
from .errors import CLIError, DescriptorFileError, ValidationError, handle_exception
from .reporter import JSONSummaryReporter, POMSummaryReporter

logger = get_category_logger(LogCategory.CLI)


def logging_options(f: Any) -> Any:
    """Common logging options."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option(
        "--log-file", type=click.Path(dir_okay=False), help="Also log to this file"
    )(f)
    return f


def _configure_logging(verbose: bool, quiet: bool, log_file: str | None) -> None:
    if quiet and verbose:
        raise ValidationError("--quiet and --verbose are mutually exclusive")
    setup_logging(
        level="WARNING",
        quiet=quiet,
        verbose=verbose,
        log_file=Path(log_file) if log_file else None,
    )


def _fail(error: Exception, verbose: bool = False) -> None:
    message, exit_code = handle_exception(
        error, use_color=sys.stderr.isatty(), verbose=verbose
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


def load_descriptor_file(path: Path) -> dict[str, list[dict[str, Any]]] | list[dict[str, Any]]:
    """Read saved element descriptors.

    Args:
        path: JSON file holding either a list of descriptors (each carrying
            its own page URL) or an object mapping page id to descriptors.

    Returns:
        The parsed list or mapping.

    Raises:
        DescriptorFileError: If the file is unreadable or malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DescriptorFileError(str(path), f"invalid JSON ({e})") from e
    except OSError as e:
        raise DescriptorFileError(str(path), str(e)) from e

    if isinstance(data, list):
        if not all(isinstance(item, dict) for item in data):
            raise DescriptorFileError(str(path), "every descriptor must be an object")
        return data

    if isinstance(data, dict):
        for page_id, descriptors in data.items():
            if not isinstance(descriptors, list) or not all(
                isinstance(item, dict) for item in descriptors
            ):
                raise DescriptorFileError(
                    str(path), f"page {page_id!r} must map to a list of objects"
                )
        return data

    raise DescriptorFileError(str(path), "expected a list or an object")


@click.group()
@click.version_option(version=__version__, prog_name="pom-scout")
def cli() -> None:
    """pom-scout - find elements shared across pages for a Playwright BasePage."""


@cli.command()
@click.argument("urls", nargs=-1)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0, 100),
    help="Minimum similarity percentage (default: 60)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file path",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    help="Directory for the report and BasePage files",
)
@click.option("--no-basepage", is_flag=True, help="Skip BasePage code generation")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@logging_options
def analyze(
    urls: tuple[str, ...],
    threshold: float | None,
    config_path: str | None,
    output_dir: str | None,
    no_basepage: bool,
    headed: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    log_file: str | None,
) -> None:
    """Crawl URLS and report elements recurring across them."""
    try:
        _configure_logging(verbose, quiet, log_file)
        config = load_scout_config(
            Path(config_path) if config_path else None,
            min_similarity=threshold,
            output_dir=output_dir,
            headless=False if headed else None,
        )

        orchestrator = ScoutOrchestrator(config)
        result = asyncio.run(orchestrator.run(list(urls), write_basepage=not no_basepage))
    except Exception as e:
        _fail(e, verbose=verbose)
        return

    if as_json:
        JSONSummaryReporter().report(result.analysis, errors=result.errors)
        return

    if quiet:
        return

    reporter = POMSummaryReporter()
    reporter.report(result.analysis)
    outputs = {"POM report": str(result.report_path)}
    if result.basepage_path:
        outputs["BasePage code suggestions"] = str(result.basepage_path)
    reporter.report_outputs(outputs)
    for error in result.errors:
        click.echo(f"Warning: {error}", err=True)


@cli.command()
@click.argument(
    "descriptors_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0, 100),
    default=60.0,
    show_default=True,
    help="Minimum similarity percentage",
)
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def compare(descriptors_file: Path, threshold: float, as_json: bool, verbose: bool) -> None:
    """Analyze saved element descriptors without a browser."""
    try:
        _configure_logging(verbose, False, None)
        data = load_descriptor_file(descriptors_file)
        analyzer = ElementSimilarityAnalyzer(threshold=threshold)
        if isinstance(data, dict):
            result = analyzer.analyze_pages(data)
        else:
            result = analyzer.analyze_descriptors(data)
    except CLIError as e:
        _fail(e, verbose=verbose)
        return

    if as_json:
        JSONSummaryReporter().report(result)
    else:
        POMSummaryReporter().report(result)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
