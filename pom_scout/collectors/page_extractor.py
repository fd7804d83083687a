"""Playwright-based element extraction.

Loads each page in Chromium and pulls raw element descriptors out of the
rendered DOM in a single script evaluation per page. Descriptors are plain
mappings consumed by the descriptor normalizer.
"""

import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..cli.errors import NavigationError
from ..scout_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.COLLECTOR)

# Elements worth considering for a page object, in extraction order
ELEMENT_SELECTORS = (
    "button",
    "input",
    "a",
    "form",
    "[data-testid]",
    '[class*="btn"]',
    '[role="button"]',
    "nav",
    "header",
    "footer",
    ".card",
    ".modal",
    "[id]",
)

# Runs in the page; returns one descriptor per distinct matched element
EXTRACTION_SCRIPT = """
([selectors, maxElements, textLimit]) => {
    const seen = new Set();
    const descriptors = [];

    const simpleSelector = (el) => {
        let selector = el.tagName.toLowerCase();
        if (el.id) {
            return `#${el.id}`;
        }
        const classes = Array.from(el.classList).slice(0, 3);
        if (classes.length > 0) {
            selector += '.' + classes.join('.');
        }
        return selector;
    };

    const xpathOf = (el) => {
        if (el.id) {
            return `//*[@id="${el.id}"]`;
        }
        if (el === document.body) {
            return '/html/body';
        }
        const parent = el.parentElement;
        if (!parent) {
            return '/' + el.tagName.toLowerCase();
        }
        let index = 0;
        for (const sibling of parent.children) {
            if (sibling === el) {
                break;
            }
            if (sibling.tagName === el.tagName) {
                index++;
            }
        }
        return `${xpathOf(parent)}/${el.tagName.toLowerCase()}[${index + 1}]`;
    };

    for (const selector of selectors) {
        let matches;
        try {
            matches = document.querySelectorAll(selector);
        } catch (e) {
            continue;
        }
        for (const el of matches) {
            if (seen.has(el)) {
                continue;
            }
            if (descriptors.length >= maxElements) {
                return descriptors;
            }
            seen.add(el);

            const attributes = {};
            for (const attr of el.attributes) {
                attributes[attr.name] = attr.value;
            }

            descriptors.push({
                tagName: el.tagName.toLowerCase(),
                classes: Array.from(el.classList),
                attributes: attributes,
                textContent: (el.textContent || '').trim().substring(0, textLimit),
                role: el.getAttribute('role'),
                placeholder: el.getAttribute('placeholder'),
                type: el.getAttribute('type'),
                href: el.getAttribute('href'),
                src: el.getAttribute('src'),
                selector: simpleSelector(el),
                xpath: xpathOf(el),
            });
        }
    }
    return descriptors;
}
"""


@dataclass
class PageExtraction:
    """Raw descriptors extracted from a single page."""

    url: str
    descriptors: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    extraction_time_ms: float = 0.0

    @property
    def has_errors(self) -> bool:
        """Check if extraction had any errors."""
        return len(self.errors) > 0

    @property
    def element_count(self) -> int:
        """Number of descriptors extracted."""
        return len(self.descriptors)

    @property
    def succeeded(self) -> bool:
        """Whether the page loaded and produced at least one descriptor."""
        return not self.has_errors and self.element_count > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "descriptors": self.descriptors,
            "errors": self.errors,
            "extraction_time_ms": self.extraction_time_ms,
        }


class PageElementCollector:
    """Collects raw element descriptors from live pages with Playwright.

    Use as an async context manager so the browser is always closed:

        async with PageElementCollector() as collector:
            extractions = await collector.collect(urls)
    """

    def __init__(
        self,
        navigation_timeout_ms: int = 30000,
        headless: bool = True,
        max_elements_per_page: int = 500,
        text_limit: int = 100,
        selectors: Iterable[str] = ELEMENT_SELECTORS,
    ):
        """Initialize the collector.

        Args:
            navigation_timeout_ms: Timeout for each page load.
            headless: Whether to run the browser headless.
            max_elements_per_page: Stop extracting a page after this many elements.
            text_limit: Maximum visible text length kept per element.
            selectors: CSS selectors for the elements to extract.
        """
        self.navigation_timeout_ms = navigation_timeout_ms
        self.headless = headless
        self.max_elements_per_page = max_elements_per_page
        self.text_limit = text_limit
        self.selectors = list(selectors)

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> "PageElementCollector":
        """Async context manager entry."""
        await self._start_playwright()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self._stop_playwright()

    async def _start_playwright(self) -> None:
        """Start Playwright browser."""
        if self._playwright is None:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless
            )
            logger.info("Browser initialized")

    async def _stop_playwright(self) -> None:
        """Stop Playwright browser."""
        if self._browser:
            await self._browser.close()
            self._browser = None
            logger.info("Browser closed")
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def extract(self, page: Page, url: str) -> list[dict[str, Any]]:
        """Extract descriptors from an already loaded page.

        Args:
            page: Loaded Playwright page.
            url: Page identifier stamped on every descriptor.

        Returns:
            Raw descriptor mappings in extraction order.
        """
        descriptors = await page.evaluate(
            EXTRACTION_SCRIPT,
            [self.selectors, self.max_elements_per_page, self.text_limit],
        )
        for descriptor in descriptors:
            descriptor["pageUrl"] = url
        return descriptors

    async def collect_page(self, url: str) -> PageExtraction:
        """Load one URL and extract its descriptors.

        Navigation and script failures are recorded on the result rather
        than raised.

        Args:
            url: URL to load.

        Returns:
            PageExtraction for the URL.
        """
        if not self._browser:
            await self._start_playwright()

        start_time = time.time()
        result = PageExtraction(url=url)

        page = await self._browser.new_page()
        try:
            await page.goto(
                url, wait_until="networkidle", timeout=self.navigation_timeout_ms
            )
            logger.debug(f"Navigated to {url}")
            result.descriptors = await self.extract(page, url)
        except PlaywrightError as e:
            # Playwright appends a multi-line call log to its messages
            lines = str(e).splitlines()
            error = NavigationError(url, lines[0] if lines else None)
            logger.error(error.message)
            result.errors.append(error.message)
        finally:
            await page.close()

        result.extraction_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Extracted {result.element_count} elements from {url}",
            extra={
                "page_url": url,
                "element_count": result.element_count,
                "duration_ms": result.extraction_time_ms,
            },
        )
        return result

    async def collect(self, urls: Iterable[str]) -> list[PageExtraction]:
        """Extract descriptors from every URL in order.

        Args:
            urls: URLs to load.

        Returns:
            One PageExtraction per URL, failed pages included.
        """
        return [await self.collect_page(url) for url in urls]


__all__ = [
    "ELEMENT_SELECTORS",
    "EXTRACTION_SCRIPT",
    "PageExtraction",
    "PageElementCollector",
]
