"""
Shared fixtures for the pom-scout test suite.

Provides test fixtures for:
- Element record construction from raw descriptors
- Multi-page descriptor sets
- Configuration and logging isolation between tests
"""

import logging
from collections.abc import Callable
from typing import Any

import pytest

from pom_scout.models import ElementRecord
from pom_scout.normalizers.descriptor import DescriptorNormalizer
from pom_scout.scout_logging import LOGGER_NAME

PAGE_HOME = "https://shop.test/"
PAGE_CART = "https://shop.test/cart"
PAGE_ACCOUNT = "https://shop.test/account"


def descriptor(
    tag: str = "button",
    page: str = PAGE_HOME,
    classes: list[str] | None = None,
    attributes: dict[str, str] | None = None,
    text: str = "",
    selector: str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Build a raw descriptor as the extraction script produces it."""
    return {
        "tagName": tag,
        "classes": classes or [],
        "attributes": attributes or {},
        "textContent": text,
        "selector": selector or tag,
        "xpath": f"/html/body/{tag}[1]",
        "pageUrl": page,
        **fields,
    }


@pytest.fixture
def make_descriptor() -> Callable[..., dict[str, Any]]:
    """Factory for raw descriptors."""
    return descriptor


@pytest.fixture
def make_record() -> Callable[..., ElementRecord]:
    """Factory for normalized element records."""
    normalizer = DescriptorNormalizer()

    def _make(*args: Any, **kwargs: Any) -> ElementRecord:
        return normalizer.normalize(descriptor(*args, **kwargs))

    return _make


@pytest.fixture
def shared_header_pages() -> dict[str, list[dict[str, Any]]]:
    """Three pages sharing a header, a search box and a cart link."""
    pages: dict[str, list[dict[str, Any]]] = {}
    for page, heading in (
        (PAGE_HOME, "Welcome"),
        (PAGE_CART, "Your cart"),
        (PAGE_ACCOUNT, "Account settings"),
    ):
        pages[page] = [
            descriptor(
                "input",
                page,
                classes=["search-input", "form-control"],
                attributes={"type": "search", "placeholder": "Search products"},
                selector="input.search-input.form-control",
            ),
            descriptor(
                "a",
                page,
                classes=["nav-link", "cart-link"],
                attributes={"href": "/cart"},
                text="Cart",
                selector="a.nav-link.cart-link",
            ),
            descriptor("h1", page, text=heading),
        ]
    return pages


@pytest.fixture(autouse=True)
def clean_scout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep POM_SCOUT_* variables from the host out of every test."""
    for name in (
        "POM_SCOUT_MIN_SIMILARITY",
        "POM_SCOUT_HEADLESS",
        "POM_SCOUT_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging once a test finishes."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
