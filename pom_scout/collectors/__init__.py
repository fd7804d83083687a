"""Collectors that pull raw element descriptors from rendered pages."""

from .page_extractor import (
    ELEMENT_SELECTORS,
    PageElementCollector,
    PageExtraction,
)

__all__ = [
    "ELEMENT_SELECTORS",
    "PageElementCollector",
    "PageExtraction",
]
