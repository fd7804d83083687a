"""Locator selection and stability classification."""

from .classifier import LOCATOR_RULES, LocatorClassifier
from .patterns import is_dynamic_id, is_structural_href, meaningful_class

__all__ = [
    "LOCATOR_RULES",
    "LocatorClassifier",
    "is_dynamic_id",
    "is_structural_href",
    "meaningful_class",
]
