"""Locator stability classifier.

Selects the most durable locator for an element through an ordered rule
table and rates the element's overall stability for page object
recommendations.
"""

from collections.abc import Callable

from ..models import ElementCharacteristics, ElementRecord, Recommendation, Stability
from .patterns import (
    CSS_IDENTIFIER,
    HEADING_TAGS,
    SEMANTIC_TAGS,
    STRUCTURAL_CLASS_SUBSTRINGS,
    TEST_ID_LOCATOR_ATTRIBUTES,
    is_stable_id,
    is_structural_href,
    meaningful_class,
)

PLACEHOLDER_PREFIX_LENGTH = 20
MAX_BUTTON_TEXT_LENGTH = 30

# Landmark tags that may be anchored on a naming attribute
LANDMARK_TAGS = ("nav", "header", "footer", "main", "aside")

LocatorRule = Callable[[ElementCharacteristics], "str | None"]


def quote(value: str) -> str:
    """Quote an attribute value for a CSS or Playwright selector."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def attribute_selector(name: str, value: str, prefix: str = "") -> str:
    """Build an attribute-equality selector such as ``[name="value"]``."""
    return f"{prefix}[{name}={quote(value)}]"


def _test_id_rule(char: ElementCharacteristics) -> str | None:
    for name in TEST_ID_LOCATOR_ATTRIBUTES:
        value = char.attr(name)
        if value:
            return attribute_selector(name, value)
    return None


def _role_rule(char: ElementCharacteristics) -> str | None:
    if not char.role:
        return None
    selector = attribute_selector("role", char.role)
    label = char.attr("aria-label")
    if label:
        selector += attribute_selector("aria-label", label)
    return selector


def _aria_label_rule(char: ElementCharacteristics) -> str | None:
    label = char.attr("aria-label")
    return attribute_selector("aria-label", label) if label else None


def _semantic_attribute_rule(char: ElementCharacteristics) -> str | None:
    tag = char.tag_name
    if tag == "form":
        for name in ("name", "action"):
            value = char.attr(name)
            if value and (name != "name" or is_stable_id(value)):
                return attribute_selector(name, value, prefix=tag)
    elif tag in LANDMARK_TAGS:
        # name and aria-labelledby often carry generated ids
        for name in ("name", "aria-labelledby"):
            value = char.attr(name)
            if is_stable_id(value):
                return attribute_selector(name, value, prefix=tag)
    elif tag == "img":
        alt = char.attr("alt")
        if alt:
            return attribute_selector("alt", alt, prefix=tag)
    return None


def _input_type_rule(char: ElementCharacteristics) -> str | None:
    if char.tag_name != "input" or not char.type:
        return None
    selector = attribute_selector("type", char.type, prefix="input")
    if char.placeholder:
        prefix = char.placeholder[:PLACEHOLDER_PREFIX_LENGTH]
        return f"{selector}[placeholder*={quote(prefix)}]"
    name = char.attr("name")
    if name:
        return selector + attribute_selector("name", name)
    return selector


def _button_text_rule(char: ElementCharacteristics) -> str | None:
    text = char.text_content
    if char.tag_name != "button" or not text or len(text) > MAX_BUTTON_TEXT_LENGTH:
        return None
    return f"button:has-text({quote(text)})"


def _structural_href_rule(char: ElementCharacteristics) -> str | None:
    if char.tag_name != "a" or not is_structural_href(char.href):
        return None
    return attribute_selector("href", char.href.strip(), prefix="a")


def _id_rule(char: ElementCharacteristics) -> str | None:
    element_id = char.attr("id")
    if not is_stable_id(element_id):
        return None
    if CSS_IDENTIFIER.match(element_id):
        return f"#{element_id}"
    return attribute_selector("id", element_id)


def _meaningful_class_rule(char: ElementCharacteristics) -> str | None:
    token = meaningful_class(char.classes)
    if not token or not CSS_IDENTIFIER.match(token):
        return None
    return f".{token}"


def _semantic_tag_rule(char: ElementCharacteristics) -> str | None:
    return char.tag_name if char.tag_name in SEMANTIC_TAGS else None


def _heading_text_rule(char: ElementCharacteristics) -> str | None:
    if char.tag_name not in HEADING_TAGS or not char.text_content:
        return None
    return f"{char.tag_name}:has-text({quote(char.text_content)})"


def _tag_rule(char: ElementCharacteristics) -> str | None:
    return char.tag_name or "*"


# Ordered (name, rule) table; the first rule returning a locator wins
LOCATOR_RULES: tuple[tuple[str, LocatorRule], ...] = (
    ("test-id", _test_id_rule),
    ("role", _role_rule),
    ("aria-label", _aria_label_rule),
    ("semantic-attribute", _semantic_attribute_rule),
    ("input-type", _input_type_rule),
    ("button-text", _button_text_rule),
    ("structural-href", _structural_href_rule),
    ("id", _id_rule),
    ("meaningful-class", _meaningful_class_rule),
    ("semantic-tag", _semantic_tag_rule),
    ("heading-text", _heading_text_rule),
    ("tag", _tag_rule),
)


class LocatorClassifier:
    """Ranks locator strategies and rates element stability.

    Locator selection and stability rating are independent: an element
    located by its text can still be rated high when it carries a role.
    """

    def __init__(
        self,
        rules: tuple[tuple[str, LocatorRule], ...] = LOCATOR_RULES,
    ):
        """Initialize the classifier.

        Args:
            rules: Ordered locator rule table.
        """
        self.rules = rules

    def select_locator(self, record: ElementRecord) -> tuple[str, str]:
        """Pick the best locator and the rule that produced it.

        Args:
            record: Element record to locate.

        Returns:
            Tuple of (rule name, locator string).
        """
        char = record.characteristics
        for name, rule in self.rules:
            locator = rule(char)
            if locator:
                return name, locator
        return "tag", char.tag_name or "*"

    def best_locator(self, record: ElementRecord) -> str:
        """Return the most durable locator string for a record."""
        return self.select_locator(record)[1]

    def assess_stability(self, record: ElementRecord) -> Stability:
        """Rate how likely the element is to stay locatable.

        Args:
            record: Element record to rate.

        Returns:
            HIGH for test ids, static ids or roles; MEDIUM for structural
            class names; LOW otherwise.
        """
        char = record.characteristics
        if char.test_id or is_stable_id(char.attr("id")) or char.role:
            return Stability.HIGH

        if any(
            substring in cls
            for cls in char.classes
            for substring in STRUCTURAL_CLASS_SUBSTRINGS
        ):
            return Stability.MEDIUM

        return Stability.LOW

    def recommend(self, record: ElementRecord) -> Recommendation:
        """Map the record's stability to a page object recommendation."""
        return Recommendation.from_stability(self.assess_stability(record))


__all__ = [
    "LOCATOR_RULES",
    "LocatorClassifier",
    "attribute_selector",
    "quote",
]
