"""Tests for locator selection, stability rating and pattern tables."""

import pytest

from pom_scout.locators.classifier import LOCATOR_RULES, LocatorClassifier, quote
from pom_scout.locators.patterns import (
    DYNAMIC_ID_PATTERNS,
    is_dynamic_id,
    is_structural_href,
    is_utility_class,
    meaningful_class,
)
from pom_scout.models import Recommendation, Stability

PAGE = "https://site.test/"


@pytest.fixture
def classifier():
    """Create a default classifier."""
    return LocatorClassifier()


class TestSelectLocator:
    """Tests for LocatorClassifier.select_locator."""

    def test_test_id_first(self, classifier, make_record):
        record = make_record(
            "button",
            PAGE,
            attributes={"data-testid": "submit-btn", "id": "submit"},
            text="Submit",
        )
        assert classifier.select_locator(record) == (
            "test-id",
            '[data-testid="submit-btn"]',
        )

    def test_data_cy_is_a_test_id(self, classifier, make_record):
        record = make_record("button", PAGE, attributes={"data-cy": "checkout"})
        assert classifier.best_locator(record) == '[data-cy="checkout"]'

    def test_role_with_aria_label(self, classifier, make_record):
        record = make_record(
            "div", PAGE, attributes={"role": "dialog", "aria-label": "Sign in"}
        )
        assert classifier.best_locator(record) == '[role="dialog"][aria-label="Sign in"]'

    def test_aria_label(self, classifier, make_record):
        record = make_record("button", PAGE, attributes={"aria-label": "Close"})
        assert classifier.best_locator(record) == '[aria-label="Close"]'

    def test_form_name(self, classifier, make_record):
        record = make_record("form", PAGE, attributes={"name": "login"})
        assert classifier.best_locator(record) == 'form[name="login"]'

    def test_image_alt(self, classifier, make_record):
        record = make_record("img", PAGE, attributes={"alt": "Company logo"})
        assert classifier.best_locator(record) == 'img[alt="Company logo"]'

    def test_email_input_with_placeholder(self, classifier, make_record):
        """Inputs are located by type plus a placeholder prefix."""
        record = make_record(
            "input",
            PAGE,
            attributes={"type": "email", "placeholder": "Enter your email"},
        )
        assert classifier.select_locator(record) == (
            "input-type",
            'input[type="email"][placeholder*="Enter your email"]',
        )

    def test_long_placeholder_is_truncated(self, classifier, make_record):
        record = make_record(
            "input",
            PAGE,
            attributes={"type": "email", "placeholder": "Enter your email address here"},
        )
        assert (
            classifier.best_locator(record)
            == 'input[type="email"][placeholder*="Enter your email add"]'
        )

    def test_input_name_without_placeholder(self, classifier, make_record):
        record = make_record("input", PAGE, attributes={"type": "text", "name": "q"})
        assert classifier.best_locator(record) == 'input[type="text"][name="q"]'

    def test_button_text(self, classifier, make_record):
        record = make_record("button", PAGE, text="Add to cart")
        assert classifier.best_locator(record) == 'button:has-text("Add to cart")'

    def test_long_button_text_is_skipped(self, classifier, make_record):
        record = make_record(
            "button", PAGE, classes=["btn"], text="Continue to the secure checkout page now"
        )
        assert classifier.best_locator(record) == ".btn"

    def test_structural_href(self, classifier, make_record):
        record = make_record("a", PAGE, attributes={"href": "/docs/intro"}, text="Docs")
        assert classifier.best_locator(record) == 'a[href="/docs/intro"]'

    def test_static_id(self, classifier, make_record):
        record = make_record("div", PAGE, attributes={"id": "main-menu"})
        assert classifier.best_locator(record) == "#main-menu"

    def test_dynamic_id_is_rejected(self, classifier, make_record):
        """A UUID id never becomes the locator."""
        record = make_record(
            "div",
            PAGE,
            classes=["card"],
            attributes={"id": "3f2b8c1e-9a4d-4b6e-8f00-1c2d3e4f5a6b"},
        )
        rule, locator = classifier.select_locator(record)

        assert rule == "meaningful-class"
        assert locator == ".card"

    @pytest.mark.parametrize("attribute", ["aria-labelledby", "name"])
    def test_generated_landmark_attribute_is_rejected(
        self, classifier, make_record, attribute
    ):
        record = make_record("nav", PAGE, attributes={attribute: "radix-:r3:"})

        assert classifier.select_locator(record) == ("semantic-tag", "nav")

    def test_stable_landmark_attribute(self, classifier, make_record):
        record = make_record("nav", PAGE, attributes={"aria-labelledby": "main-menu"})

        assert classifier.select_locator(record) == (
            "semantic-attribute",
            'nav[aria-labelledby="main-menu"]',
        )

    def test_generated_form_name_falls_back_to_action(self, classifier, make_record):
        record = make_record(
            "form", PAGE, attributes={"name": "ember123", "action": "/search"}
        )

        assert classifier.select_locator(record) == (
            "semantic-attribute",
            'form[action="/search"]',
        )

    def test_utility_classes_are_skipped(self, classifier, make_record):
        record = make_record("div", PAGE, classes=["flex", "mt-4", "navbar"])
        assert classifier.best_locator(record) == ".navbar"

    def test_semantic_tag(self, classifier, make_record):
        assert classifier.best_locator(make_record("footer", PAGE)) == "footer"

    def test_heading_text(self, classifier, make_record):
        record = make_record("h2", PAGE, text="Featured")
        assert classifier.best_locator(record) == 'h2:has-text("Featured")'

    def test_tag_fallback(self, classifier, make_record):
        assert classifier.select_locator(make_record("span", PAGE)) == ("tag", "span")

    def test_quotes_are_escaped(self, classifier, make_record):
        record = make_record("button", PAGE, attributes={"aria-label": 'Say "hi"'})
        assert classifier.best_locator(record) == '[aria-label="Say \\"hi\\""]'

    def test_rule_table_order(self):
        """Test ids are tried first and the bare tag last."""
        names = [name for name, _rule in LOCATOR_RULES]
        assert names[0] == "test-id"
        assert names[-1] == "tag"


class TestAssessStability:
    """Tests for stability rating and recommendations."""

    def test_test_id_is_high(self, classifier, make_record):
        record = make_record("button", PAGE, attributes={"data-testid": "x"})
        assert classifier.assess_stability(record) is Stability.HIGH
        assert classifier.recommend(record) is Recommendation.BASE_PAGE_CANDIDATE

    def test_static_id_is_high(self, classifier, make_record):
        record = make_record("div", PAGE, attributes={"id": "cart"})
        assert classifier.assess_stability(record) is Stability.HIGH

    def test_role_is_high(self, classifier, make_record):
        record = make_record("div", PAGE, role="navigation")
        assert classifier.assess_stability(record) is Stability.HIGH

    def test_dynamic_id_is_not_high(self, classifier, make_record):
        record = make_record("div", PAGE, attributes={"id": "ember1234"})
        assert classifier.assess_stability(record) is Stability.LOW

    def test_structural_class_is_medium(self, classifier, make_record):
        record = make_record("a", PAGE, classes=["main-nav-link"])
        assert classifier.assess_stability(record) is Stability.MEDIUM
        assert classifier.recommend(record) is Recommendation.BASE_PAGE_CONDITIONAL

    def test_nothing_durable_is_low(self, classifier, make_record):
        record = make_record("span", PAGE, classes=["price"])
        assert classifier.assess_stability(record) is Stability.LOW
        assert classifier.recommend(record) is Recommendation.PAGE_SPECIFIC


class TestPatterns:
    """Tests for the static pattern tables."""

    @pytest.mark.parametrize(
        "value",
        [
            "550e8400-e29b-41d4-a716-446655440000",
            "3f2b8c1e-9a4d-4b6e-8f00-1c2d3e4f5a6b",
            "a1b2c3d4e5f6a7b8c9d0",
            "item-1699999999999",
            "random-42",
            ":r1:",
            "ember512",
            "mui-7",
            "radix-:r3:",
            "headlessui-menu-button-1",
            "form:j_idt45",
            "react-select-3-input",
            "mat-input-0",
        ],
    )
    def test_dynamic_ids(self, value):
        assert is_dynamic_id(value)

    @pytest.mark.parametrize("value", ["main-nav", "search", "login-form", "cart", ""])
    def test_static_ids(self, value):
        assert not is_dynamic_id(value)

    def test_every_pattern_is_named(self):
        names = [name for name, _pattern in DYNAMIC_ID_PATTERNS]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize(
        "token", ["mt-4", "px-2", "flex", "text-center", "md:flex", "col-md-6", "w-full"]
    )
    def test_utility_classes(self, token):
        assert is_utility_class(token)

    @pytest.mark.parametrize("token", ["navbar", "collection", "statistics", "card"])
    def test_non_utility_classes(self, token):
        assert not is_utility_class(token)

    def test_meaningful_class_prefers_semantic_family(self):
        assert meaningful_class(["product", "flex", "btn-primary"]) == "btn-primary"

    def test_meaningful_class_falls_back_to_first_non_utility(self):
        assert meaningful_class(["mt-2", "ab", "product"]) == "product"

    def test_meaningful_class_none(self):
        assert meaningful_class(["mt-2", "p-4"]) is None

    @pytest.mark.parametrize(
        ("href", "expected"),
        [
            ("/", True),
            ("#main", True),
            ("/docs/getting-started", True),
            ("https://site.test/login", True),
            ("https://site.test", True),
            ("/products/blue-shirt-123", False),
            ("?page=2", False),
            ("", False),
            (None, False),
        ],
    )
    def test_structural_href(self, href, expected):
        assert is_structural_href(href) is expected


def test_quote_escapes_backslashes_and_quotes():
    assert quote('a\\"b') == '"a\\\\\\"b"'


def test_uuid_id_never_becomes_locator(classifier, make_record):
    record = make_record(
        "section", PAGE, attributes={"id": "550e8400-e29b-41d4-a716-446655440000"}
    )

    assert "550e8400" not in classifier.best_locator(record)
    assert classifier.assess_stability(record) is Stability.LOW
