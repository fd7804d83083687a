"""Static pattern tables for locator stability decisions.

Each table is immutable and each entry states the one thing it detects,
so extending a table never silently changes the meaning of another entry.
"""

import re

# Dynamic id detection: any match marks an id as machine-generated per render
DYNAMIC_ID_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    # 8-4-4-4-12 hexadecimal UUID
    (
        "uuid",
        re.compile(
            r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
            re.IGNORECASE,
        ),
    ),
    # Hash-like hexadecimal run
    ("hex_run", re.compile(r"[0-9a-f]{16,}", re.IGNORECASE)),
    # Embedded timestamp or counter
    ("digit_run", re.compile(r"\d{10,}")),
    # Self-describing generated ids
    ("generated_token", re.compile(r"random|temp|generated|uuid|guid", re.IGNORECASE)),
    # React useId output such as ":r1:" or ":R2d6:"
    ("react_use_id", re.compile(r"^:[rR][0-9a-zA-Z]*:?")),
    # Ember view ids
    ("ember", re.compile(r"^ember\d+$")),
    # Material UI auto ids
    ("mui", re.compile(r"^mui-\d+")),
    # Radix and Headless UI primitives
    ("radix", re.compile(r"^radix-")),
    ("headlessui", re.compile(r"^headlessui-")),
    # JSF generated component ids
    ("jsf", re.compile(r"(^|:)j_idt\d+", re.IGNORECASE)),
    # ExtJS, GWT and YUI generated ids
    ("extjs", re.compile(r"^ext-gen\d+")),
    ("gwt", re.compile(r"^gwt-uid-\d+")),
    ("yui", re.compile(r"^yui_")),
    # react-select instance ids
    ("react_select", re.compile(r"^react-select-\d+")),
    # Angular Material and CDK numbered ids
    ("angular_material", re.compile(r"^(mat|cdk)-[\w-]*\d+$")),
)

# Test-automation attributes, in locator preference order
TEST_ID_LOCATOR_ATTRIBUTES = ("data-testid", "data-cy", "data-test")

# Class families that name a stable, meaningful component
MEANINGFUL_CLASS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    # Navigation bars and menus
    ("navigation", re.compile(r"nav|menu", re.IGNORECASE)),
    # Page header and masthead
    ("header", re.compile(r"header|masthead", re.IGNORECASE)),
    # Page footer
    ("footer", re.compile(r"footer", re.IGNORECASE)),
    # Side panels
    ("sidebar", re.compile(r"sidebar|side-bar|sidenav", re.IGNORECASE)),
    # Buttons and calls to action
    ("button", re.compile(r"btn|button|cta", re.IGNORECASE)),
    # Forms and fields
    ("form", re.compile(r"form|field", re.IGNORECASE)),
    # Brand marks
    ("logo", re.compile(r"logo|brand", re.IGNORECASE)),
    # Documentation sections
    ("docs", re.compile(r"docs|documentation", re.IGNORECASE)),
    # Toggles and switches
    ("toggle", re.compile(r"toggle|switch", re.IGNORECASE)),
    # Theme pickers
    ("theme", re.compile(r"theme|dark-mode|light-mode", re.IGNORECASE)),
)

# Utility classes that describe appearance, not identity
UTILITY_CLASS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    # Margin and padding scales: m-4, px-2, -mt-1, mb-auto
    ("spacing", re.compile(r"^-?[mp][trblxyse]?-(\d|auto|px)")),
    # Width and height scales
    ("sizing", re.compile(r"^(w|h|min-w|max-w|min-h|max-h|size)-")),
    # Display, flexbox and grid layout
    (
        "layout",
        re.compile(
            r"^(flex|grid|block|inline|hidden|container|row|col|clearfix"
            r"|relative|absolute|fixed|sticky|static)(-|$)"
            r"|^(d|justify|items|align|self|content|gap|space|order|float|overflow"
            r"|top|bottom|left|right|inset|z)-"
        ),
    ),
    # Colors, typography, borders and effects
    (
        "styling",
        re.compile(
            r"^(text|bg|font|border|rounded|shadow|opacity|leading|tracking|color"
            r"|fill|stroke|ring|outline|transition|duration|ease|animate|cursor)(-|$)"
            r"|^(underline|uppercase|lowercase|capitalize|truncate|italic)$"
        ),
    ),
    # Responsive and state variant prefixes: md:flex, hover:bg-blue
    ("responsive", re.compile(r"^(xs|sm|md|lg|xl|2xl|hover|focus|active|dark):")),
    # Bootstrap breakpoint infixes: col-md-6, d-lg-none
    ("breakpoint", re.compile(r"-(xs|sm|md|lg|xl|xxl)-")),
    # Explicit helper classes
    ("helper", re.compile(r"util|helper", re.IGNORECASE)),
)

# Class substrings that lift stability to medium
STRUCTURAL_CLASS_SUBSTRINGS = ("btn", "nav", "header", "footer", "form")

# Path segments that mark a link as site structure rather than content
STRUCTURAL_PATH_SEGMENTS = (
    "docs",
    "api",
    "blog",
    "about",
    "contact",
    "login",
    "logout",
    "signin",
    "signup",
    "register",
    "search",
    "home",
    "pricing",
    "help",
    "support",
    "faq",
    "account",
    "settings",
    "cart",
)

# Landmark tags that are unique enough to locate by tag alone
SEMANTIC_TAGS = ("header", "footer", "nav", "main", "aside", "section", "article")

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Plain CSS identifier usable after '#' or '.' without escaping
CSS_IDENTIFIER = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")


def is_dynamic_id(value: str | None) -> bool:
    """Check whether an id looks machine-generated.

    Args:
        value: The id attribute value.

    Returns:
        True if the id matches any dynamic id pattern.
    """
    if not value:
        return False
    return any(pattern.search(value) for _name, pattern in DYNAMIC_ID_PATTERNS)


def is_stable_id(value: str | None) -> bool:
    """Check whether an id is present and safe to hard-code."""
    return bool(value and value.strip()) and not is_dynamic_id(value.strip())


def is_utility_class(token: str) -> bool:
    """Check whether a class token is a styling or layout utility."""
    return any(pattern.search(token) for _name, pattern in UTILITY_CLASS_PATTERNS)


def meaningful_class_family(token: str) -> str | None:
    """Return the semantic family a class token belongs to, if any."""
    for family, pattern in MEANINGFUL_CLASS_PATTERNS:
        if pattern.search(token):
            return family
    return None


def meaningful_class(classes: tuple[str, ...] | list[str]) -> str | None:
    """Pick the most meaningful class token for a locator or name.

    Prefers a token from a semantic family that is not a utility class,
    then the first non-utility token longer than two characters.

    Args:
        classes: Ordered class tokens.

    Returns:
        The chosen class token or None.
    """
    for token in classes:
        if meaningful_class_family(token) and not is_utility_class(token):
            return token

    for token in classes:
        if len(token) > 2 and not is_utility_class(token):
            return token

    return None


def is_structural_href(href: str | None) -> bool:
    """Check whether a link target is part of the site's structure.

    Root paths, in-page fragments and recognized section paths qualify.
    """
    if not href:
        return False
    href = href.strip()
    if href in ("/", "./") or href.startswith("#"):
        return True

    path = re.sub(r"^[a-z][a-z0-9+.-]*://[^/]+", "", href, flags=re.IGNORECASE)
    path = path.split("?", 1)[0].split("#", 1)[0]
    if path in ("", "/"):
        # Site root, but not a bare query string on the current page
        return path == "/" or href != path and not href.startswith("?")

    segments = [segment.lower() for segment in path.split("/") if segment]
    return any(segment in STRUCTURAL_PATH_SEGMENTS for segment in segments)


__all__ = [
    "DYNAMIC_ID_PATTERNS",
    "MEANINGFUL_CLASS_PATTERNS",
    "UTILITY_CLASS_PATTERNS",
    "STRUCTURAL_CLASS_SUBSTRINGS",
    "STRUCTURAL_PATH_SEGMENTS",
    "SEMANTIC_TAGS",
    "HEADING_TAGS",
    "TEST_ID_LOCATOR_ATTRIBUTES",
    "CSS_IDENTIFIER",
    "is_dynamic_id",
    "is_stable_id",
    "is_utility_class",
    "meaningful_class_family",
    "meaningful_class",
    "is_structural_href",
]
