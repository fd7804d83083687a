"""Name synthesis for page object members.

Derives a readable lower-camel identifier for an element from its most
descriptive attribute, then appends a suffix describing the element kind
(``searchInput``, ``loginButton``, ``mainNavigation``).
"""

import re
import unicodedata
from collections.abc import Callable
from urllib.parse import urlsplit

from .locators.patterns import HEADING_TAGS, is_stable_id, meaningful_class
from .models import ElementCharacteristics, ElementRecord

MAX_TEXT_NAME_LENGTH = 30
DEFAULT_BASE_NAME = "element"

SEPARATOR_PATTERN = re.compile(r"[\s\-_.:/]+")
LEADING_FILLER = re.compile(r"^(btn|button|link|nav|menu|icon|img)(\s+|$)")
TRAILING_FILLER = re.compile(r"(?<=\S)\s+(btn|button|link|icon|img)$")
NON_ALPHANUMERIC = re.compile(r"[^0-9a-zA-Z]+")

# Readable fallbacks when an element has nothing better to offer
ROLE_NAMES = {
    "navigation": "navigation",
    "banner": "header",
    "contentinfo": "footer",
    "main": "main",
    "complementary": "sidebar",
    "search": "search",
    "dialog": "dialog",
    "alertdialog": "alert",
    "tablist": "tabs",
    "tabpanel": "tab panel",
    "menu": "main menu",
    "menubar": "main menu",
    "img": "image",
    "heading": "heading",
}

TAG_NAMES = {
    "nav": "navigation",
    "header": "header",
    "footer": "footer",
    "main": "main",
    "aside": "sidebar",
    "form": "form",
    "section": "section",
    "article": "article",
    "img": "image",
    "table": "table",
    "select": "dropdown",
    **{tag: "heading" for tag in HEADING_TAGS},
}

ROLE_SUFFIXES = {
    "button": "Button",
    "link": "Link",
    "tab": "Tab",
    "tabpanel": "Panel",
    "dialog": "Dialog",
    "alertdialog": "Dialog",
    "navigation": "Navigation",
    "search": "Search",
    "searchbox": "Search",
    "menu": "Menu",
    "menubar": "Menu",
    "menuitem": "MenuItem",
}

INPUT_TYPE_SUFFIXES = {
    "checkbox": "Checkbox",
    "radio": "Radio",
    "file": "FileInput",
    "date": "DateInput",
    "datetime-local": "DateInput",
    "time": "DateInput",
    "month": "DateInput",
    "week": "DateInput",
    "submit": "Button",
    "button": "Button",
    "reset": "Button",
}

TAG_SUFFIXES = {
    "button": "Button",
    "a": "Link",
    "img": "Image",
    "input": "Input",
    "select": "Dropdown",
    "textarea": "Textarea",
    "form": "Form",
    "table": "Table",
    "nav": "Navigation",
    "header": "Header",
    "footer": "Footer",
    "main": "Content",
    "aside": "Sidebar",
    "section": "Section",
    "article": "Article",
    **{tag: "Heading" for tag in HEADING_TAGS},
}

NameSource = Callable[[ElementCharacteristics], "str | None"]


def _test_id_source(char: ElementCharacteristics) -> str | None:
    test_id = char.test_id
    return test_id[1] if test_id else None


def _aria_label_source(char: ElementCharacteristics) -> str | None:
    return char.attr("aria-label")


def _id_source(char: ElementCharacteristics) -> str | None:
    element_id = char.attr("id")
    return element_id if is_stable_id(element_id) else None


def _placeholder_source(char: ElementCharacteristics) -> str | None:
    return char.placeholder


def _text_source(char: ElementCharacteristics) -> str | None:
    text = char.text_content
    return text if text and len(text) < MAX_TEXT_NAME_LENGTH else None


def _name_attribute_source(char: ElementCharacteristics) -> str | None:
    return char.attr("name")


def _class_source(char: ElementCharacteristics) -> str | None:
    return meaningful_class(char.classes)


def _href_source(char: ElementCharacteristics) -> str | None:
    if char.tag_name != "a" or not char.href:
        return None
    return href_token(char.href)


def _semantic_source(char: ElementCharacteristics) -> str | None:
    if char.role and char.role in ROLE_NAMES:
        return ROLE_NAMES[char.role]
    return TAG_NAMES.get(char.tag_name)


def _tag_source(char: ElementCharacteristics) -> str | None:
    return char.tag_name or None


# Ordered (name, source) table; the first non-empty source supplies the base name
NAME_SOURCES: tuple[tuple[str, NameSource], ...] = (
    ("test-id", _test_id_source),
    ("aria-label", _aria_label_source),
    ("id", _id_source),
    ("placeholder", _placeholder_source),
    ("text", _text_source),
    ("name", _name_attribute_source),
    ("class", _class_source),
    ("href", _href_source),
    ("semantic", _semantic_source),
    ("tag", _tag_source),
)


def href_token(href: str) -> str | None:
    """Derive a name token from a link target.

    Args:
        href: The link's href attribute.

    Returns:
        ``home`` for the site root, ``docs``/``api`` for those sections,
        otherwise the last non-empty path segment without its extension.
    """
    href = href.strip()
    if href.startswith("#"):
        return href[1:] or None

    path = urlsplit(href).path
    if path in ("", "/"):
        return "home"

    lowered = path.lower()
    if "/docs" in lowered:
        return "docs"
    if "/api" in lowered:
        return "api"

    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return "home"
    return segments[-1].rsplit(".", 1)[0] or segments[-1]


def clean_base_name(raw: str) -> str:
    """Lowercase, separate words and strip filler tokens.

    Args:
        raw: Raw base name from a name source.

    Returns:
        Space separated words, or ``element`` when nothing remains.
    """
    text = SEPARATOR_PATTERN.sub(" ", raw.lower()).strip()
    text = LEADING_FILLER.sub("", text)
    text = TRAILING_FILLER.sub("", text)
    text = SEPARATOR_PATTERN.sub(" ", text).strip()
    return text or DEFAULT_BASE_NAME


def to_camel_case(text: str) -> str:
    """Convert words to a lower-camel identifier.

    Non-ASCII letters are folded to ASCII, other non-alphanumerics are
    dropped and leading numeric words are skipped.
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    words = [word for word in NON_ALPHANUMERIC.split(ascii_text) if word]
    while words and words[0][0].isdigit():
        words.pop(0)
    if not words:
        return DEFAULT_BASE_NAME
    first, rest = words[0], words[1:]
    return first[0].lower() + first[1:] + "".join(w[0].upper() + w[1:] for w in rest)


def element_suffix(char: ElementCharacteristics) -> str:
    """Suffix describing the element kind; role wins over tag and type."""
    if char.role and char.role in ROLE_SUFFIXES:
        return ROLE_SUFFIXES[char.role]

    element_type = (char.type or "").lower()
    if char.tag_name == "input" or element_type in ("submit", "button", "reset"):
        if element_type in INPUT_TYPE_SUFFIXES:
            return INPUT_TYPE_SUFFIXES[element_type]

    return TAG_SUFFIXES.get(char.tag_name, "Element")


class NameSynthesizer:
    """Produces page object member names for elements."""

    def __init__(
        self,
        sources: tuple[tuple[str, NameSource], ...] = NAME_SOURCES,
    ):
        """Initialize the synthesizer.

        Args:
            sources: Ordered base-name source table.
        """
        self.sources = sources

    def base_name(self, record: ElementRecord) -> tuple[str, str]:
        """Find the raw base name and the source it came from.

        Args:
            record: Element record to name.

        Returns:
            Tuple of (source name, raw base string).
        """
        char = record.characteristics
        for source_name, source in self.sources:
            value = source(char)
            if value and value.strip():
                return source_name, value.strip()
        return "default", DEFAULT_BASE_NAME

    def suggest_name(self, record: ElementRecord) -> str:
        """Suggest a lower-camel member name for a record.

        Args:
            record: Element record to name.

        Returns:
            Identifier such as ``submitButton``.
        """
        _source, raw = self.base_name(record)
        camel = to_camel_case(clean_base_name(raw))
        suffix = element_suffix(record.characteristics)

        # Only a whole trailing camel word counts as the suffix
        if camel.endswith(suffix) or camel == suffix[0].lower() + suffix[1:]:
            return camel
        return camel + suffix


__all__ = [
    "NAME_SOURCES",
    "NameSynthesizer",
    "clean_base_name",
    "element_suffix",
    "href_token",
    "to_camel_case",
]
