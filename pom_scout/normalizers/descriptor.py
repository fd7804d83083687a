"""Descriptor normalizer for raw element descriptors.

Turns the loosely typed mappings produced by the extraction script into
ElementRecord instances. Missing or malformed fields become empty values,
never errors.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from ..models import ElementCharacteristics, ElementRecord

DEFAULT_TEXT_LIMIT = 100

# Optional characteristics that may arrive either as top-level keys or attributes
OPTIONAL_FIELDS = ("role", "placeholder", "type", "href", "src")


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present (not None) value among the given keys."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class DescriptorNormalizer:
    """Validates and defaults raw element descriptors.

    Accepts the camelCase keys of the extraction script (``tagName``,
    ``textContent``, ``pageUrl``) as well as their snake_case spellings.
    """

    def __init__(self, text_limit: int = DEFAULT_TEXT_LIMIT):
        """Initialize the normalizer.

        Args:
            text_limit: Maximum number of characters of visible text kept.
        """
        self.text_limit = text_limit

    def normalize(self, descriptor: Mapping[str, Any]) -> ElementRecord:
        """Normalize a single raw descriptor.

        Args:
            descriptor: Raw descriptor mapping.

        Returns:
            ElementRecord with canonical characteristics.
        """
        raw_chars = descriptor.get("characteristics")
        source = raw_chars if isinstance(raw_chars, Mapping) else descriptor

        characteristics = self.normalize_characteristics(source)
        selector = _as_text(descriptor.get("selector")) or characteristics.tag_name
        page_id = _as_text(_first(descriptor, "pageUrl", "page_url", "page_id", "page"))

        return ElementRecord(
            selector=selector,
            characteristics=characteristics,
            xpath=_as_text(descriptor.get("xpath")),
            page_id=page_id,
        )

    def normalize_many(
        self,
        descriptors: Iterable[Mapping[str, Any]],
        page_id: str | None = None,
    ) -> list[ElementRecord]:
        """Normalize a sequence of descriptors.

        Args:
            descriptors: Raw descriptor mappings.
            page_id: Page identifier applied to descriptors that lack one.

        Returns:
            List of ElementRecord in input order.
        """
        records = []
        for descriptor in descriptors:
            if not isinstance(descriptor, Mapping):
                continue
            if page_id is not None and not _first(
                descriptor, "pageUrl", "page_url", "page_id", "page"
            ):
                descriptor = {**descriptor, "pageUrl": page_id}
            records.append(self.normalize(descriptor))
        return records

    def normalize_characteristics(
        self, data: Mapping[str, Any]
    ) -> ElementCharacteristics:
        """Build ElementCharacteristics from a raw mapping.

        Args:
            data: Mapping with tag, classes, attributes and text fields.

        Returns:
            Normalized, immutable characteristics.
        """
        attributes = self._normalize_attributes(data.get("attributes"))

        optional: dict[str, str | None] = {}
        for name in OPTIONAL_FIELDS:
            value = _as_text(data.get(name)) or _as_text(attributes.get(name))
            optional[name] = value or None

        text = " ".join(
            _as_text(_first(data, "textContent", "text_content", "text")).split()
        )

        return ElementCharacteristics(
            tag_name=_as_text(_first(data, "tagName", "tag_name", "tag")).lower(),
            classes=self._normalize_classes(data.get("classes"), attributes),
            attributes=attributes,
            text_content=text[: self.text_limit],
            **optional,
        )

    def _normalize_attributes(self, raw: Any) -> dict[str, str]:
        """Coerce attribute values to strings, dropping null entries."""
        if not isinstance(raw, Mapping):
            return {}
        return {
            str(name): str(value)
            for name, value in raw.items()
            if name and value is not None
        }

    def _normalize_classes(
        self, raw: Any, attributes: Mapping[str, str]
    ) -> tuple[str, ...]:
        """Ordered, de-duplicated class tokens.

        Falls back to splitting the ``class`` attribute when no class list
        was supplied.
        """
        if isinstance(raw, str):
            tokens = raw.split()
        elif isinstance(raw, Iterable):
            tokens = [_as_text(token) for token in raw]
        else:
            tokens = attributes.get("class", "").split()

        seen: set[str] = set()
        ordered = []
        for token in tokens:
            if token and token not in seen:
                seen.add(token)
                ordered.append(token)
        return tuple(ordered)


__all__ = [
    "DEFAULT_TEXT_LIMIT",
    "DescriptorNormalizer",
]
