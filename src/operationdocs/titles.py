"""Display titles for operation snippets."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .selection import Snippet


DEFAULT_TITLES: Mapping[str, str] = MappingProxyType(
    {
        "http-request": "HTTP request",
        "curl-request": "Curl request",
        "httpie-request": "HTTPie request",
        "request-body": "Request body",
        "request-fields": "Request fields",
        "http-response": "HTTP response",
        "response-body": "Response body",
        "response-fields": "Response fields",
        "links": "Links",
    }
)


def title_attribute(name: str) -> str:
    """Return the document attribute overriding the title of ``name``."""
    return f"operation-{name}-title"


def derive_title(name: str) -> str:
    """Turn ``custom-thing`` into ``Custom thing``."""
    return name.replace("-", " ", 1).capitalize()


def title_for(name: str, overrides: Mapping[str, Any] | None = None) -> str:
    """Resolve the heading displayed above snippet ``name``.

    Document attributes win over the built-in table, which wins over the title
    derived from the snippet name.
    """
    if overrides:
        override = overrides.get(title_attribute(name))
        if override is not None and str(override).strip():
            return str(override)
    default = DEFAULT_TITLES.get(name)
    if default is not None:
        return default
    return derive_title(name)


class SnippetTitles:
    """Title lookups bound to the attributes of one document."""

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self._attributes = attributes or {}

    def title_for_snippet(self, snippet: Snippet) -> str:
        return title_for(snippet.name, self._attributes)


__all__ = [
    "DEFAULT_TITLES",
    "SnippetTitles",
    "derive_title",
    "title_attribute",
    "title_for",
]
