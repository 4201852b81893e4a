"""Markdown conversion helpers with the ``operation::`` macro enabled."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
import re
from typing import Any

import markdown

from .exceptions import MarkdownConversionError, OperationDocsError
from .extension import OperationExtension


__all__ = [
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "MarkdownDocument",
    "deduplicate_markdown_extensions",
    "normalize_markdown_extensions",
    "render_markdown",
    "resolve_markdown_extensions",
]


DEFAULT_MARKDOWN_EXTENSIONS = [
    "pymdownx.superfences",
    "abbr",
    "admonition",
    "attr_list",
    "def_list",
    "footnotes",
    "md_in_html",
    "tables",
    "toc",
]


DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "toc": {
        "permalink": False,
    },
}


@dataclass(slots=True)
class MarkdownDocument:
    """Result of converting Markdown into HTML."""

    html: str
    front_matter: dict[str, str] = field(default_factory=dict)
    anchors: list[str] = field(default_factory=list)


def resolve_markdown_extensions(
    requested: Iterable[str] | None,
    disabled: Iterable[str] | None = None,
) -> list[str]:
    """Return the active Markdown extension list after applying overrides."""
    enabled = normalize_markdown_extensions(requested)
    disabled_normalized = {
        extension.lower() for extension in normalize_markdown_extensions(disabled)
    }

    combined = deduplicate_markdown_extensions(list(DEFAULT_MARKDOWN_EXTENSIONS) + enabled)

    if not disabled_normalized:
        return combined

    return [extension for extension in combined if extension.lower() not in disabled_normalized]


def deduplicate_markdown_extensions(values: Iterable[str]) -> list[str]:
    """Remove duplicate extensions while preserving order and case."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def normalize_markdown_extensions(
    values: Iterable[str] | str | None,
) -> list[str]:
    """Normalise extension names from CLI-friendly strings into a flat list."""
    if values is None:
        return []

    if isinstance(values, str):
        candidates: Iterable[str] = [values]
    else:
        candidates = values

    normalized: list[str] = []
    for value in candidates:
        if not isinstance(value, str):
            continue
        chunks = re.split(r"[,\s\x00]+", value)
        normalized.extend(chunk for chunk in chunks if chunk)
    return normalized


def render_markdown(
    source: str,
    extensions: Sequence[str] | None = None,
    *,
    operation_config: Mapping[str, Any] | None = None,
) -> MarkdownDocument:
    """Convert Markdown ``source`` into HTML, expanding ``operation::`` macros."""
    active_extensions = list(DEFAULT_MARKDOWN_EXTENSIONS if extensions is None else extensions)
    extension_configs = {
        name: dict(DEFAULT_EXTENSION_CONFIGS[name])
        for name in active_extensions
        if name in DEFAULT_EXTENSION_CONFIGS
    }

    operation = OperationExtension(**dict(operation_config or {}))
    try:
        processor = markdown.Markdown(
            extensions=[*active_extensions, operation],
            extension_configs=extension_configs,
        )
    except OperationDocsError:
        raise
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to initialize Markdown processor: {exc}") from exc

    try:
        html = processor.convert(source)
    except OperationDocsError:
        raise
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to convert Markdown source: {exc}") from exc

    return MarkdownDocument(
        html=html,
        front_matter=dict(operation.front_matter),
        anchors=list(operation.anchors),
    )
