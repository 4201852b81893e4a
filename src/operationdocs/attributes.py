"""Macro attribute lists and document attributes."""

from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Any

import yaml

from .exceptions import MacroSyntaxError


ATTRIBUTE_ENTRY = re.compile(
    r"""
    \s*
    (?P<name>[A-Za-z_][\w-]*)
    \s*=\s*
    (?:
        "(?P<double>[^"]*)"
      | '(?P<single>[^']*)'
      | (?P<bare>[^,]*)
    )
    \s*(?:,|$)
    """,
    re.VERBOSE,
)
POSITIONAL_ENTRY = re.compile(
    r"""
    \s*
    (?:
        "(?P<double>[^"]*)"
      | '(?P<single>[^']*)'
      | (?P<bare>[^,="']*)
    )
    \s*(?:,|$)
    """,
    re.VERBOSE,
)
ATTRIBUTE_REFERENCE = re.compile(r"\{(?P<name>[A-Za-z0-9_][\w-]*)\}")


def _entry_value(match: re.Match[str]) -> str:
    for group in ("double", "single", "bare"):
        value = match.group(group)
        if value is not None:
            return value.strip()
    return ""


def parse_attribute_list(raw: str | None, positional: list[str] | None = None) -> dict[str, str]:
    """Parse ``snippets='a,b', level=3`` into a dictionary.

    Values may be single quoted, double quoted or bare; bare values end at
    the next comma. Positional entries such as ``curl-request`` carry no
    meaning for the macro: they are skipped and, when ``positional`` is
    given, appended to it.
    """
    if raw is None or not raw.strip():
        return {}
    attributes: dict[str, str] = {}
    position = 0
    length = len(raw)
    while position < length:
        if not raw[position:].strip():
            break
        match = ATTRIBUTE_ENTRY.match(raw, position)
        if match is not None and match.end() > position:
            attributes[match.group("name")] = _entry_value(match)
        else:
            match = POSITIONAL_ENTRY.match(raw, position)
            if match is None or match.end() == position:
                raise MacroSyntaxError(f"Malformed attribute list: [{raw}]")
            value = _entry_value(match)
            if value and positional is not None:
                positional.append(value)
        position = match.end()
    return attributes


def substitute_attributes(value: str, attributes: Mapping[str, Any]) -> str:
    """Replace ``{name}`` references, leaving unknown references untouched."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group("name")
        if name in attributes and attributes[name] is not None:
            return str(attributes[name])
        return match.group(0)

    return ATTRIBUTE_REFERENCE.sub(_replace, value)


def split_front_matter(lines: list[str]) -> tuple[dict[str, Any], list[str]]:
    """Split a leading YAML front matter block from Markdown ``lines``."""
    if not lines or lines[0].lstrip("\ufeff").strip() != "---":
        return {}, lines

    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() in {"---", "..."}:
            closing_index = idx
            break
    if closing_index is None:
        return {}, lines

    try:
        metadata = yaml.safe_load("\n".join(lines[1:closing_index])) or {}
    except yaml.YAMLError:
        return {}, lines
    if not isinstance(metadata, dict):
        return {}, lines
    return metadata, lines[closing_index + 1 :]


def normalise_attributes(values: Mapping[Any, Any] | None) -> dict[str, str]:
    """Flatten document attributes into string keys and values."""
    if not values:
        return {}
    normalised: dict[str, str] = {}
    for key, value in values.items():
        if value is None or isinstance(value, (dict, list, tuple, set)):
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        normalised[str(key)] = str(value)
    return normalised


__all__ = [
    "normalise_attributes",
    "parse_attribute_list",
    "split_front_matter",
    "substitute_attributes",
]
