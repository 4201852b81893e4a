"""Attach parsed fragments beneath the element holding the macro."""

from __future__ import annotations

import re
from xml.etree import ElementTree

from .anchors import AnchorRegistry
from .composer import FRAGMENT_LEVEL
from .diagnostics import DiagnosticEmitter, NullEmitter


HEADING_TAG = re.compile(r"^h([1-6])$")
ANCHOR_TRAILER = re.compile(r"\s*\{:?\s*#(?P<id>[^\s}]+)\s*\}\s*$")
ATTRIBUTE_TRAILER = re.compile(r"\{:?(?P<body>[^}]*)\}\s*$")
ID_TOKEN = re.compile(r"(?:^|\s)#(?P<id>[^\s}]+)")


def heading_level(element: ElementTree.Element) -> int | None:
    """Return the section level of a heading element (``h2`` is level 1)."""
    if not isinstance(element.tag, str):
        return None
    match = HEADING_TAG.match(element.tag)
    if not match:
        return None
    return int(match.group(1)) - 1


def trailing_anchor(text: str | None) -> str | None:
    """Return the ``#id`` of a trailing attribute list such as ``{#intro .lead}``."""
    match = ATTRIBUTE_TRAILER.search(text or "")
    if match is None:
        return None
    token = ID_TOKEN.search(match.group("body"))
    return token.group("id") if token else None


def promote_anchor(element: ElementTree.Element) -> str | None:
    """Move a trailing ``{#id}`` of heading text into the ``id`` attribute."""
    text = element.text or ""
    match = ANCHOR_TRAILER.search(text)
    if match and len(element) == 0:
        element.text = text[: match.start()]
        element.set("id", match.group("id"))
    return element.get("id")


def relevel(element: ElementTree.Element, offset: int) -> None:
    """Shift every heading below ``element`` (inclusive) by ``offset`` levels."""
    for node in element.iter():
        level = heading_level(node)
        if level is None:
            continue
        node.tag = f"h{min(max(level + offset + 1, 1), 6)}"


def register_anchors(
    element: ElementTree.Element,
    registry: AnchorRegistry,
    emitter: DiagnosticEmitter,
) -> None:
    for node in element.iter():
        anchor = node.get("id")
        if not anchor:
            continue
        if not registry.register(anchor, node):
            emitter.warning(f"Duplicate anchor id {anchor}; links resolve to its first use")


def splice_fragment(
    fragment: ElementTree.Element,
    parent: ElementTree.Element,
    *,
    target_level: int,
    fragment_level: int = FRAGMENT_LEVEL,
    registry: AnchorRegistry | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> None:
    """Move every top-level node of ``fragment`` under ``parent``.

    Nodes keep their order and are detached from ``fragment`` before being
    appended, headings are moved from ``fragment_level`` to ``target_level``
    and anchors are registered against the real document.
    """
    emitter = emitter or NullEmitter()
    offset = target_level - fragment_level
    nodes = list(fragment)
    for node in nodes:
        fragment.remove(node)
        for heading in node.iter():
            if heading_level(heading) is not None:
                promote_anchor(heading)
        if offset:
            relevel(node, offset)
        parent.append(node)
    if registry is not None:
        for node in nodes:
            register_anchors(node, registry, emitter)


__all__ = [
    "heading_level",
    "promote_anchor",
    "register_anchors",
    "relevel",
    "splice_fragment",
    "trailing_anchor",
]
