"""Render snippets as titled Markdown sections."""

from __future__ import annotations

import io

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import SnippetReadError
from .selection import Snippet


def anchor_id(section_id: str | None, name: str) -> str:
    """Return the anchor of snippet ``name`` below section ``section_id``."""
    return f"{section_id or ''}_{name.replace('-', '_', 1)}"


def heading_marker(level: int) -> str:
    """Return the ATX marker of a section at ``level`` (document title is level 0)."""
    return "#" * min(max(level + 1, 1), 6)


def read_snippet(snippet: Snippet) -> str:
    """Return the raw content of ``snippet``."""
    try:
        return snippet.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SnippetReadError(snippet.name, snippet.path, str(exc)) from exc


def missing_snippet_text(name: str, operation: str) -> str:
    return f"Snippet {name} not found for operation::{operation}"


def render_snippet(
    snippet: Snippet,
    *,
    operation: str,
    title: str,
    section_id: str | None,
    level: int,
    emitter: DiagnosticEmitter | None = None,
) -> str:
    """Render ``snippet`` below a heading carrying its anchor.

    A snippet that cannot be read is replaced by a visible placeholder and a
    warning; the conversion carries on.
    """
    emitter = emitter or NullEmitter()
    buffer = io.StringIO()
    buffer.write(f"{heading_marker(level)} {title} {{#{anchor_id(section_id, snippet.name)}}}\n")
    buffer.write("\n")
    try:
        content = read_snippet(snippet)
    except SnippetReadError as exc:
        emitter.warning(
            f"Snippet {snippet.name} not found at {snippet.path} for operation {operation}",
            exc,
        )
        buffer.write(missing_snippet_text(snippet.name, operation))
        buffer.write("\n\n")
    else:
        buffer.write(content)
        if not content.endswith("\n"):
            buffer.write("\n")
        buffer.write("\n")
    return buffer.getvalue()


__all__ = [
    "anchor_id",
    "heading_marker",
    "missing_snippet_text",
    "read_snippet",
    "render_snippet",
]
