"""Compose rendered snippets into one fragment and parse it with the host."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import io
from pathlib import Path
from xml.etree import ElementTree

from .diagnostics import DiagnosticEmitter, NullEmitter
from .rendering import render_snippet
from .selection import Snippet
from .titles import SnippetTitles


# Fragments are rendered as if they were first level sections of a fresh
# document; the splicer moves them to their real depth.
FRAGMENT_LEVEL = 1

FragmentParser = Callable[[str], ElementTree.Element]


@dataclass(frozen=True, slots=True)
class ComposedFragment:
    """Markdown text produced for one ``operation::`` invocation."""

    operation: str
    text: str
    snippets: tuple[Snippet, ...]

    @property
    def empty(self) -> bool:
        return not self.snippets


def no_snippets_text(operation: str) -> str:
    return f"No snippets found for operation::{operation}"


def compose_fragment(
    operation: str,
    snippets: Sequence[Snippet],
    *,
    snippets_dir: str | Path,
    titles: SnippetTitles,
    section_id: str | None,
    emitter: DiagnosticEmitter | None = None,
    level: int = FRAGMENT_LEVEL,
) -> ComposedFragment:
    """Concatenate the titled sections of ``snippets`` in selection order."""
    emitter = emitter or NullEmitter()
    if not snippets:
        emitter.warning(f"No snippets were found for operation {operation} in {snippets_dir}")
        return ComposedFragment(operation, no_snippets_text(operation) + "\n", ())

    buffer = io.StringIO()
    for snippet in snippets:
        buffer.write(
            render_snippet(
                snippet,
                operation=operation,
                title=titles.title_for_snippet(snippet),
                section_id=section_id,
                level=level,
                emitter=emitter,
            )
        )
    return ComposedFragment(operation, buffer.getvalue(), tuple(snippets))


def parse_fragment(fragment: ComposedFragment, parser: FragmentParser) -> ElementTree.Element:
    """Parse the composed text into a detached element tree."""
    return parser(fragment.text)


__all__ = [
    "FRAGMENT_LEVEL",
    "ComposedFragment",
    "FragmentParser",
    "compose_fragment",
    "no_snippets_text",
    "parse_fragment",
]
