"""Assemble generated operation snippets into Markdown documentation."""

from __future__ import annotations

from operationdocs.anchors import AnchorRegistry
from operationdocs.composer import (
    FRAGMENT_LEVEL,
    ComposedFragment,
    compose_fragment,
    parse_fragment,
)
from operationdocs.config import OperationSettings
from operationdocs.diagnostics import (
    CollectingEmitter,
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
)
from operationdocs.exceptions import (
    MacroSyntaxError,
    MarkdownConversionError,
    OperationDocsError,
    SnippetReadError,
    SnippetsDirectoryError,
)
from operationdocs.extension import OperationExtension, makeExtension
from operationdocs.markdown import MarkdownDocument, render_markdown
from operationdocs.rendering import anchor_id, render_snippet
from operationdocs.resolver import apply_default_attributes, resolve_snippets_directory
from operationdocs.selection import Snippet, select_snippets
from operationdocs.splicing import splice_fragment
from operationdocs.titles import DEFAULT_TITLES, SnippetTitles, title_for
from operationdocs.version import get_version


__version__ = get_version()

__all__ = [
    "DEFAULT_TITLES",
    "FRAGMENT_LEVEL",
    "AnchorRegistry",
    "CollectingEmitter",
    "ComposedFragment",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "MacroSyntaxError",
    "MarkdownConversionError",
    "MarkdownDocument",
    "NullEmitter",
    "OperationDocsError",
    "OperationExtension",
    "OperationSettings",
    "Snippet",
    "SnippetReadError",
    "SnippetTitles",
    "SnippetsDirectoryError",
    "__version__",
    "anchor_id",
    "apply_default_attributes",
    "compose_fragment",
    "get_version",
    "makeExtension",
    "parse_fragment",
    "render_markdown",
    "render_snippet",
    "resolve_snippets_directory",
    "select_snippets",
    "splice_fragment",
    "title_for",
]
