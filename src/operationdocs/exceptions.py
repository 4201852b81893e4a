"""Exception hierarchy for operation snippet assembly."""

from __future__ import annotations

from pathlib import Path


class OperationDocsError(RuntimeError):
    """Base exception for operation snippet failures."""


class SnippetReadError(OperationDocsError):
    """Raised when a snippet file is missing or cannot be decoded."""

    def __init__(self, name: str, path: Path, reason: str | None = None) -> None:
        self.name = name
        self.path = path
        message = f"Snippet {name} could not be read from {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SnippetsDirectoryError(OperationDocsError):
    """Raised when the default snippets directory cannot be resolved."""


class MacroSyntaxError(OperationDocsError):
    """Raised when an ``operation::`` attribute list cannot be parsed."""


class MarkdownConversionError(OperationDocsError):
    """Raised when Markdown cannot be converted into HTML."""


__all__ = [
    "MacroSyntaxError",
    "MarkdownConversionError",
    "OperationDocsError",
    "SnippetReadError",
    "SnippetsDirectoryError",
]
