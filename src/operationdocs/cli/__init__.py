"""Command line interface for operationdocs."""

from __future__ import annotations

from ..markdown import DEFAULT_MARKDOWN_EXTENSIONS
from .app import app, main


__all__ = ["DEFAULT_MARKDOWN_EXTENSIONS", "app", "main"]
