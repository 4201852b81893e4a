"""CLI command implementations exposed via `operationdocs.cli`."""

from __future__ import annotations

from .render import render
from .snippets import snippets


__all__ = ["render", "snippets"]
