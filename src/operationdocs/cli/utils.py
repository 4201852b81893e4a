"""Auxiliary helpers used by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import typer


def parse_attribute_options(values: Iterable[str] | None) -> dict[str, str]:
    """Parse CLI document attributes declared as ``name=value`` pairs."""
    attributes: dict[str, str] = {}
    if not values:
        return attributes

    for raw in values:
        entry = raw.strip()
        if not entry:
            continue
        if "=" not in entry:
            raise typer.BadParameter(
                f"Invalid attribute '{raw}', expected format 'name=value'.",
                param_hint="--attribute",
            )
        name, value = entry.split("=", 1)
        name = name.strip()
        if not name:
            raise typer.BadParameter(
                f"Invalid attribute '{raw}', the name is empty.",
                param_hint="--attribute",
            )
        attributes[name] = value.strip()

    return attributes


def write_output_file(target: Path, content: str) -> None:
    """Write ``content`` to ``target``, creating parent directories."""
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


__all__ = ["parse_attribute_options", "write_output_file"]
