"""Selection of the snippet files documenting one operation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


DEFAULT_SUFFIX = ".md"


@dataclass(frozen=True, slots=True)
class Snippet:
    """One generated fragment belonging to an operation."""

    name: str
    path: Path


def parse_snippet_names(names: str | Iterable[str] | None) -> list[str]:
    """Split a comma separated list of snippet names, keeping caller order."""
    if names is None:
        return []
    chunks = names.split(",") if isinstance(names, str) else list(names)
    result: list[str] = []
    for chunk in chunks:
        name = str(chunk).strip()
        if name:
            result.append(name)
    return result


def select_snippets(
    operation: str,
    snippets_dir: str | Path,
    names: str | Iterable[str] | None = None,
    *,
    suffix: str = DEFAULT_SUFFIX,
) -> list[Snippet]:
    """Return the snippets to include for ``operation``.

    Explicit names are kept in the given order and are not checked for
    existence. Without names, every ``suffix`` file of the operation directory
    is included, sorted by name so the output is stable across platforms.
    """
    operation_dir = Path(snippets_dir) / operation
    requested = parse_snippet_names(names)
    if requested:
        return [Snippet(name, operation_dir / f"{name}{suffix}") for name in requested]
    return all_snippets(operation_dir, suffix=suffix)


def all_snippets(operation_dir: Path, *, suffix: str = DEFAULT_SUFFIX) -> list[Snippet]:
    """List every snippet stored in ``operation_dir``."""
    if not operation_dir.is_dir():
        return []
    names = sorted(
        entry.name[: -len(suffix)]
        for entry in operation_dir.iterdir()
        if entry.name.endswith(suffix) and len(entry.name) > len(suffix) and entry.is_file()
    )
    return [Snippet(name, operation_dir / f"{name}{suffix}") for name in names]


__all__ = [
    "DEFAULT_SUFFIX",
    "Snippet",
    "all_snippets",
    "parse_snippet_names",
    "select_snippets",
]
