"""Default location of generated snippets for Maven and Gradle builds."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import os
from pathlib import Path
from typing import Any, Literal

from .exceptions import SnippetsDirectoryError


BuildTool = Literal["maven", "gradle"]

MAVEN_SNIPPETS = Path("target") / "generated-snippets"
GRADLE_SNIPPETS = Path("build") / "generated-snippets"

_log = logging.getLogger(__name__)


def detect_build_tool(environ: Mapping[str, str] | None = None) -> BuildTool:
    """Guess the build tool driving the documentation build."""
    environ = os.environ if environ is None else environ
    return "maven" if environ.get("MAVEN_HOME") else "gradle"


def resolve_snippets_directory(
    attributes: Mapping[str, Any],
    *,
    build_tool: BuildTool | None = None,
) -> Path:
    """Return the directory holding generated snippets.

    Maven builds use ``target/generated-snippets`` next to the closest
    ``pom.xml`` at or above ``docdir``, expressed relative to ``docdir``.
    Gradle builds use ``build/generated-snippets`` below ``projectdir``.
    """
    tool = build_tool or detect_build_tool()
    if tool == "maven":
        docdir = Path(_required_attribute(attributes, "docdir"))
        pom = _find_pom(docdir)
        return Path(os.path.relpath(pom.parent, docdir)) / MAVEN_SNIPPETS
    return Path(_required_attribute(attributes, "projectdir")) / GRADLE_SNIPPETS


def apply_default_attributes(
    attributes: Mapping[str, Any],
    *,
    build_tool: BuildTool | None = None,
) -> dict[str, Any]:
    """Return ``attributes`` with a ``snippets`` entry when one can be resolved.

    An existing ``snippets`` attribute is never overridden.
    """
    resolved = dict(attributes)
    if resolved.get("snippets"):
        return resolved
    try:
        resolved["snippets"] = str(resolve_snippets_directory(resolved, build_tool=build_tool))
    except SnippetsDirectoryError as exc:
        _log.debug("No default snippets directory: %s", exc)
    return resolved


def _find_pom(docdir: Path) -> Path:
    for candidate in (docdir, *docdir.parents):
        pom = candidate / "pom.xml"
        if pom.is_file():
            return pom
    raise SnippetsDirectoryError(f"pom.xml not found in '{docdir}' or above")


def _required_attribute(attributes: Mapping[str, Any], name: str) -> str:
    value = attributes.get(name)
    if value is None or not str(value):
        raise SnippetsDirectoryError(f"{name} attribute not found")
    return str(value)


__all__ = [
    "GRADLE_SNIPPETS",
    "MAVEN_SNIPPETS",
    "BuildTool",
    "apply_default_attributes",
    "detect_build_tool",
    "resolve_snippets_directory",
]
