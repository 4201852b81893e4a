"""Configuration model for the ``operation::`` Markdown extension.

OperationSettings

`snippets` (`Path | None`)
: Base directory holding one sub-directory per operation. A `snippets`
  document attribute takes precedence; when neither is set the directory is
  resolved from the `docdir`/`projectdir` attributes.

`suffix` (`str`)
: File extension of generated snippets, including the leading dot. Use
  `.adoc` for trees generated with the AsciiDoc template format.

`attributes` (`dict[str, str]`)
: Document attributes available to every converted document. Front matter
  entries of a document override them.

`build_tool` (`"maven" | "gradle" | None`)
: Build tool layout used to resolve the default snippets directory. Detected
  from `MAVEN_HOME` when omitted.

`source` (`str | None`)
: Label prefixed to warnings, typically the path of the converted document.

`emitter` (`DiagnosticEmitter | None`)
: Receiver of warnings. Defaults to the logging emitter.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .attributes import normalise_attributes
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .selection import DEFAULT_SUFFIX


class OperationSettings(BaseModel):
    """Validated configuration of one extension instance."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    snippets: Path | None = None
    suffix: str = DEFAULT_SUFFIX
    attributes: dict[str, str] = Field(default_factory=dict)
    build_tool: Literal["maven", "gradle"] | None = None
    source: str | None = None
    front_matter: bool = True
    emitter: Any = None

    @field_validator("snippets", mode="before")
    @classmethod
    def _blank_snippets(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("suffix")
    @classmethod
    def _dotted_suffix(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"snippet suffix must start with '.', got {value!r}")
        return value

    @field_validator("attributes", mode="before")
    @classmethod
    def _flatten_attributes(cls, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("attributes must be a mapping")
        return normalise_attributes(value)

    @field_validator("emitter")
    @classmethod
    def _check_emitter(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, DiagnosticEmitter):
            raise ValueError("emitter must provide warning(), error() and event()")
        return value

    def resolve_emitter(self) -> DiagnosticEmitter:
        """Return the configured emitter or a logging one."""
        return self.emitter if self.emitter is not None else LoggingEmitter()


__all__ = ["OperationSettings"]
