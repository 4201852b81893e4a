"""Diagnostic abstractions shared by the macro, the CLI and the MkDocs plugin."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None and self.debug_enabled:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


@dataclass(slots=True)
class CollectingEmitter:
    """Emitter recording every diagnostic in memory."""

    debug_enabled: bool = False
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        del exc
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        del exc
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def clear(self) -> None:
        """Forget every recorded diagnostic."""
        self.warnings.clear()
        self.errors.clear()
        self.events.clear()


class PrefixedEmitter:
    """Emitter decorating messages with the name of the document being converted."""

    def __init__(self, inner: DiagnosticEmitter, prefix: str | None) -> None:
        self._inner = inner
        self._prefix = prefix
        self.debug_enabled = inner.debug_enabled

    def _format(self, message: str) -> str:
        return f"{self._prefix}: {message}" if self._prefix else message

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._inner.warning(self._format(message), exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._inner.error(self._format(message), exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._inner.event(name, payload)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "operation_spliced":
        operation = data.get("operation") or "<unknown>"
        count = data.get("snippets", 0)
        level = data.get("level")
        suffix = f" at level {level}" if level is not None else ""
        return f"Included {count} snippet(s) for operation {operation}{suffix}"

    return None


__all__ = [
    "CollectingEmitter",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "PrefixedEmitter",
    "format_event_message",
]
