"""Registry resolving anchor ids to the elements spliced into a document."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from threading import Lock
from xml.etree import ElementTree


@dataclass(slots=True)
class AnchorRegistry:
    """Thread-safe index of the anchors known to the current document."""

    _anchors: dict[str, ElementTree.Element] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def register(self, anchor: str, element: ElementTree.Element) -> bool:
        """Record ``anchor``; return ``False`` when it points at another element."""
        with self._lock:
            existing = self._anchors.get(anchor)
            if existing is not None and existing is not element:
                return False
            self._anchors[anchor] = element
            return True

    def get(self, anchor: str) -> ElementTree.Element | None:
        with self._lock:
            return self._anchors.get(anchor)

    def clear(self) -> None:
        """Reset the registry before a new conversion."""
        with self._lock:
            self._anchors.clear()

    def __contains__(self, anchor: object) -> bool:
        with self._lock:
            return anchor in self._anchors

    def __len__(self) -> int:  # pragma: no cover - trivial
        with self._lock:
            return len(self._anchors)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            yield from list(self._anchors)


__all__ = ["AnchorRegistry"]
