"""Notes attached to addresses of a binary image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass
class Annotation:
    """A note at ``address`` shown in ``color`` (a hex colour code)."""

    address: int
    note: str
    color: str = "#FFFF00"
    timestamp: int = 0


class AnnotationManager:
    """Annotations keyed by address, one per address."""

    def __init__(self) -> None:
        self._annotations: dict[int, Annotation] = {}

    def add(self, annotation: Annotation) -> None:
        """Store ``annotation``, replacing any at the same address."""
        self._annotations[annotation.address] = annotation

    def remove(self, address: int) -> None:
        self._annotations.pop(address, None)

    def find(self, address: int) -> Annotation | None:
        return self._annotations.get(address)

    def all(self) -> list[Annotation]:
        """All annotations in address order."""
        return [self._annotations[a] for a in sorted(self._annotations)]

    def in_range(self, start_address: int, end_address: int) -> list[Annotation]:
        """Annotations with ``start_address <= address <= end_address``."""
        return [a for a in self.all() if start_address <= a.address <= end_address]

    def has_annotation(self, address: int) -> bool:
        return address in self._annotations

    def clear(self) -> None:
        self._annotations.clear()

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self.all())