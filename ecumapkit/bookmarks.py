"""Named bookmarks on addresses of a binary image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass
class Bookmark:
    """A named marker at ``address``, optionally grouped by ``category``."""

    name: str
    address: int
    category: str = ""
    description: str = ""
    timestamp: int = 0


class BookmarkManager:
    """Bookmarks keyed by address, with each name used at most once."""

    def __init__(self) -> None:
        self._by_address: dict[int, Bookmark] = {}
        self._by_name: dict[str, int] = {}

    def add(self, bookmark: Bookmark) -> None:
        """Store ``bookmark``, replacing any bookmark at its address or with its name."""
        previous = self._by_address.get(bookmark.address)
        if previous is not None:
            self._by_name.pop(previous.name, None)
        other_address = self._by_name.get(bookmark.name)
        if other_address is not None and other_address != bookmark.address:
            self._by_address.pop(other_address, None)
        self._by_address[bookmark.address] = bookmark
        self._by_name[bookmark.name] = bookmark.address

    def remove_at(self, address: int) -> None:
        """Remove the bookmark at ``address``, if there is one."""
        bookmark = self._by_address.pop(address, None)
        if bookmark is not None:
            self._by_name.pop(bookmark.name, None)

    def remove_named(self, name: str) -> None:
        """Remove the bookmark called ``name``, if there is one."""
        address = self._by_name.pop(name, None)
        if address is not None:
            self._by_address.pop(address, None)

    def find_at(self, address: int) -> Bookmark | None:
        return self._by_address.get(address)

    def find_named(self, name: str) -> Bookmark | None:
        address = self._by_name.get(name)
        if address is None:
            return None
        return self._by_address.get(address)

    def all(self) -> list[Bookmark]:
        """All bookmarks in address order."""
        return [self._by_address[address] for address in sorted(self._by_address)]

    def by_category(self, category: str) -> list[Bookmark]:
        """Bookmarks of ``category`` in address order."""
        return [b for b in self.all() if b.category == category]

    def categories(self) -> list[str]:
        """The distinct non-empty categories, sorted."""
        return sorted({b.category for b in self._by_address.values() if b.category})

    def has_bookmark(self, address: int) -> bool:
        return address in self._by_address

    def clear(self) -> None:
        self._by_address.clear()
        self._by_name.clear()

    def __len__(self) -> int:
        return len(self._by_address)

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(self.all())