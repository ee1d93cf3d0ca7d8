"""Searching and replacing byte patterns in a binary image."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from .binary_file import BinaryFile

_SEPARATORS = re.compile(r"[ \-:,]")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_PAIR_LEADERS = frozenset("+\t\n\v\f\r")


class SearchMode(Enum):
    HEX = auto()
    TEXT = auto()
    PATTERN = auto()


@dataclass(frozen=True)
class SearchResult:
    """A match of ``length`` bytes at ``address``."""

    address: int
    length: int


def _parse_pair(pair: str) -> int | None:
    if all(c in _HEX_DIGITS for c in pair):
        return int(pair, 16)
    if pair[0] in _PAIR_LEADERS and pair[1] in _HEX_DIGITS:
        return int(pair[1], 16)
    return None


def parse_hex_pattern(pattern: str) -> bytes:
    """Parse hex byte pairs, ignoring separators and a leading ``0x``.

    An unpaired trailing digit and pairs that are not hex are dropped.
    """
    clean = _SEPARATORS.sub("", pattern)
    if clean.startswith("0x"):
        clean = clean[2:]
    pairs = (clean[i:i + 2] for i in range(0, len(clean) - 1, 2))
    return bytes(b for b in map(_parse_pair, pairs) if b is not None)


def parse_text_pattern(pattern: str) -> bytes:
    return pattern.encode("utf-8")


class HexSearch:
    """Finds and replaces patterns in a :class:`BinaryFile`."""

    def __init__(self, binary_file: BinaryFile | None) -> None:
        self._file = binary_file

    def _usable(self) -> bool:
        return self._file is not None and self._file.is_loaded

    @staticmethod
    def _needle(pattern: str, mode: SearchMode) -> bytes:
        if mode is SearchMode.TEXT:
            return parse_text_pattern(pattern)
        return parse_hex_pattern(pattern)

    @staticmethod
    def _replacement(replacement: str, mode: SearchMode) -> bytes:
        if mode is SearchMode.HEX:
            return parse_hex_pattern(replacement)
        return parse_text_pattern(replacement)

    def _prepare(self, pattern: str, mode: SearchMode, case_sensitive: bool):
        needle = self._needle(pattern, mode)
        haystack = self._file.data
        if not case_sensitive:
            needle = needle.lower()
            haystack = haystack.lower()
        return needle, haystack

    def find_next(
        self,
        pattern: str,
        start_address: int = 0,
        mode: SearchMode = SearchMode.HEX,
        case_sensitive: bool = False,
    ) -> SearchResult | None:
        """First match at or after ``start_address``, or ``None``."""
        if not self._usable():
            return None
        needle, haystack = self._prepare(pattern, mode, case_sensitive)
        if not needle:
            return None
        index = haystack.find(needle, max(start_address, 0))
        return None if index < 0 else SearchResult(index, len(needle))

    def find_previous(
        self,
        pattern: str,
        start_address: int = 0,
        mode: SearchMode = SearchMode.HEX,
        case_sensitive: bool = False,
    ) -> SearchResult | None:
        """Last match that ends at or before ``start_address``, or ``None``.

        A ``start_address`` not past the pattern length searches only offset 0.
        """
        if not self._usable():
            return None
        needle, haystack = self._prepare(pattern, mode, case_sensitive)
        if not needle:
            return None
        size = len(needle)
        max_start = start_address - size if start_address > size else 0
        index = haystack.rfind(needle, 0, max_start + size)
        return None if index < 0 else SearchResult(index, size)

    def find_all(
        self,
        pattern: str,
        mode: SearchMode = SearchMode.HEX,
        case_sensitive: bool = False,
    ) -> list[SearchResult]:
        """All matches in address order, overlapping ones included."""
        results: list[SearchResult] = []
        address = 0
        while (result := self.find_next(pattern, address, mode, case_sensitive)) is not None:
            results.append(result)
            address = result.address + 1
        return results

    def replace(
        self,
        pattern: str,
        replacement: str,
        address: int,
        mode: SearchMode = SearchMode.HEX,
        case_sensitive: bool = False,
    ) -> int:
        """Replace the match at exactly ``address``; return how many were replaced."""
        result = self.find_next(pattern, address, mode, case_sensitive)
        if result is None or result.address != address:
            return 0
        data = self._replacement(replacement, mode)
        if len(data) != result.length:
            return 0
        self._file.write_bytes(result.address, data)
        return 1

    def replace_all(
        self,
        pattern: str,
        replacement: str,
        mode: SearchMode = SearchMode.HEX,
        case_sensitive: bool = False,
    ) -> int:
        """Replace every match; in hex mode the lengths must agree."""
        results = self.find_all(pattern, mode, case_sensitive)
        if not results:
            return 0
        data = self._replacement(replacement, mode)
        if mode is SearchMode.HEX and len(data) != len(parse_hex_pattern(pattern)):
            return 0
        for result in reversed(results):
            self._file.write_bytes(result.address, data)
        return len(results)