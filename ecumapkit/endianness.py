"""Byte-order helpers for reading and writing fixed-size values."""

from __future__ import annotations

import struct
import sys
from enum import Enum


class Endianness(Enum):
    """Byte order of a multi-byte value."""

    LITTLE = "little"
    BIG = "big"

    @property
    def prefix(self) -> str:
        """The struct format prefix for this byte order."""
        return "<" if self is Endianness.LITTLE else ">"


def system_endianness() -> Endianness:
    """Return the byte order of the running machine."""
    return Endianness.LITTLE if sys.byteorder == "little" else Endianness.BIG


def swap_bytes(value, fmt: str):
    """Reverse the bytes of ``value`` packed with the struct code ``fmt``."""
    packed = struct.pack("=" + fmt, value)
    (swapped,) = struct.unpack("=" + fmt, packed[::-1])
    return swapped


def read_value(data, offset: int, fmt: str, endian: Endianness = Endianness.LITTLE):
    """Read one value of struct code ``fmt`` from ``data`` at ``offset``."""
    (value,) = struct.unpack_from(endian.prefix + fmt, data, offset)
    return value


def write_value(
    buffer, offset: int, fmt: str, value, endian: Endianness = Endianness.LITTLE
) -> None:
    """Write one value of struct code ``fmt`` into ``buffer`` at ``offset``."""
    struct.pack_into(endian.prefix + fmt, buffer, offset, value)