"""Checksum algorithms for binary images."""

from __future__ import annotations

import operator
import struct
from abc import ABC, abstractmethod
from enum import Enum, auto
from functools import reduce
from typing import ClassVar, Iterator

from .endianness import Endianness, read_value


class ChecksumType(Enum):
    """The checksum algorithms that are available."""

    SIMPLE_SUM = auto()
    SIMPLE_SUM_2BYTE = auto()
    CRC16 = auto()
    CRC32 = auto()
    XOR = auto()
    XOR16 = auto()
    ADDITIVE = auto()
    ADDITIVE16 = auto()


def _bounds(size: int, start_offset: int, end_offset: int) -> tuple[int, int]:
    """Resolve the range to checksum; an end of zero means the whole image."""
    start = start_offset if start_offset > 0 else 0
    end = end_offset if 0 < end_offset < size else size
    return start, end


def _aligned_bounds(size: int, start_offset: int, end_offset: int) -> tuple[int, int]:
    start, end = _bounds(size, start_offset, end_offset)
    return start + start % 2, end - end % 2


def _le16_words(data: bytes, start: int, end: int) -> Iterator[int]:
    if start >= end:
        return iter(())
    return (word for (word,) in struct.iter_unpack("<H", data[start:end]))


class ChecksumAlgorithm(ABC):
    """A checksum over a byte range of an image."""

    _name: ClassVar[str]
    _type: ClassVar[ChecksumType]

    @abstractmethod
    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        """Checksum ``data[start_offset:end_offset]``; an end of 0 means the end."""

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> ChecksumType:
        return self._type


class SimpleSumChecksum(ChecksumAlgorithm):
    _name = "Simple Sum (8-bit)"
    _type = ChecksumType.SIMPLE_SUM

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if not data:
            return 0
        start, end = _bounds(len(data), start_offset, end_offset)
        return sum(data[start:end]) & 0xFF


class SimpleSum16Checksum(ChecksumAlgorithm):
    _name = "Simple Sum (16-bit)"
    _type = ChecksumType.SIMPLE_SUM_2BYTE

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if len(data) < 2:
            return 0
        start, end = _aligned_bounds(len(data), start_offset, end_offset)
        return sum(_le16_words(data, start, end)) & 0xFFFF


class CRC16Checksum(ChecksumAlgorithm):
    """Table-driven, MSB-first CRC-16."""

    _name = "CRC-16"
    _type = ChecksumType.CRC16

    def __init__(self, polynomial: int = 0x1021, initial_value: int = 0xFFFF) -> None:
        self.polynomial = polynomial & 0xFFFF
        self.initial_value = initial_value & 0xFFFF
        self._table = [self._entry(i) for i in range(256)]

    def _entry(self, index: int) -> int:
        crc = index << 8
        for _ in range(8):
            crc = (crc << 1) ^ self.polynomial if crc & 0x8000 else crc << 1
            crc &= 0xFFFF
        return crc

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if not data:
            return self.initial_value
        start, end = _bounds(len(data), start_offset, end_offset)
        crc = self.initial_value
        for byte in data[start:end]:
            crc = ((crc << 8) ^ self._table[((crc >> 8) ^ byte) & 0xFF]) & 0xFFFF
        return crc


class CRC32Checksum(ChecksumAlgorithm):
    """Table-driven, LSB-first CRC-32 with final inversion."""

    _name = "CRC-32"
    _type = ChecksumType.CRC32

    def __init__(self, polynomial: int = 0x04C11DB7) -> None:
        self.polynomial = polynomial & 0xFFFFFFFF
        self._table = [self._entry(i) for i in range(256)]

    def _entry(self, index: int) -> int:
        crc = index
        for _ in range(8):
            crc = (crc >> 1) ^ self.polynomial if crc & 1 else crc >> 1
        return crc

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if not data:
            return 0xFFFFFFFF
        start, end = _bounds(len(data), start_offset, end_offset)
        crc = 0xFFFFFFFF
        for byte in data[start:end]:
            crc = (crc >> 8) ^ self._table[(crc ^ byte) & 0xFF]
        return ~crc & 0xFFFFFFFF


class XORChecksum(ChecksumAlgorithm):
    _name = "XOR (8-bit)"
    _type = ChecksumType.XOR

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if not data:
            return 0
        start, end = _bounds(len(data), start_offset, end_offset)
        return reduce(operator.xor, data[start:end], 0)


class XOR16Checksum(ChecksumAlgorithm):
    _name = "XOR (16-bit)"
    _type = ChecksumType.XOR16

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if len(data) < 2:
            return 0
        start, end = _aligned_bounds(len(data), start_offset, end_offset)
        return reduce(operator.xor, _le16_words(data, start, end), 0)


class AdditiveChecksum(ChecksumAlgorithm):
    _name = "Additive (8-bit)"
    _type = ChecksumType.ADDITIVE

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if not data:
            return 0
        start, end = _bounds(len(data), start_offset, end_offset)
        return sum(data[start:end]) % 256


class Additive16Checksum(ChecksumAlgorithm):
    _name = "Additive (16-bit)"
    _type = ChecksumType.ADDITIVE16

    def calculate(self, data, start_offset: int = 0, end_offset: int = 0) -> int:
        data = bytes(data)
        if len(data) < 2:
            return 0
        start, end = _aligned_bounds(len(data), start_offset, end_offset)
        return sum(_le16_words(data, start, end)) % 65536


_ALGORITHMS: dict[ChecksumType, type[ChecksumAlgorithm]] = {
    ChecksumType.SIMPLE_SUM: SimpleSumChecksum,
    ChecksumType.SIMPLE_SUM_2BYTE: SimpleSum16Checksum,
    ChecksumType.CRC16: CRC16Checksum,
    ChecksumType.CRC32: CRC32Checksum,
    ChecksumType.XOR: XORChecksum,
    ChecksumType.XOR16: XOR16Checksum,
    ChecksumType.ADDITIVE: AdditiveChecksum,
    ChecksumType.ADDITIVE16: Additive16Checksum,
}


def create_algorithm(checksum_type) -> ChecksumAlgorithm:
    """Return a new algorithm object of the given type with default settings."""
    return _ALGORITHMS[ChecksumType(checksum_type)]()


def available_algorithms() -> list[str]:
    """Names of all algorithms, in the order of :class:`ChecksumType`."""
    return [cls._name for cls in _ALGORITHMS.values()]


def calculate_checksum(checksum_type, data, start_offset: int = 0, end_offset: int = 0) -> int:
    return create_algorithm(checksum_type).calculate(data, start_offset, end_offset)


def verify_checksum(
    checksum_type, data, checksum_offset: int, start_offset: int = 0, end_offset: int = 0
) -> bool:
    """Compare the computed checksum with the one stored at ``checksum_offset``.

    CRC-32 values are stored as 4 little-endian bytes; all others as 2
    little-endian bytes, or a single byte at the very end of the image.
    """
    data = bytes(data)
    size = len(data)
    if checksum_offset >= size:
        return False
    calculated = calculate_checksum(checksum_type, data, start_offset, end_offset)
    stored = 0
    if ChecksumType(checksum_type) is ChecksumType.CRC32:
        if checksum_offset + 4 <= size:
            stored = read_value(data, checksum_offset, "I", Endianness.LITTLE)
    elif checksum_offset + 2 <= size:
        stored = read_value(data, checksum_offset, "H", Endianness.LITTLE)
    else:
        stored = data[checksum_offset]
    return calculated == stored