"""An in-memory, editable copy of a binary image."""

from __future__ import annotations

import os
import struct

from .endianness import Endianness, read_value, write_value


class BinaryFile:
    """A binary image held in memory with typed reads and writes.

    Reads outside the image yield zero; writes outside it raise ``IndexError``.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._filepath = ""
        self._loaded = False
        self._has_changes = False

    def load(self, filepath) -> None:
        """Read the whole file at ``filepath`` into memory."""
        self.clear()
        path = os.fspath(filepath)
        with open(path, "rb") as fh:
            content = fh.read()
        self._data = bytearray(content)
        self._filepath = str(path)
        self._loaded = True
        self._has_changes = False

    def save(self, filepath=None) -> None:
        """Write the image to ``filepath``, or to the path it was loaded from."""
        if filepath is None:
            if not self._filepath:
                raise ValueError("no file path to save to")
            filepath = self._filepath
        if not self._loaded or not self._data:
            raise ValueError("no data loaded to save")
        path = os.fspath(filepath)
        with open(path, "wb") as fh:
            fh.write(self._data)
        self._filepath = str(path)
        self._has_changes = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def filepath(self) -> str:
        return self._filepath

    @property
    def data(self) -> bytes:
        """A snapshot of the image contents."""
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def is_valid_offset(self, offset: int) -> bool:
        return 0 <= offset < len(self._data)

    def _fits(self, offset: int, size: int) -> bool:
        return offset >= 0 and self.is_valid_offset(offset + size - 1)

    def _read(self, offset: int, fmt: str, endian: Endianness, default=0):
        if not self._fits(offset, struct.calcsize(fmt)):
            return default
        return read_value(self._data, offset, fmt, endian)

    def _write(self, offset: int, fmt: str, value, endian: Endianness) -> None:
        size = struct.calcsize(fmt)
        if not self._fits(offset, size):
            raise IndexError(
                f"cannot write {size} byte(s) at offset {offset} of {len(self._data)}"
            )
        write_value(self._data, offset, fmt, value, endian)
        self._has_changes = True

    def read_byte(self, offset: int) -> int:
        return self._read(offset, "B", Endianness.LITTLE)

    def read_int8(self, offset: int) -> int:
        return self._read(offset, "b", Endianness.LITTLE)

    def read_uint8(self, offset: int) -> int:
        return self.read_byte(offset)

    def read_int16(self, offset: int, endian: Endianness = Endianness.LITTLE) -> int:
        return self._read(offset, "h", endian)

    def read_uint16(self, offset: int, endian: Endianness = Endianness.LITTLE) -> int:
        return self._read(offset, "H", endian)

    def read_int32(self, offset: int, endian: Endianness = Endianness.LITTLE) -> int:
        return self._read(offset, "i", endian)

    def read_uint32(self, offset: int, endian: Endianness = Endianness.LITTLE) -> int:
        return self._read(offset, "I", endian)

    def read_float(self, offset: int, endian: Endianness = Endianness.LITTLE) -> float:
        return self._read(offset, "f", endian, 0.0)

    def write_byte(self, offset: int, value: int) -> None:
        self._write(offset, "B", value, Endianness.LITTLE)

    def write_int8(self, offset: int, value: int) -> None:
        self._write(offset, "b", value, Endianness.LITTLE)

    def write_uint8(self, offset: int, value: int) -> None:
        self.write_byte(offset, value)

    def write_int16(self, offset: int, value: int, endian: Endianness = Endianness.LITTLE) -> None:
        self._write(offset, "h", value, endian)

    def write_uint16(self, offset: int, value: int, endian: Endianness = Endianness.LITTLE) -> None:
        self._write(offset, "H", value, endian)

    def write_int32(self, offset: int, value: int, endian: Endianness = Endianness.LITTLE) -> None:
        self._write(offset, "i", value, endian)

    def write_uint32(self, offset: int, value: int, endian: Endianness = Endianness.LITTLE) -> None:
        self._write(offset, "I", value, endian)

    def write_float(self, offset: int, value: float, endian: Endianness = Endianness.LITTLE) -> None:
        self._write(offset, "f", value, endian)

    def read_bytes(self, offset: int, count: int) -> bytes:
        """Return up to ``count`` bytes from ``offset``; empty if out of range."""
        if not self.is_valid_offset(offset):
            return b""
        return bytes(self._data[offset:offset + count])

    def write_bytes(self, offset: int, data) -> None:
        """Write ``data`` at ``offset``, growing the image if it runs past the end."""
        data = bytes(data)
        if not data:
            return
        if offset < 0:
            raise IndexError(f"negative offset {offset}")
        end = offset + len(data)
        if end > len(self._data):
            self._data.extend(bytes(end - len(self._data)))
        self._data[offset:end] = data
        self._has_changes = True

    def clear(self) -> None:
        self._data = bytearray()
        self._filepath = ""
        self._loaded = False
        self._has_changes = False

    @property
    def has_changes(self) -> bool:
        return self._has_changes

    def mark_changed(self) -> None:
        self._has_changes = True

    def mark_saved(self) -> None:
        self._has_changes = False