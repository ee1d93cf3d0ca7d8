"""Read-write memory mapping of a file."""

from __future__ import annotations

import mmap
import os


class MemoryMapper:
    """Maps a whole file into memory for shared read-write access."""

    def __init__(self) -> None:
        self._file = None
        self._map: mmap.mmap | None = None

    def open(self, filepath) -> None:
        """Map the file at ``filepath``; empty files cannot be mapped."""
        self.close()
        fh = open(os.fspath(filepath), "r+b")
        try:
            size = os.fstat(fh.fileno()).st_size
            if size == 0:
                raise ValueError("cannot map an empty file")
            self._map = mmap.mmap(fh.fileno(), size, access=mmap.ACCESS_WRITE)
        except BaseException:
            fh.close()
            raise
        self._file = fh

    def close(self) -> None:
        if self._map is not None:
            self._map.close()
            self._map = None
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def is_open(self) -> bool:
        return self._map is not None

    def __len__(self) -> int:
        return len(self._map) if self._map is not None else 0

    @property
    def data(self) -> mmap.mmap:
        """The mapped region, writable in place."""
        if self._map is None:
            raise ValueError("no file is mapped")
        return self._map

    def is_valid_offset(self, offset: int) -> bool:
        return 0 <= offset < len(self)

    def __enter__(self) -> "MemoryMapper":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass