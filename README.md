# ecumapkit

ecumapkit is a library for low-level work on ECU flash images. It provides:

- **Binary access.** `ecumapkit.binary_file.BinaryFile` holds an image in memory. It reads and writes signed and unsigned 8, 16 and 32-bit integers and 32-bit floats, little- or big-endian (`ecumapkit.endianness.Endianness`). Reads past the end return zero. Writes past the end raise `IndexError`. The exception is `write_bytes`, which grows the image. `save()` with no path writes back to the file the image was loaded from. It raises `ValueError` if there is nothing to save.
- **Memory mapping.** `ecumapkit.memory_mapper.MemoryMapper` maps a file read-write. Use it as a context manager. Its `data` is an `mmap` you can change in place. Empty files are refused with `ValueError`.
- **Undo and redo.** `ecumapkit.edit_history.EditHistory` keeps stacks of single-byte `Edit`s. Edits that change nothing are ignored. `undo()` and `redo()` raise `IndexError` when the stack is empty.
- **Checksums.** `ecumapkit.checksum` defines one algorithm class per `ChecksumType`:
  - simple sum, XOR and additive, each in 8-bit and 16-bit little-endian word forms;
  - CRC-16 (polynomial 0x1021, initial value 0xFFFF);
  - CRC-32.

  `calculate_checksum(type, data, start, end)` checksums a range; an end of 0 means the whole image. `verify_checksum` compares the result with the value stored in the image: 4 bytes for CRC-32, 2 bytes for the others. `available_algorithms()` lists the algorithm names.
- **Search and replace.** `ecumapkit.hex_search.HexSearch` searches a `BinaryFile` for hex patterns such as `"DE AD BE EF"` or `"0xDEADBEEF"`, or for text patterns. Matching is case-insensitive unless asked otherwise. It offers `find_next`, `find_previous`, `find_all`, `replace` and `replace_all`. A search returns `SearchResult` objects, or `None` when nothing matches.
- **Bookmarks and annotations.** `ecumapkit.bookmarks.BookmarkManager` keeps named, categorised bookmarks. Each address and each name is used at most once. `ecumapkit.annotations.AnnotationManager` keeps one coloured note per address. Both list their entries in address order.
- **Safe mode.** `ecumapkit.safe_mode.SafeModeManager` checks a value against `ValueLimits`. It returns a `ValidationResult` (allowed, warning or blocked) together with a reason. It also computes a 16-digit hex ECU signature and compares signatures. When it is disabled, everything is allowed.
- **Settings.** `ecumapkit.settings.Settings` is a dataclass of editor preferences stored in an INI file. By default the file lives in the per-user config directory (`default_settings_path()`).
- **Caches.**
  - `ecumapkit.application_cache.ApplicationCache` keeps lists of recent projects and binaries (at most 20 each) in the settings file. It also manages cache, temp and thumbnail directories and reports their sizes.
  - `ecumapkit.project_cache.ProjectCache` stores per-project detection results and map data (`CachedMapData`) as JSON.
  - `ecumapkit.cache_manager.CacheManager` ties the two together and reports `CacheStats`.

## Installation

```
pip install ecumapkit
```

## Example

```python
from ecumapkit.binary_file import BinaryFile
from ecumapkit.endianness import Endianness
from ecumapkit.checksum import ChecksumType, calculate_checksum
from ecumapkit.hex_search import HexSearch, SearchMode

image = BinaryFile()
image.load("firmware.bin")

rpm_limit = image.read_uint16(0x1000, Endianness.BIG)
image.write_uint16(0x1000, rpm_limit + 100, Endianness.BIG)

crc = calculate_checksum(ChecksumType.CRC32, image.data)
print(f"CRC-32: {crc:08X}")

search = HexSearch(image)
for hit in search.find_all("DE AD BE EF", SearchMode.HEX):
    print(hex(hit.address), hit.length)

image.save("firmware-modified.bin")
```

## What it does not do

ecumapkit is a library only. It has:

- no command-line tool and no graphical editor;
- no model of map definitions or projects;
- no automatic map detection.

`ProjectCache` stores detection results that you supply, but it does not produce them.

## Running the tests

```
pip install ecumapkit[test]
pytest
```