"""Per-project cache of map detection results and compiled map data."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import struct
import time
from dataclasses import dataclass, field, replace
from pathlib import Path

import platformdirs

from .settings import ORGANIZATION_NAME

logger = logging.getLogger(__name__)

_DOUBLE_SIZE = struct.calcsize("<d")
_CACHE_SUFFIX = ".cache"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class CachedMapData:
    """Raw and scaled values of one map as last read."""

    map_name: str = ""
    address: int = 0
    raw_data: bytes = b""
    processed_data: list[float] = field(default_factory=list)
    timestamp: int = 0

    @property
    def size(self) -> int:
        """Bytes taken by the raw and processed values."""
        return len(self.raw_data) + len(self.processed_data) * _DOUBLE_SIZE


@dataclass
class DetectionCache:
    """Maps detected in the binary whose hash is ``binary_hash``."""

    binary_hash: str
    detected_maps: list[CachedMapData] = field(default_factory=list)
    timestamp: int = 0


def _encode_doubles(values: list[float]) -> str:
    packed = struct.pack(f"<{len(values)}d", *values)
    return base64.b64encode(packed).decode("ascii")


def _decode_doubles(text: str) -> list[float]:
    packed = base64.b64decode(text.encode("ascii"), validate=True)
    if len(packed) % _DOUBLE_SIZE:
        return []
    return list(struct.unpack(f"<{len(packed) // _DOUBLE_SIZE}d", packed))


def _map_to_json(data: CachedMapData) -> dict:
    return {
        "name": data.map_name,
        "address": data.address,
        "rawData": base64.b64encode(bytes(data.raw_data)).decode("ascii"),
        "processedData": _encode_doubles(data.processed_data),
        "timestamp": data.timestamp,
    }


def _map_from_json(obj: dict, name: str | None = None) -> CachedMapData:
    return CachedMapData(
        map_name=name if name is not None else str(obj.get("name", "")),
        address=int(obj.get("address", 0)),
        raw_data=base64.b64decode(str(obj.get("rawData", "")).encode("ascii"), validate=True),
        processed_data=_decode_doubles(str(obj.get("processedData", ""))),
        timestamp=int(obj.get("timestamp", 0)),
    )


class ProjectCache:
    """Cached data of one project, kept in a file under ``cache_dir``/projects.

    ``cache_dir`` defaults to the per-user cache directory.
    """

    def __init__(self, project_path, cache_dir=None) -> None:
        self.project_path = str(project_path)
        if cache_dir is None:
            cache_dir = platformdirs.user_cache_dir(ORGANIZATION_NAME, appauthor=False)
        self._cache_dir = Path(cache_dir)
        self._detection: dict[str, DetectionCache] = {}
        self._maps: dict[str, CachedMapData] = {}

    @property
    def cache_file_path(self) -> Path:
        """The file this project's cache is stored in."""
        base_name = Path(self.project_path).name.split(".")[0]
        return self._cache_dir / "projects" / f"{base_name}{_CACHE_SUFFIX}"

    # Detection results

    def cache_detection_results(self, binary_hash: str, maps) -> None:
        """Store the maps detected in the binary with ``binary_hash`` and save."""
        self._detection[binary_hash] = DetectionCache(
            binary_hash=binary_hash,
            detected_maps=list(maps),
            timestamp=_now_ms(),
        )
        self.save()

    def has_detection_cache(self, binary_hash: str) -> bool:
        return binary_hash in self._detection

    def detection_cache(self, binary_hash: str) -> list[CachedMapData]:
        """The cached maps for ``binary_hash``; empty if there are none."""
        entry = self._detection.get(binary_hash)
        return list(entry.detected_maps) if entry is not None else []

    def clear_detection_cache(self) -> None:
        self._detection.clear()
        self.save()

    # Compiled map data

    def cache_map_data(self, map_name: str, data: CachedMapData) -> None:
        """Store a stamped copy of ``data`` under ``map_name`` and save."""
        self._maps[map_name] = replace(
            data, processed_data=list(data.processed_data), timestamp=_now_ms()
        )
        self.save()

    def has_map_cache(self, map_name: str) -> bool:
        return map_name in self._maps

    def map_cache(self, map_name: str) -> CachedMapData | None:
        """The cached data of ``map_name``, or ``None``."""
        return self._maps.get(map_name)

    def clear_map_cache(self) -> None:
        self._maps.clear()
        self.save()

    # Size and clearing

    @property
    def cache_size(self) -> int:
        """Bytes of raw and processed values held in the cache."""
        detected = sum(
            m.size for entry in self._detection.values() for m in entry.detected_maps
        )
        return detected + sum(m.size for m in self._maps.values())

    def clear_all(self) -> None:
        self._detection.clear()
        self._maps.clear()
        self.save()

    # Persistence

    def load(self) -> None:
        """Merge the stored cache into memory; a missing file is ignored."""
        path = self.cache_file_path
        if not path.exists():
            return
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
            detection = {
                binary_hash: DetectionCache(
                    binary_hash=binary_hash,
                    detected_maps=[_map_from_json(m) for m in entry.get("maps", [])],
                    timestamp=int(entry.get("timestamp", 0)),
                )
                for binary_hash, entry in document.get("detection", {}).items()
            }
            maps = {
                name: _map_from_json(entry, name)
                for name, entry in document.get("maps", {}).items()
            }
        except (OSError, ValueError, TypeError, AttributeError, binascii.Error) as exc:
            logger.warning("Could not load project cache %s: %s", path, exc)
            return
        self._detection.update(detection)
        self._maps.update(maps)

    def save(self) -> None:
        """Write the whole cache to its file."""
        document = {
            "detection": {
                binary_hash: {
                    "timestamp": entry.timestamp,
                    "maps": [_map_to_json(m) for m in entry.detected_maps],
                }
                for binary_hash, entry in self._detection.items()
            },
            "maps": {name: _map_to_json(data) for name, data in self._maps.items()},
        }
        path = self.cache_file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")