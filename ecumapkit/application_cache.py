"""Application-wide cache: recent files, cache directories and thumbnails."""

from __future__ import annotations

import configparser
import logging
import shutil
import sys
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from .settings import ORGANIZATION_NAME, default_settings_path

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 20
_MAX_PATH_LENGTH = 260
_PROJECTS_SECTION = "recentProjects"
_BINARIES_SECTION = "recentBinaries"
_THUMBNAIL_SUFFIX = ".thumb"


@dataclass
class RecentFile:
    """A recently opened file and when it was last opened (ms since the epoch)."""

    filepath: str
    display_name: str = ""
    last_accessed: int = 0


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _directory_size(path: Path) -> int:
    if not path.is_dir():
        return 0
    return sum(entry.stat().st_size for entry in path.rglob("*") if entry.is_file())


def _remove_contents(path: Path) -> None:
    if not path.is_dir():
        return
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry, ignore_errors=True)
        else:
            try:
                entry.unlink()
            except OSError as exc:
                logger.warning("Could not remove %s: %s", entry, exc)


def _fallback_bases() -> list[Path]:
    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    program_dir = Path(program).resolve().parent if program else Path.cwd()
    return [
        program_dir / "cache",
        Path(tempfile.gettempdir()) / ORGANIZATION_NAME / "cache",
    ]


def _read_entries(parser: configparser.ConfigParser, section: str) -> list[RecentFile]:
    if not parser.has_section(section):
        return []
    values = parser[section]
    count = values.getint("size", fallback=0)
    return [
        RecentFile(
            filepath=values.get(f"{i}.filepath", ""),
            display_name=values.get(f"{i}.displayName", ""),
            last_accessed=values.getint(f"{i}.lastAccessed", fallback=0),
        )
        for i in range(1, count + 1)
    ]


def _write_entries(
    parser: configparser.ConfigParser, section: str, entries: list[RecentFile]
) -> None:
    values = {"size": str(len(entries))}
    for i, entry in enumerate(entries, start=1):
        values[f"{i}.filepath"] = entry.filepath
        values[f"{i}.displayName"] = entry.display_name
        values[f"{i}.lastAccessed"] = str(entry.last_accessed)
    parser[section] = values


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str
    return parser


class ApplicationCache:
    """Recent-file lists kept in the settings file, plus on-disk cache folders.

    ``cache_dir`` defaults to the per-user cache directory; ``settings_path``
    to the editor's settings file.
    """

    def __init__(self, cache_dir=None, settings_path=None) -> None:
        self._requested_dir = Path(cache_dir) if cache_dir is not None else None
        self.settings_path = (
            Path(settings_path) if settings_path is not None else default_settings_path()
        )
        self._recent_projects: list[RecentFile] = []
        self._recent_binaries: list[RecentFile] = []
        self._cache_dir: Path | None = None

    # Directories

    def _candidate_bases(self) -> list[Path]:
        if self._requested_dir is not None:
            primary = self._requested_dir
        else:
            primary = Path(platformdirs.user_cache_dir(ORGANIZATION_NAME, appauthor=False))
        return [primary, *_fallback_bases()]

    def _initialize_directories(self) -> Path:
        if self._cache_dir is None:
            candidates = self._candidate_bases()
            chosen = candidates[-1]
            for base in candidates:
                if len(str(base)) > _MAX_PATH_LENGTH:
                    continue
                try:
                    base.mkdir(parents=True, exist_ok=True)
                except OSError:
                    continue
                chosen = base
                break
            self._cache_dir = chosen
        for sub in (self._cache_dir, self._cache_dir / "temp", self._cache_dir / "thumbnails"):
            try:
                sub.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning("Could not create cache directory %s: %s", sub, exc)
        return self._cache_dir

    @property
    def cache_directory(self) -> Path:
        if self._cache_dir is None:
            self._initialize_directories()
        return self._cache_dir

    @property
    def temp_directory(self) -> Path:
        return self.cache_directory / "temp"

    @property
    def thumbnail_directory(self) -> Path:
        return self.cache_directory / "thumbnails"

    # Recent files

    def _add_recent(self, entries: list[RecentFile], filepath) -> None:
        filepath = str(filepath) if filepath else ""
        if not filepath:
            return
        entries[:] = [e for e in entries if e.filepath != filepath]
        entries.insert(0, RecentFile(filepath, Path(filepath).name, _now_ms()))
        del entries[MAX_RECENT_FILES:]
        self.save()

    def add_recent_project(self, filepath) -> None:
        """Put ``filepath`` at the front of the recent projects and save."""
        self._add_recent(self._recent_projects, filepath)

    def add_recent_binary(self, filepath) -> None:
        """Put ``filepath`` at the front of the recent binaries and save."""
        self._add_recent(self._recent_binaries, filepath)

    def recent_projects(self, max_count: int = MAX_RECENT_FILES) -> list[RecentFile]:
        return list(self._recent_projects[:max(max_count, 0)])

    def recent_binaries(self, max_count: int = MAX_RECENT_FILES) -> list[RecentFile]:
        return list(self._recent_binaries[:max(max_count, 0)])

    def clear_recent_files(self) -> None:
        self._recent_projects.clear()
        self._recent_binaries.clear()
        self.save()

    # Sizes and clearing

    @property
    def cache_size(self) -> int:
        """Total bytes of all files under the cache directory."""
        return _directory_size(self.cache_directory)

    @property
    def temp_size(self) -> int:
        return _directory_size(self.temp_directory)

    def clear_cache(self) -> None:
        """Delete everything in the cache directory and recreate its folders."""
        _remove_contents(self.cache_directory)
        self._initialize_directories()

    def clear_temp_files(self) -> None:
        _remove_contents(self.temp_directory)
        self.temp_directory.mkdir(parents=True, exist_ok=True)

    # Thumbnails

    def _thumbnail_path(self, key: str) -> Path:
        return self.thumbnail_directory / f"{key}{_THUMBNAIL_SUFFIX}"

    def save_thumbnail(self, key: str, data) -> None:
        path = self._thumbnail_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(bytes(data))

    def load_thumbnail(self, key: str) -> bytes:
        """The stored thumbnail for ``key``, or empty bytes if there is none."""
        try:
            return self._thumbnail_path(key).read_bytes()
        except OSError:
            return b""

    def clear_thumbnails(self) -> None:
        _remove_contents(self.thumbnail_directory)
        self.thumbnail_directory.mkdir(parents=True, exist_ok=True)

    # Persistence

    def load(self) -> None:
        """Set up the cache folders and read the recent-file lists."""
        self._initialize_directories()
        parser = _new_parser()
        try:
            parser.read(self.settings_path, encoding="utf-8")
            projects = _read_entries(parser, _PROJECTS_SECTION)
            binaries = _read_entries(parser, _BINARIES_SECTION)
        except (OSError, configparser.Error, ValueError) as exc:
            logger.warning("Failed to load cache settings from %s: %s", self.settings_path, exc)
            self._recent_projects = []
            self._recent_binaries = []
            return
        self._recent_projects = projects
        self._recent_binaries = binaries

    def save(self) -> None:
        """Write the recent-file lists, keeping other sections of the file."""
        parser = _new_parser()
        try:
            parser.read(self.settings_path, encoding="utf-8")
        except configparser.Error as exc:
            logger.warning("Replacing unreadable settings file %s: %s", self.settings_path, exc)
            parser = _new_parser()
        _write_entries(parser, _PROJECTS_SECTION, self._recent_projects)
        _write_entries(parser, _BINARIES_SECTION, self._recent_binaries)
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as fh:
            parser.write(fh)