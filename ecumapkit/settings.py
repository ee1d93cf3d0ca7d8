"""Persistent user settings of the editor."""

from __future__ import annotations

import base64
import binascii
import configparser
import logging
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs

logger = logging.getLogger(__name__)

APPLICATION_NAME = "ECU Map Editor"
ORGANIZATION_NAME = "ecumapkit"
VERSION = "1.0.0"

_SECTION = "General"
_SETTINGS_FILE = "Editor.ini"


def default_settings_path() -> Path:
    """The per-user INI file that settings are kept in."""
    return Path(platformdirs.user_config_dir(ORGANIZATION_NAME, appauthor=False)) / _SETTINGS_FILE


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _decode(text: str) -> bytes:
    return base64.b64decode(text.encode("ascii"), validate=True)


@dataclass
class Settings:
    """Editor settings stored in an INI file at ``path``."""

    last_project_path: str = ""
    last_binary_path: str = ""
    auto_cleanup_cache: bool = False
    safe_mode_enabled: bool = True
    window_geometry: bytes = b""
    window_state: bytes = b""
    path: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.path = default_settings_path() if self.path is None else Path(self.path)

    def load(self) -> None:
        """Read settings from ``path``; an unreadable file leaves them as they are."""
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str
        try:
            parser.read(self.path, encoding="utf-8")
            section = parser[_SECTION] if parser.has_section(_SECTION) else {}
            get = section.get
            values = {
                "last_project_path": get("lastProjectPath", ""),
                "last_binary_path": get("lastBinaryPath", ""),
                "auto_cleanup_cache": parser.getboolean(
                    _SECTION, "autoCleanupCache", fallback=False
                ),
                "safe_mode_enabled": parser.getboolean(
                    _SECTION, "safeModeEnabled", fallback=True
                ),
                "window_geometry": _decode(get("windowGeometry", "")),
                "window_state": _decode(get("windowState", "")),
            }
        except (OSError, configparser.Error, ValueError, binascii.Error) as exc:
            logger.warning("Settings: could not load %s, using defaults: %s", self.path, exc)
            return
        for name, value in values.items():
            setattr(self, name, value)

    def save(self) -> None:
        """Write settings to ``path``, creating its directory if needed."""
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str
        parser[_SECTION] = {
            "lastProjectPath": self.last_project_path,
            "lastBinaryPath": self.last_binary_path,
            "autoCleanupCache": "true" if self.auto_cleanup_cache else "false",
            "safeModeEnabled": "true" if self.safe_mode_enabled else "false",
            "windowGeometry": _encode(self.window_geometry),
            "windowState": _encode(self.window_state),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            parser.write(fh)