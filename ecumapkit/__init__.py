"""Binary access, checksums, hex search, bookmarks, settings and caches for ECU images."""

__version__ = "1.0.0"