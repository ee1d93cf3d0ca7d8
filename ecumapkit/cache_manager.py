"""One place to manage the application and project caches together."""

from __future__ import annotations

from dataclasses import dataclass

from .application_cache import ApplicationCache
from .project_cache import ProjectCache


@dataclass(frozen=True)
class CacheStats:
    """Sizes in bytes of the caches and counts of recent files."""

    application_cache_size: int = 0
    project_cache_size: int = 0
    temp_files_size: int = 0
    total_size: int = 0
    recent_projects_count: int = 0
    recent_binaries_count: int = 0


class CacheManager:
    """Holds the application cache and the cache of the open project.

    Project caches live in the application cache directory.
    """

    def __init__(self, application_cache: ApplicationCache | None = None) -> None:
        self.application_cache = (
            application_cache if application_cache is not None else ApplicationCache()
        )
        self._project_cache: ProjectCache | None = None

    def set_current_project(self, project_path) -> None:
        """Open and load the cache of ``project_path``; an empty path closes it."""
        if not project_path:
            self._project_cache = None
            return
        self._project_cache = ProjectCache(
            project_path, cache_dir=self.application_cache.cache_directory
        )
        self._project_cache.load()

    @property
    def current_project_cache(self) -> ProjectCache | None:
        return self._project_cache

    def _project_size(self) -> int:
        return self._project_cache.cache_size if self._project_cache is not None else 0

    @property
    def total_cache_size(self) -> int:
        app = self.application_cache
        return app.cache_size + app.temp_size + self._project_size()

    def clear_all_caches(self) -> None:
        self.clear_application_cache()
        self.clear_project_cache()
        self.clear_temp_files()

    def clear_application_cache(self) -> None:
        app = self.application_cache
        app.clear_cache()
        app.clear_recent_files()
        app.clear_thumbnails()

    def clear_project_cache(self) -> None:
        if self._project_cache is not None:
            self._project_cache.clear_all()

    def clear_temp_files(self) -> None:
        self.application_cache.clear_temp_files()

    def cache_stats(self) -> CacheStats:
        app = self.application_cache
        application_size = app.cache_size
        temp_size = app.temp_size
        project_size = self._project_size()
        return CacheStats(
            application_cache_size=application_size,
            project_cache_size=project_size,
            temp_files_size=temp_size,
            total_size=application_size + project_size + temp_size,
            recent_projects_count=len(app.recent_projects()),
            recent_binaries_count=len(app.recent_binaries()),
        )