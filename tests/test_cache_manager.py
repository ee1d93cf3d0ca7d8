import pytest

from ecumapkit.application_cache import ApplicationCache
from ecumapkit.cache_manager import CacheManager
from ecumapkit.project_cache import CachedMapData, ProjectCache


@pytest.fixture
def app_cache(tmp_path):
    return ApplicationCache(cache_dir=tmp_path / "cache", settings_path=tmp_path / "s.ini")


@pytest.fixture
def manager(app_cache):
    return CacheManager(app_cache)


def test_no_project_by_default(manager):
    assert manager.current_project_cache is None


def test_empty_path_closes_project(manager, tmp_path):
    manager.set_current_project(tmp_path / "a.proj")
    assert manager.current_project_cache.project_path == str(tmp_path / "a.proj")
    manager.set_current_project("")
    assert manager.current_project_cache is None


def test_set_current_project_loads_stored_cache(manager, app_cache, tmp_path):
    stored = ProjectCache(tmp_path / "car.proj", cache_dir=app_cache.cache_directory)
    stored.cache_map_data("Fuel", CachedMapData("Fuel", 16, b"\x01\x02", [3.0]))
    manager.set_current_project(tmp_path / "car.proj")
    loaded = manager.current_project_cache.map_cache("Fuel")
    assert loaded.raw_data == b"\x01\x02"
    assert loaded.processed_data == [3.0]


def test_stats_are_consistent(manager, app_cache, tmp_path):
    app_cache.add_recent_project(tmp_path / "p1.proj")
    app_cache.add_recent_project(tmp_path / "p2.proj")
    app_cache.add_recent_binary(tmp_path / "b.bin")
    (app_cache.temp_directory / "t.tmp").write_bytes(b"x" * 10)
    manager.set_current_project(tmp_path / "p1.proj")
    manager.current_project_cache.cache_map_data(
        "M", CachedMapData("M", 0, b"\x00" * 5, [])
    )

    stats = manager.cache_stats()
    assert stats.recent_projects_count == 2
    assert stats.recent_binaries_count == 1
    assert stats.project_cache_size == 5
    assert stats.temp_files_size == 10
    assert stats.total_size == (
        stats.application_cache_size + stats.project_cache_size + stats.temp_files_size
    )
    assert manager.total_cache_size == stats.total_size


def test_clear_all_caches(manager, app_cache, tmp_path):
    app_cache.add_recent_binary(tmp_path / "b.bin")
    app_cache.save_thumbnail("k", b"\x01\x02")
    (app_cache.temp_directory / "t.tmp").write_bytes(b"abc")
    manager.set_current_project(tmp_path / "p.proj")
    manager.current_project_cache.cache_map_data("M", CachedMapData("M", 0, b"\x01", []))

    manager.clear_all_caches()

    assert app_cache.recent_binaries() == []
    assert app_cache.load_thumbnail("k") == b""
    assert app_cache.temp_size == 0
    assert manager.current_project_cache.cache_size == 0
    assert app_cache.temp_directory.is_dir()


def test_clear_project_cache_without_project(manager):
    manager.clear_project_cache()
    assert manager.current_project_cache is None


def test_clear_temp_files_only_touches_temp(manager, app_cache):
    app_cache.save_thumbnail("keep", b"\x09")
    (app_cache.temp_directory / "t.tmp").write_bytes(b"abc")
    manager.clear_temp_files()
    assert app_cache.temp_size == 0
    assert app_cache.load_thumbnail("keep") == b"\x09"