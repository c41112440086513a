import os

import pytest

from synchive_monitor.locations import LocationsManager, normalize_slashes
from synchive_monitor.settings import LOCATIONS_FILE


@pytest.fixture
def launched():
    return []


@pytest.fixture
def manager(tmp_path, launched):
    return LocationsManager(tmp_path / "storage", launched.append)


@pytest.fixture
def watched(tmp_path):
    directory = tmp_path / "watched"
    directory.mkdir()
    return str(directory)


def test_creates_empty_locations_file(tmp_path, manager):
    locations_file = tmp_path / "storage" / LOCATIONS_FILE
    assert locations_file.is_file()
    assert locations_file.read_text(encoding="utf-8") == ""
    assert manager.list_locations() == []


def test_reads_existing_locations(tmp_path, launched):
    storage = tmp_path / "storage"
    storage.mkdir()
    (storage / LOCATIONS_FILE).write_text("first\n\nsecond\n", encoding="utf-8")
    manager = LocationsManager(storage, launched.append)
    assert manager.list_locations() == ["first", "second"]


def test_start_monitoring_launches_each_in_order(tmp_path, launched):
    storage = tmp_path / "storage"
    storage.mkdir()
    (storage / LOCATIONS_FILE).write_text("one\ntwo\n", encoding="utf-8")
    LocationsManager(storage, launched.append).start_monitoring_locations()
    assert launched == ["one", "two"]


def test_persistent_location_is_stored_and_launched(tmp_path, manager, launched, watched):
    result = manager.new_location(watched, True)
    assert result == watched
    assert launched == [watched]
    assert manager.list_locations() == [watched]
    stored = (tmp_path / "storage" / LOCATIONS_FILE).read_text(encoding="utf-8")
    assert stored.splitlines() == [watched]


def test_persistent_location_survives_reload(tmp_path, manager, launched, watched):
    manager.new_location(watched, True)
    reloaded = LocationsManager(tmp_path / "storage", launched.append)
    assert reloaded.list_locations() == [watched]


def test_once_location_is_launched_not_stored(tmp_path, manager, launched, watched):
    manager.new_location(watched, False)
    assert launched == [watched]
    assert manager.list_locations() == []
    assert (tmp_path / "storage" / LOCATIONS_FILE).read_text(encoding="utf-8") == ""


def test_bad_path_raises(tmp_path, manager, launched):
    with pytest.raises(NotADirectoryError, match="Bad Path"):
        manager.new_location(str(tmp_path / "missing"), True)
    assert launched == []


def test_duplicate_location_raises(manager, launched, watched):
    manager.new_location(watched, True)
    with pytest.raises(ValueError, match="Path already monitored"):
        manager.new_location(watched, True)
    assert launched == [watched]


def test_remove_location(tmp_path, manager, launched, watched):
    manager.new_location(watched, True)
    assert manager.remove_location(watched) == watched
    assert manager.list_locations() == []
    reloaded = LocationsManager(tmp_path / "storage", launched.append)
    assert reloaded.list_locations() == []


def test_remove_unknown_location_raises(manager):
    with pytest.raises(LookupError, match="Location not found"):
        manager.remove_location("nowhere")


def test_remove_all(tmp_path, manager, watched):
    manager.new_location(watched, True)
    manager.remove_all()
    assert manager.list_locations() == []
    assert (tmp_path / "storage" / LOCATIONS_FILE).read_text(encoding="utf-8") == ""


def test_normalize_slashes_uses_platform_separator():
    assert normalize_slashes("a/b/c") == os.path.join("a", "b", "c")


def test_normalize_slashes_is_idempotent():
    once = normalize_slashes("x/y\\z")
    assert normalize_slashes(once) == once