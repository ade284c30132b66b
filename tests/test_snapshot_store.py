import json

import pytest

from themesync.services.snapshot_store import PAGE_SCOPE_KEY, PRESET_CHOICE_KEY, VERSION_KEY, SnapshotStore


def test_write_stamps_version_and_timestamp(snapshot, clock):
    snapshot.write("siteTheme", {"baseColors": {"primaryColor": "#006064"}})

    record = snapshot.read("siteTheme")
    assert record["version"] == 3
    assert record["timestamp"] == clock.now
    assert record["baseColors"] == {"primaryColor": "#006064"}


def test_expired_record_is_evicted(snapshot, clock):
    snapshot.write("siteTheme", {"baseColors": {}})
    clock.advance(3601)

    assert snapshot.read("siteTheme") is None
    assert "siteTheme" not in snapshot.keys()


def test_record_just_inside_max_age_is_kept(snapshot, clock):
    snapshot.write("siteTheme", {"baseColors": {}})
    clock.advance(3600)
    assert snapshot.read("siteTheme") is not None


def test_record_with_other_version_is_evicted(clock):
    old = SnapshotStore(version=2, clock=clock)
    old.write("profileTheme_5", {"baseColors": {}})

    new = SnapshotStore(version=3, clock=clock)
    new._records = dict(old._records)

    assert new.read("profileTheme_5") is None


def test_migrate_clears_theme_records_only(snapshot):
    snapshot.write("siteTheme", {"baseColors": {}})
    snapshot.write("communityTheme_c1", {"baseColors": {}})
    snapshot.write("unrelated", {"keep": True})
    snapshot.write_preset_choice("mountain-eagle")
    snapshot._records[VERSION_KEY] = 2

    assert snapshot.migrate() is True
    assert snapshot.read("siteTheme") is None
    assert snapshot.read("communityTheme_c1") is None
    assert snapshot.read("unrelated") is not None
    assert snapshot.read_preset_choice() == "mountain-eagle"
    assert snapshot.migrate() is False


def test_clear_all_removes_marker(snapshot):
    snapshot.write("siteTheme", {"baseColors": {}})
    snapshot.write_marker("profile", "5")

    assert snapshot.clear_all() == 2
    assert snapshot.read_marker() is None


def test_marker_round_trip(snapshot, clock):
    snapshot.write_marker("community", "c1")
    assert snapshot.read_marker() == {"type": "community", "id": "c1", "timestamp": clock.now}

    snapshot.clear_marker()
    assert PAGE_SCOPE_KEY not in snapshot.keys()


def test_file_backing_persists_between_instances(tmp_path, clock):
    path = tmp_path / "cache" / "themes.json"
    first = SnapshotStore(path, clock=clock)
    first.write("siteTheme", {"baseColors": {"primaryColor": "#123456"}})
    first.write_preset_choice("sun-fire")

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk[PRESET_CHOICE_KEY] == "sun-fire"

    second = SnapshotStore(path, clock=clock)
    assert second.read("siteTheme")["baseColors"]["primaryColor"] == "#123456"
    assert second.read_preset_choice() == "sun-fire"


def test_corrupt_file_starts_empty(tmp_path, clock):
    path = tmp_path / "themes.json"
    path.write_text("{not json", encoding="utf-8")

    store = SnapshotStore(path, clock=clock)

    assert store.keys() == []


def unwritable(tmp_path, store):
    """Point store at a path whose parent is a regular file"""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store.path = blocker / "themes.json"


def test_eviction_survives_unwritable_file(tmp_path, clock):
    store = SnapshotStore(tmp_path / "themes.json", clock=clock)
    store.write("siteTheme", {"baseColors": {}})
    unwritable(tmp_path, store)
    clock.advance(7200)

    assert store.read("siteTheme") is None
    assert "siteTheme" not in store.keys()


def test_marker_updates_survive_unwritable_file(tmp_path, clock):
    store = SnapshotStore(tmp_path / "themes.json", clock=clock)
    unwritable(tmp_path, store)

    store.write_marker("profile", "5")
    assert store.read_marker()["id"] == "5"

    store.clear_marker()
    assert store.read_marker() is None
    assert store.clear_all() == 0


def test_record_write_to_unwritable_file_raises(tmp_path, clock):
    store = SnapshotStore(tmp_path / "themes.json", clock=clock)
    unwritable(tmp_path, store)

    with pytest.raises(OSError):
        store.write("siteTheme", {"baseColors": {}})
