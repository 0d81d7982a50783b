# tests/test_record_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ptvd.records.models import Record
from ptvd.records.store import RecordStore


def test_missing_snapshot_loads_empty(tmp_path: Path) -> None:
    assert RecordStore(tmp_path / "nope.json").load() == []


def test_save_then_load_round_trip(store: RecordStore, sample_record: Record) -> None:
    other = Record(id="abc-1", full_name="Bình", phone="0911", face_nose=["Mụn ẩn", "Dầu nhiều"])
    records = [sample_record, other]

    assert store.load() == []
    store.save(records)

    assert store.load() == records


def test_snapshot_is_flat_json_array_with_camel_case_keys(store: RecordStore, sample_record: Record) -> None:
    store.save([sample_record])

    data = json.loads(store.path.read_text("utf-8"))
    assert isinstance(data, list)
    assert data[0]["fullName"] == "Anh Le"
    assert data[0]["supabaseId"] == 7
    assert data[0]["currentIssues"] == ["Mụn viêm"]


@pytest.mark.parametrize("content", ["{not json", '{"a": 1}', "", "null"])
def test_corrupt_snapshot_loads_empty(store: RecordStore, content: str) -> None:
    store.path.write_text(content, "utf-8")
    assert store.load() == []


def test_non_object_entries_are_skipped(store: RecordStore) -> None:
    store.path.write_text(json.dumps([1, "x", {"id": 5, "fullName": "Chi"}]), "utf-8")

    loaded = store.load()

    assert len(loaded) == 1
    assert loaded[0].id == 5
    assert loaded[0].full_name == "Chi"


def test_failed_save_keeps_previous_snapshot(
    store: RecordStore, sample_record: Record, monkeypatch: pytest.MonkeyPatch
) -> None:
    store.save([sample_record])
    before = store.path.read_text("utf-8")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("ptvd.records.store.os.replace", boom)
    store.save([Record(id=1, full_name="Someone else", phone="1")])

    assert store.path.read_text("utf-8") == before
    assert not store.path.with_suffix(".json.tmp").exists()
    assert store.load() == [sample_record]


def test_unavailable_snapshot_path_loads_empty(tmp_path: Path) -> None:
    # Path.exists() re-raises ENAMETOOLONG instead of returning False.
    store = RecordStore(tmp_path / ("x" * 300) / "snap.json")

    assert store.load() == []


def test_unreadable_snapshot_loads_empty(store: RecordStore, monkeypatch: pytest.MonkeyPatch) -> None:
    store.path.write_text("[]", "utf-8")

    def denied(self, *args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_text", denied)

    assert store.load() == []


def test_tag_lists_round_trip_after_normalization(store: RecordStore) -> None:
    record = Record(id=3, full_name="Dung", phone="0922", goals=["", "Hết mụn", "Hết mụn"])
    assert record.goals == ["Hết mụn"]

    store.save([record])

    assert store.load() == [record]
