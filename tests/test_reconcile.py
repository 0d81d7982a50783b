# tests/test_reconcile.py

from __future__ import annotations

from ptvd.records.reconcile import reconcile_row, reconcile_rows


def _row(**kw):
    base = {
        "id": 42,
        "created_at": "2024-09-30T10:00:00+00:00",
        "full_name": "Column Name",
        "phone": "0999",
        "main_issues": "Column issues",
        "main_goal": "Column goal",
    }
    base.update(kw)
    return base


def test_payload_fields_win_over_columns() -> None:
    payload = {
        "id": 1700000000000,
        "fullName": "Anh Le",
        "phone": "0900000000",
        "createdAt": "2024-10-01T08:30:00.000Z",
        "mainIssues": "Mụn viêm",
        "mainGoal": "Hết mụn",
        "goals": ["Hết mụn", "Da sáng khỏe"],
        "skinType": "Da dầu",
    }

    r = reconcile_row(_row(data=payload))

    assert r.id == 1700000000000
    assert r.remote_id == 42
    assert r.full_name == "Anh Le"
    assert r.phone == "0900000000"
    assert r.created_at == "2024-10-01T08:30:00.000Z"
    assert r.main_issues == "Mụn viêm"
    assert r.main_goal == "Hết mụn"
    assert r.goals == ["Hết mụn", "Da sáng khỏe"]
    assert r.skin_type == "Da dầu"


def test_absent_payload_falls_back_to_columns() -> None:
    r = reconcile_row(_row(data=None))

    assert r.main_issues == "Column issues"
    assert r.main_goal == "Column goal"
    assert r.full_name == "Column Name"
    assert r.created_at == "2024-09-30T10:00:00+00:00"


def test_absent_payload_and_columns_fall_back_to_empty_string() -> None:
    r = reconcile_row({"id": 9})

    assert r.main_issues == ""
    assert r.main_goal == ""
    assert r.created_at == ""
    assert r.full_name == ""
    assert r.current_issues == []


def test_empty_payload_values_count_as_absent() -> None:
    r = reconcile_row(_row(data={"mainIssues": "", "mainGoal": None}))

    assert r.main_issues == "Column issues"
    assert r.main_goal == "Column goal"


def test_local_id_falls_back_to_remote_id() -> None:
    r = reconcile_row(_row(data={"fullName": "No local id"}))

    assert r.id == 42
    assert r.remote_id == 42


def test_remote_id_always_comes_from_row() -> None:
    r = reconcile_row(_row(data={"id": 5, "supabaseId": 999}))

    assert r.id == 5
    assert r.remote_id == 42


def test_non_dict_payload_is_ignored() -> None:
    r = reconcile_row(_row(data="garbage"))

    assert r.full_name == "Column Name"


def test_rows_map_in_order_and_skip_malformed() -> None:
    rows = [_row(id=1), "bad row", _row(id=2), None, _row(id=3)]

    out = reconcile_rows(rows)

    assert [r.remote_id for r in out] == [1, 2, 3]
