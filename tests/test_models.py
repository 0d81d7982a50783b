# tests/test_models.py

from __future__ import annotations

from ptvd.records.models import Record, derive_main_goal, derive_main_issues, toggle_tag


def test_unknown_payload_keys_survive_a_round_trip() -> None:
    data = {"id": 5, "fullName": "Chi", "legacyNote": {"a": 1}, "currentIssues": "Da khô"}

    r = Record.from_dict(data)

    assert r.extra == {"legacyNote": {"a": 1}}
    assert r.current_issues == ["Da khô"]
    out = r.to_dict()
    assert out["legacyNote"] == {"a": 1}
    assert out["fullName"] == "Chi"
    assert out["supabaseId"] is None


def test_from_dict_normalizes_loose_values() -> None:
    r = Record.from_dict({"id": "", "phone": 900, "goals": ["Hết mụn", "Hết mụn", None, ""]})

    assert r.id is None
    assert r.phone == "900"
    assert r.goals == ["Hết mụn"]


def test_toggle_tag_adds_and_removes() -> None:
    tags = toggle_tag([], "Sáng")
    tags = toggle_tag(tags, "Tối")
    assert tags == ["Sáng", "Tối"]
    assert toggle_tag(tags, "Sáng") == ["Tối"]


def test_derived_fields() -> None:
    assert derive_main_issues(["Mụn viêm", "Da khô"]) == "Mụn viêm, Da khô"
    assert derive_main_issues([]) == ""
    assert derive_main_goal(["Hết mụn", "Da sáng khỏe"]) == "Hết mụn"
    assert derive_main_goal([]) == ""


def test_constructor_normalizes_tag_lists() -> None:
    r = Record(current_issues=["Mụn viêm", "", "Mụn viêm", None])

    assert r.current_issues == ["Mụn viêm"]
    assert Record.from_dict(r.to_dict()) == r
