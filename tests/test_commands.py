# tests/test_commands.py

from __future__ import annotations

from ptvd.cli.commands import CommandIO, CommandRegistry, registry
from ptvd.core.state import AppState, SaveState, View
from ptvd.records.models import Record

from .fakes import FakeRemote, ScriptedIO


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, io):
        called["h3"] += 1
        io.emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bb"])

    notes: list[str] = []
    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BB y", CommandIO(emit=notes.append)) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_list_filters_by_keyword(state: AppState, sample_record: Record) -> None:
    state.records = [sample_record, Record(id=2, full_name="Bình", phone="0911", sign_date="2024-01-31")]

    out = registry.handle(state, "/list 0911") or ""

    assert "Bình" in out
    assert "Anh Le" not in out
    assert "31/01/24" in out
    assert state.view == View.LIST


def test_show_unknown_id(state: AppState) -> None:
    assert registry.handle(state, "/show 123") == "No record with id 123."


def test_show_selects_record(state: AppState, sample_record: Record) -> None:
    state.records = [sample_record]

    out = registry.handle(state, f"/show {sample_record.id}") or ""

    assert "Anh Le" in out
    assert state.selected == sample_record
    assert state.view == View.DETAIL


def test_new_saves_through_form(state: AppState, remote: FakeRemote) -> None:
    io = ScriptedIO(
        {
            "Họ và tên": "Anh Le",
            "SĐT": "0900000000",
            "Tình trạng da hiện tại": "1",
            "Mục tiêu": "1 6",
        }
    )

    out = registry.handle(state, "/new", CommandIO(emit=io.emit, prompt=io.prompt)) or ""

    assert "Record saved." in out
    assert len(state.records) == 1
    saved = state.records[0]
    assert saved.current_issues == ["Mụn viêm"]
    assert saved.goals == ["Hết mụn", "Da sáng khỏe"]
    assert saved.main_goal == "Hết mụn"
    assert saved.remote_id == 101
    assert state.store.load() == state.records


def test_new_with_remote_down_warns(state: AppState, remote: FakeRemote) -> None:
    remote.fail_upsert = True
    io = ScriptedIO({"Họ và tên": "Anh Le", "SĐT": "0900000000"})

    out = registry.handle(state, "/new", CommandIO(emit=io.emit, prompt=io.prompt)) or ""

    assert "WARNING" in out
    assert state.save_state == SaveState.SAVED_LOCALLY_ONLY
    assert len(state.store.load()) == 1


def test_new_without_name_is_not_saved(state: AppState) -> None:
    io = ScriptedIO({"SĐT": "0900000000"})

    out = registry.handle(state, "/new", CommandIO(emit=io.emit, prompt=io.prompt)) or ""

    assert out.startswith("Not saved")
    assert state.records == []


def test_new_cancelled(state: AppState) -> None:
    io = ScriptedIO({"Họ và tên": "/cancel"})

    assert registry.handle(state, "/new", CommandIO(emit=io.emit, prompt=io.prompt)) == "Cancelled."
    assert state.view == View.LIST


def test_edit_requires_password_once(state: AppState, sample_record: Record) -> None:
    state.records = [sample_record]

    wrong = ScriptedIO({"Password": "nope"})
    assert registry.handle(state, f"/edit {sample_record.id}", CommandIO(emit=wrong.emit, prompt=wrong.prompt)) == (
        "Wrong password."
    )
    assert not state.edit_unlocked

    ok = ScriptedIO({"Password": "123456", "Email": "anh@example.com"})
    out = registry.handle(state, f"/edit {sample_record.id}", CommandIO(emit=ok.emit, prompt=ok.prompt)) or ""

    assert "Record saved." in out
    assert state.edit_unlocked
    assert len(state.records) == 1
    assert state.records[0].email == "anh@example.com"
    assert state.records[0].remote_id == 7

    again = ScriptedIO({})
    registry.handle(state, f"/edit {sample_record.id}", CommandIO(emit=again.emit, prompt=again.prompt))
    assert not any(p.startswith("Password") for p in again.prompts)


def test_export_and_print(state: AppState, settings, sample_record: Record) -> None:
    assert registry.handle(state, "/export") == "No records to export."

    state.records = [sample_record]
    assert "Exported 1 records" in (registry.handle(state, "/export") or "")
    assert any(settings.export_dir.glob("danh_sach_phieu_tu_van_*.xlsx"))

    assert "Printable sheet written" in (registry.handle(state, f"/print {sample_record.id}") or "")
    assert (settings.export_dir / f"phieu_{sample_record.id}.txt").exists()


def test_sync_command(state: AppState, remote: FakeRemote) -> None:
    remote.rows = [{"id": 3, "data": {"id": 30, "fullName": "Chi", "phone": "1"}}]
    assert registry.handle(state, "/sync", CommandIO(emit=lambda _: None)) == "Synced. 1 records."

    remote.fail_pull = True
    out = registry.handle(state, "/sync", CommandIO(emit=lambda _: None)) or ""
    assert "failed" in out
    assert [r.id for r in state.records] == [30]
