# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from ptvd.core.state import AppState
from ptvd.records.models import Record
from ptvd.records.store import RecordStore

from .fakes import FakeRemote


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and .env files.
    """
    return SimpleNamespace(
        app_name="ptvd-test",
        data_dir=tmp_path,
        snapshot_path=tmp_path / "ptv_customers_ios_v3.json",
        export_dir=tmp_path / "exports",
        edit_password="123456",
        remote_configured=False,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> RecordStore:
    return RecordStore(settings.snapshot_path)


@pytest.fixture()
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture()
def state(settings: SimpleNamespace, store: RecordStore, remote: FakeRemote) -> AppState:
    """
    AppState wired with a real JSON RecordStore (tmp dir) and a fake remote.
    """
    return AppState(settings=settings, store=store, remote=remote)


@pytest.fixture()
def sample_record() -> Record:
    return Record(
        id=1700000000000,
        remote_id=7,
        full_name="Anh Le",
        phone="0900000000",
        dob="2003-04-05",
        current_issues=["Mụn viêm"],
        goals=["Hết mụn", "Da sáng khỏe"],
        sign_date="2024-10-01",
        created_at="2024-10-01T08:30:00.000Z",
        main_issues="Mụn viêm",
        main_goal="Hết mụn",
    )
