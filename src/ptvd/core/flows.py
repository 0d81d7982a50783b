# src/ptvd/core/flows.py

"""
Record flows over AppState.

- startup: load the local snapshot, then refresh from the remote table
  (last-write-wins, whole list replaced and persisted),
- save: validate -> upsert remotely -> merge + persist locally (always),
- navigation entry points used by connectors (list / select / edit / saved).

The remote is never re-read after startup unless a connector asks for it.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from ..records.catalog import required_fields
from ..records.models import Record, RecordId, derive_main_goal, derive_main_issues, same_id
from ..records.reconcile import reconcile_rows
from ..sync.client import RemoteSyncError, friendly_sync_error_message
from .state import AppState, SaveState, View

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please enter at least full name and phone."


class ValidationError(ValueError):
    pass


class SaveInProgressError(RuntimeError):
    pass


@dataclass(slots=True, frozen=True)
class SaveOutcome:
    state: SaveState
    record: Record
    message: str
    warning: str | None = None

    @property
    def saved_remotely(self) -> bool:
        return self.state == SaveState.SAVED


# ---- startup ----


def load_local(state: AppState) -> list[Record]:
    state.records = state.store.load()
    logger.info("Loaded %d records from local snapshot.", len(state.records))
    return state.records


async def refresh_from_remote(state: AppState) -> bool:
    """
    Pull every remote row, reconcile, replace the list and persist it.

    Returns False (state untouched) when the pull fails.
    """
    try:
        rows = await state.remote.pull_all()
    except RemoteSyncError as e:
        logger.warning("Remote load failed, keeping local records: %s", e)
        return False
    except Exception:
        logger.exception("Remote load crashed, keeping local records.")
        return False

    records = reconcile_rows(rows)
    state.records = records
    state.store.save(records)
    logger.info("Synced from remote, total records: %d", len(records))
    return True


async def start(state: AppState) -> None:
    load_local(state)
    await refresh_from_remote(state)


# ---- navigation entry points ----


def show_list(state: AppState) -> None:
    state.selected = None
    state.editing = None
    state.view = View.LIST


def on_select(state: AppState, record: Record) -> None:
    state.selected = record
    state.editing = None
    state.view = View.DETAIL


def on_edit(state: AppState, record: Record | None) -> None:
    """Open the form: `None` starts a new record, otherwise edits `record`."""
    state.editing = record
    state.selected = None
    state.view = View.FORM


def on_saved(state: AppState, record: Record, *, is_edit: bool) -> None:
    records = list(state.records)
    idx = None
    if is_edit:
        idx = next((i for i, r in enumerate(records) if same_id(r.id, record.id)), None)
    if idx is None:
        records.append(record)
    else:
        records[idx] = record

    state.records = records
    state.store.save(records)

    state.selected = record
    state.editing = None
    state.view = View.DETAIL


def find_record(records: list[Record], record_id: RecordId) -> Record | None:
    for r in records:
        if same_id(r.id, record_id):
            return r
    return None


def filter_records(records: list[Record], keyword: str) -> list[Record]:
    kw = (keyword or "").strip().lower()
    if not kw:
        return list(records)
    return [r for r in records if kw in r.full_name.lower() or kw in r.phone.lower()]


# ---- save ----


def validate_form(form: Record) -> None:
    missing = [f.attr for f in required_fields() if not str(getattr(form, f.attr) or "").strip()]
    if missing:
        raise ValidationError(VALIDATION_MESSAGE)


def _iso_utc(now: datetime) -> str:
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_record(form: Record, *, is_edit: bool, now: datetime | None = None) -> Record:
    """Mint id/createdAt for new records and recompute the derived display fields."""
    now = now or datetime.now(UTC)
    record = copy.deepcopy(form)

    if not (is_edit and record.id is not None):
        record.id = int(now.timestamp() * 1000)
    if not record.created_at:
        record.created_at = _iso_utc(now)

    record.main_issues = derive_main_issues(record.current_issues)
    record.main_goal = derive_main_goal(record.goals)
    return record


async def submit_record(
    state: AppState,
    form: Record,
    *,
    is_edit: bool,
    now: datetime | None = None,
) -> SaveOutcome:
    """
    Run one submission through the save state machine.

    Raises ValidationError (state stays IDLE, nothing written) or
    SaveInProgressError. Otherwise the record is always merged and persisted
    locally; the outcome says whether the remote write succeeded.
    """
    if state.save_state == SaveState.SUBMITTING:
        raise SaveInProgressError("A save is already in progress.")

    state.save_state = SaveState.IDLE
    validate_form(form)

    state.save_state = SaveState.SUBMITTING
    try:
        record = build_record(form, is_edit=is_edit, now=now)

        remote_error: str | None = None
        remote_id = record.remote_id
        try:
            remote_id = await state.remote.upsert(record)
        except RemoteSyncError as e:
            remote_error = friendly_sync_error_message(e)
            logger.warning("Remote save failed for record %s: %s", record.id, e)
        except Exception as e:
            remote_error = friendly_sync_error_message(e)
            logger.exception("Remote save crashed for record %s", record.id)

        saved = replace(record, remote_id=remote_id if remote_id is not None else form.remote_id)
        on_saved(state, saved, is_edit=is_edit)

        if remote_error is None:
            state.save_state = SaveState.SAVED
            logger.info("Saved record %s (remote id=%s).", saved.id, saved.remote_id)
            return SaveOutcome(state=SaveState.SAVED, record=saved, message="Record saved.")

        state.save_state = SaveState.SAVED_LOCALLY_ONLY
        return SaveOutcome(
            state=SaveState.SAVED_LOCALLY_ONLY,
            record=saved,
            message="Record saved on this machine only.",
            warning=f"Saved locally. Remote error: {remote_error}",
        )
    finally:
        if state.save_state == SaveState.SUBMITTING:
            state.save_state = SaveState.IDLE
