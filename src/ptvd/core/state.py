# src/ptvd/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..records.models import Record
from .ports import RecordRepo, RemoteSync


class View(StrEnum):
    LIST = "list"
    FORM = "form"
    DETAIL = "detail"


class SaveState(StrEnum):
    """
    Save/upsert state machine.

    IDLE -> SUBMITTING -> SAVED | SAVED_LOCALLY_ONLY
    Both terminal states accept a fresh submission.
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    SAVED = "saved"
    SAVED_LOCALLY_ONLY = "saved_locally_only"


@dataclass
class AppState:
    """
    Explicit application state shared by flows and connectors.

    `records` is the single in-memory Record List; only the pull-completion
    and save-completion flows replace or mutate it.
    """

    # Store Settings on the state for easy access in other modules.
    settings: Any

    store: RecordRepo
    remote: RemoteSync

    records: list[Record] = field(default_factory=list)

    view: View = View.LIST
    selected: Record | None = None
    editing: Record | None = None

    save_state: SaveState = SaveState.IDLE
    edit_unlocked: bool = False
