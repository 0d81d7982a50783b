# src/ptvd/records/reconcile.py

"""
Remote row -> canonical Record.

A remote row carries the full Record inside its `data` payload, plus a few
flattened columns used for querying on the server side. Older rows may have
no payload (or a partial one), so every field is resolved from an ordered
list of sources: payload value, then top-level column, then "".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .models import REMOTE_ID_KEY, Record

logger = logging.getLogger(__name__)

PAYLOAD_COLUMN = "data"

# payload key -> top-level column that may stand in for it
COLUMN_FALLBACKS: dict[str, str] = {
    "id": "id",
    "createdAt": "created_at",
    "fullName": "full_name",
    "phone": "phone",
    "mainIssues": "main_issues",
    "mainGoal": "main_goal",
}


def _present(value: Any) -> bool:
    return value is not None and value != ""


def first_present(*values: Any, default: Any = "") -> Any:
    """First value that is neither None nor empty string."""
    for v in values:
        if _present(v):
            return v
    return default


def reconcile_row(row: dict[str, Any]) -> Record:
    payload = row.get(PAYLOAD_COLUMN)
    base: dict[str, Any] = payload if isinstance(payload, dict) else {}

    merged = dict(base)
    for key, column in COLUMN_FALLBACKS.items():
        merged[key] = first_present(base.get(key), row.get(column))

    # The remote row id always wins for the remote identifier.
    merged[REMOTE_ID_KEY] = row.get("id")
    return Record.from_dict(merged)


def reconcile_rows(rows: Iterable[Any]) -> list[Record]:
    out: list[Record] = []
    for row in rows:
        if not isinstance(row, dict):
            logger.warning("Skipping malformed remote row: %r", row)
            continue
        out.append(reconcile_row(row))
    return out
