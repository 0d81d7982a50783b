# src/ptvd/sync/offline.py

from __future__ import annotations

from typing import Any

from ..records.models import Record, RecordId
from .client import RemoteSyncError

NOT_CONFIGURED = "Remote sync is not configured."


class OfflineSyncClient:
    """
    Stand-in Remote Sync Client used when no Supabase URL/key is configured.

    Every call fails with RemoteSyncError, so the app runs local-only:
    startup keeps the local snapshot and saves land as SAVED_LOCALLY_ONLY.
    """

    async def pull_all(self) -> list[dict[str, Any]]:
        raise RemoteSyncError(NOT_CONFIGURED)

    async def upsert(self, record: Record) -> RecordId:
        raise RemoteSyncError(NOT_CONFIGURED)
