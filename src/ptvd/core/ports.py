# src/ptvd/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core flows.

Flows depend on Protocols instead of concrete implementations, so the local
store and the remote client are swappable and easy to fake in tests.
"""

from collections.abc import Iterable
from typing import Any, Protocol

from ..records.models import Record, RecordId


class RecordRepo(Protocol):
    """Local durable cache of the whole Record List."""

    def load(self) -> list[Record]: ...
    def save(self, records: Iterable[Record]) -> None: ...


class RemoteSync(Protocol):
    """
    Remote table client.

    Both calls raise RemoteSyncError on any transport/server failure.
    """

    async def pull_all(self) -> list[dict[str, Any]]: ...
    async def upsert(self, record: Record) -> RecordId: ...
