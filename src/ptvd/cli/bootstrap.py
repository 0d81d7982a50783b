# src/ptvd/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete record store and remote client into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import RemoteSync
from ..core.state import AppState
from ..records.store import RecordStore
from ..sync.client import SupabaseSyncClient
from ..sync.offline import OfflineSyncClient

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    settings.export_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    remote: RemoteSync
    if getattr(settings, "remote_configured", False):
        remote = SupabaseSyncClient.from_settings(settings)
    else:
        logger.info("Remote sync not configured; running with the local snapshot only.")
        remote = OfflineSyncClient()

    return AppState(
        settings=settings,
        store=RecordStore(settings.snapshot_path),
        remote=remote,
    )
