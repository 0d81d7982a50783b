# src/ptvd/records/store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .models import Record

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Local durable cache: one JSON snapshot holding the whole Record List.

    - load() never raises: a missing or corrupt snapshot reads as [].
    - save() rewrites the full list into a temp file and swaps it in with
      os.replace, so the previous snapshot survives any failed write.
    """

    def __init__(self, snapshot_path: str | Path) -> None:
        self._path = Path(snapshot_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Record]:
        path = self._path
        try:
            if not path.exists():
                return []
            data = json.loads(path.read_text("utf-8"))
        except OSError:
            logger.exception("Record snapshot %s is unavailable; starting empty.", path)
            return []
        except Exception:
            logger.exception("Failed to read record snapshot %s; starting empty.", path)
            return []

        if not isinstance(data, list):
            logger.warning("Record snapshot %s is not a JSON array; starting empty.", path)
            return []

        out: list[Record] = []
        for item in data:
            if not isinstance(item, dict):
                logger.debug("Skipping non-object entry in snapshot: %r", item)
                continue
            try:
                out.append(Record.from_dict(item))
            except Exception:
                logger.exception("Skipping unreadable record in snapshot %s", path)
        logger.debug("Loaded %d records from %s", len(out), path)
        return out

    def save(self, records: Iterable[Record]) -> None:
        path = self._path
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, path)
            with contextlib.suppress(Exception):
                # Snapshot holds personal data, keep it private on disk.
                os.chmod(path, 0o600)
            logger.debug("Saved record snapshot to %s", path)
        except Exception:
            logger.exception("Failed to save record snapshot to %s", path)
            with contextlib.suppress(Exception):
                tmp.unlink(missing_ok=True)
