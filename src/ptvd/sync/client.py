# src/ptvd/sync/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..records.models import Record, RecordId

logger = logging.getLogger(__name__)


class RemoteSyncError(RuntimeError):
    """Remote table could not be read or written. Message is user-presentable."""


def _timeout_obj(seconds: float) -> httpx.Timeout:
    # Keep connect short so a dead network fails fast; reads get the full budget.
    return httpx.Timeout(seconds, connect=min(5.0, seconds))


def _describe_http_error(resp: httpx.Response) -> str:
    detail = ""
    try:
        body = resp.json()
        if isinstance(body, dict):
            detail = str(body.get("message") or body.get("error") or body.get("hint") or "")
    except ValueError:
        detail = resp.text.strip()[:200]
    return f"HTTP {resp.status_code}" + (f": {detail}" if detail else "")


def build_row_payload(record: Record) -> dict[str, Any]:
    """Columns written to the remote table (flattened for querying + full payload)."""
    return {
        "full_name": record.full_name,
        "phone": record.phone,
        "main_issues": record.main_issues,
        "main_goal": record.main_goal,
        "data": record.to_dict(),
    }


class SupabaseSyncClient:
    """
    Remote Sync Client over the Supabase REST (PostgREST) API.

    - pull_all(): all rows ordered by created_at ascending.
    - upsert(record): PATCH by remote id when present, else INSERT and return the new id.

    Every failure surfaces as RemoteSyncError. A fresh AsyncClient is opened per
    call, so the client is safe to use from successive asyncio.run() loops.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        table: str = "phieu_tu_van",
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise RuntimeError("Supabase URL is not set. Set PTVD_SUPABASE_URL in your .env.")
        if not api_key or not api_key.strip():
            raise RuntimeError("Supabase key is not set. Set PTVD_SUPABASE_KEY in your .env.")

        self._base_url = base_url.rstrip("/") + "/rest/v1"
        self._api_key = api_key.strip()
        self._table = table
        self._timeout = _timeout_obj(float(timeout_seconds))
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Any) -> SupabaseSyncClient:
        return cls(
            base_url=str(getattr(settings, "supabase_url", "") or ""),
            api_key=str(getattr(settings, "supabase_key", "") or ""),
            table=str(getattr(settings, "remote_table", "phieu_tu_van")),
            timeout_seconds=float(getattr(settings, "remote_timeout_seconds", 15.0)),
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "apikey": self._api_key,
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, *, params: dict[str, str], **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                resp = await client.request(method, f"/{self._table}", params=params, **kwargs)
        except httpx.TimeoutException as e:
            raise RemoteSyncError("Remote request timed out.") from e
        except httpx.HTTPError as e:
            raise RemoteSyncError(f"Network error: {e.__class__.__name__}") from e

        if resp.is_error:
            raise RemoteSyncError(_describe_http_error(resp))
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteSyncError("Remote returned a non-JSON body.") from e

    async def pull_all(self) -> list[dict[str, Any]]:
        resp = await self._request("GET", params={"select": "*", "order": "created_at.asc"})
        data = self._json(resp)
        if not isinstance(data, list):
            raise RemoteSyncError("Remote returned an unexpected body (expected a list of rows).")
        logger.debug("Pulled %d rows from %s", len(data), self._table)
        return data

    async def upsert(self, record: Record) -> RecordId:
        payload = build_row_payload(record)

        if record.remote_id is not None:
            await self._request(
                "PATCH",
                params={"id": f"eq.{record.remote_id}"},
                json=payload,
                headers={"Prefer": "return=minimal"},
            )
            logger.debug("Updated remote row id=%s", record.remote_id)
            return record.remote_id

        resp = await self._request(
            "POST",
            params={"select": "*"},
            json=payload,
            headers={"Prefer": "return=representation"},
        )
        data = self._json(resp)
        row = data[0] if isinstance(data, list) and data else data
        if not isinstance(row, dict) or row.get("id") in (None, ""):
            raise RemoteSyncError("Remote insert did not return a row id.")
        logger.debug("Inserted remote row id=%s", row["id"])
        return row["id"]


def friendly_sync_error_message(err: Exception) -> str:
    msg = str(err).strip() or "Remote sync error."
    if "not configured" in msg or "is not set" in msg:
        return "Remote sync is not configured (set PTVD_SUPABASE_URL and PTVD_SUPABASE_KEY in .env)."
    if "HTTP 401" in msg or "HTTP 403" in msg:
        return f"Remote rejected the credentials ({msg}). Check PTVD_SUPABASE_KEY."
    return msg
