# src/ptvd/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (remote sync is optional).
- Local data lives under a gitignored directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PTVD"

DEFAULT_STORAGE_KEY = "ptv_customers_ios_v3"
DEFAULT_REMOTE_TABLE = "phieu_tu_van"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_key: str
    snapshot_path: Path
    export_dir: Path

    # ---- Remote table (Supabase / PostgREST) ----
    supabase_url: str
    supabase_key: str | None
    remote_table: str
    remote_timeout_seconds: float

    # ---- Edit gate ----
    edit_password: str

    @property
    def remote_configured(self) -> bool:
        return bool(self.supabase_url.strip()) and bool((self.supabase_key or "").strip())

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "PTVD - Phiếu tư vấn da")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/ptvd"))
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY
        snapshot_path = _env_path(_k("SNAPSHOT_PATH"), data_dir / f"{storage_key}.json")
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        # Accept the plain SUPABASE_* names too, they are what the dashboard shows.
        supabase_url = (_first_env(_k("SUPABASE_URL"), "SUPABASE_URL", default="") or "").strip()
        supabase_key = _first_env(_k("SUPABASE_KEY"), "SUPABASE_ANON_KEY", "SUPABASE_KEY", default=None)
        remote_table = _env(_k("REMOTE_TABLE"), DEFAULT_REMOTE_TABLE).strip() or DEFAULT_REMOTE_TABLE
        remote_timeout_seconds = _env_float(_k("REMOTE_TIMEOUT_SECONDS"), 15.0)

        edit_password = _env(_k("EDIT_PASSWORD"), "123456")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            storage_key=storage_key,
            snapshot_path=snapshot_path,
            export_dir=export_dir,
            supabase_url=supabase_url,
            supabase_key=supabase_key,
            remote_table=remote_table,
            remote_timeout_seconds=remote_timeout_seconds,
            edit_password=edit_password,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
