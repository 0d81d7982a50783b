# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Put the Supabase key in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "PTVD_APP_NAME": "App display name (default: PTVD - Phiếu tư vấn da).",
    "PTVD_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "PTVD_CONSOLE_ENABLED": "Run the console after the startup sync (true/false).",
    # Paths (gitignored)
    "PTVD_DATA_DIR": "Local data directory (default: .local/ptvd).",
    "PTVD_STORAGE_KEY": "Snapshot slot name (default: ptv_customers_ios_v3).",
    "PTVD_SNAPSHOT_PATH": "Record snapshot JSON path (default: <data_dir>/<storage_key>.json).",
    "PTVD_EXPORT_DIR": "Where .xlsx exports and printable sheets go (default: <data_dir>/exports).",
    # Remote table (Supabase)
    "PTVD_SUPABASE_URL": "Supabase project URL (also read from SUPABASE_URL). Empty => local only.",
    "PTVD_SUPABASE_KEY": "Supabase anon/service key (also read from SUPABASE_ANON_KEY / SUPABASE_KEY).",
    "PTVD_REMOTE_TABLE": "Remote table name (default: phieu_tu_van).",
    "PTVD_REMOTE_TIMEOUT_SECONDS": "HTTP timeout for remote calls (default: 15).",
    # Edit gate
    "PTVD_EDIT_PASSWORD": "Password asked once per session before /edit (empty disables the gate).",
}
