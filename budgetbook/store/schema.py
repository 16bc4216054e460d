"""SQLite layout for the key-value store.

One table holds every persisted key. Keys are stored fully qualified
(identity prefix included) and values are JSON text.
"""

import os
import sqlite3
from pathlib import Path

APP_DIR = "budgetbook"
DB_FILENAME = "budgetbook.db"

KV_STORE_DDL = """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
"""


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    return get_xdg_data_home() / APP_DIR / DB_FILENAME


def database_exists(db_path: Path | None = None) -> bool:
    """Check whether the store has been created at db_path (default location if None)."""
    return (db_path or get_db_path()).exists()


def init_database(db_path: Path | None = None) -> None:
    """Create the database file and kv_store table if missing.

    Existing data is left alone, so this runs on every storage open.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If the table cannot be created.
        OSError: If the parent directory cannot be created.
    """
    db_path = db_path or get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        with conn:
            conn.execute(KV_STORE_DDL)
    finally:
        conn.close()
