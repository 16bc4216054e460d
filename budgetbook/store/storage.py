"""Key-value storage adapters.

Every adapter is constructed with an explicit namespace (identity prefix)
and prepends it to the logical keys it is given. Values are JSON.

Reads never fail: a missing, unreadable or corrupt key yields None and the
caller falls back to an empty default. Writes raise StorageError.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from budgetbook.errors import StorageError
from budgetbook.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"

MONTHLY_DATA_KEY = "monthlyData"
SAVINGS_GOALS_KEY = "savingsGoals"
DEBTS_KEY = "debts"
CATEGORIES_KEY = "categories"


def namespace_for(user_id: str | None) -> str:
    """Build the key prefix isolating one identity's data.

    Args:
        user_id: Stable user identifier, or None for the anonymous scope.

    Returns:
        Prefix such as "user_alice_".
    """
    return f"user_{user_id or ANONYMOUS}_"


class KeyValueStorage:
    """Namespaced JSON key-value storage.

    Subclasses implement ``_get_raw`` and ``_set_raw`` on fully qualified keys.
    """

    def __init__(self, namespace: str = "") -> None:
        self.namespace = namespace

    def qualify(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def read(self, key: str) -> Any | None:
        """Read and decode a value.

        Returns:
            Decoded JSON value, or None if missing or corrupt.
        """
        qualified = self.qualify(key)
        raw = self._get_raw(qualified)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt value for %s: %s", qualified, e)
            return None

    def write(self, key: str, value: Any) -> None:
        """Encode and persist a value.

        Raises:
            StorageError: If the value cannot be encoded or written.
        """
        qualified = self.qualify(key)
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not encode {qualified}: {e}") from e

        self._set_raw(qualified, raw)
        logger.debug("Persisted %s (%d bytes)", qualified, len(raw))

    def _get_raw(self, qualified_key: str) -> str | None:
        raise NotImplementedError

    def _set_raw(self, qualified_key: str, raw: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage, e.g. for tests or throwaway sessions.

    Several instances may share one ``data`` dict to model a single
    underlying store seen through different namespaces.
    """

    def __init__(self, namespace: str = "", data: dict[str, str] | None = None) -> None:
        super().__init__(namespace)
        self.data: dict[str, str] = data if data is not None else {}

    def _get_raw(self, qualified_key: str) -> str | None:
        return self.data.get(qualified_key)

    def _set_raw(self, qualified_key: str, raw: str) -> None:
        self.data[qualified_key] = raw


class SqliteStorage(KeyValueStorage):
    """SQLite-backed storage using the kv_store table."""

    def __init__(self, db_path: Path | None = None, namespace: str = "") -> None:
        super().__init__(namespace)
        self.db_path = db_path if db_path is not None else get_db_path()
        try:
            init_database(self.db_path)
        except (sqlite3.Error, OSError) as e:
            # Reads degrade to defaults and writes will report the failure
            logger.error("Could not initialize database at %s: %s", self.db_path, e)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _get_raw(self, qualified_key: str) -> str | None:
        try:
            conn = self._connect()
        except sqlite3.Error as e:
            logger.warning("Could not open %s: %s", self.db_path, e)
            return None

        try:
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (qualified_key,))
            row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.warning("Could not read %s: %s", qualified_key, e)
            return None
        finally:
            conn.close()

        return row[0] if row else None

    def _set_raw(self, qualified_key: str, raw: str) -> None:
        try:
            conn = self._connect()
        except sqlite3.Error as e:
            raise StorageError(f"Could not open {self.db_path}: {e}") from e

        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (qualified_key, raw),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Could not write {qualified_key}: {e}") from e
        finally:
            conn.close()
