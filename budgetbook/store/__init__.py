"""Storage layer - provides persistence for the application.

This module re-exports the storage handles and schema helpers.
"""

from budgetbook.store.schema import database_exists, get_db_path, init_database
from budgetbook.store.storage import (
    ANONYMOUS,
    CATEGORIES_KEY,
    DEBTS_KEY,
    MONTHLY_DATA_KEY,
    SAVINGS_GOALS_KEY,
    KeyValueStorage,
    MemoryStorage,
    SqliteStorage,
    namespace_for,
)

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Storage
    "ANONYMOUS",
    "CATEGORIES_KEY",
    "DEBTS_KEY",
    "MONTHLY_DATA_KEY",
    "SAVINGS_GOALS_KEY",
    "KeyValueStorage",
    "MemoryStorage",
    "SqliteStorage",
    "namespace_for",
]
