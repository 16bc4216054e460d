"""Build a ledger for an identity.

The identity decides the storage namespace. It is fixed when the ledger is
constructed, so switching identity means building a new ledger.
"""

import logging
from datetime import date
from pathlib import Path

from budgetbook.config import Settings, load_settings
from budgetbook.ledger import Ledger
from budgetbook.store.storage import KeyValueStorage, SqliteStorage, namespace_for

logger = logging.getLogger(__name__)


def open_storage(user: str | None, db_path: Path | None = None) -> KeyValueStorage:
    """Open the SQLite storage namespaced for a user (or anonymous)."""
    return SqliteStorage(db_path, namespace=namespace_for(user))


def open_ledger(
    user: str | None = None,
    month: date | str | None = None,
    settings: Settings | None = None,
    db_path: Path | None = None,
) -> Ledger:
    """Open the ledger for a user.

    Args:
        user: Identity to scope storage to. Defaults to the configured user.
        month: Active month (date or MM/yyyy). Defaults to the current month.
        settings: Loaded settings. If None, loads from the config file.
        db_path: Database path. If None, uses default location.

    Returns:
        Ledger bound to the user's storage namespace.
    """
    if settings is None:
        settings = load_settings()

    identity = user or settings.user
    logger.debug("Opening ledger for %s", identity)
    storage = open_storage(identity, db_path)
    return Ledger(storage, active_month=month, seed_categories=settings.categories)
