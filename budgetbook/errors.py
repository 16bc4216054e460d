"""Exceptions raised by the ledger and storage layers."""


class BudgetError(Exception):
    """A command was rejected. The message is meant for the user."""


class ValidationError(BudgetError):
    """Input fields are missing or malformed."""


class ReferentialError(BudgetError):
    """The command would break a reference between entities."""


class NotFoundError(BudgetError):
    """The referenced entity does not exist."""


class StorageError(Exception):
    """The underlying key-value store could not be written."""
