"""Pure functions for transaction validation and filtering.

This module contains the functional core for transaction operations:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

from dataclasses import dataclass

from budgetbook.dates import is_valid_iso_date
from budgetbook.domain.models import CategoryName, Description, Money, TransactionKind


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data.

    The amount is always positive; direction is carried by ``kind``.
    """

    id: str
    amount: Money
    description: Description
    category: CategoryName
    date: str
    kind: TransactionKind

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE


def validate_amount(amount: object) -> tuple[bool, str | None]:
    """Validate that an amount is a positive number of cents.

    Args:
        amount: Candidate amount.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        return False, "Amount must be a number of cents"

    if amount <= 0:
        return False, "Amount must be positive"

    return True, None


def coerce_kind(kind: object) -> TransactionKind | None:
    """Accept a TransactionKind or its string value."""
    if isinstance(kind, TransactionKind):
        return kind
    try:
        return TransactionKind(kind)
    except ValueError:
        return None


def validate_transaction_fields(
    amount: object,
    description: object,
    category: object,
    txn_date: object,
    kind: object,
) -> tuple[bool, str | None]:
    """Validate the fields of a new or edited transaction.

    Category existence is a referential check and is not done here.

    Returns:
        Tuple of (is_valid, error_message).
    """
    valid, error = validate_amount(amount)
    if not valid:
        return False, error

    if not isinstance(description, str) or not description.strip():
        return False, "Description is required"

    if not isinstance(category, str) or not category.strip():
        return False, "Category is required"

    if not is_valid_iso_date(txn_date):
        return False, f"Invalid date '{txn_date}' (expected YYYY-MM-DD)"

    if coerce_kind(kind) is None:
        return False, f"Invalid transaction type '{kind}' (expected income or expense)"

    return True, None


def find_transaction(transactions: tuple[Transaction, ...], txn_id: str) -> Transaction | None:
    """Find a transaction by id."""
    for txn in transactions:
        if txn.id == txn_id:
            return txn
    return None


def search_transactions(
    transactions: tuple[Transaction, ...] | list[Transaction],
    kind: TransactionKind | None = None,
    term: str | None = None,
) -> list[Transaction]:
    """Filter transactions by kind and a free-text term.

    The term matches case-insensitively against description and category,
    and against the amount in major units (so "12.5" finds 1250 cents).

    Args:
        transactions: Transactions to filter, order preserved.
        kind: Only keep this kind if given.
        term: Search term, ignored when empty.

    Returns:
        Matching transactions.
    """
    needle = term.strip().lower() if term else ""
    results: list[Transaction] = []

    for txn in transactions:
        if kind is not None and txn.kind is not kind:
            continue

        if needle:
            amount_text = f"{txn.amount / 100:.2f}"
            haystacks = (txn.description.lower(), txn.category.lower(), amount_text)
            if not any(needle in text for text in haystacks):
                continue

        results.append(txn)

    return results
