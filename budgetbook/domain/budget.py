"""Pure functions for budget calculations and logic.

This module contains the functional core for budget operations:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Budget.spent is a cache of the expense total for its category within one
month partition. The helpers here adjust it incrementally; callers never
recompute it from scratch except when a budget is first created.

All monetary amounts are in cents (Money type).
"""

from dataclasses import dataclass, replace

from budgetbook.domain.models import CategoryName, Money
from budgetbook.domain.transactions import Transaction, validate_amount


@dataclass(frozen=True)
class Budget:
    """Immutable monthly spending limit for a category."""

    category: CategoryName
    amount: Money
    spent: Money = Money(0)

    @property
    def remaining(self) -> Money:
        return Money(self.amount - self.spent)


def validate_budget(category: object, amount: object) -> tuple[bool, str | None]:
    """Validate budget input fields.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not isinstance(category, str) or not category.strip():
        return False, "Category is required"

    return validate_amount(amount)


def find_budget(budgets: tuple[Budget, ...], category: str) -> Budget | None:
    """Find the budget for a category."""
    for budget in budgets:
        if budget.category == category:
            return budget
    return None


def adjust_spent(budgets: tuple[Budget, ...], category: str, delta: int) -> tuple[Budget, ...]:
    """Apply a spent delta to the budget of one category.

    Spent is clamped at zero so a previously drifted cache never goes negative.

    Args:
        budgets: Budgets of one month partition.
        category: Category whose budget is affected.
        delta: Cents to add (negative to remove).

    Returns:
        New budgets tuple. Unchanged if no budget exists for the category.
    """
    return tuple(
        replace(budget, spent=Money(max(0, budget.spent + delta))) if budget.category == category else budget
        for budget in budgets
    )


def apply_transaction(budgets: tuple[Budget, ...], txn: Transaction) -> tuple[Budget, ...]:
    """Add an expense transaction's amount to its category budget."""
    if not txn.is_expense:
        return budgets
    return adjust_spent(budgets, txn.category, txn.amount)


def reverse_transaction(budgets: tuple[Budget, ...], txn: Transaction) -> tuple[Budget, ...]:
    """Remove an expense transaction's amount from its category budget."""
    if not txn.is_expense:
        return budgets
    return adjust_spent(budgets, txn.category, -txn.amount)


def replace_transaction(budgets: tuple[Budget, ...], old: Transaction, new: Transaction) -> tuple[Budget, ...]:
    """Move a transaction's budget effect from its old to its new version.

    Works when category or kind change between the two versions.
    """
    return apply_transaction(reverse_transaction(budgets, old), new)


def expense_total(transactions: tuple[Transaction, ...], category: str) -> Money:
    """Sum expense amounts for one category."""
    return Money(sum(t.amount for t in transactions if t.is_expense and t.category == category))


def upsert_budget(
    budgets: tuple[Budget, ...],
    transactions: tuple[Transaction, ...],
    category: CategoryName,
    amount: Money,
) -> tuple[tuple[Budget, ...], Budget]:
    """Create or overwrite the budget for a category.

    An existing budget keeps its running spent total and takes the new limit.
    A new budget starts from the partition's current expense total for the
    category, which is zero for a month without such expenses.

    Returns:
        Tuple of (new_budgets, resulting_budget).
    """
    existing = find_budget(budgets, category)
    if existing is not None:
        updated = replace(existing, amount=amount)
        return tuple(updated if b.category == category else b for b in budgets), updated

    created = Budget(category=category, amount=amount, spent=expense_total(transactions, category))
    return budgets + (created,), created


def remove_budget(budgets: tuple[Budget, ...], category: str) -> tuple[Budget, ...]:
    """Drop the budget for a category."""
    return tuple(b for b in budgets if b.category != category)


def carry_over_limits(previous: tuple[Budget, ...]) -> list[tuple[CategoryName, Money]]:
    """Extract (category, limit) pairs to copy into a new month.

    Spent is deliberately not part of the result.
    """
    return [(budget.category, budget.amount) for budget in previous]


def calculate_budget_percentage(spent: Money, limit: Money) -> float:
    """Calculate percentage of budget used.

    Args:
        spent: Amount spent in cents.
        limit: Budget limit in cents.

    Returns:
        Percentage of budget used (0-100+).
    """
    if limit <= 0:
        return 0.0
    return (spent / limit) * 100
