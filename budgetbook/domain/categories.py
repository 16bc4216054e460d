"""Pure functions for category management.

Categories are referenced by name from transactions and budgets in every
month partition, so renames cascade and deletes check all partitions.
"""

from dataclasses import replace

from budgetbook.domain.budget import Budget
from budgetbook.domain.models import CategoryName, MonthKey, is_income_category
from budgetbook.domain.partition import MonthPartition
from budgetbook.domain.transactions import Transaction


def normalize_category_name(name: object) -> CategoryName | None:
    """Strip surrounding whitespace; None for non-strings or blank names."""
    if not isinstance(name, str) or not name.strip():
        return None
    return CategoryName(name.strip())


def validate_new_category(name: object, categories: list[CategoryName]) -> tuple[bool, str | None]:
    """Validate a category name to add.

    Returns:
        Tuple of (is_valid, error_message).
    """
    normalized = normalize_category_name(name)
    if normalized is None:
        return False, "Category name cannot be empty"

    if normalized in categories:
        return False, f"Category '{normalized}' already exists"

    return True, None


def validate_rename(index: object, new_name: object, categories: list[CategoryName]) -> tuple[bool, str | None]:
    """Validate renaming the category at ``index``.

    Renaming a category to its own name is allowed (no-op).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(categories):
        return False, f"No category at index {index}"

    normalized = normalize_category_name(new_name)
    if normalized is None:
        return False, "Category name cannot be empty"

    if normalized in categories and normalized != categories[index]:
        return False, f"Category '{normalized}' already exists"

    return True, None


def category_in_use(months: dict[MonthKey, MonthPartition], name: str) -> bool:
    """Check whether any transaction or budget in any month references a category."""
    for partition in months.values():
        if any(t.category == name for t in partition.transactions):
            return True
        if any(b.category == name for b in partition.budgets):
            return True
    return False


def transactions_in_category(months: dict[MonthKey, MonthPartition], name: str) -> list[Transaction]:
    """All transactions referencing a category, across every month."""
    return [t for partition in months.values() for t in partition.transactions if t.category == name]


def budgets_in_category(months: dict[MonthKey, MonthPartition], name: str) -> list[tuple[MonthKey, Budget]]:
    """All (month, budget) pairs referencing a category."""
    return [(key, b) for key, partition in months.items() for b in partition.budgets if b.category == name]


def rename_in_partitions(
    months: dict[MonthKey, MonthPartition],
    old_name: str,
    new_name: CategoryName,
) -> dict[MonthKey, MonthPartition]:
    """Rename a category in every transaction and budget of every month.

    Returns:
        New partitions mapping; partitions without references are reused.
    """
    renamed: dict[MonthKey, MonthPartition] = {}

    for key, partition in months.items():
        touches = any(t.category == old_name for t in partition.transactions) or any(
            b.category == old_name for b in partition.budgets
        )
        if not touches:
            renamed[key] = partition
            continue

        renamed[key] = replace(
            partition,
            transactions=tuple(
                replace(t, category=new_name) if t.category == old_name else t for t in partition.transactions
            ),
            budgets=tuple(replace(b, category=new_name) if b.category == old_name else b for b in partition.budgets),
        )

    return renamed


def split_categories(categories: list[CategoryName]) -> tuple[list[CategoryName], list[CategoryName]]:
    """Split categories into (expense_categories, income_categories), order kept."""
    expenses = [c for c in categories if not is_income_category(c)]
    income = [c for c in categories if is_income_category(c)]
    return expenses, income
