"""Domain type definitions for budgetbook.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units)
- MonthKey: Month partition key in MM/yyyy format
- CategoryName: Name of a transaction/budget category
- Description: Transaction description text
"""

from enum import Enum
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month partitions are keyed as MM/yyyy (e.g., "01/2025")
MonthKey = NewType("MonthKey", str)

# Category name, referenced by transactions and budgets
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)


class TransactionKind(str, Enum):
    """Direction of a transaction. Amounts are always positive."""

    INCOME = "income"
    EXPENSE = "expense"


SAVINGS_CATEGORY = CategoryName("Savings")
DEBT_CATEGORY = CategoryName("Debt")

INCOME_CATEGORIES: frozenset[CategoryName] = frozenset(
    CategoryName(name) for name in ("Salary", "Investments", "Side Hustle", "Refunds")
)

DEFAULT_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(name)
    for name in (
        "Housing",
        "Transportation",
        "Food",
        "Utilities",
        "Insurance",
        "Healthcare",
        "Savings",
        "Personal",
        "Entertainment",
        "Debt",
        "Education",
        "Gifts/Donations",
        "Salary",
        "Investments",
        "Side Hustle",
        "Refunds",
    )
)


def is_income_category(name: str) -> bool:
    """Check whether a category is one of the fixed income categories."""
    return name in INCOME_CATEGORIES
