"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations, recomputed on every read
- Easy to test

All monetary amounts are in cents (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from budgetbook.dates import month_key_for, parse_iso_date
from budgetbook.domain.budget import Budget, calculate_budget_percentage
from budgetbook.domain.models import CategoryName, Money, MonthKey, TransactionKind
from budgetbook.domain.transactions import Transaction


@dataclass(frozen=True)
class Totals:
    """Immutable income/expense totals."""

    income: Money
    expenses: Money
    balance: Money


@dataclass(frozen=True)
class CategoryShare:
    """Immutable expense total for one category."""

    category: CategoryName
    total: Money
    percentage: float


@dataclass(frozen=True)
class MonthSummary:
    """Immutable income/expense summary for one calendar month."""

    month: MonthKey
    name: str
    income: Money
    expenses: Money
    savings: Money


@dataclass(frozen=True)
class YearTotals:
    """Immutable totals across a monthly series."""

    income: Money
    expenses: Money
    savings: Money


@dataclass(frozen=True)
class BudgetCategoryStatus:
    """Immutable budget status for a single category."""

    category: CategoryName
    limit: Money
    spent: Money
    remaining: Money
    percentage: float

    @property
    def over_budget(self) -> bool:
        return self.spent > self.limit


EXPORT_SORT_KEYS = ("date", "amount", "category")


def calculate_totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expenses and derive the balance.

    Args:
        transactions: Transactions of one month partition.

    Returns:
        Totals with balance = income - expenses.
    """
    income = 0
    expenses = 0
    for txn in transactions:
        if txn.kind is TransactionKind.INCOME:
            income += txn.amount
        else:
            expenses += txn.amount

    return Totals(income=Money(income), expenses=Money(expenses), balance=Money(income - expenses))


def category_breakdown(transactions: Iterable[Transaction]) -> list[CategoryShare]:
    """Group expenses by category.

    Args:
        transactions: Transactions of one month partition.

    Returns:
        CategoryShare list sorted by total descending (ties alphabetical).
    """
    sums: dict[CategoryName, int] = {}
    for txn in transactions:
        if txn.kind is TransactionKind.EXPENSE:
            sums[txn.category] = sums.get(txn.category, 0) + txn.amount

    grand_total = sum(sums.values())
    ordered = sorted(sums.items(), key=lambda item: (-item[1], item[0]))

    return [
        CategoryShare(
            category=category,
            total=Money(total),
            percentage=(total / grand_total) * 100 if grand_total > 0 else 0.0,
        )
        for category, total in ordered
    ]


def monthly_series(transactions: Iterable[Transaction], year: int) -> list[MonthSummary]:
    """Build the 12-month income/expense series for a year.

    Transactions are bucketed by their own date, wherever they are stored.
    Transactions with unparseable dates are skipped.

    Args:
        transactions: Transactions from every month partition.
        year: Calendar year to report.

    Returns:
        Twelve MonthSummary entries, January first.
    """
    income = [0] * 12
    expenses = [0] * 12

    for txn in transactions:
        try:
            txn_date = parse_iso_date(txn.date)
        except ValueError:
            continue
        if txn_date.year != year:
            continue

        if txn.kind is TransactionKind.INCOME:
            income[txn_date.month - 1] += txn.amount
        else:
            expenses[txn_date.month - 1] += txn.amount

    return [
        MonthSummary(
            month=month_key_for(year, index + 1),
            name=date(year, index + 1, 1).strftime("%b"),
            income=Money(income[index]),
            expenses=Money(expenses[index]),
            savings=Money(income[index] - expenses[index]),
        )
        for index in range(12)
    ]


def yearly_totals(series: Iterable[MonthSummary]) -> YearTotals:
    """Sum a monthly series."""
    income = 0
    expenses = 0
    savings = 0
    for month in series:
        income += month.income
        expenses += month.expenses
        savings += month.savings

    return YearTotals(income=Money(income), expenses=Money(expenses), savings=Money(savings))


def available_years(transactions: Iterable[Transaction]) -> list[int]:
    """Distinct years with transactions, most recent first."""
    years: set[int] = set()
    for txn in transactions:
        try:
            years.add(parse_iso_date(txn.date).year)
        except ValueError:
            continue
    return sorted(years, reverse=True)


def compute_budget_status(budgets: Iterable[Budget]) -> list[BudgetCategoryStatus]:
    """Compute per-category budget status.

    Args:
        budgets: Budgets of one month partition.

    Returns:
        Status entries sorted by category name.
    """
    return [
        BudgetCategoryStatus(
            category=budget.category,
            limit=budget.amount,
            spent=budget.spent,
            remaining=budget.remaining,
            percentage=calculate_budget_percentage(budget.spent, budget.amount),
        )
        for budget in sorted(budgets, key=lambda b: b.category)
    ]


def select_expenses(
    transactions: Iterable[Transaction],
    categories: Iterable[str] | None = None,
    sort_by: str = "date",
    descending: bool = True,
) -> list[Transaction]:
    """Filter and sort expenses for export.

    Args:
        transactions: Transactions of one month partition.
        categories: Only keep these categories. None keeps all.
        sort_by: "date", "amount" or "category".
        descending: Sort direction.

    Returns:
        Sorted expense list.

    Raises:
        ValueError: If sort_by is not a known sort key.
    """
    if sort_by not in EXPORT_SORT_KEYS:
        raise ValueError(f"Unknown sort key '{sort_by}' (expected one of {', '.join(EXPORT_SORT_KEYS)})")

    selected = set(categories) if categories is not None else None
    expenses = [
        t for t in transactions if t.kind is TransactionKind.EXPENSE and (selected is None or t.category in selected)
    ]

    if sort_by == "amount":
        return sorted(expenses, key=lambda t: t.amount, reverse=descending)
    elif sort_by == "category":
        return sorted(expenses, key=lambda t: t.category.lower(), reverse=descending)
    else:
        return sorted(expenses, key=lambda t: t.date, reverse=descending)


def category_sums(expenses: Iterable[Transaction]) -> dict[CategoryName, Money]:
    """Total each category of an already-filtered expense list."""
    sums: dict[CategoryName, int] = {}
    for txn in expenses:
        sums[txn.category] = sums.get(txn.category, 0) + txn.amount
    return {category: Money(total) for category, total in sums.items()}


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
