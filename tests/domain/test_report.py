"""Tests for budgetbook.domain.report pure functions."""

import pytest

from budgetbook.domain.budget import Budget
from budgetbook.domain.models import CategoryName, Description, Money, TransactionKind
from budgetbook.domain.report import (
    available_years,
    calculate_histogram_bar_length,
    calculate_totals,
    category_breakdown,
    category_sums,
    compute_budget_status,
    monthly_series,
    select_expenses,
    yearly_totals,
)
from budgetbook.domain.transactions import Transaction


def txn(
    txn_id: str,
    amount: int,
    category: str,
    date: str = "2025-03-10",
    kind: TransactionKind = TransactionKind.EXPENSE,
) -> Transaction:
    return Transaction(
        id=txn_id,
        amount=Money(amount),
        description=Description(f"txn {txn_id}"),
        category=CategoryName(category),
        date=date,
        kind=kind,
    )


INCOME = TransactionKind.INCOME


class TestCalculateTotals:
    """Tests for calculate_totals."""

    def test_income_expenses_balance(self) -> None:
        """Should sum by kind and subtract."""
        totals = calculate_totals([txn("a", 100000, "Salary", kind=INCOME), txn("b", 20000, "Food")])

        assert totals.income == Money(100000)
        assert totals.expenses == Money(20000)
        assert totals.balance == Money(80000)

    def test_empty(self) -> None:
        """Should be all zero for no transactions."""
        totals = calculate_totals([])
        assert (totals.income, totals.expenses, totals.balance) == (0, 0, 0)


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_groups_sorts_and_percentages(self) -> None:
        """Should group expenses, sort descending and compute shares."""
        shares = category_breakdown(
            [
                txn("a", 1000, "Food"),
                txn("b", 3000, "Housing"),
                txn("c", 1000, "Food"),
                txn("d", 5000, "Salary", kind=INCOME),
            ]
        )

        assert [(s.category, s.total) for s in shares] == [("Housing", 3000), ("Food", 2000)]
        assert shares[0].percentage == pytest.approx(60.0)
        assert shares[1].percentage == pytest.approx(40.0)

    def test_ties_are_alphabetical(self) -> None:
        """Should order equal totals by name."""
        shares = category_breakdown([txn("a", 500, "Utilities"), txn("b", 500, "Entertainment")])
        assert [s.category for s in shares] == ["Entertainment", "Utilities"]

    def test_no_expenses(self) -> None:
        """Should return an empty list when there are only incomes."""
        assert category_breakdown([txn("a", 500, "Salary", kind=INCOME)]) == []


class TestMonthlySeries:
    """Tests for monthly_series and yearly_totals."""

    def test_buckets_by_transaction_date(self) -> None:
        """Should place each transaction in its own month of the year."""
        series = monthly_series(
            [
                txn("a", 100000, "Salary", "2025-01-31", INCOME),
                txn("b", 30000, "Food", "2025-01-05"),
                txn("c", 50000, "Housing", "2025-12-01"),
                txn("d", 99999, "Food", "2024-12-31"),
            ],
            2025,
        )

        assert len(series) == 12
        assert series[0].month == "01/2025"
        assert series[0].name == "Jan"
        assert (series[0].income, series[0].expenses, series[0].savings) == (100000, 30000, 70000)
        assert (series[11].income, series[11].expenses, series[11].savings) == (0, 50000, -50000)
        assert all(m.income == 0 and m.expenses == 0 for m in series[1:11])

    def test_skips_unparseable_dates(self) -> None:
        """Should ignore transactions with broken dates."""
        series = monthly_series([txn("a", 100, "Food", "not-a-date")], 2025)
        assert sum(m.expenses for m in series) == 0

    def test_yearly_totals(self) -> None:
        """Should sum all twelve months."""
        series = monthly_series(
            [
                txn("a", 100000, "Salary", "2025-02-01", INCOME),
                txn("b", 25000, "Food", "2025-03-01"),
                txn("c", 5000, "Food", "2025-04-01"),
            ],
            2025,
        )

        totals = yearly_totals(series)

        assert (totals.income, totals.expenses, totals.savings) == (100000, 30000, 70000)

    def test_available_years_descending(self) -> None:
        """Should list distinct years, newest first."""
        years = available_years(
            [txn("a", 1, "Food", "2023-05-01"), txn("b", 1, "Food", "2025-01-01"), txn("c", 1, "Food", "2023-07-01")]
        )
        assert years == [2025, 2023]


class TestBudgetStatus:
    """Tests for compute_budget_status."""

    def test_status_sorted_with_remaining(self) -> None:
        """Should report limit, spent, remaining and percentage per category."""
        statuses = compute_budget_status(
            [
                Budget(CategoryName("Food"), Money(60000), Money(66000)),
                Budget(CategoryName("Entertainment"), Money(10000), Money(2500)),
            ]
        )

        assert [s.category for s in statuses] == ["Entertainment", "Food"]
        assert statuses[0].remaining == Money(7500)
        assert statuses[0].percentage == pytest.approx(25.0)
        assert statuses[1].over_budget
        assert statuses[1].remaining == Money(-6000)


class TestSelectExpenses:
    """Tests for select_expenses and category_sums."""

    TRANSACTIONS = [
        txn("a", 3000, "Food", "2025-03-02"),
        txn("b", 1000, "Housing", "2025-03-05"),
        txn("c", 2000, "entertainment", "2025-03-01"),
        txn("d", 9000, "Salary", "2025-03-01", INCOME),
    ]

    def test_default_sort_is_date_descending(self) -> None:
        """Should exclude income and sort newest first."""
        result = select_expenses(self.TRANSACTIONS)
        assert [t.id for t in result] == ["b", "a", "c"]

    def test_sort_by_amount_ascending(self) -> None:
        """Should sort by amount in the requested direction."""
        result = select_expenses(self.TRANSACTIONS, sort_by="amount", descending=False)
        assert [t.id for t in result] == ["b", "c", "a"]

    def test_sort_by_category_ignores_case(self) -> None:
        """Should compare category names case-insensitively."""
        result = select_expenses(self.TRANSACTIONS, sort_by="category", descending=False)
        assert [t.category for t in result] == ["entertainment", "Food", "Housing"]

    def test_category_filter(self) -> None:
        """Should keep only selected categories."""
        result = select_expenses(self.TRANSACTIONS, categories=["Food", "Housing"])
        assert {t.id for t in result} == {"a", "b"}

    def test_empty_selection_keeps_nothing(self) -> None:
        """Should honour an explicit empty selection."""
        assert select_expenses(self.TRANSACTIONS, categories=[]) == []

    def test_unknown_sort_key(self) -> None:
        """Should raise ValueError."""
        with pytest.raises(ValueError):
            select_expenses(self.TRANSACTIONS, sort_by="colour")

    def test_category_sums(self) -> None:
        """Should total each category."""
        sums = category_sums(select_expenses(self.TRANSACTIONS))
        assert sums == {"Housing": 1000, "Food": 3000, "entertainment": 2000}


class TestHistogram:
    """Tests for calculate_histogram_bar_length."""

    def test_scales_to_width(self) -> None:
        """Should scale proportionally."""
        assert calculate_histogram_bar_length(Money(500), Money(1000), 30) == 15

    def test_zero_max(self) -> None:
        """Should return 0 when there is nothing to scale against."""
        assert calculate_histogram_bar_length(Money(0), Money(0), 30) == 0
