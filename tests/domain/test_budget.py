"""Tests for budgetbook.domain.budget pure functions."""

from budgetbook.domain.budget import (
    Budget,
    adjust_spent,
    apply_transaction,
    calculate_budget_percentage,
    carry_over_limits,
    expense_total,
    remove_budget,
    replace_transaction,
    reverse_transaction,
    upsert_budget,
    validate_budget,
)
from budgetbook.domain.models import CategoryName, Description, Money, TransactionKind
from budgetbook.domain.transactions import Transaction


def make_txn(
    txn_id: str, amount: int, category: str = "Food", kind: TransactionKind = TransactionKind.EXPENSE
) -> Transaction:
    return Transaction(
        id=txn_id,
        amount=Money(amount),
        description=Description("test"),
        category=CategoryName(category),
        date="2025-03-10",
        kind=kind,
    )


FOOD = Budget(category=CategoryName("Food"), amount=Money(60000), spent=Money(10000))
RENT = Budget(category=CategoryName("Housing"), amount=Money(120000), spent=Money(0))


class TestAdjustSpent:
    """Tests for adjust_spent."""

    def test_adds_to_matching_budget_only(self) -> None:
        """Should change spent for the matching category only."""
        result = adjust_spent((FOOD, RENT), "Food", 2500)

        assert result[0].spent == Money(12500)
        assert result[1] == RENT

    def test_clamps_at_zero(self) -> None:
        """Should never let spent go negative."""
        result = adjust_spent((FOOD,), "Food", -50000)

        assert result[0].spent == Money(0)

    def test_unknown_category_is_noop(self) -> None:
        """Should leave budgets unchanged when no budget matches."""
        assert adjust_spent((FOOD,), "Travel", 1000) == (FOOD,)


class TestTransactionEffects:
    """Tests for apply/reverse/replace_transaction."""

    def test_expense_increments_spent(self) -> None:
        """Should add the expense amount."""
        result = apply_transaction((FOOD,), make_txn("a", 2000))
        assert result[0].spent == Money(12000)

    def test_income_has_no_effect(self) -> None:
        """Should ignore income transactions."""
        income = make_txn("a", 2000, kind=TransactionKind.INCOME)
        assert apply_transaction((FOOD,), income) == (FOOD,)
        assert reverse_transaction((FOOD,), income) == (FOOD,)

    def test_reverse_decrements_spent(self) -> None:
        """Should remove the expense amount."""
        result = reverse_transaction((FOOD,), make_txn("a", 4000))
        assert result[0].spent == Money(6000)

    def test_replace_moves_between_categories(self) -> None:
        """Should move the amount when the category changes."""
        old = make_txn("a", 3000, "Food")
        new = make_txn("a", 5000, "Housing")

        result = replace_transaction((FOOD, RENT), old, new)

        assert result[0].spent == Money(7000)
        assert result[1].spent == Money(5000)

    def test_replace_expense_to_income(self) -> None:
        """Should only reverse when the new version is income."""
        old = make_txn("a", 3000)
        new = make_txn("a", 3000, kind=TransactionKind.INCOME)

        result = replace_transaction((FOOD,), old, new)

        assert result[0].spent == Money(7000)


class TestUpsertBudget:
    """Tests for upsert_budget."""

    def test_new_budget_seeds_spent_from_expenses(self) -> None:
        """Should start spent at the existing expense total for the category."""
        transactions = (
            make_txn("a", 1500),
            make_txn("b", 500),
            make_txn("c", 9999, "Housing"),
            make_txn("d", 7000, kind=TransactionKind.INCOME),
        )

        budgets, budget = upsert_budget((), transactions, CategoryName("Food"), Money(50000))

        assert budget == Budget(CategoryName("Food"), Money(50000), Money(2000))
        assert budgets == (budget,)

    def test_existing_budget_keeps_spent(self) -> None:
        """Should only change the limit when the budget already exists."""
        budgets, budget = upsert_budget((FOOD, RENT), (), CategoryName("Food"), Money(80000))

        assert budget.amount == Money(80000)
        assert budget.spent == FOOD.spent
        assert len(budgets) == 2

    def test_remove_budget(self) -> None:
        """Should drop only the named category."""
        assert remove_budget((FOOD, RENT), "Food") == (RENT,)


class TestHelpers:
    """Tests for validation and small helpers."""

    def test_validate_budget(self) -> None:
        """Should require a category and a positive amount."""
        assert validate_budget("Food", 100) == (True, None)
        assert validate_budget("", 100) == (False, "Category is required")
        assert validate_budget("Food", 0) == (False, "Amount must be positive")

    def test_carry_over_limits_drops_spent(self) -> None:
        """Should return category and limit only."""
        assert carry_over_limits((FOOD,)) == [(CategoryName("Food"), Money(60000))]

    def test_expense_total(self) -> None:
        """Should sum expenses for a category."""
        txns = (make_txn("a", 100), make_txn("b", 250), make_txn("c", 1, "Housing"))
        assert expense_total(txns, "Food") == Money(350)

    def test_budget_percentage(self) -> None:
        """Should compute percent used and guard zero limits."""
        assert calculate_budget_percentage(Money(300), Money(600)) == 50.0
        assert calculate_budget_percentage(Money(300), Money(0)) == 0.0

    def test_remaining(self) -> None:
        """Should be limit minus spent."""
        assert FOOD.remaining == Money(50000)
