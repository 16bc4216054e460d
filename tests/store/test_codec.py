"""Tests for budgetbook.store.codec payload conversion."""

from budgetbook.domain.budget import Budget
from budgetbook.domain.goals import Debt
from budgetbook.domain.models import CategoryName, Description, Money, MonthKey, TransactionKind
from budgetbook.domain.partition import MonthPartition
from budgetbook.domain.transactions import Transaction
from budgetbook.store.codec import (
    categories_from_payload,
    debt_from_dict,
    debt_to_dict,
    decode_or_default,
    goals_from_payload,
    monthly_data_from_payload,
    monthly_data_to_payload,
    transaction_to_dict,
)

TXN = Transaction(
    id="t1",
    amount=Money(4500),
    description=Description("Groceries"),
    category=CategoryName("Food"),
    date="2025-03-04",
    kind=TransactionKind.EXPENSE,
)


class TestMonthlyData:
    """Tests for month partition payloads."""

    def test_transaction_uses_type_field(self) -> None:
        """Should store the kind under 'type'."""
        assert transaction_to_dict(TXN)["type"] == "expense"

    def test_skips_empty_partitions(self) -> None:
        """Should not write months without records."""
        months = {
            MonthKey("03/2025"): MonthPartition(
                key=MonthKey("03/2025"),
                transactions=(TXN,),
                budgets=(Budget(CategoryName("Food"), Money(50000), Money(4500)),),
            ),
            MonthKey("04/2025"): MonthPartition(key=MonthKey("04/2025")),
        }

        payload = monthly_data_to_payload(months)

        assert list(payload) == ["03/2025"]
        assert payload["03/2025"]["budgets"] == [{"category": "Food", "amount": 50000, "spent": 4500}]

    def test_decodes_and_normalizes_keys(self) -> None:
        """Should zero-pad month keys and rebuild records."""
        payload = {"3/2025": {"transactions": [transaction_to_dict(TXN)], "budgets": []}}

        months = monthly_data_from_payload(payload)

        assert list(months) == ["03/2025"]
        assert months[MonthKey("03/2025")].transactions == (TXN,)

    def test_missing_spent_defaults_to_zero(self) -> None:
        """Should accept budgets stored without spent."""
        months = monthly_data_from_payload({"01/2025": {"budgets": [{"category": "Food", "amount": 100}]}})
        assert months[MonthKey("01/2025")].budgets == (Budget(CategoryName("Food"), Money(100), Money(0)),)


class TestGoalsAndDebts:
    """Tests for goal and debt payloads."""

    def test_debt_fields(self) -> None:
        """Should use camelCase field names."""
        debt = Debt(id="d1", name="Loan", total_amount=Money(100000), paid_amount=Money(20000), interest_rate=3.5)
        assert debt_to_dict(debt) == {
            "id": "d1",
            "name": "Loan",
            "totalAmount": 100000,
            "paidAmount": 20000,
            "interestRate": 3.5,
            "dueDate": None,
        }
        assert debt_from_dict(debt_to_dict(debt)) == debt

    def test_goal_defaults(self) -> None:
        """Should default current amount and deadline."""
        goals = goals_from_payload([{"id": "g1", "name": "Trip", "targetAmount": 5000}])
        assert goals[0].current_amount == 0
        assert goals[0].deadline is None


class TestDecodeOrDefault:
    """Tests for tolerant decoding."""

    def test_missing_payload(self) -> None:
        """Should use the default when nothing is stored."""
        assert decode_or_default("debts", None, goals_from_payload, list) == []

    def test_malformed_payload(self) -> None:
        """Should use the default when the shape is wrong."""
        assert decode_or_default("savingsGoals", {"id": "g1"}, goals_from_payload, list) == []
        assert decode_or_default("savingsGoals", [{"name": "x"}], goals_from_payload, list) == []
        assert decode_or_default("monthlyData", {"13/2025": {}}, monthly_data_from_payload, dict) == {}

    def test_float_amounts_rejected(self) -> None:
        """Should not accept fractional cents."""
        bad = {"01/2025": {"budgets": [{"category": "Food", "amount": 10.5}]}}
        assert decode_or_default("monthlyData", bad, monthly_data_from_payload, dict) == {}

    def test_categories_deduplicated(self) -> None:
        """Should drop repeated names, keeping first occurrence order."""
        assert categories_from_payload(["Food", "Rent", "Food"]) == ["Food", "Rent"]
