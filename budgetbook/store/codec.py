"""Conversion between domain records and JSON payloads.

Payload field names follow the persisted layout (camelCase, ``type`` for the
transaction kind). Amounts are stored as integer cents. Decoders raise
ValueError, KeyError or TypeError on malformed input.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from budgetbook.dates import month_key_for, parse_month_key
from budgetbook.domain.budget import Budget
from budgetbook.domain.goals import Debt, SavingsGoal
from budgetbook.domain.models import CategoryName, Description, Money, MonthKey, TransactionKind
from budgetbook.domain.partition import MonthPartition
from budgetbook.domain.transactions import Transaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _money(value: Any) -> Money:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected integer cents, got {value!r}")
    return Money(value)


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected string, got {value!r}")
    return value


def _optional_text(value: Any) -> str | None:
    return None if value is None else _text(value)


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "amount": txn.amount,
        "description": txn.description,
        "category": txn.category,
        "date": txn.date,
        "type": txn.kind.value,
    }


def transaction_from_dict(data: dict[str, Any]) -> Transaction:
    return Transaction(
        id=_text(data["id"]),
        amount=_money(data["amount"]),
        description=Description(_text(data["description"])),
        category=CategoryName(_text(data["category"])),
        date=_text(data["date"]),
        kind=TransactionKind(data["type"]),
    )


def budget_to_dict(budget: Budget) -> dict[str, Any]:
    return {"category": budget.category, "amount": budget.amount, "spent": budget.spent}


def budget_from_dict(data: dict[str, Any]) -> Budget:
    return Budget(
        category=CategoryName(_text(data["category"])),
        amount=_money(data["amount"]),
        spent=_money(data.get("spent", 0)),
    )


def monthly_data_to_payload(months: dict[MonthKey, MonthPartition]) -> dict[str, Any]:
    """Encode all month partitions. Empty partitions are not written."""
    return {
        key: {
            "transactions": [transaction_to_dict(t) for t in partition.transactions],
            "budgets": [budget_to_dict(b) for b in partition.budgets],
        }
        for key, partition in months.items()
        if not partition.is_empty
    }


def monthly_data_from_payload(payload: Any) -> dict[MonthKey, MonthPartition]:
    if not isinstance(payload, dict):
        raise TypeError("monthlyData must be an object")

    months: dict[MonthKey, MonthPartition] = {}
    for key, entry in payload.items():
        month = month_key_for(*parse_month_key(key))
        months[month] = MonthPartition(
            key=month,
            transactions=tuple(transaction_from_dict(t) for t in entry.get("transactions", [])),
            budgets=tuple(budget_from_dict(b) for b in entry.get("budgets", [])),
        )
    return months


def goal_to_dict(goal: SavingsGoal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "name": goal.name,
        "targetAmount": goal.target_amount,
        "currentAmount": goal.current_amount,
        "deadline": goal.deadline,
    }


def goal_from_dict(data: dict[str, Any]) -> SavingsGoal:
    return SavingsGoal(
        id=_text(data["id"]),
        name=_text(data["name"]),
        target_amount=_money(data["targetAmount"]),
        current_amount=_money(data.get("currentAmount", 0)),
        deadline=_optional_text(data.get("deadline")),
    )


def debt_to_dict(debt: Debt) -> dict[str, Any]:
    return {
        "id": debt.id,
        "name": debt.name,
        "totalAmount": debt.total_amount,
        "paidAmount": debt.paid_amount,
        "interestRate": debt.interest_rate,
        "dueDate": debt.due_date,
    }


def debt_from_dict(data: dict[str, Any]) -> Debt:
    rate = data.get("interestRate")
    if rate is not None and (isinstance(rate, bool) or not isinstance(rate, (int, float))):
        raise TypeError(f"Expected numeric interest rate, got {rate!r}")

    return Debt(
        id=_text(data["id"]),
        name=_text(data["name"]),
        total_amount=_money(data["totalAmount"]),
        paid_amount=_money(data.get("paidAmount", 0)),
        interest_rate=None if rate is None else float(rate),
        due_date=_optional_text(data.get("dueDate")),
    )


def goals_from_payload(payload: Any) -> list[SavingsGoal]:
    if not isinstance(payload, list):
        raise TypeError("savingsGoals must be a list")
    return [goal_from_dict(item) for item in payload]


def debts_from_payload(payload: Any) -> list[Debt]:
    if not isinstance(payload, list):
        raise TypeError("debts must be a list")
    return [debt_from_dict(item) for item in payload]


def categories_from_payload(payload: Any) -> list[CategoryName]:
    if not isinstance(payload, list):
        raise TypeError("categories must be a list")

    categories: list[CategoryName] = []
    for name in payload:
        name = _text(name)
        if name not in categories:
            categories.append(CategoryName(name))
    return categories


def decode_or_default(key: str, payload: Any, decoder: Callable[[Any], T], default: Callable[[], T]) -> T:
    """Decode a stored payload, falling back to a default.

    Args:
        key: Logical key, used for logging.
        payload: Value read from storage (None if missing).
        decoder: Function turning the payload into domain records.
        default: Factory for the empty default.

    Returns:
        Decoded records, or the default when missing or malformed.
    """
    if payload is None:
        return default()

    try:
        return decoder(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Discarding malformed %s: %s", key, e)
        return default()
