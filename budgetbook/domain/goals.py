"""Pure functions for savings goals and debts.

Goals and debts are global (not month partitioned). Their progress fields
only move forward: contributions and payments increase them and there is
no withdraw operation.

All monetary amounts are in cents (Money type).
"""

from dataclasses import dataclass

from budgetbook.dates import is_valid_iso_date
from budgetbook.domain.models import Description, Money
from budgetbook.domain.transactions import validate_amount


@dataclass(frozen=True)
class SavingsGoal:
    """Immutable savings goal."""

    id: str
    name: str
    target_amount: Money
    current_amount: Money = Money(0)
    deadline: str | None = None

    @property
    def remaining(self) -> Money:
        return Money(max(0, self.target_amount - self.current_amount))


@dataclass(frozen=True)
class Debt:
    """Immutable debt with repayment progress."""

    id: str
    name: str
    total_amount: Money
    paid_amount: Money = Money(0)
    interest_rate: float | None = None
    due_date: str | None = None

    @property
    def remaining(self) -> Money:
        return Money(self.total_amount - self.paid_amount)


def _validate_progress(value: object, label: str) -> tuple[bool, str | None]:
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{label} must be a number of cents"
    if value < 0:
        return False, f"{label} cannot be negative"
    return True, None


def validate_goal_fields(
    name: object,
    target_amount: object,
    current_amount: object,
    deadline: object,
) -> tuple[bool, str | None]:
    """Validate savings goal fields.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not isinstance(name, str) or not name.strip():
        return False, "Goal name is required"

    valid, error = validate_amount(target_amount)
    if not valid:
        return False, f"Target: {error}"

    valid, error = _validate_progress(current_amount, "Current amount")
    if not valid:
        return False, error

    if deadline is not None and not is_valid_iso_date(deadline):
        return False, f"Invalid deadline '{deadline}' (expected YYYY-MM-DD)"

    return True, None


def validate_goal_update(old: SavingsGoal, new: SavingsGoal) -> tuple[bool, str | None]:
    """Validate replacing a goal with an edited version."""
    valid, error = validate_goal_fields(new.name, new.target_amount, new.current_amount, new.deadline)
    if not valid:
        return False, error

    if new.current_amount < old.current_amount:
        return False, "Saved amount cannot decrease"

    return True, None


def validate_debt_fields(
    name: object,
    total_amount: object,
    paid_amount: object,
    interest_rate: object,
    due_date: object,
) -> tuple[bool, str | None]:
    """Validate debt fields.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not isinstance(name, str) or not name.strip():
        return False, "Debt name is required"

    valid, error = validate_amount(total_amount)
    if not valid:
        return False, f"Total: {error}"

    valid, error = _validate_progress(paid_amount, "Paid amount")
    if not valid:
        return False, error

    if paid_amount > total_amount:  # type: ignore[operator]
        return False, "Paid amount cannot exceed the total"

    if interest_rate is not None:
        if isinstance(interest_rate, bool) or not isinstance(interest_rate, (int, float)) or interest_rate < 0:
            return False, "Please enter a valid interest rate"

    if due_date is not None and not is_valid_iso_date(due_date):
        return False, f"Invalid due date '{due_date}' (expected YYYY-MM-DD)"

    return True, None


def validate_debt_update(old: Debt, new: Debt) -> tuple[bool, str | None]:
    """Validate replacing a debt with an edited version."""
    valid, error = validate_debt_fields(new.name, new.total_amount, new.paid_amount, new.interest_rate, new.due_date)
    if not valid:
        return False, error

    if new.paid_amount < old.paid_amount:
        return False, "Paid amount cannot decrease"

    return True, None


def validate_contribution(amount: object) -> tuple[bool, str | None]:
    """Validate a savings contribution amount."""
    return validate_amount(amount)


def validate_payment(debt: Debt, amount: object) -> tuple[bool, str | None]:
    """Validate a debt payment: 0 < amount <= remaining."""
    valid, error = validate_amount(amount)
    if not valid:
        return False, error

    if amount > debt.remaining:  # type: ignore[operator]
        return False, f"Payment amount exceeds remaining debt ({debt.remaining / 100:,.2f})"

    return True, None


def contribution_description(goal: SavingsGoal) -> Description:
    return Description(f"Contribution to {goal.name}")


def payment_description(debt: Debt) -> Description:
    return Description(f"Payment for {debt.name}")


def progress_percentage(done: Money, total: Money) -> float:
    """Progress towards a total as a percentage, capped at 100."""
    if total <= 0:
        return 0.0
    return min(100.0, (done / total) * 100)
