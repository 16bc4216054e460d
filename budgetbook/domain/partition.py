"""Month partitions: the transactions and budgets of one calendar month."""

from dataclasses import dataclass, field

from budgetbook.domain.budget import Budget
from budgetbook.domain.models import MonthKey
from budgetbook.domain.transactions import Transaction


@dataclass(frozen=True)
class MonthPartition:
    """Immutable snapshot of one month's transactions and budgets.

    Transactions are kept most-recent-first.
    """

    key: MonthKey
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    budgets: tuple[Budget, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.transactions and not self.budgets


def all_transactions(months: dict[MonthKey, MonthPartition]) -> list[Transaction]:
    """Flatten every partition's transactions into one list."""
    return [txn for partition in months.values() for txn in partition.transactions]
