"""The ledger: single source of truth for categories, month partitions,
savings goals and debts.

Every command validates first, then swaps in new immutable snapshots and
persists the affected keys. A rejected command raises a BudgetError and
leaves state untouched. Budget.spent is kept in step with expense
transactions of its partition on every add, edit and delete.
"""

import logging
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable

from budgetbook.dates import month_key, month_range, parse_iso_date, parse_month_key, previous_month
from budgetbook.domain import report
from budgetbook.domain.budget import (
    Budget,
    apply_transaction,
    carry_over_limits,
    find_budget,
    remove_budget,
    replace_transaction,
    reverse_transaction,
    upsert_budget,
    validate_budget,
)
from budgetbook.domain.categories import (
    budgets_in_category,
    category_in_use,
    normalize_category_name,
    rename_in_partitions,
    split_categories,
    transactions_in_category,
    validate_new_category,
    validate_rename,
)
from budgetbook.domain.goals import (
    Debt,
    SavingsGoal,
    contribution_description,
    payment_description,
    validate_contribution,
    validate_debt_fields,
    validate_debt_update,
    validate_goal_fields,
    validate_goal_update,
    validate_payment,
)
from budgetbook.domain.models import (
    DEBT_CATEGORY,
    DEFAULT_CATEGORIES,
    SAVINGS_CATEGORY,
    CategoryName,
    Description,
    Money,
    MonthKey,
    TransactionKind,
)
from budgetbook.domain.partition import MonthPartition, all_transactions
from budgetbook.domain.transactions import (
    Transaction,
    coerce_kind,
    find_transaction,
    search_transactions,
    validate_transaction_fields,
)
from budgetbook.errors import BudgetError, NotFoundError, ReferentialError, StorageError, ValidationError
from budgetbook.store import codec
from budgetbook.store.storage import (
    CATEGORIES_KEY,
    DEBTS_KEY,
    MONTHLY_DATA_KEY,
    SAVINGS_GOALS_KEY,
    KeyValueStorage,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerState:
    """Immutable snapshot of everything the ledger persists."""

    categories: tuple[CategoryName, ...]
    months: dict[MonthKey, MonthPartition]
    savings_goals: tuple[SavingsGoal, ...]
    debts: tuple[Debt, ...]


def _new_id() -> str:
    return str(uuid.uuid4())


def _check(result: tuple[bool, str | None], error_cls: type[BudgetError] = ValidationError) -> None:
    valid, error = result
    if not valid:
        logger.info("Rejected: %s", error)
        raise error_cls(error or "Invalid input")


class Ledger:
    """Entity store for one identity's budget data.

    Args:
        storage: Namespaced storage handle; the only I/O boundary.
        active_month: Month partition targeted by transaction and budget
            commands. Defaults to the current month.
        seed_categories: Categories used when storage has none yet.
        today: Clock used for default dates.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        active_month: date | str | None = None,
        seed_categories: Iterable[str] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.storage = storage
        self._today = today

        seed = list(seed_categories) if seed_categories is not None else list(DEFAULT_CATEGORIES)
        self._categories: list[CategoryName] = codec.decode_or_default(
            CATEGORIES_KEY,
            storage.read(CATEGORIES_KEY),
            codec.categories_from_payload,
            lambda: codec.categories_from_payload(seed),
        )
        self._months: dict[MonthKey, MonthPartition] = codec.decode_or_default(
            MONTHLY_DATA_KEY, storage.read(MONTHLY_DATA_KEY), codec.monthly_data_from_payload, dict
        )
        self._goals: list[SavingsGoal] = codec.decode_or_default(
            SAVINGS_GOALS_KEY, storage.read(SAVINGS_GOALS_KEY), codec.goals_from_payload, list
        )
        self._debts: list[Debt] = codec.decode_or_default(
            DEBTS_KEY, storage.read(DEBTS_KEY), codec.debts_from_payload, list
        )

        self._active = month_key(today())
        if active_month is not None:
            self.set_active_month(active_month)

    # ------------------------------------------------------------------
    # Persistence

    def _persist(self, *keys: str) -> None:
        """Write the given keys through to storage.

        Keys are written in the order given. In-memory state is already
        updated and stays authoritative. On the first failure the remaining
        keys are skipped, so storage never holds the later half of a change
        without the earlier half.
        """
        encoders = {
            MONTHLY_DATA_KEY: lambda: codec.monthly_data_to_payload(self._months),
            SAVINGS_GOALS_KEY: lambda: [codec.goal_to_dict(g) for g in self._goals],
            DEBTS_KEY: lambda: [codec.debt_to_dict(d) for d in self._debts],
            CATEGORIES_KEY: lambda: list(self._categories),
        }

        for position, key in enumerate(keys):
            try:
                self.storage.write(key, encoders[key]())
            except StorageError as e:
                skipped = keys[position + 1 :]
                logger.error("Failed to persist %s (skipped %s), keeping in-memory state: %s", key, skipped, e)
                raise

    def snapshot(self) -> LedgerState:
        """Capture the current state for comparison or inspection."""
        return LedgerState(
            categories=tuple(self._categories),
            months={key: p for key, p in self._months.items() if not p.is_empty},
            savings_goals=tuple(self._goals),
            debts=tuple(self._debts),
        )

    # ------------------------------------------------------------------
    # Active month cursor

    @property
    def active_month(self) -> MonthKey:
        return self._active

    def set_active_month(self, when: date | str) -> MonthKey:
        """Point transaction and budget commands at another month.

        Args:
            when: A date within the month, or a MM/yyyy month key.

        Returns:
            The new active month key.
        """
        if isinstance(when, date):
            key = month_key(when)
        else:
            try:
                year, month = parse_month_key(when)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid month '{when}' (expected MM/yyyy)") from e
            key = month_key(date(year, month, 1))

        self._active = key
        logger.debug("Active month is now %s", key)
        return key

    @contextmanager
    def with_active_month(self, when: date | str) -> Iterator["Ledger"]:
        """Temporarily scope commands to a month, restoring the cursor after."""
        saved = self._active
        self.set_active_month(when)
        try:
            yield self
        finally:
            self._active = saved

    # ------------------------------------------------------------------
    # Queries

    @property
    def categories(self) -> list[CategoryName]:
        return list(self._categories)

    @property
    def expense_categories(self) -> list[CategoryName]:
        return split_categories(self._categories)[0]

    @property
    def income_categories(self) -> list[CategoryName]:
        return split_categories(self._categories)[1]

    @property
    def months(self) -> dict[MonthKey, MonthPartition]:
        return dict(self._months)

    def partition(self, key: MonthKey | None = None) -> MonthPartition:
        """Get a month partition, empty if the month has no data."""
        key = key or self._active
        return self._months.get(key) or MonthPartition(key=key)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self.partition().transactions

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self.partition().budgets

    @property
    def savings_goals(self) -> list[SavingsGoal]:
        return list(self._goals)

    @property
    def debts(self) -> list[Debt]:
        return list(self._debts)

    def get_transaction(self, txn_id: str) -> Transaction:
        txn = find_transaction(self.transactions, txn_id)
        if txn is None:
            raise NotFoundError(f"No transaction {txn_id} in {self._active}")
        return txn

    def get_budget(self, category: str) -> Budget:
        budget = find_budget(self.budgets, category)
        if budget is None:
            raise NotFoundError(f"No budget for '{category}' in {self._active}")
        return budget

    def get_savings_goal(self, goal_id: str) -> SavingsGoal:
        for goal in self._goals:
            if goal.id == goal_id:
                return goal
        raise NotFoundError(f"No savings goal {goal_id}")

    def get_debt(self, debt_id: str) -> Debt:
        for debt in self._debts:
            if debt.id == debt_id:
                return debt
        raise NotFoundError(f"No debt {debt_id}")

    def totals(self) -> report.Totals:
        return report.calculate_totals(self.transactions)

    @property
    def total_income(self) -> Money:
        return self.totals().income

    @property
    def total_expenses(self) -> Money:
        return self.totals().expenses

    @property
    def balance(self) -> Money:
        return self.totals().balance

    def category_breakdown(self) -> list[report.CategoryShare]:
        return report.category_breakdown(self.transactions)

    def monthly_series(self, year: int) -> list[report.MonthSummary]:
        return report.monthly_series(all_transactions(self._months), year)

    def yearly_totals(self, year: int) -> report.YearTotals:
        return report.yearly_totals(self.monthly_series(year))

    def available_years(self) -> list[int]:
        return report.available_years(all_transactions(self._months))

    def budget_status(self) -> list[report.BudgetCategoryStatus]:
        return report.compute_budget_status(self.budgets)

    def transactions_in_category(self, category: str) -> list[Transaction]:
        """Transactions referencing a category, across every month."""
        return transactions_in_category(self._months, category)

    def budgets_in_category(self, category: str) -> list[tuple[MonthKey, Budget]]:
        """(month, budget) pairs referencing a category, across every month."""
        return budgets_in_category(self._months, category)

    def search(self, kind: TransactionKind | None = None, term: str | None = None) -> list[Transaction]:
        return search_transactions(self.transactions, kind, term)

    def select_expenses(
        self, categories: Iterable[str] | None = None, sort_by: str = "date", descending: bool = True
    ) -> list[Transaction]:
        return report.select_expenses(self.transactions, categories, sort_by, descending)

    # ------------------------------------------------------------------
    # Transactions

    def _default_date(self) -> str:
        """Today if it falls in the active month, else the active month's first day."""
        today = self._today()
        if month_key(today) == self._active:
            return today.isoformat()
        since, _, _ = month_range(self._active)
        return since

    def _build_transaction(
        self,
        amount: Money,
        description: str,
        category: str,
        txn_date: str | None,
        kind: TransactionKind | str,
        txn_id: str | None = None,
    ) -> Transaction:
        txn_date = txn_date if txn_date is not None else self._default_date()
        _check(validate_transaction_fields(amount, description, category, txn_date, kind))

        if month_key(parse_iso_date(txn_date)) != self._active:
            _check((False, f"Date {txn_date} is outside the active month {self._active}"))

        name = normalize_category_name(category)
        if name not in self._categories:
            _check((False, f"Unknown category '{category}'"), ReferentialError)

        return Transaction(
            id=txn_id or _new_id(),
            amount=amount,
            description=Description(description.strip()),
            category=name,  # type: ignore[arg-type]
            date=txn_date,
            kind=coerce_kind(kind),  # type: ignore[arg-type]
        )

    def _with_transaction_added(self, txn: Transaction) -> MonthPartition:
        partition = self.partition()
        return replace(
            partition,
            transactions=(txn,) + partition.transactions,
            budgets=apply_transaction(partition.budgets, txn),
        )

    def add_transaction(
        self,
        amount: Money,
        description: str,
        category: str,
        date: str | None = None,
        kind: TransactionKind | str = TransactionKind.EXPENSE,
    ) -> Transaction:
        """Record a transaction in the active month.

        Expenses increase the spent total of their category's budget.

        Args:
            amount: Positive amount in cents.
            description: Non-empty description.
            category: Existing category name.
            date: YYYY-MM-DD within the active month. Defaults to today, or
                to the month's first day when today is in another month.
            kind: Income or expense.

        Returns:
            The stored transaction with its new id.

        Raises:
            ValidationError: If a field is missing or malformed, or the date
                is outside the active month.
            ReferentialError: If the category does not exist.
        """
        txn = self._build_transaction(amount, description, category, date, kind)
        self._months[self._active] = self._with_transaction_added(txn)
        logger.info("Added %s %s: %s (%d)", txn.kind.value, txn.id, txn.description, txn.amount)
        self._persist(MONTHLY_DATA_KEY)
        return txn

    def update_transaction(self, txn: Transaction) -> Transaction:
        """Replace a transaction of the active month, matched by id.

        The old version's budget effect is reversed and the new one applied,
        even when category or kind changed.

        Raises:
            NotFoundError: If no transaction with that id is in the active month.
            ValidationError: If a field is missing or malformed, or the date
                is outside the active month.
            ReferentialError: If the category does not exist.
        """
        partition = self.partition()
        old = find_transaction(partition.transactions, txn.id)
        if old is None:
            raise NotFoundError(f"No transaction {txn.id} in {self._active}")

        updated = self._build_transaction(txn.amount, txn.description, txn.category, txn.date, txn.kind, txn.id)

        self._months[self._active] = replace(
            partition,
            transactions=tuple(updated if t.id == updated.id else t for t in partition.transactions),
            budgets=replace_transaction(partition.budgets, old, updated),
        )
        logger.info("Updated transaction %s", updated.id)
        self._persist(MONTHLY_DATA_KEY)
        return updated

    def delete_transaction(self, txn_id: str) -> Transaction:
        """Remove a transaction of the active month.

        Raises:
            NotFoundError: If no transaction with that id is in the active month.
        """
        partition = self.partition()
        txn = find_transaction(partition.transactions, txn_id)
        if txn is None:
            raise NotFoundError(f"No transaction {txn_id} in {self._active}")

        self._months[self._active] = replace(
            partition,
            transactions=tuple(t for t in partition.transactions if t.id != txn_id),
            budgets=reverse_transaction(partition.budgets, txn),
        )
        logger.info("Deleted transaction %s", txn_id)
        self._persist(MONTHLY_DATA_KEY)
        return txn

    # ------------------------------------------------------------------
    # Budgets

    def add_budget(self, category: str, amount: Money) -> Budget:
        """Create or overwrite the active month's budget for a category.

        Raises:
            ValidationError: If the category is blank or the amount is invalid.
            ReferentialError: If the category does not exist.
        """
        _check(validate_budget(category, amount))
        name = normalize_category_name(category)
        if name not in self._categories:
            _check((False, f"Unknown category '{category}'"), ReferentialError)

        partition = self.partition()
        budgets, budget = upsert_budget(partition.budgets, partition.transactions, name, amount)  # type: ignore[arg-type]
        self._months[self._active] = replace(partition, budgets=budgets)
        logger.info("Budget for %s in %s set to %d", budget.category, self._active, budget.amount)
        self._persist(MONTHLY_DATA_KEY)
        return budget

    def update_budget(self, category: str, amount: Money) -> Budget:
        """Same upsert as add_budget."""
        return self.add_budget(category, amount)

    def delete_budget(self, category: str) -> Budget:
        """Remove the active month's budget for a category.

        Raises:
            NotFoundError: If the active month has no budget for the category.
        """
        budget = self.get_budget(category)
        partition = self.partition()
        self._months[self._active] = replace(partition, budgets=remove_budget(partition.budgets, category))
        logger.info("Deleted budget for %s in %s", category, self._active)
        self._persist(MONTHLY_DATA_KEY)
        return budget

    def copy_previous_month_budgets(self) -> list[Budget]:
        """Copy the previous month's budget limits into the active month.

        Spent totals are not copied.

        Returns:
            The active month's budgets for the copied categories.

        Raises:
            NotFoundError: If the previous month has no budgets.
        """
        source_key = previous_month(self._active)
        previous = self.partition(source_key)
        if not previous.budgets:
            raise NotFoundError(f"No budgets found for {source_key}")

        partition = self.partition()
        budgets = partition.budgets
        copied: list[Budget] = []
        for category, limit in carry_over_limits(previous.budgets):
            budgets, budget = upsert_budget(budgets, partition.transactions, category, limit)
            copied.append(budget)

        self._months[self._active] = replace(partition, budgets=budgets)
        logger.info("Copied %d budgets from %s to %s", len(copied), source_key, self._active)
        self._persist(MONTHLY_DATA_KEY)
        return copied

    # ------------------------------------------------------------------
    # Categories

    def add_category(self, name: str) -> CategoryName:
        """Append a new category.

        Raises:
            ValidationError: If the name is blank or already taken.
        """
        _check(validate_new_category(name, self._categories))
        category = normalize_category_name(name)
        self._categories.append(category)  # type: ignore[arg-type]
        logger.info("Added category %s", category)
        self._persist(CATEGORIES_KEY)
        return category  # type: ignore[return-value]

    def update_category(self, index: int, new_name: str) -> CategoryName:
        """Rename a category everywhere it is referenced, in every month.

        Raises:
            ValidationError: If the index is out of range or the name is blank or taken.
        """
        _check(validate_rename(index, new_name, self._categories))
        old_name = self._categories[index]
        category: CategoryName = normalize_category_name(new_name)  # type: ignore[assignment]
        if category == old_name:
            return category

        categories = list(self._categories)
        categories[index] = category
        self._months = rename_in_partitions(self._months, old_name, category)
        self._categories = categories
        logger.info("Renamed category %s to %s", old_name, category)
        self._persist(CATEGORIES_KEY, MONTHLY_DATA_KEY)
        return category

    def delete_category(self, index: int) -> CategoryName:
        """Delete an unused category.

        Raises:
            ValidationError: If the index is out of range.
            ReferentialError: If any transaction or budget in any month uses it.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._categories):
            _check((False, f"No category at index {index}"))

        category = self._categories[index]
        if category_in_use(self._months, category):
            _check((False, f"Category '{category}' is used by transactions or budgets"), ReferentialError)

        self._categories = [c for i, c in enumerate(self._categories) if i != index]
        logger.info("Deleted category %s", category)
        self._persist(CATEGORIES_KEY)
        return category

    # ------------------------------------------------------------------
    # Savings goals

    def add_savings_goal(
        self,
        name: str,
        target_amount: Money,
        current_amount: Money = Money(0),
        deadline: str | None = None,
    ) -> SavingsGoal:
        """Create a savings goal."""
        _check(validate_goal_fields(name, target_amount, current_amount, deadline))
        goal = SavingsGoal(
            id=_new_id(),
            name=name.strip(),
            target_amount=target_amount,
            current_amount=current_amount,
            deadline=deadline,
        )
        self._goals = self._goals + [goal]
        logger.info("Added savings goal %s (%s)", goal.id, goal.name)
        self._persist(SAVINGS_GOALS_KEY)
        return goal

    def update_savings_goal(self, goal: SavingsGoal) -> SavingsGoal:
        """Replace a savings goal, matched by id. Saved amount may not decrease."""
        old = self.get_savings_goal(goal.id)
        _check(validate_goal_update(old, goal))
        updated = replace(goal, name=goal.name.strip())
        self._goals = [updated if g.id == goal.id else g for g in self._goals]
        logger.info("Updated savings goal %s", goal.id)
        self._persist(SAVINGS_GOALS_KEY)
        return updated

    def delete_savings_goal(self, goal_id: str) -> SavingsGoal:
        goal = self.get_savings_goal(goal_id)
        self._goals = [g for g in self._goals if g.id != goal_id]
        logger.info("Deleted savings goal %s", goal_id)
        self._persist(SAVINGS_GOALS_KEY)
        return goal

    def contribute_savings_goal(
        self, goal_id: str, amount: Money, date: str | None = None
    ) -> tuple[SavingsGoal, Transaction]:
        """Add money to a goal and record it as a Savings expense.

        Both effects are applied together or not at all.

        Returns:
            Tuple of (updated_goal, recorded_transaction).

        Raises:
            ValidationError: If amount is not positive.
            NotFoundError: If the goal does not exist.
            ReferentialError: If the Savings category is missing.
        """
        _check(validate_contribution(amount))
        goal = self.get_savings_goal(goal_id)
        txn = self._build_transaction(
            amount, contribution_description(goal), SAVINGS_CATEGORY, date, TransactionKind.EXPENSE
        )

        updated = replace(goal, current_amount=Money(goal.current_amount + amount))
        self._goals = [updated if g.id == goal_id else g for g in self._goals]
        self._months[self._active] = self._with_transaction_added(txn)
        logger.info("Contributed %d to savings goal %s", amount, goal_id)
        self._persist(MONTHLY_DATA_KEY, SAVINGS_GOALS_KEY)
        return updated, txn

    # ------------------------------------------------------------------
    # Debts

    def add_debt(
        self,
        name: str,
        total_amount: Money,
        paid_amount: Money = Money(0),
        interest_rate: float | None = None,
        due_date: str | None = None,
    ) -> Debt:
        """Create a debt."""
        _check(validate_debt_fields(name, total_amount, paid_amount, interest_rate, due_date))
        debt = Debt(
            id=_new_id(),
            name=name.strip(),
            total_amount=total_amount,
            paid_amount=paid_amount,
            interest_rate=None if interest_rate is None else float(interest_rate),
            due_date=due_date,
        )
        self._debts = self._debts + [debt]
        logger.info("Added debt %s (%s)", debt.id, debt.name)
        self._persist(DEBTS_KEY)
        return debt

    def update_debt(self, debt: Debt) -> Debt:
        """Replace a debt, matched by id. Paid amount may not decrease."""
        old = self.get_debt(debt.id)
        _check(validate_debt_update(old, debt))
        updated = replace(debt, name=debt.name.strip())
        self._debts = [updated if d.id == debt.id else d for d in self._debts]
        logger.info("Updated debt %s", debt.id)
        self._persist(DEBTS_KEY)
        return updated

    def delete_debt(self, debt_id: str) -> Debt:
        debt = self.get_debt(debt_id)
        self._debts = [d for d in self._debts if d.id != debt_id]
        logger.info("Deleted debt %s", debt_id)
        self._persist(DEBTS_KEY)
        return debt

    def make_debt_payment(self, debt_id: str, amount: Money, date: str | None = None) -> tuple[Debt, Transaction]:
        """Pay towards a debt and record it as a Debt expense.

        Both effects are applied together or not at all.

        Returns:
            Tuple of (updated_debt, recorded_transaction).

        Raises:
            ValidationError: If amount is not positive or exceeds what is owed.
            NotFoundError: If the debt does not exist.
            ReferentialError: If the Debt category is missing.
        """
        debt = self.get_debt(debt_id)
        _check(validate_payment(debt, amount))
        txn = self._build_transaction(amount, payment_description(debt), DEBT_CATEGORY, date, TransactionKind.EXPENSE)

        updated = replace(debt, paid_amount=Money(debt.paid_amount + amount))
        self._debts = [updated if d.id == debt_id else d for d in self._debts]
        self._months[self._active] = self._with_transaction_added(txn)
        logger.info("Paid %d towards debt %s", amount, debt_id)
        self._persist(MONTHLY_DATA_KEY, DEBTS_KEY)
        return updated, txn
