"""Savings goal and debt commands."""

from dataclasses import replace

from rich.table import Table

from budgetbook.commands.common import CliContext, abort, console, require_money, resolve_id, short_id
from budgetbook.domain.goals import progress_percentage
from budgetbook.errors import BudgetError, StorageError


def goal_list_command(ctx: CliContext) -> None:
    """List savings goals with progress."""
    goals = ctx.ledger().savings_goals

    if not goals:
        console.print("[yellow]No savings goals yet[/yellow]")
        return

    table = Table(title="Savings goals")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="magenta")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Deadline", style="cyan")

    for goal in goals:
        table.add_row(
            short_id(goal.id),
            goal.name,
            ctx.money(goal.current_amount),
            ctx.money(goal.target_amount),
            f"{progress_percentage(goal.current_amount, goal.target_amount):.0f}%",
            goal.deadline or "[dim]-[/dim]",
        )

    console.print(table)


def goal_add_command(
    ctx: CliContext, name: str, target: str, saved: str | None = None, deadline: str | None = None
) -> None:
    """Create a savings goal."""
    current = require_money(saved) if saved is not None else 0

    try:
        goal = ctx.ledger().add_savings_goal(name, require_money(target), current, deadline)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Savings goal added: {goal.name}: {ctx.money(goal.target_amount)}")
    console.print(f"[dim]ID: {short_id(goal.id)}[/dim]")


def goal_edit_command(
    ctx: CliContext,
    goal_id: str,
    name: str | None = None,
    target: str | None = None,
    deadline: str | None = None,
) -> None:
    """Edit a savings goal's name, target or deadline."""
    ledger = ctx.ledger()
    goal = ledger.get_savings_goal(resolve_id(goal_id, (g.id for g in ledger.savings_goals), "goal"))

    changes: dict = {}
    if name is not None:
        changes["name"] = name
    if target is not None:
        changes["target_amount"] = require_money(target)
    if deadline is not None:
        changes["deadline"] = deadline or None

    try:
        updated = ledger.update_savings_goal(replace(goal, **changes))
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Savings goal updated: {updated.name}")


def goal_delete_command(ctx: CliContext, goal_id: str) -> None:
    ledger = ctx.ledger()

    try:
        goal = ledger.delete_savings_goal(resolve_id(goal_id, (g.id for g in ledger.savings_goals), "goal"))
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Savings goal deleted: {goal.name}")


def contribute_command(ctx: CliContext, goal_id: str, amount: str, date: str | None = None) -> None:
    """Contribute to a goal; also records a Savings expense."""
    ledger = ctx.ledger()
    full_id = resolve_id(goal_id, (g.id for g in ledger.savings_goals), "goal")

    try:
        goal, txn = ledger.contribute_savings_goal(full_id, require_money(amount), date)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] {ctx.money(txn.amount)} added to {goal.name}")
    console.print(
        f"[dim]Saved {ctx.money(goal.current_amount)} of {ctx.money(goal.target_amount)} "
        f"({progress_percentage(goal.current_amount, goal.target_amount):.0f}%)[/dim]"
    )


def debt_list_command(ctx: CliContext) -> None:
    """List debts with repayment progress."""
    debts = ctx.ledger().debts

    if not debts:
        console.print("[yellow]No debts tracked[/yellow]")
        return

    table = Table(title="Debts")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="magenta")
    table.add_column("Paid", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Due", style="cyan")

    for debt in debts:
        rate = f"{debt.interest_rate:g}%" if debt.interest_rate else "[dim]-[/dim]"
        table.add_row(
            short_id(debt.id),
            debt.name,
            ctx.money(debt.paid_amount),
            ctx.money(debt.total_amount),
            ctx.money(debt.remaining),
            rate,
            debt.due_date or "[dim]-[/dim]",
        )

    console.print(table)


def debt_add_command(
    ctx: CliContext,
    name: str,
    total: str,
    paid: str | None = None,
    rate: float | None = None,
    due: str | None = None,
) -> None:
    """Start tracking a debt."""
    paid_amount = require_money(paid) if paid is not None else 0

    try:
        debt = ctx.ledger().add_debt(name, require_money(total), paid_amount, rate, due)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Debt added: {debt.name}: {ctx.money(debt.total_amount)}")
    console.print(f"[dim]ID: {short_id(debt.id)}[/dim]")


def debt_edit_command(
    ctx: CliContext,
    debt_id: str,
    name: str | None = None,
    total: str | None = None,
    rate: float | None = None,
    due: str | None = None,
) -> None:
    """Edit a debt's name, total, interest rate or due date."""
    ledger = ctx.ledger()
    debt = ledger.get_debt(resolve_id(debt_id, (d.id for d in ledger.debts), "debt"))

    changes: dict = {}
    if name is not None:
        changes["name"] = name
    if total is not None:
        changes["total_amount"] = require_money(total)
    if rate is not None:
        changes["interest_rate"] = rate
    if due is not None:
        changes["due_date"] = due or None

    try:
        updated = ledger.update_debt(replace(debt, **changes))
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Debt updated: {updated.name}")


def debt_delete_command(ctx: CliContext, debt_id: str) -> None:
    ledger = ctx.ledger()

    try:
        debt = ledger.delete_debt(resolve_id(debt_id, (d.id for d in ledger.debts), "debt"))
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Debt deleted: {debt.name}")


def pay_command(ctx: CliContext, debt_id: str, amount: str, date: str | None = None) -> None:
    """Pay towards a debt; also records a Debt expense."""
    ledger = ctx.ledger()
    full_id = resolve_id(debt_id, (d.id for d in ledger.debts), "debt")

    try:
        debt, txn = ledger.make_debt_payment(full_id, require_money(amount), date)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Paid {ctx.money(txn.amount)} towards {debt.name}")
    console.print(f"[dim]Remaining: {ctx.money(debt.remaining)}[/dim]")
