"""Budget commands for managing monthly category limits."""

from rich.table import Table

from budgetbook.commands.common import CliContext, abort, console, require_money
from budgetbook.dates import month_label
from budgetbook.errors import BudgetError, StorageError


def format_percentage_with_color(percentage: float) -> str:
    """Format budget usage with color based on percentage.

    Args:
        percentage: Budget usage percentage.

    Returns:
        Colored string for budget display.
    """
    text = f"{percentage:.0f}%"
    if percentage > 100:
        return f"[red]{text}[/red]"
    elif percentage > 90:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def set_command(ctx: CliContext, category: str, amount: str) -> None:
    """Create or overwrite the budget for a category."""
    ledger = ctx.ledger()

    try:
        budget = ledger.add_budget(category, require_money(amount))
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Budget for {budget.category}: {ctx.money(budget.amount)}")
    console.print(f"[dim]Spent so far: {ctx.money(budget.spent)}[/dim]")


def delete_command(ctx: CliContext, category: str) -> None:
    """Delete the budget for a category."""
    ledger = ctx.ledger()

    try:
        budget = ledger.delete_budget(category)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Budget for {budget.category} deleted")


def copy_previous_command(ctx: CliContext) -> None:
    """Copy last month's budget limits into the active month."""
    ledger = ctx.ledger()

    try:
        copied = ledger.copy_previous_month_budgets()
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Copied {len(copied)} budgets into {ledger.active_month}")
    for budget in copied:
        console.print(f"  {budget.category}: {ctx.money(budget.amount)}")


def status_command(ctx: CliContext) -> None:
    """Show budget status for the active month."""
    ledger = ctx.ledger()
    statuses = ledger.budget_status()
    label = month_label(ledger.active_month)

    if not statuses:
        console.print(f"[yellow]No budgets set for {label}[/yellow]")
        console.print("[dim]Use 'budgetbook budget set' or 'budgetbook budget copy-previous'[/dim]")
        return

    table = Table(title=f"Budgets - {label}")
    table.add_column("Category", style="magenta")
    table.add_column("Limit", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Used", justify="right")

    for status in statuses:
        remaining = ctx.money(status.remaining)
        if status.over_budget:
            remaining = f"[red]{remaining}[/red]"
        table.add_row(
            status.category,
            ctx.money(status.limit),
            ctx.money(status.spent),
            remaining,
            format_percentage_with_color(status.percentage),
        )

    console.print(table)
