"""CLI entry point for budgetbook."""

import logging

import typer
from rich.logging import RichHandler

from budgetbook.commands import admin, budget, categories, goals, report, transactions
from budgetbook.commands.common import CliContext, console

app = typer.Typer(
    name="budgetbook",
    help="Personal budgeting: transactions, monthly budgets, savings goals and debts",
    add_completion=False,
)
budget_app = typer.Typer(help="Manage monthly category budgets.")
category_app = typer.Typer(help="Manage categories.")
goal_app = typer.Typer(help="Manage savings goals.")
debt_app = typer.Typer(help="Track debts.")

app.add_typer(budget_app, name="budget")
app.add_typer(category_app, name="category")
app.add_typer(goal_app, name="goal")
app.add_typer(debt_app, name="debt")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    user: str = typer.Option(None, "--user", "-u", help="Identity whose data to use (default: from config)"),
    month: str = typer.Option(None, "--month", "-m", help="Active month (YYYY-MM, default: current month)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Personal budgeting: transactions, monthly budgets, savings goals and debts."""
    configure_logging(verbose)
    ctx.obj = CliContext(user=user, month=month)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize budgetbook database and configuration."""
    admin.init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.budgetbook/backups)"),
) -> None:
    """Backup your database and configuration files."""
    admin.backup_command(output_dir)


@app.command(name="use")
def use(user: str) -> None:
    """Switch the default identity."""
    admin.use_command(user)


@app.command(name="whoami")
def whoami(ctx: typer.Context) -> None:
    """Show the active identity and month."""
    admin.whoami_command(ctx.obj)


@app.command(name="add")
def add(
    ctx: typer.Context,
    amount: str,
    description: str,
    category: str = typer.Option(..., "--category", "-c", help="Category name"),
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
    income: bool = typer.Option(False, "--income", "-i", help="Record as income instead of expense"),
) -> None:
    """Add a transaction to the active month."""
    transactions.add_command(ctx.obj, amount, description, category, date, income)


@app.command(name="edit")
def edit(
    ctx: typer.Context,
    txn_id: str,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    date: str = typer.Option(None, "--date", "-d", help="New date (YYYY-MM-DD)"),
    kind: str = typer.Option(None, "--type", "-t", help="income or expense"),
) -> None:
    """Edit a transaction of the active month."""
    transactions.edit_command(ctx.obj, txn_id, amount, description, category, date, kind)


@app.command(name="delete")
def delete(ctx: typer.Context, txn_id: str) -> None:
    """Delete a transaction of the active month."""
    transactions.delete_command(ctx.obj, txn_id)


@app.command(name="list")
def list_transactions(
    ctx: typer.Context,
    kind: str = typer.Option(None, "--type", "-t", help="Only income or expense"),
    search: str = typer.Option(None, "--search", "-s", help="Match description, category or amount"),
) -> None:
    """List the active month's transactions."""
    transactions.list_command(ctx.obj, kind, search)


@app.command(name="summary")
def summary(
    ctx: typer.Context,
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show income, expenses, balance and spending by category."""
    report.summary_command(ctx.obj, histogram)


@app.command(name="yearly")
def yearly(
    ctx: typer.Context,
    year: int = typer.Option(None, "--year", "-y", help="Year (default: most recent year with data)"),
) -> None:
    """Show the monthly overview for a year."""
    report.yearly_command(ctx.obj, year)


@app.command(name="export")
def export(
    ctx: typer.Context,
    output: str,
    category: list[str] = typer.Option(None, "--category", "-c", help="Only these categories (repeatable)"),
    sort_by: str = typer.Option("date", "--sort", help="Sort by 'date', 'amount' or 'category'"),
    ascending: bool = typer.Option(False, "--ascending", help="Sort ascending (default: descending)"),
    summary: bool = typer.Option(True, help="Print per-category totals"),
) -> None:
    """Export the active month's expenses to CSV."""
    report.export_command(ctx.obj, output, category, sort_by, ascending, summary)


@budget_app.command(name="set")
def budget_set(ctx: typer.Context, category: str, amount: str) -> None:
    """Set the monthly limit for a category."""
    budget.set_command(ctx.obj, category, amount)


@budget_app.command(name="delete")
def budget_delete(ctx: typer.Context, category: str) -> None:
    """Delete the budget for a category."""
    budget.delete_command(ctx.obj, category)


@budget_app.command(name="status")
def budget_status(ctx: typer.Context) -> None:
    """Show spending against each budget."""
    budget.status_command(ctx.obj)


@budget_app.command(name="copy-previous")
def budget_copy_previous(ctx: typer.Context) -> None:
    """Copy last month's limits into the active month."""
    budget.copy_previous_command(ctx.obj)


@category_app.command(name="list")
def category_list(ctx: typer.Context) -> None:
    """List categories."""
    categories.list_command(ctx.obj)


@category_app.command(name="add")
def category_add(ctx: typer.Context, name: str) -> None:
    """Add a category."""
    categories.add_command(ctx.obj, name)


@category_app.command(name="rename")
def category_rename(ctx: typer.Context, number: int, new_name: str) -> None:
    """Rename a category (by list number) everywhere it is used."""
    categories.rename_command(ctx.obj, number, new_name)


@category_app.command(name="delete")
def category_delete(ctx: typer.Context, number: int) -> None:
    """Delete a category (by list number) that nothing uses."""
    categories.delete_command(ctx.obj, number)


@goal_app.command(name="list")
def goal_list(ctx: typer.Context) -> None:
    """List savings goals."""
    goals.goal_list_command(ctx.obj)


@goal_app.command(name="add")
def goal_add(
    ctx: typer.Context,
    name: str,
    target: str,
    saved: str = typer.Option(None, "--saved", help="Amount already saved"),
    deadline: str = typer.Option(None, "--deadline", help="Deadline (YYYY-MM-DD)"),
) -> None:
    """Create a savings goal."""
    goals.goal_add_command(ctx.obj, name, target, saved, deadline)


@goal_app.command(name="edit")
def goal_edit(
    ctx: typer.Context,
    goal_id: str,
    name: str = typer.Option(None, "--name", help="New name"),
    target: str = typer.Option(None, "--target", help="New target amount"),
    deadline: str = typer.Option(None, "--deadline", help="New deadline (YYYY-MM-DD, empty to clear)"),
) -> None:
    """Edit a savings goal."""
    goals.goal_edit_command(ctx.obj, goal_id, name, target, deadline)


@goal_app.command(name="delete")
def goal_delete(ctx: typer.Context, goal_id: str) -> None:
    """Delete a savings goal."""
    goals.goal_delete_command(ctx.obj, goal_id)


@goal_app.command(name="contribute")
def goal_contribute(
    ctx: typer.Context,
    goal_id: str,
    amount: str,
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
) -> None:
    """Contribute to a goal (recorded as a Savings expense)."""
    goals.contribute_command(ctx.obj, goal_id, amount, date)


@debt_app.command(name="list")
def debt_list(ctx: typer.Context) -> None:
    """List debts."""
    goals.debt_list_command(ctx.obj)


@debt_app.command(name="add")
def debt_add(
    ctx: typer.Context,
    name: str,
    total: str,
    paid: str = typer.Option(None, "--paid", help="Amount already paid"),
    rate: float = typer.Option(None, "--rate", help="Interest rate (%)"),
    due: str = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
) -> None:
    """Start tracking a debt."""
    goals.debt_add_command(ctx.obj, name, total, paid, rate, due)


@debt_app.command(name="edit")
def debt_edit(
    ctx: typer.Context,
    debt_id: str,
    name: str = typer.Option(None, "--name", help="New name"),
    total: str = typer.Option(None, "--total", help="New total amount"),
    rate: float = typer.Option(None, "--rate", help="New interest rate (%)"),
    due: str = typer.Option(None, "--due", help="New due date (YYYY-MM-DD, empty to clear)"),
) -> None:
    """Edit a debt."""
    goals.debt_edit_command(ctx.obj, debt_id, name, total, rate, due)


@debt_app.command(name="delete")
def debt_delete(ctx: typer.Context, debt_id: str) -> None:
    """Stop tracking a debt."""
    goals.debt_delete_command(ctx.obj, debt_id)


@debt_app.command(name="pay")
def debt_pay(
    ctx: typer.Context,
    debt_id: str,
    amount: str,
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
) -> None:
    """Pay towards a debt (recorded as a Debt expense)."""
    goals.pay_command(ctx.obj, debt_id, amount, date)


if __name__ == "__main__":
    app()
