"""Report commands: monthly summary, yearly overview and expense export."""

from datetime import date
from pathlib import Path

import pandas as pd
from rich.table import Table

from budgetbook.commands.common import CliContext, abort, console
from budgetbook.dates import month_label
from budgetbook.domain.models import Money
from budgetbook.domain.report import (
    EXPORT_SORT_KEYS,
    CategoryShare,
    calculate_histogram_bar_length,
    category_sums,
)
from budgetbook.domain.transactions import Transaction


def render_share_line(ctx: CliContext, share: CategoryShare, histogram: bool, max_amount: Money, bar_width: int) -> None:
    """Render single expense category line.

    Args:
        ctx: CLI context, for currency formatting.
        share: Category total and percentage.
        histogram: Whether to show histogram bars.
        max_amount: Maximum amount for histogram scaling.
        bar_width: Width of histogram bar in characters.
    """
    amount_display = ctx.money(share.total)
    percentage_display = f"({share.percentage:.0f}%)"

    if histogram:
        bar = "█" * calculate_histogram_bar_length(share.total, max_amount, bar_width)
        console.print(f"  {share.category:20} {amount_display:>12} {percentage_display:>6} {bar}")
    else:
        console.print(f"  {share.category}: {amount_display} {percentage_display}")


def summary_command(ctx: CliContext, histogram: bool = True) -> None:
    """Show totals and the expense breakdown for the active month."""
    ledger = ctx.ledger()
    totals = ledger.totals()
    shares = ledger.category_breakdown()
    label = month_label(ledger.active_month)

    console.print(f"[bold cyan]{label}[/bold cyan]\n")
    console.print(f"  [bold green]Income:[/bold green]   {ctx.money(totals.income)}")
    console.print(f"  [bold red]Expenses:[/bold red] {ctx.money(totals.expenses)}")
    balance_color = "green" if totals.balance >= 0 else "red"
    console.print(f"  [bold]Balance:[/bold]  [{balance_color}]{ctx.money(totals.balance)}[/{balance_color}]\n")

    if not shares:
        console.print("[dim]No expense data available[/dim]")
        return

    console.print("[bold red]Expenses by category:[/bold red]\n")
    max_amount = Money(max(share.total for share in shares))
    for share in shares:
        render_share_line(ctx, share, histogram, max_amount, bar_width=30)


def yearly_command(ctx: CliContext, year: int | None = None) -> None:
    """Show the month-by-month overview for a year."""
    ledger = ctx.ledger()

    if year is None:
        years = ledger.available_years()
        year = years[0] if years else date.today().year

    series = ledger.monthly_series(year)
    totals = ledger.yearly_totals(year)

    table = Table(title=f"Monthly overview {year}")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("Savings", justify="right")

    for month in series:
        table.add_row(month.name, ctx.money(month.income), ctx.money(month.expenses), ctx.money(month.savings))

    table.add_section()
    table.add_row(
        "[bold]Total[/bold]",
        ctx.money(totals.income),
        ctx.money(totals.expenses),
        f"[bold]{ctx.money(totals.savings)}[/bold]",
    )

    console.print(table)


def build_export_frame(expenses: list[Transaction]) -> pd.DataFrame:
    """Tabulate expenses as CSV-ready rows, amounts in major units."""
    return pd.DataFrame(
        [
            {
                "date": txn.date,
                "description": txn.description,
                "category": txn.category,
                "amount": txn.amount / 100,
            }
            for txn in expenses
        ],
        columns=["date", "description", "category", "amount"],
    )


def export_command(
    ctx: CliContext,
    output: str,
    categories: list[str] | None = None,
    sort_by: str = "date",
    ascending: bool = False,
    summary: bool = True,
) -> None:
    """Write the active month's expenses to a CSV file."""
    if sort_by not in EXPORT_SORT_KEYS:
        abort(f"Invalid sort '{sort_by}' (expected one of {', '.join(EXPORT_SORT_KEYS)})")

    ledger = ctx.ledger()
    expenses = ledger.select_expenses(categories or None, sort_by, descending=not ascending)
    frame = build_export_frame(expenses)

    if frame.empty:
        console.print(f"[yellow]No expenses to export for {ledger.active_month}[/yellow]")
        return

    output_path = Path(output).expanduser()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output_path, index=False)
    except OSError as e:
        abort(f"Export failed: {e}")

    console.print(f"[green]✓[/green] Exported {len(frame)} expenses to {output_path}")

    if summary:
        sums = category_sums(expenses)
        for category, total in sorted(sums.items(), key=lambda item: -item[1]):
            console.print(f"  {category}: {ctx.money(total)}")
        console.print(f"\n  [bold]Total:[/bold] {ctx.money(Money(sum(sums.values())))}")
