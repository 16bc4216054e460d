"""Transaction commands (add, edit, delete, list)."""

from dataclasses import replace

from rich.table import Table

from budgetbook.commands.common import CliContext, abort, console, require_money, resolve_id, short_id
from budgetbook.domain.models import TransactionKind
from budgetbook.domain.transactions import Transaction, coerce_kind
from budgetbook.errors import BudgetError, StorageError


def parse_kind(value: str | None) -> TransactionKind | None:
    if value is None:
        return None
    kind = coerce_kind(value.lower())
    if kind is None:
        abort(f"Invalid type '{value}' (expected income or expense)")
    return kind


def format_signed(ctx: CliContext, txn: Transaction) -> str:
    if txn.kind is TransactionKind.INCOME:
        return f"[green]+{ctx.money(txn.amount)}[/green]"
    return f"[red]-{ctx.money(txn.amount)}[/red]"


def add_command(
    ctx: CliContext,
    amount: str,
    description: str,
    category: str,
    date: str | None = None,
    income: bool = False,
) -> None:
    """Add a transaction to the active month."""
    ledger = ctx.ledger()
    kind = TransactionKind.INCOME if income else TransactionKind.EXPENSE

    try:
        txn = ledger.add_transaction(require_money(amount), description, category, date, kind)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    label = "Income" if txn.kind is TransactionKind.INCOME else "Expense"
    console.print(f"[green]✓[/green] {label} added: {txn.description}: {ctx.money(txn.amount)}")
    console.print(f"[dim]ID: {short_id(txn.id)}  Month: {ledger.active_month}[/dim]")


def edit_command(
    ctx: CliContext,
    txn_id: str,
    amount: str | None = None,
    description: str | None = None,
    category: str | None = None,
    date: str | None = None,
    kind: str | None = None,
) -> None:
    """Edit a transaction of the active month."""
    ledger = ctx.ledger()
    full_id = resolve_id(txn_id, (t.id for t in ledger.transactions), "transaction")
    current = ledger.get_transaction(full_id)

    changes: dict = {}
    if amount is not None:
        changes["amount"] = require_money(amount)
    if description is not None:
        changes["description"] = description
    if category is not None:
        changes["category"] = category
    if date is not None:
        changes["date"] = date
    if kind is not None:
        changes["kind"] = parse_kind(kind)

    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    try:
        updated = ledger.update_transaction(replace(current, **changes))
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Transaction updated: {updated.description}: {ctx.money(updated.amount)}")


def delete_command(ctx: CliContext, txn_id: str) -> None:
    """Delete a transaction of the active month."""
    ledger = ctx.ledger()
    full_id = resolve_id(txn_id, (t.id for t in ledger.transactions), "transaction")

    try:
        txn = ledger.delete_transaction(full_id)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Transaction deleted: {txn.description}")


def list_command(ctx: CliContext, kind: str | None = None, search: str | None = None) -> None:
    """List the active month's transactions, most recent first."""
    ledger = ctx.ledger()
    transactions = ledger.search(parse_kind(kind), search)

    if not transactions:
        console.print(f"[yellow]No transactions found for {ledger.active_month}[/yellow]")
        return

    table = Table(title=f"Transactions {ledger.active_month} (showing {len(transactions)})")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        table.add_row(short_id(txn.id), txn.date, txn.description, txn.category, format_signed(ctx, txn))

    console.print(table)
