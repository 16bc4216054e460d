"""Category commands. Categories are addressed by their 1-based list number."""

from rich.table import Table

from budgetbook.commands.common import CliContext, abort, console
from budgetbook.domain.models import is_income_category
from budgetbook.errors import BudgetError, StorageError


def list_command(ctx: CliContext) -> None:
    """List categories with their numbers."""
    ledger = ctx.ledger()

    table = Table(title="Categories")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="magenta")
    table.add_column("Type")

    for number, name in enumerate(ledger.categories, 1):
        kind = "[green]income[/green]" if is_income_category(name) else "expense"
        table.add_row(str(number), name, kind)

    console.print(table)


def add_command(ctx: CliContext, name: str) -> None:
    """Add a category."""
    try:
        category = ctx.ledger().add_category(name)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Category '{category}' added")


def rename_command(ctx: CliContext, number: int, new_name: str) -> None:
    """Rename a category in every month."""
    ledger = ctx.ledger()
    old_name = ledger.categories[number - 1] if 0 < number <= len(ledger.categories) else None

    try:
        category = ledger.update_category(number - 1, new_name)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f"[green]✓[/green] Category '{old_name}' renamed to '{category}'")


def delete_command(ctx: CliContext, number: int) -> None:
    """Delete an unused category."""
    try:
        category = ctx.ledger().delete_category(number - 1)
    except BudgetError as e:
        abort(str(e))
    except StorageError as e:
        abort(f"Saved for this session only: {e}")

    console.print(f'[green]✓[/green] Category "{category}" deleted')
