"""Admin commands for init, backup and switching identity."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from budgetbook.commands.common import CliContext, abort, console
from budgetbook.config import create_default_config, get_config_path, load_settings, set_setting
from budgetbook.store.schema import database_exists, get_db_path, init_database


def create_store_and_config(db_path: Path, config_path: Path) -> None:
    """Create an empty key-value store and a default config file."""
    init_database(db_path)
    console.print(f"[green]✓[/green] Store created: {db_path}")

    create_default_config(config_path)
    settings = load_settings(config_path)
    console.print(f"[green]✓[/green] Config written (permissions: 600): {config_path}")
    console.print(f"[dim]Identity {settings.user}, {len(settings.categories)} starting categories[/dim]")
    console.print("\nNext: [bold]budgetbook add AMOUNT DESCRIPTION -c CATEGORY[/bold]")


def init_command(force: bool = False) -> None:
    """Create the store and config, refusing to clobber existing ones unless forced."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        if not force and (db_exists or config_exists):
            console.print("[red]Already initialized:[/red]", style="bold")
            if db_exists:
                console.print(f"  Store: {db_path}")
            if config_exists:
                console.print(f"  Config: {config_path}")
            console.print("\n[yellow]Use 'budgetbook init --force' to start over (this deletes all data)[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        create_store_and_config(db_path, config_path)

    except sqlite3.Error as e:
        abort(f"Database error: {e}")
    except OSError as e:
        abort(f"Filesystem error: {e}")


def backup_command(output_dir: str | None = None) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not database_exists(db_path):
        abort("Database not found. Run 'budgetbook init' first.")

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".budgetbook" / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"budgetbook_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        abort(f"Backup failed: {e}")


def use_command(user: str) -> None:
    """Make a user the default identity for later commands."""
    if not user.strip():
        abort("User cannot be empty")

    try:
        set_setting("user", user.strip())
    except OSError as e:
        abort(f"Could not update config: {e}")

    console.print(f"[green]✓[/green] Now using data for '{user.strip()}'")


def whoami_command(ctx: CliContext) -> None:
    """Show the identity and month commands act on."""
    ledger = ctx.ledger()
    console.print(f"User: [bold]{ctx.user or ctx.settings.user}[/bold]")
    console.print(f"Month: [bold]{ledger.active_month}[/bold]")
