"""Shared helpers for CLI commands."""

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NoReturn

from rich.console import Console

from budgetbook.config import Settings, load_settings
from budgetbook.dates import parse_month_arg
from budgetbook.domain.models import Money
from budgetbook.ledger import Ledger
from budgetbook.money import format_money, parse_money
from budgetbook.session import open_ledger

console = Console()

SHORT_ID_LENGTH = 8


@dataclass
class CliContext:
    """Options shared by every command, resolved lazily."""

    user: str | None = None
    month: str | None = None
    _settings: Settings | None = field(default=None, repr=False)
    _ledger: Ledger | None = field(default=None, repr=False)

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            try:
                self._settings = load_settings()
            except ValueError as e:
                abort(f"Invalid config: {e}")
        return self._settings

    def ledger(self) -> Ledger:
        if self._ledger is None:
            month = None
            if self.month:
                try:
                    month = parse_month_arg(self.month)
                except ValueError:
                    abort(f"Invalid month '{self.month}' (expected YYYY-MM)")
            self._ledger = open_ledger(self.user, month, self.settings)
        return self._ledger

    def money(self, amount: Money | int) -> str:
        return format_money(amount, self.settings.currency)


def abort(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def require_money(amount_str: str) -> Money:
    """Parse an amount argument or abort."""
    amount = parse_money(amount_str)
    if amount is None:
        abort(f"Invalid amount '{amount_str}'")
    return amount


def short_id(full_id: str) -> str:
    return full_id[:SHORT_ID_LENGTH]


def resolve_id(prefix: str, ids: Iterable[str], label: str) -> str:
    """Expand an id prefix (as shown in listings) to a full id.

    Aborts if nothing or more than one id matches.
    """
    matches = [i for i in ids if i.startswith(prefix)]
    if not matches:
        abort(f"No {label} matching '{prefix}'")
    if len(matches) > 1:
        abort(f"'{prefix}' matches {len(matches)} {label}s, use more characters")
    return matches[0]
