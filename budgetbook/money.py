"""Conversion between user-entered amounts and cents."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from budgetbook.domain.models import Money


def parse_money(amount_str: str) -> Money | None:
    """Parse money string to cents.

    Args:
        amount_str: String containing an amount in major units (e.g. "12.50").

    Returns:
        Money amount in cents, or None if invalid or negative.
    """
    try:
        value = Decimal(amount_str.strip().replace(",", ""))
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return Money(int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


def format_money(amount: Money | int, symbol: str = "$") -> str:
    """Format cents for display, e.g. 123456 -> "$1,234.56"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount) / 100:,.2f}"
