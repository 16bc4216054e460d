"""Date utilities for budgetbook.

Pure functions for month-key arithmetic and date formatting.
"""

from datetime import date, datetime, timedelta

from budgetbook.domain.models import MonthKey

MONTH_KEY_FORMAT = "%m/%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"


def month_key(when: date) -> MonthKey:
    """Build the partition key for the month containing a date.

    Args:
        when: Any date within the month.

    Returns:
        Month key in MM/yyyy format (e.g., "03/2025").
    """
    return MonthKey(when.strftime(MONTH_KEY_FORMAT))


def month_key_for(year: int, month: int) -> MonthKey:
    """Build a month key from a year and month number.

    Raises:
        ValueError: If month is not in 1-12.
    """
    return month_key(date(year, month, 1))


def parse_month_key(key: str) -> tuple[int, int]:
    """Split a month key into (year, month).

    Raises:
        ValueError: If the key is not a valid MM/yyyy string.
    """
    dt = datetime.strptime(key, MONTH_KEY_FORMAT)
    return dt.year, dt.month


def previous_month(key: MonthKey) -> MonthKey:
    """Get the key of the calendar month before the given one."""
    year, month = parse_month_key(key)
    first = date(year, month, 1)
    return month_key(first - timedelta(days=1))


def month_range(key: MonthKey) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        key: Month in MM/yyyy format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(key, MONTH_KEY_FORMAT)
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime(ISO_DATE_FORMAT)
    label = dt.strftime("%B %Y")
    return since, until, label


def month_label(key: MonthKey) -> str:
    """Human-readable month, e.g. "03/2025" -> "March 2025"."""
    return datetime.strptime(key, MONTH_KEY_FORMAT).strftime("%B %Y")


def parse_month_arg(value: str) -> MonthKey:
    """Convert a YYYY-MM command line argument to a month key.

    Raises:
        ValueError: If value is not in YYYY-MM format.
    """
    return month_key(datetime.strptime(value, "%Y-%m").date())


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If value is not a valid calendar date.
    """
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def is_valid_iso_date(value: object) -> bool:
    """Check whether value is a YYYY-MM-DD string naming a real date."""
    if not isinstance(value, str):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True
