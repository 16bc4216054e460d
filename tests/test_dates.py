"""Tests for budgetbook.dates pure functions."""

from datetime import date

import pytest

from budgetbook.dates import (
    is_valid_iso_date,
    month_key,
    month_key_for,
    month_label,
    month_range,
    parse_month_arg,
    parse_month_key,
    previous_month,
)
from budgetbook.domain.models import MonthKey


class TestMonthKey:
    """Tests for month_key and parse_month_key."""

    def test_formats_as_month_slash_year(self) -> None:
        """Should zero-pad the month and use a four digit year."""
        assert month_key(date(2025, 3, 17)) == "03/2025"

    def test_month_key_for(self) -> None:
        """Should build the key from year and month numbers."""
        assert month_key_for(2024, 12) == "12/2024"

    def test_month_key_for_invalid_month(self) -> None:
        """Should raise ValueError for month 13."""
        with pytest.raises(ValueError):
            month_key_for(2024, 13)

    def test_parse_month_key(self) -> None:
        """Should split a key into year and month."""
        assert parse_month_key("07/2025") == (2025, 7)

    def test_parse_month_key_rejects_iso_format(self) -> None:
        """Should raise ValueError for YYYY-MM input."""
        with pytest.raises(ValueError):
            parse_month_key("2025-07")


class TestPreviousMonth:
    """Tests for previous_month."""

    def test_mid_year(self) -> None:
        """Should step back one month."""
        assert previous_month(MonthKey("06/2025")) == "05/2025"

    def test_january_crosses_year(self) -> None:
        """Should roll back to December of the previous year."""
        assert previous_month(MonthKey("01/2025")) == "12/2024"

    def test_march_to_leap_february(self) -> None:
        """Should handle February in a leap year."""
        assert previous_month(MonthKey("03/2024")) == "02/2024"


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(MonthKey("01/2025"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(MonthKey("12/2025"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, label = month_range(MonthKey("02/2024"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"
        assert label == "February 2024"

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(MonthKey("invalid"))

    def test_month_label(self) -> None:
        """Should spell out the month name and year."""
        assert month_label(MonthKey("03/2025")) == "March 2025"
        assert month_label(MonthKey("12/2024")) == "December 2024"

    def test_month_label_invalid(self) -> None:
        with pytest.raises(ValueError):
            month_label(MonthKey("2025-03"))


class TestParsing:
    """Tests for command line month and date parsing."""

    def test_parse_month_arg(self) -> None:
        """Should convert YYYY-MM to a month key."""
        assert parse_month_arg("2025-04") == "04/2025"

    def test_parse_month_arg_invalid(self) -> None:
        """Should raise ValueError for a bad month number."""
        with pytest.raises(ValueError):
            parse_month_arg("2025-13")

    def test_valid_iso_date(self) -> None:
        """Should accept real calendar dates."""
        assert is_valid_iso_date("2024-02-29")

    def test_invalid_iso_dates(self) -> None:
        """Should reject impossible dates, other formats and non-strings."""
        assert not is_valid_iso_date("2025-02-29")
        assert not is_valid_iso_date("29/02/2024")
        assert not is_valid_iso_date(None)
        assert not is_valid_iso_date(20240229)
