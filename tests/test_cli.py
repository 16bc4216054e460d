"""End-to-end tests for the budgetbook command line."""

from pathlib import Path

import pandas as pd
import pytest
from typer.testing import CliRunner

from budgetbook.cli import app
from budgetbook.config import load_settings
from budgetbook.session import open_ledger

runner = CliRunner()

MONTH = ["--month", "2025-03"]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path


def invoke(*args: str):
    return runner.invoke(app, [*MONTH, *args])


class TestInit:
    """Tests for the init command."""

    def test_creates_files(self, isolated_home: Path) -> None:
        """Should create the database and config."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_home / "data" / "budgetbook" / "budgetbook.db").exists()
        assert (isolated_home / "config" / "budgetbook" / "config.toml").exists()

    def test_refuses_to_overwrite(self) -> None:
        """Should fail without --force when files exist."""
        runner.invoke(app, ["init"])
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "--force" in result.output


class TestTransactions:
    """Tests for transaction commands."""

    def test_add_and_list(self) -> None:
        """Should persist a transaction across invocations."""
        result = invoke("add", "12.50", "Groceries", "-c", "Food", "-d", "2025-03-04")
        assert result.exit_code == 0
        assert "Expense added" in result.output

        listing = invoke("list")
        assert listing.exit_code == 0
        assert "Groceries" in listing.output

    def test_add_unknown_category(self) -> None:
        """Should exit with an error for unknown categories."""
        result = invoke("add", "5", "Treats", "-c", "Pets")

        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_add_invalid_amount(self) -> None:
        """Should reject amounts that are not numbers."""
        result = invoke("add", "abc", "Lunch", "-c", "Food")
        assert result.exit_code == 1

    def test_list_other_month_is_empty(self) -> None:
        """Should scope listings to the active month."""
        invoke("add", "12.50", "Groceries", "-c", "Food")
        result = runner.invoke(app, ["--month", "2025-04", "list"])

        assert "No transactions found" in result.output

    def test_invalid_month(self) -> None:
        """Should reject a malformed --month."""
        result = runner.invoke(app, ["--month", "March", "list"])

        assert result.exit_code == 1
        assert "Invalid month" in result.output


class TestBudgets:
    """Tests for budget commands."""

    def test_set_and_status(self) -> None:
        """Should show spending against the limit."""
        invoke("add", "20", "Lunch", "-c", "Food")
        result = invoke("budget", "set", "Food", "600")
        assert result.exit_code == 0
        assert "Spent so far: $20.00" in result.output

        status = invoke("budget", "status")
        assert "Food" in status.output

    def test_copy_previous(self) -> None:
        """Should copy last month's limits."""
        runner.invoke(app, ["--month", "2025-02", "budget", "set", "Food", "500"])

        result = invoke("budget", "copy-previous")

        assert result.exit_code == 0
        assert "Copied 1 budgets" in result.output

    def test_copy_previous_nothing(self) -> None:
        """Should fail when last month has no budgets."""
        result = invoke("budget", "copy-previous")
        assert result.exit_code == 1


class TestCategories:
    """Tests for category commands."""

    def test_add_and_rename(self) -> None:
        """Should add then rename by list number."""
        assert invoke("category", "add", "Pets").exit_code == 0

        result = invoke("category", "rename", "17", "Animals")

        assert result.exit_code == 0
        assert "renamed to 'Animals'" in result.output

    def test_delete_in_use(self) -> None:
        """Should refuse deleting a category with transactions."""
        invoke("add", "20", "Lunch", "-c", "Food")

        result = invoke("category", "delete", "3")

        assert result.exit_code == 1
        assert "is used by" in result.output


class TestGoalsAndDebts:
    """Tests for savings goal and debt commands."""

    def test_contribute(self) -> None:
        """Should record the contribution as a Savings expense."""
        invoke("goal", "add", "Holiday", "1500")
        goal_list = invoke("goal", "list")
        assert "Holiday" in goal_list.output

        goal_id = open_ledger(month="03/2025").savings_goals[0].id
        result = invoke("goal", "contribute", goal_id[:8], "250")

        assert result.exit_code == 0
        assert "Contribution to Holiday" in invoke("list").output

    def test_overpay_debt(self) -> None:
        """Should refuse paying more than is owed."""
        invoke("debt", "add", "Card", "100", "--paid", "20")

        debt_id = open_ledger(month="03/2025").debts[0].id
        result = invoke("debt", "pay", debt_id[:8], "90")

        assert result.exit_code == 1
        assert "exceeds remaining debt" in result.output


class TestReports:
    """Tests for summary and export."""

    def test_summary(self) -> None:
        """Should print totals for the month."""
        invoke("add", "1000", "Paycheck", "-c", "Salary", "--income")
        invoke("add", "200", "Groceries", "-c", "Food")

        result = invoke("summary")

        assert result.exit_code == 0
        assert "$1,000.00" in result.output
        assert "$800.00" in result.output

    def test_export_csv(self, isolated_home: Path) -> None:
        """Should write expenses to CSV, filtered by category."""
        invoke("add", "12.50", "Groceries", "-c", "Food", "-d", "2025-03-04")
        invoke("add", "30", "Bus pass", "-c", "Transportation", "-d", "2025-03-02")
        output = isolated_home / "out" / "expenses.csv"

        result = invoke("export", str(output), "-c", "Food")

        assert result.exit_code == 0
        frame = pd.read_csv(output)
        assert list(frame.columns) == ["date", "description", "category", "amount"]
        assert frame["description"].tolist() == ["Groceries"]
        assert frame["amount"].tolist() == [12.5]
        assert "Food: $12.50" in result.output
        assert "Transportation" not in result.output
        assert "Total: $12.50" in result.output


class TestIdentity:
    """Tests for switching identity."""

    def test_use_switches_user(self) -> None:
        """Should store the default user and isolate data."""
        invoke("add", "12.50", "Groceries", "-c", "Food")

        result = runner.invoke(app, ["use", "alice"])

        assert result.exit_code == 0
        assert load_settings().user == "alice"
        assert "No transactions found" in invoke("list").output
        assert "Groceries" in runner.invoke(app, [*MONTH, "--user", "anonymous", "list"]).output
