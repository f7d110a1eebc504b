"""Unit tests for the HVACDesk CLI."""

from __future__ import annotations

import csv

import pytest
from typer.testing import CliRunner

from hvacdesk import cli
from hvacdesk.config import reset_config

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    """Point the CLI at an empty data directory and keep logging untouched."""
    monkeypatch.setenv("HVACDESK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("HVACDESK_STORAGE_BACKEND", raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    reset_config()
    yield
    reset_config()


class TestClientsCommands:
    def test_empty_client_list(self):
        result = runner.invoke(cli.app, ["clients"])
        assert result.exit_code == 0
        assert "No clients yet" in result.output

    def test_add_then_list(self, tmp_path):
        result = runner.invoke(
            cli.app, ["add-client", "Ana", "--type", "Commercial", "--phone", "809-1"]
        )
        assert result.exit_code == 0, result.output
        assert "Client Ana created" in result.output
        assert (tmp_path / "data" / "clients.json").exists()

        result = runner.invoke(cli.app, ["clients"])
        assert result.exit_code == 0
        assert "Ana" in result.output
        assert "Commercial" in result.output


class TestDashboardCommand:
    def test_empty_dashboard(self):
        result = runner.invoke(cli.app, ["dashboard", "--as-of", "2025-03-20"])
        assert result.exit_code == 0, result.output
        assert "2025-03" in result.output
        assert "No maintenance due" in result.output

    def test_bad_date(self):
        result = runner.invoke(cli.app, ["dashboard", "--as-of", "20/03/2025"])
        assert result.exit_code != 0


class TestInvoiceCommands:
    def test_no_invoices(self):
        result = runner.invoke(cli.app, ["invoices"])
        assert result.exit_code == 0
        assert "No invoices yet" in result.output

    def test_unknown_invoice(self):
        result = runner.invoke(cli.app, ["invoice", "INV-9999"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_renumber_check_clean(self):
        result = runner.invoke(cli.app, ["renumber-check"])
        assert result.exit_code == 0
        assert "unique" in result.output


class TestExpenseCommands:
    def test_add_and_export(self, tmp_path):
        result = runner.invoke(
            cli.app,
            ["add-expense", "Gasoline", "45.50", "--category", "Fuel", "--date", "2025-03-02"],
        )
        assert result.exit_code == 0, result.output

        output = tmp_path / "expenses.csv"
        result = runner.invoke(cli.app, ["export-expenses", str(output)])
        assert result.exit_code == 0, result.output

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[1] == ["2025-03-02", "Fuel", "Gasoline", "45.50"]

    def test_bad_amount(self):
        result = runner.invoke(cli.app, ["add-expense", "Gasoline", "lots"])
        assert result.exit_code != 0
