"""HVACDesk CLI.

Commands:
- dashboard: Monthly income/expenses/profit and upcoming maintenance
- clients: List clients
- add-client: Register a client
- invoices: List invoices with totals
- invoice: Show one invoice as it would be printed
- add-expense: Record an expense
- export-invoices / export-expenses: Write CSV files
- renumber-check: Report invoice numbers used more than once
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from hvacdesk.config import get_config
from hvacdesk.core.errors import HVACDeskError
from hvacdesk.core.logging import configure_logging
from hvacdesk.invoicing.engine import compute_total
from hvacdesk.invoicing.numbering import find_number_collisions
from hvacdesk.models import Client, ClientType, Expense, ExpenseCategory
from hvacdesk.records.service import RecordService, open_records
from hvacdesk.reporting.csv_export import export_expenses_csv, export_invoices_csv
from hvacdesk.reporting.export_utils import format_currency, format_date

app = typer.Typer(
    name="hvacdesk",
    help="HVACDesk - clients, invoices, services and expenses for HVAC service companies",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    data_dir: Path | None = typer.Option(
        None, "--data-dir", envvar="HVACDESK_DATA_DIR", help="Directory holding the data"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Configure logging and storage location."""
    config = get_config()
    configure_logging("DEBUG" if verbose else config.log_level, config.log_format)
    if data_dir is not None:
        config.storage.data_dir = data_dir


def _records() -> RecordService:
    return open_records(get_config())


def _parse_day(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"{option} must be YYYY-MM-DD, got '{value}'") from e


@app.command()
def dashboard(
    as_of: str | None = typer.Option(None, "--as-of", help="Reference date (YYYY-MM-DD)"),
):
    """Show this month's income, expenses, profit and upcoming maintenance."""
    config = get_config()
    records = _records()

    day = _parse_day(as_of, "--as-of")
    now = datetime.combine(day, datetime.min.time()) if day else datetime.now()
    metrics = records.dashboard(now)
    locale = config.locale

    table = Table(title=f"Dashboard {metrics.period}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    profit_style = "green" if metrics.is_profitable else "red"
    table.add_row("Monthly income", format_currency(metrics.monthly_income, locale))
    table.add_row("Monthly expenses", format_currency(metrics.monthly_expenses, locale))
    table.add_row(
        "Net profit",
        f"[{profit_style}]{format_currency(metrics.net_profit, locale)}[/{profit_style}]",
    )
    table.add_row("Clients", str(metrics.total_clients))
    table.add_row("Invoices", str(metrics.total_invoices))
    table.add_row("Pending invoices", str(metrics.pending_invoices))
    console.print(table)

    console.print(
        f"\n[bold]Upcoming maintenance[/bold] "
        f"({format_date(metrics.maintenance_window_start, locale)} - "
        f"{format_date(metrics.maintenance_window_end, locale)}):"
    )
    if not metrics.upcoming_maintenance:
        console.print("  [dim]No maintenance due[/dim]")
    for client in metrics.upcoming_maintenance:
        console.print(f"  • {client.name} ({client.phone or 'no phone'})")


@app.command()
def clients():
    """List clients."""
    rows = _records().list_clients()
    if not rows:
        console.print("[yellow]No clients yet[/yellow]")
        return

    table = Table(title="Clients")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Phone")
    table.add_column("Email")
    for client in rows:
        table.add_row(
            client.id, client.name, client.client_type.value, client.phone, client.email
        )
    console.print(table)


@app.command(name="add-client")
def add_client_cmd(
    name: str = typer.Argument(..., help="Client name"),
    client_type: ClientType = typer.Option(
        ClientType.RESIDENTIAL, "--type", help="Residential or Commercial"
    ),
    phone: str = typer.Option("", "--phone"),
    email: str = typer.Option("", "--email"),
    address: str = typer.Option("", "--address"),
):
    """Register a new client."""
    created = _records().create_client(
        Client(name=name, client_type=client_type, phone=phone, email=email, address=address)
    )
    console.print(f"[bold green]✓[/bold green] Client {created.name} created ({created.id})")


@app.command()
def invoices():
    """List invoices with their totals."""
    config = get_config()
    records = _records()
    rows = records.list_invoices()
    if not rows:
        console.print("[yellow]No invoices yet[/yellow]")
        return

    names = {client.id: client.name for client in records.list_clients()}

    table = Table(title="Invoices")
    table.add_column("Number", style="cyan")
    table.add_column("Client")
    table.add_column("Issued")
    table.add_column("Status")
    table.add_column("Total", justify="right", style="green")
    table.add_column("Next maintenance")
    for inv in rows:
        table.add_row(
            inv.invoice_number,
            names.get(inv.client_id, "[red](deleted client)[/red]"),
            format_date(inv.issue_date, config.locale),
            inv.status.value,
            format_currency(compute_total(inv.items), config.locale),
            format_date(inv.next_maintenance_date, config.locale),
        )
    console.print(table)


@app.command()
def invoice(number: str = typer.Argument(..., help="Invoice number, e.g. INV-0001")):
    """Show an invoice as the printable document would present it."""
    records = _records()
    found = records.find_invoice_by_number(number)
    if found is None:
        console.print(f"[red]✗[/red] Invoice {number} not found")
        raise typer.Exit(code=1)

    try:
        doc = records.invoice_document(found.id)
    except HVACDeskError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[bold]{doc.business_name}[/bold]  {doc.business_tax_id}")
    console.print(f"{doc.business_address} · {doc.business_phone} · {doc.business_email}")
    console.print(f"\n[bold]INVOICE {doc.invoice_number}[/bold] ({doc.status})")
    console.print(f"Issued: {doc.issue_date}   Due: {doc.due_date}")
    console.print(f"Bill to: {doc.client_name}, {doc.client_address}")

    table = Table()
    table.add_column("Description")
    table.add_column("Qty", justify="right")
    table.add_column("Unit price", justify="right")
    table.add_column("Amount", justify="right")
    for line in doc.lines:
        table.add_row(
            line.description, str(line.quantity), line.unit_price_display, line.amount_display
        )
    console.print(table)
    console.print(f"[bold]Total: {doc.total_display}[/bold]")

    if doc.next_maintenance_date:
        console.print(f"Next maintenance: {doc.next_maintenance_date}")
    if doc.notes:
        console.print(f"\n[bold]Notes:[/bold]\n{doc.notes}")


@app.command(name="add-expense")
def add_expense_cmd(
    description: str = typer.Argument(..., help="What was paid for"),
    amount: str = typer.Argument(..., help="Amount"),
    category: ExpenseCategory = typer.Option(ExpenseCategory.MATERIALS, "--category"),
    on: str | None = typer.Option(None, "--date", help="Expense date (YYYY-MM-DD)"),
):
    """Record an expense."""
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise typer.BadParameter(f"amount must be a number, got '{amount}'") from e

    day = _parse_day(on, "--date") or date.today()
    saved = _records().save_expense(
        Expense(description=description, amount=value, expense_date=day, category=category)
    )
    console.print(f"[bold green]✓[/bold green] Expense recorded ({saved.id})")


@app.command(name="export-invoices")
def export_invoices_cmd(
    output: Path = typer.Argument(..., help="Output CSV file"),
):
    """Write the invoice register to CSV."""
    records = _records()
    with open(output, "w", newline="", encoding="utf-8") as f:
        for chunk in export_invoices_csv(records.list_invoices(), records.list_clients()):
            f.write(chunk)
    console.print(f"[green]✓[/green] Invoices saved to: {output}")


@app.command(name="export-expenses")
def export_expenses_cmd(
    output: Path = typer.Argument(..., help="Output CSV file"),
):
    """Write the expense ledger to CSV."""
    records = _records()
    with open(output, "w", newline="", encoding="utf-8") as f:
        for chunk in export_expenses_csv(records.list_expenses()):
            f.write(chunk)
    console.print(f"[green]✓[/green] Expenses saved to: {output}")


@app.command(name="renumber-check")
def renumber_check_cmd():
    """Report invoice numbers that were issued more than once."""
    collisions = find_number_collisions(_records().list_invoices())
    if not collisions:
        console.print("[green]✓[/green] All invoice numbers are unique")
        return

    console.print(f"[yellow]⚠[/yellow] {len(collisions)} duplicated invoice numbers:")
    for number, count in sorted(collisions.items()):
        console.print(f"  • {number} used {count} times")
    raise typer.Exit(code=1)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
