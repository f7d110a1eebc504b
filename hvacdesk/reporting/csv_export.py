"""CSV export functionality for HVACDesk data.

Provides streaming CSV generation for:
- Invoice register
- Expense ledger
"""

from __future__ import annotations

import csv
from collections.abc import Iterator, Sequence
from io import StringIO

from hvacdesk.invoicing.engine import compute_total
from hvacdesk.models import Client, Expense, Invoice


def _rows_to_csv(headers: list[str], rows: Iterator[list[str]]) -> Iterator[str]:
    output = StringIO()
    writer = csv.writer(output)

    writer.writerow(headers)
    yield output.getvalue()
    output.seek(0)
    output.truncate(0)

    for row in rows:
        writer.writerow(row)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)


def export_invoices_csv(
    invoices: Sequence[Invoice], clients: Sequence[Client]
) -> Iterator[str]:
    """Generate CSV stream for the invoice register.

    Yields:
        CSV rows as strings
    """
    headers = [
        "Invoice Number",
        "Client",
        "Issue Date",
        "Due Date",
        "Status",
        "Total",
        "Next Maintenance",
    ]
    names = {client.id: client.name for client in clients}

    def rows() -> Iterator[list[str]]:
        for inv in invoices:
            yield [
                inv.invoice_number,
                names.get(inv.client_id, "(deleted client)"),
                inv.issue_date.isoformat(),
                inv.due_date.isoformat(),
                inv.status.value,
                f"{compute_total(inv.items):.2f}",
                inv.next_maintenance_date.isoformat() if inv.next_maintenance_date else "",
            ]

    yield from _rows_to_csv(headers, rows())


def export_expenses_csv(expenses: Sequence[Expense]) -> Iterator[str]:
    """Generate CSV stream for the expense ledger, oldest first."""
    headers = ["Date", "Category", "Description", "Amount"]

    def rows() -> Iterator[list[str]]:
        for exp in sorted(expenses, key=lambda e: e.expense_date):
            yield [
                exp.expense_date.isoformat(),
                exp.category.value,
                exp.description,
                f"{exp.amount:.2f}",
            ]

    yield from _rows_to_csv(headers, rows())
