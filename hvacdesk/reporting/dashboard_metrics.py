"""Dashboard metrics aggregating the month's money and upcoming work.

Combines monthly income, monthly expenses, net profit and the clients due
for maintenance soon into a single view. Pure: reads the supplied
collections, never the store.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal

from hvacdesk.config import DashboardConfig
from hvacdesk.invoicing.engine import compute_total
from hvacdesk.models import Client, Expense, Invoice, InvoiceStatus


@dataclass
class DashboardMetrics:
    """Unified dashboard metrics."""

    # Financial Overview (calendar month of the reference instant)
    monthly_income: Decimal
    monthly_expenses: Decimal
    net_profit: Decimal

    # Maintenance
    upcoming_maintenance: list[Client]
    maintenance_window_start: date
    maintenance_window_end: date

    # Counts
    total_clients: int
    total_invoices: int
    pending_invoices: int  # Sent or Overdue

    computed_at: datetime
    period: str = field(default="")  # "YYYY-MM"

    @property
    def is_profitable(self) -> bool:
        """Display hint only; a negative month is not an error."""
        return self.net_profit >= 0


def _in_month(day: date, reference: datetime) -> bool:
    return day.month == reference.month and day.year == reference.year


def compute_monthly_income(invoices: Sequence[Invoice], now: datetime) -> Decimal:
    """Totals of Paid invoices issued in the calendar month of ``now``."""
    return sum(
        (
            compute_total(inv.items)
            for inv in invoices
            if inv.status == InvoiceStatus.PAID and _in_month(inv.issue_date, now)
        ),
        Decimal("0"),
    )


def compute_monthly_expenses(expenses: Sequence[Expense], now: datetime) -> Decimal:
    return sum(
        (exp.amount for exp in expenses if _in_month(exp.expense_date, now)),
        Decimal("0"),
    )


def find_upcoming_maintenance(
    invoices: Sequence[Invoice],
    clients: Sequence[Client],
    now: datetime,
    window_days: int = 15,
) -> list[Client]:
    """Distinct clients with a maintenance date in ``[now, now + window]``.

    Both bounds are inclusive and compared by calendar day. Clients appear in
    the order their first qualifying invoice is found; invoices whose client
    has been deleted are skipped.
    """
    start = now.date()
    end = (now + timedelta(days=window_days)).date()
    by_id = {client.id: client for client in clients}

    upcoming: list[Client] = []
    seen: set[str] = set()
    for inv in invoices:
        due = inv.next_maintenance_date
        if due is None or not (start <= due <= end):
            continue
        client = by_id.get(inv.client_id)
        if client is None or client.id in seen:
            continue
        seen.add(client.id)
        upcoming.append(client)
    return upcoming


def compute_dashboard_metrics(
    invoices: Sequence[Invoice],
    clients: Sequence[Client],
    expenses: Sequence[Expense],
    now: datetime,
    config: DashboardConfig,
) -> DashboardMetrics:
    """Calculate dashboard metrics.

    Args:
        invoices: Full invoice collection
        clients: Full client collection
        expenses: Full expense collection
        now: Reference instant ("today")
        config: Dashboard settings (maintenance window length)

    Returns:
        DashboardMetrics for the calendar month containing ``now``
    """
    income = compute_monthly_income(invoices, now)
    spent = compute_monthly_expenses(expenses, now)
    window = config.maintenance_window_days

    return DashboardMetrics(
        monthly_income=income,
        monthly_expenses=spent,
        net_profit=income - spent,
        upcoming_maintenance=find_upcoming_maintenance(invoices, clients, now, window),
        maintenance_window_start=now.date(),
        maintenance_window_end=(now + timedelta(days=window)).date(),
        total_clients=len(clients),
        total_invoices=len(invoices),
        pending_invoices=sum(
            1
            for inv in invoices
            if inv.status in (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)
        ),
        computed_at=now,
        period=f"{now.year:04d}-{now.month:02d}",
    )
