"""Starting points for new invoices and invoice lines."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from hvacdesk.config import InvoicingConfig
from hvacdesk.models import Invoice, InvoiceItem, InvoiceStatus, Service


def new_line_item() -> InvoiceItem:
    return InvoiceItem(description="", quantity=Decimal("1"), unit_price=Decimal("0"))


def new_invoice_draft(today: date, config: InvoicingConfig, client_id: str = "") -> Invoice:
    """Blank Draft invoice issued today, due after the configured term."""
    return Invoice(
        client_id=client_id,
        issue_date=today,
        due_date=today + timedelta(days=config.default_due_days),
        items=[new_line_item()],
        status=InvoiceStatus.DRAFT,
        notes="",
    )


def is_maintenance_service(service: Service, config: InvoicingConfig) -> bool:
    name = service.name.lower()
    return any(keyword in name for keyword in config.maintenance_keywords)


def line_item_from_service(service: Service, config: InvoicingConfig) -> InvoiceItem:
    """Invoice line for one unit of a service at its current total price."""
    return InvoiceItem(
        description=service.name,
        quantity=Decimal("1"),
        unit_price=service.total_price,
        is_maintenance=is_maintenance_service(service, config),
        is_new_equipment=False,
    )
