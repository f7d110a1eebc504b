"""Printable invoice data handed to the rendering collaborator.

The core does not render. It assembles everything a template needs, already
derived and formatted, so the renderer does no arithmetic of its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from hvacdesk.config import AppConfig
from hvacdesk.invoicing.engine import compute_subtotal, compute_total, render_notes
from hvacdesk.models import AppSettings, Client, Invoice
from hvacdesk.reporting.export_utils import format_currency, format_date


@dataclass(slots=True)
class DocumentLine:
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal
    unit_price_display: str
    amount_display: str


@dataclass(slots=True)
class InvoiceDocument:
    invoice_number: str
    status: str
    template: str
    accent_color: str

    # Business header
    business_name: str
    business_address: str
    business_phone: str
    business_email: str
    business_tax_id: str
    logo: str | None
    signature: str | None

    # Bill-to block
    client_name: str
    client_address: str
    client_phone: str
    client_email: str

    issue_date: str
    due_date: str
    next_maintenance_date: str

    subtotal: Decimal
    total: Decimal
    subtotal_display: str
    total_display: str
    currency: str

    notes: str
    lines: list[DocumentLine] = field(default_factory=list)

    @property
    def file_name(self) -> str:
        """Suggested export file name (without extension)."""
        return f"Invoice-{self.invoice_number}"


def build_invoice_document(
    invoice: Invoice, client: Client, settings: AppSettings, config: AppConfig
) -> InvoiceDocument:
    """Assemble the printable representation of a derived invoice."""
    locale = config.locale
    business = settings.business_info
    subtotal = compute_subtotal(invoice.items)
    total = compute_total(invoice.items)

    lines = [
        DocumentLine(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            amount=item.quantity * item.unit_price,
            unit_price_display=format_currency(item.unit_price, locale),
            amount_display=format_currency(item.quantity * item.unit_price, locale),
        )
        for item in invoice.items
    ]

    return InvoiceDocument(
        invoice_number=invoice.invoice_number,
        status=invoice.status.value,
        template=settings.invoice_settings.template,
        accent_color=settings.invoice_settings.accent_color,
        business_name=business.name,
        business_address=business.address,
        business_phone=business.phone,
        business_email=business.email,
        business_tax_id=business.tax_id,
        logo=business.logo,
        signature=business.signature,
        client_name=client.name,
        client_address=client.address,
        client_phone=client.phone,
        client_email=client.email,
        issue_date=format_date(invoice.issue_date, locale),
        due_date=format_date(invoice.due_date, locale),
        next_maintenance_date=format_date(invoice.next_maintenance_date, locale),
        subtotal=subtotal,
        total=total,
        subtotal_display=format_currency(subtotal, locale),
        total_display=format_currency(total, locale),
        currency=locale.currency,
        notes=render_notes(invoice),
        lines=lines,
    )
