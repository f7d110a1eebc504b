"""Invoice derivation: totals, maintenance scheduling and auto-notes.

Runs on every invoice save. The result depends only on the invoice's items,
issue date, notes and existing auto-notes, the client's type, and the
invoicing configuration, so re-saving an unchanged invoice yields the same invoice.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from hvacdesk.config import InvoicingConfig
from hvacdesk.core.errors import ClientNotResolvedError
from hvacdesk.models import AutoNote, AutoNoteKind, Client, Invoice, InvoiceItem

logger = logging.getLogger(__name__)

NOTE_SEPARATOR = "\n\n"


def compute_subtotal(items: Iterable[InvoiceItem]) -> Decimal:
    """Sum of quantity x unit price. Negative values are taken as-is."""
    return sum((item.amount for item in items), Decimal("0"))


def compute_total(items: Iterable[InvoiceItem]) -> Decimal:
    # Total equals subtotal: no discounts or taxes at this layer
    return compute_subtotal(items)


def add_months(start: date, months: int) -> date:
    """Advance ``start`` by calendar months.

    Day-of-month is clamped to the end of the target month
    (2025-08-31 + 6 months -> 2026-02-28).
    """
    return start + relativedelta(months=months)


def next_maintenance_date(invoice: Invoice, config: InvoicingConfig) -> date | None:
    """Scheduled follow-up if any line is maintenance work, else None."""
    if invoice.has_maintenance:
        return add_months(invoice.issue_date, config.maintenance_interval_months)
    return None


def recommendation_months(client: Client, config: InvoicingConfig) -> int:
    if client.is_commercial:
        return config.commercial_recommendation_months
    return config.residential_recommendation_months


def known_note_texts(
    kind: AutoNoteKind, months: int, config: InvoicingConfig
) -> list[str]:
    """Every wording of an auto-note, current and legacy, for ``months``."""
    if kind == AutoNoteKind.WARRANTY:
        templates = (config.warranty_text, *config.legacy_warranty_texts)
    else:
        templates = (
            config.maintenance_recommendation_text,
            *config.legacy_maintenance_recommendation_texts,
        )
    return [template.format(months=months) for template in templates]


def required_auto_notes(
    invoice: Invoice, client: Client, config: InvoicingConfig
) -> list[AutoNote]:
    """Auto-notes the invoice's items call for, in display order.

    A note already written into the user notes, in any known wording, is not
    required again; records from the Spanish edition carry the sentences
    inline.
    """
    if not invoice.has_new_equipment:
        return []

    months = recommendation_months(client, config)
    candidates = [
        AutoNote(kind=AutoNoteKind.WARRANTY, text=config.warranty_text),
        AutoNote(
            kind=AutoNoteKind.MAINTENANCE_RECOMMENDATION,
            text=config.maintenance_recommendation_text.format(months=months),
        ),
    ]
    return [
        note
        for note in candidates
        if not any(
            text in invoice.notes for text in known_note_texts(note.kind, months, config)
        )
    ]


def merge_auto_notes(existing: list[AutoNote], required: list[AutoNote]) -> list[AutoNote]:
    """Append each required note not already present.

    Notes are never removed here, even when the flag that added them has
    since been cleared on every line.
    """
    merged = list(existing)
    for note in required:
        if note not in merged:
            merged.append(note)
    return merged


def derive_invoice(
    invoice: Invoice, client: Client | None, config: InvoicingConfig
) -> Invoice:
    """Return ``invoice`` with its engine-owned fields recomputed.

    Args:
        invoice: Draft invoice as edited by the user
        client: The resolved client referenced by ``invoice.client_id``
        config: Invoicing rules (intervals, note texts)

    Returns:
        A new Invoice; the input is not modified

    Raises:
        ClientNotResolvedError: If no client was resolved for the invoice
    """
    if client is None or not invoice.client_id or client.id != invoice.client_id:
        raise ClientNotResolvedError(invoice.client_id or None)

    next_date = next_maintenance_date(invoice, config)
    auto_notes = merge_auto_notes(
        invoice.auto_notes, required_auto_notes(invoice, client, config)
    )

    derived = invoice.model_copy(
        update={
            "next_maintenance_date": next_date,
            "auto_notes": auto_notes,
        }
    )
    logger.debug(
        f"Derived invoice {invoice.invoice_number or '(new)'}: "
        f"total={compute_total(derived.items)} next_maintenance={next_date} "
        f"auto_notes={len(auto_notes)}"
    )
    return derived


def render_notes(invoice: Invoice) -> str:
    """User notes followed by auto-notes, separated by blank lines.

    An auto-note whose text is already part of the user's notes (older
    records stored the sentences inline) is not repeated.
    """
    parts: list[str] = []
    user_notes = invoice.notes.strip()
    if user_notes:
        parts.append(user_notes)
    for note in invoice.auto_notes:
        if note.text not in user_notes:
            parts.append(note.text)
    return NOTE_SEPARATOR.join(parts)
