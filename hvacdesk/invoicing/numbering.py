"""Sequential invoice numbers (``INV-0001``, ``INV-0002``...)."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from hvacdesk.config import InvoicingConfig
from hvacdesk.models import Invoice


def format_invoice_number(sequence: int, config: InvoicingConfig) -> str:
    return f"{config.number_prefix}-{sequence:0{config.number_width}d}"


def next_invoice_number(invoices: Sequence[Invoice], config: InvoicingConfig) -> str:
    """Number for a new invoice, derived from the collection size.

    Size-based, not max-based: after a deletion the next number can repeat
    one already issued. ``find_number_collisions`` reports such repeats.
    """
    return format_invoice_number(len(invoices) + 1, config)


def find_number_collisions(invoices: Sequence[Invoice]) -> dict[str, int]:
    """Invoice numbers used more than once, with their counts."""
    counts = Counter(inv.invoice_number for inv in invoices if inv.invoice_number)
    return {number: count for number, count in counts.items() if count > 1}
