"""Invoice derivation, numbering and draft factories."""

from hvacdesk.invoicing.drafts import line_item_from_service, new_invoice_draft, new_line_item
from hvacdesk.invoicing.engine import (
    add_months,
    compute_subtotal,
    compute_total,
    derive_invoice,
    render_notes,
)
from hvacdesk.invoicing.numbering import find_number_collisions, next_invoice_number

__all__ = [
    "add_months",
    "compute_subtotal",
    "compute_total",
    "derive_invoice",
    "find_number_collisions",
    "line_item_from_service",
    "new_invoice_draft",
    "new_line_item",
    "next_invoice_number",
    "render_notes",
]
