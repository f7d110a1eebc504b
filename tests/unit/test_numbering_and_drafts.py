"""Unit tests for invoice numbering and draft factories."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from hvacdesk.invoicing.drafts import (
    is_maintenance_service,
    line_item_from_service,
    new_invoice_draft,
)
from hvacdesk.invoicing.numbering import (
    find_number_collisions,
    format_invoice_number,
    next_invoice_number,
)
from hvacdesk.models import InvoiceStatus, Service
from tests.factories import make_invoice, make_item


class TestNumbering:
    def test_first_invoice_is_inv_0001(self, invoicing_config):
        assert next_invoice_number([], invoicing_config) == "INV-0001"

    def test_size_based(self, invoicing_config):
        invoices = [make_invoice("c", [make_item()]) for _ in range(41)]
        assert next_invoice_number(invoices, invoicing_config) == "INV-0042"

    def test_custom_prefix_and_width(self, invoicing_config):
        config = replace(invoicing_config, number_prefix="FAC", number_width=6)
        assert format_invoice_number(7, config) == "FAC-000007"

    def test_wider_than_padding(self, invoicing_config):
        assert format_invoice_number(12345, invoicing_config) == "INV-12345"

    def test_collisions_reported(self):
        invoices = [
            make_invoice("c", [], invoice_number="INV-0001"),
            make_invoice("c", [], invoice_number="INV-0002"),
            make_invoice("c", [], invoice_number="INV-0002"),
            make_invoice("c", [], invoice_number=""),
        ]
        assert find_number_collisions(invoices) == {"INV-0002": 2}


class TestDrafts:
    def test_new_invoice_defaults(self, invoicing_config):
        draft = new_invoice_draft(date(2025, 3, 20), invoicing_config, client_id="res-1")
        assert draft.issue_date == date(2025, 3, 20)
        assert draft.due_date == date(2025, 4, 19)
        assert draft.status == InvoiceStatus.DRAFT
        assert len(draft.items) == 1
        assert draft.items[0].quantity == Decimal("1")
        assert draft.invoice_number == ""

    def test_maintenance_keyword_detection(self, invoicing_config):
        assert is_maintenance_service(Service(name="Preventive Maintenance"), invoicing_config)
        assert is_maintenance_service(Service(name="Mantenimiento Preventivo"), invoicing_config)
        assert not is_maintenance_service(Service(name="Split install"), invoicing_config)

    def test_line_from_service(self, invoicing_config):
        service = Service(name="Maintenance 12k BTU", total_price=Decimal("1800"))
        line = line_item_from_service(service, invoicing_config)
        assert line.description == "Maintenance 12k BTU"
        assert line.quantity == Decimal("1")
        assert line.unit_price == Decimal("1800")
        assert line.is_maintenance is True
        assert line.is_new_equipment is False
