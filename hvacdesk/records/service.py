"""Record-keeping operations: the callers of the derivation engines.

Each operation loads the collections it needs, runs the relevant engine on
the user's input and persists the whole collection back (last write wins).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from hvacdesk.config import AppConfig
from hvacdesk.core.errors import ClientNotResolvedError, RecordNotFoundError
from hvacdesk.core.ids import generate_id
from hvacdesk.costing.engine import price_service
from hvacdesk.invoicing.drafts import line_item_from_service, new_invoice_draft
from hvacdesk.invoicing.engine import derive_invoice
from hvacdesk.invoicing.numbering import next_invoice_number
from hvacdesk.models import (
    AppSettings,
    Client,
    Expense,
    InventoryItem,
    Invoice,
    InvoiceStatus,
    Service,
)
from hvacdesk.records.repository import RecordRepository, find_by_id, remove, replace, upsert
from hvacdesk.reporting.dashboard_metrics import DashboardMetrics, compute_dashboard_metrics
from hvacdesk.reporting.invoice_document import InvoiceDocument, build_invoice_document
from hvacdesk.storage.store import create_store

logger = logging.getLogger(__name__)


class RecordService:
    def __init__(
        self,
        repository: RecordRepository,
        config: AppConfig,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.config = config
        self.clock = clock

    # ------------------------------------------------------------------ clients

    def list_clients(self) -> list[Client]:
        return self.repository.clients.load()

    def create_client(self, client: Client) -> Client:
        created = client.model_copy(update={"id": generate_id(), "created_at": self.clock()})
        clients = self.repository.clients.load()
        self.repository.clients.save([*clients, created])
        logger.info(f"Created client {created.id} ({created.name})")
        return created

    def update_client(self, client: Client) -> Client:
        clients = self.repository.clients.load()
        existing = find_by_id(clients, client.id)
        if existing is None:
            raise RecordNotFoundError("clients", client.id)
        # Identity and creation time are fixed at creation
        updated = client.model_copy(update={"created_at": existing.created_at})
        self.repository.clients.save(replace(clients, updated, "clients"))
        return updated

    def delete_client(self, client_id: str) -> None:
        """Remove a client. Its invoices are kept and keep pointing at it."""
        clients = self.repository.clients.load()
        self.repository.clients.save(remove(clients, client_id, "clients"))
        logger.info(f"Deleted client {client_id}")

    # ----------------------------------------------------------------- invoices

    def list_invoices(self) -> list[Invoice]:
        return self.repository.invoices.load()

    def get_invoice(self, invoice_id: str) -> Invoice:
        invoice = find_by_id(self.repository.invoices.load(), invoice_id)
        if invoice is None:
            raise RecordNotFoundError("invoices", invoice_id)
        return invoice

    def find_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        for invoice in self.repository.invoices.load():
            if invoice.invoice_number == invoice_number:
                return invoice
        return None

    def new_invoice(self, client_id: str = "") -> Invoice:
        """Unsaved draft with default dates and one blank line."""
        return new_invoice_draft(self.clock().date(), self.config.invoicing, client_id)

    def save_invoice(self, invoice: Invoice) -> Invoice:
        """Derive and persist an invoice.

        A new invoice (id unknown to the collection) receives an id and the
        next sequential number; an existing one is replaced in place and keeps
        the number it was created with.

        Raises:
            ClientNotResolvedError: If the invoice's client does not exist
        """
        client = find_by_id(self.repository.clients.load(), invoice.client_id)
        derived = derive_invoice(invoice, client, self.config.invoicing)

        invoices = self.repository.invoices.load()
        existing = find_by_id(invoices, invoice.id) if invoice.id else None

        if existing is None:
            derived = derived.model_copy(
                update={
                    "id": invoice.id or generate_id(),
                    "invoice_number": next_invoice_number(invoices, self.config.invoicing),
                }
            )
            invoices = [*invoices, derived]
            logger.info(f"Created invoice {derived.invoice_number} for client {derived.client_id}")
        else:
            derived = derived.model_copy(update={"invoice_number": existing.invoice_number})
            invoices, _ = upsert(invoices, derived)
            logger.info(f"Updated invoice {derived.invoice_number}")

        self.repository.invoices.save(invoices)
        return derived

    def set_invoice_status(self, invoice_id: str, status: InvoiceStatus) -> Invoice:
        """Change only the status; derived fields are left as last saved."""
        invoices = self.repository.invoices.load()
        invoice = find_by_id(invoices, invoice_id)
        if invoice is None:
            raise RecordNotFoundError("invoices", invoice_id)
        updated = invoice.model_copy(update={"status": status})
        self.repository.invoices.save(replace(invoices, updated, "invoices"))
        return updated

    def delete_invoice(self, invoice_id: str) -> None:
        invoices = self.repository.invoices.load()
        self.repository.invoices.save(remove(invoices, invoice_id, "invoices"))
        logger.info(f"Deleted invoice {invoice_id}")

    def add_service_to_invoice(self, invoice: Invoice, service_id: str) -> Invoice:
        """Append one unit of a service as a new line (not persisted)."""
        service = find_by_id(self.repository.services.load(), service_id)
        if service is None:
            raise RecordNotFoundError("services", service_id)
        line = line_item_from_service(service, self.config.invoicing)
        return invoice.model_copy(update={"items": [*invoice.items, line]})

    def invoice_document(self, invoice_id: str) -> InvoiceDocument:
        invoice = self.get_invoice(invoice_id)
        client = find_by_id(self.repository.clients.load(), invoice.client_id)
        if client is None:
            raise ClientNotResolvedError(invoice.client_id)
        return build_invoice_document(invoice, client, self.get_settings(), self.config)

    # ---------------------------------------------------------------- inventory

    def list_inventory(self) -> list[InventoryItem]:
        return self.repository.inventory.load()

    def save_inventory_item(self, item: InventoryItem) -> InventoryItem:
        items, _ = upsert(self.repository.inventory.load(), item)
        self.repository.inventory.save(items)
        return item

    def delete_inventory_item(self, item_id: str) -> None:
        """Remove a stock item. Services that used it simply stop counting it."""
        items = self.repository.inventory.load()
        self.repository.inventory.save(remove(items, item_id, "inventory"))

    # ----------------------------------------------------------------- services

    def list_services(self) -> list[Service]:
        return self.repository.services.load()

    def save_service(self, service: Service) -> Service:
        priced = price_service(service, self.repository.inventory.load())
        services, created = upsert(self.repository.services.load(), priced)
        self.repository.services.save(services)
        logger.info(
            f"{'Created' if created else 'Updated'} service {priced.name}: "
            f"total {priced.total_price}"
        )
        return priced

    def delete_service(self, service_id: str) -> None:
        services = self.repository.services.load()
        self.repository.services.save(remove(services, service_id, "services"))

    # ----------------------------------------------------------------- expenses

    def list_expenses(self) -> list[Expense]:
        return self.repository.expenses.load()

    def save_expense(self, expense: Expense) -> Expense:
        expenses, _ = upsert(self.repository.expenses.load(), expense)
        self.repository.expenses.save(expenses)
        return expense

    def delete_expense(self, expense_id: str) -> None:
        expenses = self.repository.expenses.load()
        self.repository.expenses.save(remove(expenses, expense_id, "expenses"))

    # ----------------------------------------------------------------- settings

    def get_settings(self) -> AppSettings:
        return self.repository.settings.load()

    def save_settings(self, settings: AppSettings) -> AppSettings:
        self.repository.settings.save(settings)
        return settings

    # ---------------------------------------------------------------- dashboard

    def dashboard(self, now: datetime | None = None) -> DashboardMetrics:
        return compute_dashboard_metrics(
            self.repository.invoices.load(),
            self.repository.clients.load(),
            self.repository.expenses.load(),
            now or self.clock(),
            self.config.dashboard,
        )


def open_records(config: AppConfig) -> RecordService:
    """RecordService over the store configured in ``config.storage``."""
    store = create_store(config.storage)
    return RecordService(RecordRepository(store), config)
