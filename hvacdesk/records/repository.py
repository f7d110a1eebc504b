"""Typed access to the persisted collections."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from hvacdesk.core.errors import RecordNotFoundError
from hvacdesk.models import AppSettings, Client, Expense, InventoryItem, Invoice, Service
from hvacdesk.storage.store import Collection, CollectionStore, RecordCollection


class HasId(Protocol):
    id: str


R = TypeVar("R", bound=HasId)


class RecordRepository:
    """One typed collection per record kind, all backed by the same store."""

    def __init__(self, store: CollectionStore):
        self.store = store
        self.clients: RecordCollection[Client] = store.records("clients", Client)
        self.invoices: RecordCollection[Invoice] = store.records("invoices", Invoice)
        self.inventory: RecordCollection[InventoryItem] = store.records(
            "inventory", InventoryItem
        )
        self.services: RecordCollection[Service] = store.records("services", Service)
        self.expenses: RecordCollection[Expense] = store.records("expenses", Expense)
        self.settings: Collection[AppSettings] = store.collection(
            "settings", AppSettings, AppSettings
        )


def find_by_id(records: Sequence[R], record_id: str) -> R | None:
    for record in records:
        if record.id == record_id:
            return record
    return None


def upsert(records: Sequence[R], record: R) -> tuple[list[R], bool]:
    """Replace the record with the same id, or append it.

    Returns:
        (new list, True if the record was appended)
    """
    if find_by_id(records, record.id) is None:
        return [*records, record], True
    return [record if r.id == record.id else r for r in records], False


def replace(records: Sequence[R], record: R, collection: str) -> list[R]:
    """Replace an existing record; unknown ids are an error."""
    if find_by_id(records, record.id) is None:
        raise RecordNotFoundError(collection, record.id)
    return [record if r.id == record.id else r for r in records]


def remove(records: Sequence[R], record_id: str, collection: str) -> list[R]:
    remaining = [r for r in records if r.id != record_id]
    if len(remaining) == len(records):
        raise RecordNotFoundError(collection, record_id)
    return remaining
