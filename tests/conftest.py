"""Pytest configuration and fixtures for HVACDesk tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from hvacdesk.config import AppConfig, InvoicingConfig, StorageConfig
from hvacdesk.models import Client, ClientType, InventoryItem
from hvacdesk.records.repository import RecordRepository
from hvacdesk.records.service import RecordService
from hvacdesk.storage.backends import MemoryBackend
from hvacdesk.storage.store import CollectionStore
from tests.factories import FIXED_NOW


@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration with an in-memory store."""
    return AppConfig(storage=StorageConfig(backend="memory"))


@pytest.fixture
def invoicing_config(app_config: AppConfig) -> InvoicingConfig:
    return app_config.invoicing


@pytest.fixture
def residential_client() -> Client:
    return Client(
        id="res-1",
        name="Maria Gomez",
        address="Calle 5 #12",
        phone="809-555-0100",
        client_type=ClientType.RESIDENTIAL,
    )


@pytest.fixture
def commercial_client() -> Client:
    return Client(
        id="com-1",
        name="Hotel Caribe",
        address="Av. Independencia 12",
        phone="809-555-0101",
        client_type=ClientType.COMMERCIAL,
    )


@pytest.fixture
def memory_store() -> CollectionStore:
    return CollectionStore(MemoryBackend())


@pytest.fixture
def records(memory_store: CollectionStore, app_config: AppConfig) -> RecordService:
    """RecordService over an empty in-memory store with a fixed clock."""
    return RecordService(RecordRepository(memory_store), app_config, clock=lambda: FIXED_NOW)


@pytest.fixture
def inventory() -> list[InventoryItem]:
    return [
        InventoryItem(id="inv-a", name="Copper pipe 1/4", unit_price=Decimal("10")),
        InventoryItem(id="inv-b", name="Refrigerant R410A", unit_price=Decimal("5")),
        InventoryItem(id="inv-c", name="Capacitor 35uF", unit_price=Decimal("7.50")),
    ]
