"""Unit tests for the collection store and its backends.

The store must never raise on bad stored data or failed writes.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from decimal import Decimal

import pytest

from hvacdesk.config import StorageConfig
from hvacdesk.models import AppSettings, Client, Expense
from hvacdesk.storage.backends import JsonFileBackend, MemoryBackend
from hvacdesk.storage.store import CollectionStore, create_store


class FailingBackend:
    def read(self, name: str) -> str | None:
        raise OSError("disk unplugged")

    def write(self, name: str, text: str) -> None:
        raise OSError("read-only filesystem")


class TestCollectionStore:
    def test_missing_returns_default(self):
        store = CollectionStore(MemoryBackend())
        assert store.load("clients", []) == []

    def test_default_is_copied(self):
        store = CollectionStore(MemoryBackend())
        default: list = []
        loaded = store.load("clients", default)
        loaded.append("x")
        assert default == []

    def test_round_trip(self):
        store = CollectionStore(MemoryBackend())
        assert store.save("expenses", [{"amount": 10}]) is True
        assert store.load("expenses", []) == [{"amount": 10}]

    def test_corrupt_data_falls_back(self, caplog):
        store = CollectionStore(MemoryBackend({"invoices": "{not json"}))
        with caplog.at_level(logging.WARNING):
            assert store.load("invoices", []) == []
        assert "Corrupt data" in caplog.text

    def test_read_error_falls_back(self, caplog):
        store = CollectionStore(FailingBackend())
        with caplog.at_level(logging.WARNING):
            assert store.load("clients", ["default"]) == ["default"]
        assert "Could not read" in caplog.text

    def test_write_error_reported_not_raised(self, caplog):
        store = CollectionStore(FailingBackend())
        with caplog.at_level(logging.ERROR):
            assert store.save("clients", []) is False
        assert "Could not write" in caplog.text

    def test_unserialisable_value_reported(self):
        store = CollectionStore(MemoryBackend())
        assert store.save("clients", [object()]) is False


class TestTypedCollection:
    def test_models_round_trip_with_camel_case(self):
        backend = MemoryBackend()
        store = CollectionStore(backend)
        expenses = store.collection("expenses", list[Expense], list)

        expense = Expense(
            id="e1", description="Gasoline", amount=Decimal("45.50"), expense_date=date(2025, 3, 2)
        )
        assert expenses.save([expense]) is True

        raw = json.loads(backend.read("expenses"))
        assert raw[0]["date"] == "2025-03-02"
        assert expenses.load() == [expense]

    def test_schema_invalid_falls_back(self, caplog):
        store = CollectionStore(MemoryBackend({"clients": json.dumps([{"phone": "1"}])}))
        clients = store.collection("clients", list[Client], list)
        with caplog.at_level(logging.WARNING):
            assert clients.load() == []
        assert "does not match its schema" in caplog.text

    def test_settings_default_factory(self):
        store = CollectionStore(MemoryBackend())
        settings = store.collection("settings", AppSettings, AppSettings).load()
        assert settings.invoice_settings.accent_color == "#3B82F6"
        assert settings.business_info.logo is None


class TestJsonFileBackend:
    def test_writes_one_file_per_collection(self, tmp_path):
        store = CollectionStore(JsonFileBackend(tmp_path / "data"))
        store.save("clients", [{"name": "Ana"}])
        assert (tmp_path / "data" / "clients.json").exists()
        assert store.load("clients", []) == [{"name": "Ana"}]

    def test_no_temp_files_left(self, tmp_path):
        store = CollectionStore(JsonFileBackend(tmp_path))
        store.save("invoices", [])
        store.save("invoices", [{"id": "a"}])
        assert sorted(p.name for p in tmp_path.iterdir()) == ["invoices.json"]

    def test_corrupt_file_falls_back(self, tmp_path):
        (tmp_path / "services.json").write_text("[{", encoding="utf-8")
        store = CollectionStore(JsonFileBackend(tmp_path))
        assert store.load("services", []) == []

    @pytest.mark.parametrize("name", ["", "../etc", ".hidden", "a/b"])
    def test_rejects_bad_names(self, tmp_path, name):
        with pytest.raises(ValueError):
            JsonFileBackend(tmp_path).path_for(name)

    def test_bad_name_does_not_raise_through_store(self, tmp_path):
        store = CollectionStore(JsonFileBackend(tmp_path))
        assert store.load("../x", []) == []
        assert store.save("../x", []) is False


class TestCreateStore:
    def test_memory_backend(self):
        store = create_store(StorageConfig(backend="memory"))
        assert isinstance(store.backend, MemoryBackend)

    def test_json_backend(self, tmp_path):
        store = create_store(StorageConfig(data_dir=tmp_path, backend="json"))
        assert isinstance(store.backend, JsonFileBackend)
        assert store.backend.data_dir == tmp_path


class TestRecordCollection:
    def _clients_store(self) -> tuple[MemoryBackend, CollectionStore]:
        stored = [
            {"id": "c1", "name": "Ana", "type": "Residencial"},
            {"id": "c2", "name": "Planta Norte", "type": "Industrial"},
        ]
        backend = MemoryBackend({"clients": json.dumps(stored)})
        return backend, CollectionStore(backend)

    def test_invalid_record_skipped_not_whole_collection(self, caplog):
        _, store = self._clients_store()
        clients = store.records("clients", Client)

        with caplog.at_level(logging.WARNING):
            loaded = clients.load()

        assert [c.id for c in loaded] == ["c1"]
        assert "id='c2'" in caplog.text

    def test_save_keeps_valid_and_invalid_records(self):
        backend, store = self._clients_store()
        clients = store.records("clients", Client)

        loaded = clients.load()
        assert clients.save([*loaded, Client(id="c3", name="New")]) is True

        raw = json.loads(backend.read("clients"))
        assert [entry["id"] for entry in raw] == ["c1", "c3", "c2"]
        assert raw[2]["type"] == "Industrial"
        assert [c.id for c in clients.load()] == ["c1", "c3"]

    def test_non_list_falls_back(self):
        store = CollectionStore(MemoryBackend({"clients": json.dumps({"id": "c1"})}))
        assert store.records("clients", Client).load() == []
