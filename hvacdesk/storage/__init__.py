"""Collection persistence for HVACDesk."""

from hvacdesk.storage.backends import JsonFileBackend, MemoryBackend, StorageBackend
from hvacdesk.storage.store import Collection, CollectionStore, RecordCollection, create_store

__all__ = [
    "Collection",
    "CollectionStore",
    "JsonFileBackend",
    "MemoryBackend",
    "RecordCollection",
    "StorageBackend",
    "create_store",
]
