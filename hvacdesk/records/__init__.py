"""Record-keeping layer: collections plus the save/delete flows."""

from hvacdesk.records.repository import RecordRepository, find_by_id, remove, replace, upsert
from hvacdesk.records.service import RecordService, open_records

__all__ = [
    "RecordRepository",
    "RecordService",
    "find_by_id",
    "open_records",
    "remove",
    "replace",
    "upsert",
]
