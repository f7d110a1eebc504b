"""Domain errors raised by HVACDesk operations."""

from __future__ import annotations


class HVACDeskError(Exception):
    """Base class for all HVACDesk errors."""


class ValidationError(HVACDeskError):
    """Input rejected before anything was persisted."""


class ClientNotResolvedError(ValidationError):
    """Invoice references a client that does not exist."""

    def __init__(self, client_id: str | None):
        self.client_id = client_id
        if client_id:
            message = f"Client '{client_id}' not found; select an existing client"
        else:
            message = "No client selected; select a client before saving"
        super().__init__(message)


class RecordNotFoundError(HVACDeskError):
    """Update or delete targeted an identifier missing from its collection."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No record '{record_id}' in {collection}")
