"""Error taxonomy shared by the store, the services and the HTTP layer."""

from __future__ import annotations


class CollectionError(Exception):
    """Base error carrying a user-facing message, a stable code and an HTTP status."""

    code = "error"
    status_code = 500

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> dict:
        return {"erro": self.message, "code": self.code}


class ValidationError(CollectionError):
    """Payload misses a required field or carries one that is not allowed."""

    code = "validation_error"
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class RecordNotFoundError(CollectionError):
    code = "not_found"
    status_code = 404


class UnknownLookupError(RecordNotFoundError):
    """Secondary lookup segment not configured for the resource."""


class StorageError(CollectionError):
    code = "storage_error"
    status_code = 500


class CollectionLoadError(StorageError):
    """Backing file exists but cannot be read as a JSON array of objects."""

    code = "load_error"


class PersistenceError(StorageError):
    """Backing file could not be written; the in-memory change was rolled back."""

    code = "persistence_error"
