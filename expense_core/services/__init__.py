"""Services package."""

from expense_core.services.storage import (
    BackendError,
    DeserializationError,
    DuplicateError,
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    NotFoundError,
    PersistentStore,
    SerializationError,
    StorageError,
    StorageReadFailure,
    StorageWriteError,
    StoreResult,
)

__all__ = [
    "BackendError",
    "DeserializationError",
    "DuplicateError",
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueBackend",
    "NotFoundError",
    "PersistentStore",
    "SerializationError",
    "StorageError",
    "StorageReadFailure",
    "StorageWriteError",
    "StoreResult",
]
