"""
Storage Services Package

Provides the backend interface, the JSON persistent store built on it,
and two concrete backends (in-memory and JSON file).
"""

from expense_core.services.storage.interface import (
    BackendError,
    DeserializationError,
    DuplicateError,
    KeyValueBackend,
    NotFoundError,
    SerializationError,
    StorageError,
    StorageReadFailure,
    StorageWriteError,
    StoreResult,
)
from expense_core.services.storage.file_backend import JsonFileBackend
from expense_core.services.storage.memory import InMemoryBackend
from expense_core.services.storage.store import PersistentStore

__all__ = [
    # Interfaces
    "KeyValueBackend",
    "PersistentStore",
    "StoreResult",
    # Exceptions
    "BackendError",
    "DeserializationError",
    "DuplicateError",
    "NotFoundError",
    "SerializationError",
    "StorageError",
    "StorageReadFailure",
    "StorageWriteError",
    # Backends
    "InMemoryBackend",
    "JsonFileBackend",
]
