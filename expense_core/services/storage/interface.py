"""
Abstract Storage Interface

DESIGN DECISION: The device key-value medium is an injected capability.
This allows us to:
1. Run the store against an in-memory fake in tests
2. Swap the file backend for a platform binding later
3. Keep the store free of any module-level singleton

The interface is intentionally tiny - five string operations.
Serialization, namespacing and error policy live in PersistentStore.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict


class KeyValueBackend(ABC):
    """
    Abstract interface for the persistence medium.

    Any backend (in-memory, JSON file, platform binding) must implement
    these methods. Values are opaque text. Implementations raise
    BackendError when the medium fails.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the text stored under key.

        Returns:
            The stored text, or None if the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Write text under key, replacing any previous value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete key. Deleting an absent key is not an error."""
        pass

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every key in the backend."""
        pass

    @abstractmethod
    async def list_keys(self) -> list[str]:
        """Return all present keys in backend-defined order."""
        pass


# =============================================================================
# EXCEPTIONS
# =============================================================================

class BackendError(Exception):
    """The persistence medium failed (I/O fault, quota, corrupt file)."""
    pass


class StorageError(Exception):
    """
    Base exception for store operations.

    Carries the operation name and key so every failure can be logged
    with enough context to trace it.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        key: Optional[str] = None,
    ):
        self.operation = operation
        self.key = key
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        context = [
            f"{name}={value}"
            for name, value in (("operation", self.operation), ("key", self.key))
            if value is not None
        ]
        return f"{message} ({', '.join(context)})" if context else message


class SerializationError(StorageError):
    """Value cannot be encoded as JSON."""
    pass


class DeserializationError(StorageError):
    """Stored text is not valid JSON."""
    pass


class StorageWriteError(StorageError):
    """Backend write, delete or clear failed."""
    pass


class StorageReadFailure(StorageError):
    """Backend read failed. The store logs it and reports the key as absent."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


# =============================================================================
# RESULT
# =============================================================================

T = TypeVar("T")


class StoreResult(BaseModel, Generic[T]):
    """
    Outcome of a store operation.

    Callers branch on `ok` (or on the type of `error`) instead of
    catching exceptions. `unwrap()` is there for code that prefers
    exceptions.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    ok: bool
    value: Optional[T] = None
    error: Optional[StorageError] = None

    @classmethod
    def success(cls, value: Any = None) -> "StoreResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: StorageError) -> "StoreResult":
        return cls(ok=False, error=error)

    def unwrap(self) -> Optional[T]:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
