"""
Persistent Store

Generic, asynchronous, string-keyed store over an injected KeyValueBackend.
Values are serialized to JSON text; the store knows nothing about what
they represent.

ERROR POLICY (deliberately asymmetric):
- Writes (set_item, remove_item, clear) report failure. Losing a write
  silently would corrupt user data.
- Backend read failures (get_item, get_all_keys) degrade to "absent" /
  empty. A summary view should not crash on a transient read fault.
  Callers cannot tell "never written" from "read failed"; the failure
  is only visible in the log.
- Stored text that is not valid JSON is reported as DeserializationError;
  callers decide whether that is data loss.

Every operation returns a StoreResult rather than raising, except
get_all_keys which returns a plain list. Nothing is retried here.

CONCURRENCY: no locking. Per-key atomicity is the backend's job and
read-modify-write sequences across awaits race (last write wins).
"""

import json
from typing import Any, Optional

import structlog

from expense_core.audit import log_store_error
from expense_core.services.storage.interface import (
    BackendError,
    DeserializationError,
    KeyValueBackend,
    SerializationError,
    StorageReadFailure,
    StorageWriteError,
    StoreResult,
)


class PersistentStore:
    """
    JSON key-value store over an injected backend.

    Args:
        backend: The persistence medium.
        namespace: Optional key prefix. When set, keys are stored as
                   "<namespace>:<key>", clear() only removes this
                   namespace and get_all_keys() only lists it.
    """

    def __init__(self, backend: KeyValueBackend, namespace: Optional[str] = None):
        self._backend = backend
        self._namespace = namespace or None
        self._logger = structlog.get_logger(__name__)

    @property
    def namespace(self) -> Optional[str]:
        return self._namespace

    def _full_key(self, key: str) -> str:
        return f"{self._namespace}:{key}" if self._namespace else key

    def _owns(self, full_key: str) -> bool:
        return not self._namespace or full_key.startswith(f"{self._namespace}:")

    def _strip(self, full_key: str) -> str:
        if self._namespace:
            return full_key[len(self._namespace) + 1:]
        return full_key

    @staticmethod
    def _serialize(key: str, value: Any) -> str:
        try:
            # allow_nan=False: NaN/Infinity are not valid JSON
            return json.dumps(value, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as e:
            raise SerializationError(
                f"Value cannot be serialized: {e}",
                operation="set_item",
                key=key,
            ) from e

    async def set_item(self, key: str, value: Any) -> StoreResult[None]:
        """
        Serialize value to JSON and write it under key.

        Returns:
            Failed result carrying SerializationError when the value is not
            JSON-representable (nothing is written), or StorageWriteError
            when the backend write fails (previous value untouched).
        """
        try:
            text = self._serialize(key, value)
        except SerializationError as e:
            log_store_error(self._logger, "store_serialization_failed", e)
            return StoreResult.failure(e)

        try:
            await self._backend.set(self._full_key(key), text)
        except BackendError as e:
            error = StorageWriteError(
                f"Backend write failed: {e}", operation="set_item", key=key
            )
            log_store_error(self._logger, "store_write_failed", error)
            return StoreResult.failure(error)

        self._logger.debug("store_item_set", key=key, size=len(text))
        return StoreResult.success()

    async def get_item(self, key: str) -> StoreResult[Any]:
        """
        Read and deserialize the value under key.

        Returns:
            Successful result with the value, or with None when the key is
            absent or the backend read failed. Failed result carrying
            DeserializationError when the stored text is not valid JSON.
        """
        try:
            text = await self._backend.get(self._full_key(key))
        except BackendError as e:
            failure = StorageReadFailure(
                f"Backend read failed: {e}", operation="get_item", key=key
            )
            log_store_error(self._logger, "store_read_degraded", failure)
            return StoreResult.success(None)

        if text is None:
            return StoreResult.success(None)

        try:
            return StoreResult.success(json.loads(text))
        except (TypeError, ValueError) as e:
            error = DeserializationError(
                f"Stored text is not valid JSON: {e}", operation="get_item", key=key
            )
            log_store_error(self._logger, "store_deserialization_failed", error)
            return StoreResult.failure(error)

    async def remove_item(self, key: str) -> StoreResult[None]:
        """Delete key. Removing an absent key succeeds."""
        try:
            await self._backend.delete(self._full_key(key))
        except BackendError as e:
            error = StorageWriteError(
                f"Backend delete failed: {e}", operation="remove_item", key=key
            )
            log_store_error(self._logger, "store_write_failed", error)
            return StoreResult.failure(error)
        return StoreResult.success()

    async def clear(self) -> StoreResult[None]:
        """
        Delete every key owned by this store.

        Without a namespace the whole backend is wiped. With one, only
        "<namespace>:*" keys are deleted, one at a time; a failure part-way
        leaves the remaining keys in place.
        """
        try:
            if self._namespace is None:
                await self._backend.delete_all()
            else:
                for full_key in await self._backend.list_keys():
                    if self._owns(full_key):
                        await self._backend.delete(full_key)
        except BackendError as e:
            error = StorageWriteError(f"Backend clear failed: {e}", operation="clear")
            log_store_error(self._logger, "store_write_failed", error)
            return StoreResult.failure(error)

        self._logger.info("store_cleared", namespace=self._namespace)
        return StoreResult.success()

    async def get_all_keys(self) -> list[str]:
        """
        List the keys currently present, in backend order.

        Returns an empty list when the backend read fails.
        """
        try:
            keys = await self._backend.list_keys()
        except BackendError as e:
            failure = StorageReadFailure(
                f"Backend key listing failed: {e}", operation="get_all_keys"
            )
            log_store_error(self._logger, "store_read_degraded", failure)
            return []
        return [self._strip(k) for k in keys if self._owns(k)]
