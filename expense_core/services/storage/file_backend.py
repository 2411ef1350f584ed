"""
JSON File Backend

DESIGN DECISION: All keys live in one JSON object on disk.
This is enough for a single device holding thousands of expenses
and keeps the data human-inspectable.

TRADEOFFS:
- Every write rewrites the whole file (fine at this scale)
- One process per file; there is no cross-process locking

Writes go to a temporary file in the same directory which then
replaces the target with os.replace, so a crash mid-write never
leaves a truncated file. Transient OSErrors on write are retried
with tenacity; that retry is this backend's policy, the store
itself never retries.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from expense_core.config import get_settings
from expense_core.services.storage.interface import BackendError, KeyValueBackend


class JsonFileBackend(KeyValueBackend):
    """
    KeyValueBackend persisted to a single JSON file.

    The file is loaded lazily on first access and cached; the cache is
    only updated after the file has been replaced successfully.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        retry_attempts: Optional[int] = None,
    ):
        """
        Args:
            path: File to persist to. Defaults to StoreSettings.data_file.
            retry_attempts: Write attempts before giving up.
                            Defaults to StoreSettings.write_retry_attempts.
        """
        settings = get_settings().store
        self._path = Path(path or settings.data_file)
        self._cache: Optional[dict[str, str]] = None
        self._lock = asyncio.Lock()
        self._logger = structlog.get_logger(__name__)
        self._retrying = Retrying(
            stop=stop_after_attempt(retry_attempts or settings.write_retry_attempts),
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    @property
    def path(self) -> Path:
        return self._path

    def _read_file(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise BackendError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise BackendError(f"{self._path} does not hold a JSON object")
        if not all(isinstance(v, str) for v in data.values()):
            raise BackendError(f"{self._path} holds non-text values")
        return {str(k): v for k, v in data.items()}

    def _write_file(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=self._path.name + "-",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_name, self._path)
        except OSError:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

    async def _load(self) -> dict[str, str]:
        if self._cache is None:
            self._cache = await asyncio.to_thread(self._read_file)
        return self._cache

    async def _commit(self, data: dict[str, str], operation: str) -> None:
        try:
            await asyncio.to_thread(self._retrying, self._write_file, data)
        except OSError as e:
            self._logger.error(
                "file_backend_write_failed",
                operation=operation,
                path=str(self._path),
                error=str(e),
            )
            raise BackendError(f"Cannot write {self._path}: {e}") from e
        self._cache = data

    async def get(self, key: str) -> Optional[str]:
        data = await self._load()
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = dict(await self._load())
            data[key] = value
            await self._commit(data, "set")

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = await self._load()
            if key not in data:
                return
            updated = {k: v for k, v in data.items() if k != key}
            await self._commit(updated, "delete")

    async def delete_all(self) -> None:
        async with self._lock:
            await self._commit({}, "delete_all")

    async def list_keys(self) -> list[str]:
        data = await self._load()
        return list(data)
