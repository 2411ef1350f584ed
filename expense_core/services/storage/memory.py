"""
In-Memory Backend

Dict-backed KeyValueBackend. State is lost when the process exits, so it
is meant for tests and for ephemeral sessions.

Supports fault injection: set `fail_reads` / `fail_writes` to make the
corresponding operations raise BackendError.
"""

from typing import Optional

from expense_core.services.storage.interface import BackendError, KeyValueBackend


class InMemoryBackend(KeyValueBackend):
    """KeyValueBackend over a plain dict."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False

    def _check_read(self, operation: str) -> None:
        if self.fail_reads:
            raise BackendError(f"Simulated read failure during {operation}")

    def _check_write(self, operation: str) -> None:
        if self.fail_writes:
            raise BackendError(f"Simulated write failure during {operation}")

    async def get(self, key: str) -> Optional[str]:
        self._check_read("get")
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._check_write("set")
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._check_write("delete")
        self._data.pop(key, None)

    async def delete_all(self) -> None:
        self._check_write("delete_all")
        self._data.clear()

    async def list_keys(self) -> list[str]:
        self._check_read("list_keys")
        return list(self._data)

    def raw(self, key: str) -> Optional[str]:
        """Peek at stored text without going through the async API."""
        return self._data.get(key)
