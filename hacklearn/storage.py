"""Key-value store injected into the purchase ledger and the comment board.

Values are kept JSON-encoded, the same way browser storage holds them, so
anything written must be JSON-serializable and anything read back is a
fresh copy. Reads never fail: a missing key, a stored ``null`` or an
undecodable value all yield the caller's fallback.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Protocol, runtime_checkable

from hacklearn.core.logging_config import get_logger
from hacklearn.exceptions import StorageError

__all__ = ["KeyValueStore", "MemoryStore"]

_LOGGER = get_logger("storage")


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal protocol for the store backing purchases and comments."""

    def get(self, key: str, fallback: Any = None) -> Any:  # pragma: no cover (interface)
        ...

    def set(self, key: str, value: Any) -> None:  # pragma: no cover (interface)
        ...


class MemoryStore:
    """Process-local store of JSON strings."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str, fallback: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return fallback
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            _LOGGER.warning("Discarding undecodable value for key %s", key)
            return fallback
        return fallback if value is None else value

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for key {key!r} is not JSON-serializable: {exc}", key=key) from exc

    def raw(self, key: str) -> str | None:
        """Stored JSON text for ``key``, undecoded."""
        return self._data.get(key)
