"""Key-value storage abstractions."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueStore(Protocol):
    """Synchronous string-keyed store holding serialized records."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing whatever the key held."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store backed by a dict."""

    _values: dict[str, str]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        """Return the value for a key if present."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Overwrite the value for a key."""
        self._values[key] = value

    def delete(self, key: str) -> None:
        """Drop a key if it exists."""
        self._values.pop(key, None)
