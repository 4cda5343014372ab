"""Key-value storage abstractions for client-local state."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueStore(Protocol):
    """Storage interface for string values addressed by key."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any existing one."""

    def delete(self, key: str) -> None:
        """Remove a value; missing keys are ignored."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and ephemeral deployments."""

    _values: dict[str, str]

    def __init__(self) -> None:
        self._values = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        """Return all stored keys."""
        return list(self._values)


@dataclass
class NamespacedKeyValueStore(KeyValueStore):
    """View of a shared store restricted to one client's keys."""

    store: KeyValueStore
    namespace: str

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> str | None:
        return self.store.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.store.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self.store.delete(self._key(key))
