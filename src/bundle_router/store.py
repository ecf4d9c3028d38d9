"""In-memory leaf store: the terminal unit of resource resolution."""

from __future__ import annotations

from threading import RLock
from typing import Iterator, Mapping


class LeafStore:
    """Mutable, thread-safe mapping from resource key to string value.

    Single operations are atomic. Compound sequences (``contains`` then
    ``get``) are not, so callers must treat a later ``None`` as a miss.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._values: dict[str, str] = {}

    @classmethod
    def from_mapping(cls, entries: Mapping[str, str]) -> LeafStore:
        """Construct a LeafStore holding a copy of ``entries``."""
        store = cls()
        for key, value in entries.items():
            store.put(key, value)
        return store

    def put(self, key: str, value: str) -> LeafStore:
        """Add or overwrite the value stored under ``key``.

        Returns:
            This store, so calls can be chained during setup
        """
        with self._lock:
            self._values[key] = value
        return self

    def remove(self, key: str) -> LeafStore:
        """Remove ``key`` if present; a missing key leaves the store unchanged."""
        with self._lock:
            self._values.pop(key, None)
        return self

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None when it is not stored."""
        with self._lock:
            return self._values.get(key)

    def size(self) -> int:
        with self._lock:
            return len(self._values)

    def keys(self) -> Iterator[str]:
        """Iterate over the stored keys without holding the lock.

        Keys are read from the live dict in passes: each pass yields the
        keys not yet visited, and a key removed before it is reached is
        skipped. Keys added while iterating are picked up by the next pass;
        iteration ends once a pass finds nothing new. Each key is yielded at
        most once, and concurrent mutation never raises.
        """
        seen: set[str] = set()
        while True:
            with self._lock:
                pending = [key for key in self._values if key not in seen]
            if not pending:
                return
            for key in pending:
                seen.add(key)
                if self.contains(key):
                    yield key

    # --- container protocol -------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __repr__(self) -> str:
        with self._lock:
            return f"{type(self).__name__}({self._values!r})"
