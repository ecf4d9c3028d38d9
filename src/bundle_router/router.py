"""Prefix-routed resolution across registered resource stores.

Resolution order (checked in order):
1. PREFIXED -- groups whose ``prefix + separator`` starts the key, scanned in
   descending lexicographic prefix order; the prefix is stripped before the
   group's stores are asked. A miss in one group moves on to the next
   matching prefix.
2. DEFAULT  -- default stores, asked for the full, unmodified key.

Within a group (or the defaults) the first registered store wins.

Key enumeration runs the other way round: default keys first, then each
group's keys qualified with ``prefix + separator``. Resolution priority and
enumeration order are independent; a key listed from a default store can
still resolve through a prefix group.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from bundle_router.exceptions import InvalidArgument, NotFound
from bundle_router.protocol import Resolvable

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "."


# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------

class ResolutionTier(Enum):
    PREFIXED = "prefixed"
    DEFAULT = "default"


@dataclass(frozen=True)
class ResolutionResult:
    """Where a resolved value came from."""

    key: str  # fully-qualified key as requested
    value: str
    tier: ResolutionTier
    prefix: str | None  # None for the DEFAULT tier
    lookup_key: str  # key handed to the store (prefix stripped for PREFIXED)
    position: int  # index of the winning store within its group / the defaults


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _checked_separator(separator: str | None) -> str:
    """Return the trimmed separator or raise InvalidArgument when blank."""
    if separator is None or not separator.strip():
        raise InvalidArgument("separator", "Separator cannot be None or empty")
    return separator.strip()


def _lookup(store: Resolvable, key: str) -> str | None:
    """Ask one store for ``key``; None means "try the next candidate".

    ``contains`` and ``get`` are separate calls, so a concurrent removal
    can make a confirmed key vanish; that is a miss, not an error.
    """
    if not store.contains(key):
        return None
    value = store.get(key)
    if value is None:
        logger.debug("Key %r vanished from %r between contains() and get()", key, store)
    return value


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------

class PrefixRouter:
    """Aggregate several stores behind one key space.

    Usage::

        router = PrefixRouter()
        router.add_default_store(defaults)
        router.add_child_store("a", a_store)
        router.resolve("a.another")   # asks a_store for "another"
        router.resolve("hello.world") # asks the default stores

    Stores are registered once during setup; afterwards the router is only
    read, and concurrent reads are safe. Registration is not locked.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        self._separator = _checked_separator(separator)
        self._groups: dict[str, list[Resolvable]] = {}
        self._defaults: list[Resolvable] = []

    # --- registration -------------------------------------------------------------

    @property
    def separator(self) -> str:
        return self._separator

    def set_separator(self, separator: str) -> None:
        """Replace the separator used by later resolutions and enumerations.

        Raises:
            InvalidArgument: If ``separator`` is None or blank.
        """
        self._separator = _checked_separator(separator)
        logger.debug("Separator set to %r", self._separator)

    def add_default_store(self, store: Resolvable) -> None:
        """Append a store consulted with the full key when no prefix hits."""
        self._defaults.append(store)
        logger.debug("Registered default store #%d: %r", len(self._defaults) - 1, store)

    def add_child_store(self, prefix: str | None, store: Resolvable) -> None:
        """Register ``store`` under ``prefix``.

        A None or whitespace-only prefix registers a default store instead.
        The prefix is trimmed; several stores may share one prefix and are
        asked in registration order.
        """
        if prefix is None or not prefix.strip():
            self.add_default_store(store)
            return

        trimmed = prefix.strip()
        group = self._groups.setdefault(trimmed, [])
        group.append(store)
        logger.debug("Registered store #%d under prefix %r: %r", len(group) - 1, trimmed, store)

    def default_stores(self) -> tuple[Resolvable, ...]:
        """Return the default stores in registration order."""
        return tuple(self._defaults)

    def stores(self, prefix: str) -> tuple[Resolvable, ...]:
        """Return the stores registered under ``prefix`` (empty if unknown)."""
        if prefix is None:
            return ()
        return tuple(self._groups.get(prefix.strip(), ()))

    def prefixes(self) -> list[str]:
        """Return the registered prefixes in scan order.

        The order is descending string comparison, not prefix length.
        Because a matching longer prefix always begins with the shorter
        one plus the separator, it sorts after it and is scanned first.
        """
        return sorted(self._groups, reverse=True)

    # --- resolution ---------------------------------------------------------------

    def resolve_origin(self, key: str) -> ResolutionResult:
        """Resolve ``key`` and report which tier and store supplied it.

        Raises:
            NotFound: If no prefix group and no default store has the key.
        """
        separator = self._separator
        key_length = len(key)

        for prefix in self.prefixes():
            if key_length > len(prefix) and key.startswith(prefix + separator):
                lookup_key = key[len(prefix) + len(separator):]
                for position, store in enumerate(self._groups[prefix]):
                    value = _lookup(store, lookup_key)
                    if value is not None:
                        return ResolutionResult(
                            key=key,
                            value=value,
                            tier=ResolutionTier.PREFIXED,
                            prefix=prefix,
                            lookup_key=lookup_key,
                            position=position,
                        )
                logger.debug("Prefix %r matched %r but no store in its group has %r", prefix, key, lookup_key)

        for position, store in enumerate(self._defaults):
            value = _lookup(store, key)
            if value is not None:
                return ResolutionResult(
                    key=key,
                    value=value,
                    tier=ResolutionTier.DEFAULT,
                    prefix=None,
                    lookup_key=key,
                    position=position,
                )

        logger.debug("Key %r not found in any prefix group or default store", key)
        raise NotFound(key)

    def resolve(self, key: str) -> str:
        """Return the value for ``key``.

        Raises:
            NotFound: If no registered store provides the key.
        """
        return self.resolve_origin(key).value

    def exists(self, key: str) -> bool:
        """Return True if ``resolve(key)`` would succeed."""
        try:
            self.resolve_origin(key)
        except NotFound:
            return False
        return True

    # --- enumeration --------------------------------------------------------------

    def keys(self) -> Iterator[str]:
        """Lazily yield every fully-qualified key the router can list.

        Defaults come first (keys unmodified), then each prefix group in
        scan order with ``prefix + separator`` prepended. Duplicates across
        stores are not removed. Every call starts an independent pass.
        """
        for store in self._defaults:
            yield from store.keys()

        for prefix in self.prefixes():
            for store in self._groups[prefix]:
                for inner_key in store.keys():
                    yield f"{prefix}{self._separator}{inner_key}"

    def render(self) -> str:
        """Render ``{key=value, ...}`` for every enumerated key.

        Values are looked up through ``resolve``, so the value shown for a
        key may come from a different store than the one that listed it.
        """
        pairs = (f"{key}={self.resolve(key)}" for key in self.keys())
        return "{" + ", ".join(pairs) + "}"

    # --- Resolvable protocol (routers can be nested) ------------------------------

    def contains(self, key: str) -> bool:
        return self.exists(key)

    def get(self, key: str) -> str | None:
        try:
            return self.resolve(key)
        except NotFound:
            return None

    # --- container protocol -------------------------------------------------------

    def __getitem__(self, key: str) -> str:
        return self.resolve(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(separator={self._separator!r}, "
            f"prefixes={self.prefixes()!r}, defaults={len(self._defaults)})"
        )
