"""Resolvable protocol: the capability every registered store provides."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class Resolvable(Protocol):
    """Minimal lookup interface a router can delegate to.

    - ``get`` returns ``None`` for a missing key; absence is never an error.
    - ``keys`` may be lazy and need not be a consistent snapshot.

    LeafStore implements it, and so does PrefixRouter, so routers can be
    nested under a prefix of another router.
    """

    def contains(self, key: str) -> bool:
        ...

    def get(self, key: str) -> str | None:
        ...

    def keys(self) -> Iterable[str]:
        ...
