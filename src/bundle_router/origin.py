"""Show resolution origin for every key a router enumerates.

Walks ``PrefixRouter.keys()`` and resolves each key, reporting the tier,
prefix and store position the value actually came from. Because
enumeration and resolution are independent, a key listed from a default
store may resolve through a prefix group, and a key removed in between is
reported with an error instead of aborting the walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bundle_router.exceptions import NotFound
from bundle_router.router import PrefixRouter

logger = logging.getLogger(__name__)


@dataclass
class OriginEntry:
    """A single enumerated key with its resolution origin."""

    key: str
    value: str | None
    tier: str | None  # "prefixed", "default"
    prefix: str | None
    position: int | None  # store index within its group / the defaults
    error: str | None  # If resolution failed


def collect_origins(router: PrefixRouter) -> list[OriginEntry]:
    """Collect the resolution origin of every enumerated key.

    Entries follow enumeration order and keep duplicates.
    """
    entries: list[OriginEntry] = []

    for key in router.keys():
        try:
            result = router.resolve_origin(key)
        except NotFound as exc:
            logger.warning("Enumerated key %r no longer resolves", key)
            entries.append(OriginEntry(key, None, None, None, None, str(exc)))
            continue
        entries.append(
            OriginEntry(key, result.value, result.tier.value, result.prefix, result.position, None)
        )

    return entries
