"""Prefix-routed resource bundles.

Aggregates independent key-value stores behind one lookup surface: a key's
prefix selects the stores registered under it, with fallback to an ordered
list of default stores.
"""

from .exceptions import (
    BundleRouterError,
    InvalidArgument,
    LayoutError,
    NotFound,
)
from .protocol import Resolvable
from .store import LeafStore
from .router import (
    DEFAULT_SEPARATOR,
    PrefixRouter,
    ResolutionResult,
    ResolutionTier,
)
from .origin import OriginEntry, collect_origins
from .seed import load_seed_file
from .config import RouterLayout, build_router, load_layout, load_router

__all__ = [
    "BundleRouterError",
    "InvalidArgument",
    "LayoutError",
    "NotFound",
    "Resolvable",
    "LeafStore",
    "DEFAULT_SEPARATOR",
    "PrefixRouter",
    "ResolutionResult",
    "ResolutionTier",
    "OriginEntry",
    "collect_origins",
    "load_seed_file",
    "RouterLayout",
    "build_router",
    "load_layout",
    "load_router",
]

__version__ = "0.1.0"
