"""Seed files: YAML mappings loaded into a LeafStore during setup.

A seed file is a flat YAML mapping of resource key to scalar value::

    hello.world: Hello World
    a.test: a test!

Keys may contain the separator; they are stored verbatim. Seed files are
only ever read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from bundle_router.exceptions import LayoutError
from bundle_router.store import LeafStore

logger = logging.getLogger(__name__)


def validate_seed_data(data: Any, source: Path | str = "<seed>") -> Mapping[Any, Any]:
    """Check that parsed seed data is a mapping of scalars.

    An empty document counts as an empty mapping.

    Raises:
        LayoutError: If the document is not a mapping or holds nested values
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise LayoutError(f"Seed file {source} must contain a mapping of keys to values")

    for key, value in data.items():
        if isinstance(value, (Mapping, list)):
            raise LayoutError(f"Seed file {source}: value for key {key!r} must be a scalar")
    return data


def load_seed_data(data: Mapping[Any, Any], store: LeafStore | None = None) -> LeafStore:
    """Copy an already-parsed mapping into ``store`` (a new LeafStore by default).

    Keys and values are converted to ``str``; a null value becomes "".
    """
    target = store if store is not None else LeafStore()
    for key, value in data.items():
        target.put(str(key), "" if value is None else str(value))
    return target


def load_seed_file(path: Path) -> LeafStore:
    """Load a seed file into a new LeafStore.

    Args:
        path: YAML file holding a flat mapping

    Returns:
        LeafStore populated with the file's entries

    Raises:
        LayoutError: If the file is missing, unparsable or not a flat mapping
    """
    if not path.is_file():
        raise LayoutError(f"Seed file not found: {path}")

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.load(handle)
    except (YAMLError, UnicodeDecodeError, OSError) as exc:
        raise LayoutError(f"Failed to read seed file {path}: {exc}") from exc

    store = load_seed_data(validate_seed_data(data, path))
    logger.debug("Loaded %d entries from seed file %s", store.size(), path)
    return store
