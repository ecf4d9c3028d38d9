"""Router layout configuration.

A layout file says which seed files are registered as default stores and
which go under a prefix::

    separator: "."
    defaults:
      - defaults.yaml
      - more-defaults.yaml
    groups:
      a:
        - a.yaml
        - a-extra.yaml
      soup.other:
        - soup-other.yaml

Seed paths are relative to the layout file's directory unless absolute.
Group order in the file does not matter (prefixes are scanned in sorted
order); store order within a group does.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from bundle_router.exceptions import LayoutError
from bundle_router.router import DEFAULT_SEPARATOR, PrefixRouter
from bundle_router.seed import load_seed_file

logger = logging.getLogger(__name__)

LAYOUT_ENV_VAR = "BUNDLE_ROUTER_LAYOUT"


class RouterLayout(BaseModel):
    """Which seed files make up a router, and under which prefixes."""

    separator: str = DEFAULT_SEPARATOR
    defaults: list[str] = Field(default_factory=list)
    groups: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("separator")
    @classmethod
    def _separator_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("separator cannot be empty")
        return value


def resolve_layout_path(cli_path: Path | None = None) -> Path | None:
    """Return the layout file to use (CLI argument takes precedence).

    Resolution order:
    1. ``cli_path`` when given
    2. BUNDLE_ROUTER_LAYOUT environment variable
    3. None (no layout configured)
    """
    if cli_path is not None:
        return cli_path
    if env_path := os.environ.get(LAYOUT_ENV_VAR):
        return Path(env_path)
    return None


def load_layout(path: Path) -> RouterLayout:
    """Parse and validate a layout file.

    Raises:
        LayoutError: If the file is missing, unparsable or fails validation
    """
    if not path.is_file():
        raise LayoutError(f"Layout file not found: {path}")

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.load(handle) or {}
    except (YAMLError, UnicodeDecodeError, OSError) as exc:
        raise LayoutError(f"Failed to read layout file {path}: {exc}") from exc

    try:
        return RouterLayout.model_validate(data)
    except ValidationError as exc:
        raise LayoutError(f"Invalid layout file {path}: {exc}") from exc


def build_router(layout: RouterLayout, base_dir: Path) -> PrefixRouter:
    """Create a PrefixRouter and register every seed file named in ``layout``.

    Args:
        layout: Validated layout
        base_dir: Directory relative seed paths are resolved against

    Raises:
        LayoutError: If a seed file is missing or malformed
    """
    router = PrefixRouter(layout.separator)

    for seed in layout.defaults:
        router.add_default_store(load_seed_file(_seed_path(seed, base_dir)))

    for prefix, seeds in layout.groups.items():
        if not prefix.strip():
            logger.warning("Blank prefix in layout; registering %d seed(s) as defaults", len(seeds))
        for seed in seeds:
            router.add_child_store(prefix, load_seed_file(_seed_path(seed, base_dir)))

    return router


def load_router(path: Path) -> PrefixRouter:
    """Load a layout file and build its router in one step."""
    return build_router(load_layout(path), path.parent)


def _seed_path(seed: str, base_dir: Path) -> Path:
    candidate = Path(seed)
    return candidate if candidate.is_absolute() else base_dir / candidate
