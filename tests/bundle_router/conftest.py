"""Pytest fixtures for bundle router tests."""

from pathlib import Path

import pytest

from bundle_router.router import PrefixRouter
from bundle_router.store import LeafStore


@pytest.fixture
def empty_store():
    """A LeafStore with no entries."""
    return LeafStore()


@pytest.fixture
def populated_router():
    """Router with two default stores and the "a", "soup", "soup.other"
    and "soup.another" groups.

    Registration order is deliberately not sorted: "soup.other" is added
    before "soup", and "soup.another" last.
    """
    router = PrefixRouter()

    # Default values
    router.add_default_store(LeafStore.from_mapping({
        "hello.world": "Hello World",
        "hello.again": "Hello Again",
        "this.is": "This is",
        "a.test": "a test!",
    }))
    router.add_default_store(LeafStore.from_mapping({
        "yet.another.test": "VALUE",
        "value.test.another": "yet",
    }))

    # "a" group, two stores
    router.add_child_store("a", LeafStore.from_mapping({
        "test": "A test!",
        "another": "Another test value ...",
    }))
    router.add_child_store("a", LeafStore.from_mapping({
        "test.it": "This value gets tested!",
        "test.too": "This one too",
    }))

    router.add_child_store("soup.other", LeafStore.from_mapping({
        "none": "Nothing to serve here",
    }))

    router.add_child_store("soup", LeafStore.from_mapping({
        "leaky house soup": "III Sickles",
        "soup house leaky": "III Sickles",
        "house soup leaky": "III Sickles",
        "leaky soup house": "IV Sickles",
        "soup leaky house": "IV Sickles",
        "house leaky soup": "IV Sickles",
        "leaky,leaky soup": "V Sickles",
        "house,house soup": "V Sickles",
        "soup,soup soup": "V Sickles",
        "another.visible": "Is this value visible?",
        "another.invisible": "This value is invisible",
    }))

    router.add_child_store("soup.another", LeafStore.from_mapping({
        "yas": "Yet another soup",
        "invisible": "This value is visible instead",
    }))
    return router


@pytest.fixture
def layout_dir(tmp_path: Path) -> Path:
    """Directory with seed files and a layout.yaml wiring them together."""
    (tmp_path / "defaults.yaml").write_text(
        "hello.world: Hello World\n"
        "a.test: a test!\n",
        encoding="utf-8",
    )
    (tmp_path / "a.yaml").write_text(
        "another: Another test value ...\n",
        encoding="utf-8",
    )
    (tmp_path / "soup.yaml").write_text(
        "another.visible: Is this value visible?\n"
        "another.invisible: This value is invisible\n",
        encoding="utf-8",
    )
    (tmp_path / "soup-another.yaml").write_text(
        "invisible: This value is visible instead\n",
        encoding="utf-8",
    )
    (tmp_path / "layout.yaml").write_text(
        "separator: \".\"\n"
        "defaults:\n"
        "  - defaults.yaml\n"
        "groups:\n"
        "  a:\n"
        "    - a.yaml\n"
        "  soup:\n"
        "    - soup.yaml\n"
        "  soup.another:\n"
        "    - soup-another.yaml\n",
        encoding="utf-8",
    )
    return tmp_path
