"""Tests for lazy key enumeration and rendering."""

from __future__ import annotations

from collections import Counter

from bundle_router.router import PrefixRouter
from bundle_router.store import LeafStore


class _CountingStore:
    """Resolvable whose keys() records how many keys were pulled."""

    def __init__(self, keys: list[str]) -> None:
        self._keys = keys
        self.pulled = 0

    def contains(self, key: str) -> bool:
        return key in self._keys

    def get(self, key: str) -> str | None:
        return key.upper() if key in self._keys else None

    def keys(self):
        for key in self._keys:
            self.pulled += 1
            yield key


class TestEnumerationOrder:
    def test_defaults_first_then_groups_in_scan_order(self) -> None:
        router = PrefixRouter()
        router.add_child_store("a", LeafStore.from_mapping({"x": "1"}))
        router.add_child_store("b", LeafStore.from_mapping({"y": "2"}))
        router.add_default_store(LeafStore.from_mapping({"d1": "3"}))
        router.add_default_store(LeafStore.from_mapping({"d2": "4"}))

        assert list(router.keys()) == ["d1", "d2", "b.y", "a.x"]

    def test_group_stores_in_registration_order(self) -> None:
        router = PrefixRouter()
        router.add_child_store("g", LeafStore.from_mapping({"second": "2"}))
        router.add_child_store("g", LeafStore.from_mapping({"first": "1"}))

        assert list(router.keys()) == ["g.second", "g.first"]

    def test_uses_current_separator(self) -> None:
        router = PrefixRouter()
        router.add_child_store("g", LeafStore.from_mapping({"k": "v"}))
        router.set_separator("/")

        assert list(router.keys()) == ["g/k"]

    def test_duplicates_are_not_removed(self) -> None:
        router = PrefixRouter()
        router.add_child_store("a", LeafStore.from_mapping({"test": "group"}))
        router.add_child_store("a", LeafStore.from_mapping({"test": "shadowed"}))
        router.add_default_store(LeafStore.from_mapping({"a.test": "default"}))

        assert Counter(router.keys())["a.test"] == 3

    def test_populated_router_keys(self, populated_router: PrefixRouter) -> None:
        keys = list(populated_router.keys())

        assert len(keys) == 4 + 2 + 2 + 2 + 1 + 11 + 2
        # defaults first
        assert set(keys[:6]) == {
            "hello.world", "hello.again", "this.is", "a.test",
            "yet.another.test", "value.test.another",
        }
        # then "soup.other", "soup.another", "soup", "a"
        assert keys[6] == "soup.other.none"
        assert set(keys[7:9]) == {"soup.another.yas", "soup.another.invisible"}
        assert keys[-4:-2] == ["a.test", "a.another"]
        assert keys[-2:] == ["a.test.it", "a.test.too"]


class TestEnumerationProtocol:
    def test_restartable(self, populated_router: PrefixRouter) -> None:
        assert Counter(populated_router.keys()) == Counter(populated_router.keys())

    def test_independent_cursors(self, populated_router: PrefixRouter) -> None:
        first = populated_router.keys()
        second = populated_router.keys()
        next(first)
        next(first)
        assert list(second) == list(populated_router.keys())

    def test_iter_matches_keys(self, populated_router: PrefixRouter) -> None:
        assert list(populated_router) == list(populated_router.keys())

    def test_every_key_resolves(self, populated_router: PrefixRouter) -> None:
        for key in populated_router.keys():
            assert populated_router.exists(key), key

    def test_lazy_pull(self) -> None:
        """Only as many inner keys are pulled as the caller consumes."""
        counting = _CountingStore(["one", "two", "three"])
        router = PrefixRouter()
        router.add_child_store("c", counting)

        keys = router.keys()
        assert counting.pulled == 0
        assert next(keys) == "c.one"
        assert counting.pulled == 1

    def test_empty_groups_are_skipped(self) -> None:
        router = PrefixRouter()
        router.add_default_store(LeafStore())
        router.add_child_store("empty", LeafStore())
        router.add_child_store("full", LeafStore.from_mapping({"k": "v"}))
        router.add_child_store("empty", LeafStore())

        assert list(router.keys()) == ["full.k"]


class TestRender:
    def test_render_empty(self) -> None:
        assert PrefixRouter().render() == "{}"

    def test_render_pairs(self) -> None:
        router = PrefixRouter()
        router.add_default_store(LeafStore.from_mapping({"hello": "world"}))
        router.add_child_store("a", LeafStore.from_mapping({"b": "c"}))

        assert router.render() == "{hello=world, a.b=c}"
        assert str(router) == router.render()

    def test_render_uses_resolution_priority(self) -> None:
        """A default key shadowed by a group renders the group's value."""
        router = PrefixRouter()
        router.add_default_store(LeafStore.from_mapping({"a.test": "default"}))
        router.add_child_store("a", LeafStore.from_mapping({"test": "group"}))

        assert router.render() == "{a.test=group, a.test=group}"

    def test_repr(self) -> None:
        router = PrefixRouter()
        router.add_child_store("a", LeafStore())
        router.add_default_store(LeafStore())
        assert repr(router) == "PrefixRouter(separator='.', prefixes=['a'], defaults=1)"
