"""Query cache and the optimistic update primitive."""

import json

import pytest

from retech.client import OptimisticUpdate, QueryCache


def _cart():
    return {
        "id": 1,
        "user_id": 7,
        "items": [{"id": 10, "product_id": 3, "quantity": 2, "price_at_add": "100.00"}],
    }


class TestQueryCache:
    def test_fetch_uses_loader_once_until_invalidated(self):
        cache = QueryCache()
        calls = []

        def loader():
            calls.append(1)
            return len(calls)

        assert cache.fetch(("cart", 7), loader) == 1
        assert cache.fetch(("cart", 7), loader) == 1

        cache.invalidate(("cart",))
        assert cache.fetch(("cart", 7), loader) == 2

    def test_invalidate_by_prefix(self):
        cache = QueryCache()
        cache.set(("cart", 1), "a")
        cache.set(("cart", 2), "b")
        cache.set(("orders", 1), "c")

        assert cache.invalidate(("cart",)) == 2
        assert cache.is_stale(("cart", 1))
        assert not cache.is_stale(("orders", 1))

    def test_update_leaves_missing_entry_missing(self):
        cache = QueryCache()
        cache.update(("cart", 1), lambda c: {"items": []})
        assert not cache.has(("cart", 1))

    def test_snapshot_is_independent_copy(self):
        cache = QueryCache()
        cache.set(("cart", 7), _cart())
        snap = cache.snapshot(("cart", 7))

        cache.get(("cart", 7))["items"][0]["quantity"] = 99
        assert snap.data["items"][0]["quantity"] == 2


class TestOptimisticUpdate:
    def test_rollback_restores_exact_state(self):
        cache = QueryCache()
        cache.set(("cart", 7), _cart())
        before = json.dumps(cache.get(("cart", 7)), sort_keys=True)

        def boom():
            raise ConnectionError("write failed")

        update = OptimisticUpdate(cache, ("cart", 7), lambda c: {**c, "items": []})
        with pytest.raises(ConnectionError):
            update.run(boom)

        assert json.dumps(cache.get(("cart", 7)), sort_keys=True) == before
        assert not cache.is_stale(("cart", 7))

    def test_speculative_state_visible_during_write(self):
        cache = QueryCache()
        cache.set(("cart", 7), _cart())
        seen = {}

        def write():
            seen["items"] = cache.get(("cart", 7))["items"]
            return "ok"

        result = OptimisticUpdate(cache, ("cart", 7), lambda c: {**c, "items": []}).run(write)

        assert result == "ok"
        assert seen["items"] == []

    def test_success_invalidates_prefix(self):
        cache = QueryCache()
        cache.set(("cart", 7), _cart())
        cache.set(("cart", 8), _cart())

        OptimisticUpdate(cache, ("cart", 7), lambda c: c).run(lambda: None)

        assert cache.is_stale(("cart", 7))
        assert cache.is_stale(("cart", 8))

    def test_rollback_of_absent_entry_keeps_it_absent(self):
        cache = QueryCache()

        def fail():
            raise RuntimeError("write failed")

        with pytest.raises(RuntimeError):
            OptimisticUpdate(cache, ("cart", 7), lambda c: c).run(fail)

        assert not cache.has(("cart", 7))
