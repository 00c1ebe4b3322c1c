# retech/client/query_cache.py
import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple, TypeVar

from retech.utils.logging import get_logger

logger = get_logger(__name__)

Key = Tuple[Any, ...]
T = TypeVar("T")


@dataclass
class CacheEntry:
    data: Any
    stale: bool = False


@dataclass(frozen=True)
class Snapshot:
    key: Key
    present: bool
    data: Any = None
    stale: bool = False


class QueryCache:
    """
    Client-side cache of query results, keyed by tuples like ("cart", user_id).
    Owned by a StorefrontContext, never shared between identities through globals.
    """

    def __init__(self):
        self._entries: Dict[Key, CacheEntry] = {}

    def get(self, key: Key) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry else None

    def has(self, key: Key) -> bool:
        return key in self._entries

    def set(self, key: Key, data: Any) -> None:
        self._entries[key] = CacheEntry(data)

    def update(self, key: Key, updater: Callable[[Any], Any]) -> None:
        # missing entries stay missing
        entry = self._entries.get(key)
        if entry is None or entry.data is None:
            return
        entry.data = updater(entry.data)

    def is_stale(self, key: Key) -> bool:
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def fetch(self, key: Key, loader: Callable[[], T]) -> T:
        if not self.is_stale(key):
            return self._entries[key].data
        data = loader()
        self.set(key, data)
        return data

    def invalidate(self, prefix: Key = ()) -> int:
        n = len(prefix)
        hits = [k for k in self._entries if k[:n] == tuple(prefix)]
        for k in hits:
            self._entries[k].stale = True
        if hits:
            logger.debug(f"Invalidated {len(hits)} cache entries under {prefix}")
        return len(hits)

    def remove(self, key: Key) -> None:
        self._entries.pop(key, None)

    def snapshot(self, key: Key) -> Snapshot:
        entry = self._entries.get(key)
        if entry is None:
            return Snapshot(key=key, present=False)
        return Snapshot(key=key, present=True, data=copy.deepcopy(entry.data), stale=entry.stale)

    def restore(self, snapshot: Snapshot) -> None:
        if not snapshot.present:
            self._entries.pop(snapshot.key, None)
            return
        self._entries[snapshot.key] = CacheEntry(snapshot.data, snapshot.stale)


class OptimisticUpdate:
    """
    Snapshot, speculative apply, then commit or revert.

    `apply` gets the cached value and returns the expected post-write value.
    If `write` raises, the entry goes back to the snapshot and the error
    propagates. On success every key under `invalidate` is marked stale.
    """

    def __init__(
        self,
        cache: QueryCache,
        key: Key,
        apply: Callable[[Any], Any],
        invalidate: Key | None = None,
    ):
        self.cache = cache
        self.key = key
        self.apply = apply
        self.invalidate = invalidate if invalidate is not None else key[:1]

    def run(self, write: Callable[[], T]) -> T:
        previous = self.cache.snapshot(self.key)
        self.cache.update(self.key, self.apply)

        try:
            result = write()
        except Exception as e:
            logger.warning(f"Write for {self.key} failed, rolling back: {e}")
            self.cache.restore(previous)
            raise

        self.cache.invalidate(self.invalidate)
        return result
