"""
Lifetime of combination keys.

Phonetic searches write their intersection/union into an EphemeralKey: a
unique name per search that is deleted on the way out, whatever happens.
Typeahead searches write into a CombinationCache key named after the query,
which later identical queries read back until it expires or is invalidated.
"""

from typing import List, Sequence
import logging

from textindex.index_base import Combinator
from textindex.keys import KeySchema
from textindex.store.base import Batch, OrderedSetStore

logger = logging.getLogger(__name__)


def queue_combination(batch: Batch, combinator: Combinator, dest: str,
                      sources: Sequence[str]) -> Batch:
    """Queue the intersect/union of sources into dest."""
    if combinator is Combinator.UNION:
        return batch.union_into(dest, sources)
    return batch.intersect_into(dest, sources)


class EphemeralKey:
    """
    Async context manager owning a single-use combination key.

    Usage:
        async with EphemeralKey(store, keys) as tmp:
            batch = store.batch()
            batch.intersect_into(tmp.name, sources)
            batch.range_by_rank(tmp.name, 0, -1, desc=True)
            tmp.release_in(batch)
            results = await batch.execute()

    Queuing the delete with release_in() saves a round trip. If the block
    raises, or release_in() was never called, the key is deleted on exit.
    """

    def __init__(self, store: OrderedSetStore, keys: KeySchema):
        self.store = store
        self.name = keys.ephemeral()
        self._release_queued = False

    def __repr__(self):
        return f"EphemeralKey({self.name!r})"

    def release_in(self, batch: Batch) -> None:
        """Queue deletion of the key as part of batch."""
        batch.delete_key(self.name)
        self._release_queued = True

    async def __aenter__(self) -> 'EphemeralKey':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            if not self._release_queued:
                await self.store.delete_key(self.name)
            return False

        # Keep the original error; a failed cleanup is only logged
        try:
            await self.store.delete_key(self.name)
        except Exception as cleanup_error:
            logger.warning(f"Could not delete {self.name} after failed search: {cleanup_error}")
        return False


class CombinationCache:
    """
    Typeahead combination results cached under content-addressed keys.

    A cached key is reused as-is until it expires (ttl seconds; 0 keeps it
    until invalidated) or invalidate() runs. Writes to the index do not
    refresh it.
    """

    def __init__(self, store: OrderedSetStore, keys: KeySchema, ttl: int = 0):
        """
        Initialize cache.

        Args:
            store: Ordered-set store
            keys: Key schema of the owning index
            ttl: Seconds a cached combination lives, 0 for no expiry
        """
        self.store = store
        self.keys = keys
        self.ttl = max(int(ttl or 0), 0)

    async def fetch(self, tokens: Sequence[str], combinator: Combinator,
                    start: int = 0, stop: int = -1) -> List[str]:
        """
        Read a window of the combination of the tokens' posting sets.

        Args:
            tokens: Query tokens (two or more)
            combinator: INTERSECT or UNION
            start: First rank
            stop: Last rank, inclusive

        Returns:
            Document ids in ascending rank order
        """
        cache_key = self.keys.cache(tokens, combinator)

        # An empty window is a hit only while the key still exists
        cached = await self.store.range_by_rank(cache_key, start, stop)
        if cached or await self.store.exists(cache_key):
            logger.debug(f"Cache hit: {cache_key}")
            return cached

        logger.debug(f"Cache miss: {cache_key}")
        registry = self.keys.cache_registry()
        batch = self.store.batch()
        queue_combination(batch, combinator, cache_key, self.keys.tokens(tokens))
        batch.add(registry, cache_key, 0)
        if self.ttl:
            batch.expire(cache_key, self.ttl)
            batch.expire(registry, self.ttl)
        batch.range_by_rank(cache_key, start, stop)
        results = await batch.execute()
        return results[-1]

    async def invalidate(self) -> int:
        """
        Delete every cached combination of this index.

        Returns:
            Number of cache keys that still existed and were deleted
        """
        registry = self.keys.cache_registry()
        names = await self.store.range_by_rank(registry, 0, -1)
        if not names:
            return 0

        batch = self.store.batch()
        batch.delete_key(*names)
        batch.delete_key(registry)
        removed = (await batch.execute())[0]
        logger.info(f"Invalidated {removed} cached combinations for index '{self.keys.index}'")
        return removed
