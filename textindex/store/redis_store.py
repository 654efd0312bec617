"""
Redis sorted-set store.

Batches run as MULTI/EXEC pipelines, so every command queued in one batch
applies atomically and results come back in queue order.
"""

from typing import Any, List, Sequence
import logging

import redis.asyncio as redis

from .base import Batch, Member, OrderedSetStore

logger = logging.getLogger(__name__)


class RedisBatch(Batch):
    """Batch backed by a transactional redis pipeline."""

    def __init__(self, client: redis.Redis):
        self._pipe = client.pipeline(transaction=True)
        self._size = 0

    def __len__(self):
        return self._size

    def _queued(self) -> 'RedisBatch':
        self._size += 1
        return self

    def add(self, key: str, member: Member, score: float) -> 'RedisBatch':
        self._pipe.zadd(key, {member: score})
        return self._queued()

    def increment(self, key: str, member: Member, amount: float) -> 'RedisBatch':
        self._pipe.zincrby(key, amount, member)
        return self._queued()

    def range_by_rank(self, key: str, start: int, stop: int, desc: bool = False) -> 'RedisBatch':
        self._pipe.zrange(key, start, stop, desc=desc)
        return self._queued()

    def remove_member(self, key: str, member: Member) -> 'RedisBatch':
        self._pipe.zrem(key, member)
        return self._queued()

    def remove_by_rank_range(self, key: str, start: int, stop: int) -> 'RedisBatch':
        self._pipe.zremrangebyrank(key, start, stop)
        return self._queued()

    def intersect_into(self, dest: str, keys: Sequence[str]) -> 'RedisBatch':
        self._pipe.zinterstore(dest, list(keys))
        return self._queued()

    def union_into(self, dest: str, keys: Sequence[str]) -> 'RedisBatch':
        self._pipe.zunionstore(dest, list(keys))
        return self._queued()

    def delete_key(self, *keys: str) -> 'RedisBatch':
        self._pipe.delete(*keys)
        return self._queued()

    def expire(self, key: str, seconds: int) -> 'RedisBatch':
        self._pipe.expire(key, seconds)
        return self._queued()

    async def execute(self) -> List[Any]:
        if not self._size:
            return []
        logger.debug(f"Executing transaction with {self._size} commands")
        try:
            return await self._pipe.execute()
        finally:
            self._size = 0


class RedisSortedSetStore(OrderedSetStore):
    """OrderedSetStore over a ``redis.asyncio`` client with decoded responses."""

    def __init__(self, client: redis.Redis):
        """
        Initialize store.

        Args:
            client: Async redis client created with decode_responses=True,
                    so members come back as str
        """
        self.client = client

    @classmethod
    def from_url(cls, url: str, **kwargs) -> 'RedisSortedSetStore':
        """Connect to redis at url. Extra kwargs go to redis.Redis.from_url."""
        logger.info(f"Connecting to Redis at {url}")
        return cls(redis.Redis.from_url(url, decode_responses=True, **kwargs))

    def batch(self) -> RedisBatch:
        return RedisBatch(self.client)

    async def add(self, key: str, member: Member, score: float) -> int:
        return await self.client.zadd(key, {member: score})

    async def increment(self, key: str, member: Member, amount: float) -> float:
        return await self.client.zincrby(key, amount, member)

    async def range_by_rank(self, key: str, start: int, stop: int,
                            desc: bool = False) -> List[str]:
        return await self.client.zrange(key, start, stop, desc=desc)

    async def remove_member(self, key: str, member: Member) -> int:
        return await self.client.zrem(key, member)

    async def remove_by_rank_range(self, key: str, start: int, stop: int) -> int:
        return await self.client.zremrangebyrank(key, start, stop)

    async def intersect_into(self, dest: str, keys: Sequence[str]) -> int:
        return await self.client.zinterstore(dest, list(keys))

    async def union_into(self, dest: str, keys: Sequence[str]) -> int:
        return await self.client.zunionstore(dest, list(keys))

    async def delete_key(self, *keys: str) -> int:
        if not keys:
            return 0
        return await self.client.delete(*keys)

    async def exists(self, key: str) -> bool:
        return bool(await self.client.exists(key))

    async def expire(self, key: str, seconds: int) -> bool:
        return bool(await self.client.expire(key, seconds))

    async def scan_keys(self, pattern: str) -> List[str]:
        return [key async for key in self.client.scan_iter(match=pattern)]

    async def close(self) -> None:
        await self.client.aclose()
