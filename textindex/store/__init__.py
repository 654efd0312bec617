"""Ordered-set stores."""

from .base import Batch, OrderedSetStore
from .redis_store import RedisBatch, RedisSortedSetStore

__all__ = ['Batch', 'OrderedSetStore', 'RedisBatch', 'RedisSortedSetStore']
