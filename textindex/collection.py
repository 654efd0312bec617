"""
Public entry point: a named collection of searchable documents.
"""

from typing import List, Optional
import logging

from textindex.exceptions import ConfigurationError
from textindex.index_base import IndexBase, IndexMode
from textindex.indices import PhoneticIndex, PrefixIndex
from textindex.keys import DocId, KeySchema
from textindex.preprocessing.text_analyzer import TextAnalyzer
from textindex.store.base import OrderedSetStore
from textindex.store.redis_store import RedisSortedSetStore

logger = logging.getLogger(__name__)


def create_index(config, store: Optional[OrderedSetStore] = None) -> IndexBase:
    """
    Build the index described by a config.

    Args:
        config: Hydra/OmegaConf config with ``index``, ``redis``,
                ``preprocessing`` and ``cache`` sections
        store: Store to use; when omitted one is connected from ``redis.url``

    Returns:
        PhoneticIndex or PrefixIndex

    Raises:
        ConfigurationError: Unknown index mode, missing or invalid index name
    """
    index_config = config.index
    name = index_config.get('name')
    if not name:
        raise ConfigurationError("index.name must be set")
    try:
        KeySchema(str(name))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    try:
        mode = IndexMode.parse(index_config.get('mode', IndexMode.PHONETIC.value))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    if store is None:
        redis_config = config.redis
        store = RedisSortedSetStore.from_url(
            redis_config.url,
            socket_timeout=redis_config.get('socket_timeout'),
        )

    analyzer = TextAnalyzer.from_config(config)

    if mode is IndexMode.PREFIX:
        cache_ttl = (config.get('cache') or {}).get('ttl', 0)
        index = PrefixIndex(name, store, analyzer, cache_ttl=cache_ttl)
    else:
        index = PhoneticIndex(name, store, analyzer)

    logger.info(f"Initialized {index!r} with {analyzer!r}")
    return index


class SearchCollection:
    """Forwards set/delete/search to the configured index."""

    def __init__(self, index: IndexBase):
        self.index = index

    @classmethod
    def from_config(cls, config, store: Optional[OrderedSetStore] = None) -> 'SearchCollection':
        return cls(create_index(config, store))

    def __repr__(self):
        return f"SearchCollection({self.index!r})"

    async def set(self, doc_id: DocId, text: str) -> bool:
        return await self.index.set(doc_id, text)

    async def delete(self, doc_id: DocId) -> bool:
        return await self.index.delete(doc_id)

    async def search(self, text: str, options=None) -> List[str]:
        return await self.index.search(text, options)

    async def close(self) -> None:
        await self.index.store.close()
