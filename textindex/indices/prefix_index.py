"""
Prefix (typeahead) index: every left-anchored prefix of every word.
"""

from typing import List, Optional
import logging

from textindex.index_base import IndexBase, IndexMode
from textindex.keys import DocId
from textindex.lifecycle import CombinationCache
from textindex.preprocessing.text_analyzer import TextAnalyzer
from textindex.query import SearchOptions, TypeaheadQueryProcessor
from textindex.store.base import OrderedSetStore

logger = logging.getLogger(__name__)


class PrefixIndex(IndexBase):
    """
    Index for incremental (autocomplete) matching.

    Keys written per document:
        <index>:token:<prefix>   id -> 0 (forward)
        <index>:doc:<id>         prefix -> 0 (reverse, for delete)

    Multi-word searches are cached; see CombinationCache.
    """

    mode = IndexMode.PREFIX

    def __init__(self, name: str, store: OrderedSetStore,
                 analyzer: Optional[TextAnalyzer] = None, cache_ttl: int = 0):
        """
        Initialize prefix index.

        Args:
            name: Index name
            store: Ordered-set store
            analyzer: Text analyzer (default: TextAnalyzer())
            cache_ttl: Seconds a cached multi-word result lives, 0 for no expiry
        """
        super().__init__(name, store, analyzer)
        self.cache = CombinationCache(self.store, self.keys, ttl=cache_ttl)
        self.query_processor = TypeaheadQueryProcessor(
            self.store, self.keys, self.analyzer, self.cache
        )

    def reverse_key(self, doc_id: DocId) -> str:
        return self.keys.document_tokens(doc_id)

    def forward_key(self, member: str) -> str:
        return self.keys.token(member)

    async def set(self, doc_id: DocId, text: str) -> bool:
        tokens = self.analyzer.analyze_prefix(text)
        if not tokens:
            logger.debug(f"[{self.name}] set({doc_id}): no words in text")
            return True

        reverse_key = self.reverse_key(doc_id)
        batch = self.store.batch()
        for token in tokens:
            batch.add(self.keys.token(token), doc_id, 0)
            batch.add(reverse_key, token, 0)
        await batch.execute()

        logger.debug(f"[{self.name}] set({doc_id}): {len(tokens)} prefixes indexed")
        return True

    async def delete(self, doc_id: DocId) -> bool:
        """Remove the document, then drop cached results that may still list it."""
        await super().delete(doc_id)
        await self.cache.invalidate()
        return True

    async def search(self, text: str, options=None) -> List[str]:
        options = SearchOptions.coerce(options)
        self.check_mode(options.mode)
        return await self.query_processor.process_query(text, options)

    async def invalidate_cache(self) -> int:
        return await self.cache.invalidate()
