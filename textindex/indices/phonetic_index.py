"""
Phonetic index: stemmed words indexed under their Double Metaphone codes.

A document id is scored in each code's posting set by how often stems with
that code occur in the document, so searches rank by accumulated term
frequency and tolerate spelling variants that sound alike.
"""

from typing import List, Optional
import logging

from textindex.index_base import IndexBase, IndexMode
from textindex.keys import DocId
from textindex.preprocessing.text_analyzer import TextAnalyzer
from textindex.query import PhoneticQueryProcessor, SearchOptions
from textindex.store.base import OrderedSetStore

logger = logging.getLogger(__name__)


class PhoneticIndex(IndexBase):
    """
    Index using stemming + Double Metaphone.

    Keys written per document:
        <index>:word:<code>   id -> frequency (forward)
        <index>:object:<id>   code -> frequency (reverse, for delete)
    """

    mode = IndexMode.PHONETIC

    def __init__(self, name: str, store: OrderedSetStore,
                 analyzer: Optional[TextAnalyzer] = None):
        super().__init__(name, store, analyzer)
        self.query_processor = PhoneticQueryProcessor(self.store, self.keys, self.analyzer)

    def reverse_key(self, doc_id: DocId) -> str:
        return self.keys.object(doc_id)

    def forward_key(self, member: str) -> str:
        return self.keys.word(member)

    async def set(self, doc_id: DocId, text: str) -> bool:
        """
        Add a document's stems to the phonetic posting sets.

        Frequencies are added to any already stored for the same id, so
        calling set() twice with the same text doubles the scores.
        """
        analysis = self.analyzer.analyze_phonetic(text)
        if not analysis:
            logger.debug(f"[{self.name}] set({doc_id}): no phonetic codes in text")
            return True

        reverse_key = self.reverse_key(doc_id)
        batch = self.store.batch()
        for word, count in analysis.counts.items():
            for code in analysis.codes[word]:
                batch.increment(self.keys.word(code), doc_id, count)
                batch.increment(reverse_key, code, count)
        await batch.execute()

        logger.debug(f"[{self.name}] set({doc_id}): {len(analysis.counts)} stems indexed")
        return True

    async def search(self, text: str, options=None) -> List[str]:
        options = SearchOptions.coerce(options)
        self.check_mode(options.mode)
        return await self.query_processor.process_query(text, options)
