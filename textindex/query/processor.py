"""
Query processing: turn query text into posting-set keys, combine them in the
store and read back a ranked window of document ids.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List
import logging

from textindex.index_base import Combinator
from textindex.keys import KeySchema
from textindex.lifecycle import CombinationCache, EphemeralKey, queue_combination
from textindex.preprocessing.text_analyzer import TextAnalyzer
from textindex.store.base import OrderedSetStore

from .options import SearchOptions, Window

logger = logging.getLogger(__name__)


@dataclass
class QueryPlan:
    """What a query will read: analyzed tokens, their keys, and how to combine them."""

    tokens: List[str] = field(default_factory=list)
    keys: List[str] = field(default_factory=list)
    combinator: Combinator = Combinator.INTERSECT
    window: Window = field(default_factory=Window)

    @property
    def is_empty(self) -> bool:
        return not self.keys


class QueryProcessor(ABC):
    """Abstract base class for query processors."""

    def __init__(self, store: OrderedSetStore, keys: KeySchema, analyzer: TextAnalyzer):
        """
        Initialize query processor.

        Args:
            store: Store holding the posting sets
            keys: Key schema of the index being queried
            analyzer: Analyzer used when the documents were indexed
        """
        self.store = store
        self.keys = keys
        self.analyzer = analyzer

    @abstractmethod
    def plan(self, text: str, options: SearchOptions) -> QueryPlan:
        """Analyze query text into a QueryPlan. No store access."""
        pass

    @abstractmethod
    async def execute(self, plan: QueryPlan) -> List[str]:
        """Run a non-empty plan against the store."""
        pass

    async def process_query(self, text: str, options: SearchOptions) -> List[str]:
        """
        Process a query and return a window of ranked document ids.

        Args:
            text: Query text
            options: Normalized search options

        Returns:
            Document ids; empty when the query yields no tokens
        """
        plan = self.plan(text, options)
        if plan.is_empty:
            logger.debug(f"[{self.keys.index}] query {text!r} has no tokens")
            return []

        logger.debug(
            f"[{self.keys.index}] {plan.combinator.name} over {len(plan.keys)} keys, "
            f"window [{plan.window.start}, {plan.window.stop}]"
        )
        return await self.execute(plan)


class PhoneticQueryProcessor(QueryProcessor):
    """
    Ranks documents by summed term frequency over the query's phonetic codes.

    Several codes are combined into a per-search EphemeralKey, so concurrent
    searches on one index never share intermediate results.
    """

    def plan(self, text: str, options: SearchOptions) -> QueryPlan:
        codes = self.analyzer.analyze_phonetic(text).unique_codes
        return QueryPlan(
            tokens=codes,
            keys=self.keys.words(codes),
            combinator=options.combinator,
            window=options.window,
        )

    async def execute(self, plan: QueryPlan) -> List[str]:
        start, stop = plan.window.start, plan.window.stop

        if len(plan.keys) == 1:
            return await self.store.range_by_rank(plan.keys[0], start, stop, desc=True)

        async with EphemeralKey(self.store, self.keys) as tmp:
            batch = self.store.batch()
            queue_combination(batch, plan.combinator, tmp.name, plan.keys)
            batch.range_by_rank(tmp.name, start, stop, desc=True)
            tmp.release_in(batch)
            results = await batch.execute()

        return results[1]


class TypeaheadQueryProcessor(QueryProcessor):
    """
    Matches query words against the prefix posting sets.

    A single word reads its posting set directly. Several words are combined
    through the CombinationCache.
    """

    def __init__(self, store: OrderedSetStore, keys: KeySchema, analyzer: TextAnalyzer,
                 cache: CombinationCache):
        super().__init__(store, keys, analyzer)
        self.cache = cache

    def plan(self, text: str, options: SearchOptions) -> QueryPlan:
        tokens = sorted(self.analyzer.query_tokens(text), key=str.lower)
        return QueryPlan(
            tokens=tokens,
            keys=self.keys.tokens(tokens),
            combinator=options.combinator,
            window=options.window,
        )

    async def execute(self, plan: QueryPlan) -> List[str]:
        start, stop = plan.window.start, plan.window.stop

        if len(plan.tokens) == 1:
            return await self.store.range_by_rank(plan.keys[0], start, stop)

        return await self.cache.fetch(plan.tokens, plan.combinator, start, stop)
