from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional
import logging

from textindex.exceptions import UnsupportedOperationError
from textindex.keys import DocId, KeySchema
from textindex.preprocessing.text_analyzer import TextAnalyzer
from textindex.store.base import OrderedSetStore

logger = logging.getLogger(__name__)


# Indexing strategies
class IndexMode(Enum):
    PHONETIC = 'phonetic'
    PREFIX = 'prefix'

    @classmethod
    def parse(cls, mode) -> 'IndexMode':
        """Accept an IndexMode or its name in any case ('prefix', 'PREFIX')."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown index mode {mode!r}; expected one of {[m.value for m in cls]}"
            ) from None


# Set-combination operators, valued by the symbol used in cache keys
class Combinator(Enum):
    INTERSECT = '&'
    UNION = '|'

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name) -> 'Combinator':
        """
        Resolve a combinator from its query-option spelling.

        Args:
            name: 'and'/'intersect', 'or'/'union', a Combinator, or None

        Returns:
            Combinator (INTERSECT when name is None)
        """
        if name is None:
            return cls.INTERSECT
        if isinstance(name, cls):
            return name
        try:
            return _COMBINATOR_ALIASES[str(name).strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown combinator {name!r}; expected one of {sorted(_COMBINATOR_ALIASES)}"
            ) from None


_COMBINATOR_ALIASES = {
    'and': Combinator.INTERSECT,
    'intersect': Combinator.INTERSECT,
    'or': Combinator.UNION,
    'union': Combinator.UNION,
}


class IndexBase(ABC):
    """
    Base index class with the operations every indexing strategy provides.

    Each document is kept in two places: forward posting sets keyed by token,
    and a reverse index keyed by document id that names those posting sets.
    The reverse index is what makes delete() possible.
    """

    mode: IndexMode

    def __init__(self, name: str, store: OrderedSetStore,
                 analyzer: Optional[TextAnalyzer] = None):
        """
        Initialize index.

        Sample usage:
            idx = PhoneticIndex('users', RedisSortedSetStore(client))
            print(idx)

        Args:
            name: Index name, used as the namespace of every key
            store: Ordered-set store holding the posting sets
            analyzer: Text analyzer (default: TextAnalyzer())
        """
        self.name = name
        self.store = store
        self.keys = KeySchema(name)
        self.analyzer = analyzer or TextAnalyzer()

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r}, mode={self.mode.value})"

    @abstractmethod
    async def set(self, doc_id: DocId, text: str) -> bool:
        """
        Index a document, or add to the entries of an already indexed one.

        Args:
            doc_id: Document identifier
            text: Document text

        Returns:
            True once the mutations are applied
        """

    @abstractmethod
    async def search(self, text: str, options=None) -> List[str]:
        """
        Run a boolean query.

        Args:
            text: Query text
            options: SearchOptions, a mapping accepted by
                     SearchOptions.from_dict, or None for defaults

        Returns:
            Ranked document ids within the requested window
        """

    @abstractmethod
    def reverse_key(self, doc_id: DocId) -> str:
        """Key of the reverse index for a document."""

    @abstractmethod
    def forward_key(self, member: str) -> str:
        """Key of the posting set named by a reverse-index member."""

    async def delete(self, doc_id: DocId) -> bool:
        """
        Remove a document from every posting set that holds it.

        Args:
            doc_id: Document identifier

        Returns:
            True (also when the document was never indexed)
        """
        reverse_key = self.reverse_key(doc_id)
        members = await self.store.range_by_rank(reverse_key, 0, -1, desc=True)
        if not members:
            logger.debug(f"[{self.name}] delete({doc_id}): nothing indexed")
            return True

        batch = self.store.batch()
        batch.delete_key(reverse_key)
        for member in members:
            batch.remove_member(self.forward_key(member), doc_id)
        await batch.execute()

        logger.debug(f"[{self.name}] delete({doc_id}): removed from {len(members)} posting sets")
        return True

    async def terms(self, doc_id: DocId) -> List[str]:
        """
        List the tokens a document is indexed under.

        Args:
            doc_id: Document identifier

        Returns:
            Reverse-index members, highest score first
        """
        return await self.store.range_by_rank(self.reverse_key(doc_id), 0, -1, desc=True)

    async def invalidate_cache(self) -> int:
        """Drop cached combinations. Returns the number of keys removed."""
        return 0

    async def drop(self) -> int:
        """
        Delete every key belonging to this index.

        Returns:
            Number of keys removed
        """
        keys = await self.store.scan_keys(self.keys.pattern())
        if keys:
            await self.store.delete_key(*keys)
        logger.info(f"Dropped index '{self.name}' ({len(keys)} keys)")
        return len(keys)

    def check_mode(self, requested) -> None:
        """
        Reject a search aimed at a different indexing strategy.

        Raises:
            UnsupportedOperationError: requested mode differs from self.mode
        """
        if requested is None:
            return
        requested = IndexMode.parse(requested)
        if requested is not self.mode:
            raise UnsupportedOperationError(
                f"Index '{self.name}' is a {self.mode.value} index; "
                f"{requested.value} search is not supported"
            )
