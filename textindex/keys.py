"""
Key naming for everything the index stores.

Key shapes (``<index>`` is the configured index name):

    <index>:word:<code>        phonetic posting set, doc id -> term frequency
    <index>:object:<id>        phonetic reverse index, code -> term frequency
    <index>:token:<prefix>     prefix posting set, doc id -> 0
    <index>:doc:<id>           prefix reverse index, prefix -> 0
    <index>:tmp:<hex>          per-search combination result (phonetic)
    <index>:cache:<t1>&<t2>    cached AND combination (typeahead)
    <index>:cache:<t1>|<t2>    cached OR combination (typeahead)
    <index>:cache-registry     names of every cache key written
"""

import re
import uuid
from typing import Iterable, List, Union

DocId = Union[str, int]

SEPARATOR = ':'

_GLOB_SPECIAL = re.compile(r'([\\*?\[\]])')


def escape_glob(value: str) -> str:
    """Escape characters that Redis SCAN MATCH treats as glob syntax."""
    return _GLOB_SPECIAL.sub(r'\\\1', value)


class KeySchema:
    """Builds store keys for a single named index."""

    def __init__(self, index: str):
        if not index:
            raise ValueError("Index name must be a non-empty string")
        # Index names must not nest inside one another's key space
        if SEPARATOR in index:
            raise ValueError(f"Index name {index!r} must not contain {SEPARATOR!r}")
        self.index = index

    def __repr__(self):
        return f"KeySchema(index={self.index!r})"

    def word(self, code: str) -> str:
        return f"{self.index}:word:{code}"

    def words(self, codes: Iterable[str]) -> List[str]:
        return [self.word(code) for code in codes]

    def object(self, doc_id: DocId) -> str:
        return f"{self.index}:object:{doc_id}"

    def token(self, prefix: str) -> str:
        return f"{self.index}:token:{prefix}"

    def tokens(self, prefixes: Iterable[str]) -> List[str]:
        return [self.token(prefix) for prefix in prefixes]

    def document_tokens(self, doc_id: DocId) -> str:
        return f"{self.index}:doc:{doc_id}"

    def ephemeral(self) -> str:
        """Return a fresh, never-before-used combination key."""
        return f"{self.index}:tmp:{uuid.uuid4().hex}"

    def cache(self, tokens: Iterable[str], combinator) -> str:
        """
        Content-addressed key for a typeahead combination.

        Args:
            tokens: Query tokens; sorted case-insensitively here so that
                    word order in the query does not change the key
            combinator: Combinator whose symbol joins the tokens

        Returns:
            Cache key name
        """
        ordered = sorted(tokens, key=str.lower)
        return f"{self.index}:cache:{combinator.symbol.join(ordered)}"

    def cache_registry(self) -> str:
        return f"{self.index}:cache-registry"

    def pattern(self) -> str:
        """SCAN pattern matching every key of this index."""
        return f"{escape_glob(self.index)}:*"
