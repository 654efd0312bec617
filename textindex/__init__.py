"""Phonetic and typeahead text search over Redis sorted sets."""

from .collection import SearchCollection, create_index
from .exceptions import ConfigurationError, TextIndexError, UnsupportedOperationError
from .index_base import Combinator, IndexBase, IndexMode
from .indices import PhoneticIndex, PrefixIndex
from .query import SearchOptions, Window
from .store import OrderedSetStore, RedisSortedSetStore

__version__ = "0.1.0"

__all__ = [
    'SearchCollection',
    'create_index',
    'ConfigurationError',
    'TextIndexError',
    'UnsupportedOperationError',
    'Combinator',
    'IndexBase',
    'IndexMode',
    'PhoneticIndex',
    'PrefixIndex',
    'SearchOptions',
    'Window',
    'OrderedSetStore',
    'RedisSortedSetStore',
]
