"""Index implementations."""

from .phonetic_index import PhoneticIndex
from .prefix_index import PrefixIndex

__all__ = ['PhoneticIndex', 'PrefixIndex']
