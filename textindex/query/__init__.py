"""Query planning and execution."""

from .options import SearchOptions, Window
from .processor import (
    PhoneticQueryProcessor,
    QueryPlan,
    QueryProcessor,
    TypeaheadQueryProcessor,
)

__all__ = [
    'SearchOptions',
    'Window',
    'QueryPlan',
    'QueryProcessor',
    'PhoneticQueryProcessor',
    'TypeaheadQueryProcessor',
]
