"""
Search options: combinator, result window and (optionally) the expected mode.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from textindex.index_base import Combinator, IndexMode


@dataclass
class Window:
    """Inclusive rank window; stop=-1 reaches the last result."""

    start: int = 0
    stop: int = -1

    def __post_init__(self):
        self.start = int(self.start)
        self.stop = int(self.stop)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'Window':
        """Accept {'start', 'stop'} or the {'from', 'to'} spelling."""
        if isinstance(data, cls):
            return data
        if not data:
            return cls()
        start = data.get('start', data.get('from'))
        stop = data.get('stop', data.get('to'))
        return cls(
            start=0 if start is None else start,
            stop=-1 if stop is None else stop,
        )


@dataclass
class SearchOptions:
    """
    Options for IndexBase.search().

    Attributes:
        combinator: How per-token posting sets combine ('and' by default)
        window: Rank window of results to return
        mode: If set, the index mode the caller expects; a mismatch raises
              UnsupportedOperationError before the store is touched
    """

    combinator: Combinator = Combinator.INTERSECT
    window: Window = field(default_factory=Window)
    mode: Optional[IndexMode] = None

    def __post_init__(self):
        self.combinator = Combinator.parse(self.combinator)
        if isinstance(self.window, Mapping):
            self.window = Window.from_dict(self.window)
        if self.mode is not None:
            self.mode = IndexMode.parse(self.mode)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'SearchOptions':
        """
        Build options from a plain mapping.

        Both spellings are accepted:
            {'combinator': 'or', 'window': {'start': 0, 'stop': 9}}
            {'type': 'union', 'between': {'from': 0, 'to': 9}}
        """
        if not data:
            return cls()
        return cls(
            combinator=data.get('combinator', data.get('type')),
            window=Window.from_dict(data.get('window', data.get('between'))),
            mode=data.get('mode'),
        )

    @classmethod
    def coerce(cls, options) -> 'SearchOptions':
        """Normalize None, a mapping or a SearchOptions into SearchOptions."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise TypeError(f"Unsupported search options type: {type(options).__name__}")
