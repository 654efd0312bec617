"""Exceptions raised by the text index."""


class TextIndexError(Exception):
    """Base class for text index errors."""


class UnsupportedOperationError(TextIndexError):
    """Raised when an operation does not apply to the configured index mode."""


class ConfigurationError(TextIndexError):
    """Raised when an index cannot be built from the given configuration."""
