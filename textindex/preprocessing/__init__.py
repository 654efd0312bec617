"""Text analysis."""

from .text_analyzer import (
    PhoneticAnalysis,
    TextAnalyzer,
    phonetic_codes,
    prefixes_of,
    stem,
    tokenize_words,
)

__all__ = [
    'PhoneticAnalysis',
    'TextAnalyzer',
    'phonetic_codes',
    'prefixes_of',
    'stem',
    'tokenize_words',
]
