"""
Text analysis for the phonetic and prefix indexing strategies.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from metaphone import doublemetaphone
from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer


# Maximal runs of word characters; everything else separates words
_WORD_TOKENIZER = RegexpTokenizer(r'\w+')


def tokenize_words(text: Optional[str]) -> List[str]:
    """
    Split text into words.

    Args:
        text: Raw text (None and '' give no words)

    Returns:
        Words in order of appearance
    """
    if not text:
        return []
    return _WORD_TOKENIZER.tokenize(str(text))


def stem(words: List[str], stemmer: Optional[PorterStemmer] = None) -> List[str]:
    """Porter-stem each word, keeping order and length."""
    stemmer = stemmer or PorterStemmer()
    return [stemmer.stem(word) for word in words]


def phonetic_codes(word: str) -> List[str]:
    """
    Double Metaphone codes for a word.

    Args:
        word: Single word, any case

    Returns:
        Primary code, then the alternate code when it differs. Empty for
        words with no pronounceable letters.
    """
    codes = []
    for code in doublemetaphone(word):
        if code and code not in codes:
            codes.append(code)
    return codes


def prefixes_of(word: str) -> List[str]:
    """All left-anchored prefixes of a word, shortest first."""
    return [word[:end] for end in range(1, len(word) + 1)]


@dataclass
class PhoneticAnalysis:
    """Result of analyzing text for the phonetic index."""

    words: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    codes: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def unique_codes(self) -> List[str]:
        """Every code produced by the text, first occurrence order."""
        seen = []
        for word in self.words:
            for code in self.codes[word]:
                if code not in seen:
                    seen.append(code)
        return seen

    def __bool__(self):
        return any(self.codes.values())


class TextAnalyzer:
    """Turns raw text into index tokens."""

    def __init__(self, lowercase: bool = True):
        """
        Initialize analyzer.

        Args:
            lowercase: Fold words to lowercase before prefix expansion and
                       in typeahead queries. Phonetic analysis is
                       case-insensitive either way.
        """
        self.lowercase = lowercase
        self.stemmer = PorterStemmer()

    @classmethod
    def from_config(cls, config) -> 'TextAnalyzer':
        """Build an analyzer from the ``preprocessing`` config section."""
        preprocessing = config.get('preprocessing') or {}
        return cls(lowercase=bool(preprocessing.get('lowercase', True)))

    def __repr__(self):
        return f"TextAnalyzer(lowercase={self.lowercase})"

    def _words(self, text: Optional[str]) -> List[str]:
        words = tokenize_words(text)
        if self.lowercase:
            words = [word.lower() for word in words]
        return words

    def analyze_phonetic(self, text: Optional[str]) -> PhoneticAnalysis:
        """
        Stem the text and derive phonetic codes for every stem.

        Args:
            text: Document or query text

        Returns:
            PhoneticAnalysis with stems, per-stem frequency and per-stem codes
        """
        words = stem(tokenize_words(text), self.stemmer)
        counts = dict(Counter(words))
        codes = {word: phonetic_codes(word) for word in counts}
        return PhoneticAnalysis(words=words, counts=counts, codes=codes)

    def analyze_prefix(self, text: Optional[str]) -> List[str]:
        """
        Every prefix of every word, word by word.

        Prefixes shared between words are repeated, not merged.
        """
        tokens = []
        for word in self._words(text):
            tokens.extend(prefixes_of(word))
        return tokens

    def query_tokens(self, text: Optional[str]) -> List[str]:
        """Typeahead query words with repeats removed, first position kept."""
        return list(dict.fromkeys(self._words(text)))
