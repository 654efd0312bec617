"""
Unit tests for text analysis.
Run with: pytest tests/test_text_analyzer.py -v
"""

from textindex.preprocessing import (
    TextAnalyzer,
    phonetic_codes,
    prefixes_of,
    stem,
    tokenize_words,
)


class TestTokenizeWords:
    """Test word splitting."""

    def test_splits_on_non_word_characters(self):
        """Test punctuation and whitespace separate words."""
        assert tokenize_words("what's up") == ['what', 's', 'up']
        assert tokenize_words("foo-bar,  baz!") == ['foo', 'bar', 'baz']

    def test_keeps_digits_and_underscores(self):
        """Test word characters include digits and underscores."""
        assert tokenize_words("snake_case v2") == ['snake_case', 'v2']

    def test_empty_input(self):
        """Test empty and missing text yield no words."""
        assert tokenize_words("") == []
        assert tokenize_words(None) == []
        assert tokenize_words("  ... ") == []


class TestStem:
    """Test Porter stemming."""

    def test_stems_inflections(self):
        """Test inflected forms reduce to their root."""
        assert stem(['running', 'cats']) == ['run', 'cat']

    def test_preserves_order_and_length(self):
        """Test one stem per word, in order."""
        words = ['jumping', 'foxes', 'quickly', 'the']
        result = stem(words)
        assert len(result) == len(words)
        assert result[0] == 'jump'


class TestPhoneticCodes:
    """Test Double Metaphone encoding."""

    def test_one_or_two_codes(self):
        """Test every word yields at most two non-empty, distinct codes."""
        for word in ['smith', 'foo', 'bar', 'hello', 'schmidt']:
            codes = phonetic_codes(word)
            assert 1 <= len(codes) <= 2
            assert all(codes)
            assert len(set(codes)) == len(codes)

    def test_case_insensitive(self):
        """Test case does not change the codes."""
        assert phonetic_codes('Smith') == phonetic_codes('SMITH') == phonetic_codes('smith')

    def test_similar_sounds_share_codes(self):
        """Test spelling variants that sound alike share a code."""
        assert set(phonetic_codes('smith')) & set(phonetic_codes('smyth'))


class TestPrefixesOf:
    """Test prefix expansion."""

    def test_all_prefixes_shortest_first(self):
        """Test every left-anchored prefix is produced."""
        assert prefixes_of('cat') == ['c', 'ca', 'cat']

    def test_single_character(self):
        assert prefixes_of('a') == ['a']

    def test_empty_word(self):
        assert prefixes_of('') == []


class TestTextAnalyzer:
    """Test the combined analyzer."""

    def setup_method(self):
        self.analyzer = TextAnalyzer()

    def test_phonetic_counts_stems(self):
        """Test frequencies are counted per stem, not per surface word."""
        analysis = self.analyzer.analyze_phonetic("cats cat running")
        assert analysis.words == ['cat', 'cat', 'run']
        assert analysis.counts == {'cat': 2, 'run': 1}
        assert set(analysis.codes) == {'cat', 'run'}

    def test_phonetic_unique_codes(self):
        """Test query codes are de-duplicated across words."""
        analysis = self.analyzer.analyze_phonetic("cat cat")
        assert analysis.unique_codes == phonetic_codes('cat')

    def test_phonetic_empty(self):
        """Test empty text gives a falsy analysis."""
        analysis = self.analyzer.analyze_phonetic("")
        assert not analysis
        assert analysis.unique_codes == []

    def test_prefix_tokens_repeat_across_words(self):
        """Test prefixes shared between words are not merged."""
        assert self.analyzer.analyze_prefix("Foo fob") == ['f', 'fo', 'foo', 'f', 'fo', 'fob']

    def test_prefix_preserves_case_when_configured(self):
        analyzer = TextAnalyzer(lowercase=False)
        assert analyzer.analyze_prefix("Ab") == ['A', 'Ab']

    def test_query_tokens_deduplicated(self):
        """Test repeated query words keep their first position."""
        assert self.analyzer.query_tokens("bar Foo bar foo") == ['bar', 'foo']

    def test_from_config(self):
        analyzer = TextAnalyzer.from_config({'preprocessing': {'lowercase': False}})
        assert analyzer.lowercase is False
        assert TextAnalyzer.from_config({}).lowercase is True
