"""
Migemo: expand romaji queries into regular expressions.

A query such as "kensaku" expands to an expression matching the romaji
itself, its full-width and half-width forms, the hiragana and katakana
readings (けんさく, ケンサク, ｹﾝｻｸ) and every dictionary word whose reading
starts with those readings (検索, ...).
"""

import logging
import re
from typing import Iterator, List, Optional, Sequence, Union

from searchcobb.compact_dictionary import CompactDictionary
from searchcobb.kana import han2zen, hira2kata, zen2han
from searchcobb.regex_generator import TernaryRegexGenerator
from searchcobb.romaji import RomajiProcessor, TrieRomajiProcessor

logger = logging.getLogger(__name__)

# or, begin group, end group, begin class, end class, newline, escape
DEFAULT_RXOP = ('|', '(?:', ')', '[', ']', '', '\\.[]{}()*+?^$|')

QUERY_PATTERN = re.compile(r'[^A-Z\s]+|[A-Z]{2,}|([A-Z][^A-Z\s]+)|([A-Z]\s*$)')

Processor = Union[RomajiProcessor, TrieRomajiProcessor]


def parse_query(query: str) -> Iterator[str]:
    """
    Split a query into words at whitespace and capitalization.

    Example:
        >>> list(parse_query("kensakuEngine"))
        ['kensaku', 'Engine']
    """
    for match in QUERY_PATTERN.finditer(query):
        yield match.group(0)


class Migemo:
    """
    Migemo query engine.

    Args:
        dictionary: Reading dictionary; None expands kana forms only
        processor: Romaji converter (a TrieRomajiProcessor by default)
        rxop: Regex operators, see DEFAULT_RXOP
    """

    def __init__(
        self,
        dictionary: Optional[CompactDictionary] = None,
        processor: Optional[Processor] = None,
        rxop: Optional[Sequence[str]] = DEFAULT_RXOP,
    ):
        self.dictionary = dictionary
        self.processor = processor if processor is not None else TrieRomajiProcessor()
        self.rxop = tuple(rxop) if rxop is not None else None
        self.escape_character_leader = '\\'
        # Fail fast on a bad operator set
        self._new_generator()

    def _new_generator(self) -> TernaryRegexGenerator:
        if self.rxop is None:
            return TernaryRegexGenerator()
        return TernaryRegexGenerator.from_rxop(self.rxop)

    def _dictionary_words(self, key: str) -> Iterator[str]:
        if self.dictionary is not None:
            yield from self.dictionary.predictive_search(key)

    def candidates(self, word: str) -> List[str]:
        """Every string one word expands to, in insertion order."""
        result: List[str] = []
        seen = set()

        def add(candidate: str) -> None:
            if candidate and candidate not in seen:
                seen.add(candidate)
                result.append(candidate)

        add(word)
        lower = word.lower()
        for found in self._dictionary_words(lower):
            add(found)
        add(han2zen(word))
        add(zen2han(word))

        hiragana_result = self.processor.romaji_to_hiragana_predictively(lower)
        for hira in hiragana_result.candidates():
            add(hira)
            for found in self._dictionary_words(hira):
                add(found)
            kata = hira2kata(hira)
            add(kata)
            add(zen2han(kata))
        return result

    def query_a_word(self, word: str) -> str:
        """Expand one word into a regular expression."""
        generator = self._new_generator()
        for candidate in self.candidates(word):
            generator.add(candidate)
        generator.set_escape_character_leader(self.escape_character_leader)
        return generator.generate()

    def query(self, text: str) -> str:
        """
        Expand a whole query into a regular expression.

        Args:
            text: Romaji query, possibly several words

        Returns:
            Regex source; empty for an empty query
        """
        if not text:
            return ''
        return ''.join(self.query_a_word(word) for word in parse_query(text))


# ============================================================================
# Default Engine
# ============================================================================

_MIGEMO: Optional[Migemo] = None


def get_migemo() -> Migemo:
    """
    Get the shared engine backed by the packaged dictionary.

    Without a built dictionary the engine still expands kana forms. That
    engine is kept until reset: call dictionary.reload_dictionary() after
    building the dictionary to pick it up.
    """
    global _MIGEMO

    if _MIGEMO is None:
        from searchcobb.dictionary import load_dictionary

        try:
            dictionary = load_dictionary()
        except FileNotFoundError as e:
            logger.warning(f"Migemo dictionary unavailable, expanding kana only: {e}")
            dictionary = None
        _MIGEMO = Migemo(dictionary)

    return _MIGEMO


def reset_migemo() -> None:
    """Drop the shared engine so the next call picks up a new dictionary."""
    global _MIGEMO
    _MIGEMO = None
