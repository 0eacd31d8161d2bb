"""
Exception types raised by searchcobb.
"""

from typing import Optional


class SearchCobbError(Exception):
    """Base class for all searchcobb errors."""
    pass


class PatternSyntaxError(SearchCobbError):
    """
    Raised when a query cannot be turned into a usable regular expression.

    Covers both transform-time problems (a dangling backslash) and
    compile-time failures of the synthesized pattern, so callers have a
    single error shape to display.

    Attributes:
        pattern: The pattern source that failed, if known
    """

    def __init__(self, message: str, pattern: Optional[str] = None):
        super().__init__(message)
        self.pattern = pattern


class DictionaryFormatError(SearchCobbError):
    """Raised when a binary Migemo dictionary cannot be parsed."""
    pass


class EncodingError(SearchCobbError, ValueError):
    """Raised when a character has no compact hiragana byte."""

    def __init__(self, char: str):
        super().__init__(f"Unable to encode character: U+{ord(char):04X}")
        self.char = char
