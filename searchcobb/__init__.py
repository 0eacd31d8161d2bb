"""
searchcobb: Unicode-aware text search patterns

Turns literal, regex and Migemo (romaji) queries into regular expressions
that match regardless of normalization form, combining marks, width
variants or old Han forms. Text to search is unified with the same rules.

Basic Usage:
    import searchcobb

    text = searchcobb.unify_string("oüter paragraph #1")
    pattern = searchcobb.get_pattern("outer", mode="literal")
    print(pattern.search(text))

    # Romaji query
    pattern = searchcobb.get_pattern("kensaku", mode="migemo")
"""

import time
from typing import Iterator, Optional, Tuple

from searchcobb.constants import MODE_LITERAL, MODE_MIGEMO, MODE_REGEX, MODES
from searchcobb.errors import (
    DictionaryFormatError,
    EncodingError,
    PatternSyntaxError,
    SearchCobbError,
)

__version__ = "0.1.0"


def _check_text(name: str, value) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, not {type(value).__name__}")


def _check_target(target) -> None:
    if target is not None:
        _check_text("target", target)


def _check_mode(mode) -> None:
    if not mode:
        raise ValueError("mode must be non-empty")
    if mode not in MODES:
        raise ValueError(f"unknown mode: {mode!r} (expected one of {', '.join(MODES)})")


# =============================================================================
# Graphemes
# =============================================================================

def segment(text: str) -> Iterator["Segment"]:
    """
    Split text into extended grapheme clusters.

    Args:
        text: Any text

    Returns:
        Lazy iterator of Segment(segment, index)

    Example:
        >>> [s.segment for s in searchcobb.segment("ｶﾞ👩‍🏛")]
        ['ｶﾞ', '👩‍🏛']
    """
    _check_text("text", text)
    from searchcobb.grapheme import segment as _segment
    return _segment(text)


def grapheme_pattern(target: Optional[str] = None) -> str:
    """
    Regex source matching one extended grapheme cluster.

    Args:
        target: Optional sample; branches for classes absent from it are
            left out, so the result is only valid on that text

    Returns:
        Regex source
    """
    _check_target(target)
    from searchcobb.grapheme import grapheme_pattern as _grapheme_pattern
    return _grapheme_pattern(target)


def core_pattern(group: bool = False, target: Optional[str] = None) -> str:
    """Regex source of the grapheme core branches, optionally captured."""
    _check_target(target)
    from searchcobb.grapheme import core_pattern as _core_pattern
    return _core_pattern(group, target)


# =============================================================================
# Unification
# =============================================================================

def unify_grapheme(g: str) -> str:
    """
    Fold one grapheme cluster.

    Example:
        >>> searchcobb.unify_grapheme("é")
        'e'
    """
    _check_text("g", g)
    from searchcobb.unifier import unify_grapheme as _unify_grapheme
    return _unify_grapheme(g)


def unify_string(text: str) -> str:
    """
    Fold every grapheme cluster of a string.

    Example:
        >>> searchcobb.unify_string("國際ガイド")
        '国際カ\\u3099イト\\u3099'
    """
    _check_text("text", text)
    from searchcobb.unifier import unify_string as _unify_string
    return _unify_string(text)


# =============================================================================
# Patterns
# =============================================================================

def transform(text: str, target: Optional[str] = None, mode: str = MODE_REGEX,
              strict: bool = False, extend_dot: bool = False) -> str:
    """
    Transform a query into regex source for unified text.

    Args:
        text: The query
        target: Sample text for grapheme pattern pruning
        mode: "regex", "migemo" or "literal"
        strict: Exact matching, no folding
        extend_dot: Make ``.`` match one grapheme cluster

    Returns:
        Regex source

    Raises:
        PatternSyntaxError: If the query ends with a lone backslash
        ValueError: If mode is unknown
    """
    _check_text("text", text)
    _check_target(target)
    _check_mode(mode)
    from searchcobb.transformer import transform as _transform
    return _transform(text, target, mode, strict, extend_dot)


def transform_literal(text: str, target: Optional[str] = None, strict: bool = False) -> str:
    """Transform a literal query; see transform()."""
    return transform(text, target, MODE_LITERAL, strict)


def transform_regex(text: str, target: Optional[str] = None, strict: bool = False,
                    extend_dot: bool = False) -> str:
    """Transform a regex query; see transform()."""
    return transform(text, target, MODE_REGEX, strict, extend_dot)


def transform_migemo(text: str, target: Optional[str] = None, strict: bool = False,
                     extend_dot: bool = False) -> str:
    """Transform an already expanded Migemo query; see transform()."""
    return transform(text, target, MODE_MIGEMO, strict, extend_dot)


def get_pattern(text: str, target: Optional[str] = None, mode: str = MODE_REGEX,
                strict: bool = False, extend_dot: bool = False):
    """
    Expand, transform and compile a query.

    Migemo queries are expanded with the shared Migemo engine first.

    Returns:
        Compiled ``re.Pattern``

    Raises:
        PatternSyntaxError: If the query cannot be turned into a pattern
        ValueError: If mode is unknown
    """
    _check_text("text", text)
    _check_target(target)
    _check_mode(mode)
    from searchcobb.search import get_pattern as _get_pattern
    return _get_pattern(text, target, mode, strict, extend_dot)


def migemo_query(query: str) -> str:
    """
    Expand a romaji query into regex source.

    A trailing consonant expands to every kana it can start, so "ky"
    matches きゃ, きゅ, きょ and their katakana forms.
    """
    _check_text("query", query)
    from searchcobb.migemo import get_migemo
    return get_migemo().query(query)


# =============================================================================
# Setup
# =============================================================================

def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Pre-load the fold table, grapheme pattern and Migemo dictionary.

    Args:
        verbose: If True, print timing information

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    from searchcobb.grapheme import get_grapheme_regex
    from searchcobb.migemo import get_migemo
    from searchcobb.unifier import load_fold_table

    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading searchcobb tables...")

    t0 = time.perf_counter()
    get_grapheme_regex()
    timings['grapheme'] = (time.perf_counter() - t0) * 1000

    t0 = time.perf_counter()
    unifier = load_fold_table()
    timings['fold_table'] = (time.perf_counter() - t0) * 1000

    t0 = time.perf_counter()
    migemo = get_migemo()
    timings['migemo'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Grapheme regex: {timings['grapheme']:>7.1f}ms")
        print(f"  Fold table:     {timings['fold_table']:>7.1f}ms ({len(unifier.table):,} entries)")
        words = "with dictionary" if migemo.dictionary is not None else "kana only"
        print(f"  Migemo:         {timings['migemo']:>7.1f}ms ({words})")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Graphemes
    "segment",
    "grapheme_pattern",
    "core_pattern",
    # Unification
    "unify_grapheme",
    "unify_string",
    # Patterns
    "transform",
    "transform_literal",
    "transform_regex",
    "transform_migemo",
    "get_pattern",
    "migemo_query",
    # Setup
    "warm_up",
    "get_version",
    # Modes
    "MODE_REGEX",
    "MODE_MIGEMO",
    "MODE_LITERAL",
    # Exceptions
    "SearchCobbError",
    "PatternSyntaxError",
    "DictionaryFormatError",
    "EncodingError",
    # Version
    "__version__",
]
