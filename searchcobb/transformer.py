"""
Pattern transformer.

Rewrites a user query into a regular expression that runs against unified
text (see ``unifier``). The query is split into tokens with one pass of
TOKEN_PATTERN:

- escaped pairs (``\\d``) pass through unchanged; a backslash with
  nothing after it is an error
- bracketed classes have their members folded; members that fold to more
  than one code point move out of the class into an alternation
- bare metacharacters, unpaired brackets included, pass through (literal
  mode escapes them)
- plain runs get full-width metacharacters normalized, whitespace runs
  widened to ``\\s+`` and their text folded

Example:
    >>> transform_literal("a+b.c?  def{2} [D-H]")
    'a\\\\+b\\\\.c\\\\?\\\\s+def\\\\{2\\\\}\\\\s+\\\\[D-H\\\\]'
"""

import logging
import re
from typing import Callable, List, Optional

from searchcobb.constants import MODE_LITERAL, MODE_MIGEMO, MODE_REGEX
from searchcobb.errors import PatternSyntaxError
from searchcobb.grapheme import GroupCounter, grapheme_pattern, segment
from searchcobb.unifier import Unifier, get_unifier

logger = logging.getLogger(__name__)

META_CHARS = frozenset('.*[]^${}()?+|')

# escaped character | lone backslash | metacharacter | character class |
# unpaired bracket | anything else
TOKEN_PATTERN = re.compile(
    r'\\.|\\|[{}().*+?^$|]|\[(?:\\.|[^\]\\])+\]|[\[\]]|[^\[\]{}().*+?^$|\\]+',
    re.DOTALL,
)

FULLWIDTH_META = {
    '［': '[',
    '］': ']',
    '｛': '{',
    '｝': '}',
    '（': '(',
    '）': ')',
    '．': '.',
    '＊': '*',
    '＋': '+',
    '？': '?',
    '＾': '^',
    '＄': '$',
    '｜': '|',
    '＼': '\\',
}
FULLWIDTH_META_PATTERN = re.compile('[' + re.escape(''.join(FULLWIDTH_META)) + ']')

FULLWIDTH_CLASS_META = {
    '［': '[',
    '］': ']',
    '－': '-',
    '＼': '\\',
}
FULLWIDTH_CLASS_META_PATTERN = re.compile('[' + re.escape(''.join(FULLWIDTH_CLASS_META)) + ']')

# Members that change meaning inside [...]
CLASS_META_CHARS = frozenset('[]\\-')

WHITESPACE_PATTERN = re.compile(r'\s+')


# ============================================================================
# Token Rewriting
# ============================================================================

def _escape_folded(text: str) -> str:
    """Escape metacharacters a fold introduced (﹖ -> ?)."""
    return ''.join('\\' + c if c in META_CHARS or c == '\\' else c for c in text)


def unify_inside_class(inner: str, unifier: Unifier) -> str:
    """
    Fold the members of a character class.

    Args:
        inner: Class contents without the brackets

    Returns:
        ``[...]`` when every member folds to one code point, otherwise an
        alternation of the class and the longer members. A negated class
        keeps its longer members in a negative lookahead instead.
    """
    inner = FULLWIDTH_CLASS_META_PATTERN.sub(lambda m: '\\' + FULLWIDTH_CLASS_META[m.group(0)], inner)
    negated = len(inner) > 1 and inner.startswith('^')

    chars: List[str] = ['^'] if negated else []
    graphemes: List[str] = []
    segments = [seg.segment for seg in segment(inner[1:] if negated else inner)]
    i = 0
    while i < len(segments):
        seg = segments[i]
        if seg == '\\' and i + 1 < len(segments):
            chars.append(seg + segments[i + 1])
            i += 2
            continue
        i += 1

        folded = unifier.unify_grapheme(seg)
        if folded == seg and len(seg) == 1:
            chars.append(seg)
        elif len(folded) == 1:
            if folded in CLASS_META_CHARS or (folded == '^' and not chars):
                folded = '\\' + folded
            chars.append(folded)
        else:
            graphemes.append(_escape_folded(folded))

    if negated:
        members = ''.join(chars)
        cls = f'[{members}]' if members != '^' else r'[\s\S]'
        if graphemes:
            return f"(?:(?!{'|'.join(graphemes)}){cls})"
        return cls
    if chars and graphemes:
        return f"(?:[{''.join(chars)}]|{'|'.join(graphemes)})"
    if chars:
        return f"[{''.join(chars)}]"
    if graphemes:
        return f"(?:{'|'.join(graphemes)})"
    return ''


def unify_outside_class(run: str, unifier: Unifier) -> str:
    """Normalize full-width metacharacters and whitespace, then fold."""
    run = FULLWIDTH_META_PATTERN.sub(lambda m: '\\' + FULLWIDTH_META[m.group(0)], run)
    run = WHITESPACE_PATTERN.sub(r'\\s+', run)

    result = []
    for seg in segment(run):
        folded = unifier.unify_grapheme(seg.segment)
        result.append(folded if folded == seg.segment else _escape_folded(folded))
    return ''.join(result)


def _check_backslash(token: str, source: str) -> None:
    if token == '\\':
        raise PatternSyntaxError("A backslash must not be end", source)


# ============================================================================
# Transforms
# ============================================================================

def transform_regex(source: str, target: Optional[str] = None, strict: bool = False,
                    extend_dot: bool = False, unifier: Optional[Unifier] = None) -> str:
    """
    Transform a regular expression query.

    Args:
        source: The query, in Python regex syntax
        target: Sample text; prunes the grapheme pattern used by extend_dot
        strict: Match exact characters, no folding
        extend_dot: Make ``.`` match one grapheme cluster. Without a
            target the full, unpruned grapheme pattern is used.
        unifier: Fold context (the default unifier if omitted)

    Returns:
        Regex source for unified text

    Raises:
        PatternSyntaxError: If the query ends with a lone backslash. Other
            syntax errors, such as an unterminated ``[``, surface when the
            result is compiled.
    """
    if strict:
        inside: Callable[[str], str] = lambda a: f'[{a}]'
        outside: Callable[[str], str] = lambda a: a
    else:
        unifier = unifier or get_unifier()
        inside = lambda a: unify_inside_class(a, unifier)
        outside = lambda a: unify_outside_class(a, unifier)

    counter = GroupCounter()
    result = []
    for m in TOKEN_PATTERN.finditer(source):
        token = m.group(0)
        _check_backslash(token, source)
        if token.startswith('\\'):
            result.append(token)
        elif token.startswith('[') and len(token) > 1:
            result.append(inside(token[1:-1]))
        elif token in META_CHARS:
            if token == '.' and extend_dot:
                result.append(grapheme_pattern(target, counter))
            else:
                result.append(token)
        else:
            result.append(outside(token))

    transformed = ''.join(result)
    logger.debug(f"transform_regex: {source!r} -> {transformed!r}")
    return transformed


def transform_migemo(source: str, target: Optional[str] = None, strict: bool = False,
                     extend_dot: bool = False, unifier: Optional[Unifier] = None) -> str:
    """Transform a Migemo expansion; same rules as transform_regex()."""
    return transform_regex(source, target, strict, extend_dot, unifier)


def transform_literal(source: str, target: Optional[str] = None, strict: bool = False,
                      unifier: Optional[Unifier] = None) -> str:
    """
    Transform a literal query: every metacharacter matches itself.

    Brackets, paired or not, are escaped and the contents of a pair are
    transformed literally too.

    Raises:
        PatternSyntaxError: If the query ends with a lone backslash
    """
    if not strict:
        unifier = unifier or get_unifier()

    result = []
    for m in TOKEN_PATTERN.finditer(source):
        token = m.group(0)
        _check_backslash(token, source)
        if token.startswith('\\'):
            result.append(token)
        elif token.startswith('[') and len(token) > 1:
            inner = transform_literal(token[1:-1], target, strict, unifier)
            result.append(f'\\[{inner}\\]')
        elif token in META_CHARS:
            result.append('\\' + token)
        elif strict:
            result.append(token)
        else:
            result.append(unify_outside_class(token, unifier))

    transformed = ''.join(result)
    logger.debug(f"transform_literal: {source!r} -> {transformed!r}")
    return transformed


def transform(source: str, target: Optional[str] = None, mode: str = MODE_REGEX,
              strict: bool = False, extend_dot: bool = False,
              unifier: Optional[Unifier] = None) -> str:
    """
    Transform a query according to its search mode.

    Raises:
        ValueError: If ``mode`` is unknown
        PatternSyntaxError: If the query cannot be transformed
    """
    if mode == MODE_REGEX:
        return transform_regex(source, target, strict, extend_dot, unifier)
    if mode == MODE_MIGEMO:
        return transform_migemo(source, target, strict, extend_dot, unifier)
    if mode == MODE_LITERAL:
        return transform_literal(source, target, strict, unifier)
    raise ValueError(f"transform: unknown mode: {mode}")


def compile_pattern(source: str, strict: bool = False) -> 're.Pattern[str]':
    """
    Compile a transformed pattern with the search flags.

    Multiline and dot-all always, case-insensitive unless strict.

    Raises:
        PatternSyntaxError: If the engine rejects the pattern
    """
    flags = re.MULTILINE | re.DOTALL
    if not strict:
        flags |= re.IGNORECASE
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise PatternSyntaxError(str(e), source) from e
