"""
Extended grapheme cluster patterns (UAX #29).

The segmenter is a regular expression built from the range tables in
``grapheme_data``. One match of ``grapheme_pattern()`` is exactly one
extended grapheme cluster:

    CRLF | Control | Precore* Core Postcore*

where Core is a Hangul syllable, a regional indicator pair, an emoji ZWJ
chain, an Indic conjunct cluster, or any other non-control code point.

Open-ended quantifiers over Postcore are emitted as a captured lookahead
followed by a backreference, ``(?=(?P<g>X*))(?P=g)``. Python has no
possessive groups before 3.11 and an atomic match is what keeps a run of
thousands of combining marks from backtracking exponentially.

Example:
    >>> [s.segment for s in segment("e\\u0301\\r\\n🇯🇵")]
    ['é', '\\r\\n', '🇯🇵']
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, List, Optional, Sequence, Tuple

from searchcobb import grapheme_data as data

Range = Tuple[int, int]


# ============================================================================
# Character Classes
# ============================================================================

def _escape_code_point(cp: int) -> str:
    if cp < 0x100:
        return f'\\x{cp:02x}'
    if cp < 0x10000:
        return f'\\u{cp:04x}'
    return f'\\U{cp:08x}'


def merge_ranges(*tables: Sequence[Range]) -> Tuple[Range, ...]:
    """Union sorted range tables into one sorted, non-overlapping table."""
    ranges = sorted(r for table in tables for r in table)
    merged: List[List[int]] = []
    for first, last in ranges:
        if merged and first <= merged[-1][1] + 1:
            merged[-1][1] = max(merged[-1][1], last)
        else:
            merged.append([first, last])
    return tuple((a, b) for a, b in merged)


def render_class(ranges: Sequence[Range], invert: bool = False) -> str:
    """
    Render a range table as a regex character class.

    A range of one code point renders as that code point, a range of two as
    both code points and anything longer as ``first-last``.
    """
    parts = []
    for first, last in ranges:
        parts.append(_escape_code_point(first))
        if last == first + 1:
            parts.append(_escape_code_point(last))
        elif last > first + 1:
            parts.append('-')
            parts.append(_escape_code_point(last))
    return ('[^' if invert else '[') + ''.join(parts) + ']'


CRLF = '\\r\\n?|\\n'

EXTEND = render_class(data.EXTEND)
ZWJ = render_class(data.ZWJ)
SPACING_MARK = render_class(data.SPACING_MARK)
CONTROL = render_class(data.CONTROL)
PRECORE = render_class(data.PRECORE)
POSTCORE = render_class(merge_ranges(data.EXTEND, data.ZWJ, data.SPACING_MARK))

HANGUL_L = render_class(data.HANGUL_L)
HANGUL_V = render_class(data.HANGUL_V)
HANGUL_T = render_class(data.HANGUL_T)
HANGUL_LV = render_class(data.HANGUL_LV)
HANGUL_LVT = render_class(data.HANGUL_LVT)
REGIONAL_INDICATOR = render_class(data.REGIONAL_INDICATOR)
EXTENDED_PICTOGRAPHIC = render_class(data.EXTENDED_PICTOGRAPHIC)
INCB_CONSONANT = render_class(data.INCB_CONSONANT)
INCB_LINKER = render_class(data.INCB_LINKER)
INCB_EXTEND_LINKER = render_class(merge_ranges(data.INCB_EXTEND, data.INCB_LINKER))
NON_CONTROL = render_class(
    merge_ranges(data.CONTROL, ((0x0A, 0x0A), (0x0D, 0x0D))), invert=True)

HANGUL_SYLLABLE = (
    f'{HANGUL_L}*(?:{HANGUL_V}+|{HANGUL_LV}{HANGUL_V}*|{HANGUL_LVT}){HANGUL_T}*'
    f'|{HANGUL_L}+|{HANGUL_T}+'
)
RI_SEQUENCE = f'{REGIONAL_INDICATOR}{{2}}'
XPICTO_SEQUENCE = f'{EXTENDED_PICTOGRAPHIC}(?:{EXTEND}*{ZWJ}{EXTENDED_PICTOGRAPHIC})*'
CONJUNCT_CLUSTER = (
    f'{INCB_CONSONANT}'
    f'(?:{INCB_EXTEND_LINKER}*{INCB_LINKER}{INCB_EXTEND_LINKER}*{INCB_CONSONANT})+'
)


@lru_cache(maxsize=None)
def _class_regex(source: str) -> 're.Pattern[str]':
    return re.compile(source)


def _occurs(class_source: str, target: Optional[str]) -> bool:
    """True without a target, else whether any target code point is in the class."""
    if target is None:
        return True
    return _class_regex(class_source).search(target) is not None


# ============================================================================
# Pattern Generation
# ============================================================================

class GroupCounter:
    """
    Names the capture groups of one pattern.

    Python rejects a pattern that defines a group name twice, so every
    pattern assembled from several grapheme fragments must draw all of its
    names from a single counter.
    """

    def __init__(self, prefix: str = 'gc'):
        self.prefix = prefix
        self.count = 0

    def next_name(self) -> str:
        self.count += 1
        return f'{self.prefix}{self.count}'


def q2pl(source: str, counter: GroupCounter, quantifier: str = '*') -> str:
    """
    Repeat ``source`` without giving the engine anything to backtrack into.

    Example:
        >>> q2pl('[0-9]', GroupCounter())
        '(?=(?P<gc1>[0-9]*))(?P=gc1)'
    """
    name = counter.next_name()
    return f'(?=(?P<{name}>{source}{quantifier}))(?P={name})'


def core_pattern(group: bool = False, target: Optional[str] = None) -> str:
    """
    Alternation of the cluster core branches.

    Args:
        group: Wrap every branch in a capture group
        target: Omit branches whose classes do not occur in this text. The
            result is then only valid for ``target`` and its substrings.

    Returns:
        Regex source, ``(?:...)``
    """
    branches = []
    if any(_occurs(c, target) for c in (HANGUL_L, HANGUL_V, HANGUL_T, HANGUL_LV, HANGUL_LVT)):
        branches.append(HANGUL_SYLLABLE)
    if _occurs(REGIONAL_INDICATOR, target):
        branches.append(RI_SEQUENCE)
    if _occurs(EXTENDED_PICTOGRAPHIC, target):
        branches.append(XPICTO_SEQUENCE)
    if _occurs(INCB_CONSONANT, target) and _occurs(INCB_LINKER, target):
        branches.append(CONJUNCT_CLUSTER)
    branches.append(NON_CONTROL)

    if group:
        return '(?:' + '|'.join(f'({b})' for b in branches) + ')'
    return '(?:' + '|'.join(branches) + ')'


def grapheme_pattern(target: Optional[str] = None,
                     counter: Optional[GroupCounter] = None) -> str:
    """
    Regex source matching exactly one extended grapheme cluster.

    Args:
        target: Opt-in pruning sample, see core_pattern()
        counter: Group name source shared with the rest of the enclosing
            pattern; a fresh one is used when omitted

    Returns:
        Regex source
    """
    if counter is None:
        counter = GroupCounter()

    if target is None:
        return (
            f'(?:{CRLF}'
            f'|{CONTROL}'
            f'|{PRECORE}*{core_pattern()}{q2pl(POSTCORE, counter)})'
        )

    parts = [f'(?:{CRLF}']
    if _occurs(CONTROL, target):
        parts.append(f'|{CONTROL}')
    parts.append('|')
    if _occurs(PRECORE, target):
        parts.append(f'{PRECORE}*')
    parts.append(core_pattern(target=target))
    if _occurs(POSTCORE, target):
        parts.append(q2pl(POSTCORE, counter))
    parts.append(')')
    return ''.join(parts)


def core_extract_pattern() -> str:
    """
    Grapheme pattern with numbered captures for the matched branch.

    Groups: 1 CRLF, 2 Control, 3 Hangul syllable, 4 regional indicator
    pair, 5 emoji ZWJ chain, 6 conjunct cluster, 7 other non-control.
    Only meant for single clusters, so Postcore is a plain repetition.
    """
    return (
        f'(?:({CRLF})'
        f'|({CONTROL})'
        f'|{PRECORE}*{core_pattern(group=True)}{POSTCORE}*)'
    )


# ============================================================================
# Segmentation
# ============================================================================

@dataclass(slots=True)
class Segment:
    """One grapheme cluster and its offset in the source text."""
    segment: str
    index: int


@lru_cache(maxsize=1)
def get_grapheme_regex() -> 're.Pattern[str]':
    """The compiled unpruned grapheme pattern."""
    return re.compile(grapheme_pattern())


def segment(text: str) -> Iterator[Segment]:
    """
    Split text into extended grapheme clusters, lazily.

    Concatenating the yielded segments always gives back ``text``.
    """
    pattern = get_grapheme_regex()
    pos = 0
    length = len(text)
    while pos < length:
        m = pattern.match(text, pos)
        end = m.end() if m is not None and m.end() > pos else pos + 1
        yield Segment(text[pos:end], pos)
        pos = end


def split_graphemes(text: str) -> List[str]:
    """List of the grapheme clusters of ``text``."""
    return [s.segment for s in segment(text)]


def count_graphemes(text: str) -> int:
    return sum(1 for _ in segment(text))
