"""
Search helpers for callers that hold text as fragments.

A document is flattened into one searchable string (unified unless the
search is strict) together with a position table recording where each
fragment starts. Matches found in that string are mapped back to offsets
inside the original fragments, grapheme by grapheme, since folding changes
lengths (ガ unifies to two code points, é to one).
"""

import logging
import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from searchcobb.constants import MATCH_MAX, MODE_MIGEMO, MODE_REGEX
from searchcobb.errors import PatternSyntaxError
from searchcobb.grapheme import segment, split_graphemes
from searchcobb.transformer import compile_pattern, transform
from searchcobb.unifier import Unifier, get_unifier

logger = logging.getLogger(__name__)

# (offset in compiled text, fragment index)
Position = Tuple[int, int]

LEADING_SPACE = re.compile(r'^\s+')


# ============================================================================
# Patterns
# ============================================================================

def get_pattern(text: str, target: Optional[str] = None, mode: str = MODE_REGEX,
                strict: bool = False, extend_dot: bool = False,
                migemo=None, unifier: Optional[Unifier] = None) -> 're.Pattern[str]':
    """
    Turn a query into a compiled pattern.

    Args:
        text: The query
        target: Sample text for grapheme pattern pruning
        mode: One of MODES
        strict: Exact matching, no folding, case sensitive
        extend_dot: Make ``.`` match one grapheme cluster
        migemo: Migemo engine for migemo mode (the shared engine if omitted)
        unifier: Fold context (the default unifier if omitted)

    Returns:
        The compiled pattern

    Raises:
        PatternSyntaxError: If the query cannot be expanded, transformed or
            compiled
    """
    if mode == MODE_MIGEMO and text:
        if migemo is None:
            from searchcobb.migemo import get_migemo
            migemo = get_migemo()
        expanded = migemo.query(text)
        if not expanded:
            raise PatternSyntaxError("Failed to convert Migemo expression", text)
        text = expanded

    source = transform(text, target, mode, strict, extend_dot, unifier)
    return compile_pattern(source, strict)


@dataclass(slots=True)
class LoopMatch:
    """One match of exec_loop(), possibly truncated."""
    text: str
    start: int
    end: int
    graphemes: List[str]


def exec_loop(pattern: 're.Pattern[str]', text: str, limit: Optional[int] = MATCH_MAX) -> Iterator[LoopMatch]:
    """
    Yield successive matches of ``pattern`` in ``text``.

    Stops at the first empty match. A match longer than ``limit`` grapheme
    clusters is cut to ``limit`` clusters and scanning resumes right after
    the cut.
    """
    pos = 0
    while pos <= len(text):
        m = pattern.search(text, pos)
        if m is None or m.end() == m.start():
            break

        matched = m.group(0)
        graphemes = split_graphemes(matched)
        if limit is not None and len(graphemes) > limit:
            graphemes = graphemes[:limit]
            matched = ''.join(graphemes)

        end = m.start() + len(matched)
        yield LoopMatch(matched, m.start(), end, graphemes)
        pos = end


# ============================================================================
# Position Table
# ============================================================================

def find_position(index: int, positions: Sequence[Position], exclusive: bool = False) -> int:
    """
    Find the fragment holding a compiled text offset.

    Args:
        index: Offset in the compiled text
        positions: Position table, sorted by offset
        exclusive: Treat an offset equal to a fragment start as belonging to
            the previous fragment (used for match ends)

    Returns:
        Index into ``positions``, or -1 when no fragment holds the offset
    """
    offsets = [p[0] for p in positions]
    if exclusive:
        i = bisect_left(offsets, index) - 1
    else:
        i = bisect_right(offsets, index) - 1
    return i if i >= 0 else -1


def split_leading_space(text: str) -> Tuple[str, str]:
    m = LEADING_SPACE.match(text)
    if m:
        return m.group(0), text[m.end():]
    return '', text


def fragment_offset(fragment: str, compiled_offset: int, unified: bool, is_end: bool = False,
                    unifier: Optional[Unifier] = None) -> int:
    """
    Map an offset in compiled text back into the original fragment.

    Args:
        fragment: The original fragment text, leading whitespace included
        compiled_offset: Offset relative to the fragment's compiled start
        unified: Whether the compiled text was unified
        is_end: The offset is a match end; a start inside a folded cluster
            snaps back to the cluster's beginning, an end snaps forward

    Returns:
        Offset into ``fragment``
    """
    leading, rest = split_leading_space(fragment)
    if unified and unifier is None:
        unifier = get_unifier()

    offset = 0
    before: Optional[int] = None
    walked = 0
    for seg in segment(rest):
        if walked >= compiled_offset:
            break
        folded = unifier.unify_grapheme(seg.segment) if unified else seg.segment
        before = offset
        offset += len(seg.segment)
        walked += len(folded)

    if not is_end and walked > compiled_offset and before is not None:
        offset = before
    return offset + len(leading)


# ============================================================================
# Searchable Text
# ============================================================================

@dataclass(slots=True)
class TextFragment:
    """
    One piece of document text.

    Attributes:
        text: The raw text
        separated: Visually separated from the previous fragment (a space
            is inserted between two words that would otherwise touch)
        new_block: Starts a new line of the compiled text
    """
    text: str
    separated: bool = True
    new_block: bool = False


@dataclass(slots=True)
class FoundRange:
    """A match located in the original fragments."""
    text: str
    index: int
    start_fragment: int
    start_offset: int
    end_fragment: int
    end_offset: int


@dataclass
class SearchText:
    """
    Searchable text compiled from fragments.

    Attributes:
        text: Lines joined with newlines
        lines: The compiled lines
        positions: (compiled offset, fragment index) per kept fragment
        fragments: The original fragments
        unified: Whether fragment text was unified
    """
    text: str
    lines: List[str]
    positions: List[Position]
    fragments: List[TextFragment]
    unified: bool
    unifier: Optional[Unifier] = field(default=None, repr=False)

    @classmethod
    def compile(cls, fragments: Iterable[Union[str, TextFragment]], strict: bool = False,
                unifier: Optional[Unifier] = None) -> 'SearchText':
        """
        Join fragments into one searchable string.

        Leading whitespace of every fragment is dropped and empty fragments
        are skipped; they keep their index in the position table.
        """
        if not strict and unifier is None:
            unifier = get_unifier()

        items = [f if isinstance(f, TextFragment) else TextFragment(f) for f in fragments]
        lines: List[str] = []
        positions: List[Position] = []
        current: Optional[str] = None
        length = 0

        for index, fragment in enumerate(items):
            if fragment.new_block and current is not None:
                lines.append(current)
                current = None

            value = split_leading_space(fragment.text)[1]
            if not value:
                continue
            if not strict:
                value = unifier.unify_string(value)

            if current is None:
                if positions:
                    length += 1
                positions.append((length, index))
                current = value
            else:
                if fragment.separated and not current[-1].isspace() and not value[0].isspace():
                    current += ' '
                    length += 1
                positions.append((length, index))
                current += value
            length += len(value)

        if current is not None:
            lines.append(current)

        logger.debug(f"Compiled {len(positions)} of {len(items)} fragments into {len(lines)} lines")
        return cls('\n'.join(lines), lines, positions, items, not strict, unifier)

    def _locate(self, index: int, is_end: bool) -> Tuple[int, int]:
        position_index = find_position(index, self.positions, exclusive=is_end)
        if position_index < 0:
            raise IndexError(f"offset {index} is not in the position table")
        start, fragment_index = self.positions[position_index]
        offset = fragment_offset(
            self.fragments[fragment_index].text, index - start, self.unified, is_end, self.unifier)
        return fragment_index, offset

    def found_range(self, match: Union[LoopMatch, 're.Match[str]']) -> Optional[FoundRange]:
        """
        Locate a match of ``self.text`` in the original fragments.

        Returns:
            The range, or None if the match cannot be mapped onto fragment
            text (it starts past a fragment's end or ends at its start)
        """
        if isinstance(match, LoopMatch):
            text, start, end = match.text, match.start, match.end
        else:
            text, start, end = match.group(0), match.start(), match.end()

        start_fragment, start_offset = self._locate(start, False)
        if start_offset >= len(self.fragments[start_fragment].text):
            logger.debug(f"Invalid start range for {text!r}")
            return None
        end_fragment, end_offset = self._locate(end, True)
        if end_offset == 0:
            logger.debug(f"Invalid end range for {text!r}")
            return None
        return FoundRange(text, start, start_fragment, start_offset, end_fragment, end_offset)

    def search(self, pattern: 're.Pattern[str]', limit: Optional[int] = MATCH_MAX) -> Iterator[FoundRange]:
        """Yield the mapped ranges of every match, skipping unmappable ones."""
        for match in exec_loop(pattern, self.text, limit):
            found = self.found_range(match)
            if found is not None:
                yield found
