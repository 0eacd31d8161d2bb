from __future__ import annotations

import re

import pytest

from searchcobb.constants import MODE_LITERAL, MODE_MIGEMO
from searchcobb.errors import PatternSyntaxError
from searchcobb.search import (
    FoundRange,
    SearchText,
    TextFragment,
    exec_loop,
    find_position,
    fragment_offset,
    get_pattern,
)


class EmptyMigemo:
    def query(self, text: str) -> str:
        return ""


@pytest.fixture()
def search_text(unifier) -> SearchText:
    fragments = ["Hello", "  w\u00f6rld", "", TextFragment("\u30ac\u30a4\u30c9", new_block=True)]
    return SearchText.compile(fragments, unifier=unifier)


# ============================================================================
# get_pattern
# ============================================================================

def test_get_pattern_literal(unifier) -> None:
    pattern = get_pattern("a.b", mode=MODE_LITERAL, unifier=unifier)
    assert pattern.search("A.B")
    assert not pattern.search("axb")


def test_get_pattern_strict_is_case_sensitive() -> None:
    pattern = get_pattern("Caf\u00e9", strict=True)
    assert pattern.search("Caf\u00e9")
    assert not pattern.search("caf\u00e9")
    assert not pattern.search("Cafe")


def test_get_pattern_migemo(migemo, unifier) -> None:
    pattern = get_pattern("kensaku", mode=MODE_MIGEMO, migemo=migemo, unifier=unifier)
    for text in ("\u691c\u7d22", "\uff79\uff9d\uff7b\uff78", "\uff2b\uff25\uff2e\uff33\uff21\uff2b\uff35", "\u3051\u3093\u3055\u304f"):
        assert pattern.search(unifier.unify_string(text)), text


def test_get_pattern_migemo_empty_expansion(unifier) -> None:
    with pytest.raises(PatternSyntaxError, match="Migemo"):
        get_pattern("kensaku", mode=MODE_MIGEMO, migemo=EmptyMigemo(), unifier=unifier)


def test_get_pattern_invalid_regex(unifier) -> None:
    with pytest.raises(PatternSyntaxError):
        get_pattern("(abc", unifier=unifier)


# ============================================================================
# exec_loop
# ============================================================================

def test_exec_loop_truncates_long_matches() -> None:
    matches = list(exec_loop(re.compile("a+"), "aaaaab", limit=2))
    assert [(m.text, m.start, m.end) for m in matches] == [("aa", 0, 2), ("aa", 2, 4), ("a", 4, 5)]


def test_exec_loop_without_limit() -> None:
    matches = list(exec_loop(re.compile("a+"), "aaaaab", limit=None))
    assert [(m.start, m.end) for m in matches] == [(0, 5)]


def test_exec_loop_counts_graphemes() -> None:
    matches = list(exec_loop(re.compile(".+", re.DOTALL), "e\u0301x", limit=1))
    assert [m.graphemes for m in matches] == [["e\u0301"], ["x"]]
    assert [(m.start, m.end) for m in matches] == [(0, 2), (2, 3)]


def test_exec_loop_stops_at_empty_match() -> None:
    assert list(exec_loop(re.compile("x*"), "abc")) == []


# ============================================================================
# Positions
# ============================================================================

def test_find_position() -> None:
    positions = [(0, 0), (6, 1), (12, 3)]
    assert find_position(0, positions) == 0
    assert find_position(5, positions) == 0
    assert find_position(6, positions) == 1
    assert find_position(6, positions, exclusive=True) == 0
    assert find_position(100, positions) == 2
    assert find_position(-1, positions) == -1
    assert find_position(3, []) == -1


def test_fragment_offset(unifier) -> None:
    assert fragment_offset("abc", 2, unified=False) == 2
    assert fragment_offset("  \u30ac\u30a4\u30c9", 2, unified=True, unifier=unifier) == 3
    # Offset 1 is inside the folded first cluster: a start snaps back, an end moves on
    assert fragment_offset("\u30ac\u30a4\u30c9", 1, unified=True, unifier=unifier) == 0
    assert fragment_offset("\u30ac\u30a4\u30c9", 1, unified=True, is_end=True, unifier=unifier) == 1


# ============================================================================
# SearchText
# ============================================================================

def test_compile_joins_fragments(search_text: SearchText) -> None:
    assert search_text.lines == ["Hello world", "\u30ab\u3099\u30a4\u30c8\u3099"]
    assert search_text.text == "Hello world\n\u30ab\u3099\u30a4\u30c8\u3099"
    assert search_text.positions == [(0, 0), (6, 1), (12, 3)]
    assert search_text.unified


def test_compile_strict() -> None:
    search_text = SearchText.compile(["a", TextFragment("b", separated=False), "c"], strict=True)
    assert search_text.text == "ab c"
    assert not search_text.unified


def test_found_range_maps_into_fragments(search_text: SearchText, unifier) -> None:
    pattern = get_pattern("world", mode=MODE_LITERAL, unifier=unifier)
    assert list(search_text.search(pattern)) == [FoundRange("world", 6, 1, 2, 1, 7)]


def test_found_range_across_fragments(search_text: SearchText, unifier) -> None:
    pattern = get_pattern("lo wo", mode=MODE_LITERAL, unifier=unifier)
    found = list(search_text.search(pattern))
    assert [(f.start_fragment, f.start_offset, f.end_fragment, f.end_offset) for f in found] == [(0, 3, 1, 4)]


def test_found_range_folded_text(search_text: SearchText, unifier) -> None:
    pattern = get_pattern("\u30c9", mode=MODE_LITERAL, unifier=unifier)
    assert list(search_text.search(pattern)) == [FoundRange("\u30c8\u3099", 15, 3, 2, 3, 3)]


def test_found_range_snaps_to_cluster(search_text: SearchText) -> None:
    found = list(search_text.search(re.compile("\u3099")))
    assert (found[0].start_fragment, found[0].start_offset, found[0].end_offset) == (3, 0, 1)


def test_found_range_rejects_separators(search_text: SearchText) -> None:
    match = re.compile(" ").search(search_text.text)
    assert search_text.found_range(match) is None
    assert list(search_text.search(re.compile("\\s+"))) == []
