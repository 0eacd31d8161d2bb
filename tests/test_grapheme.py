from __future__ import annotations

import re
import time
from pathlib import Path

import pytest

from searchcobb.grapheme import (
    NON_CONTROL,
    GroupCounter,
    core_extract_pattern,
    core_pattern,
    count_graphemes,
    grapheme_pattern,
    merge_ranges,
    q2pl,
    render_class,
    segment,
    split_graphemes,
)
from searchcobb.ucd import parse_grapheme_break_test

BREAK_TEST_FILE = Path(__file__).parent.parent / "unicode" / "GraphemeBreakTest.txt"

# Representative GraphemeBreakTest.txt lines
BREAK_TEST_SAMPLE = """\
# GraphemeBreakTest-15.1.0.txt
÷ 0020 ÷ 0020 ÷	#  ÷ [0.2] SPACE (Other) ÷ [999.0] SPACE (Other) ÷ [0.3]
÷ 000D × 000A ÷	#  ÷ [0.2] <CARRIAGE RETURN (CR)> (CR) × [3.0] <LINE FEED (LF)> (LF) ÷ [0.3]
÷ 000A ÷ 0308 ÷	#  ÷ [0.2] <LINE FEED (LF)> (LF) ÷ [4.0] COMBINING DIAERESIS (Extend_ExtCccZwj) ÷ [0.3]
÷ 0001 ÷ 0308 ÷	#  ÷ [0.2] <START OF HEADING> (Control) ÷ [4.0] COMBINING DIAERESIS (Extend_ExtCccZwj) ÷ [0.3]
÷ 0020 ÷ 000D ÷	#  ÷ [0.2] SPACE (Other) ÷ [5.0] <CARRIAGE RETURN (CR)> (CR) ÷ [0.3]
÷ 0061 × 0308 ÷ 0062 ÷	#  ÷ [0.2] LATIN SMALL LETTER A (Other) × [9.0] COMBINING DIAERESIS (Extend_ExtCccZwj) ÷ [999.0] LATIN SMALL LETTER B (Other) ÷ [0.3]
÷ 1100 × 1161 × 11A8 ÷	#  ÷ [0.2] HANGUL CHOSEONG KIYEOK (L) × [6.0] HANGUL JUNGSEONG A (V) × [7.0] HANGUL JONGSEONG KIYEOK (T) ÷ [0.3]
÷ AC00 × 11A8 ÷ 1100 ÷	#  ÷ [0.2] HANGUL SYLLABLE GA (LV) × [7.0] HANGUL JONGSEONG KIYEOK (T) ÷ [999.0] HANGUL CHOSEONG KIYEOK (L) ÷ [0.3]
÷ 1F1E6 × 1F1E7 ÷ 1F1E8 ÷	#  ÷ [0.2] REGIONAL INDICATOR SYMBOL LETTER A (RI) × [12.0] REGIONAL INDICATOR SYMBOL LETTER B (RI) ÷ [999.0] REGIONAL INDICATOR SYMBOL LETTER C (RI) ÷ [0.3]
÷ 0061 × 200D ÷ 1F6D1 ÷	#  ÷ [0.2] LATIN SMALL LETTER A (Other) × [9.0] ZERO WIDTH JOINER (ZWJ_ExtCccZwj) ÷ [999.0] OCTAGONAL SIGN (ExtPict) ÷ [0.3]
÷ 1F6D1 × 200D × 1F6D1 ÷	#  ÷ [0.2] OCTAGONAL SIGN (ExtPict) × [9.0] ZERO WIDTH JOINER (ZWJ_ExtCccZwj) × [11.0] OCTAGONAL SIGN (ExtPict) ÷ [0.3]
÷ 0600 × 0020 ÷	#  ÷ [0.2] ARABIC NUMBER SIGN (Prepend) × [9.2] SPACE (Other) ÷ [0.3]
÷ 0061 × 0903 ÷ 0062 ÷	#  ÷ [0.2] LATIN SMALL LETTER A (Other) × [9.1] DEVANAGARI SIGN VISARGA (SpacingMark) ÷ [999.0] LATIN SMALL LETTER B (Other) ÷ [0.3]
÷ 0915 × 094D × 0924 ÷	#  ÷ [0.2] DEVANAGARI LETTER KA (ConjunctLinkingScripts_LinkingConsonant) × [9.0] DEVANAGARI SIGN VIRAMA (Extend_ConjunctLinkingScripts_ConjunctLinker_ExtCccZwj) × [9.3] DEVANAGARI LETTER TA (ConjunctLinkingScripts_LinkingConsonant) ÷ [0.3]
"""


def _break_cases():
    if BREAK_TEST_FILE.exists():
        with open(BREAK_TEST_FILE, encoding="utf-8") as f:
            return parse_grapheme_break_test(f.read().splitlines())
    return parse_grapheme_break_test(BREAK_TEST_SAMPLE.splitlines())


def test_render_class() -> None:
    assert render_class(((0x41, 0x41),)) == "[\\x41]"
    assert render_class(((0x41, 0x42),)) == "[\\x41\\x42]"
    assert render_class(((0x41, 0x5A), (0x3041, 0x3096))) == "[\\x41-\\x5a\\u3041-\\u3096]"
    assert render_class(((0x1F600, 0x1F64F),), invert=True) == "[^\\U0001f600-\\U0001f64f]"


def test_merge_ranges() -> None:
    assert merge_ranges(((1, 3), (10, 12)), ((4, 5), (11, 20))) == ((1, 5), (10, 20))


def test_group_counter_names() -> None:
    counter = GroupCounter()
    assert counter.next_name() == "gc1"
    assert counter.next_name() == "gc2"
    assert GroupCounter("x").next_name() == "x1"


def test_q2pl() -> None:
    assert q2pl("[0-9]", GroupCounter()) == "(?=(?P<gc1>[0-9]*))(?P=gc1)"
    assert q2pl("a", GroupCounter(), "+") == "(?=(?P<gc1>a+))(?P=gc1)"


def test_grapheme_break_conformance() -> None:
    cases = _break_cases()
    assert cases
    failures = [
        (case.line_number, case.segments(), split_graphemes(case.text))
        for case in cases
        if split_graphemes(case.text) != case.segments()
    ]
    assert failures == []


def test_segment_yields_offsets() -> None:
    text = "\uff76\uff9e\U0001f469\u200d\U0001f3db\r\n\uac00"
    segments = list(segment(text))

    assert [s.segment for s in segments] == ["\uff76\uff9e", "\U0001f469\u200d\U0001f3db", "\r\n", "\uac00"]
    assert [s.index for s in segments] == [0, 2, 5, 7]
    assert "".join(s.segment for s in segments) == text


def test_segment_is_lazy() -> None:
    iterator = segment("abc")
    assert next(iterator).segment == "a"


def test_prepend_does_not_swallow_line_feed() -> None:
    assert split_graphemes("  \u0600\n ") == [" ", " ", "\u0600", "\n", " "]


def test_lone_surrogate_is_one_segment() -> None:
    assert split_graphemes("a\ud800b") == ["a", "\ud800", "b"]


def test_count_graphemes() -> None:
    assert count_graphemes("") == 0
    assert count_graphemes("e\u0301\U0001f1ef\U0001f1f5") == 2


def test_unpruned_pattern_compiles() -> None:
    pattern = re.compile(grapheme_pattern())
    assert pattern.fullmatch("\U0001f469\u200d\U0001f3db")
    assert pattern.fullmatch("\r\n")


def test_pruned_pattern_drops_absent_classes() -> None:
    assert grapheme_pattern("abc") == "(?:\\r\\n?|\\n|(?:" + NON_CONTROL + "))"
    assert core_pattern(target="abc") == "(?:" + NON_CONTROL + ")"


def test_pruned_pattern_keeps_present_classes() -> None:
    target = "\uac00\U0001f1ef\U0001f1f5e\u0301"
    pruned = grapheme_pattern(target)
    assert len(pruned) < len(grapheme_pattern())
    pattern = re.compile(pruned)
    for cluster in ("\uac00", "\U0001f1ef\U0001f1f5", "e\u0301"):
        assert pattern.fullmatch(cluster)


def test_conjunct_branch_needs_consonant_and_linker() -> None:
    assert core_pattern(target="\u0915") == core_pattern(target="a")
    assert core_pattern(target="\u0915\u094d") != core_pattern(target="a")


def test_shared_counter_keeps_group_names_unique() -> None:
    counter = GroupCounter()
    source = grapheme_pattern(counter=counter) + "x" + grapheme_pattern(counter=counter)
    assert re.compile(source).fullmatch("e\u0301xa")


def test_core_extract_groups() -> None:
    pattern = re.compile(core_extract_pattern())
    assert pattern.fullmatch("\r\n").group(1) == "\r\n"
    assert pattern.fullmatch("\x01").group(2) == "\x01"
    assert pattern.fullmatch("\u1100\u1161").group(3) == "\u1100\u1161"
    assert pattern.fullmatch("\U0001f1ef\U0001f1f5").group(4) == "\U0001f1ef\U0001f1f5"
    assert pattern.fullmatch("\U0001f469\u200d\U0001f3db").group(5) == "\U0001f469\u200d\U0001f3db"
    assert pattern.fullmatch("\u0915\u094d\u0924").group(6) == "\u0915\u094d\u0924"
    assert pattern.fullmatch("e\u0301").group(7) == "e"


def test_long_mark_run_does_not_backtrack() -> None:
    marks = "\u0301" * 5000
    text = "まゆ" + ("a" + marks) * 3 + "ユ"
    pattern = re.compile("まゆ(?:" + grapheme_pattern() + ")+ユキ")

    start = time.perf_counter()
    assert pattern.search(text) is None
    assert time.perf_counter() - start < 2.0


@pytest.mark.parametrize("text", ["", "a", "e\u0301\u0301", "\U0001f1ef\U0001f1f5\U0001f1fa", "\r\r\n\n"])
def test_segments_concatenate_to_text(text: str) -> None:
    assert "".join(split_graphemes(text)) == text
