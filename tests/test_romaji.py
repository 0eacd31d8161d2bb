from __future__ import annotations

import pytest

from searchcobb.romaji import (
    ROMAN_ENTRIES,
    RomajiPredictiveResult,
    RomajiProcessor,
    RomanEntry,
    TrieRomajiProcessor,
    calculate_index,
    pack_entry_value,
    unpack_entry_value,
)

PROCESSORS = [RomajiProcessor, TrieRomajiProcessor]


def test_calculate_index_packs_prefix() -> None:
    assert calculate_index("ka") == (ord("k") << 24) | (ord("a") << 16)
    assert calculate_index("kya", 1, 3) == (ord("y") << 24) | (ord("a") << 16)
    assert calculate_index("a") < calculate_index("aa") < calculate_index("b")


def test_roman_entries_are_sorted_by_index() -> None:
    indexes = [e.index for e in ROMAN_ENTRIES]
    assert indexes == sorted(indexes)
    assert len(ROMAN_ENTRIES) > 250


def test_entry_value_round_trip() -> None:
    entry = RomanEntry("kk", "っ", 1)
    assert unpack_entry_value(pack_entry_value(entry)) == (1, "っ")


@pytest.mark.parametrize("processor_class", PROCESSORS)
@pytest.mark.parametrize(
    ("romaji", "hiragana"),
    [
        ("kensaku", "けんさく"),
        ("kitte", "きって"),
        ("shinbun", "しんぶん"),
        ("kyouto", "きょうと"),
        ("ra-menn", "らーめん"),
        ("abc!", "あbc!"),
    ],
)
def test_romaji_to_hiragana(processor_class, romaji: str, hiragana: str) -> None:
    assert processor_class().romaji_to_hiragana(romaji) == hiragana


@pytest.mark.parametrize("processor_class", PROCESSORS)
def test_predictive_trailing_consonant(processor_class) -> None:
    result = processor_class().romaji_to_hiragana_predictively("ky")
    assert result.prefix == ""
    assert set(result.suffixes) == {"きゃ", "きぃ", "きゅ", "きぇ", "きょ"}


@pytest.mark.parametrize("processor_class", PROCESSORS)
def test_predictive_settled_prefix(processor_class) -> None:
    result = processor_class().romaji_to_hiragana_predictively("kensak")
    assert result.prefix == "けんさ"
    assert "けんさく" in result.candidates()
    assert "けんさか" in result.candidates()


@pytest.mark.parametrize("processor_class", PROCESSORS)
def test_predictive_double_consonant(processor_class) -> None:
    candidates = processor_class().romaji_to_hiragana_predictively("kitt").candidates()
    assert "きった" in candidates
    assert "きって" in candidates


@pytest.mark.parametrize("processor_class", PROCESSORS)
def test_predictive_complete_word(processor_class) -> None:
    result = processor_class().romaji_to_hiragana_predictively("kyouto")
    assert result.candidates() == ["きょうと"]


def test_predictive_empty_input() -> None:
    assert RomajiProcessor().romaji_to_hiragana_predictively("") == RomajiPredictiveResult("", [""])


def test_find_roman_entry_predictively() -> None:
    entries = RomajiProcessor().find_roman_entry_predictively("kya", 0)
    assert {e.roman for e in entries} == {"kya"}


@pytest.mark.parametrize("romaji", ["kk", "kitt", "kkk"])
def test_processors_agree_on_candidates(romaji) -> None:
    binary = RomajiProcessor().romaji_to_hiragana_predictively(romaji).candidates()
    trie = TrieRomajiProcessor().romaji_to_hiragana_predictively(romaji).candidates()
    assert set(binary) == set(trie)


def test_doubled_consonant_is_not_doubled_again() -> None:
    candidates = RomajiProcessor().romaji_to_hiragana_predictively("kk").candidates()
    assert "っか" in candidates
    assert "っっか" not in candidates
