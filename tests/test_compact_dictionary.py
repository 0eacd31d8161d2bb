from __future__ import annotations

import logging

import pytest

from searchcobb.compact_dictionary import (
    CompactDictionary,
    CompactDictionaryBuilder,
    build_dictionary_bytes,
    decode_compact_bytes,
    encode_compact_string,
    is_compact_encodable,
)
from searchcobb.errors import DictionaryFormatError, EncodingError


def test_compact_hiragana_encoding() -> None:
    assert encode_compact_string("abc") == b"abc"
    assert encode_compact_string("ぁ") == bytes([0xA1])
    assert encode_compact_string("ゖ") == bytes([0xF6])
    assert encode_compact_string("ー") == bytes([0xF7])
    assert decode_compact_bytes(bytes([0xA1, 0xF7, 0x61])) == "ぁーa"


def test_compact_hiragana_rejects_other_characters() -> None:
    with pytest.raises(EncodingError) as exc:
        encode_compact_string("カ")
    assert exc.value.char == "カ"
    assert is_compact_encodable("かな")
    assert not is_compact_encodable("漢字")


def test_search_exact_key(dictionary: CompactDictionary) -> None:
    assert list(dictionary.search("けんさく")) == ["検索", "研削"]
    assert list(dictionary.search("かんじ")) == ["漢字", "感じ", "幹事"]
    assert list(dictionary.search("けんさ")) == []
    assert list(dictionary.search("なし")) == []


def test_predictive_search(dictionary: CompactDictionary) -> None:
    found = list(dictionary.predictive_search("けん"))
    assert set(found) == {"県", "件", "剣", "検索", "研削", "検索エンジン"}
    # Shallower keys come first
    assert found.index("県") < found.index("検索") < found.index("検索エンジン")


def test_predictive_search_with_prolonged_sound_mark(dictionary: CompactDictionary) -> None:
    assert list(dictionary.predictive_search("らー")) == ["ラーメン"]


def test_predictive_search_empty_key_yields_nothing(dictionary: CompactDictionary) -> None:
    assert list(dictionary.predictive_search("")) == []


def test_builder_skips_unencodable_keys(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="searchcobb.compact_dictionary"):
        data = CompactDictionaryBuilder.build({"かな": ["仮名"], "カナ": ["仮名"]})

    dictionary = CompactDictionary(data)
    assert list(dictionary.search("かな")) == ["仮名"]
    assert "Skipped" in caplog.text


def test_build_dictionary_bytes_merges_values() -> None:
    data = build_dictionary_bytes([("かな", ["仮名"]), ("かな", ["仮名", "哉"])])
    assert list(CompactDictionary(data).search("かな")) == ["仮名", "哉"]


def test_truncated_dictionary(dictionary_bytes: bytes) -> None:
    with pytest.raises(DictionaryFormatError):
        CompactDictionary(dictionary_bytes[:-3])
    with pytest.raises(DictionaryFormatError):
        CompactDictionary(b"")


def test_trailing_bytes(dictionary_bytes: bytes) -> None:
    with pytest.raises(DictionaryFormatError):
        CompactDictionary(dictionary_bytes + b"\x00")


def test_from_file(tmp_path, dictionary_bytes: bytes) -> None:
    path = tmp_path / "dict"
    path.write_bytes(dictionary_bytes)
    assert list(CompactDictionary.from_file(path).search("きゃく")) == ["客"]


def test_len_counts_key_nodes(dictionary: CompactDictionary) -> None:
    assert len(dictionary) > 0


def test_every_key_round_trips(dictionary: CompactDictionary, words) -> None:
    for key, values in words.items():
        assert sorted(dictionary.search(key)) == sorted(values), key
