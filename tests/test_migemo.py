from __future__ import annotations

import logging
import re

import pytest

import searchcobb.dictionary as dictionary_module
import searchcobb.migemo as migemo_module
from searchcobb.migemo import Migemo, get_migemo, parse_query, reset_migemo
from searchcobb.romaji import RomajiProcessor


def test_parse_query() -> None:
    assert list(parse_query("kensaku")) == ["kensaku"]
    assert list(parse_query("kensakuEngine")) == ["kensaku", "Engine"]
    assert list(parse_query("kensaku engine")) == ["kensaku", "engine"]
    assert list(parse_query("HTMLbunsho")) == ["HTML", "bunsho"]


def test_candidates_cover_forms_and_dictionary(migemo: Migemo) -> None:
    candidates = migemo.candidates("kensaku")

    assert candidates[0] == "kensaku"
    for expected in ("ｋｅｎｓａｋｕ", "けんさく", "ケンサク", "ｹﾝｻｸ", "検索", "研削", "検索エンジン"):
        assert expected in candidates
    assert len(candidates) == len(set(candidates))


def test_query_matches_every_form(migemo: Migemo) -> None:
    pattern = re.compile(migemo.query("kensaku"))

    for text in ("kensaku", "ｋｅｎｓａｋｕ", "けんさく", "ケンサク", "ｹﾝｻｸ", "検索", "研削"):
        assert pattern.fullmatch(text), text
    assert pattern.search("検索エンジンの話")
    assert not pattern.search("けんさ")


def test_query_trailing_consonant(migemo: Migemo) -> None:
    pattern = re.compile(migemo.query("ky"))
    for text in ("きゃ", "きょ", "キュ", "今日", "客"):
        assert pattern.search(text), text


def test_query_several_words(migemo: Migemo) -> None:
    pattern = re.compile(migemo.query("kanjiKensaku"))
    assert pattern.search("漢字検索")
    assert pattern.search("かんじけんさく")


def test_query_latin_reverse_entry(migemo: Migemo) -> None:
    pattern = re.compile(migemo.query("appuru"))
    assert pattern.search("apple")
    assert pattern.search("アップル")


def test_query_empty(migemo: Migemo) -> None:
    assert migemo.query("") == ""


def test_query_escapes_metacharacters(migemo: Migemo) -> None:
    pattern = migemo.query("a.b")
    assert re.compile(pattern).search("a.b")
    assert not re.compile(pattern).fullmatch("axb")


def test_migemo_without_dictionary() -> None:
    pattern = re.compile(Migemo().query("kensaku"))
    assert pattern.fullmatch("けんさく")
    assert pattern.fullmatch("ケンサク")
    assert not pattern.search("検索")


def test_custom_processor_and_operators(dictionary) -> None:
    engine = Migemo(
        dictionary,
        processor=RomajiProcessor(),
        rxop=("|", "(", ")", "[", "]", "", "\\.[]{}()*+?^$|"),
    )
    result = engine.query("kensaku")
    assert "(?:" not in result
    assert re.compile(result).fullmatch("検索")


def test_invalid_operators() -> None:
    with pytest.raises(ValueError):
        Migemo(rxop=("|", "(", ")"))


def test_default_engine_degrades_without_dictionary(tmp_path, monkeypatch, caplog) -> None:
    monkeypatch.setattr(dictionary_module, "get_dictionary_path", lambda: tmp_path / "missing")
    dictionary_module.unload_dictionary()
    reset_migemo()
    try:
        with caplog.at_level(logging.WARNING, logger="searchcobb.migemo"):
            engine = get_migemo()
        assert engine.dictionary is None
        assert "kana only" in caplog.text
        assert get_migemo() is engine
    finally:
        reset_migemo()


def test_reload_dictionary_resets_engine(tmp_path, monkeypatch, dictionary_bytes: bytes) -> None:
    path = tmp_path / "migemo-compact-dict"
    path.write_bytes(dictionary_bytes)
    monkeypatch.setattr(dictionary_module, "get_dictionary_path", lambda: path)
    dictionary_module.unload_dictionary()
    try:
        first = get_migemo()
        assert first.dictionary is not None
        assert dictionary_module.is_dictionary_loaded()
        assert dictionary_module.get_dictionary_size() > 0

        dictionary_module.reload_dictionary()
        assert migemo_module._MIGEMO is None
        assert get_migemo() is not first
    finally:
        dictionary_module.unload_dictionary()
    assert not dictionary_module.is_dictionary_loaded()
    assert dictionary_module.get_dictionary_size() == 0


def test_load_dictionary_missing_file(tmp_path) -> None:
    dictionary_module.unload_dictionary()
    with pytest.raises(FileNotFoundError, match="build_migemo_dict.py"):
        dictionary_module.load_dictionary(tmp_path / "nope")


def test_load_dictionary_switches_to_another_path(tmp_path, dictionary_bytes: bytes) -> None:
    first_path = tmp_path / "first"
    second_path = tmp_path / "second"
    first_path.write_bytes(dictionary_bytes)
    second_path.write_bytes(dictionary_bytes)
    dictionary_module.unload_dictionary()
    try:
        first = dictionary_module.load_dictionary(first_path)
        assert dictionary_module.load_dictionary(first_path) is first

        second = dictionary_module.load_dictionary(second_path)
        assert second is not first
        assert dictionary_module.load_dictionary() is second
        assert migemo_module._MIGEMO is None
    finally:
        dictionary_module.unload_dictionary()
