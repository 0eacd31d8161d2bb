from __future__ import annotations

import re

import pytest

import searchcobb
import searchcobb.migemo as migemo_module


def test_version() -> None:
    assert searchcobb.get_version() == searchcobb.__version__


def test_segment_wrapper() -> None:
    assert [s.segment for s in searchcobb.segment("\uff76\uff9e\U0001f469\u200d\U0001f3db")] == ["\uff76\uff9e", "\U0001f469\u200d\U0001f3db"]
    with pytest.raises(TypeError):
        searchcobb.segment(b"abc")


def test_pattern_wrappers() -> None:
    assert re.compile(searchcobb.grapheme_pattern()).fullmatch("\u00e9")
    assert searchcobb.core_pattern(group=True).startswith("(?:(")
    with pytest.raises(TypeError):
        searchcobb.grapheme_pattern(target=1)


def test_unify_wrappers() -> None:
    assert searchcobb.unify_grapheme("\u00e9") == "e"
    assert searchcobb.unify_string("\u570b\u969b\u30ac\u30a4\u30c9") == "\u56fd\u969b\u30ab\u3099\u30a4\u30c8\u3099"


def test_get_pattern_end_to_end() -> None:
    text = searchcobb.unify_string("o\u00fcter paragraph #1")
    pattern = searchcobb.get_pattern("outer", mode=searchcobb.MODE_LITERAL)
    assert pattern.search(text)


def test_migemo_query(migemo, monkeypatch) -> None:
    monkeypatch.setattr(migemo_module, "_MIGEMO", migemo)
    assert re.compile(searchcobb.migemo_query("kensaku")).search("\u691c\u7d22")
    with pytest.raises(TypeError):
        searchcobb.migemo_query(None)


def test_warm_up(migemo, monkeypatch, capsys) -> None:
    monkeypatch.setattr(migemo_module, "_MIGEMO", migemo)
    total, timings = searchcobb.warm_up(verbose=True)

    assert total >= 0
    assert set(timings) == {"grapheme", "fold_table", "migemo", "total"}
    assert "with dictionary" in capsys.readouterr().out
