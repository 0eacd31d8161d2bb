from __future__ import annotations

import pytest

import searchcobb.unifier as unifier_module
from searchcobb.errors import DictionaryFormatError
from searchcobb.unifier import (
    FoldEntry,
    FoldTable,
    FoldType,
    Unifier,
    classify,
    collect_entries,
)


@pytest.mark.parametrize(
    ("code_points", "expected"),
    [
        ((0x006C, 0x00B7), FoldType.LETTER_WITH_MIDDLE_DOT),
        ((0x02BC, 0x006E), FoldType.APOSTROPHE_WITH_LETTER),
        ((0x00B0, 0x0043), FoldType.DEGREE_WITH_LETTER),
        ((0x0020, 0x0301), FoldType.VISIBLE_DIACRITICAL_MARK),
        ((0x0301,), FoldType.COMBINING_MARKS),
        ((0x0065, 0x0301), FoldType.LETTER_WITH_COMBINING_MARKS),
        ((0x0301, 0x0065), FoldType.REVERSED),
        ((0x0031,), FoldType.SIMPLE_SUBST),
        ((0x30AB, 0x3099), FoldType.COMPLEX_SUBST),
        ((0x0031, 0x0030), FoldType.COMPLEX_SUBST),
    ],
)
def test_classify(code_points, expected) -> None:
    assert classify(code_points) == expected


def test_kept_indices() -> None:
    assert FoldType.SIMPLE_SUBST.kept_indices(1) == (0,)
    assert FoldType.REVERSED.kept_indices(2) == (1,)
    assert FoldType.COMPLEX_SUBST.kept_indices(3) == (0, 1, 2)
    assert FoldType.VISIBLE_DIACRITICAL_MARK.kept_indices(2) is None
    assert FoldType.COMBINING_MARKS.kept_indices(1) is None


def test_fold_entry_parse_tag() -> None:
    entry = FoldEntry.parse(0x2460, "<circle> 0031")
    assert entry.tag == "circle"
    assert entry.code_points == (0x31,)
    assert entry.type == FoldType.SIMPLE_SUBST

    assert FoldEntry.parse(0xE9, "0065 0301").tag == "*"


def test_fold_table_recurses_into_kept_code_points() -> None:
    # U+01D5 decomposes to U+00DC U+0304, and U+00DC to U+0055 U+0308
    table = FoldTable.build(collect_entries({0x01D5: "00DC 0304", 0x00DC: "0055 0308"}))
    assert table.get("\u01d5") == "U"
    assert table.get("\u00dc") == "U"


def test_fold_table_drops_empty_folds() -> None:
    table = FoldTable.build(collect_entries({0x00B4: "<compat> 0020 0301"}))
    assert "\u00b4" not in table


def test_supplements_apply() -> None:
    table = FoldTable.build(collect_entries({}))
    assert table.get("\u570b") == "\u56fd"
    assert len(table) > 0


def test_fold_table_save_and_load(tmp_path) -> None:
    table = FoldTable({"\u00e9": "e", "\u30ac": "\u30ab\u3099", "\u2460": "1"})
    path = tmp_path / "fold_table.bin"
    table.save(path)

    loaded = FoldTable.load(path)
    assert loaded.folds == table.folds


def test_fold_table_load_rejects_bad_data(tmp_path) -> None:
    path = tmp_path / "fold_table.bin"
    FoldTable({"\u00e9": "e"}).save(path)
    data = path.read_bytes()

    path.write_bytes(data[:-1])
    with pytest.raises(DictionaryFormatError):
        FoldTable.load(path)

    path.write_bytes(data + b"x")
    with pytest.raises(DictionaryFormatError):
        FoldTable.load(path)


@pytest.mark.parametrize(
    ("grapheme", "expected"),
    [
        ("\u00e9", "e"),
        ("e\u0301", "e"),
        ("\u00c5", "A"),
        ("\u0140", "l"),
        ("\uac00", "\u1100\u1161"),
        ("\U0001f1ef\U0001f1f5", "\U0001f1ef\U0001f1f5"),
        ("\U0001f469\u200d\U0001f3db", "\U0001f469"),
        ("\u30ac", "\u30ab\u3099"),
        ("\u30ab\u3099", "\u30ab\u3099"),
        ("\uff76\uff9e", "\u30ab\u3099"),
        ("\u2460", "1"),
        ("\uff21", "A"),
        ("\u570b", "\u56fd"),
        ("a", "a"),
    ],
)
def test_unify_grapheme(unifier: Unifier, grapheme: str, expected: str) -> None:
    assert unifier.unify_grapheme(grapheme) == expected


def test_unify_string(unifier: Unifier) -> None:
    assert unifier.unify_string("Caf\u00e9 \uff76\uff9e\uff72\uff84\uff9e") == "Cafe \u30ab\u3099\u30a4\u30c8\u3099"
    assert unifier.unify_string("") == ""


def test_unify_is_idempotent(unifier: Unifier) -> None:
    text = "Caf\u00e9 \u30ac\u30a4\u30c9 \u570b\u969b \u2460 \uac00 \U0001f1ef\U0001f1f5"
    once = unifier.unify_string(text)
    assert unifier.unify_string(once) == once


def test_iter_unified(unifier: Unifier) -> None:
    assert list(unifier.iter_unified("a\u00e9")) == [("a", "a"), ("\u00e9", "e")]


def test_extract_core(unifier: Unifier) -> None:
    assert unifier.extract_core("x") == "x"
    assert unifier.extract_core("a\u0301\u0302") == "a"
    assert unifier.extract_core("\u0915\u094d\u0924") == "\u0915\u094d\u0924"


def test_default_unifier_lifecycle(tmp_path, monkeypatch) -> None:
    path = tmp_path / "fold_table.bin"
    FoldTable({"x": "y"}).save(path)

    unifier_module.unload_fold_table()
    try:
        assert not unifier_module.is_fold_table_loaded()
        unifier_module.load_fold_table(path)
        assert unifier_module.is_fold_table_loaded()
        assert unifier_module.unify_string("xx") == "yy"
        assert unifier_module.unify_grapheme("x") == "y"
    finally:
        unifier_module.unload_fold_table()


def test_load_fold_table_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError, match="build_fold_table.py"):
        unifier_module.load_fold_table(tmp_path / "missing.bin")


def test_default_table_falls_back_to_unicodedata(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(unifier_module, "get_fold_table_path", lambda: tmp_path / "missing.bin")
    unifier_module.unload_fold_table()
    try:
        assert unifier_module.get_unifier().unify_grapheme("\u00e9") == "e"
    finally:
        unifier_module.unload_fold_table()
