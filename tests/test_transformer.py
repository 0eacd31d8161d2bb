from __future__ import annotations

import re

import pytest

import searchcobb
from searchcobb.constants import MODE_LITERAL, MODE_MIGEMO, MODE_REGEX
from searchcobb.errors import PatternSyntaxError
from searchcobb.grapheme import grapheme_pattern
from searchcobb.transformer import (
    compile_pattern,
    transform,
    transform_literal,
    transform_regex,
    unify_inside_class,
)


def test_literal_escapes_metacharacters(unifier) -> None:
    result = transform_literal("a+b.c?  def{2} [D-H]", unifier=unifier)
    assert result == "a\\+b\\.c\\?\\s+def\\{2\\}\\s+\\[D-H\\]"


def test_literal_full_width_metacharacters(unifier) -> None:
    result = transform_literal("[\uff0a\uff0b\uff0c\uff0d\uff0e\uff3c\uff0f] \uff0a\uff0b\uff0c\uff0d\uff0e\uff3c\uff0f", unifier=unifier)
    assert result == "\\[\\*\\+,-\\.\\\\/\\]\\s+\\*\\+,-\\.\\\\/"


def test_regex_keeps_operators(unifier) -> None:
    assert transform_regex("ab+(c|d)\\d", unifier=unifier) == "ab+(c|d)\\d"


def test_regex_folds_plain_text(unifier) -> None:
    assert transform_regex("Caf\u00e9", unifier=unifier) == "Cafe"
    assert transform_regex("\u570b", unifier=unifier) == "\u56fd"


def test_regex_class_with_multi_code_point_folds(unifier) -> None:
    assert transform_regex("[\u3076\u30d6]", unifier=unifier) == "(?:\u3075\u3099|\u30d5\u3099)"
    assert transform_regex("[\u00e9\u3076]", unifier=unifier) == "(?:[e]|\u3075\u3099)"
    assert transform_regex("[a-z]", unifier=unifier) == "[a-z]"


def test_regex_full_width_metacharacters_in_class(unifier) -> None:
    result = transform_regex("[\uff3b\uff0d\uff3d\uff5b\uff5d\uff08\uff09\uff0e\uff0a\uff0b\uff1f\uff3e\uff04\uff5c\uff3c]", unifier=unifier)
    assert result == "[\\[\\-\\]{}().*+?^$|\\\\]"


def test_regex_full_width_metacharacters_are_literal(unifier) -> None:
    assert transform_regex("\uff0a\uff0b\uff0c\uff0d\uff0e\uff3c\uff0f", unifier=unifier) == "\\*\\+,-\\.\\\\/"


def test_folded_metacharacters_are_escaped(unifier) -> None:
    # U+FE56 SMALL QUESTION MARK folds to "?"
    assert transform_regex("a\ufe56", unifier=unifier) == "a\\?"


def test_whitespace_is_widened(unifier) -> None:
    pattern = compile_pattern(transform_regex("foo bar", unifier=unifier))
    assert pattern.search("foo \t\n bar")


def test_strict_mode_does_not_fold() -> None:
    assert transform_regex("Caf\u00e9 [\u3076]", strict=True) == "Caf\u00e9 [\u3076]"
    assert transform_literal("\u00e9.", strict=True) == "\u00e9\\."


def test_trailing_backslash_is_rejected(unifier) -> None:
    with pytest.raises(PatternSyntaxError) as exc_info:
        transform_regex("abc\\", unifier=unifier)
    assert exc_info.value.pattern == "abc\\"

    with pytest.raises(PatternSyntaxError):
        transform_literal("abc\\", strict=True)


def test_extend_dot(unifier) -> None:
    result = transform_regex("a.b", target="ab", extend_dot=True, unifier=unifier)
    assert result == "a" + grapheme_pattern("ab") + "b"

    pattern = compile_pattern(transform_regex("x..y", extend_dot=True, unifier=unifier))
    assert pattern.fullmatch("xe\u0301\U0001f469\u200d\U0001f3dby")


def test_dot_without_extension(unifier) -> None:
    assert transform_regex("a.b", unifier=unifier) == "a.b"


def test_transform_dispatches_on_mode(unifier) -> None:
    assert transform("a.", mode=MODE_REGEX, unifier=unifier) == "a."
    assert transform("a.", mode=MODE_MIGEMO, unifier=unifier) == "a."
    assert transform("a.", mode=MODE_LITERAL, unifier=unifier) == "a\\."
    with pytest.raises(ValueError):
        transform("a", mode="glob", unifier=unifier)


def test_unify_inside_class_empty(unifier) -> None:
    assert unify_inside_class("", unifier) == ""


def test_compile_pattern_flags() -> None:
    assert compile_pattern("abc").flags & re.IGNORECASE
    assert not compile_pattern("abc", strict=True).flags & re.IGNORECASE
    assert compile_pattern("a.b").fullmatch("A\nB")


def test_compile_pattern_error() -> None:
    with pytest.raises(PatternSyntaxError) as exc_info:
        compile_pattern("(abc")
    assert exc_info.value.pattern == "(abc"


def test_top_level_transform_matches_unified_text() -> None:
    text = searchcobb.unify_string("Die Stra\u00dfe nach Z\u00fcrich")
    source = searchcobb.transform_literal("Zurich")
    assert compile_pattern(source).search(text)


def test_top_level_argument_checks() -> None:
    with pytest.raises(TypeError):
        searchcobb.transform(b"abc")
    with pytest.raises(TypeError):
        searchcobb.transform("abc", target=1)
    with pytest.raises(ValueError):
        searchcobb.transform("abc", mode="")
    with pytest.raises(ValueError):
        searchcobb.get_pattern("abc", mode="glob")
    with pytest.raises(TypeError):
        searchcobb.unify_string(None)


def test_literal_matches_reflowed_whitespace(unifier) -> None:
    pattern = compile_pattern(transform_literal("a+b.c?  def{2} [D-H]", unifier=unifier))
    assert pattern.search("a+b.c?   def{2} [D-H]")


def test_literal_matches_across_diacritics(unifier) -> None:
    pattern = compile_pattern(transform_literal("outer", unifier=unifier))
    assert pattern.search(unifier.unify_string("o\u00fcter paragraph #1"))


def test_unpaired_brackets_in_literal(unifier) -> None:
    assert transform_literal("a]b", unifier=unifier) == "a\\]b"
    assert transform_literal("arr[0", unifier=unifier) == "arr\\[0"

    pattern = compile_pattern(transform_literal("arr[0", unifier=unifier))
    assert pattern.search("arr[0]")
    assert not pattern.search("arr0")


def test_unpaired_bracket_in_regex_is_an_error(unifier) -> None:
    source = transform_regex("arr[0", unifier=unifier)
    assert source == "arr[0"
    with pytest.raises(PatternSyntaxError):
        compile_pattern(source)


def test_escaped_backslash_at_end(unifier) -> None:
    assert transform_regex("C:\\\\", unifier=unifier) == "C:\\\\"
    assert transform_literal("C:\\\\", unifier=unifier) == "C:\\\\"
    assert compile_pattern(transform_regex("C:\\\\", unifier=unifier)).search("C:\\")

    with pytest.raises(PatternSyntaxError):
        transform_regex("C:\\\\\\", unifier=unifier)


def test_class_members_folding_to_metacharacters(unifier) -> None:
    # U+2474 PARENTHESIZED DIGIT ONE folds to "(1)"
    source = transform_regex("[\u2474]", unifier=unifier)
    assert source == "(?:\\(1\\))"
    assert compile_pattern(source).search("x(1)").group(0) == "(1)"
    assert not compile_pattern(source).search("1")

    # U+FE63 SMALL HYPHEN-MINUS folds to "-"
    source = transform_regex("[a\ufe63z]", unifier=unifier)
    assert source == "[a\\-z]"
    assert compile_pattern(source).search("-")
    assert not compile_pattern(source).search("m")

    # U+FE68 SMALL REVERSE SOLIDUS folds to "\"
    source = transform_regex("[\ufe68]", unifier=unifier)
    assert source == "[\\\\]"
    assert compile_pattern(source).search("\\")


def test_negated_class_with_multi_code_point_folds(unifier) -> None:
    source = transform_regex("[^a\u2474]", unifier=unifier)
    assert source == "(?:(?!\\(1\\))[^a])"
    pattern = compile_pattern(source)
    assert not pattern.fullmatch("a")
    assert pattern.fullmatch("b")
    assert pattern.search("(1)").start() == 1
