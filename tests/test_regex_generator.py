from __future__ import annotations

import re

import pytest

from searchcobb.migemo import DEFAULT_RXOP
from searchcobb.regex_generator import TernaryRegexGenerator


def _generate(words, **kwargs) -> str:
    generator = TernaryRegexGenerator(**kwargs)
    for word in words:
        generator.add(word)
    return generator.generate()


def test_empty_generator() -> None:
    assert TernaryRegexGenerator().generate() == ""


def test_single_word() -> None:
    assert _generate(["abc"]) == "abc"


def test_leaves_collapse_into_class() -> None:
    assert _generate(["a", "b", "c"]) == "[abc]"
    assert _generate(["abc", "abd"]) == "ab[cd]"


def test_branches_with_children_become_alternatives() -> None:
    assert _generate(["ab", "cd"]) == "(ab|cd)"
    assert _generate(["ab", "cd", "e"]) == "(e|ab|cd)"


def test_prefix_absorbs_longer_words() -> None:
    assert _generate(["abc", "ab"]) == "ab"
    assert _generate(["ab", "abc"]) == "ab"


def test_duplicates_are_ignored() -> None:
    assert _generate(["ab", "ab", ""]) == "ab"


def test_escapes_metacharacters() -> None:
    assert _generate(["a.b"]) == "a\\.b"
    assert _generate(["(x)"]) == "\\(x\\)"


def test_escape_character_leader() -> None:
    generator = TernaryRegexGenerator()
    generator.add("a+")
    generator.set_escape_character_leader("%")
    assert generator.generate() == "a%+"


def test_siblings_are_ordered() -> None:
    words = ["zeta", "alpha", "mu", "beta", "kappa", "gamma", "delta"]
    pattern = _generate(words)
    for word in words:
        assert re.fullmatch(pattern, word)


def test_rxop_operators() -> None:
    generator = TernaryRegexGenerator.from_rxop(DEFAULT_RXOP)
    for word in ("ab", "cd"):
        generator.add(word)
    assert generator.generate() == "(?:ab|cd)"


def test_rxop_needs_seven_items() -> None:
    with pytest.raises(ValueError):
        TernaryRegexGenerator.from_rxop(("|", "(", ")"))


def test_escape_set_must_be_ascii() -> None:
    with pytest.raises(ValueError):
        TernaryRegexGenerator(escape="。")


def test_newline_operator() -> None:
    assert _generate(["ab", "ac"], newline="\\s*") == "a\\s*[bc]"
