from __future__ import annotations

import pytest

from searchcobb.louds import LOUDSTrieBuilder, from_code_units, to_code_units, utf16_sort_key

KEYS = sorted(["baby", "bad", "bank", "box", "dad", "dance"], key=utf16_sort_key)


def test_code_units_split_astral_characters() -> None:
    units = to_code_units("a😀")
    assert units == (0x61, 0xD83D, 0xDE00)
    assert from_code_units(units) == "a😀"


def test_utf16_sort_key_orders_by_code_units() -> None:
    # U+FF21 sorts after the surrogate pair of U+1F600 in UTF-16
    assert sorted(["Ａ", "😀"], key=utf16_sort_key) == ["😀", "Ａ"]


def test_lookup_and_reverse_lookup() -> None:
    trie, nodes = LOUDSTrieBuilder.build(KEYS)

    for key, node in zip(KEYS, nodes):
        assert trie.lookup(key) == node
        assert trie.reverse_lookup(node) == key

    assert trie.lookup("") == 1
    assert trie.lookup("bat") == -1
    assert trie.lookup("boxes") == -1


def test_prefix_nodes_exist() -> None:
    trie, _ = LOUDSTrieBuilder.build(KEYS)
    node = trie.lookup("ba")
    assert node > 1
    assert trie.reverse_lookup(node) == "ba"


def test_predictive_search_covers_every_extension() -> None:
    trie, _ = LOUDSTrieBuilder.build(KEYS)
    found = {trie.reverse_lookup(n) for n in trie.predictive_search(trie.lookup("ba"))}

    assert {"baby", "bad", "bank"} <= found
    assert "box" not in found
    assert "dad" not in found


def test_size_counts_nodes() -> None:
    trie, _ = LOUDSTrieBuilder.build(["a", "ab"])
    assert trie.size() == 2
    assert len(trie) == 2


def test_builder_rejects_unsorted_keys() -> None:
    with pytest.raises(ValueError):
        LOUDSTrieBuilder.build(["b", "a"])


def test_builder_rejects_none() -> None:
    with pytest.raises(ValueError):
        LOUDSTrieBuilder.build(["a", None])  # type: ignore[list-item]


def test_reverse_lookup_out_of_range() -> None:
    trie, _ = LOUDSTrieBuilder.build(["a"])
    with pytest.raises(IndexError):
        trie.reverse_lookup(0)
    with pytest.raises(IndexError):
        trie.reverse_lookup(100)
