from __future__ import annotations

import random

import pytest

from searchcobb.bitvector import BitList, BitVector, bit_vector_from_bools, words_for_bits


def _naive_rank(bits: list[bool], pos: int, b: bool) -> int:
    return sum(1 for bit in bits[:pos] if bit == b)


def _naive_select(bits: list[bool], count: int, b: bool) -> int:
    seen = 0
    for i, bit in enumerate(bits):
        if bit == b:
            seen += 1
            if seen == count:
                return i
    raise AssertionError("not enough bits")


def test_words_for_bits() -> None:
    assert words_for_bits(0) == 0
    assert words_for_bits(1) == 1
    assert words_for_bits(64) == 1
    assert words_for_bits(65) == 2


def test_bit_list_grows_and_reads_back() -> None:
    bits = BitList()
    pattern = [i % 3 == 0 for i in range(200)]
    for bit in pattern:
        bits.add(bit)

    assert len(bits) == 200
    assert [bits.get(i) for i in range(200)] == pattern

    bits.set(1, True)
    assert bits.get(1) is True
    bits.set(0, False)
    assert bits.get(0) is False


def test_bit_list_rejects_out_of_range() -> None:
    bits = BitList()
    bits.add(True)
    with pytest.raises(IndexError):
        bits.get(5)
    with pytest.raises(IndexError):
        bits.set(-1, True)


def test_bit_vector_rejects_wrong_word_count() -> None:
    with pytest.raises(ValueError):
        BitVector([0, 0], 10)


def test_rank_and_select_match_naive_count() -> None:
    rng = random.Random(7)
    bits = [rng.random() < 0.4 for _ in range(1500)]
    bv = bit_vector_from_bools(bits)

    for pos in (0, 1, 63, 64, 65, 511, 512, 513, 1000, 1500):
        assert bv.rank(pos, True) == _naive_rank(bits, pos, True)
        assert bv.rank(pos, False) == _naive_rank(bits, pos, False)

    ones = sum(bits)
    zeros = len(bits) - ones
    for count in (1, 2, ones // 2, ones):
        assert bv.select(count, True) == _naive_select(bits, count, True)
    for count in (1, 2, zeros // 2, zeros):
        assert bv.select(count, False) == _naive_select(bits, count, False)


def test_select_zero_count_is_zero() -> None:
    bv = bit_vector_from_bools([True, False, True])
    assert bv.select(0, True) == 0


def test_next_clear_bit() -> None:
    bits = [True] * 70 + [False] + [True] * 5
    bv = bit_vector_from_bools(bits)

    assert bv.next_clear_bit(0) == 70
    assert bv.next_clear_bit(70) == 70
    assert bv.next_clear_bit(71) == 76
    assert bv.next_clear_bit(500) == 500


def test_next_clear_bit_all_set() -> None:
    bv = BitVector([(1 << 64) - 1], 64)
    assert bv.next_clear_bit(0) == -1


def test_bit_vector_from_bools_checks_size() -> None:
    with pytest.raises(ValueError):
        bit_vector_from_bools([True, False], size=3)
