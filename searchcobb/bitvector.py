"""
Succinct bit vectors for the Migemo dictionary.

BitList is the growable builder used while constructing LOUDS tries.
BitVector is the immutable form with precomputed population counts that
answers rank/select queries without scanning the whole array:

- ``lb`` holds the number of set bits before each 512-bit block
- ``sb`` holds the number of set bits before each 64-bit word, relative
  to the start of its 512-bit block

Words are Python ints holding 64 bits each, least significant bit first.
"""

from typing import Iterable, List, Optional

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


def words_for_bits(size: int) -> int:
    """Number of 64-bit words needed to hold ``size`` bits."""
    return (size + WORD_BITS - 1) >> 6


# ============================================================================
# Builder
# ============================================================================

class BitList:
    """A growable list of bits."""

    __slots__ = ('words', 'size')

    def __init__(self, size: int = 0):
        self.words: List[int] = [0] * max(words_for_bits(size), 1)
        self.size = size

    def add(self, value: bool) -> None:
        if len(self.words) < words_for_bits(self.size + 1):
            self.words.extend([0] * len(self.words))
        self.size += 1
        self.set(self.size - 1, value)

    def set(self, pos: int, value: bool) -> None:
        if pos < 0 or pos > self.size:
            raise IndexError(f"bit position out of range: {pos}")
        if value:
            self.words[pos >> 6] |= 1 << (pos & 63)
        else:
            self.words[pos >> 6] &= ~(1 << (pos & 63)) & WORD_MASK

    def get(self, pos: int) -> bool:
        if pos < 0 or pos > self.size:
            raise IndexError(f"bit position out of range: {pos}")
        return (self.words[pos >> 6] >> (pos & 63)) & 1 == 1

    def __len__(self) -> int:
        return self.size

    def to_bit_vector(self) -> 'BitVector':
        """Freeze the current contents into a BitVector."""
        return BitVector(self.words[:words_for_bits(self.size)], self.size)


# ============================================================================
# Rank / Select
# ============================================================================

class BitVector:
    """
    Immutable bit array with O(1) rank and O(log n) select.

    Args:
        words: 64-bit words, exactly ``ceil(size_in_bits / 64)`` of them
        size_in_bits: Number of meaningful bits

    Raises:
        ValueError: If the number of words does not match the bit count
    """

    __slots__ = ('words', 'size_in_bits', 'lb', 'sb')

    def __init__(self, words: Iterable[int], size_in_bits: int):
        self.words: List[int] = list(words)
        expected = words_for_bits(size_in_bits)
        if len(self.words) != expected:
            raise ValueError(f"expected {expected} words, got {len(self.words)}")
        self.size_in_bits = size_in_bits

        # One spare block so rank() accepts positions up to size + 1
        num_blocks = ((size_in_bits + 1) >> 9) + 1
        self.lb: List[int] = [0] * num_blocks
        self.sb: List[int] = [0] * (num_blocks * 8)

        total = 0
        in_block = 0
        for i in range(len(self.sb)):
            self.sb[i] = in_block
            if i < len(self.words):
                in_block += self.words[i].bit_count()
            if (i & 7) == 7:
                self.lb[i >> 3] = total
                total += in_block
                in_block = 0

    def _word(self, index: int) -> int:
        return self.words[index] if index < len(self.words) else 0

    def size(self) -> int:
        return self.size_in_bits

    def __len__(self) -> int:
        return self.size_in_bits

    def get(self, pos: int) -> bool:
        if pos < 0:
            raise IndexError(f"bit position out of range: {pos}")
        return (self._word(pos >> 6) >> (pos & 63)) & 1 == 1

    def rank(self, pos: int, b: bool) -> int:
        """
        Count the bits equal to ``b`` strictly before ``pos``.

        Args:
            pos: Bit position (0 <= pos <= size + 1)
            b: Which bit value to count

        Returns:
            Number of matching bits in ``[0, pos)``
        """
        if pos < 0 or pos >= len(self.sb) * WORD_BITS:
            raise IndexError(f"rank position out of range: {pos}")
        count1 = self.sb[pos >> 6] + self.lb[pos >> 9]
        count1 += (self._word(pos >> 6) & ((1 << (pos & 63)) - 1)).bit_count()
        return count1 if b else pos - count1

    def select(self, count: int, b: bool) -> int:
        """
        Position of the ``count``-th bit equal to ``b`` (1-based).

        Returns 0 for ``count <= 0``.
        """
        lb_index = self._lower_bound_lb(count, b) - 1
        if lb_index == -1:
            return 0
        if b:
            count_in_lb = count - self.lb[lb_index]
        else:
            count_in_lb = count - (512 * lb_index - self.lb[lb_index])

        sb_index = self._lower_bound_sb(count_in_lb, lb_index * 8, lb_index * 8 + 8, b) - 1
        if b:
            count_in_sb = count_in_lb - self.sb[sb_index]
        else:
            count_in_sb = count_in_lb - (64 * (sb_index & 7) - self.sb[sb_index])

        word = self._word(sb_index)
        if not b:
            word = ~word & WORD_MASK

        i = 0
        while count_in_sb > 0:
            count_in_sb -= word & 1
            word >>= 1
            i += 1
        return sb_index * WORD_BITS + (i - 1)

    def _lower_bound_lb(self, key: int, b: bool) -> int:
        low, high = -1, len(self.lb)
        while high - low > 1:
            mid = (high + low) >> 1
            value = self.lb[mid] if b else 512 * mid - self.lb[mid]
            if value < key:
                low = mid
            else:
                high = mid
        return high

    def _lower_bound_sb(self, key: int, from_index: int, to_index: int, b: bool) -> int:
        low, high = from_index - 1, to_index
        while high - low > 1:
            mid = (high + low) >> 1
            value = self.sb[mid] if b else 64 * (mid & 7) - self.sb[mid]
            if value < key:
                low = mid
            else:
                high = mid
        return high

    def next_clear_bit(self, from_index: int) -> int:
        """
        Position of the first clear bit at or after ``from_index``.

        Returns:
            The bit position, or -1 when every stored word after
            ``from_index`` is fully set
        """
        u = from_index >> 6
        if u >= len(self.words):
            return from_index
        word = ~self.words[u] & (WORD_MASK << (from_index & 63)) & WORD_MASK
        while True:
            if word:
                return u * WORD_BITS + ((word & -word).bit_length() - 1)
            u += 1
            if u == len(self.words):
                return -1
            word = ~self.words[u] & WORD_MASK

    def __repr__(self) -> str:
        bits = ''.join('1' if self.get(i) else '0' for i in range(min(self.size_in_bits, 64)))
        suffix = '...' if self.size_in_bits > 64 else ''
        return f"BitVector({bits}{suffix}, size={self.size_in_bits})"


def bit_vector_from_bools(bits: Iterable[bool], size: Optional[int] = None) -> BitVector:
    """Build a BitVector from an iterable of booleans."""
    builder = BitList()
    for bit in bits:
        builder.add(bool(bit))
    if size is not None and size != builder.size:
        raise ValueError(f"expected {size} bits, got {builder.size}")
    return builder.to_bit_vector()
