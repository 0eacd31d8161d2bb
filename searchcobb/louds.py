"""
LOUDS (Level-Order Unary Degree Sequence) tries.

The tree shape lives in a single BitVector; node ids are 1-based in
level order and edge labels are UTF-16 code units stored in ``edges``
(index 0 and 1 are placeholders, node 1 is the root).
"""

import struct
from bisect import bisect_left
from typing import Iterator, List, Sequence, Tuple

from searchcobb.bitvector import BitList, BitVector


# ============================================================================
# UTF-16 helpers
# ============================================================================

def to_code_units(text: str) -> Tuple[int, ...]:
    """Split a string into UTF-16 code units."""
    data = text.encode('utf-16-be', 'surrogatepass')
    return struct.unpack(f'>{len(data) // 2}H', data)


def from_code_units(units: Sequence[int]) -> str:
    """Join UTF-16 code units back into a string."""
    data = struct.pack(f'>{len(units)}H', *units)
    return data.decode('utf-16-be', 'surrogatepass')


def utf16_sort_key(text: str) -> bytes:
    """Sort key that orders strings by UTF-16 code units."""
    return text.encode('utf-16-be', 'surrogatepass')


# ============================================================================
# Trie
# ============================================================================

class LOUDSTrie:
    """
    Read-only LOUDS trie.

    Args:
        bit_vector: Tree shape
        edges: Edge label of every node, indexed by node id
    """

    __slots__ = ('bit_vector', 'edges')

    def __init__(self, bit_vector: BitVector, edges: Sequence[int]):
        self.bit_vector = bit_vector
        self.edges: List[int] = list(edges)

    def reverse_lookup(self, index: int) -> str:
        """Rebuild the key that leads to node ``index``."""
        if index <= 0 or index >= len(self.edges):
            raise IndexError(f"node index out of range: {index}")
        units = []
        while index > 1:
            units.append(self.edges[index])
            index = self.parent(index)
        units.reverse()
        return from_code_units(units)

    def parent(self, x: int) -> int:
        bv = self.bit_vector
        return bv.rank(bv.select(x, True), False)

    def first_child(self, x: int) -> int:
        bv = self.bit_vector
        y = bv.select(x, False) + 1
        if bv.get(y):
            return bv.rank(y, True) + 1
        return -1

    def traverse(self, index: int, c: int) -> int:
        """Follow the edge labelled ``c`` from node ``index``; -1 if absent."""
        first_child = self.first_child(index)
        if first_child == -1:
            return -1
        bv = self.bit_vector
        child_start_bit = bv.select(first_child, True)
        child_end_bit = bv.next_clear_bit(child_start_bit)
        child_size = child_end_bit - child_start_bit
        end = first_child + child_size
        i = bisect_left(self.edges, c, first_child, end)
        if i < end and self.edges[i] == c:
            return i
        return -1

    def lookup(self, key: str) -> int:
        """Node id for ``key``, or -1 when the key is not a path in the trie."""
        node_index = 1
        for c in to_code_units(key):
            node_index = self.traverse(node_index, c)
            if node_index == -1:
                break
        return node_index if node_index >= 0 else -1

    def predictive_search(self, index: int) -> Iterator[int]:
        """Yield ``index`` and all of its descendants, level by level."""
        bv = self.bit_vector
        lower = index
        upper = index + 1
        while upper - lower > 0:
            yield from range(lower, upper)
            lower = bv.rank(bv.select(lower, False) + 1, True) + 1
            upper = bv.rank(bv.select(upper, False) + 1, True) + 1

    def size(self) -> int:
        return len(self.edges) - 2

    def __len__(self) -> int:
        return self.size()


# ============================================================================
# Builder
# ============================================================================

class LOUDSTrieBuilder:
    """Builds a LOUDSTrie from keys sorted by UTF-16 code units."""

    @staticmethod
    def build(keys: Sequence[str]) -> Tuple[LOUDSTrie, List[int]]:
        """
        Build a trie.

        Args:
            keys: Keys in UTF-16 order

        Returns:
            Tuple of (trie, node id of each key)

        Raises:
            ValueError: If keys are not sorted or contain None
        """
        unit_keys = []
        for i, key in enumerate(keys):
            if key is None:
                raise ValueError(f"key at {i} is None")
            units = to_code_units(key)
            if unit_keys and unit_keys[-1] > units:
                raise ValueError(f"keys are not sorted at {i}: {key!r}")
            unit_keys.append(units)

        nodes = [1] * len(unit_keys)
        cursor = 0
        current_node = 1
        edges = [0x20, 0x20]
        louds = BitList()
        louds.add(True)

        while True:
            last_char = 0
            last_parent = 0
            rest_keys = 0
            for i, units in enumerate(unit_keys):
                if len(units) < cursor:
                    continue
                if len(units) == cursor:
                    louds.add(False)
                    last_parent = nodes[i]
                    last_char = 0
                    continue
                current_char = units[cursor]
                current_parent = nodes[i]
                if last_parent != current_parent:
                    louds.add(False)
                    louds.add(True)
                    edges.append(current_char)
                    current_node += 1
                elif last_char != current_char:
                    louds.add(True)
                    edges.append(current_char)
                    current_node += 1
                nodes[i] = current_node
                last_char = current_char
                last_parent = current_parent
                rest_keys += 1
            if rest_keys == 0:
                break
            cursor += 1

        return LOUDSTrie(louds.to_bit_vector(), edges), nodes
