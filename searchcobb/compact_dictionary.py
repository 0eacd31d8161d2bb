"""
Compact Migemo dictionary: reader, builder and byte encoding.

Binary layout (all integers big-endian):

    int32   key edge count
    uint8   key edges (compact hiragana), one per edge
    uint32  key bit vector size in bits
    uint64  key bit vector words (upper 32 bits first)
    int32   value edge count
    uint16  value edges (UTF-16 code units)
    uint32  value bit vector size in bits
    uint64  value bit vector words
    uint32  mapping bit vector size in bits
    uint64  mapping bit vector words
    int32   mapping length
    int32   mapping entries (value trie node ids)

Compact hiragana encoding: 0x20-0x7E pass through, U+3041-U+3096 map to
0xA1-0xF6 and U+30FC maps to 0xF7.
"""

import logging
import struct
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple

from searchcobb.bitvector import BitList, BitVector, words_for_bits
from searchcobb.errors import DictionaryFormatError, EncodingError
from searchcobb.louds import LOUDSTrie, LOUDSTrieBuilder, to_code_units, utf16_sort_key

logger = logging.getLogger(__name__)


# ============================================================================
# Compact Hiragana
# ============================================================================

def encode_compact_char(c: int) -> int:
    """Encode one UTF-16 code unit as a compact hiragana byte."""
    if c == 0:
        return 0
    if 0x20 <= c <= 0x7E:
        return c
    if 0x3041 <= c <= 0x3096:
        return c - 0x3040 + 0xA0
    if c == 0x30FC:
        return 0xF7
    raise EncodingError(chr(c))


def decode_compact_byte(b: int) -> int:
    """Decode a compact hiragana byte to a UTF-16 code unit."""
    if 0x20 <= b <= 0x7E:
        return b
    if 0xA1 <= b <= 0xF6:
        return b + 0x3040 - 0xA0
    if b == 0xF7:
        return 0x30FC
    raise DictionaryFormatError(f"invalid compact hiragana byte: 0x{b:02X}")


def encode_compact_string(text: str) -> bytes:
    """
    Encode a string with the compact hiragana encoding.

    Raises:
        EncodingError: If any character is outside the encoding
    """
    return bytes(encode_compact_char(c) for c in to_code_units(text))


def decode_compact_bytes(data: bytes) -> str:
    return ''.join(chr(decode_compact_byte(b)) for b in data)


def is_compact_encodable(text: str) -> bool:
    try:
        encode_compact_string(text)
    except EncodingError:
        return False
    return True


# ============================================================================
# Reader
# ============================================================================

class _Reader:
    """Sequential big-endian reader over a bytes buffer."""

    __slots__ = ('data', 'offset')

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def unpack(self, fmt: str, count: int = 1) -> Tuple:
        full = f'>{count}{fmt}'
        size = struct.calcsize(full)
        if self.offset + size > len(self.data):
            raise DictionaryFormatError(
                f"unexpected end of data at offset {self.offset} "
                f"(need {size} bytes, have {len(self.data) - self.offset})"
            )
        values = struct.unpack_from(full, self.data, self.offset)
        self.offset += size
        return values

    def read_bit_vector(self) -> BitVector:
        (size_in_bits,) = self.unpack('I')
        words = self.unpack('Q', words_for_bits(size_in_bits))
        return BitVector(words, size_in_bits)


class CompactDictionary:
    """
    Read-only Migemo dictionary mapping hiragana readings to words.

    Args:
        data: The serialized dictionary

    Raises:
        DictionaryFormatError: If the buffer is truncated, has trailing
            bytes, or contains invalid compact hiragana bytes
    """

    def __init__(self, data: bytes):
        reader = _Reader(data)
        self.key_trie = self._read_trie(reader, compact_hiragana=True)
        self.value_trie = self._read_trie(reader, compact_hiragana=False)
        self.mapping_bit_vector = reader.read_bit_vector()
        (mapping_size,) = reader.unpack('i')
        if mapping_size < 0:
            raise DictionaryFormatError(f"negative mapping size: {mapping_size}")
        self.mapping: Tuple[int, ...] = reader.unpack('i', mapping_size)
        if reader.offset != len(data):
            raise DictionaryFormatError(
                f"trailing data: parsed {reader.offset} of {len(data)} bytes"
            )
        self.has_mapping_bit_list = self._create_has_mapping_bit_list(self.mapping_bit_vector)

    @classmethod
    def from_file(cls, path) -> 'CompactDictionary':
        with open(path, 'rb') as f:
            return cls(f.read())

    @staticmethod
    def _read_trie(reader: _Reader, compact_hiragana: bool) -> LOUDSTrie:
        (edge_count,) = reader.unpack('i')
        if edge_count < 0:
            raise DictionaryFormatError(f"negative edge count: {edge_count}")
        if compact_hiragana:
            edges = [decode_compact_byte(b) for b in reader.unpack('B', edge_count)]
        else:
            edges = list(reader.unpack('H', edge_count))
        return LOUDSTrie(reader.read_bit_vector(), edges)

    @staticmethod
    def _create_has_mapping_bit_list(mapping_bit_vector: BitVector) -> BitList:
        num_nodes = mapping_bit_vector.rank(mapping_bit_vector.size() + 1, False)
        bit_list = BitList(num_nodes)
        bit_position = 0
        for node in range(1, num_nodes):
            bit_list.set(node, mapping_bit_vector.get(bit_position + 1))
            bit_position = mapping_bit_vector.next_clear_bit(bit_position + 1)
        return bit_list

    def _values_of(self, node: int) -> Iterator[str]:
        bv = self.mapping_bit_vector
        start = bv.select(node, False)
        end = bv.next_clear_bit(start + 1)
        size = end - start - 1
        if size > 0:
            offset = bv.rank(start, False)
            for i in range(size):
                yield self.value_trie.reverse_lookup(self.mapping[start - offset + i])

    def _has_mapping(self, node: int) -> bool:
        return node < self.has_mapping_bit_list.size and self.has_mapping_bit_list.get(node)

    def search(self, key: str) -> Iterator[str]:
        """Yield the words stored under exactly ``key``."""
        key_index = self.key_trie.lookup(key)
        if key_index != -1 and self._has_mapping(key_index):
            yield from self._values_of(key_index)

    def predictive_search(self, key: str) -> Iterator[str]:
        """Yield the words stored under ``key`` and every key it prefixes."""
        key_index = self.key_trie.lookup(key)
        if key_index > 1:
            for node in self.key_trie.predictive_search(key_index):
                if self._has_mapping(node):
                    yield from self._values_of(node)

    def __len__(self) -> int:
        return self.key_trie.size()


# ============================================================================
# Builder
# ============================================================================

class CompactDictionaryBuilder:
    """Serializes a reading -> words mapping into the compact format."""

    @staticmethod
    def build(dictionary: Mapping[str, Sequence[str]]) -> bytes:
        """
        Serialize a dictionary.

        Keys that cannot be expressed in compact hiragana are skipped with a
        warning.

        Args:
            dictionary: Mapping of reading -> candidate words

        Returns:
            The serialized dictionary
        """
        entries: Dict[str, List[str]] = {}
        skipped = 0
        for key, values in dictionary.items():
            if not is_compact_encodable(key):
                logger.warning(f"Skipped unencodable key: {key!r}")
                skipped += 1
                continue
            entries[key] = list(values)
        if skipped:
            logger.warning(f"Skipped {skipped} keys in total")

        keys = sorted(entries, key=utf16_sort_key)
        key_trie, _ = LOUDSTrieBuilder.build(keys)

        value_set = set()
        for values in entries.values():
            value_set.update(values)
        values_sorted = sorted(value_set, key=utf16_sort_key)
        value_trie, _ = LOUDSTrieBuilder.build(values_sorted)

        mapping: List[int] = []
        mapping_bits = BitList()
        for i in range(1, key_trie.size() + 2):
            key = key_trie.reverse_lookup(i)
            mapping_bits.add(False)
            for value in entries.get(key, ()):
                mapping_bits.add(True)
                mapping.append(value_trie.lookup(value))

        out = bytearray()
        CompactDictionaryBuilder._write_trie(out, key_trie, compact_hiragana=True)
        CompactDictionaryBuilder._write_trie(out, value_trie, compact_hiragana=False)
        CompactDictionaryBuilder._write_bit_vector(out, mapping_bits.to_bit_vector())
        out += struct.pack('>i', len(mapping))
        out += struct.pack(f'>{len(mapping)}I', *mapping)
        return bytes(out)

    @staticmethod
    def _write_trie(out: bytearray, trie: LOUDSTrie, compact_hiragana: bool) -> None:
        out += struct.pack('>i', len(trie.edges))
        if compact_hiragana:
            out += bytes(encode_compact_char(c) for c in trie.edges)
        else:
            out += struct.pack(f'>{len(trie.edges)}H', *trie.edges)
        CompactDictionaryBuilder._write_bit_vector(out, trie.bit_vector)

    @staticmethod
    def _write_bit_vector(out: bytearray, bit_vector: BitVector) -> None:
        out += struct.pack('>I', bit_vector.size())
        out += struct.pack(f'>{len(bit_vector.words)}Q', *bit_vector.words)


def build_dictionary_bytes(items: Iterable[Tuple[str, Sequence[str]]]) -> bytes:
    """Merge (key, values) pairs and serialize them, keeping value order."""
    merged: Dict[str, List[str]] = {}
    for key, values in items:
        bucket = merged.setdefault(key, [])
        for value in values:
            if value not in bucket:
                bucket.append(value)
    return CompactDictionaryBuilder.build(merged)
