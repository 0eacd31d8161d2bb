"""
Unifier: fold visually equivalent text to one comparable form.

Each grapheme cluster is mapped through a fold table derived from Unicode
decompositions plus the supplements in ``fold_supplements``:

- Letters lose their combining marks, middle dots, apostrophes and
  degree signs (é -> e, ŀ -> l).
- Compatibility forms become their plain form (① -> 1, ｶ -> カ).
- Old Han forms become the new forms used in Japan (國 -> 国).
- Precomposed voiced kana decompose (ガ -> カ + U+3099), so both spellings
  of a voiced kana unify to the same text.

Clusters without a table entry keep only their core code point: the base
letter of a combining sequence, the first emoji of a ZWJ sequence, the
jamo of a Hangul syllable. Regional indicator pairs are never folded.

Example:
    >>> unify_string("Café ｶﾞｲﾄﾞ")
    'Cafe カ\\u3099イト\\u3099'
"""

import logging
import re
import struct
import sys
import time
import unicodedata
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from searchcobb.errors import DictionaryFormatError
from searchcobb.fold_supplements import (
    ENCLOSED_ALPHANUMERIC,
    ENCLOSED_ALPHANUMERIC_SUPPLEMENT,
    HAN_JP_1981,
    KANA_SUPPLEMENT,
)
from searchcobb.grapheme import core_extract_pattern, segment

logger = logging.getLogger(__name__)


# ============================================================================
# Classification
# ============================================================================

class FoldType(IntEnum):
    """Shape of a decomposition, deciding which elements survive folding."""
    LETTER_WITH_MIDDLE_DOT = 0
    APOSTROPHE_WITH_LETTER = 1
    DEGREE_WITH_LETTER = 2
    VISIBLE_DIACRITICAL_MARK = 3
    COMBINING_MARKS = 4
    LETTER_WITH_COMBINING_MARKS = 6
    REVERSED = 7
    SIMPLE_SUBST = 254
    COMPLEX_SUBST = 255

    def kept_indices(self, length: int) -> Optional[Tuple[int, ...]]:
        """Decomposition indices to keep; None means the entry never folds."""
        if self in (FoldType.LETTER_WITH_MIDDLE_DOT,
                    FoldType.LETTER_WITH_COMBINING_MARKS,
                    FoldType.SIMPLE_SUBST):
            return (0,)
        if self in (FoldType.APOSTROPHE_WITH_LETTER,
                    FoldType.DEGREE_WITH_LETTER,
                    FoldType.REVERSED):
            return (1,)
        if self == FoldType.COMPLEX_SUBST:
            return tuple(range(length))
        return None


# Script=Hiragana and Script=Katakana, as far as decompositions reach
_KANA_RANGES = (
    (0x3041, 0x3096), (0x309D, 0x309F), (0x30A1, 0x30FA), (0x30FD, 0x30FF),
    (0x31F0, 0x31FF), (0x32D0, 0x32FE), (0x3300, 0x3357), (0xFF66, 0xFF6F),
    (0xFF71, 0xFF9D), (0x1AFF0, 0x1B16F), (0x1F200, 0x1F200),
)


def _is_mark(cp: int) -> bool:
    return unicodedata.category(chr(cp)).startswith('M')


def _is_kana(cp: int) -> bool:
    return any(first <= cp <= last for first, last in _KANA_RANGES)


def classify(code_points: Tuple[int, ...]) -> FoldType:
    """Classify a decomposition by its shape."""
    marks = [_is_mark(cp) for cp in code_points]
    n = len(code_points)

    if n == 2 and not marks[0] and code_points[1] == 0x00B7:
        return FoldType.LETTER_WITH_MIDDLE_DOT
    if n == 2 and code_points[0] == 0x02BC and not marks[1]:
        return FoldType.APOSTROPHE_WITH_LETTER
    if n == 2 and code_points[0] == 0x00B0 and not marks[1]:
        return FoldType.DEGREE_WITH_LETTER
    if n == 2 and code_points[0] == 0x0020:
        return FoldType.VISIBLE_DIACRITICAL_MARK
    if n > 0 and all(marks):
        return FoldType.COMBINING_MARKS
    # Voiced kana fold to kana plus combining mark, never to the bare kana
    if n == 2 and _is_kana(code_points[0]) and marks[1]:
        return FoldType.COMPLEX_SUBST
    if n >= 2 and not marks[0] and all(marks[1:]):
        return FoldType.LETTER_WITH_COMBINING_MARKS
    if n >= 2 and all(marks[:-1]) and not marks[-1]:
        return FoldType.REVERSED
    if n == 1:
        return FoldType.SIMPLE_SUBST
    return FoldType.COMPLEX_SUBST


@dataclass(slots=True)
class FoldEntry:
    """One decomposition: source code point, tag and target code points."""
    code_point: int
    tag: str
    code_points: Tuple[int, ...]
    type: FoldType

    @classmethod
    def parse(cls, code_point: int, decomposition: str) -> 'FoldEntry':
        """
        Parse a UnicodeData.txt decomposition field.

        Example:
            >>> FoldEntry.parse(0xE9, "0065 0301").type
            <FoldType.LETTER_WITH_COMBINING_MARKS: 6>
        """
        tag = '*'
        items = decomposition.split()
        if items and items[0].startswith('<'):
            tag = items.pop(0).strip('<>')
        code_points = tuple(int(item, 16) for item in items)
        return cls(code_point, tag, code_points, classify(code_points))


# ============================================================================
# Decomposition Sources
# ============================================================================

def decompositions_from_unicodedata() -> Dict[int, str]:
    """Decomposition fields of every code point known to ``unicodedata``."""
    result = {}
    for cp in range(sys.maxunicode + 1):
        decomposition = unicodedata.decomposition(chr(cp))
        if decomposition:
            result[cp] = decomposition
    return result


def decompositions_from_file(path: Path) -> Dict[int, str]:
    """Decomposition fields of a UnicodeData.txt file."""
    result = {}
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            fields = line.rstrip('\n').split(';')
            if len(fields) > 5 and fields[5]:
                result[int(fields[0], 16)] = fields[5]
    return result


def _hex_of(text: str) -> str:
    return ' '.join(f'{ord(c):04X}' for c in text)


def collect_entries(decompositions: Dict[int, str]) -> Dict[int, FoldEntry]:
    """Classify the decompositions and apply the supplements."""
    entries = {cp: FoldEntry.parse(cp, d) for cp, d in decompositions.items()}

    for old, new in HAN_JP_1981.items():
        cp = ord(old)
        entries[cp] = FoldEntry.parse(cp, f'<hanjp1981> {_hex_of(new)}')

    for supplement in (KANA_SUPPLEMENT, ENCLOSED_ALPHANUMERIC, ENCLOSED_ALPHANUMERIC_SUPPLEMENT):
        for source, target in supplement.items():
            cp = ord(source)
            if cp not in entries:
                entries[cp] = FoldEntry.parse(cp, f'<supplement> {_hex_of(target)}')

    return entries


# ============================================================================
# Fold Table
# ============================================================================

# Entry count, then (code point, UTF-8 length) + folded text per entry
TABLE_HEADER = struct.Struct('<I')
TABLE_ENTRY = struct.Struct('<IH')


class FoldTable:
    """
    Mapping of single code points to their folded text.

    Args:
        folds: Source character -> folded string
    """

    def __init__(self, folds: Dict[str, str]):
        self.folds = folds

    @classmethod
    def build(cls, entries: Dict[int, FoldEntry]) -> 'FoldTable':
        """
        Fold every entry, recursing into the kept code points.

        Entries that never fold, or fold to nothing, are left out.
        """
        memo: Dict[int, Optional[str]] = {}

        def fold(cp: int) -> Optional[str]:
            if cp in memo:
                return memo[cp]
            # Placeholder guards against cyclic supplements
            memo[cp] = None
            entry = entries[cp]
            indices = entry.type.kept_indices(len(entry.code_points))
            if indices is None:
                return None
            parts = []
            for index in indices:
                target = entry.code_points[index]
                if target in entries:
                    parts.append(fold(target) or '')
                else:
                    parts.append(chr(target))
            memo[cp] = ''.join(parts)
            return memo[cp]

        folds = {}
        for cp in sorted(entries):
            folded = fold(cp)
            if folded:
                folds[chr(cp)] = folded
        return cls(folds)

    @classmethod
    def from_unicodedata(cls) -> 'FoldTable':
        return cls.build(collect_entries(decompositions_from_unicodedata()))

    @classmethod
    def from_unicode_data_file(cls, path: Path) -> 'FoldTable':
        return cls.build(collect_entries(decompositions_from_file(path)))

    def save(self, path: Path) -> None:
        """Write the table in the binary fold table format."""
        out = bytearray(TABLE_HEADER.pack(len(self.folds)))
        for source in sorted(self.folds):
            encoded = self.folds[source].encode('utf-8')
            out += TABLE_ENTRY.pack(ord(source), len(encoded))
            out += encoded
        Path(path).write_bytes(bytes(out))

    @classmethod
    def load(cls, path: Path) -> 'FoldTable':
        """
        Read a binary fold table.

        Raises:
            FileNotFoundError: If the file does not exist
            DictionaryFormatError: If the file is truncated or malformed
        """
        data = Path(path).read_bytes()
        try:
            (count,) = TABLE_HEADER.unpack_from(data, 0)
            offset = TABLE_HEADER.size
            folds = {}
            for _ in range(count):
                cp, length = TABLE_ENTRY.unpack_from(data, offset)
                offset += TABLE_ENTRY.size
                if offset + length > len(data):
                    raise DictionaryFormatError(f"truncated fold table entry for U+{cp:04X}")
                folds[chr(cp)] = data[offset:offset + length].decode('utf-8')
                offset += length
        except (struct.error, ValueError) as e:
            raise DictionaryFormatError(f"invalid fold table {path}: {e}") from e
        if offset != len(data):
            raise DictionaryFormatError(f"trailing data in fold table {path}")
        return cls(folds)

    def get(self, source: str) -> Optional[str]:
        return self.folds.get(source)

    def __contains__(self, source: str) -> bool:
        return source in self.folds

    def __len__(self) -> int:
        return len(self.folds)


# ============================================================================
# Unifier
# ============================================================================

class Unifier:
    """
    Folds grapheme clusters through one fold table.

    Instances are independent, so several tables (for example built from
    different Unicode versions) can be used side by side.
    """

    def __init__(self, table: FoldTable, cache_size: int = 65536):
        self.table = table
        self._core_extract = re.compile(core_extract_pattern())
        self.unify_grapheme = lru_cache(maxsize=cache_size)(self._unify_grapheme)

    def extract_core(self, s: str) -> str:
        """
        Reduce a cluster to its core code point(s).

        Returns the Hangul jamo sequence, regional indicator pair, conjunct
        or base character that the cluster is built around; an emoji ZWJ
        sequence is reduced to its first emoji.
        """
        s = unicodedata.normalize('NFD', s)
        if len(s) == 1:
            return s
        m = self._core_extract.fullmatch(s)
        if m is None:
            return s
        for i in range(1, 8):
            captured = m.group(i)
            if not captured:
                continue
            if i == 5:
                return captured[0]
            return captured
        return s

    def _unify_grapheme(self, g: str) -> str:
        if not g:
            return g
        for form in (unicodedata.normalize('NFKC', g), unicodedata.normalize('NFC', g)):
            if form:
                folded = self.table.get(form[0])
                if folded is not None:
                    return folded
        folded = self.table.get(g)
        if folded is not None:
            return folded
        return self.extract_core(g)

    def unify_string(self, s: str) -> str:
        """Fold every grapheme cluster of ``s``."""
        return ''.join(self.unify_grapheme(seg.segment) for seg in segment(s))

    def iter_unified(self, s: str) -> Iterator[Tuple[str, str]]:
        """Yield (cluster, folded cluster) pairs."""
        for seg in segment(s):
            yield seg.segment, self.unify_grapheme(seg.segment)


# ============================================================================
# Default Unifier
# ============================================================================

# Module-level singleton
_UNIFIER: Optional[Unifier] = None


def get_fold_table_path() -> Path:
    """Get the default fold table path."""
    return Path(__file__).parent / "data" / "fold_table.bin"


def is_fold_table_loaded() -> bool:
    """Check if the fold table is loaded."""
    return _UNIFIER is not None


def load_fold_table(path: Optional[Path] = None) -> Unifier:
    """
    Load the fold table and create the default unifier.

    Without a path, the packaged table is used when it has been built
    (``python scripts/build_fold_table.py``); otherwise the table is derived
    from the interpreter's ``unicodedata``.

    Args:
        path: Explicit fold table file

    Returns:
        The default Unifier

    Raises:
        FileNotFoundError: If an explicit path does not exist
        DictionaryFormatError: If the table file is malformed
    """
    global _UNIFIER

    if _UNIFIER is not None and path is None:
        return _UNIFIER

    t0 = time.perf_counter()
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"Fold table not found at {path}. "
                "Run 'python scripts/build_fold_table.py' to build it."
            )
        table = FoldTable.load(path)
        source = path.name
    elif get_fold_table_path().exists():
        table = FoldTable.load(get_fold_table_path())
        source = get_fold_table_path().name
    else:
        table = FoldTable.from_unicodedata()
        source = f"unicodedata {unicodedata.unidata_version}"

    _UNIFIER = Unifier(table)
    logger.debug(
        f"Loaded fold table from {source}: {len(table):,} entries "
        f"in {(time.perf_counter() - t0) * 1000:.1f}ms"
    )
    return _UNIFIER


def unload_fold_table():
    """Unload the fold table to free memory."""
    global _UNIFIER
    _UNIFIER = None


def get_unifier() -> Unifier:
    return load_fold_table()


def unify_grapheme(g: str) -> str:
    """Fold one grapheme cluster with the default unifier."""
    return get_unifier().unify_grapheme(g)


def unify_string(s: str) -> str:
    """Fold every grapheme cluster of ``s`` with the default unifier."""
    return get_unifier().unify_string(s)


def extract_core(s: str) -> str:
    return get_unifier().extract_core(s)

