"""
Unicode Character Database ingestion.

Build-time helpers that fetch UCD text files, parse their range lines and
derive the grapheme cluster character classes stored in
``searchcobb/grapheme_data.py``. Nothing here is needed at search time.
"""

import logging
import os
import re
import time
import urllib.request
from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from searchcobb.constants import UCD_BASE_URL, UCD_URL_ENV

logger = logging.getLogger(__name__)

Range = Tuple[int, int]

MAX_CODE_POINT = 0x10FFFF

# Code point, optional range end, property value (up to the comment)
RANGE_LINE = re.compile(r'^([0-9A-F]+)(?:\.\.([0-9A-F]+))?\s*;\s*([^#]+)')

# Code points and break markers of a GraphemeBreakTest.txt line
BREAK_TEST_LINE = re.compile(r'^([0-9A-F÷×\s]+)')

BREAK = '÷'
NO_BREAK = '×'

# Mc characters that UAX #29 keeps out of SpacingMark
SPACING_MARK_EXCEPTIONS = (
    0x102B, 0x102C, 0x1038, 0x1062, 0x1063, 0x1064, 0x1067, 0x1068, 0x1069,
    0x106A, 0x106B, 0x106C, 0x106D, 0x1083, 0x1087, 0x1088, 0x1089, 0x108A,
    0x108B, 0x108C, 0x108F, 0x109A, 0x109B, 0x109C, 0x1A61, 0x1A63, 0x1A64,
    0xAA7B, 0xAA7D, 0x11720, 0x11721,
)


# ============================================================================
# Download
# ============================================================================

def get_base_url(base_url: Optional[str] = None) -> str:
    """Resolve the UCD base URL: argument, then environment, then default."""
    url = base_url or os.environ.get(UCD_URL_ENV) or UCD_BASE_URL
    return url if url.endswith('/') else url + '/'


def download(name: str, dest_dir: Path, force: bool = False,
             base_url: Optional[str] = None) -> Path:
    """
    Fetch one UCD file into ``dest_dir`` unless it is already there.

    Args:
        name: Path relative to the UCD root, e.g. ``emoji/emoji-data.txt``
        dest_dir: Directory receiving the file (flattened to its basename)
        force: Download even if a local copy exists
        base_url: Override for the UCD root URL

    Returns:
        Path of the local copy

    Raises:
        OSError: If the download fails
    """
    path = Path(dest_dir) / Path(name).name
    if path.exists() and not force:
        return path

    url = get_base_url(base_url) + name
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Downloading {url}...")
    t0 = time.time()
    tmp = path.with_suffix(path.suffix + '.part')
    urllib.request.urlretrieve(url, tmp)
    tmp.replace(path)
    logger.info(f"  Saved {path.name} in {time.time() - t0:.1f}s")
    return path


def read_lines(path: Path) -> Iterator[str]:
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            yield line.rstrip('\n')


# ============================================================================
# Range Sets
# ============================================================================

def to_ranges(code_points: Iterable[int]) -> Tuple[Range, ...]:
    """Collapse code points into sorted inclusive ranges."""
    result: List[List[int]] = []
    for cp in sorted(set(code_points)):
        if result and cp == result[-1][1] + 1:
            result[-1][1] = cp
        else:
            result.append([cp, cp])
    return tuple((a, b) for a, b in result)


def expand(ranges: Iterable[Range]) -> Set[int]:
    result: Set[int] = set()
    for first, last in ranges:
        result.update(range(first, last + 1))
    return result


def union(*tables: Iterable[Range]) -> Tuple[Range, ...]:
    code_points: Set[int] = set()
    for table in tables:
        code_points |= expand(table)
    return to_ranges(code_points)


def difference(table: Iterable[Range], *others: Iterable[Range]) -> Tuple[Range, ...]:
    code_points = expand(table)
    for other in others:
        code_points -= expand(other)
    return to_ranges(code_points)


def contains(ranges: Sequence[Range], cp: int) -> bool:
    """Binary search a sorted range table."""
    i = bisect_right(ranges, (cp, MAX_CODE_POINT + 1)) - 1
    return i >= 0 and ranges[i][0] <= cp <= ranges[i][1]


# ============================================================================
# Parsers
# ============================================================================

def parse_property_lines(lines: Iterable[str]) -> Dict[str, List[Range]]:
    """
    Group the ranges of a UCD property file by property value.

    Multi-field values keep their inner separators, so a
    DerivedCoreProperties line ``0915..0939 ; InCB; Consonant`` is filed
    under ``"InCB; Consonant"``.
    """
    result: Dict[str, List[Range]] = {}
    for line in lines:
        m = RANGE_LINE.match(line)
        if not m:
            continue
        first = int(m.group(1), 16)
        last = int(m.group(2), 16) if m.group(2) else first
        result.setdefault(m.group(3).rstrip(), []).append((first, last))
    return result


def parse_unicode_data(lines: Iterable[str]) -> Dict[str, List[Range]]:
    """
    Group UnicodeData.txt code points by General_Category.

    ``<..., First>``/``<..., Last>`` pairs become one range. Unassigned code
    points are filed under ``Cn``.
    """
    categories: Dict[str, List[Range]] = {}
    pending_first: Optional[int] = None
    for line in lines:
        fields = line.split(';')
        if len(fields) < 3:
            continue
        cp = int(fields[0], 16)
        name, category = fields[1], fields[2]
        if name.endswith(', First>'):
            pending_first = cp
            continue
        if name.endswith(', Last>') and pending_first is not None:
            categories.setdefault(category, []).append((pending_first, cp))
            pending_first = None
            continue
        categories.setdefault(category, []).append((cp, cp))

    assigned = union(*categories.values())
    unassigned: List[Range] = []
    next_cp = 0
    for first, last in assigned:
        if first > next_cp:
            unassigned.append((next_cp, first - 1))
        next_cp = last + 1
    if next_cp <= MAX_CODE_POINT:
        unassigned.append((next_cp, MAX_CODE_POINT))
    categories['Cn'] = unassigned
    return categories


@dataclass(slots=True)
class GraphemeBreakCase:
    """One GraphemeBreakTest.txt line: the text and its break offsets."""
    text: str
    breaks: Tuple[int, ...]
    line_number: int = 0

    def segments(self) -> List[str]:
        return [self.text[a:b] for a, b in zip(self.breaks, self.breaks[1:])]


def parse_grapheme_break_test(lines: Iterable[str]) -> List[GraphemeBreakCase]:
    """
    Parse GraphemeBreakTest.txt.

    Returns:
        Cases whose ``breaks`` hold every offset marked with a break,
        including 0 and the text length
    """
    cases = []
    for line_number, line in enumerate(lines, 1):
        m = BREAK_TEST_LINE.match(line)
        if not m or not m.group(1).strip():
            continue
        chars: List[str] = []
        breaks: List[int] = []
        for item in m.group(1).split():
            if item == BREAK:
                breaks.append(len(chars))
            elif item == NO_BREAK:
                continue
            else:
                chars.append(chr(int(item, 16)))
        if chars:
            cases.append(GraphemeBreakCase(''.join(chars), tuple(breaks), line_number))
    return cases


# ============================================================================
# Grapheme Classes
# ============================================================================

def derive_grapheme_classes(ucd_dir: Path) -> Dict[str, Tuple[Range, ...]]:
    """
    Derive the grapheme cluster character classes from local UCD files.

    Args:
        ucd_dir: Directory holding the files of ``UCD_FILES`` (flattened)

    Returns:
        Mapping of table name (as used in grapheme_data.py) to ranges

    Raises:
        FileNotFoundError: If a required UCD file is missing
    """
    ucd_dir = Path(ucd_dir)

    def load(name: str) -> Dict[str, List[Range]]:
        path = ucd_dir / name
        if not path.exists():
            raise FileNotFoundError(f"UCD file not found: {path}")
        return parse_property_lines(read_lines(path))

    unicode_data_path = ucd_dir / 'UnicodeData.txt'
    if not unicode_data_path.exists():
        raise FileNotFoundError(f"UCD file not found: {unicode_data_path}")
    general = parse_unicode_data(read_lines(unicode_data_path))

    derived = load('DerivedCoreProperties.txt')
    prop_list = load('PropList.txt')
    indic = load('IndicSyllabicCategory.txt')
    emoji = load('emoji-data.txt')
    hangul = load('HangulSyllableType.txt')

    extend = union(derived.get('Grapheme_Extend', ()), emoji.get('Emoji_Modifier', ()))
    zwj = ((0x200D, 0x200D),)
    spacing_mark = difference(
        union(general.get('Mc', ()), ((0x0E33, 0x0E33), (0x0EB3, 0x0EB3))),
        to_ranges(SPACING_MARK_EXCEPTIONS),
    )

    default_ignorable = derived.get('Default_Ignorable_Code_Point', ())
    unassigned_ignorable = to_ranges(
        cp for cp in expand(default_ignorable) if contains(general['Cn'], cp)
    )
    prepended_concatenation = prop_list.get('Prepended_Concatenation_Mark', ())
    control = difference(
        union(general.get('Zl', ()), general.get('Zp', ()), general.get('Cc', ()),
              general.get('Cf', ()), unassigned_ignorable),
        to_ranges((0x000D, 0x000A, 0x200C, 0x200D)),
        prepended_concatenation,
        extend,
    )
    precore = union(
        indic.get('Consonant_Preceding_Repha', ()),
        indic.get('Consonant_Prefixed', ()),
        prepended_concatenation,
    )

    tables = {
        'EXTEND': extend,
        'ZWJ': zwj,
        'SPACING_MARK': spacing_mark,
        'CONTROL': control,
        'PRECORE': precore,
        'HANGUL_L': union(hangul.get('L', ())),
        'HANGUL_V': union(hangul.get('V', ())),
        'HANGUL_T': union(hangul.get('T', ())),
        'HANGUL_LV': union(hangul.get('LV', ())),
        'HANGUL_LVT': union(hangul.get('LVT', ())),
        'REGIONAL_INDICATOR': union(prop_list.get('Regional_Indicator', ())),
        'EXTENDED_PICTOGRAPHIC': union(emoji.get('Extended_Pictographic', ())),
        'INCB_CONSONANT': union(derived.get('InCB; Consonant', ())),
        'INCB_LINKER': union(derived.get('InCB; Linker', ())),
        'INCB_EXTEND': union(derived.get('InCB; Extend', ())),
    }

    for name, ranges in tables.items():
        if not ranges:
            raise ValueError(f"Derived class {name} is empty; check the UCD files in {ucd_dir}")
    return tables


def render_range_table(name: str, ranges: Sequence[Range], width: int = 79) -> str:
    """Render one table as Python source in the grapheme_data.py layout."""
    lines = [f'{name}: RangeTable = (']
    line = '   '
    for first, last in ranges:
        item = f' (0x{first:04X}, 0x{last:04X}),'
        if len(line) + len(item) > width:
            lines.append(line)
            line = '   '
        line += item
    lines.append(line)
    lines.append(')')
    return '\n'.join(lines) + '\n'
