#!/usr/bin/env python3
"""
Migemo Dictionary Builder for searchcobb.

Builds searchcobb/data/migemo-compact-dict from SKK dictionaries and/or
JMdict XML. Readings become hiragana keys; the words written with them
become the values.

Usage:
    python scripts/build_migemo_dict.py [SKK-JISYO ...] [--jmdict PATH] [-d PATH]

With ``-d -`` the merged dictionary is printed as ``key<TAB>values`` lines
instead of being serialized.
"""

import argparse
import logging
import re
import sys
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from lxml import etree

from searchcobb.compact_dictionary import build_dictionary_bytes, is_compact_encodable
from searchcobb.dictionary import get_dictionary_path
from searchcobb.kana import kata2hira

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_SKK_DICT = Path("/usr/share/skk/SKK-JISYO.L")
DEFAULT_WORDS = Path("/usr/share/dict/words")
DEFAULT_OUTPUT = get_dictionary_path()

# Key -> candidates, insertion ordered
WordDict = Dict[str, Dict[str, None]]


# ============================================================================
# SKK Parsing
# ============================================================================

CODING_PATTERN = re.compile(r'-\*-.*coding:\s*(\S+).*-\*-')
OKURI_PATTERN = re.compile(r'^([^ -~]+)[a-z]$')
LISP_PATTERN = re.compile(r'^\([a-zA-Z].*\)$')
LATIN_KEY_PATTERN = re.compile(r'^[ -~]+$')
HIRAGANA_WORD_PATTERN = re.compile(r'^[ぁ-ゟー]+$')

PEEK_SIZE = 512


def guess_encoding(path: Path) -> str:
    """Read the Emacs coding cookie from the head of a file, else UTF-8."""
    with open(path, 'rb') as f:
        head = f.read(PEEK_SIZE).decode('latin-1')
    m = CODING_PATTERN.search(head)
    return m.group(1) if m else 'utf-8'


def parse_skk_line(line: str):
    """
    Split one SKK dictionary line into (key, candidates).

    Returns:
        Tuple of (key, candidates), or None for lines that carry no entry
        (comments, prefix/suffix entries, empty results)
    """
    if line.startswith(';;'):
        return None
    index = line.find(' ')
    if index < 0:
        return None
    key, value = line[:index], line[index + 1:]

    # Prefix (">ふじん") and suffix ("ふじん>") entries
    if key[:1] in '<>?' or key[-1:] in '<>?':
        return None

    m = OKURI_PATTERN.match(key)
    if m:
        key = m.group(1)
    if not key:
        return None
    key = key.lower()

    has_number = '#' in key
    candidates = []
    for candidate in value.strip().strip('/').split('/'):
        if LISP_PATTERN.match(candidate):
            continue
        if has_number and '#' in candidate:
            continue
        candidate = candidate.split(';', 1)[0]
        if candidate:
            candidates.append(candidate)

    if not candidates:
        return None
    return key, candidates


def _add(dictionary: WordDict, key: str, values) -> None:
    bucket = dictionary.setdefault(key, {})
    for value in values:
        bucket[value] = None


def read_skk_dictionary(path: Path, hiragana_dict: WordDict, latin_dict: WordDict) -> int:
    """
    Merge one SKK dictionary into the hiragana and Latin dictionaries.

    Returns:
        Number of entries read
    """
    encoding = guess_encoding(path)
    logger.info(f"Reading {path} ({encoding})...")

    count = 0
    with open(path, 'r', encoding=encoding, errors='replace') as f:
        for line in f:
            parsed = parse_skk_line(line.rstrip('\r\n'))
            if parsed is None:
                continue
            key, candidates = parsed
            target = latin_dict if LATIN_KEY_PATTERN.match(key) else hiragana_dict
            _add(target, key, candidates)

            count += 1
            if count % 10000 == 0:
                logger.info(f"  Parsed {count} entries...")

    logger.info(f"Processed {count} entries from {path.name}")
    return count


def read_word_list(path: Path) -> Set[str]:
    """Lowercased words of a system word list, possessives skipped."""
    words = set()
    if not path.exists():
        logger.warning(f"Word list not found: {path}; Latin words are not reversed")
        return words
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        for line in f:
            word = line.rstrip('\r\n')
            if not word or word.endswith("'s"):
                continue
            words.add(word.lower())
    logger.info(f"Read {len(words):,} words from {path}")
    return words


def merge_latin_words(hiragana_dict: WordDict, latin_dict: WordDict, words: Set[str]) -> int:
    """
    Add reverse entries for known English words.

    A Latin key whose candidate is written in katakana ("apple /アップル/")
    adds the Latin word under the candidate's hiragana reading (あっぷる).

    Returns:
        Number of reverse entries added
    """
    added = 0
    for key, candidates in latin_dict.items():
        if key not in words:
            continue
        for candidate in candidates:
            hiragana = kata2hira(candidate)
            if not HIRAGANA_WORD_PATTERN.match(hiragana):
                continue
            _add(hiragana_dict, hiragana, (key,))
            added += 1
    return added


# ============================================================================
# JMdict Parsing
# ============================================================================

def node_text(elem) -> str:
    """Get all text from element."""
    return ''.join(elem.itertext())


def iter_jmdict_entries(xml_path: Path) -> Iterator[tuple]:
    """Yield (readings, kanji forms) per JMdict entry."""
    context = etree.iterparse(
        str(xml_path),
        events=('end',),
        tag='entry',
        recover=True,
        load_dtd=True,
        no_network=True
    )
    for event, elem in context:
        readings = [node_text(e) for e in elem.iter('reb')]
        kanji = [node_text(e) for e in elem.iter('keb')]
        yield readings, kanji

        elem.clear()
        while elem.getprevious() is not None:
            del elem.getparent()[0]


def read_jmdict(xml_path: Path, hiragana_dict: WordDict) -> int:
    """
    Merge JMdict readings into the hiragana dictionary.

    Returns:
        Number of entries read
    """
    logger.info(f"Reading {xml_path}...")
    count = 0
    for readings, kanji in iter_jmdict_entries(xml_path):
        for reading in readings:
            key = kata2hira(reading)
            _add(hiragana_dict, key, kanji + [reading])
        count += 1
        if count % 10000 == 0:
            logger.info(f"  Parsed {count} entries...")
    logger.info(f"Processed {count} entries from {xml_path.name}")
    return count


# ============================================================================
# Output
# ============================================================================

def _is_latin(key: str) -> bool:
    return all(ord(c) < 0x80 for c in key)


def dump_dictionary(hiragana_dict: WordDict, out=None) -> None:
    """Print ``key<TAB>values`` lines: kana keys first, longer keys first."""
    out = out or sys.stdout
    keys = sorted(hiragana_dict, key=lambda k: (_is_latin(k), -len(k), k))
    for key in keys:
        out.write(key + '\t' + '\t'.join(hiragana_dict[key]) + '\n')


def encodable_items(hiragana_dict: WordDict) -> List[tuple]:
    items = []
    skipped = 0
    for key, values in hiragana_dict.items():
        if not is_compact_encodable(key):
            skipped += 1
            continue
        items.append((key, list(values)))
    if skipped:
        logger.warning(f"Skipped {skipped} keys outside the compact hiragana encoding")
    return items


def main():
    parser = argparse.ArgumentParser(
        description="Build searchcobb Migemo dictionary from SKK dictionaries and/or JMdict XML"
    )
    parser.add_argument(
        'skk',
        nargs='*',
        type=Path,
        help=f"SKK dictionary files (default: {DEFAULT_SKK_DICT} unless --jmdict is given)"
    )
    parser.add_argument(
        '--jmdict', '-j',
        type=Path,
        help="Path to JMdict XML file"
    )
    parser.add_argument(
        '--words', '-w',
        type=Path,
        default=DEFAULT_WORDS,
        help=f"System word list for Latin reverse entries (default: {DEFAULT_WORDS})"
    )
    parser.add_argument(
        '--dest', '-d',
        default=str(DEFAULT_OUTPUT),
        help=f"Output dictionary path, '-' for a text dump (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="Full error traces"
    )

    args = parser.parse_args()

    skk_paths: List[Path] = list(args.skk)
    if not skk_paths and args.jmdict is None:
        skk_paths = [DEFAULT_SKK_DICT]

    for path in skk_paths + ([args.jmdict] if args.jmdict is not None else []):
        if not path.exists():
            logger.error(f"Dictionary file not found: {path}")
            sys.exit(1)

    start_time = time.time()

    hiragana_dict: WordDict = {}
    latin_dict: WordDict = {}
    try:
        for path in skk_paths:
            read_skk_dictionary(path, hiragana_dict, latin_dict)
        if args.jmdict is not None:
            read_jmdict(args.jmdict, hiragana_dict)
    except (OSError, LookupError, etree.XMLSyntaxError) as e:
        if args.verbose:
            logger.exception("Reading dictionaries failed")
        else:
            logger.error(str(e))
        sys.exit(1)

    if latin_dict:
        logger.info("Transforming alphabet words...")
        added = merge_latin_words(hiragana_dict, latin_dict, read_word_list(args.words))
        logger.info(f"  Added {added} reverse entries")

    logger.info(f"Dictionary has {len(hiragana_dict):,} keys")

    if args.dest == '-':
        dump_dictionary(hiragana_dict)
    else:
        dest = Path(args.dest)
        data = build_dictionary_bytes(encodable_items(hiragana_dict))
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
        logger.info(f"Saved Migemo dictionary to {dest} ({len(data) / 1024 / 1024:.1f} MB)")

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()
