#!/usr/bin/env python3
"""
Grapheme Table Builder for searchcobb.

Downloads the Unicode Character Database files, derives the grapheme
cluster character classes and writes them to searchcobb/grapheme_data.py.

Usage:
    python scripts/build_grapheme_tables.py [-f] [-o PATH] [-t] [-v]

The UCD location can be changed with --base-url or the SEARCHCOBB_UCD_URL
environment variable.
"""

import argparse
import importlib
import logging
import sys
import time
from pathlib import Path
from typing import Dict, Tuple

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from searchcobb.constants import UCD_FILES, UNICODE_VERSION
from searchcobb.ucd import (
    derive_grapheme_classes,
    download,
    parse_grapheme_break_test,
    read_lines,
    render_range_table,
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_UCD_DIR = Path(__file__).parent.parent / "unicode"
DEFAULT_OUTPUT = Path(__file__).parent.parent / "searchcobb" / "grapheme_data.py"

TABLE_ORDER = (
    'EXTEND', 'ZWJ', 'SPACING_MARK', 'CONTROL', 'PRECORE',
    'HANGUL_L', 'HANGUL_V', 'HANGUL_T', 'HANGUL_LV', 'HANGUL_LVT',
    'REGIONAL_INDICATOR', 'EXTENDED_PICTOGRAPHIC',
    'INCB_CONSONANT', 'INCB_LINKER', 'INCB_EXTEND',
)

HEADER = f'''"""
Grapheme cluster character classes.

Generated by scripts/build_grapheme_tables.py from UCD {UNICODE_VERSION}. Each table
is a sorted tuple of inclusive (first, last) code point ranges.
"""

from typing import Tuple

RangeTable = Tuple[Tuple[int, int], ...]

UNICODE_VERSION = "{UNICODE_VERSION}"

'''


# ============================================================================
# Generation
# ============================================================================

def render_module(tables: Dict[str, Tuple[Tuple[int, int], ...]]) -> str:
    body = '\n'.join(render_range_table(name, tables[name]) for name in TABLE_ORDER)
    return HEADER + body


def run_conformance(test_path: Path, verbose: bool = False) -> Tuple[int, int]:
    """
    Segment every GraphemeBreakTest.txt case with the freshly written tables.

    Returns:
        Tuple of (passed, failed)
    """
    import searchcobb.grapheme_data
    import searchcobb.grapheme

    importlib.reload(searchcobb.grapheme_data)
    grapheme = importlib.reload(searchcobb.grapheme)

    cases = parse_grapheme_break_test(read_lines(test_path))
    passed = failed = 0
    for case in cases:
        actual = grapheme.split_graphemes(case.text)
        if actual == case.segments():
            passed += 1
            continue
        failed += 1
        if verbose:
            logger.error(
                f"Line {case.line_number}: expected "
                f"{[s.encode('unicode_escape').decode() for s in case.segments()]}, got "
                f"{[s.encode('unicode_escape').decode() for s in actual]}"
            )
    return passed, failed


def main():
    parser = argparse.ArgumentParser(
        description="Build searchcobb grapheme cluster tables from the UCD"
    )
    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help="Download the UCD files even if local copies exist"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output module path (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        '--ucd-dir', '-u',
        type=Path,
        default=DEFAULT_UCD_DIR,
        help=f"Directory for UCD files (default: {DEFAULT_UCD_DIR})"
    )
    parser.add_argument(
        '--base-url',
        help="UCD root URL (default: $SEARCHCOBB_UCD_URL or unicode.org)"
    )
    parser.add_argument(
        '--test', '-t',
        action='store_true',
        help="Run GraphemeBreakTest.txt against the generated tables"
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="Report every failing test case and full error traces"
    )

    args = parser.parse_args()

    start_time = time.time()

    try:
        for name in UCD_FILES:
            download(name, args.ucd_dir, force=args.force, base_url=args.base_url)
    except OSError as e:
        logger.error(f"Download failed: {e}")
        sys.exit(1)

    try:
        tables = derive_grapheme_classes(args.ucd_dir)
    except (FileNotFoundError, ValueError) as e:
        if args.verbose:
            logger.exception("Table derivation failed")
        else:
            logger.error(str(e))
        sys.exit(1)

    for name in TABLE_ORDER:
        logger.info(f"  {name}: {len(tables[name])} ranges")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(render_module(tables), encoding='utf-8')
    logger.info(f"Wrote {args.output}")

    if args.test:
        if args.output.resolve() != DEFAULT_OUTPUT.resolve():
            logger.error("--test needs the tables written to the package (omit --output)")
            sys.exit(1)
        passed, failed = run_conformance(args.ucd_dir / "GraphemeBreakTest.txt", args.verbose)
        logger.info(f"GraphemeBreakTest: {passed} passed, {failed} failed")
        if failed:
            sys.exit(1)

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()
