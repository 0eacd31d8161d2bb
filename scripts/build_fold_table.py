#!/usr/bin/env python3
"""
Fold Table Builder for searchcobb.

Builds searchcobb/data/fold_table.bin from UnicodeData.txt (downloaded when
missing) or from the interpreter's unicodedata module.

Usage:
    python scripts/build_fold_table.py [--unicodedata] [-o PATH]
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from searchcobb.ucd import download
from searchcobb.unifier import FoldTable, get_fold_table_path

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_UCD_DIR = Path(__file__).parent.parent / "unicode"
DEFAULT_OUTPUT = get_fold_table_path()

# Folds worth eyeballing after a build
SAMPLES = ('é', 'ｶ', 'ガ', '①', '國', 'ŀ', '﹖')


def main():
    parser = argparse.ArgumentParser(
        description="Build searchcobb fold table from Unicode decompositions"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output path (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        '--ucd-dir', '-u',
        type=Path,
        default=DEFAULT_UCD_DIR,
        help=f"Directory for UnicodeData.txt (default: {DEFAULT_UCD_DIR})"
    )
    parser.add_argument(
        '--base-url',
        help="UCD root URL (default: $SEARCHCOBB_UCD_URL or unicode.org)"
    )
    parser.add_argument(
        '--unicodedata',
        action='store_true',
        help="Use the interpreter's unicodedata instead of UnicodeData.txt"
    )

    args = parser.parse_args()

    start_time = time.time()

    if args.unicodedata:
        logger.info("Reading decompositions from unicodedata...")
        table = FoldTable.from_unicodedata()
    else:
        try:
            unicode_data = download('UnicodeData.txt', args.ucd_dir, base_url=args.base_url)
        except OSError as e:
            logger.error(f"Download failed: {e}")
            sys.exit(1)
        logger.info(f"Reading decompositions from {unicode_data}...")
        table = FoldTable.from_unicode_data_file(unicode_data)

    logger.info(f"  {len(table):,} folds")
    for sample in SAMPLES:
        folded = table.get(sample)
        if folded is not None:
            logger.info(f"  {sample} -> {folded.encode('unicode_escape').decode()}")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    table.save(args.output)

    size_kb = args.output.stat().st_size / 1024
    logger.info(f"Saved fold table to {args.output} ({size_kb:.1f} KB)")

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()
