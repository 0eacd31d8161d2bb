"""
CLI interface for searchcobb.

Usage:
    searchcobb pattern -m literal "a+b  c"
    searchcobb match -m migemo kensaku notes.txt
    searchcobb unify "Café ｶﾞｲﾄﾞ"
    searchcobb segments "🇯🇵👩‍🏛"
    searchcobb migemo kensaku
"""

import argparse
import json
import logging
import sys
import unicodedata
from pathlib import Path
from typing import Iterable, List, Optional

from searchcobb import __version__
from searchcobb.constants import MATCH_FRAGMENT_MAX_LENGTH, MATCH_MAX, MODE_REGEX, MODES

logger = logging.getLogger(__name__)


# ============================================================================
# Formatting
# ============================================================================

def _describe_code_points(text: str) -> str:
    return ' '.join(f'U+{ord(c):04X}' for c in text)


def _shorten(text: str, limit: int = MATCH_FRAGMENT_MAX_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + '...'


def format_segments(text: str, as_json: bool = False) -> str:
    from searchcobb.grapheme import segment

    segments = list(segment(text))
    if as_json:
        return json.dumps(
            [{"segment": s.segment, "index": s.index} for s in segments],
            ensure_ascii=False, indent=2,
        )
    lines = []
    for s in segments:
        names = ', '.join(unicodedata.name(c, '?') for c in s.segment)
        lines.append(f"{s.index:>5}  {s.segment!r:<12} {_describe_code_points(s.segment)}  ({names})")
    return '\n'.join(lines)


def format_matches(lines: List[str], found: Iterable, as_json: bool = False) -> str:
    results = []
    for item in found:
        line = lines[item.start_fragment]
        results.append({
            "line": item.start_fragment + 1,
            "column": item.start_offset + 1,
            "text": line[item.start_offset:item.end_offset]
            if item.start_fragment == item.end_fragment else line[item.start_offset:],
            "matched": item.text,
        })
    if as_json:
        return json.dumps(results, ensure_ascii=False, indent=2)
    return '\n'.join(
        f"{r['line']}:{r['column']}: {_shorten(r['text'])}" for r in results
    )


# ============================================================================
# Commands
# ============================================================================

def cmd_pattern(args) -> int:
    from searchcobb.search import get_pattern

    pattern = get_pattern(args.query, args.target, args.mode, args.strict, args.extend_dot)
    print(pattern.pattern)
    return 0


def cmd_match(args) -> int:
    from searchcobb.search import SearchText, TextFragment, get_pattern

    if args.file is None or args.file == '-':
        text = sys.stdin.read()
    else:
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        text = path.read_text(encoding='utf-8')

    lines = text.splitlines()
    fragments = [TextFragment(line, new_block=True) for line in lines]
    search_text = SearchText.compile(fragments, strict=args.strict)
    pattern = get_pattern(args.query, None, args.mode, args.strict, args.extend_dot)

    found = list(search_text.search(pattern, limit=args.limit))
    output = format_matches(lines, found, args.json)
    if output:
        print(output)
    logger.debug(f"{len(found)} matches")
    return 0 if found else 1


def cmd_unify(args) -> int:
    from searchcobb.unifier import unify_string

    result = unify_string(args.text)
    if args.json:
        print(json.dumps({"source": args.text, "unified": result}, ensure_ascii=False))
    else:
        print(result)
        if args.verbose:
            print(_describe_code_points(result))
    return 0


def cmd_segments(args) -> int:
    print(format_segments(args.text, args.json))
    return 0


def cmd_migemo(args) -> int:
    from searchcobb.migemo import get_migemo

    result = get_migemo().query(args.query)
    if not result:
        raise ValueError(f"Failed to convert Migemo expression: {args.query!r}")
    print(result)
    return 0


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="searchcobb",
        description="Unicode-aware literal, regex and Migemo search patterns",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"searchcobb {__version__}",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_search_options(p):
        p.add_argument("query", help="Search query")
        p.add_argument(
            "--mode", "-m",
            choices=MODES,
            default=MODE_REGEX,
            help="Search mode (default: regex)",
        )
        p.add_argument(
            "--strict", "-s",
            action="store_true",
            help="Match exact characters, case sensitive",
        )
        p.add_argument(
            "--extend-dot", "-e",
            action="store_true",
            help="Make '.' match one grapheme cluster",
        )

    p = sub.add_parser("pattern", help="Print the transformed pattern")
    add_search_options(p)
    p.add_argument("--target", "-t", help="Sample text for pattern pruning")
    p.set_defaults(func=cmd_pattern)

    p = sub.add_parser("match", help="Search a file (or stdin) line by line")
    add_search_options(p)
    p.add_argument("file", nargs="?", help="File to search (default: stdin)")
    p.add_argument("--limit", "-l", type=int, default=MATCH_MAX,
                   help=f"Longest match in grapheme clusters (default: {MATCH_MAX})")
    p.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    p.set_defaults(func=cmd_match)

    p = sub.add_parser("unify", help="Print unified text")
    p.add_argument("text", help="Text to unify")
    p.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    p.set_defaults(func=cmd_unify)

    p = sub.add_parser("segments", help="Print grapheme clusters")
    p.add_argument("text", help="Text to segment")
    p.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    p.set_defaults(func=cmd_segments)

    p = sub.add_parser("migemo", help="Print the Migemo expansion of a romaji query")
    p.add_argument("query", help="Romaji query")
    p.set_defaults(func=cmd_migemo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        return args.func(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
