#!/usr/bin/env python3
"""
Command line interface for pathignore

Examples:
    pathignore check hello meme.go
    pathignore check -f build/.gitignore --strategy backtracking src/a.b.go
    pathignore validate -f .gitignore
"""

import argparse
import sys
from typing import List, Optional

from .constants import DEFAULT_IGNORE_FILENAME
from .errors import IgnoreFileError
from .file_loader import IgnoreFileLoader
from .ignore_set import IgnoreSet
from .matcher import MatchStrategy
from .utils import configure_logging

EXIT_OK = 0
EXIT_NOT_ALL_IGNORED = 1
EXIT_FILE_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pathignore',
        description='Check paths against gitignore-style rules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--log-level', default=None,
                        help='Logging level (TRACE, DEBUG, INFO, WARNING, ERROR)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    check_parser = subparsers.add_parser('check', help='Report whether each path is ignored')
    check_parser.add_argument('paths', nargs='+', help='Relative paths to check')
    check_parser.add_argument('-f', '--file', default=DEFAULT_IGNORE_FILENAME,
                              help=f'Ignore file to read (default: {DEFAULT_IGNORE_FILENAME})')
    check_parser.add_argument('--strategy', type=MatchStrategy.from_name, default=None,
                              help='Wildcard strategy: first_fit or backtracking '
                                   '(default: PATHIGNORE_MATCH_STRATEGY or first_fit)')
    check_parser.add_argument('-q', '--quiet', action='store_true',
                              help='Print nothing; exit 0 only if every path is ignored')

    validate_parser = subparsers.add_parser('validate', help='Report rules that can never match')
    validate_parser.add_argument('-f', '--file', default=DEFAULT_IGNORE_FILENAME,
                                 help=f'Ignore file to read (default: {DEFAULT_IGNORE_FILENAME})')

    return parser


def run_check(args: argparse.Namespace) -> int:
    strategy = args.strategy or MatchStrategy.from_env()
    ignore_set = IgnoreSet.from_file(args.file, strategy=strategy)

    all_ignored = True
    for path in args.paths:
        ignored = ignore_set.matches_path(path)
        all_ignored = all_ignored and ignored
        if not args.quiet:
            print(f"{path} {'true' if ignored else 'false'}")

    if args.quiet:
        return EXIT_OK if all_ignored else EXIT_NOT_ALL_IGNORED
    return EXIT_OK


def run_validate(args: argparse.Namespace) -> int:
    info = IgnoreFileLoader().load_file(args.file)

    stats = info.stats
    print(f"{info.path}: {stats['pattern_lines']} patterns, "
          f"{stats['comment_lines']} comments, {stats['empty_lines']} blank lines")
    for warning in info.warnings:
        print(f"  line {warning.line}: {warning.pattern}: {warning.message}")

    return EXIT_NOT_ALL_IGNORED if info.has_warnings else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)

    try:
        if args.command == 'check':
            return run_check(args)
        return run_validate(args)
    except IgnoreFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR


if __name__ == '__main__':
    sys.exit(main())
