#!/usr/bin/env python
"""Fix PHP files or directories in place from the command line"""

import argparse
import sys
from pathlib import Path

from phpfix_core.fix_processor import FixProcessor
from phpfix_core.fixers.fixer_factory import FixerFactory
from phpfix_core.result import ResultStatus
from phpfix_core.whitespaces_config import ConfigStore, CONFIG_FILENAME


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Apply phpfix fixers to PHP files")
    parser.add_argument("paths", nargs="+", help="Files or directories to fix")
    parser.add_argument(
        "--fixer",
        action="append",
        dest="fixers",
        choices=[fixer['id'] for fixer in FixerFactory.get_available_fixers()],
        help=f"Fixer to run (repeatable, default: fixers from {CONFIG_FILENAME} or all)"
    )
    parser.add_argument(
        "--config",
        help=f"Path to the config file (default: ./{CONFIG_FILENAME})"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report files that would change without writing them"
    )
    args = parser.parse_args(argv)

    if args.config:
        if not Path(args.config).is_file():
            print(f"   ERROR config file not found: {args.config}")
            return 2
        ConfigStore.reset(Path(args.config))

    try:
        processor = FixProcessor(fixer_ids=args.fixers)
    except (OSError, ValueError) as e:
        print(f"   ERROR {e}")
        return 2
    result = processor.fix_paths(args.paths, dry_run=args.dry_run)

    for file_result in result.file_results or []:
        if file_result.error:
            print(f"   ERROR {file_result.file}: {file_result.error}")
        elif file_result.changed:
            print(f"   {'would fix' if args.dry_run else 'fixed'} {file_result.file}")
    print(result.message)

    if result.status != ResultStatus.SUCCESS:
        return 2
    if args.dry_run and result.changed_files:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
