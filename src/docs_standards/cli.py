"""Command line docblock checker.

Usage:
    docs-standards --function mypkg.utils.slugify --class mypkg.client.Client
    docs-standards --sql authz/src/functions --sql-function authz.check

Exit codes: 0 when every docblock passes, 1 on validation failures,
2 when a target or SQL source cannot be loaded.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import Config
from .errors import DocsStandardsError
from .models import CallableTarget
from .sql import SqlSource
from .targets import resolve_sql_targets, resolve_targets
from .validators import failures, validate

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_SETUP_ERROR = 2


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docs-standards",
        description="Check that docblocks describe their callable's parameters.",
    )
    parser.add_argument(
        "--function", dest="functions", action="append", default=[], metavar="NAME",
        help="Function to check, as pkg.module.func or pkg.module:func",
    )
    parser.add_argument(
        "--class", dest="classes", action="append", default=[], metavar="NAME",
        help="Class whose declared methods are checked",
    )
    parser.add_argument(
        "--sql", dest="sql_paths", action="append", default=[], metavar="PATH",
        help=".sql file or directory of .sql files",
    )
    parser.add_argument(
        "--sql-function", dest="sql_functions", action="append", default=None, metavar="NAME",
        help="SQL function to check (default: every public function)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Also list passing callables")
    return parser.parse_args(argv)


def _collect_targets(args: argparse.Namespace) -> list[CallableTarget]:
    targets = resolve_targets(args.functions, args.classes)
    if args.sql_paths:
        source = SqlSource.combine(SqlSource.from_path(p) for p in args.sql_paths)
        targets.extend(resolve_sql_targets(source, args.sql_functions))
    return targets


def main(argv: Sequence[str] | None = None) -> int:
    """Check all requested callables and print every failure."""
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        targets = _collect_targets(args)
    except DocsStandardsError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    if not targets:
        print("Nothing to check.", file=sys.stderr)
        return EXIT_SETUP_ERROR

    log.debug("Checking %d callables", len(targets))
    failing = 0
    for target in targets:
        failed = failures(validate(target))
        if failed:
            failing += 1
            for result in failed:
                print(f"  ✗ {result.message}")
        elif args.verbose:
            print(f"  ✓ {target.name}")

    print(f"\n{len(targets) - failing}/{len(targets)} callables documented correctly")
    return EXIT_FAILURES if failing else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
