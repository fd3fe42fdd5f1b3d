#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from criterion_table import build_tables
from criterion_table._version import VERSION
from criterion_table.errors import CriterionTableError
from criterion_table.formatter import DEFAULT_FORMAT, FORMATTERS, get_formatter

ERROR_PREFIX = "An error occurred processing Criterion data"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="criterion-table",
        description="Generate markdown comparison tables from cargo-criterion JSON output.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="cargo-criterion JSON message file (default: stdin).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Tables config TOML with table comments (default: $CRITERION_TABLE_CONFIG_PATH or tables.toml).",
    )
    parser.add_argument(
        "--format",
        default=DEFAULT_FORMAT,
        choices=sorted(FORMATTERS),
        help="Output format.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the report here instead of stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for per-record detail).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s %(message)s")


def _run(args: argparse.Namespace) -> str:
    formatter = get_formatter(args.format)
    if args.input == "-":
        return build_tables(sys.stdin, formatter, args.config)
    with Path(args.input).open("r", encoding="utf-8") as handle:
        return build_tables(handle, formatter, args.config)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        report = _run(args)
        if args.output:
            out = Path(args.output)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(report + "\n", encoding="utf-8")
        else:
            sys.stdout.write(report + "\n")
    except (CriterionTableError, OSError, UnicodeDecodeError) as exc:
        print(f"{ERROR_PREFIX}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
