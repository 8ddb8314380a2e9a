#!/usr/bin/env python
"""Compare balance files from the command line."""

import argparse
import json
import logging
import sys
from pathlib import Path

from balancecheck import BalanceCheckRunner, CheckerConfig, ConfigError, LogLevel, load_config


_LOGGING_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the fields that disagree across JSON balance files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_balance_check.py jan.json feb.json mar.json
  python run_balance_check.py -c balance.yaml -i meta.generatedAt *.json
  python run_balance_check.py --report report.json --quiet a.json b.json
        """
    )

    parser.add_argument("files", nargs="+", help="Balance files to compare")
    parser.add_argument("-c", "--config", help="Path to YAML/JSON config file")
    parser.add_argument(
        "-i", "--ignore",
        action="append",
        default=[],
        metavar="PATH",
        help="Field path to ignore (repeatable)"
    )
    parser.add_argument("-r", "--report", help="Path to output JSON report")
    parser.add_argument(
        "--missing-as-null",
        action="store_true",
        help="Treat absent fields as equal to explicit nulls"
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Logging level (overrides config)"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else CheckerConfig()
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config.ignored_fields.extend(args.ignore)
    if args.missing_as_null:
        config.missing_as_null = True
    if args.log_level:
        config.log_level = LogLevel(args.log_level)

    logging.basicConfig(
        level=_LOGGING_LEVELS[config.log_level],
        format="%(levelname)s %(name)s: %(message)s"
    )

    runner = BalanceCheckRunner(args.files, config=config)
    report = runner.run(print_report=not args.quiet)

    if args.report:
        with open(args.report, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), indent=2, fp=f, ensure_ascii=False)
        if not args.quiet:
            print(f"\nReport saved to: {Path(args.report)}")

    if not report.documents:
        return 2
    return 0 if report.is_consistent else 1


if __name__ == "__main__":
    sys.exit(main())
