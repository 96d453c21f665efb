"""
CLI entry point for daily_activity. Wires the pipeline: load config -> fetch from providers -> sort -> report
"""

import argparse
import asyncio
import locale
import logging
import sys
from typing import List, Optional, Sequence

from aggregator import collect_activity
from config import load_env_file
from ingest import ActivityProvider, default_providers
from log import get_logger, level_from_env, set_level
from normalize.dates import is_valid_date, today
from report.renderer import FORMATS, render

logger = get_logger(__name__)

PROVIDER_NAMES = ("jira", "github")


def _select_providers(providers: Sequence[ActivityProvider], names: Optional[List[str]]) -> List[ActivityProvider]:
    """Keep the providers whose name was requested, in registry order. No names means all."""
    if not names:
        return list(providers)
    wanted = {n.lower() for n in names}
    return [p for p in providers if p.name.lower() in wanted]


def _use_user_collation():
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning(f"Could not apply the user's collation locale, sorting by code point: {exc}")


def run_report(date_str: str, providers: Sequence[ActivityProvider], fmt: str = "text", header: bool = False) -> str:
    """Fetch, sort and render the activity for date_str."""
    items = asyncio.run(collect_activity(providers, date_str))
    return render(items, fmt=fmt, date_str=date_str, header=header)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report a day's Jira and GitHub activity")
    parser.add_argument("date", nargs="?", default=None, help="Day to report (YYYY-MM-DD). Defaults to today")
    parser.add_argument("--format", dest="fmt", choices=FORMATS, default="text", help="Output format (default: text)")
    parser.add_argument(
        "--provider",
        action="append",
        type=str.lower,
        choices=PROVIDER_NAMES,
        help="Only query this provider (repeatable). Defaults to all providers",
    )
    parser.add_argument("--env-file", type=str, default=None, help="Path to the .env file (default: search from the current directory)")
    parser.add_argument("--no-header", action="store_true", help="Do not print the 'Activity for <date>:' line in text output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    date_str = today() if args.date is None else args.date
    if not is_valid_date(date_str):
        print("Invalid date format. Use YYYY-MM-DD", file=sys.stderr)
        return 1

    try:
        load_env_file(args.env_file)
        set_level(logging.DEBUG if args.verbose else level_from_env())
        _use_user_collation()
        providers = _select_providers(default_providers(), args.provider)
        rendered = run_report(date_str, providers, fmt=args.fmt, header=not args.no_header)
    except Exception as exc:
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
