"""Entry point for ``python -m thermo_ai``.

Provides a CLI for the iCal ingestion pipeline.  Uses stdlib
:mod:`argparse` for argument parsing.

Subcommands:
    parse -- Fetch one feed URL and print the extracted bookings.
    sync  -- Sync every property's feed and print a summary.

Exit codes:
    0 -- Completed (a fleet sync with per-property failures still exits 0).
    1 -- The feed could not be parsed, or a configuration error occurred.
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from thermo_ai.config import ConfigError, load_settings
from thermo_ai.log import setup_logging
from thermo_ai.orchestrator import sync_all_feeds
from thermo_ai.pipeline import IcalPipeline, parse_ical_feed_action
from thermo_ai.report import print_action_result, print_fleet_report
from thermo_ai.repository import build_repository


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="thermo-ai",
        description="Sync iCal booking feeds for managed properties.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- "parse" subcommand -------------------------------------------
    parse_parser = subparsers.add_parser(
        "parse",
        help="Fetch one iCal feed and print its bookings.",
    )
    parse_parser.add_argument("url", type=str, help="URL of the .ics feed.")
    parse_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    # --- "sync" subcommand --------------------------------------------
    sync_parser = subparsers.add_parser(
        "sync",
        help="Sync every property's feed.",
    )
    sync_parser.add_argument(
        "--properties",
        type=str,
        default=None,
        help=(
            "JSON property store to sync (defaults to PROPERTIES_FILE, "
            "else the built-in demo properties)."
        ),
    )
    sync_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker pool size (defaults to SYNC_MAX_WORKERS).",
    )
    sync_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    return parser


def _handle_parse(args: argparse.Namespace) -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    pipeline = IcalPipeline.from_settings(settings)
    result = parse_ical_feed_action(args.url, pipeline)
    print_action_result(args.url, result)
    return 0 if result.success else 1


def _handle_sync(args: argparse.Namespace) -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.workers is not None and args.workers < 1:
        print("Error: --workers must be at least 1", file=sys.stderr)
        return 1

    properties_file = Path(args.properties) if args.properties else settings.properties_file
    repository = build_repository(properties_file)

    try:
        report = sync_all_feeds(
            repository,
            IcalPipeline.from_settings(settings),
            max_workers=args.workers or settings.sync_max_workers,
            deadline_seconds=settings.sync_deadline_seconds,
        )
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read properties: {exc}", file=sys.stderr)
        return 1

    print_fleet_report(report)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the thermo-ai CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging("DEBUG" if args.verbose else "INFO")

    if args.command == "sync":
        return _handle_sync(args)
    return _handle_parse(args)


if __name__ == "__main__":
    raise SystemExit(main())
