"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from plant_journal import __version__
from plant_journal.config import get_settings
from plant_journal.control import LocalControlSurface
from plant_journal.errors import JournalError
from plant_journal.flows.backfill import backfill_weather
from plant_journal.flows.batch import analyze_range
from plant_journal.orchestrator import AnalysisOrchestrator
from plant_journal.schemas import Operation, PlantIdentity, parse_day_label


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="plant-journal",
        description="Day-by-day plant growth journal with AI-assisted analysis",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("show", help="Print the journal document")

    day_parser = subparsers.add_parser("set-day", help="Set the current day (creates the journal)")
    day_parser.add_argument("day", type=str, help='Day number or label, e.g. 14 or "Day 14"')
    day_parser.add_argument("--name", required=True, help="Plant name")
    day_parser.add_argument("--city", default="", help="City for weather lookups")
    day_parser.add_argument("--location", default="", help="Indoor location")
    day_parser.add_argument("--feedback", default=None, help="Notes for the day")
    day_parser.add_argument("--image", type=Path, default=None, help="Photo for the day (PNG)")

    run_parser = subparsers.add_parser("run", help="Run one analysis on the current day")
    run_parser.add_argument("operation", choices=[op.value for op in Operation])

    batch_parser = subparsers.add_parser("batch", help="Analyze a range of days")
    batch_parser.add_argument("--start", type=int, required=True, help="First day")
    batch_parser.add_argument("--end", type=int, required=True, help="Last day (inclusive)")
    batch_parser.add_argument(
        "--remote",
        nargs="?",
        const="",
        default=None,
        metavar="URL",
        help="Drive a journal server (default URL: control_url from settings)",
    )

    backfill_parser = subparsers.add_parser("backfill", help="Backfill weather from the archive")
    backfill_parser.add_argument("--start-date", required=True, help="YYYY-MM-DD (maps to day 1)")
    backfill_parser.add_argument("--end-date", required=True, help="YYYY-MM-DD")
    backfill_parser.add_argument("--offset", type=int, default=None, help="Day offset")
    backfill_parser.add_argument("--max-day", type=int, default=None, help="Last day to write")

    subparsers.add_parser("reset", help="Delete the journal")

    return parser


def _orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator.from_settings(get_settings())


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Journal: {settings.data_file}")
    print(f"Debug: {settings.debug}")
    return 0


def cmd_show(_args: argparse.Namespace) -> int:
    """Handle the 'show' command."""
    plant = _orchestrator().store.get_plant()
    if plant is None:
        print("No plant saved.", file=sys.stderr)
        return 1
    print(json.dumps(plant.to_document(), indent=2, ensure_ascii=False))
    return 0


def cmd_set_day(args: argparse.Namespace) -> int:
    """Handle the 'set-day' command."""
    image = args.image.read_bytes() if args.image is not None else None
    identity = PlantIdentity(name=args.name, city=args.city, indoor_location=args.location)
    day = parse_day_label(args.day)
    _orchestrator().save_day(identity, day, feedback=args.feedback, image=image)
    print(f"Plant info saved! Current day: {day}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command."""
    result = LocalControlSurface(_orchestrator()).run_operation(Operation(args.operation))
    if result.success:
        print(json.dumps(result.data, indent=2, ensure_ascii=False))
        return 0
    print(f"Error: {result.error}", file=sys.stderr)
    return 1


def cmd_batch(args: argparse.Namespace) -> int:
    """Handle the 'batch' command."""
    control_url = None
    if args.remote is not None:
        control_url = args.remote or get_settings().control_url
    summary = analyze_range(args.start, args.end, control_url=control_url)
    print(
        f"Done: {summary['days']} days, {summary['operations']} operations, "
        f"{summary['failures']} failures."
    )
    return 0


def cmd_backfill(args: argparse.Namespace) -> int:
    """Handle the 'backfill' command."""
    result = backfill_weather(
        args.start_date,
        args.end_date,
        day_offset=args.offset,
        max_day=args.max_day,
    )
    print(f"Done: {result['days_updated']} days updated.")
    return 0


def cmd_reset(_args: argparse.Namespace) -> int:
    """Handle the 'reset' command."""
    _orchestrator().reset()
    print("Data cleared!")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    level = logging.DEBUG if args.debug or settings.debug else settings.log_level
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "show": cmd_show,
        "set-day": cmd_set_day,
        "run": cmd_run,
        "batch": cmd_batch,
        "backfill": cmd_backfill,
        "reset": cmd_reset,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except JournalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
